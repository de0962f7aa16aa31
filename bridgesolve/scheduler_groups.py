"""Grouping of boards for scheduling: identical deals are solved together."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterable, Sequence

NOTRUMP = 4
EXTRA_STRAIN = 5

_ACE = 1 << 12
_KING = 1 << 11
_QUEEN = 1 << 10
_JACK = 1 << 9
_TEN = 1 << 8


class RunMode(IntEnum):
    SOLVE = 0
    CALC = 1
    TRACE = 2


@dataclass(frozen=True)
class Deal:
    """A (possibly partly played) deal.

    ``remain_cards[hand][suit]`` is a holding with rank ``r`` (2..14)
    at bit ``r``.
    """

    remain_cards: tuple[tuple[int, int, int, int], ...]
    trump: int = 0
    first: int = 0
    current_trick_suit: tuple[int, int, int] = (0, 0, 0)
    current_trick_rank: tuple[int, int, int] = (0, 0, 0)

    def __post_init__(self) -> None:
        cards = tuple(tuple(int(c) for c in hand) for hand in self.remain_cards)
        if len(cards) != 4 or any(len(hand) != 4 for hand in cards):
            raise ValueError("remain_cards must be 4 hands of 4 suits")
        object.__setattr__(self, "remain_cards", cards)
        object.__setattr__(self, "current_trick_suit", tuple(self.current_trick_suit))
        object.__setattr__(self, "current_trick_rank", tuple(self.current_trick_rank))

    @property
    def notrump(self) -> bool:
        return self.trump == NOTRUMP


@dataclass
class BoardGroup:
    """Boards (by index) believed to share the same deal and strain."""

    strain: int
    key: int
    boards: list[int] = field(default_factory=list)
    pred: int = 0


def high_card_points(holding: int) -> int:
    """Points of a 13-bit holding (ace at bit 12): A13 K8 Q4 J2 T1."""
    points = 0
    if holding & _ACE:
        points += 13
    if holding & _KING:
        points += 8
    if holding & _QUEEN:
        points += 4
    if holding & _JACK:
        points += 2
    if holding & _TEN:
        points += 1
    return points


def strength(deal: Deal) -> int:
    """How unevenly the high cards are split between the sides; 0..49."""
    cards = deal.remain_cards
    dev = 0
    for suit in range(4):
        side = (cards[0][suit] | cards[2][suit]) >> 2
        dev += abs(high_card_points(side) - 14)
    return min(dev, 49)


def _bit_groups(holding: int) -> int:
    """Number of runs of adjacent ranks in a holding."""
    return bin(holding & ~(holding >> 1)).count("1")


def fanout(deal: Deal) -> int:
    """Branching estimate: bit groups per hand, voids multiplying them."""
    total = 0
    for hand in deal.remain_cards:
        suit_total = 0
        voids = 0
        for holding in hand:
            c = holding >> 2
            suit_total += _bit_groups(c)
            if c == 0:
                voids += 1
        total += suit_total + voids * suit_total
    return total


def same_hand(first: Deal, second: Deal) -> bool:
    """True if both deals have exactly the same remaining cards."""
    return first.remain_cards == second.remain_cards


def _hash_key(deal: Deal) -> int:
    cards = deal.remain_cards
    x = cards[0][0] ^ cards[1][1] ^ cards[2][2] ^ cards[3][3]
    return ((x >> 2) ^ (x >> 6)) & 0x7F


def _spare_key(deal: Deal) -> int:
    cards = deal.remain_cards
    mask = 0xFFFFFFFF
    value = (
        ((cards[1][0] << 17) & mask)
        ^ ((cards[2][1] << 11) & mask)
        ^ ((cards[3][2] << 5) & mask)
        ^ (cards[0][3] >> 2)
    ) & mask
    return value - (1 << 32) if value >= (1 << 31) else value


def make_groups(deals: Iterable[Deal]) -> list[BoardGroup]:
    """Split boards into groups of identical deals with the same strain.

    Boards are first bucketed by strain and a hash of the deal; buckets
    holding different deals are then split, and the split-off boards go
    to extra groups of strain ``EXTRA_STRAIN``. Duplicates may be missed,
    but different deals never share a group.
    """
    deal_list: Sequence[Deal] = list(deals)
    buckets: dict[tuple[int, int], BoardGroup] = {}
    groups: list[BoardGroup] = []

    for index, deal in enumerate(deal_list):
        key = _hash_key(deal)
        group = buckets.get((deal.trump, key))
        if group is None:
            group = BoardGroup(deal.trump, key, [index])
            buckets[(deal.trump, key)] = group
            groups.append(group)
        else:
            group.boards.append(index)

    extra = 0

    def new_extra(board: int) -> BoardGroup:
        nonlocal extra
        group = BoardGroup(EXTRA_STRAIN, extra, [board])
        extra += 1
        groups.append(group)
        return group

    for group in list(groups):
        size = len(group.boards)
        if size == 1:
            continue
        if size == 2:
            b1, b2 = group.boards
            if same_hand(deal_list[b1], deal_list[b2]):
                continue
            group.boards = [b1]
            new_extra(b2)
            continue

        order = sorted(group.boards, key=lambda b: -_spare_key(deal_list[b]))
        run_end = 0
        while run_end < size - 1 and same_hand(
            deal_list[order[run_end]], deal_list[order[run_end + 1]]
        ):
            run_end += 1
        if run_end == size - 1:
            continue

        group.boards = order[: run_end + 1]
        current = group
        for prev, board in zip(order[run_end:], order[run_end + 1 :]):
            if same_hand(deal_list[prev], deal_list[board]):
                current.boards.append(board)
            else:
                current = new_extra(board)

    return groups