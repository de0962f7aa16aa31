"""Building blocks for counting quick tricks from a position.

Each step looks at one suit led from one side and counts the tricks that
can be cashed there. The ranks that the count relies on are recorded in
the position's ``win_ranks`` for the current depth. A step returns the
updated trick count together with an ``Outcome`` saying how the caller
should go on.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

NUM_HANDS = 4
NUM_SUITS = 4
MAX_DEPTH = 52
_FULL_SUIT = (1 << 13) - 1


def bit_map_rank(rank: int) -> int:
    """The holding bit of a rank (2..14); ranks 0 and 1 map to no bit."""
    if rank < 0 or rank > 14:
        raise ValueError(f"rank must be in 0..14, got {rank}")
    if rank < 2:
        return 0
    return 1 << (rank - 2)


def highest_rank(mask: int) -> int:
    """The highest rank (2..14) in a holding, or 0 for a void."""
    if mask < 0 or mask > _FULL_SUIT:
        raise ValueError(f"holding must be a 13-bit mask, got {mask:#x}")
    return mask.bit_length() + 1 if mask else 0


def count_cards(mask: int) -> int:
    """Number of cards in a holding."""
    if mask < 0:
        raise ValueError(f"holding must be non-negative, got {mask}")
    return bin(mask).count("1")


def partner(hand: int) -> int:
    return (hand + 2) % NUM_HANDS


def lho(hand: int) -> int:
    return (hand + 1) % NUM_HANDS


def rho(hand: int) -> int:
    return (hand + 3) % NUM_HANDS


@dataclass(frozen=True)
class HighCard:
    """A card by its holder and rank; hand -1 and rank 0 mean none."""

    hand: int = -1
    rank: int = 0


class Outcome(IntEnum):
    """What the caller should do after a step."""

    CONTINUE_SAME = 0
    CUTOFF = 1
    NEXT_SUIT = 2


@dataclass
class Position:
    """Remaining cards of all four hands plus search bookkeeping.

    ``rank_in_suit[hand][suit]`` is a 13-bit holding (rank 2 at bit 0).
    ``win_ranks[depth][suit]`` collects the ranks a result depends on.
    ``moves`` maps a depth to the (suit, rank) played there.
    """

    rank_in_suit: list[list[int]]
    tricks_max: int = 0
    win_ranks: list[list[int]] = field(
        default_factory=lambda: [[0] * NUM_SUITS for _ in range(MAX_DEPTH)]
    )
    moves: dict[int, tuple[int, int]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        holdings = [list(hand) for hand in self.rank_in_suit]
        if len(holdings) != NUM_HANDS or any(len(h) != NUM_SUITS for h in holdings):
            raise ValueError("rank_in_suit must be 4 hands of 4 suits")
        for hand in holdings:
            for mask in hand:
                if mask < 0 or mask > _FULL_SUIT:
                    raise ValueError(f"holding must be a 13-bit mask, got {mask:#x}")
        self.rank_in_suit = holdings

    @property
    def length(self) -> list[list[int]]:
        return [[count_cards(mask) for mask in hand] for hand in self.rank_in_suit]

    def _nth_highest(self, suit: int, n: int) -> HighCard:
        seen = 0
        for rank in range(14, 1, -1):
            bit = bit_map_rank(rank)
            for hand, holdings in enumerate(self.rank_in_suit):
                if holdings[suit] & bit:
                    seen += 1
                    if seen == n:
                        return HighCard(hand, rank)
        return HighCard()

    @property
    def winner(self) -> list[HighCard]:
        return [self._nth_highest(suit, 1) for suit in range(NUM_SUITS)]

    @property
    def second_best(self) -> list[HighCard]:
        return [self._nth_highest(suit, 2) for suit in range(NUM_SUITS)]

    def third_highest(self, suit: int) -> HighCard:
        """The third highest card still out in ``suit``."""
        return self._nth_highest(suit, 3)


@dataclass
class SuitContext:
    """The suit being examined, seen from the hand on lead."""

    hand: int
    suit: int
    cutoff: int
    depth: int
    count_own: int
    count_part: int
    count_lho: int
    count_rho: int
    lho_trump_ranks: int = 0
    rho_trump_ranks: int = 0
    comm_partner: bool = False
    comm_suit: int = -1
    comm_rank: int = 0

    @property
    def opponents_trumpless(self) -> bool:
        return self.lho_trump_ranks == 0 and self.rho_trump_ranks == 0


def _mark(pos: Position, ctx: SuitContext, suit: int, rank: int) -> None:
    pos.win_ranks[ctx.depth][suit] |= bit_map_rank(rank)


def _mark_comm(pos: Position, ctx: SuitContext) -> None:
    _mark(pos, ctx, ctx.comm_suit, ctx.comm_rank)


def _cash_rest(qt: int, extra: int, ctx: SuitContext) -> tuple[int, Outcome]:
    qt += extra
    if qt >= ctx.cutoff:
        return qt, Outcome.CUTOFF
    return qt, Outcome.NEXT_SUIT


def lead_hand_trump(pos: Position, ctx: SuitContext, qtricks: int) -> tuple[int, Outcome]:
    """Side suit in a trump contract, top card held by the leader."""
    qt = qtricks
    hand, suit = ctx.hand, ctx.suit
    if (ctx.count_lho != 0 or ctx.lho_trump_ranks == 0) and (
        ctx.count_rho != 0 or ctx.rho_trump_ranks == 0
    ):
        _mark(pos, ctx, suit, pos.winner[suit].rank)
        qt += 1
        if qt >= ctx.cutoff:
            return qt, Outcome.CUTOFF
        if (
            ctx.count_lho <= 1
            and ctx.count_rho <= 1
            and ctx.count_part <= 1
            and ctx.opponents_trumpless
        ):
            return _cash_rest(qt, ctx.count_own - 1, ctx)

    second = pos.second_best[suit]
    if second.hand == hand:
        if ctx.opponents_trumpless:
            _mark(pos, ctx, suit, second.rank)
            qt += 1
            if qt >= ctx.cutoff:
                return qt, Outcome.CUTOFF
            if ctx.count_lho <= 2 and ctx.count_rho <= 2 and ctx.count_part <= 2:
                return _cash_rest(qt, ctx.count_own - 2, ctx)
    elif second.hand == partner(hand) and ctx.count_own > 1 and ctx.count_part > 1:
        if ctx.opponents_trumpless:
            _mark(pos, ctx, suit, second.rank)
            qt += 1
            if qt >= ctx.cutoff:
                return qt, Outcome.CUTOFF
            if (
                ctx.count_lho <= 2
                and ctx.count_rho <= 2
                and (ctx.count_part <= 2 or ctx.count_own <= 2)
            ):
                return _cash_rest(qt, max(ctx.count_own - 2, ctx.count_part - 2), ctx)
    return qt, Outcome.CONTINUE_SAME


def _draw_trump(ctx: SuitContext, trump: int) -> None:
    if trump == ctx.suit and (not ctx.comm_partner or ctx.suit != ctx.comm_suit):
        ctx.lho_trump_ranks = max(0, ctx.lho_trump_ranks - 1)
        ctx.rho_trump_ranks = max(0, ctx.rho_trump_ranks - 1)


def lead_hand_nt(
    pos: Position, ctx: SuitContext, qtricks: int, trump: int
) -> tuple[int, Outcome]:
    """Notrump suit or the trump suit, top card held by the leader.

    Cashing trump winners draws the opponents' trumps, which is recorded
    in ``ctx``.
    """
    qt = qtricks
    hand, suit = ctx.hand, ctx.suit
    _mark(pos, ctx, suit, pos.winner[suit].rank)
    qt += 1
    if qt >= ctx.cutoff:
        return qt, Outcome.CUTOFF
    _draw_trump(ctx, trump)

    if ctx.count_lho <= 1 and ctx.count_rho <= 1 and ctx.count_part <= 1:
        return _cash_rest(qt, ctx.count_own - 1, ctx)

    second = pos.second_best[suit]
    if second.hand == hand:
        _mark(pos, ctx, suit, second.rank)
        qt += 1
        if qt >= ctx.cutoff:
            return qt, Outcome.CUTOFF
        _draw_trump(ctx, trump)
        if ctx.count_lho <= 2 and ctx.count_rho <= 2 and ctx.count_part <= 2:
            return _cash_rest(qt, ctx.count_own - 2, ctx)
    elif second.hand == partner(hand) and ctx.count_own > 1 and ctx.count_part > 1:
        _mark(pos, ctx, suit, second.rank)
        qt += 1
        if qt >= ctx.cutoff:
            return qt, Outcome.CUTOFF
        _draw_trump(ctx, trump)
        if (
            ctx.count_lho <= 2
            and ctx.count_rho <= 2
            and (ctx.count_part <= 2 or ctx.count_own <= 2)
        ):
            return _cash_rest(qt, max(ctx.count_own - 2, ctx.count_part - 2), ctx)
    return qt, Outcome.CONTINUE_SAME


def partner_hand_trump(pos: Position, ctx: SuitContext, qtricks: int) -> tuple[int, Outcome]:
    """Side suit in a trump contract, top card held by the leader's partner.

    The entry to partner (``comm_suit``/``comm_rank``) is recorded too.
    """
    qt = qtricks
    hand, suit = ctx.hand, ctx.suit
    if (ctx.count_lho != 0 or ctx.lho_trump_ranks == 0) and (
        ctx.count_rho != 0 or ctx.rho_trump_ranks == 0
    ):
        _mark(pos, ctx, suit, pos.winner[suit].rank)
        _mark_comm(pos, ctx)
        qt += 1
        if qt >= ctx.cutoff:
            return qt, Outcome.CUTOFF
        if (
            ctx.count_lho <= 1
            and ctx.count_rho <= 1
            and ctx.count_own <= 1
            and ctx.opponents_trumpless
        ):
            return _cash_rest(qt, ctx.count_part - 1, ctx)

    second = pos.second_best[suit]
    if second.hand == partner(hand):
        if ctx.opponents_trumpless:
            _mark(pos, ctx, suit, second.rank)
            _mark_comm(pos, ctx)
            qt += 1
            if qt >= ctx.cutoff:
                return qt, Outcome.CUTOFF
            if ctx.count_lho <= 2 and ctx.count_rho <= 2 and ctx.count_own <= 2:
                return _cash_rest(qt, ctx.count_part - 2, ctx)
    elif second.hand == hand and ctx.count_part > 1 and ctx.count_own > 1:
        if ctx.opponents_trumpless:
            _mark(pos, ctx, suit, second.rank)
            _mark_comm(pos, ctx)
            qt += 1
            if qt >= ctx.cutoff:
                return qt, Outcome.CUTOFF
            if (
                ctx.count_lho <= 2
                and ctx.count_rho <= 2
                and (ctx.count_own <= 2 or ctx.count_part <= 2)
            ):
                return _cash_rest(qt, max(ctx.count_part - 2, ctx.count_own - 2), ctx)
    elif (
        suit == ctx.comm_suit
        and second.hand == lho(hand)
        and (ctx.count_lho >= 2 or ctx.lho_trump_ranks == 0)
        and (ctx.count_rho >= 2 or ctx.rho_trump_ranks == 0)
    ):
        third = pos.third_highest(suit)
        if third.hand == partner(hand):
            _mark(pos, ctx, suit, third.rank)
            _mark_comm(pos, ctx)
            qt += 1
            if qt >= ctx.cutoff:
                return qt, Outcome.CUTOFF
            if (
                ctx.count_own <= 2
                and ctx.count_lho <= 2
                and ctx.count_rho <= 2
                and ctx.opponents_trumpless
            ):
                qt += ctx.count_part - 2
                if qt >= ctx.cutoff:
                    return qt, Outcome.CUTOFF
    return qt, Outcome.CONTINUE_SAME


def partner_hand_nt(pos: Position, ctx: SuitContext, qtricks: int) -> tuple[int, Outcome]:
    """Notrump suit or trump suit, top card held by the leader's partner."""
    qt = qtricks
    hand, suit = ctx.hand, ctx.suit
    _mark(pos, ctx, suit, pos.winner[suit].rank)
    _mark_comm(pos, ctx)
    qt += 1
    if qt >= ctx.cutoff:
        return qt, Outcome.CUTOFF
    if ctx.count_lho <= 1 and ctx.count_rho <= 1 and ctx.count_own <= 1:
        return _cash_rest(qt, ctx.count_part - 1, ctx)

    second = pos.second_best[suit]
    if second.hand == partner(hand):
        _mark(pos, ctx, suit, second.rank)
        qt += 1
        if qt >= ctx.cutoff:
            return qt, Outcome.CUTOFF
        if ctx.count_lho <= 2 and ctx.count_rho <= 2 and ctx.count_own <= 2:
            return _cash_rest(qt, ctx.count_part - 2, ctx)
    elif second.hand == hand and ctx.count_part > 1 and ctx.count_own > 1:
        _mark(pos, ctx, suit, second.rank)
        qt += 1
        if qt >= ctx.cutoff:
            return qt, Outcome.CUTOFF
        if (
            ctx.count_lho <= 2
            and ctx.count_rho <= 2
            and (ctx.count_own <= 2 or ctx.count_part <= 2)
        ):
            return _cash_rest(qt, max(ctx.count_part - 2, ctx.count_own - 2), ctx)
    elif suit == ctx.comm_suit and second.hand == lho(hand):
        third = pos.third_highest(suit)
        if third.hand == partner(hand):
            _mark(pos, ctx, suit, third.rank)
            qt += 1
            if qt >= ctx.cutoff:
                return qt, Outcome.CUTOFF
            if ctx.count_own <= 2 and ctx.count_lho <= 2 and ctx.count_rho <= 2:
                qt += ctx.count_part - 2
                if qt >= ctx.cutoff:
                    return qt, Outcome.CUTOFF
    return qt, Outcome.CONTINUE_SAME