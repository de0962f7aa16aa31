"""Quick-trick counting: a fast lower bound on the tricks a side can cash.

Both functions look only at top cards and simple entries. Neither
searches. They are used to cut off the game-tree search early. The
ranks each count relies on are recorded in ``pos.win_ranks[depth]``.
"""

from __future__ import annotations

from typing import Container

from bridgesolve.quick_trick_steps import (
    NUM_SUITS,
    Outcome,
    Position,
    SuitContext,
    bit_map_rank,
    count_cards,
    highest_rank,
    lead_hand_nt,
    lead_hand_trump,
    lho,
    partner,
    partner_hand_nt,
    partner_hand_trump,
    rho,
)

NOTRUMP = 4


def _suit_order(trump: int) -> list[int]:
    """Trump first (if any), then the other suits in ascending order."""
    if trump == NOTRUMP:
        return list(range(NUM_SUITS))
    return [trump] + [s for s in range(NUM_SUITS) if s != trump]


def _cutoff(pos: Position, hand: int, depth: int, target: int,
            max_node_hands: Container[int], extra: int) -> int:
    if hand in max_node_hands:
        return target - pos.tricks_max
    return pos.tricks_max - target + (depth >> 2) + extra


def _find_communication(pos: Position, hand: int, trump: int,
                        ris: list[list[int]], length: list[list[int]],
                        winner, second_best) -> tuple[bool, int, int]:
    """An entry to partner: (found, suit, rank of partner's entry card)."""
    part, left, right = partner(hand), lho(hand), rho(hand)
    for s in range(NUM_SUITS):
        if trump != NOTRUMP and trump != s:
            # The opponents must not be able to ruff the crossing card.
            safe = ((ris[left][s] != 0 or ris[left][trump] == 0)
                    and (ris[right][s] != 0 or ris[right][trump] == 0))
            if winner[s].hand == part:
                if ris[hand][s] != 0 and safe:
                    return True, s, winner[s].rank
            elif (second_best[s].hand == part and winner[s].hand == hand
                  and length[hand][s] >= 2 and length[part][s] >= 2):
                if safe:
                    return True, s, second_best[s].rank
        elif trump == NOTRUMP:
            if winner[s].hand == part:
                if ris[hand][s] != 0:
                    return True, s, winner[s].rank
            elif (second_best[s].hand == part and winner[s].hand == hand
                  and length[hand][s] >= 2 and length[part][s] >= 2):
                return True, s, second_best[s].rank

    if (trump != NOTRUMP and ris[hand][trump] != 0
            and winner[trump].hand == part):
        return True, trump, winner[trump].rank
    return False, -1, 0


def quick_tricks(
    pos: Position,
    hand: int,
    depth: int,
    target: int,
    trump: int,
    max_node_hands: Container[int],
) -> tuple[int, bool]:
    """Count quick tricks for the side of ``hand``, which is on lead.

    ``max_node_hands`` holds the hands on the maximising side. Returns
    ``(qtricks, decided)``: ``decided`` is True when the count alone
    settles whether ``target`` is reached.
    """
    ris = pos.rank_in_suit
    length = pos.length
    winner = pos.winner
    second_best = pos.second_best
    part, left, right = partner(hand), lho(hand), rho(hand)
    win_ranks = pos.win_ranks[depth]

    cutoff = _cutoff(pos, hand, depth, target, max_node_hands, 2)
    qtricks = 0
    lowest_qtricks = False

    comm_partner, comm_suit, comm_rank = _find_communication(
        pos, hand, trump, ris, length, winner, second_best)

    def mark_comm() -> None:
        win_ranks[comm_suit] |= bit_map_rank(comm_rank)

    if trump != NOTRUMP:
        lho_trumps = length[left][trump]
        rho_trumps = length[right][trump]
    else:
        lho_trumps = rho_trumps = 0

    for suit in _suit_order(trump):
        count_own = length[hand][suit]
        count_lho = length[left][suit]
        count_rho = length[right][suit]
        count_part = length[part][suit]
        opps = count_lho != 0 or count_rho != 0
        side_suit = trump != NOTRUMP and trump != suit
        trumpless = lho_trumps == 0 and rho_trumps == 0

        if not opps and count_part == 0:
            if count_own == 0:
                continue
            # Long tricks when only the leader holds the suit.
            if side_suit and not trumpless:
                continue
            qtricks += count_own
            if qtricks >= cutoff:
                return qtricks, True
            continue

        if not opps and trump != NOTRUMP and suit == trump:
            # Partner but not the opponents hold trumps.
            total = max(count_own, count_part)
            if total > 0 and count_own >= count_part and any(
                s != trump and length[hand][s] > 0 and length[part][s] == 0
                for s in range(NUM_SUITS)
            ):
                total += 1
            if total >= cutoff:
                return total, True
        elif not opps:
            total = min(count_own, count_part)
            if trump == NOTRUMP or (suit != trump and trumpless):
                if total >= cutoff:
                    return total, True

        if comm_partner:
            if not opps and count_own == 0:
                if side_suit and not trumpless:
                    continue
                qtricks += count_part
                mark_comm()
                if qtricks >= cutoff:
                    return qtricks, True
                continue
            if not opps and trump != NOTRUMP and suit == trump:
                total = max(count_own, count_part)
                if total > 0 and count_own <= count_part and any(
                    s != trump and length[part][s] > 0 and length[hand][s] == 0
                    for s in range(NUM_SUITS)
                ):
                    total += 1
                if total >= cutoff:
                    mark_comm()
                    return total, True
            elif not opps:
                total = min(count_own, count_part)
                if trump == NOTRUMP or (suit != trump and trumpless):
                    if total >= cutoff:
                        return total, True

        if winner[suit].rank == 0:
            continue

        ctx = SuitContext(
            hand=hand, suit=suit, cutoff=cutoff, depth=depth,
            count_own=count_own, count_part=count_part,
            count_lho=count_lho, count_rho=count_rho,
            lho_trump_ranks=lho_trumps, rho_trump_ranks=rho_trumps,
            comm_partner=comm_partner, comm_suit=comm_suit, comm_rank=comm_rank,
        )

        outcome = Outcome.CONTINUE_SAME
        if winner[suit].hand == hand:
            if side_suit:
                qtricks, outcome = lead_hand_trump(pos, ctx, qtricks)
            else:
                qtricks, outcome = lead_hand_nt(pos, ctx, qtricks, trump)
                lho_trumps = ctx.lho_trump_ranks
                rho_trumps = ctx.rho_trump_ranks
        elif winner[suit].hand == part and comm_partner:
            if side_suit:
                qtricks, outcome = partner_hand_trump(pos, ctx, qtricks)
            else:
                qtricks, outcome = partner_hand_nt(pos, ctx, qtricks)

        if outcome == Outcome.CUTOFF:
            return qtricks, True
        if outcome == Outcome.NEXT_SUIT:
            continue

        if (side_suit and count_own > 0 and not lowest_qtricks
                and (qtricks == 0
                     or (winner[suit].hand not in (hand, part)
                         and winner[trump].hand not in (hand, part)))):
            if count_part == 0 and length[part][trump] > 0:
                # Partner can ruff a lead of this suit.
                part_trumps = ris[part][trump]
                if ((count_rho > 0 or length[right][trump] == 0)
                        and (count_lho > 0 or length[left][trump] == 0)):
                    lowest_qtricks = True
                    if 1 >= cutoff:
                        return 1, True
                    continue
                if count_rho == 0 and count_lho == 0:
                    if (ris[left][trump] | ris[right][trump]) < part_trumps:
                        lowest_qtricks = True
                        rr = highest_rank(part_trumps)
                        if rr != 0:
                            win_ranks[trump] |= bit_map_rank(rr)
                            if 1 >= cutoff:
                                return 1, True
                    continue
                if count_lho == 0:
                    if ris[left][trump] < part_trumps:
                        lowest_qtricks = True
                        win_ranks[trump] |= bit_map_rank(highest_rank(part_trumps))
                        if 1 >= cutoff:
                            return 1, True
                    continue
                if count_rho == 0:
                    if ris[right][trump] < part_trumps:
                        lowest_qtricks = True
                        win_ranks[trump] |= bit_map_rank(highest_rank(part_trumps))
                        if 1 >= cutoff:
                            return 1, True
                    continue

        if qtricks >= cutoff:
            return qtricks, True

    if qtricks == 0 and (trump == NOTRUMP or winner[trump].hand == -1):
        for ss in range(NUM_SUITS):
            if winner[ss].hand == -1:
                continue
            if length[hand][ss] > 0:
                win_ranks[ss] = bit_map_rank(winner[ss].rank)

        # Seen from the other side: can the opponents be held to nothing?
        if hand not in max_node_hands:
            cutoff = target - pos.tricks_max
        else:
            cutoff = pos.tricks_max - target + (depth >> 2) + 2
        if 1 >= cutoff:
            return 0, True

    return qtricks, False


def quick_tricks_second_hand(
    pos: Position,
    hand: int,
    depth: int,
    target: int,
    trump: int,
    ini_depth: int,
    max_node_hands: Container[int],
) -> bool:
    """True if the side of ``hand``, second to play, surely reaches ``target``.

    The card led is taken from ``pos.moves[depth + 1]``.
    """
    if depth == ini_depth:
        return False
    try:
        ss, led_rank = pos.moves[depth + 1]
    except KeyError:
        raise ValueError(f"no card led at depth {depth + 1}") from None

    ris = pos.rank_in_suit
    part, left = partner(hand), lho(hand)
    ranks = ris[hand][ss] | ris[part][ss]
    win_ranks = pos.win_ranks[depth]
    win_ranks[:] = [0] * NUM_SUITS

    if trump != NOTRUMP and ss != trump and (
        (ris[hand][ss] == 0 and ris[hand][trump] != 0)
        or (ris[part][ss] == 0 and ris[part][trump] != 0)
    ):
        # Own side can ruff; the trick is lost if LHO can ruff too.
        if ris[left][ss] == 0 and ris[left][trump] != 0:
            return False
    elif ranks > (bit_map_rank(led_rank) | ris[left][ss]):
        if (trump != NOTRUMP and ss != trump and ris[left][trump] != 0
                and ris[left][ss] == 0):
            return False
        # Own side holds the top card in the suit, which LHO can't ruff.
        win_ranks[ss] = bit_map_rank(highest_rank(ranks))
    else:
        return False

    qtricks = 1
    cutoff = _cutoff(pos, hand, depth, target, max_node_hands, 3)
    if qtricks >= cutoff:
        return True
    if trump != NOTRUMP:
        return False

    # In notrump: second winner in the same suit, then other suits.
    hh = hand if ris[hand][ss] > ris[part][ss] else part
    winner = pos.winner
    second_best = pos.second_best
    length = pos.length

    if (winner[ss].hand == hh and second_best[ss].rank != 0
            and second_best[ss].hand == hh):
        qtricks += 1
        win_ranks[ss] |= bit_map_rank(second_best[ss].rank)
        if qtricks >= cutoff:
            return True

    for s in range(NUM_SUITS):
        if s == ss or length[hh][s] == 0:
            continue
        if (length[lho(hh)][s] == 0 and length[rho(hh)][s] == 0
                and length[partner(hh)][s] == 0):
            # Long suit which nobody else holds.
            qtricks += count_cards(ris[hh][s])
            if qtricks >= cutoff:
                return True
        elif winner[s].rank != 0 and winner[s].hand == hh:
            qtricks += 1
            win_ranks[s] |= bit_map_rank(winner[s].rank)
            if qtricks >= cutoff:
                return True

    return False