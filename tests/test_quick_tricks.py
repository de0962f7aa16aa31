import pytest

from bridgesolve.quick_trick_steps import Position, bit_map_rank, count_cards
from bridgesolve.quick_tricks import (
    NOTRUMP,
    quick_tricks,
    quick_tricks_second_hand,
)

SPADES, HEARTS, DIAMONDS, CLUBS = 0, 1, 2, 3


def holding(*ranks):
    mask = 0
    for rank in ranks:
        mask |= bit_map_rank(rank)
    return mask


def make_pos(hands, tricks_max=0, moves=None):
    """hands: list of 4 dicts suit -> ranks."""
    rank_in_suit = [
        [holding(*hand.get(s, ())) for s in range(4)] for hand in hands
    ]
    return Position(rank_in_suit=rank_in_suit, tricks_max=tricks_max,
                    moves=dict(moves or {}))


def test_sole_holder_of_suit_in_notrump_reaches_cutoff():
    pos = make_pos([
        {SPADES: [14]},
        {HEARTS: [2]},
        {HEARTS: [3]},
        {HEARTS: [4]},
    ])
    qtricks, decided = quick_tricks(pos, 0, 4, 1, NOTRUMP, {0, 2})
    assert decided is True
    assert qtricks == count_cards(pos.rank_in_suit[0][SPADES])


def test_no_winners_records_top_cards_and_is_undecided():
    pos = make_pos([
        {SPADES: [2]},
        {SPADES: [14]},
        {HEARTS: [2]},
        {HEARTS: [3]},
    ])
    qtricks, decided = quick_tricks(pos, 0, 8, 1, NOTRUMP, {0, 2})
    assert (qtricks, decided) == (0, False)
    assert pos.win_ranks[8][SPADES] == bit_map_rank(14)
    assert pos.win_ranks[8][HEARTS] == 0


def test_no_winners_with_low_cutoff_for_other_side_is_decided():
    pos = make_pos([
        {SPADES: [2]},
        {SPADES: [14]},
        {HEARTS: [2]},
        {HEARTS: [3]},
    ])
    # depth 0: the opponents' cutoff drops to 1.
    qtricks, decided = quick_tricks(pos, 0, 0, 1, NOTRUMP, {0, 2})
    assert qtricks == 0
    assert decided is True


def test_uncontested_trumps_are_counted():
    pos = make_pos([
        {SPADES: [14, 13]},
        {HEARTS: [2, 3]},
        {HEARTS: [4, 5]},
        {HEARTS: [6, 7]},
    ])
    qtricks, decided = quick_tricks(pos, 0, 8, 2, SPADES, {0, 2})
    assert decided is True
    assert qtricks == count_cards(pos.rank_in_suit[0][SPADES])


def test_trumps_short_of_target_are_not_decided():
    pos = make_pos([
        {SPADES: [14, 13]},
        {HEARTS: [2, 3]},
        {HEARTS: [4, 5]},
        {HEARTS: [6, 7]},
    ])
    qtricks, decided = quick_tricks(pos, 0, 8, 3, SPADES, {0, 2})
    assert decided is False
    assert qtricks == count_cards(pos.rank_in_suit[0][SPADES])


def test_decided_result_meets_max_node_cutoff():
    pos = make_pos([
        {SPADES: [14, 13], HEARTS: [14]},
        {SPADES: [2, 3], HEARTS: [2]},
        {SPADES: [4, 5], HEARTS: [3]},
        {SPADES: [6, 7], HEARTS: [4]},
    ])
    target = 2
    qtricks, decided = quick_tricks(pos, 0, 8, target, NOTRUMP, {0, 2})
    assert decided is True
    assert qtricks >= target - pos.tricks_max
    assert pos.win_ranks[8][SPADES] & bit_map_rank(14)


def test_second_hand_at_initial_depth_is_false():
    pos = make_pos([{}, {SPADES: [14]}, {}, {}], moves={6: (SPADES, 2)})
    assert quick_tricks_second_hand(pos, 1, 6, 1, NOTRUMP, 6, {1, 3}) is False


def _second_hand_pos():
    # Hand 0 has led the spade two.
    return make_pos(
        [
            {HEARTS: [2]},
            {SPADES: [14], HEARTS: [14]},
            {SPADES: [3], HEARTS: [3]},
            {SPADES: [4], HEARTS: [4]},
        ],
        moves={6: (SPADES, 2)},
    )


def test_second_hand_wins_trick_with_top_card():
    pos = _second_hand_pos()
    assert quick_tricks_second_hand(pos, 1, 5, 1, NOTRUMP, 9, {1, 3}) is True
    assert pos.win_ranks[5][SPADES] == bit_map_rank(14)


def test_second_hand_cashes_other_suit_winner_in_notrump():
    pos = _second_hand_pos()
    assert quick_tricks_second_hand(pos, 1, 5, 2, NOTRUMP, 9, {1, 3}) is True
    assert pos.win_ranks[5][HEARTS] & bit_map_rank(14)


def test_second_hand_cannot_reach_higher_target():
    pos = _second_hand_pos()
    assert quick_tricks_second_hand(pos, 1, 5, 3, NOTRUMP, 9, {1, 3}) is False


def test_second_hand_clears_previous_win_ranks():
    pos = _second_hand_pos()
    pos.win_ranks[5][DIAMONDS] = 0x1FFF
    quick_tricks_second_hand(pos, 1, 5, 1, NOTRUMP, 9, {1, 3})
    assert pos.win_ranks[5][DIAMONDS] == 0


def test_second_hand_loses_when_lho_can_ruff():
    pos = make_pos(
        [
            {DIAMONDS: [2]},
            {SPADES: [14], HEARTS: [2]},
            {HEARTS: [3, 4]},
            {SPADES: [4], HEARTS: [5]},
        ],
        moves={6: (SPADES, 2)},
    )
    assert quick_tricks_second_hand(pos, 1, 5, 1, HEARTS, 9, {1, 3}) is False


def test_second_hand_cannot_beat_led_card():
    pos = make_pos(
        [
            {HEARTS: [2]},
            {SPADES: [3], HEARTS: [14]},
            {SPADES: [4], HEARTS: [3]},
            {SPADES: [5], HEARTS: [4]},
        ],
        moves={6: (SPADES, 14)},
    )
    assert quick_tricks_second_hand(pos, 1, 5, 1, NOTRUMP, 9, {1, 3}) is False


def test_second_hand_without_led_card_raises():
    pos = _second_hand_pos()
    with pytest.raises(ValueError):
        quick_tricks_second_hand(pos, 1, 2, 1, NOTRUMP, 9, {1, 3})