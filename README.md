# bridgesolve

Support pieces for a bridge double dummy solver: grouping of identical
deals, a pool of worker-thread slots, wall-clock and CPU timers with text
reports, and the quick-trick estimates used to cut a search short.

The package has no dependencies outside the standard library.

## Installation

```
pip install .
```

For the test suite:

```
pip install ".[test]"
pytest
```

## Modules

- `bridgesolve.scheduler_groups`
  - `Deal`: a frozen dataclass of `remain_cards[hand][suit]` (a holding with
    rank `r`, 2..14, at bit `r`), `trump` (4 is notrump), `first`, and the
    cards of the current trick. `Deal.notrump` tells whether trump is 4.
  - `RunMode`: `SOLVE`, `CALC`, `TRACE`.
  - `make_groups(deals)` returns a list of `BoardGroup` (`strain`, `key`,
    `boards`, `pred`). Boards are bucketed by strain and a hash of the deal;
    buckets that turn out to hold different deals are split, and the split-off
    boards go to extra groups with strain 5. Different deals never share a
    group, though duplicates may be missed.
  - `same_hand(first, second)`, `fanout(deal)` (bit groups per hand, voids
    multiplying them), `strength(deal)` (how unevenly the high cards are
    split between the sides, 0..49) and `high_card_points(holding)`
    (A 13, K 8, Q 4, J 2, T 1 on a 13-bit holding).
- `bridgesolve.thread_manager`
  - `ThreadManager`: `reset(n_threads)` makes at least that many slots,
    `occupy(machine_id)` binds a machine thread to the lowest free slot
    (blocking while all are busy), `release(machine_id)` frees it, and
    `dump(path, tag)` appends an overview to a file. Misuse raises
    `RuntimeError` (or `ValueError` for a negative id).
- `bridgesolve.quick_trick_steps`
  - `Position`: `rank_in_suit[hand][suit]` as 13-bit holdings (rank 2 at
    bit 0), `tricks_max`, `win_ranks[depth][suit]` and `moves` (depth to
    `(suit, rank)`). It derives `length`, `winner`, `second_best` and
    `third_highest(suit)`, each a `HighCard(hand, rank)`.
  - `SuitContext`, `Outcome` and the per-suit steps `lead_hand_trump`,
    `lead_hand_nt`, `partner_hand_trump`, `partner_hand_nt`.
  - Helpers `bit_map_rank`, `highest_rank`, `count_cards`, `partner`, `lho`,
    `rho`.
- `bridgesolve.quick_tricks`
  - `quick_tricks(pos, hand, depth, target, trump, max_node_hands)` returns
    `(qtricks, decided)` for the side of the hand on lead.
  - `quick_tricks_second_hand(pos, hand, depth, target, trump, ini_depth,
    max_node_hands)` returns True when the side of the second hand surely
    reaches the target; the card led is read from `pos.moves[depth + 1]`.
  - Both record the ranks the count depends on in `pos.win_ranks[depth]`.
- `bridgesolve.timer`: `Timer`, a dataclass that counts intervals and sums
  wall-clock microseconds (`user_cum`) and processor ticks (`syst_cum`). Use
  `start()`/`end()` or `with timer:`. `sum_line(divisor, bname)` and
  `detail_line()` format report rows.
- `bridgesolve.timer_group`: `TimerGroup`, 50 timers indexed by depth, with
  `differentiate()` to turn nested times into exclusive ones, `sum()` and
  report lines.
- `bridgesolve.timer_list`: `TimerList`, one `TimerGroup` per `TimerKind`,
  and `print_stats(out)`, which writes approximate exclusive-time tables to
  a text stream (nothing if no timer was used).
- `bridgesolve.time_stat` and `bridgesolve.time_stat_list`: `TimeStat`
  (count, sum, sum of squares, and a `line()` with average and standard
  deviation) and `TimeStatList(name, length)` with `add(pos, stat)` and
  `report()`.

## Examples

Grouping identical deals:

```python
from bridgesolve.scheduler_groups import Deal, make_groups

deal = Deal(
    remain_cards=(
        (0x7FFC, 0, 0, 0),
        (0, 0x7FFC, 0, 0),
        (0, 0, 0x7FFC, 0),
        (0, 0, 0, 0x7FFC),
    ),
    trump=4,
    first=0,
)
groups = make_groups([deal, deal])
print(groups[0].boards)  # [0, 1]
```

Timing and reporting:

```python
import sys

from bridgesolve.timer_list import TimerKind, TimerList

timers = TimerList()
timers.start(TimerKind.AB, 48)
...  # work being timed
timers.end(TimerKind.AB, 48)
timers.print_stats(sys.stdout)
```

Sharing thread slots:

```python
from bridgesolve.thread_manager import ThreadManager

slots = ThreadManager()
slots.reset(2)
slot = slots.occupy(0)
try:
    ...  # work on slot
finally:
    slots.release(0)
```

## What the package does not do

There is no double dummy search here: nothing solves a deal, computes
trick tables or analyses a play sequence, and there is no command-line
tool. The package does not predict solve times or order groups of boards
for workers, and it does not start worker threads itself; `make_groups`
and `ThreadManager` are the pieces a caller builds that on.