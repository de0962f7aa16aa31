"""A row of timers, one per search depth."""

from __future__ import annotations

import copy

from bridgesolve.timer import Timer

TIMER_DEPTH = 50


class TimerGroup:
    """Timers indexed by depth, sharing a base name."""

    def __init__(self) -> None:
        self.timers: list[Timer] = []
        self.bname = ""
        self.reset()

    def reset(self) -> None:
        self.timers = [Timer() for _ in range(TIMER_DEPTH)]

    def set_names(self, base_name: str) -> None:
        for i, timer in enumerate(self.timers):
            if base_name == "AB":
                # Emphasise the card number within the trick.
                timer.name = f"{base_name}{i % 4} {i}"
            else:
                timer.name = f"{base_name}{i}"
        self.bname = base_name

    def start(self, no: int) -> None:
        self.timers[no].start()

    def end(self, no: int) -> None:
        self.timers[no].end()

    def used(self) -> bool:
        return any(timer.used() for timer in self.timers)

    def differentiate(self) -> None:
        """Turn nested (inclusive) times into per-depth exclusive times."""
        for i in range(len(self.timers) - 1, 0, -1):
            self.timers[i] -= self.timers[i - 1]

    def sum(self) -> Timer:
        total = copy.copy(self.timers[0])
        for timer in self.timers[1:]:
            total += timer
        return total

    def __isub__(self, other: TimerGroup) -> TimerGroup:
        for mine, theirs in zip(self.timers, other.timers):
            mine -= theirs
        return self

    def header(self) -> str:
        return (
            f"{'Name':<14}{'Count':>9}{'User':>11}{'Avg':>7}{'%':>5}"
            f"{'Syst':>11}{'Avg':>7}{'%':>5}\n"
        )

    def detail_header(self) -> str:
        return (
            f"{'Name ':<14}{'Number':>11}{'User ticks':>11}{'Avg':>11}"
            f"{'System':>11}{'Avg ms':>11}\n"
        )

    def sum_line(self, sum_total: Timer) -> str:
        return self.sum().sum_line(sum_total, self.bname)

    def timer_lines(self, sum_total: Timer) -> str:
        return "".join(
            timer.sum_line(sum_total)
            for timer in reversed(self.timers)
            if timer.used()
        )

    def detail_lines(self) -> str:
        return "".join(timer.detail_line() for timer in self.timers if timer.used())

    def dash_line(self) -> str:
        return "-" * 69 + "\n"