"""Accumulating timer for wall-clock and processor time."""

from __future__ import annotations

import math
import time
from dataclasses import dataclass, field

CLOCKS_PER_SEC = 1_000_000


def _ratio(num: float, den: float) -> float:
    """Divide like floating-point hardware: x/0 gives inf or nan."""
    if den == 0:
        if num == 0:
            return math.nan
        return math.copysign(math.inf, num)
    return num / den


def _clock() -> int:
    """Processor time used so far, in clock ticks."""
    return int(time.process_time() * CLOCKS_PER_SEC)


@dataclass
class Timer:
    """Counts started/ended intervals and accumulates their durations.

    ``user_cum`` is wall-clock time in microseconds, ``syst_cum`` is
    processor time in clock ticks (``CLOCKS_PER_SEC`` per second).
    """

    name: str = ""
    count: int = 0
    user_cum: int = 0
    syst_cum: int = 0
    _user0: float = field(default=0.0, repr=False, compare=False)
    _syst0: int = field(default=0, repr=False, compare=False)

    def reset(self) -> None:
        self.name = ""
        self.count = 0
        self.user_cum = 0
        self.syst_cum = 0

    def start(self) -> None:
        self._user0 = time.perf_counter()
        self._syst0 = _clock()

    def end(self) -> None:
        user1 = time.perf_counter()
        syst1 = _clock()
        self.count += 1
        self.user_cum += int((user1 - self._user0) * 1_000_000)
        self.syst_cum += syst1 - self._syst0

    def __enter__(self) -> Timer:
        self.start()
        return self

    def __exit__(self, *exc_info) -> None:
        self.end()

    def used(self) -> bool:
        return self.count > 0

    def user_time(self) -> int:
        return int(self.user_cum)

    def __iadd__(self, other: Timer) -> Timer:
        self.count += other.count
        self.user_cum += other.user_cum
        self.syst_cum += other.syst_cum
        return self

    def __isub__(self, other: Timer) -> Timer:
        self.user_cum = max(0, self.user_cum - other.user_cum)
        self.syst_cum = max(0, self.syst_cum - other.syst_cum)
        return self

    def sum_line(self, divisor: Timer, bname: str = "") -> str:
        """One summary row, with percentages relative to ``divisor``."""
        label = bname if bname else self.name
        syst_us = 1_000_000 * self.syst_cum / CLOCKS_PER_SEC
        if self.count > 0:
            avg_user = self.user_cum / self.count
            pct_user = 100.0 * _ratio(self.user_cum, divisor.user_cum)
            avg_syst = 1_000_000 * self.syst_cum / (self.count * CLOCKS_PER_SEC)
            pct_syst = 100.0 * _ratio(self.syst_cum, divisor.syst_cum)
            return (
                f"{label:<14}{self.count:>9}{self.user_cum:>11}"
                f"{avg_user:>7.2f}{pct_user:>5.1f}{syst_us:>11.0f}"
                f"{avg_syst:>7.2f}{pct_syst:>5.1f}\n"
            )
        return (
            f"{label:<14}{self.count:>9}{self.user_cum:>11}"
            f"{'-':>7}{'-':>5}{syst_us:>11g}{'-':>7}{'-':>5}\n"
        )

    def detail_line(self) -> str:
        avg_user = _ratio(self.user_cum, self.count)
        syst_us = 1_000_000 * self.syst_cum / CLOCKS_PER_SEC
        avg_syst = _ratio(1_000_000 * self.syst_cum, self.count * CLOCKS_PER_SEC)
        return (
            f"{self.name:<15}{self.count:>10}{self.user_cum:>11}"
            f"{avg_user:>11.2f}{syst_us:>11.0f}{avg_syst:>11.2f}\n"
        )