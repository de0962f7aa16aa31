"""Running count, sum and sum of squares of timing samples."""

from __future__ import annotations

import math
from dataclasses import dataclass


def _ratio(num: float, den: float) -> float:
    if den == 0:
        if num == 0 or math.isnan(num):
            return math.nan
        return math.copysign(math.inf, num)
    return num / den


@dataclass
class TimeStat:
    """Accumulated statistics over a number of timing samples."""

    number: int = 0
    cum: int = 0
    cumsq: float = 0.0

    def reset(self) -> None:
        self.number = 0
        self.cum = 0
        self.cumsq = 0.0

    def set(self, time_user: int, timesq: float | None = None) -> None:
        """Make this a single sample; ``timesq`` defaults to its square."""
        self.number = 1
        self.cum = time_user
        self.cumsq = float(time_user) * float(time_user) if timesq is None else timesq

    def __iadd__(self, other: TimeStat) -> TimeStat:
        self.number += other.number
        self.cum += other.cum
        self.cumsq += other.cumsq
        return self

    def used(self) -> bool:
        return self.number > 0

    def header(self) -> str:
        return (
            f"{'n':>5}{'Number':>9}{'Cum time':>13}{'Average':>13}"
            f"{'Sdev':>13}{'Sdev/mu':>13}\n"
        )

    def line(self) -> str:
        if self.number == 0:
            return ""
        avg = self.cum / self.number
        arg = self.cumsq / self.number - avg * avg
        sdev = math.sqrt(arg) if arg >= 0 else 0.0
        return (
            f"{self.number:>9}{self.cum:>13}{avg:>13.0f}{sdev:>13.0f}"
            f"{_ratio(sdev, avg):>13.2f}\n"
        )