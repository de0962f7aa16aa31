"""A named list of timing statistics, indexed by some parameter."""

from __future__ import annotations

from bridgesolve.time_stat import TimeStat


class TimeStatList:
    """Statistics bucketed by an integer parameter, with a text report."""

    def __init__(self, name: str = "", length: int = 0) -> None:
        self.name = name
        self.stats: list[TimeStat] = []
        self.init(name, length)

    def init(self, name: str, length: int) -> None:
        """Set the name and resize to ``length`` buckets, keeping existing ones."""
        self.name = name
        if length < len(self.stats):
            del self.stats[length:]
        else:
            self.stats.extend(TimeStat() for _ in range(length - len(self.stats)))

    def add(self, pos: int, stat: TimeStat) -> None:
        if not 0 <= pos < len(self.stats):
            raise IndexError(f"bucket {pos} out of range 0..{len(self.stats) - 1}")
        self.stats[pos] += stat

    def used(self) -> bool:
        return any(stat.used() for stat in self.stats)

    def report(self) -> str:
        """The table of used buckets and their average, or '' if none used."""
        if not self.used():
            return ""
        parts = [f"{self.name}\n\n", self.stats[0].header()]
        total = TimeStat()
        for i, stat in enumerate(self.stats):
            if not stat.used():
                continue
            total += stat
            parts.append(f"{i:>5}{stat.line()}")
        parts.append(f"{'Avg':>5}{total.line()}\n")
        return "".join(parts)