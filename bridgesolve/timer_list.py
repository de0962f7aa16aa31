"""A set of timer groups making up a simple exclusive-time profiler.

The search timer group is recursive, so its times include those of the
calls below it and of the other timed functions. ``print_stats``
approximates exclusive times by subtracting those out.
"""

from __future__ import annotations

import copy
from enum import IntEnum
from typing import TextIO

from bridgesolve.timer_group import TimerGroup


class TimerKind(IntEnum):
    AB = 0
    MAKE = 1
    UNDO = 2
    EVALUATE = 3
    NEXTMOVE = 4
    QT = 5
    LT = 6
    MOVEGEN = 7
    LOOKUP = 8
    BUILD = 9


_GROUP_NAMES = {
    TimerKind.AB: "AB",
    TimerKind.MAKE: "Make",
    TimerKind.UNDO: "Undo",
    TimerKind.EVALUATE: "Evaluate",
    TimerKind.NEXTMOVE: "NextMove",
    TimerKind.QT: "QuickTricks",
    TimerKind.LT: "LaterTricks",
    TimerKind.MOVEGEN: "MoveGen",
    TimerKind.LOOKUP: "Lookup",
    TimerKind.BUILD: "Build",
}


class TimerList:
    """One timer group per timed function, indexed by ``TimerKind``."""

    def __init__(self) -> None:
        self.groups: list[TimerGroup] = []
        self.reset()

    def reset(self) -> None:
        self.groups = []
        for kind in TimerKind:
            group = TimerGroup()
            group.set_names(_GROUP_NAMES[kind])
            self.groups.append(group)

    def _group(self, group: int) -> TimerGroup | None:
        if 0 <= group < len(self.groups):
            return self.groups[group]
        return None

    def start(self, group: int, timer_no: int) -> None:
        target = self._group(group)
        if target is not None:
            target.start(timer_no)

    def end(self, group: int, timer_no: int) -> None:
        target = self._group(group)
        if target is not None:
            target.end(timer_no)

    def used(self) -> bool:
        return any(group.used() for group in self.groups)

    def print_stats(self, out: TextIO) -> None:
        """Write the summary tables to ``out``; nothing if unused."""
        if not self.used():
            return

        ab_group = copy.deepcopy(self.groups[TimerKind.AB])
        ab_group.differentiate()
        others = self.groups[1:]
        for group in others:
            ab_group -= group

        ab_group.set_names("AB")
        ab_total = ab_group.sum()
        ab_total.name = "Sum"

        sum_total = copy.copy(ab_total)
        for group in others:
            sum_total += group.sum()

        first = self.groups[TimerKind.AB]
        out.write(first.header())
        out.write(ab_group.sum_line(sum_total))
        for group in others:
            out.write(group.sum_line(sum_total))
        out.write(first.dash_line())
        out.write(sum_total.sum_line(sum_total) + "\n")

        if ab_group.used():
            out.write(ab_group.header())
            out.write(ab_group.timer_lines(ab_total))
            out.write(ab_group.dash_line())
            out.write(ab_total.sum_line(ab_total) + "\n")