"""Maps machine thread ids onto a fixed pool of solver thread slots."""

from __future__ import annotations

import os
import threading


class ThreadManager:
    """Hands out free "real" thread slots to machine threads.

    A machine thread occupies one real slot at a time. If every slot
    is taken, ``occupy`` blocks until another machine thread releases
    its slot.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition()
        self.real_threads: list[bool] = []
        self.machine_threads: list[int] = []

    def reset(self, n_threads: int) -> None:
        """Make sure there are at least ``n_threads`` slots of each kind."""
        with self._cond:
            missing_real = n_threads - len(self.real_threads)
            if missing_real > 0:
                self.real_threads.extend([False] * missing_real)
            missing_machine = n_threads - len(self.machine_threads)
            if missing_machine > 0:
                self.machine_threads.extend([-1] * missing_machine)
            self._cond.notify_all()

    def occupy(self, machine_id: int) -> int:
        """Bind ``machine_id`` to the lowest free real slot and return it.

        Raises RuntimeError if the machine thread already holds a slot.
        """
        if machine_id < 0:
            raise ValueError(f"machine thread id must be non-negative, got {machine_id}")
        with self._cond:
            missing = machine_id + 1 - len(self.machine_threads)
            if missing > 0:
                self.machine_threads.extend([-1] * missing)
            if self.machine_threads[machine_id] != -1:
                raise RuntimeError(f"machine thread {machine_id} is already in use")
            while True:
                free = next(
                    (slot for slot, busy in enumerate(self.real_threads) if not busy),
                    None,
                )
                if free is not None:
                    break
                self._cond.wait()
            self.real_threads[free] = True
            self.machine_threads[machine_id] = free
            return free

    def release(self, machine_id: int) -> None:
        """Free the slot held by ``machine_id``.

        Raises RuntimeError if the machine thread holds no slot, or if
        its slot is not marked as busy.
        """
        with self._cond:
            if not 0 <= machine_id < len(self.machine_threads):
                raise RuntimeError(f"machine thread {machine_id} is not in use")
            real = self.machine_threads[machine_id]
            if real == -1:
                raise RuntimeError(f"machine thread {machine_id} is not in use")
            if not self.real_threads[real]:
                raise RuntimeError(
                    f"machine thread {machine_id} refers to idle real thread {real}"
                )
            self.real_threads[real] = False
            self.machine_threads[machine_id] = -1
            self._cond.notify_all()

    def dump(self, path: str | os.PathLike[str], tag: str) -> None:
        """Append an overview of occupied slots to the file at ``path``."""
        with self._cond:
            lines = [f"{tag}: Real threads occupied (out of {len(self.real_threads)}):\n"]
            lines.extend(f"{slot}\n" for slot, busy in enumerate(self.real_threads) if busy)
            lines.append("\n")
            lines.append("Machine threads overview:\n")
            lines.extend(
                f"{machine:<4}{real}\n"
                for machine, real in enumerate(self.machine_threads)
                if real != -1
            )
            lines.append("\n")
        with open(path, "a", encoding="utf-8") as out:
            out.writelines(lines)