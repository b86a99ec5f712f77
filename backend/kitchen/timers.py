# Overview: Pause/resume elapsed-time tracking reconstructed from clock deltas.

"""
Elapsed timer.

State is a start reading plus previously accumulated seconds; elapsed
time is always recomputed as

    accumulated + (now - started_at)   while running
    accumulated                        while paused

so nothing has to tick. The clock is injectable: the default is
time.monotonic, which is immune to system clock changes within one
process. Persisted timers (production tasks) use UTC wall-clock seconds
instead because monotonic readings do not survive a restart.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional


@dataclass
class ElapsedTimer:
    accumulated_seconds: float = 0.0
    started_at: Optional[float] = None
    clock: Callable[[], float] = time.monotonic

    @property
    def is_running(self) -> bool:
        return self.started_at is not None

    def start(self) -> None:
        """Start (or resume) the timer. Starting a running timer is a no-op."""
        if self.started_at is None:
            self.started_at = self.clock()

    def pause(self) -> None:
        """Fold the current run into the accumulated total and stop."""
        if self.started_at is None:
            return
        self.accumulated_seconds += max(0.0, self.clock() - self.started_at)
        self.started_at = None

    resume = start

    def elapsed(self) -> float:
        current_run = 0.0
        if self.started_at is not None:
            current_run = max(0.0, self.clock() - self.started_at)
        return self.accumulated_seconds + current_run

    def elapsed_whole_seconds(self) -> int:
        return int(round(self.elapsed()))
