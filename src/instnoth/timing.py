# timing.py
from __future__ import annotations

import time
from typing import List, Protocol


class Clock(Protocol):
    """Decides how a nominal duration is spent."""

    def sleep(self, ms: int) -> None: ...


class RealClock:
    """Actually waits; used for interactive runs."""

    def sleep(self, ms: int) -> None:
        if ms > 0:
            time.sleep(ms / 1000)


class SimulatedClock:
    """Records durations without waiting."""

    def __init__(self) -> None:
        self.elapsed_ms = 0
        self.calls: List[int] = []

    def sleep(self, ms: int) -> None:
        self.calls.append(ms)
        self.elapsed_ms += ms
