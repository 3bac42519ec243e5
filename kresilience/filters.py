"""Filters deciding which iterations get checkpointed."""

from __future__ import annotations

import operator
import time
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Callable, Union


@dataclass(frozen=True)
class DefaultFilter:
    """Checkpoint every iteration."""

    def __call__(self, iteration: int) -> bool:
        # Any integral iteration number is accepted; anything else is an error.
        operator.index(iteration)
        return True


@dataclass(frozen=True)
class NthIterationFilter:
    """Checkpoint iterations that are a multiple of ``frequency``."""

    frequency: int

    def __call__(self, iteration: int) -> bool:
        return iteration % self.frequency == 0


@dataclass
class TimeFilter:
    """Checkpoint once more than ``interval`` seconds have passed since the last one."""

    interval: Union[float, timedelta]
    clock: Callable[[], float] = time.monotonic
    start: float = field(init=False)

    def __post_init__(self) -> None:
        if isinstance(self.interval, timedelta):
            self.interval = self.interval.total_seconds()
        self.start = self.clock()

    def __call__(self, iteration: int) -> bool:
        now = self.clock()
        due = (now - self.start) > self.interval
        if due:
            self.start = now
        return due