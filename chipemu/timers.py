from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

TIMER_HZ = 60


@dataclass
class Timers:
    delay: int = 0
    sound: int = 0

    def tick(self) -> Tuple[int, int]:
        """Return (delay, sound) as they stand, then count both down by one.

        Meant to be called at TIMER_HZ by the driving loop. Neither timer
        goes below zero.
        """
        current = (self.delay, self.sound)
        if self.delay > 0:
            self.delay -= 1
        if self.sound > 0:
            self.sound -= 1
        return current

    @property
    def sound_active(self) -> bool:
        return self.sound > 0
