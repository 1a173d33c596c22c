"""Hex keypad state.

The input sources this emulator is driven from (terminal and window key
events alike) report key-down reliably but key-up poorly, so the keypad is
modelled as a single active key: a new press releases whatever was held, and
the driving loop releases the held key once no fresh event arrived within a
short debounce window (see KeyDebouncer).
"""
from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

NUM_KEYS = 16
DEBOUNCE_WINDOW = 0.05  # seconds

# CHIP-8 keypad  =>  keyboard
#   1 2 3 C          1 2 3 4
#   4 5 6 D          q w e r
#   7 8 9 E          a s d f
#   A 0 B F          z x c v
# i-th character is the keyboard key that drives CHIP-8 key i
KEY_LAYOUT = "x123qweasdzc4rfv"

KEYPAD_ROWS = (
    (0x1, 0x2, 0x3, 0xC),
    (0x4, 0x5, 0x6, 0xD),
    (0x7, 0x8, 0x9, 0xE),
    (0xA, 0x0, 0xB, 0xF),
)


def key_for_char(ch: str) -> Optional[int]:
    idx = KEY_LAYOUT.find(ch) if len(ch) == 1 else -1
    return idx if idx >= 0 else None


def char_for_key(index: int) -> Optional[str]:
    if 0 <= index < NUM_KEYS:
        return KEY_LAYOUT[index]
    return None


def _check_key(index: int):
    if not 0 <= index < NUM_KEYS:
        raise IndexError(f"No such key: {index}")


@dataclass
class Keyboard:
    keys: List[bool] = field(default_factory=lambda: [False] * NUM_KEYS)
    tracked: Optional[int] = None

    def key_pressed(self, previous: Optional[int], new: int):
        _check_key(new)
        if previous is not None:
            _check_key(previous)
            self.keys[previous] = False
        self.keys[new] = True
        self.tracked = new

    def key_released(self):
        if self.tracked is not None:
            self.keys[self.tracked] = False
            self.tracked = None

    def is_pressed(self, index: int) -> bool:
        if 0 <= index < NUM_KEYS:
            return self.keys[index]
        return False

    def pressed_key(self) -> Optional[int]:
        if self.tracked is not None and self.keys[self.tracked]:
            return self.tracked
        return None


class KeyDebouncer:
    """Turns a stream of key-down events into press/release calls.

    ``target`` is anything with ``key_pressed(previous, new)`` and
    ``key_released()``, normally the Emulator.
    """

    def __init__(self, window: float = DEBOUNCE_WINDOW,
                 clock: Callable[[], float] = time.monotonic):
        self.window = window
        self.clock = clock
        self.held: Optional[int] = None
        self.last_input = clock()

    def press(self, target, key: int):
        self.last_input = self.clock()
        target.key_pressed(self.held, key)
        self.held = key

    def touch(self):
        """Record input that maps to no key; it still restarts the window."""
        self.last_input = self.clock()

    def release(self, target, key: int) -> bool:
        """Key-up for ``key``; only the held key is released."""
        if self.held != key:
            return False
        target.key_released()
        self.held = None
        return True

    def poll(self, target) -> bool:
        """Release the held key if the window has elapsed. Returns True on release."""
        if self.clock() - self.last_input < self.window:
            return False
        if self.held is None:
            return False
        target.key_released()
        self.held = None
        return True
