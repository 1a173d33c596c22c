"""The machine as seen by a driving loop.

A typical loop::

    emu = Emulator()
    emu.load(rom)
    emu.store_font()
    while running:
        emu.step()              # as many times per frame as the clock wants
        dt, st = emu.tick()     # once per 1/60 s
"""
from __future__ import annotations

import logging
from typing import Callable, Optional, Tuple

from .cpu import CPU
from .decoder import Instruction, decode
from .display import Display
from .errors import Chip8Error
from .keyboard import Keyboard
from .memory import START_ADDRESS, Memory
from .timers import Timers

logger = logging.getLogger(__name__)


class Emulator:
    def __init__(self, rng: Optional[Callable[[], int]] = None,
                 legacy_store: bool = False):
        self.memory = Memory()
        self.cpu = CPU(legacy_store=legacy_store)
        if rng is not None:
            self.cpu.rng = rng
        self.display = Display()
        self.keyboard = Keyboard()
        self.timers = Timers()
        # (delay, sound) as returned by the last tick
        self.last_tick: Tuple[int, int] = (0, 0)

    def load(self, rom: bytes, origin: int = START_ADDRESS):
        self.memory.load(rom, origin)

    def store_font(self):
        self.memory.store_font()

    def fetch(self) -> Instruction:
        """Decode the instruction at PC. PC is left alone."""
        instr = decode(self.memory.read_word(self.cpu.pc))
        self.cpu.instr = instr
        return instr

    def exec(self, instr: Instruction):
        try:
            self.cpu.execute(instr, self.memory, self.display,
                             self.keyboard, self.timers)
        except Chip8Error as e:
            logger.debug("Fault executing %s: %s", instr, e)
            raise

    def step(self) -> Instruction:
        instr = self.fetch()
        self.exec(instr)
        return instr

    def tick(self) -> Tuple[int, int]:
        self.last_tick = self.timers.tick()
        return self.last_tick

    def key_pressed(self, previous: Optional[int], new: int):
        self.keyboard.key_pressed(previous, new)

    def key_released(self):
        self.keyboard.key_released()
