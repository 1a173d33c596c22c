"""pygame frontend: paints the machine and feeds it key events."""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Optional

import pygame

from .display import SCREEN_H, SCREEN_W
from .emulator import Emulator
from .errors import Chip8Error
from .keyboard import (DEBOUNCE_WINDOW, KEYPAD_ROWS, KeyDebouncer,
                       char_for_key, key_for_char)
from .timers import TIMER_HZ

logger = logging.getLogger(__name__)

QUIT_CHAR = ","
PANEL_W = 300
LINE_H = 18
FG = (255, 214, 0)
LABEL = (0, 200, 0)
DIM = (60, 90, 200)
BG = (0, 0, 0)


class RunMode(Enum):
    NORMAL = "normal"      # free running, throttled to the frame rate
    STEPWISE = "stepwise"  # one instruction per keypress

    @classmethod
    def from_arg(cls, arg: Optional[str]) -> "RunMode":
        return cls.NORMAL if arg is None else cls.STEPWISE


@dataclass
class FrontendConfig:
    scale: int = 10
    fps: int = 60
    clock: int = 600  # instructions per second in normal mode
    debounce: float = DEBOUNCE_WINDOW
    mode: RunMode = RunMode.NORMAL

    @property
    def cycles_per_frame(self) -> int:
        return max(1, self.clock // self.fps)

    @property
    def key_repeat_ms(self) -> int:
        # held keys must re-fire inside the debounce window or they get released
        return max(1, int(self.debounce * 1000) // 2)


class Frontend:
    def __init__(self, emulator: Emulator, config: FrontendConfig):
        self.emulator = emulator
        self.config = config
        self.scale = max(1, int(config.scale))
        self.screen_w = SCREEN_W * self.scale
        self.surface = pygame.display.set_mode(
            (self.screen_w + PANEL_W, max(SCREEN_H * self.scale, 30 * LINE_H)))
        pygame.display.set_caption("chipemu")
        pygame.key.set_repeat(config.key_repeat_ms, config.key_repeat_ms)
        self.font = pygame.font.SysFont("monospace", 14)
        self.clock = pygame.time.Clock()
        self.debouncer = KeyDebouncer(config.debounce)
        self.status = "Press ',' to stop emulation."
        self.frame = 0
        self.started = time.perf_counter()

    # =============== Input ===============
    def handle_events(self, wait: bool = False) -> bool:
        """Forward pending key events. Returns False when the user wants out.

        With ``wait`` set, blocks until at least one key goes down.
        """
        events = pygame.event.get()
        while wait and not any(e.type in (pygame.KEYDOWN, pygame.QUIT)
                               for e in events):
            events.append(pygame.event.wait())
        for event in events:
            if not self.handle_event(event):
                return False
        self.debouncer.poll(self.emulator)
        return True

    def handle_event(self, event) -> bool:
        if event.type == pygame.QUIT:
            return False
        if event.type == pygame.KEYUP:
            key = key_for_char(getattr(event, "unicode", "").lower())
            if key is not None:
                self.debouncer.release(self.emulator, key)
            return True
        if event.type != pygame.KEYDOWN:
            return True
        if event.key == pygame.K_ESCAPE or event.unicode == QUIT_CHAR:
            return False
        key = key_for_char(event.unicode.lower())
        if key is None:
            self.debouncer.touch()
        else:
            self.debouncer.press(self.emulator, key)
        return True

    # =============== Rendering ===============
    def _text(self, x: int, y: int, label: str, value: str):
        surf = self.surface
        img = self.font.render(f"{label:<4}", True, LABEL)
        surf.blit(img, (x, y))
        surf.blit(self.font.render(value, True, FG), (x + img.get_width(), y))

    def render_display(self):
        display = self.emulator.display
        if not display.dirty:
            return
        surf = self.surface
        surf.fill(BG, pygame.Rect(0, 0, self.screen_w, SCREEN_H * self.scale))
        s = self.scale
        for y, row in enumerate(display.rows()):
            for x, lit in enumerate(row):
                if lit:
                    pygame.draw.rect(surf, FG, pygame.Rect(x * s, y * s, s, s))
        display.dirty = False

    def render_panel(self):
        surf = self.surface
        left = self.screen_w + 10
        surf.fill(BG, pygame.Rect(self.screen_w, 0, PANEL_W, surf.get_height()))
        cpu = self.emulator.cpu.snapshot()
        y = 4
        for label, val in (("PC", cpu.pc), ("I", cpu.i), ("SP", cpu.sp)):
            self._text(left, y, label, f"0x{val:04X}")
            y += LINE_H
        for i in range(0, 16, 2):
            self._text(left, y, f"V{i:X}", f"0x{cpu.registers[i]:02X}")
            self._text(left + 120, y, f"V{i + 1:X}",
                       f"0x{cpu.registers[i + 1]:02X}")
            y += LINE_H
        instr = cpu.instruction
        self._text(left, y, "op", f"{instr.raw:04X} {instr}" if instr else "-")
        y += LINE_H * 2

        keyboard = self.emulator.keyboard
        for keys in KEYPAD_ROWS:
            x = left
            for k in keys:
                colour = FG if keyboard.is_pressed(k) else DIM
                img = self.font.render(f"[{k:X}]{char_for_key(k)}", True, colour)
                surf.blit(img, (x, y))
                x += 60
            y += LINE_H
        y += LINE_H

        dt, st = self.emulator.last_tick
        self._text(left, y, "DT", f"{dt:3}   ST {st:3}")
        y += LINE_H
        self._text(left, y, "frm", f"{self.frame}, fps: {self.fps()}")
        y += LINE_H
        self._text(left, y, "", self.status)

    def fps(self) -> int:
        elapsed = time.perf_counter() - self.started
        return int(self.frame / elapsed) if elapsed > 0 else 0

    def render(self):
        self.render_display()
        self.render_panel()
        pygame.display.flip()

    def wait_to_quit(self, message: str):
        self.status = message
        self.render()
        while True:
            event = pygame.event.wait()
            if event.type in (pygame.QUIT, pygame.KEYDOWN):
                return

    # =============== Main loop ===============
    def run(self):
        emu = self.emulator
        stepwise = self.config.mode is RunMode.STEPWISE
        cycles = 1 if stepwise else self.config.cycles_per_frame
        timer_period = 1.0 / TIMER_HZ
        last_timer_tick = time.perf_counter()
        self.started = last_timer_tick

        try:
            while True:
                self.render()
                if not self.handle_events(wait=stepwise):
                    return

                for _ in range(cycles):
                    emu.step()

                # Timer update at ~60 Hz; every step counts as one in stepwise mode
                now = time.perf_counter()
                if stepwise or now - last_timer_tick >= timer_period:
                    emu.tick()
                    last_timer_tick = now

                self.frame += 1
                if not stepwise:
                    self.clock.tick(self.config.fps)
        except Chip8Error as e:
            logger.error("%s", e)
            self.emulator.display.dirty = True
            self.wait_to_quit(f"{e}. Press any key to quit")


def run(emulator: Emulator, config: FrontendConfig):
    pygame.init()
    try:
        Frontend(emulator, config).run()
    finally:
        pygame.quit()
