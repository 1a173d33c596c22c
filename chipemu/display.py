from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List

SCREEN_W, SCREEN_H = 64, 32
SPRITE_W = 8


@dataclass
class Display:
    """Monochrome 64x32 framebuffer, row-major."""
    pixels: List[bool] = field(default_factory=lambda: [
                               False] * (SCREEN_W * SCREEN_H))
    # raised on every change, lowered by whoever repaints
    dirty: bool = True

    def clear(self):
        self.pixels = [False] * (SCREEN_W * SCREEN_H)
        self.dirty = True

    def draw(self, x: int, y: int, sprite: bytes) -> bool:
        """XOR ``sprite`` onto the screen with its top-left corner at (x, y).

        Each sprite byte is one row, most significant bit leftmost. Pixels
        that fall off an edge wrap around to the opposite one. Returns True
        if any pixel went from set to unset.
        """
        collision = False
        for row, bits in enumerate(sprite):
            py = (y + row) % SCREEN_H
            for col in range(SPRITE_W):
                if (bits >> (7 - col)) & 1:
                    px = (x + col) % SCREEN_W
                    idx = py * SCREEN_W + px
                    if self.pixels[idx]:
                        collision = True
                    self.pixels[idx] = not self.pixels[idx]
        self.dirty = True
        return collision

    def get(self, x: int, y: int) -> bool:
        if not (0 <= x < SCREEN_W and 0 <= y < SCREEN_H):
            raise IndexError(f"Pixel ({x}, {y}) is off screen")
        return self.pixels[y * SCREEN_W + x]

    def rows(self) -> Iterator[List[bool]]:
        for y in range(SCREEN_H):
            yield self.pixels[y * SCREEN_W:(y + 1) * SCREEN_W]
