from __future__ import annotations

import logging
from dataclasses import dataclass, field

from .errors import AddressOutOfRange, RomTooLarge

logger = logging.getLogger(__name__)

# ==============================
# Constants
# ==============================
MEM_SIZE = 4096
START_ADDRESS = 0x200
FONT_ADDRESS = 0x50  # canonical address for font sprites
FONT_GLYPH_SIZE = 5

# Classic CHIP-8 4x5 font (each char 5 bytes)
FONTSET = [
    0xF0, 0x90, 0x90, 0x90, 0xF0,  # 0
    0x20, 0x60, 0x20, 0x20, 0x70,  # 1
    0xF0, 0x10, 0xF0, 0x80, 0xF0,  # 2
    0xF0, 0x10, 0xF0, 0x10, 0xF0,  # 3
    0x90, 0x90, 0xF0, 0x10, 0x10,  # 4
    0xF0, 0x80, 0xF0, 0x10, 0xF0,  # 5
    0xF0, 0x80, 0xF0, 0x90, 0xF0,  # 6
    0xF0, 0x10, 0x20, 0x40, 0x40,  # 7
    0xF0, 0x90, 0xF0, 0x90, 0xF0,  # 8
    0xF0, 0x90, 0xF0, 0x10, 0xF0,  # 9
    0xF0, 0x90, 0xF0, 0x90, 0x90,  # A
    0xE0, 0x90, 0xE0, 0x90, 0xE0,  # B
    0xF0, 0x80, 0x80, 0x80, 0xF0,  # C
    0xE0, 0x90, 0x90, 0x90, 0xE0,  # D
    0xF0, 0x80, 0xF0, 0x80, 0xF0,  # E
    0xF0, 0x80, 0xF0, 0x80, 0x80   # F
]


def font_address(digit: int) -> int:
    """Address of the sprite for hex digit ``digit`` (only the low nibble counts)."""
    return FONT_ADDRESS + (digit & 0xF) * FONT_GLYPH_SIZE


def load_rom_file(path) -> bytes:
    with open(path, 'rb') as f:
        return f.read()


@dataclass
class Memory:
    data: bytearray = field(default_factory=lambda: bytearray(MEM_SIZE))

    def _check(self, address: int):
        if not 0 <= address < MEM_SIZE:
            raise AddressOutOfRange(address)

    def read(self, address: int) -> int:
        self._check(address)
        return self.data[address]

    def write(self, address: int, value: int):
        self._check(address)
        self.data[address] = value & 0xFF

    def read_word(self, address: int) -> int:
        # big-endian: high byte at the lower address
        hi = self.read(address)
        lo = self.read(address + 1)
        return (hi << 8) | lo

    def read_block(self, address: int, length: int) -> bytes:
        if length <= 0:
            return b""
        self._check(address)
        self._check(address + length - 1)
        return bytes(self.data[address:address + length])

    def load(self, rom: bytes, origin: int = START_ADDRESS):
        end = origin + len(rom)
        if origin < 0 or end > MEM_SIZE:
            raise RomTooLarge(len(rom), origin)
        self.data[origin:end] = rom
        logger.debug("Loaded %d bytes at 0x%03X", len(rom), origin)

    def store_font(self):
        self.data[FONT_ADDRESS:FONT_ADDRESS + len(FONTSET)] = bytes(FONTSET)
        logger.debug("Font stored at 0x%03X", FONT_ADDRESS)
