"""Faults raised by the CHIP-8 core.

Every fault is fatal to the current run: the core never resumes after one,
the driving loop decides what the user sees.
"""
from __future__ import annotations


class Chip8Error(Exception):
    """Base class for all emulator faults."""


class AddressOutOfRange(Chip8Error):
    def __init__(self, address: int):
        self.address = address
        super().__init__(f"Address out of range: 0x{address:X}")


class RomTooLarge(Chip8Error):
    def __init__(self, size: int, origin: int):
        self.size = size
        self.origin = origin
        super().__init__(
            f"ROM of {size} bytes does not fit in memory at 0x{origin:03X}")


class StackOverflow(Chip8Error):
    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"Stack overflow on CALL at PC {pc:03X}")


class StackUnderflow(Chip8Error):
    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"Stack underflow on RET at PC {pc:03X}")


class UnknownOpcode(Chip8Error):
    def __init__(self, opcode: int, pc: int):
        self.opcode = opcode
        self.pc = pc
        super().__init__(f"Unknown opcode: {opcode:04X} at PC {pc:03X}")
