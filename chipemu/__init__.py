"""CHIP-8 virtual machine."""
from .decoder import Instruction, Op, decode
from .emulator import Emulator
from .errors import (AddressOutOfRange, Chip8Error, RomTooLarge, StackOverflow,
                     StackUnderflow, UnknownOpcode)

__version__ = "0.1.0"

__all__ = [
    "AddressOutOfRange",
    "Chip8Error",
    "Emulator",
    "Instruction",
    "Op",
    "RomTooLarge",
    "StackOverflow",
    "StackUnderflow",
    "UnknownOpcode",
    "decode",
]
