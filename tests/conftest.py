import pytest

from chipemu.emulator import Emulator


def program(*opcodes):
    """Big-endian bytes for a list of 16-bit opcodes."""
    out = bytearray()
    for op in opcodes:
        out += bytes([op >> 8, op & 0xFF])
    return bytes(out)


class FixedRng:
    """Hands out a fixed sequence of bytes, cycling."""

    def __init__(self, *values):
        self.values = list(values)
        self.calls = 0

    def __call__(self):
        value = self.values[self.calls % len(self.values)]
        self.calls += 1
        return value


@pytest.fixture
def emu():
    e = Emulator(rng=FixedRng(0xFF))
    e.store_font()
    return e


@pytest.fixture
def run():
    """Load opcodes at 0x200 into a fresh emulator and step once per opcode."""
    def _run(*opcodes, steps=None, **kwargs):
        e = Emulator(**kwargs)
        e.store_font()
        e.load(program(*opcodes))
        for _ in range(len(opcodes) if steps is None else steps):
            e.step()
        return e
    return _run
