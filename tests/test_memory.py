"""Memory, loader and font tests."""
import pytest

from chipemu.errors import AddressOutOfRange, RomTooLarge
from chipemu.memory import (FONT_ADDRESS, FONTSET, MEM_SIZE, START_ADDRESS,
                            Memory, font_address, load_rom_file)


class TestAccess:
    def test_zero_initialised(self):
        mem = Memory()
        assert len(mem.data) == MEM_SIZE
        assert not any(mem.data)

    def test_read_write(self):
        mem = Memory()
        mem.write(0xFFF, 0xAB)
        assert mem.read(0xFFF) == 0xAB

    def test_write_masks_to_byte(self):
        mem = Memory()
        mem.write(0x300, 0x1FF)
        assert mem.read(0x300) == 0xFF

    @pytest.mark.parametrize("address", [MEM_SIZE, MEM_SIZE + 10, -1])
    def test_out_of_range(self, address):
        mem = Memory()
        with pytest.raises(AddressOutOfRange) as exc:
            mem.read(address)
        assert exc.value.address == address
        with pytest.raises(AddressOutOfRange):
            mem.write(address, 1)

    def test_read_word_is_big_endian(self):
        mem = Memory()
        mem.write(0x200, 0x12)
        mem.write(0x201, 0x34)
        assert mem.read_word(0x200) == 0x1234

    def test_read_word_at_last_byte_faults(self):
        """A word at 0xFFF would need byte 0x1000."""
        with pytest.raises(AddressOutOfRange):
            Memory().read_word(0xFFF)

    def test_read_block_checks_the_far_end(self):
        mem = Memory()
        assert mem.read_block(0xFFE, 2) == b"\x00\x00"
        with pytest.raises(AddressOutOfRange):
            mem.read_block(0xFFE, 3)

    def test_empty_block(self):
        assert Memory().read_block(0x200, 0) == b""


class TestLoad:
    def test_load_at_program_start(self):
        mem = Memory()
        mem.load(b"\x60\x0A\x70\x05")
        assert mem.data[START_ADDRESS:START_ADDRESS + 4] == b"\x60\x0A\x70\x05"
        assert mem.data[START_ADDRESS - 1] == 0

    def test_load_fills_memory_exactly(self):
        mem = Memory()
        mem.load(bytes([1]) * (MEM_SIZE - START_ADDRESS))
        assert mem.read(MEM_SIZE - 1) == 1

    def test_rom_too_large(self):
        mem = Memory()
        with pytest.raises(RomTooLarge) as exc:
            mem.load(bytes(MEM_SIZE - START_ADDRESS + 1))
        assert exc.value.size == MEM_SIZE - START_ADDRESS + 1
        assert exc.value.origin == START_ADDRESS
        assert not any(mem.data)

    def test_custom_origin(self):
        mem = Memory()
        mem.load(b"\xAA", origin=0x300)
        assert mem.read(0x300) == 0xAA

    def test_load_rom_file(self, tmp_path):
        path = tmp_path / "rom.ch8"
        path.write_bytes(b"\x00\xE0")
        assert load_rom_file(path) == b"\x00\xE0"


class TestFont:
    def test_store_font(self):
        mem = Memory()
        mem.store_font()
        assert mem.read_block(FONT_ADDRESS, len(FONTSET)) == bytes(FONTSET)
        assert len(FONTSET) == 16 * 5

    def test_font_address(self):
        assert font_address(0) == FONT_ADDRESS
        assert font_address(0xA) == FONT_ADDRESS + 50
        assert font_address(0x1F) == FONT_ADDRESS + 75
