"""Decoder tests: every documented pattern and the unknown fallback."""
import pytest

from chipemu.decoder import Instruction, Op, decode


class TestPatterns:
    @pytest.mark.parametrize("raw,op", [
        (0x00E0, Op.CLS),
        (0x00EE, Op.RET),
        (0x0123, Op.SYS),
        (0x1234, Op.JP),
        (0x2345, Op.CALL),
        (0x3A12, Op.SE_BYTE),
        (0x4A12, Op.SNE_BYTE),
        (0x5AB0, Op.SE_REG),
        (0x6A12, Op.LD_BYTE),
        (0x7A12, Op.ADD_BYTE),
        (0x8AB0, Op.LD_REG),
        (0x8AB1, Op.OR),
        (0x8AB2, Op.AND),
        (0x8AB3, Op.XOR),
        (0x8AB4, Op.ADD_REG),
        (0x8AB5, Op.SUB),
        (0x8AB6, Op.SHR),
        (0x8AB7, Op.SUBN),
        (0x8ABE, Op.SHL),
        (0x9AB0, Op.SNE_REG),
        (0xA123, Op.LD_I),
        (0xB123, Op.JP_V0),
        (0xCA0F, Op.RND),
        (0xDAB5, Op.DRW),
        (0xEA9E, Op.SKP),
        (0xEAA1, Op.SKNP),
        (0xFA07, Op.LD_VX_DT),
        (0xFA0A, Op.LD_VX_K),
        (0xFA15, Op.LD_DT_VX),
        (0xFA18, Op.LD_ST_VX),
        (0xFA1E, Op.ADD_I),
        (0xFA29, Op.LD_F),
        (0xFA33, Op.LD_B),
        (0xFA55, Op.LD_MEM_VX),
        (0xFA65, Op.LD_VX_MEM),
    ])
    def test_decodes(self, raw, op):
        instr = decode(raw)
        assert instr.op is op
        assert instr.raw == raw

    def test_operand_fields(self):
        instr = decode(0xD7A5)
        assert (instr.x, instr.y, instr.n) == (0x7, 0xA, 0x5)
        assert instr.kk == 0xA5
        assert instr.nnn == 0x7A5

    @pytest.mark.parametrize("raw", [0xFFFF, 0x5AB1, 0x8AB8, 0x8ABF,
                                     0x9AB1, 0xEA00, 0xE0FF, 0xF000, 0xFA99])
    def test_unknown(self, raw):
        instr = decode(raw)
        assert instr.op is Op.UNKNOWN
        assert instr.raw == raw


class TestProperties:
    def test_total_and_deterministic(self):
        """Every 16-bit value decodes, and decoding twice gives equal values."""
        for raw in range(0x10000):
            assert decode(raw) == decode(raw)

    def test_immutable(self):
        instr = decode(0x6A12)
        with pytest.raises(AttributeError):
            instr.kk = 0

    def test_equal_instructions_hash_alike(self):
        assert hash(decode(0x1234)) == hash(decode(0x1234))
        assert isinstance(decode(0x1234), Instruction)


class TestMnemonics:
    @pytest.mark.parametrize("raw,text", [
        (0x00E0, "CLS"),
        (0x600A, "LD V0, 0x0A"),
        (0x2300, "CALL 0x300"),
        (0x8AB4, "ADD VA, VB"),
        (0xD125, "DRW V1, V2, 5"),
        (0xF355, "LD [I], V3"),
        (0xFFFF, "??? FFFF"),
    ])
    def test_str(self, raw, text):
        assert str(decode(raw)) == text
