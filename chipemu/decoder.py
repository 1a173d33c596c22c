"""Opcode decoder.

``decode`` turns a raw 16-bit opcode into an immutable Instruction. It is
total: values that match no known pattern come back as Op.UNKNOWN and it is
up to the CPU to fault when asked to run one.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Op(Enum):
    SYS = "SYS"
    CLS = "CLS"
    RET = "RET"
    JP = "JP"
    CALL = "CALL"
    SE_BYTE = "SE_BYTE"
    SNE_BYTE = "SNE_BYTE"
    SE_REG = "SE_REG"
    LD_BYTE = "LD_BYTE"
    ADD_BYTE = "ADD_BYTE"
    LD_REG = "LD_REG"
    OR = "OR"
    AND = "AND"
    XOR = "XOR"
    ADD_REG = "ADD_REG"
    SUB = "SUB"
    SHR = "SHR"
    SUBN = "SUBN"
    SHL = "SHL"
    SNE_REG = "SNE_REG"
    LD_I = "LD_I"
    JP_V0 = "JP_V0"
    RND = "RND"
    DRW = "DRW"
    SKP = "SKP"
    SKNP = "SKNP"
    LD_VX_DT = "LD_VX_DT"
    LD_VX_K = "LD_VX_K"
    LD_DT_VX = "LD_DT_VX"
    LD_ST_VX = "LD_ST_VX"
    ADD_I = "ADD_I"
    LD_F = "LD_F"
    LD_B = "LD_B"
    LD_MEM_VX = "LD_MEM_VX"
    LD_VX_MEM = "LD_VX_MEM"
    UNKNOWN = "UNKNOWN"


# mnemonic templates, filled from the instruction's operand fields
_MNEMONICS = {
    Op.SYS: "SYS 0x{nnn:03X}",
    Op.CLS: "CLS",
    Op.RET: "RET",
    Op.JP: "JP 0x{nnn:03X}",
    Op.CALL: "CALL 0x{nnn:03X}",
    Op.SE_BYTE: "SE V{x:X}, 0x{kk:02X}",
    Op.SNE_BYTE: "SNE V{x:X}, 0x{kk:02X}",
    Op.SE_REG: "SE V{x:X}, V{y:X}",
    Op.LD_BYTE: "LD V{x:X}, 0x{kk:02X}",
    Op.ADD_BYTE: "ADD V{x:X}, 0x{kk:02X}",
    Op.LD_REG: "LD V{x:X}, V{y:X}",
    Op.OR: "OR V{x:X}, V{y:X}",
    Op.AND: "AND V{x:X}, V{y:X}",
    Op.XOR: "XOR V{x:X}, V{y:X}",
    Op.ADD_REG: "ADD V{x:X}, V{y:X}",
    Op.SUB: "SUB V{x:X}, V{y:X}",
    Op.SHR: "SHR V{x:X}",
    Op.SUBN: "SUBN V{x:X}, V{y:X}",
    Op.SHL: "SHL V{x:X}",
    Op.SNE_REG: "SNE V{x:X}, V{y:X}",
    Op.LD_I: "LD I, 0x{nnn:03X}",
    Op.JP_V0: "JP V0, 0x{nnn:03X}",
    Op.RND: "RND V{x:X}, 0x{kk:02X}",
    Op.DRW: "DRW V{x:X}, V{y:X}, {n}",
    Op.SKP: "SKP V{x:X}",
    Op.SKNP: "SKNP V{x:X}",
    Op.LD_VX_DT: "LD V{x:X}, DT",
    Op.LD_VX_K: "LD V{x:X}, K",
    Op.LD_DT_VX: "LD DT, V{x:X}",
    Op.LD_ST_VX: "LD ST, V{x:X}",
    Op.ADD_I: "ADD I, V{x:X}",
    Op.LD_F: "LD F, V{x:X}",
    Op.LD_B: "LD B, V{x:X}",
    Op.LD_MEM_VX: "LD [I], V{x:X}",
    Op.LD_VX_MEM: "LD V{x:X}, [I]",
    Op.UNKNOWN: "??? {raw:04X}",
}

# 0x8xy_ family, keyed by the low nibble
_ALU_OPS = {
    0x0: Op.LD_REG,
    0x1: Op.OR,
    0x2: Op.AND,
    0x3: Op.XOR,
    0x4: Op.ADD_REG,
    0x5: Op.SUB,
    0x6: Op.SHR,
    0x7: Op.SUBN,
    0xE: Op.SHL,
}

# 0xFx__ family, keyed by the low byte
_MISC_OPS = {
    0x07: Op.LD_VX_DT,
    0x0A: Op.LD_VX_K,
    0x15: Op.LD_DT_VX,
    0x18: Op.LD_ST_VX,
    0x1E: Op.ADD_I,
    0x29: Op.LD_F,
    0x33: Op.LD_B,
    0x55: Op.LD_MEM_VX,
    0x65: Op.LD_VX_MEM,
}


@dataclass(frozen=True)
class Instruction:
    op: Op
    raw: int
    x: int = 0
    y: int = 0
    n: int = 0
    kk: int = 0
    nnn: int = 0

    def __str__(self) -> str:
        return _MNEMONICS[self.op].format(
            x=self.x, y=self.y, n=self.n, kk=self.kk, nnn=self.nnn,
            raw=self.raw)


def decode(opcode: int) -> Instruction:
    opcode &= 0xFFFF
    nnn = opcode & 0x0FFF
    n = opcode & 0x000F
    x = (opcode & 0x0F00) >> 8
    y = (opcode & 0x00F0) >> 4
    kk = opcode & 0x00FF
    family = opcode >> 12

    def make(op: Op) -> Instruction:
        return Instruction(op, opcode, x=x, y=y, n=n, kk=kk, nnn=nnn)

    if opcode == 0x00E0:  # CLS
        return make(Op.CLS)
    elif opcode == 0x00EE:  # RET
        return make(Op.RET)
    elif family == 0x0:  # SYS addr (RCA 1802 call)
        return make(Op.SYS)
    elif family == 0x1:  # JP addr
        return make(Op.JP)
    elif family == 0x2:  # CALL addr
        return make(Op.CALL)
    elif family == 0x3:  # SE Vx, byte
        return make(Op.SE_BYTE)
    elif family == 0x4:  # SNE Vx, byte
        return make(Op.SNE_BYTE)
    elif family == 0x5 and n == 0:  # SE Vx, Vy
        return make(Op.SE_REG)
    elif family == 0x6:  # LD Vx, byte
        return make(Op.LD_BYTE)
    elif family == 0x7:  # ADD Vx, byte
        return make(Op.ADD_BYTE)
    elif family == 0x8 and n in _ALU_OPS:
        return make(_ALU_OPS[n])
    elif family == 0x9 and n == 0:  # SNE Vx, Vy
        return make(Op.SNE_REG)
    elif family == 0xA:  # LD I, addr
        return make(Op.LD_I)
    elif family == 0xB:  # JP V0, addr
        return make(Op.JP_V0)
    elif family == 0xC:  # RND Vx, byte
        return make(Op.RND)
    elif family == 0xD:  # DRW Vx, Vy, nibble
        return make(Op.DRW)
    elif family == 0xE and kk == 0x9E:  # SKP Vx
        return make(Op.SKP)
    elif family == 0xE and kk == 0xA1:  # SKNP Vx
        return make(Op.SKNP)
    elif family == 0xF and kk in _MISC_OPS:
        return make(_MISC_OPS[kk])
    return make(Op.UNKNOWN)
