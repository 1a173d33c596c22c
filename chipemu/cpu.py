from __future__ import annotations

import random
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Tuple

from .decoder import Instruction, Op
from .display import Display
from .errors import (AddressOutOfRange, StackOverflow, StackUnderflow,
                     UnknownOpcode)
from .keyboard import Keyboard
from .memory import MEM_SIZE, START_ADDRESS, Memory, font_address
from .timers import Timers

NUM_REGISTERS = 16
STACK_SIZE = 16


def default_rng(seed=None) -> Callable[[], int]:
    """A byte source with its own generator, independent of other CPUs."""
    gen = random.Random(seed)
    return lambda: gen.randint(0, 255)


# ops exempt from the up-front PC + 2 bounds check: the jumps set PC
# themselves, UNKNOWN faults on its own
_NO_ADVANCE = (Op.JP, Op.JP_V0, Op.CALL, Op.RET, Op.UNKNOWN)


@dataclass(frozen=True)
class CpuSnapshot:
    """Read-only view of the registers for renderers."""
    pc: int
    i: int
    sp: int
    registers: Tuple[int, ...]
    stack: Tuple[int, ...]
    instruction: Optional[Instruction]


@dataclass
class CPU:
    # if True, FX55/FX65 increment I (original quirk)
    legacy_store: bool = False
    # returns a uniformly distributed byte; swap in a fixed sequence for tests
    rng: Callable[[], int] = field(default_factory=default_rng)
    V: List[int] = field(default_factory=lambda: [0] * NUM_REGISTERS)
    I: int = 0
    pc: int = START_ADDRESS
    sp: int = 0
    stack: List[int] = field(default_factory=lambda: [0] * STACK_SIZE)
    instr: Optional[Instruction] = None  # last fetched instruction

    def snapshot(self) -> CpuSnapshot:
        return CpuSnapshot(self.pc, self.I, self.sp, tuple(self.V),
                           tuple(self.stack[:self.sp]), self.instr)

    # =============== Execute ===============
    def execute(self, instr: Instruction, memory: Memory, display: Display,
                keyboard: Keyboard, timers: Timers):
        """Apply ``instr`` and move PC on.

        Faults are raised before anything is modified, so a failed
        instruction leaves the machine as it found it.
        """
        op = instr.op
        x, y = instr.x, instr.y
        V = self.V
        next_pc = self.pc + 2
        if op not in _NO_ADVANCE and next_pc >= MEM_SIZE:
            raise AddressOutOfRange(next_pc)

        if op is Op.CLS:
            display.clear()
        elif op is Op.RET:
            if self.sp == 0:
                raise StackUnderflow(self.pc)
            self.sp -= 1
            next_pc = self.stack[self.sp]
        elif op is Op.SYS:  # ignored, RCA 1802 call
            pass
        elif op is Op.JP:
            next_pc = instr.nnn
        elif op is Op.CALL:
            if self.sp == STACK_SIZE:
                raise StackOverflow(self.pc)
            if next_pc >= MEM_SIZE:  # return address would be off the end
                raise AddressOutOfRange(next_pc)
            self.stack[self.sp] = self.pc + 2
            self.sp += 1
            next_pc = instr.nnn
        elif op is Op.SE_BYTE:
            if V[x] == instr.kk:
                next_pc += 2
        elif op is Op.SNE_BYTE:
            if V[x] != instr.kk:
                next_pc += 2
        elif op is Op.SE_REG:
            if V[x] == V[y]:
                next_pc += 2
        elif op is Op.LD_BYTE:
            V[x] = instr.kk
        elif op is Op.ADD_BYTE:  # no carry flag
            V[x] = (V[x] + instr.kk) & 0xFF
        elif op is Op.LD_REG:
            V[x] = V[y]
        elif op is Op.OR:
            V[x] = V[x] | V[y]
        elif op is Op.AND:
            V[x] = V[x] & V[y]
        elif op is Op.XOR:
            V[x] = V[x] ^ V[y]
        elif op is Op.ADD_REG:
            total = V[x] + V[y]
            V[x] = total & 0xFF
            V[0xF] = 1 if total > 0xFF else 0
        elif op is Op.SUB:  # Vx = Vx - Vy
            flag = 1 if V[x] >= V[y] else 0
            V[x] = (V[x] - V[y]) & 0xFF
            V[0xF] = flag
        elif op is Op.SHR:
            flag = V[x] & 0x1
            V[x] = V[x] >> 1
            V[0xF] = flag
        elif op is Op.SUBN:  # Vx = Vy - Vx
            flag = 1 if V[y] >= V[x] else 0
            V[x] = (V[y] - V[x]) & 0xFF
            V[0xF] = flag
        elif op is Op.SHL:
            flag = (V[x] >> 7) & 0x1
            V[x] = (V[x] << 1) & 0xFF
            V[0xF] = flag
        elif op is Op.SNE_REG:
            if V[x] != V[y]:
                next_pc += 2
        elif op is Op.LD_I:
            self.I = instr.nnn
        elif op is Op.JP_V0:
            next_pc = instr.nnn + V[0]
        elif op is Op.RND:
            V[x] = self.rng() & instr.kk
        elif op is Op.DRW:
            sprite = memory.read_block(self.I, instr.n)
            collision = display.draw(V[x], V[y], sprite)
            V[0xF] = 1 if collision else 0
        elif op is Op.SKP:
            if keyboard.is_pressed(V[x]):
                next_pc += 2
        elif op is Op.SKNP:
            if not keyboard.is_pressed(V[x]):
                next_pc += 2
        elif op is Op.LD_VX_DT:
            V[x] = timers.delay
        elif op is Op.LD_VX_K:
            key = keyboard.pressed_key()
            if key is None:
                # stall: the driving loop fetches this instruction again
                next_pc = self.pc
            else:
                V[x] = key
        elif op is Op.LD_DT_VX:
            timers.delay = V[x]
        elif op is Op.LD_ST_VX:
            timers.sound = V[x]
        elif op is Op.ADD_I:
            self.I = (self.I + V[x]) & 0xFFFF
        elif op is Op.LD_F:
            self.I = font_address(V[x])
        elif op is Op.LD_B:
            val = V[x]
            memory.read_block(self.I, 3)  # range check before writing
            memory.write(self.I, val // 100)
            memory.write(self.I + 1, (val // 10) % 10)
            memory.write(self.I + 2, val % 10)
        elif op is Op.LD_MEM_VX:
            memory.read_block(self.I, x + 1)
            for i in range(x + 1):
                memory.write(self.I + i, V[i])
            if self.legacy_store:
                self.I = (self.I + x + 1) & 0xFFFF
        elif op is Op.LD_VX_MEM:
            values = memory.read_block(self.I, x + 1)
            V[:x + 1] = list(values)
            if self.legacy_store:
                self.I = (self.I + x + 1) & 0xFFFF
        else:
            raise UnknownOpcode(instr.raw, self.pc)

        # only skips and JP V0 get here with an unchecked target; neither
        # has modified anything yet
        if next_pc >= MEM_SIZE:
            raise AddressOutOfRange(next_pc)
        self.pc = next_pc
