"""A 6502 processor core driven through a Bus."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntFlag
from typing import Callable, Optional

from byte6502.bus import Bus
from byte6502.opcodes import AddressingMode, Mnemonic, Opcode, decode

STACK_BASE = 0x0100
NMI_VECTOR = 0xFFFA
RST_VECTOR = 0xFFFC
IRQ_VECTOR = 0xFFFE


class UnrecognizedOpcodeError(Exception):
    """Raised when the byte at the program counter is not a known instruction."""

    def __init__(self, code: int) -> None:
        super().__init__(f"Unrecognized Opcode: 0x{code:02X}")
        self.code = code


class Flags(IntFlag):
    """Bits of the processor status register."""

    NEGATIVE = 0b1000_0000
    OVERFLOW = 0b0100_0000
    UNUSED = 0b0010_0000
    BREAK = 0b0001_0000
    DECIMAL = 0b0000_1000
    INTERRUPT = 0b0000_0100
    ZERO = 0b0000_0010
    CARRY = 0b0000_0001


class Interrupt(Enum):
    """The kinds of interrupt the processor services."""

    IRQ = "IRQ"
    NMI = "NMI"
    BRK = "BRK"
    RST = "RST"


@dataclass
class Registers:
    """The processor's register file."""

    sp: int = 0
    pc: int = 0
    x: int = 0
    y: int = 0
    a: int = 0
    p: Flags = field(default=Flags(0))


def _signed(byte: int) -> int:
    return byte - 0x100 if byte & 0x80 else byte


class CPU:
    """Executes 6502 instructions against the attached bus."""

    def __init__(self, bus: Optional[Bus] = None) -> None:
        self.bus = bus if bus is not None else Bus()
        self.cycle = 0
        self.reg = Registers()

        M = Mnemonic
        self._handlers: dict[Mnemonic, Callable[[Opcode], None]] = {
            M.ADC: self._adc,
            M.AND: self._and,
            M.ASL: lambda op: self._modify(op, self._asl_value),
            M.BIT: self._bit,
            M.CMP: lambda op: self._compare(op, self.reg.a),
            M.CPX: lambda op: self._compare(op, self.reg.x),
            M.CPY: lambda op: self._compare(op, self.reg.y),
            M.DEC: lambda op: self._step_memory(op, -1),
            M.EOR: self._eor,
            M.INC: lambda op: self._step_memory(op, 1),
            M.JMP: self._jmp,
            M.JSR: self._jsr,
            M.LDA: lambda op: self._load(op, "a"),
            M.LDX: lambda op: self._load(op, "x"),
            M.LDY: lambda op: self._load(op, "y"),
            M.LSR: lambda op: self._modify(op, self._lsr_value),
            M.ORA: self._ora,
            M.ROL: lambda op: self._modify(op, self._rol_value),
            M.ROR: lambda op: self._modify(op, self._ror_value),
            M.SBC: self._sbc,
            M.STA: lambda op: self._store(op, self.reg.a),
            M.STX: lambda op: self._store(op, self.reg.x),
            M.STY: lambda op: self._store(op, self.reg.y),
            M.DEX: lambda op: self._step_register("x", -1),
            M.DEY: lambda op: self._step_register("y", -1),
            M.INX: lambda op: self._step_register("x", 1),
            M.INY: lambda op: self._step_register("y", 1),
            M.PHA: lambda op: self.stack_push(self.reg.a),
            M.PHP: lambda op: self.stack_push(int(self.reg.p) | 0x30),
            M.PLA: self._pla,
            M.PLP: self._plp,
            M.RTI: self._rti,
            M.RTS: self._rts,
            M.TAX: lambda op: self._transfer("a", "x"),
            M.TAY: lambda op: self._transfer("a", "y"),
            M.TSX: lambda op: self._transfer("sp", "x"),
            M.TXA: lambda op: self._transfer("x", "a"),
            M.TYA: lambda op: self._transfer("y", "a"),
            M.TXS: self._txs,
            M.NOP: lambda op: None,
        }
        self._branches: dict[Mnemonic, tuple[Flags, bool]] = {
            M.BCC: (Flags.CARRY, False),
            M.BCS: (Flags.CARRY, True),
            M.BEQ: (Flags.ZERO, True),
            M.BNE: (Flags.ZERO, False),
            M.BPL: (Flags.NEGATIVE, False),
            M.BMI: (Flags.NEGATIVE, True),
            M.BVS: (Flags.OVERFLOW, True),
            M.BVC: (Flags.OVERFLOW, False),
        }
        self._flag_ops: dict[Mnemonic, tuple[Flags, bool]] = {
            M.CLC: (Flags.CARRY, False),
            M.CLD: (Flags.DECIMAL, False),
            M.CLI: (Flags.INTERRUPT, False),
            M.CLV: (Flags.OVERFLOW, False),
            M.SEC: (Flags.CARRY, True),
            M.SED: (Flags.DECIMAL, True),
            M.SEI: (Flags.INTERRUPT, True),
        }

    # --- public interface -------------------------------------------------

    def load(self, program: bytes, start: int) -> None:
        """Write ``program`` onto the bus starting at ``start``."""
        for offset, byte in enumerate(program):
            self.bus.write((start + offset) & 0xFFFF, byte)

    def interrupt(self, kind: Interrupt) -> None:
        """Service an interrupt, jumping through the matching vector."""
        if kind is Interrupt.BRK:
            pc, vector = (self.reg.pc + 1) & 0xFFFF, IRQ_VECTOR
        elif kind is Interrupt.IRQ:
            pc, vector = self.reg.pc, IRQ_VECTOR
        elif kind is Interrupt.NMI:
            pc, vector = self.reg.pc, NMI_VECTOR
        else:
            pc, vector = 0, RST_VECTOR

        if kind is not Interrupt.RST:
            status = int(self.reg.p) | Flags.UNUSED
            if kind is Interrupt.BRK:
                status |= Flags.BREAK
            else:
                status &= ~int(Flags.BREAK) & 0xFF
            self.stack_push_u16(pc)
            self.stack_push(int(status))
            self.set_flag(Flags.INTERRUPT, True)

        self.reg.pc = self.bus.read_u16(vector)
        self.cycle += 7

    def step(self) -> None:
        """Fetch, decode and execute one instruction."""
        code = self.bus.read(self.reg.pc)
        self.reg.pc = (self.reg.pc + 1) & 0xFFFF
        pc_copy = self.reg.pc

        opcode = decode(code)
        if opcode is None:
            raise UnrecognizedOpcodeError(code)

        mnemonic = opcode.mnemonic
        if mnemonic is Mnemonic.BRK:
            self.interrupt(Interrupt.BRK)
            return
        if mnemonic in self._branches:
            flag, expected = self._branches[mnemonic]
            self._branch(opcode, (flag in self.reg.p) == expected)
        elif mnemonic in self._flag_ops:
            self.set_flag(*self._flag_ops[mnemonic])
        else:
            handler = self._handlers.get(mnemonic)
            if handler is not None:
                handler(opcode)

        if pc_copy == self.reg.pc:
            self.reg.pc = (self.reg.pc + opcode.size - 1) & 0xFFFF

        self.cycle += opcode.tick

    def stack_push(self, byte: int) -> None:
        """Push a byte onto the stack page."""
        self.bus.write((STACK_BASE + self.reg.sp) & 0xFFFF, byte)
        self.reg.sp = (self.reg.sp - 1) & 0xFF

    def stack_push_u16(self, data: int) -> None:
        """Push a word, high byte first."""
        self.stack_push((data >> 8) & 0xFF)
        self.stack_push(data & 0xFF)

    def stack_pull(self) -> int:
        """Pull a byte from the stack page."""
        self.reg.sp = (self.reg.sp + 1) & 0xFF
        return self.bus.read((STACK_BASE + self.reg.sp) & 0xFFFF)

    def stack_pull_u16(self) -> int:
        """Pull a word, low byte first."""
        lo = self.stack_pull()
        hi = self.stack_pull()
        return (hi << 8) | lo

    def set_flag(self, flag: Flags, value: bool) -> None:
        """Set or clear ``flag`` in the status register."""
        bits = int(self.reg.p)
        bits = bits | int(flag) if value else bits & ~int(flag) & 0xFF
        self.reg.p = Flags(bits)

    # --- helpers ------------------------------------------------------------

    def _update_nz(self, value: int) -> None:
        self.set_flag(Flags.ZERO, value == 0)
        self.set_flag(Flags.NEGATIVE, bool(value & 0x80))

    def _indexed_with_penalty(self, lo: int, hi: int, index: int) -> int:
        addr = (((hi << 8) | lo) + index) & 0xFFFF
        if hi != addr >> 8:
            self.cycle += 1
        return addr

    def _operand(self, opcode: Opcode) -> Optional[int]:
        """Effective address of the operand, or None for the accumulator."""
        pc = self.reg.pc
        bus = self.bus
        mode = opcode.mode

        if mode in (AddressingMode.RELATIVE, AddressingMode.IMMEDIATE):
            return pc
        if mode is AddressingMode.ACCUMULATOR:
            return None
        if mode is AddressingMode.ZERO_PAGE:
            return bus.read(pc)
        if mode is AddressingMode.ZERO_PAGE_X:
            return (bus.read(pc) + self.reg.x) & 0xFF
        if mode is AddressingMode.ZERO_PAGE_Y:
            return (bus.read(pc) + self.reg.y) & 0xFF
        if mode is AddressingMode.ABSOLUTE:
            return bus.read_u16(pc)
        if mode in (AddressingMode.ABSOLUTE_X, AddressingMode.ABSOLUTE_Y):
            index = self.reg.x if mode is AddressingMode.ABSOLUTE_X else self.reg.y
            if opcode.tick_modifier is not None:
                lo = bus.read(pc)
                hi = bus.read((pc + 1) & 0xFFFF)
                return self._indexed_with_penalty(lo, hi, index)
            return (bus.read_u16(pc) + index) & 0xFFFF
        if mode is AddressingMode.INDIRECT:
            return bus.read_u16(bus.read_u16(pc))
        if mode is AddressingMode.INDIRECT_X:
            return bus.read_u16((bus.read(pc) + self.reg.x) & 0xFF)
        if mode is AddressingMode.INDIRECT_Y:
            pointer = bus.read(pc)
            if opcode.tick_modifier is not None:
                lo = bus.read(pointer)
                hi = bus.read((pointer + 1) & 0xFFFF)
                return self._indexed_with_penalty(lo, hi, self.reg.y)
            return (bus.read_u16(pointer) + self.reg.y) & 0xFFFF
        raise ValueError(f"addressing mode {mode} has no operand")

    def _operand_value(self, opcode: Opcode) -> int:
        addr = self._operand(opcode)
        return self.reg.a if addr is None else self.bus.read(addr)

    # --- read-modify-write shifts -------------------------------------------

    def _asl_value(self, value: int) -> int:
        self.set_flag(Flags.CARRY, value >> 7 == 1)
        result = (value << 1) & 0xFF
        self._update_nz(result)
        return result

    def _lsr_value(self, value: int) -> int:
        self.set_flag(Flags.CARRY, bool(value & 0x01))
        result = value >> 1
        self.set_flag(Flags.ZERO, value == 0)
        self.set_flag(Flags.NEGATIVE, False)
        return result

    def _rol_value(self, value: int) -> int:
        result = ((value << 1) & 0xFE) | (1 if Flags.CARRY in self.reg.p else 0)
        self.set_flag(Flags.CARRY, bool(value & 0x80))
        self._update_nz(result)
        return result

    def _ror_value(self, value: int) -> int:
        result = (value >> 1) | (0x80 if Flags.CARRY in self.reg.p else 0)
        self.set_flag(Flags.CARRY, bool(value & 0x01))
        self._update_nz(result)
        return result

    def _modify(self, opcode: Opcode, operation: Callable[[int], int]) -> None:
        addr = self._operand(opcode)
        if addr is None:
            self.reg.a = operation(self.reg.a)
        else:
            self.bus.write(addr, operation(self.bus.read(addr)))

    # --- instructions -------------------------------------------------------

    def _adc(self, opcode: Opcode) -> None:
        m = self.reg.a
        c = 1 if Flags.CARRY in self.reg.p else 0
        n = self._operand_value(opcode)

        if Flags.DECIMAL in self.reg.p:
            lo = (m & 0x0F) + (n & 0x0F) + c
            hi = (m & 0xF0) + (n & 0xF0)
            if lo > 0x09:
                lo = (lo + 0x06) & 0x0F
                hi += 0x10
            self.set_flag(Flags.OVERFLOW, bool(~(m ^ n) & (m ^ hi) & 0x80))
            if hi > 0x90:
                hi += 0x60
            self.set_flag(Flags.CARRY, hi >> 8 > 0)
            self.reg.a = (hi | lo) & 0xFF
        else:
            total = m + n + c
            self.set_flag(Flags.CARRY, total > 0xFF)
            self.set_flag(Flags.OVERFLOW, bool(~(m ^ n) & (m ^ total) & 0x80))
            self.reg.a = total & 0xFF

        self._update_nz(self.reg.a)

    def _sbc(self, opcode: Opcode) -> None:
        m = self.reg.a
        c = 1 if Flags.CARRY in self.reg.p else 0
        n = self._operand_value(opcode)

        total = m + (~n & 0xFF) + c
        self._update_nz(total & 0xFF)
        self.set_flag(Flags.CARRY, total > 0xFF)
        self.set_flag(Flags.OVERFLOW, bool((m ^ n) & (m ^ (total & 0xFF)) & 0x80))

        if Flags.DECIMAL in self.reg.p:
            lo = (m & 0x0F) - (n & 0x0F) + c - 1
            hi = (m & 0xF0) - (n & 0xF0)
            if lo < 0:
                lo = (lo - 0x06) & 0x0F
                hi -= 0x10
            if hi < 0:
                hi = (hi - 0x60) & 0xF0
            total = (hi | lo) & 0xFFFF

        self.reg.a = total & 0xFF
        self._update_nz(self.reg.a)

    def _and(self, opcode: Opcode) -> None:
        self.reg.a &= self._operand_value(opcode)
        self._update_nz(self.reg.a)

    def _eor(self, opcode: Opcode) -> None:
        self.reg.a ^= self._operand_value(opcode)
        self._update_nz(self.reg.a)

    def _ora(self, opcode: Opcode) -> None:
        self.reg.a |= self._operand_value(opcode)
        self._update_nz(self.reg.a)

    def _bit(self, opcode: Opcode) -> None:
        operand = self._operand_value(opcode)
        self._update_nz(self.reg.a & operand)
        self.set_flag(Flags.NEGATIVE, bool(operand & 0x80))
        self.set_flag(Flags.OVERFLOW, bool(operand & 0x40))

    def _branch(self, opcode: Opcode, condition: bool) -> None:
        if not condition:
            return
        self.cycle += 1
        addr = self._operand(opcode)
        page = self.reg.pc >> 8
        offset = _signed(self.bus.read(addr))
        self.reg.pc = (self.reg.pc + 1 + offset) & 0xFFFF
        if page != self.reg.pc >> 8:
            self.cycle += 1

    def _compare(self, opcode: Opcode, register: int) -> None:
        operand = self._operand_value(opcode)
        self.set_flag(Flags.ZERO, register == operand)
        self.set_flag(Flags.CARRY, register >= operand)
        self.set_flag(Flags.NEGATIVE, bool(((register - operand) & 0xFF) & 0x80))

    def _step_memory(self, opcode: Opcode, delta: int) -> None:
        addr = self._operand(opcode)
        value = (self.bus.read(addr) + delta) & 0xFF
        self.bus.write(addr, value)
        self._update_nz(value)

    def _step_register(self, name: str, delta: int) -> None:
        value = (getattr(self.reg, name) + delta) & 0xFF
        setattr(self.reg, name, value)
        self._update_nz(value)

    def _jmp(self, opcode: Opcode) -> None:
        operand = self.bus.read_u16(self.reg.pc)
        if opcode.code != 0x6C:
            self.reg.pc = operand
        elif operand & 0xFF != 0xFF:
            self.reg.pc = self.bus.read_u16(operand)
        else:
            # the indirect pointer's high byte is fetched without crossing the page
            lo = self.bus.read(operand)
            hi = self.bus.read(operand & 0xFF00)
            self.reg.pc = (hi << 8) | lo

    def _jsr(self, opcode: Opcode) -> None:
        addr = self._operand(opcode)
        self.stack_push_u16((self.reg.pc + 1) & 0xFFFF)
        self.reg.pc = addr

    def _load(self, opcode: Opcode, name: str) -> None:
        value = self._operand_value(opcode)
        setattr(self.reg, name, value)
        self._update_nz(value)

    def _store(self, opcode: Opcode, value: int) -> None:
        self.bus.write(self._operand(opcode), value)

    def _pla(self, opcode: Opcode) -> None:
        self.reg.a = self.stack_pull()
        self._update_nz(self.reg.a)

    def _plp(self, opcode: Opcode) -> None:
        self.reg.p = Flags(self.stack_pull() | 0x30)

    def _rti(self, opcode: Opcode) -> None:
        self.reg.p = Flags(self.stack_pull() | 0x30)
        self.reg.pc = self.stack_pull_u16()

    def _rts(self, opcode: Opcode) -> None:
        self.reg.pc = (self.stack_pull_u16() + 1) & 0xFFFF

    def _transfer(self, source: str, target: str) -> None:
        value = getattr(self.reg, source)
        setattr(self.reg, target, value)
        self._update_nz(value)

    def _txs(self, opcode: Opcode) -> None:
        self.reg.sp = self.reg.x