"""The 6502 instruction set: mnemonics, addressing modes and the opcode table."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class TickModifier(Enum):
    """Conditions that add cycles to an instruction's base tick count."""

    BRANCH = "Branch"
    PAGE_CROSSED = "PageCrossed"

    def __str__(self) -> str:
        return self.value


class AddressingMode(Enum):
    """The ways an instruction locates its operand."""

    IMPLIED = "Implied"
    IMMEDIATE = "Immediate"
    RELATIVE = "Relative"
    ACCUMULATOR = "Accumulator"
    ZERO_PAGE = "ZeroPage"
    ZERO_PAGE_X = "ZeroPageX"
    ZERO_PAGE_Y = "ZeroPageY"
    ABSOLUTE = "Absolute"
    ABSOLUTE_X = "AbsoluteX"
    ABSOLUTE_Y = "AbsoluteY"
    INDIRECT = "Indirect"
    INDIRECT_X = "IndirectX"
    INDIRECT_Y = "IndirectY"

    def __str__(self) -> str:
        return self.value

    @property
    def size(self) -> int:
        """Length in bytes of an instruction using this mode."""
        return _MODE_SIZES[self]


_MODE_SIZES = {
    AddressingMode.IMPLIED: 1,
    AddressingMode.ACCUMULATOR: 1,
    AddressingMode.IMMEDIATE: 2,
    AddressingMode.RELATIVE: 2,
    AddressingMode.ZERO_PAGE: 2,
    AddressingMode.ZERO_PAGE_X: 2,
    AddressingMode.ZERO_PAGE_Y: 2,
    AddressingMode.INDIRECT_X: 2,
    AddressingMode.INDIRECT_Y: 2,
    AddressingMode.ABSOLUTE: 3,
    AddressingMode.ABSOLUTE_X: 3,
    AddressingMode.ABSOLUTE_Y: 3,
    AddressingMode.INDIRECT: 3,
}


class Mnemonic(Enum):
    """Instruction names; look one up by its upper-case name with ``Mnemonic[name]``."""

    ADC = "ADC"
    AND = "AND"
    ASL = "ASL"
    BCC = "BCC"
    BCS = "BCS"
    BEQ = "BEQ"
    BIT = "BIT"
    BMI = "BMI"
    BNE = "BNE"
    BPL = "BPL"
    BRK = "BRK"
    BVC = "BVC"
    BVS = "BVS"
    CLC = "CLC"
    CLD = "CLD"
    CLI = "CLI"
    CLV = "CLV"
    CMP = "CMP"
    CPX = "CPX"
    CPY = "CPY"
    DEC = "DEC"
    DEX = "DEX"
    DEY = "DEY"
    EOR = "EOR"
    INC = "INC"
    INX = "INX"
    INY = "INY"
    JMP = "JMP"
    JSR = "JSR"
    LDA = "LDA"
    LDX = "LDX"
    LDY = "LDY"
    LSR = "LSR"
    NOP = "NOP"
    ORA = "ORA"
    PHA = "PHA"
    PHP = "PHP"
    PLA = "PLA"
    PLP = "PLP"
    ROL = "ROL"
    ROR = "ROR"
    RTI = "RTI"
    RTS = "RTS"
    SBC = "SBC"
    SEC = "SEC"
    SED = "SED"
    SEI = "SEI"
    STA = "STA"
    STX = "STX"
    STY = "STY"
    TAX = "TAX"
    TAY = "TAY"
    TSX = "TSX"
    TXA = "TXA"
    TXS = "TXS"
    TYA = "TYA"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Opcode:
    """One entry of the opcode table."""

    code: int
    size: int
    tick: int
    mnemonic: Mnemonic
    mode: AddressingMode
    tick_modifier: Optional[TickModifier] = None

    def __str__(self) -> str:
        modifier = "None" if self.tick_modifier is None else f"Some({self.tick_modifier})"
        return (
            f"{self.mnemonic}:{self.code:02x}:{self.size}:{self.tick}:"
            f"{self.mode}:{modifier}"
        )


_M = AddressingMode
_P = TickModifier.PAGE_CROSSED
_B = TickModifier.BRANCH

# (code, mnemonic, mode, base ticks, tick modifier)
_TABLE = [
    (0x69, "ADC", _M.IMMEDIATE, 2, None),
    (0x65, "ADC", _M.ZERO_PAGE, 3, None),
    (0x75, "ADC", _M.ZERO_PAGE_X, 4, None),
    (0x6D, "ADC", _M.ABSOLUTE, 4, None),
    (0x7D, "ADC", _M.ABSOLUTE_X, 4, _P),
    (0x79, "ADC", _M.ABSOLUTE_Y, 4, _P),
    (0x61, "ADC", _M.INDIRECT_X, 6, None),
    (0x71, "ADC", _M.INDIRECT_Y, 5, _P),
    (0x29, "AND", _M.IMMEDIATE, 2, None),
    (0x25, "AND", _M.ZERO_PAGE, 3, None),
    (0x35, "AND", _M.ZERO_PAGE_X, 4, None),
    (0x2D, "AND", _M.ABSOLUTE, 4, None),
    (0x3D, "AND", _M.ABSOLUTE_X, 4, _P),
    (0x39, "AND", _M.ABSOLUTE_Y, 4, _P),
    (0x21, "AND", _M.INDIRECT_X, 6, None),
    (0x31, "AND", _M.INDIRECT_Y, 5, _P),
    (0x0A, "ASL", _M.ACCUMULATOR, 2, None),
    (0x06, "ASL", _M.ZERO_PAGE, 5, None),
    (0x16, "ASL", _M.ZERO_PAGE_X, 6, None),
    (0x0E, "ASL", _M.ABSOLUTE, 6, None),
    (0x1E, "ASL", _M.ABSOLUTE_X, 7, None),
    (0x90, "BCC", _M.RELATIVE, 2, _B),
    (0xB0, "BCS", _M.RELATIVE, 2, _B),
    (0xF0, "BEQ", _M.RELATIVE, 2, _B),
    (0x30, "BMI", _M.RELATIVE, 2, _B),
    (0xD0, "BNE", _M.RELATIVE, 2, _B),
    (0x10, "BPL", _M.RELATIVE, 2, _B),
    (0x50, "BVC", _M.RELATIVE, 2, _B),
    (0x70, "BVS", _M.RELATIVE, 2, _B),
    (0x24, "BIT", _M.ZERO_PAGE, 3, None),
    (0x2C, "BIT", _M.ABSOLUTE, 4, None),
    (0x00, "BRK", _M.IMPLIED, 7, None),
    (0x18, "CLC", _M.IMPLIED, 2, None),
    (0xD8, "CLD", _M.IMPLIED, 2, None),
    (0x58, "CLI", _M.IMPLIED, 2, None),
    (0xB8, "CLV", _M.IMPLIED, 2, None),
    (0xC9, "CMP", _M.IMMEDIATE, 2, None),
    (0xC5, "CMP", _M.ZERO_PAGE, 3, None),
    (0xD5, "CMP", _M.ZERO_PAGE_X, 4, None),
    (0xCD, "CMP", _M.ABSOLUTE, 4, None),
    (0xDD, "CMP", _M.ABSOLUTE_X, 4, _P),
    (0xD9, "CMP", _M.ABSOLUTE_Y, 4, _P),
    (0xC1, "CMP", _M.INDIRECT_X, 6, None),
    (0xD1, "CMP", _M.INDIRECT_Y, 5, _P),
    (0xE0, "CPX", _M.IMMEDIATE, 2, None),
    (0xE4, "CPX", _M.ZERO_PAGE, 3, None),
    (0xEC, "CPX", _M.ABSOLUTE, 4, None),
    (0xC0, "CPY", _M.IMMEDIATE, 2, None),
    (0xC4, "CPY", _M.ZERO_PAGE, 3, None),
    (0xCC, "CPY", _M.ABSOLUTE, 4, None),
    (0xC6, "DEC", _M.ZERO_PAGE, 5, None),
    (0xD6, "DEC", _M.ZERO_PAGE_X, 6, None),
    (0xCE, "DEC", _M.ABSOLUTE, 6, None),
    (0xDE, "DEC", _M.ABSOLUTE_X, 7, None),
    (0xCA, "DEX", _M.IMPLIED, 2, None),
    (0x88, "DEY", _M.IMPLIED, 2, None),
    (0x49, "EOR", _M.IMMEDIATE, 2, None),
    (0x45, "EOR", _M.ZERO_PAGE, 3, None),
    (0x55, "EOR", _M.ZERO_PAGE_X, 4, None),
    (0x4D, "EOR", _M.ABSOLUTE, 4, None),
    (0x5D, "EOR", _M.ABSOLUTE_X, 4, _P),
    (0x59, "EOR", _M.ABSOLUTE_Y, 4, _P),
    (0x41, "EOR", _M.INDIRECT_X, 6, None),
    (0x51, "EOR", _M.INDIRECT_Y, 5, _P),
    (0xE6, "INC", _M.ZERO_PAGE, 5, None),
    (0xF6, "INC", _M.ZERO_PAGE_X, 6, None),
    (0xEE, "INC", _M.ABSOLUTE, 6, None),
    (0xFE, "INC", _M.ABSOLUTE_X, 7, None),
    (0xE8, "INX", _M.IMPLIED, 2, None),
    (0xC8, "INY", _M.IMPLIED, 2, None),
    (0x4C, "JMP", _M.ABSOLUTE, 3, None),
    (0x6C, "JMP", _M.INDIRECT, 5, None),
    (0x20, "JSR", _M.ABSOLUTE, 6, None),
    (0xA9, "LDA", _M.IMMEDIATE, 2, None),
    (0xA5, "LDA", _M.ZERO_PAGE, 3, None),
    (0xB5, "LDA", _M.ZERO_PAGE_X, 4, None),
    (0xAD, "LDA", _M.ABSOLUTE, 4, None),
    (0xBD, "LDA", _M.ABSOLUTE_X, 4, _P),
    (0xB9, "LDA", _M.ABSOLUTE_Y, 4, _P),
    (0xA1, "LDA", _M.INDIRECT_X, 6, None),
    (0xB1, "LDA", _M.INDIRECT_Y, 5, _P),
    (0xA2, "LDX", _M.IMMEDIATE, 2, None),
    (0xA6, "LDX", _M.ZERO_PAGE, 3, None),
    (0xB6, "LDX", _M.ZERO_PAGE_Y, 4, None),
    (0xAE, "LDX", _M.ABSOLUTE, 4, None),
    (0xBE, "LDX", _M.ABSOLUTE_Y, 4, _P),
    (0xA0, "LDY", _M.IMMEDIATE, 2, None),
    (0xA4, "LDY", _M.ZERO_PAGE, 3, None),
    (0xB4, "LDY", _M.ZERO_PAGE_X, 4, None),
    (0xAC, "LDY", _M.ABSOLUTE, 4, None),
    (0xBC, "LDY", _M.ABSOLUTE_X, 4, _P),
    (0x4A, "LSR", _M.ACCUMULATOR, 2, None),
    (0x46, "LSR", _M.ZERO_PAGE, 5, None),
    (0x56, "LSR", _M.ZERO_PAGE_X, 6, None),
    (0x4E, "LSR", _M.ABSOLUTE, 6, None),
    (0x5E, "LSR", _M.ABSOLUTE_X, 7, None),
    (0xEA, "NOP", _M.IMPLIED, 2, None),
    (0x09, "ORA", _M.IMMEDIATE, 2, None),
    (0x05, "ORA", _M.ZERO_PAGE, 3, None),
    (0x15, "ORA", _M.ZERO_PAGE_X, 4, None),
    (0x0D, "ORA", _M.ABSOLUTE, 4, None),
    (0x1D, "ORA", _M.ABSOLUTE_X, 4, _P),
    (0x19, "ORA", _M.ABSOLUTE_Y, 4, _P),
    (0x01, "ORA", _M.INDIRECT_X, 6, None),
    (0x11, "ORA", _M.INDIRECT_Y, 5, _P),
    (0x48, "PHA", _M.IMPLIED, 3, None),
    (0x08, "PHP", _M.IMPLIED, 3, None),
    (0x68, "PLA", _M.IMPLIED, 4, None),
    (0x28, "PLP", _M.IMPLIED, 4, None),
    (0x2A, "ROL", _M.ACCUMULATOR, 2, None),
    (0x26, "ROL", _M.ZERO_PAGE, 5, None),
    (0x36, "ROL", _M.ZERO_PAGE_X, 6, None),
    (0x2E, "ROL", _M.ABSOLUTE, 6, None),
    (0x3E, "ROL", _M.ABSOLUTE_X, 7, None),
    (0x6A, "ROR", _M.ACCUMULATOR, 2, None),
    (0x66, "ROR", _M.ZERO_PAGE, 5, None),
    (0x76, "ROR", _M.ZERO_PAGE_X, 6, None),
    (0x6E, "ROR", _M.ABSOLUTE, 6, None),
    (0x7E, "ROR", _M.ABSOLUTE_X, 7, None),
    (0x40, "RTI", _M.IMPLIED, 6, None),
    (0x60, "RTS", _M.IMPLIED, 6, None),
    (0xE9, "SBC", _M.IMMEDIATE, 2, None),
    (0xE5, "SBC", _M.ZERO_PAGE, 3, None),
    (0xF5, "SBC", _M.ZERO_PAGE_X, 4, None),
    (0xED, "SBC", _M.ABSOLUTE, 4, None),
    (0xFD, "SBC", _M.ABSOLUTE_X, 4, _P),
    (0xF9, "SBC", _M.ABSOLUTE_Y, 4, _P),
    (0xE1, "SBC", _M.INDIRECT_X, 6, None),
    (0xF1, "SBC", _M.INDIRECT_Y, 5, _P),
    (0x38, "SEC", _M.IMPLIED, 2, None),
    (0xF8, "SED", _M.IMPLIED, 2, None),
    (0x78, "SEI", _M.IMPLIED, 2, None),
    (0x85, "STA", _M.ZERO_PAGE, 3, None),
    (0x95, "STA", _M.ZERO_PAGE_X, 4, None),
    (0x8D, "STA", _M.ABSOLUTE, 4, None),
    (0x9D, "STA", _M.ABSOLUTE_X, 5, None),
    (0x99, "STA", _M.ABSOLUTE_Y, 5, None),
    (0x81, "STA", _M.INDIRECT_X, 6, None),
    (0x91, "STA", _M.INDIRECT_Y, 6, None),
    (0x86, "STX", _M.ZERO_PAGE, 3, None),
    (0x96, "STX", _M.ZERO_PAGE_Y, 4, None),
    (0x8E, "STX", _M.ABSOLUTE, 4, None),
    (0x84, "STY", _M.ZERO_PAGE, 3, None),
    (0x94, "STY", _M.ZERO_PAGE_X, 4, None),
    (0x8C, "STY", _M.ABSOLUTE, 4, None),
    (0xAA, "TAX", _M.IMPLIED, 2, None),
    (0xA8, "TAY", _M.IMPLIED, 2, None),
    (0xBA, "TSX", _M.IMPLIED, 2, None),
    (0x8A, "TXA", _M.IMPLIED, 2, None),
    (0x9A, "TXS", _M.IMPLIED, 2, None),
    (0x98, "TYA", _M.IMPLIED, 2, None),
]

OPCODES: dict[int, Opcode] = {
    code: Opcode(
        code=code,
        size=mode.size,
        tick=tick,
        mnemonic=Mnemonic[name],
        mode=mode,
        tick_modifier=modifier,
    )
    for code, name, mode, tick, modifier in _TABLE
}

_BY_NAME_AND_MODE: dict[tuple[Mnemonic, AddressingMode], Opcode] = {
    (op.mnemonic, op.mode): op for op in OPCODES.values()
}


def decode(code: int) -> Optional[Opcode]:
    """Return the opcode for the byte ``code``, or None if it is not an instruction."""
    return OPCODES.get(code)


def get_opcode(mnemonic: Mnemonic, mode: AddressingMode) -> Optional[Opcode]:
    """Return the opcode encoding ``mnemonic`` in ``mode``, or None if there is none."""
    return _BY_NAME_AND_MODE.get((mnemonic, mode))