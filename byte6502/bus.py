"""A 16-bit address bus that routes reads and writes to attached peripherals."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

ADDRESS_SPACE = 1 << 16
_MAX_ADDR = ADDRESS_SPACE - 1


class Peripheral(ABC):
    """A device mapped onto the bus; addresses are relative to its range."""

    @abstractmethod
    def read(self, addr: int) -> int:
        """Return the byte at ``addr``."""

    @abstractmethod
    def write(self, addr: int, byte: int) -> None:
        """Store ``byte`` at ``addr``."""


@dataclass
class _Mapping:
    lo: int
    hi: int
    peripheral: Peripheral

    def handles(self, addr: int) -> bool:
        return self.lo <= addr <= self.hi

    def overlaps(self, lo: int, hi: int) -> bool:
        return lo < self.hi and hi > self.lo


class Bus:
    """Routes accesses to peripherals and keeps a mirror of every byte written."""

    def __init__(self) -> None:
        self._mirror = bytearray(ADDRESS_SPACE)
        self._mappings: list[_Mapping] = []

    def peripheral_index(self, addr: int) -> Optional[tuple[int, int]]:
        """Return (index, offset) of the peripheral handling ``addr``, or None."""
        for index, mapping in enumerate(self._mappings):
            if mapping.handles(addr):
                return index, addr - mapping.lo
        return None

    def _locate(self, addr: int) -> Optional[tuple[Peripheral, int]]:
        found = self.peripheral_index(addr)
        if found is None:
            return None
        index, offset = found
        return self._mappings[index].peripheral, offset

    def read(self, addr: int) -> int:
        """Read a byte; unmapped addresses read as zero."""
        found = self._locate(addr)
        if found is None:
            return 0
        peripheral, offset = found
        return peripheral.read(offset)

    def write(self, addr: int, byte: int) -> None:
        """Write a byte to the mirror and to the peripheral mapped there, if any."""
        self._mirror[addr] = byte
        found = self._locate(addr)
        if found is not None:
            peripheral, offset = found
            peripheral.write(offset, byte)

    def read_u16(self, addr: int) -> int:
        """Read a little-endian word from the peripheral mapped at ``addr``."""
        found = self._locate(addr)
        if found is None:
            return 0
        peripheral, offset = found
        hi = peripheral.read((offset + 1) & _MAX_ADDR)
        lo = peripheral.read(offset)
        return (hi << 8) | lo

    def write_u16(self, addr: int, data: int) -> None:
        """Write a little-endian word to the peripheral mapped at ``addr``."""
        found = self._locate(addr)
        if found is None:
            return
        peripheral, offset = found
        peripheral.write(offset, data & 0xFF)
        peripheral.write((offset + 1) & _MAX_ADDR, (data >> 8) & 0xFF)

    def attach(self, lo: int, hi: int, peripheral: Peripheral) -> None:
        """Map ``peripheral`` onto ``lo..=hi``; raise ValueError on overlap."""
        for mapping in self._mappings:
            if mapping.overlaps(lo, hi):
                raise ValueError(
                    f"overlapping ranges: [{lo:x}:{hi:x}] "
                    f"and [{mapping.lo:x}:{mapping.hi:x}]"
                )
        self._mappings.append(_Mapping(lo, hi, peripheral))

    def memory_region(self, start: int, size: int) -> bytes:
        """Return mirrored bytes from ``start`` through ``start + size``, clamped to the address space."""
        lower = min(max(start, 0), _MAX_ADDR)
        upper = min(max(lower + size, 0), _MAX_ADDR)
        return bytes(self._mirror[lower : upper + 1])