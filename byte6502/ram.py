"""A flat 64 KiB RAM peripheral."""

from __future__ import annotations

from byte6502.bus import ADDRESS_SPACE, Peripheral


class Ram(Peripheral):
    """Zero-initialised memory covering the whole address space."""

    def __init__(self) -> None:
        self._data = bytearray(ADDRESS_SPACE)

    def read(self, addr: int) -> int:
        return self._data[addr]

    def write(self, addr: int, byte: int) -> None:
        self._data[addr] = byte