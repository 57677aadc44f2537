"""Text layout for a hex dump of emulator memory."""

from __future__ import annotations

import string
from typing import Optional

_HEX_DIGITS = frozenset(string.hexdigits)
_ROW_WIDTH = 16


def _parse_hex(text: str, bits: int) -> Optional[int]:
    while text.startswith("0x"):
        text = text[2:]
    if text.startswith("+"):
        text = text[1:]
    if not text or not set(text) <= _HEX_DIGITS:
        return None
    value = int(text, 16)
    if value >= 1 << bits:
        return None
    return value


def parse_range(addr_text: str, size_text: str) -> Optional[tuple[int, int]]:
    """Parse hex start address and size into (start, size - 1), or None if invalid."""
    start = _parse_hex(addr_text, 16)
    size = _parse_hex(size_text, 32)
    if start is None or size is None:
        return None
    return start, max(size - 1, 0) & 0xFFFF


def _printable(byte: int) -> str:
    return chr(byte) if 0x20 <= byte <= 0x7E else "."


def format_rows(data: bytes, start: int) -> list[tuple[str, str, str]]:
    """Lay out ``data`` as rows of (address, hex bytes, |ascii|), 16 bytes per row."""
    rows: list[tuple[str, str, str]] = []
    address = start
    for offset in range(0, len(data), _ROW_WIDTH):
        chunk = data[offset : offset + _ROW_WIDTH]
        hex_text = " ".join(f"{byte:02x}" for byte in chunk)
        if len(hex_text) > 24:
            hex_text = hex_text[:24] + " " + hex_text[24:]
        ascii_text = "".join(_printable(byte) for byte in chunk)
        rows.append((f"{address:04x}", f"{hex_text:<48}", f"|{ascii_text:<16}|"))
        address += len(chunk)
    return rows