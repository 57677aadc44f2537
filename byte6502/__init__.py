"""Byte: a 6502 fantasy console with CPU, bus, assembly tokenizer, highlighting and hex dumps."""

__version__ = "0.1.0"

__all__ = [
    "bus",
    "cpu",
    "highlight",
    "machine",
    "memory_view",
    "opcodes",
    "ram",
    "scanner",
    "tokens",
]