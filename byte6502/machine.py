"""The fantasy console: a 6502 with RAM, a 64x64 framebuffer and a gamepad."""

from __future__ import annotations

import logging
import os
from enum import IntFlag
from typing import Iterable, Iterator, Optional

from byte6502.cpu import CPU, Interrupt, UnrecognizedOpcodeError
from byte6502.ram import Ram

logger = logging.getLogger(__name__)

COLOR_PALETTE = (
    0x000000FF, 0xFFFFFFFF, 0x880000FF, 0xAAFFEEFF, 0xCC44CCFF, 0x00CC55FF, 0x0000AAFF, 0xEEEE77FF,
    0x664400FF, 0xFF7777FF, 0x333333FF, 0x777777FF, 0xAAFF66FF, 0x0088FFFF, 0x0088FFFF, 0xBBBBBBFF,
)
INSTRUCTIONS_PER_FRAME = 6_400_000 // 60

REG_VIDEO = 0xFD
REG_RANDOM = 0xFE
REG_INPUT = 0xFF
FRAMEBUFFER_SIZE = 64 * 64

_U32 = 0xFFFF_FFFF


class InputState(IntFlag):
    """Gamepad buttons as seen by the program at the input register."""

    RIGHT = 0b0000_0001
    LEFT = 0b0000_0010
    DOWN = 0b0000_0100
    UP = 0b0000_1000
    START = 0b0001_0000
    SELECT = 0b0010_0000
    B = 0b0100_0000
    A = 0b1000_0000


_KEY_MAP = {
    "A": InputState.SELECT,
    "S": InputState.START,
    "D": InputState.A,
    "F": InputState.B,
    "ArrowUp": InputState.UP,
    "ArrowDown": InputState.DOWN,
    "ArrowLeft": InputState.LEFT,
    "ArrowRight": InputState.RIGHT,
}


def input_from_keys(keys: Iterable[str]) -> InputState:
    """Map held keyboard key names to gamepad buttons; other keys are ignored."""
    state = InputState(0)
    for key in keys:
        state |= _KEY_MAP.get(key, InputState(0))
    return state


def random_seed() -> int:
    """A fresh 64-bit seed from the operating system."""
    return int.from_bytes(os.urandom(8), "little")


def random_numbers(seed: int) -> Iterator[int]:
    """Endless xorshift32 stream of 32-bit values."""
    value = seed & _U32
    while True:
        value ^= (value << 13) & _U32
        value ^= value >> 17
        value ^= (value << 5) & _U32
        yield value


class ByteEmu:
    """Runs the console one frame at a time."""

    def __init__(self, rng: Optional[Iterator[int]] = None) -> None:
        self.cpu = CPU()
        self.cpu.bus.attach(0x0000, 0xFFFF, Ram())
        self.instructions_per_frame = INSTRUCTIONS_PER_FRAME
        self._rng = rng if rng is not None else random_numbers(random_seed() & _U32)

    def load_program(self, program: bytes, start: int) -> None:
        """Copy ``program`` into memory and reset the processor."""
        self.cpu.load(program, start)
        self.cpu.interrupt(Interrupt.RST)

    def framebuffer(self) -> list[int]:
        """The 64x64 screen as RGBA colours, row by row."""
        bus = self.cpu.bus
        video_ptr = (bus.read(REG_VIDEO) & 0xF) << 12
        return [
            COLOR_PALETTE[bus.read(video_ptr + i) & 0xF] for i in range(FRAMEBUFFER_SIZE)
        ]

    def step(self, input_state: InputState) -> None:
        """Run one frame's worth of instructions, then raise an IRQ."""
        bus = self.cpu.bus
        bus.write(REG_INPUT, int(input_state) & 0xFF)

        for _ in range(self.instructions_per_frame):
            number = next(self._rng, None)
            if number is not None:
                bus.write(REG_RANDOM, number & 0xFF)
            try:
                self.cpu.step()
            except UnrecognizedOpcodeError as err:
                logger.error("%s", err)

        self.cpu.interrupt(Interrupt.IRQ)

    def memory_region(self, start: int, size: int) -> bytes:
        """Mirrored memory from ``start`` through ``start + size``."""
        return self.cpu.bus.memory_region(start, size)