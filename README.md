# byte6502

Byte is a fantasy console built around the 6502 microprocessor, with a
64x64 screen of 16 colours and an 8-button gamepad. This package holds the
console's machinery:

- `byte6502.opcodes` – the instruction table: `Opcode`, `Mnemonic`,
  `AddressingMode`, `TickModifier`, `decode(code)` and
  `get_opcode(mnemonic, mode)`; both return `None` when there is no match.
- `byte6502.bus` – `Bus`, a 16-bit address bus that routes reads and writes
  to attached `Peripheral` objects and keeps a mirror of every byte written.
- `byte6502.ram` – `Ram`, a zero-filled 64 KiB peripheral.
- `byte6502.cpu` – `CPU`, with decimal mode, interrupts (`Interrupt`),
  status flags (`Flags`) and cycle counting.
- `byte6502.machine` – `ByteEmu`, the console: framebuffer, input register
  and random-number register.
- `byte6502.tokens` and `byte6502.scanner` – a tokenizer for Byte assembly
  source and its error types.
- `byte6502.highlight` – syntax highlighting of assembly source with two
  colour themes.
- `byte6502.memory_view` – hex-dump layout of memory regions.

It has no dependencies outside the standard library.

## Installation

```
pip install .
```

## Running code on the CPU

```python
from byte6502.bus import Bus
from byte6502.ram import Ram
from byte6502.cpu import CPU, Flags

bus = Bus()
bus.attach(0x0000, 0xFFFF, Ram())
cpu = CPU(bus)

cpu.load(bytes([0xA9, 0xFF]), 0x8000)   # LDA #$ff
cpu.reg.pc = 0x8000
cpu.step()

assert cpu.reg.a == 0xFF
assert Flags.NEGATIVE in cpu.reg.p
```

`CPU.step` raises `UnrecognizedOpcodeError` when the byte at the program
counter is not an instruction. `Bus.attach` raises `ValueError` when the new
range overlaps one already attached. Addresses no peripheral handles read as
zero.

## The console

```python
from byte6502.machine import ByteEmu, InputState, input_from_keys

emu = ByteEmu()
emu.load_program(binary, 0x0000)         # copies the bytes, then resets
emu.step(InputState.UP | InputState.A)   # runs one frame, then raises an IRQ
pixels = emu.framebuffer()               # 64*64 colours as 0xRRGGBBAA ints

emu.step(input_from_keys({"ArrowLeft", "D"}))   # LEFT | A
```

A frame runs `emu.instructions_per_frame` instructions (106 666 by
default). Unknown opcodes met during a frame are logged through the
`logging` module and skipped rather than raised.

Memory-mapped registers:

- `$FD` – the low four bits select the 4 KiB page shown on screen.
- `$FE` – a new random byte before each instruction, from an xorshift
  stream (`random_numbers(seed)`); pass your own iterator as
  `ByteEmu(rng=...)` for repeatable runs.
- `$FF` – the gamepad state at the start of the frame.

## Scanning assembly source

```python
from byte6502.scanner import Scanner

for token in Scanner("loop: lda #$10 ; comment\n"):
    print(token.kind, token.value, token.location)
```

Iteration yields every token up to and including the `EOF` token and
raises a `ScannerError` subclass (`UnknownCharacterError`,
`UnknownDirectiveError`, `NumberExpectedError`, `UnterminatedStringError`)
on bad input. `Scanner.scan_token()` returns one token at a time and can be
called again after an error.

From the command line the scanner prints every token of a file, and every
error as it meets it (`test.s` when no file is given):

```
byte6502-scan program.s
```

## Highlighting and memory views

```python
from byte6502.highlight import Theme, highlight
from byte6502.memory_view import parse_range, format_rows

for text, (r, g, b) in highlight(source, Theme.DEFAULT):
    ...

parsed = parse_range("0x0200", "0x40")   # (0x0200, 0x3f), or None if invalid
if parsed is not None:
    start, last = parsed
    for address, hex_bytes, ascii_text in format_rows(emu.memory_region(start, last), start):
        print(address, hex_bytes, ascii_text)
```

`highlight` colours identifiers followed by a colon anywhere in the source
as labels and other identifiers as variables; text that fails to scan is
left out of the segments.

## What it does not do

- There is no window: nothing draws the framebuffer, reads a keyboard or
  shows the code editor and memory monitor. `framebuffer()`, `highlight()`
  and `format_rows()` return data for a front end to display.
- There is no assembler that turns source into a binary; the scanner only
  produces tokens.
- No demo program is bundled; `load_program` needs bytes you supply.

## Tests

```
pip install .[test]
pytest
```