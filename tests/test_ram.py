import pytest

from byte6502.ram import Ram


def test_starts_zeroed():
    ram = Ram()
    assert all(ram.read(addr) == 0 for addr in (0x0000, 0x00FF, 0x8000, 0xFFFF))


def test_write_read_round_trip():
    ram = Ram()
    ram.write(0xFAAF, 0xFF)
    ram.write(0x0000, 0x01)
    assert ram.read(0xFAAF) == 0xFF
    assert ram.read(0x0000) == 0x01


def test_overwrite_replaces_value():
    ram = Ram()
    ram.write(0xDE, 0xAD)
    ram.write(0xDE, 0x56)
    assert ram.read(0xDE) == 0x56


def test_out_of_range_address_raises():
    ram = Ram()
    with pytest.raises(IndexError):
        ram.read(0x10000)


def test_byte_out_of_range_raises():
    ram = Ram()
    with pytest.raises(ValueError):
        ram.write(0x10, 0x100)