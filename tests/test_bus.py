import pytest

from byte6502.bus import Bus, Peripheral
from byte6502.ram import Ram


@pytest.fixture
def bus():
    b = Bus()
    b.attach(0x0000, 0xFFFF, Ram())
    return b


def test_write_then_read(bus):
    bus.write(0xAA, 0b1010_1010)
    assert bus.read(0xAA) == 0b1010_1010


def test_unmapped_reads_zero():
    b = Bus()
    assert b.read(0x1234) == 0
    assert b.read_u16(0x1234) == 0


def test_read_u16_little_endian(bus):
    bus.write(0xDEAD, 0xEF)
    bus.write(0xDEAE, 0xBE)
    assert bus.read_u16(0xDEAD) == 0xBEEF


def test_write_u16_round_trip(bus):
    bus.write_u16(0xCCFF, 0xDEAD)
    assert bus.read_u16(0xCCFF) == 0xDEAD
    assert bus.read(0xCCFF) == 0xAD
    assert bus.read(0xCD00) == 0xDE


def test_peripheral_sees_offset_addresses():
    ram = Ram()
    b = Bus()
    b.attach(0x8000, 0xFFFF, ram)
    b.write(0x8003, 0x42)
    assert ram.read(3) == 0x42
    assert b.peripheral_index(0x8003) == (0, 3)
    assert b.peripheral_index(0x0010) is None


def test_peripheral_index_picks_matching_mapping():
    b = Bus()
    b.attach(0x0000, 0x00FF, Ram())
    b.attach(0x1000, 0x1FFF, Ram())
    assert b.peripheral_index(0x1010) == (1, 0x10)


def test_overlapping_attach_raises():
    b = Bus()
    b.attach(0x0000, 0x00FF, Ram())
    with pytest.raises(ValueError, match=r"overlapping ranges: \[10:20\] and \[0:ff\]"):
        b.attach(0x10, 0x20, Ram())


def test_mirror_records_writes_without_peripheral():
    b = Bus()
    b.write(0x0200, 7)
    b.write(0x0201, 9)
    assert b.memory_region(0x0200, 1) == bytes([7, 9])


def test_memory_region_length_is_size_plus_one(bus):
    region = bus.memory_region(0x0000, 0xFF)
    assert len(region) == 0x100


def test_memory_region_clamps_to_end(bus):
    region = bus.memory_region(0xFFF0, 0x100)
    assert len(region) == 0x10000 - 0xFFF0


class _Recorder(Peripheral):
    def __init__(self):
        self.writes = []

    def read(self, addr):
        return addr & 0xFF

    def write(self, addr, byte):
        self.writes.append((addr, byte))


def test_custom_peripheral_receives_accesses():
    rec = _Recorder()
    b = Bus()
    b.attach(0x4000, 0x40FF, rec)
    b.write_u16(0x4010, 0xBEEF)
    assert rec.writes == [(0x10, 0xEF), (0x11, 0xBE)]
    assert b.read(0x4020) == 0x20