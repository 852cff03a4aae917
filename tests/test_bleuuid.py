from uuid import UUID

import pytest

from btlekit.bleuuid import (
    to_ble_u16,
    to_ble_u32,
    to_short_string,
    uuid_from_u16,
    uuid_from_u32,
)


def test_uuid_from_u32():
    assert uuid_from_u32(0x11223344) == UUID("11223344-0000-1000-8000-00805f9b34fb")


def test_uuid_from_u16():
    assert uuid_from_u16(0x1122) == UUID("00001122-0000-1000-8000-00805f9b34fb")


def test_uuid_to_from_u16_success():
    uuid = UUID("00001234-0000-1000-8000-00805f9b34fb")
    assert uuid_from_u16(to_ble_u16(uuid)) == uuid


def test_uuid_to_from_u32_success():
    uuid = UUID("12345678-0000-1000-8000-00805f9b34fb")
    assert uuid_from_u32(to_ble_u32(uuid)) == uuid


def test_uuid_to_u16_fail():
    assert to_ble_u16(UUID("12345678-0000-1000-8000-00805f9b34fb")) is None
    assert to_ble_u16(UUID("12340000-0000-1000-8000-00805f9b34fb")) is None
    assert to_ble_u16(UUID(int=0)) is None


def test_uuid_to_u32_fail():
    assert to_ble_u32(UUID("12345678-9000-1000-8000-00805f9b34fb")) is None
    assert to_ble_u32(UUID(int=0)) is None


def test_to_short_string_u16():
    assert to_short_string(uuid_from_u16(0x1122)) == "0x1122"


def test_to_short_string_u32():
    assert to_short_string(uuid_from_u32(0x11223344)) == "0x11223344"


def test_to_short_string_long():
    uuid_str = "12345678-9000-1000-8000-00805f9b34fb"
    assert to_short_string(UUID(uuid_str)) == uuid_str


def test_to_short_string_small_value_is_padded():
    assert to_short_string(uuid_from_u16(0x0001)) == "0x01"


@pytest.mark.parametrize("value", [-1, 0x10000])
def test_uuid_from_u16_out_of_range(value):
    with pytest.raises(ValueError):
        uuid_from_u16(value)


@pytest.mark.parametrize("value", [-1, 0x1_0000_0000])
def test_uuid_from_u32_out_of_range(value):
    with pytest.raises(ValueError):
        uuid_from_u32(value)


@pytest.mark.parametrize("short", [0, 1, 0x180D, 0xFFFF])
def test_u16_roundtrip(short):
    uuid = uuid_from_u16(short)
    assert to_ble_u16(uuid) == short
    assert to_ble_u32(uuid) == short