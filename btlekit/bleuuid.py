"""Conversion between full 128-bit UUIDs and BLE short UUIDs."""

from __future__ import annotations

from typing import Optional
from uuid import UUID

BLUETOOTH_BASE_UUID = 0x00000000_0000_1000_8000_00805F9B34FB
_BASE_MASK = 0x00000000_FFFF_FFFF_FFFF_FFFFFFFFFFFF
_BASE_MASK_16 = 0xFFFF0000_FFFF_FFFF_FFFF_FFFFFFFFFFFF


def uuid_from_u32(short: int) -> UUID:
    """Expand a 32-bit BLE short UUID using the Bluetooth Base UUID."""
    if not 0 <= short <= 0xFFFFFFFF:
        raise ValueError(f"{short} does not fit in 32 bits")
    return UUID(int=BLUETOOTH_BASE_UUID | (short << 96))


def uuid_from_u16(short: int) -> UUID:
    """Expand a 16-bit BLE short UUID using the Bluetooth Base UUID."""
    if not 0 <= short <= 0xFFFF:
        raise ValueError(f"{short} does not fit in 16 bits")
    return uuid_from_u32(short)


def to_ble_u32(uuid: UUID) -> Optional[int]:
    """The 32-bit short form of ``uuid``, or None if it has none."""
    value = uuid.int
    if value & _BASE_MASK == BLUETOOTH_BASE_UUID:
        return value >> 96
    return None


def to_ble_u16(uuid: UUID) -> Optional[int]:
    """The 16-bit short form of ``uuid``, or None if it has none."""
    value = uuid.int
    if value & _BASE_MASK_16 == BLUETOOTH_BASE_UUID:
        return (value >> 96) & 0xFFFF
    return None


def to_short_string(uuid: UUID) -> str:
    """Render ``uuid`` in its shortest BLE form."""
    short16 = to_ble_u16(uuid)
    if short16 is not None:
        return format(short16, "#04x")
    short32 = to_ble_u32(uuid)
    if short32 is not None:
        return format(short32, "#06x")
    return str(uuid)