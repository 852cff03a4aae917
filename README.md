# btlekit

Building blocks for Bluetooth Low Energy central applications, written in
plain asyncio Python with no third-party dependencies.

## Modules

- `btlekit.bdaddr`: `BDAddr` is a 6-byte Bluetooth device address. You can
  parse it from `aa:bb:cc:dd:ee:ff` or `aabbccddeeff`, or build it from
  bytes or an integer. It prints in upper-case or lower-case hex, or without
  delimiters.
- `btlekit.bleuuid`: converts between the 16-bit or 32-bit short form of a
  BLE UUID and the full 128-bit `uuid.UUID` built on the Bluetooth Base UUID.
- `btlekit.api`: holds the following.
  - GATT data types: `Service`, `Characteristic`, `Descriptor` and
    `CharPropFlags`.
  - `PeripheralProperties` for advertisement data.
  - `AddressType`, `ScanFilter`, `WriteType` and `ValueNotification`.
  - The `CentralEvent` family: `DeviceDiscovered`, `DeviceUpdated`,
    `DeviceConnected`, `DeviceDisconnected`,
    `ManufacturerDataAdvertisement`, `ServiceDataAdvertisement` and
    `ServicesAdvertisement`.
  - The abstract `Peripheral`, `Central` and `Manager` interfaces that a
    backend implements.
- `btlekit.adapter_manager`: holds the following.
  - `AdapterManager` keeps track of the peripherals a backend has
    discovered. It broadcasts `CentralEvent`s to every subscriber.
  - `BroadcastChannel` and `BroadcastReceiver` make up the bounded
    multi-subscriber channel behind `AdapterManager`.
  - `notifications_stream` turns a receiver into an async iterator.

## Installation

```
pip install btlekit
```

## Addresses

```python
from btlekit.bdaddr import BDAddr

addr = BDAddr.parse("00:11:22:33:44:55")
print(addr)                       # 00:11:22:33:44:55
print(f"{addr:x}")                # 00:11:22:33:44:55
print(addr.to_string_no_delim())  # 001122334455
print(int(addr) == 0x001122334455)
print(BDAddr.from_bytes([0, 1, 2, 3, 4, 5]))  # 00:01:02:03:04:05
```

Parsing errors raise `ParseBDAddrError`, which is a `ValueError`. It has two
subclasses:

- `IncorrectByteCountError` means the input does not describe exactly 6
  bytes. `BDAddr.from_int` also raises it for values that do not fit in 48
  bits.
- `InvalidDigitError` means a part is not a valid hex byte.

`is_random_static()` reports whether the two lowest bits of the last byte
are both set.

## Short UUIDs

```python
from btlekit.bleuuid import uuid_from_u16, to_ble_u16, to_short_string

hr = uuid_from_u16(0x180D)
print(hr)                   # 0000180d-0000-1000-8000-00805f9b34fb
print(to_ble_u16(hr))       # 6157
print(to_short_string(hr))  # 0x180d
```

`to_ble_u16` and `to_ble_u32` return `None` when a UUID has no short form.
`to_short_string` falls back to the full UUID text.

## Events

```python
import asyncio
from btlekit.adapter_manager import AdapterManager
from btlekit.api import DeviceDiscovered

async def main():
    manager = AdapterManager()
    stream = manager.event_stream()
    manager.emit(DeviceDiscovered("example-device"))
    async for event in stream:
        print(event)
        break

asyncio.run(main())
```

Events work as follows:

- Each stream sees every event emitted after it was created.
- A subscriber can fall more than the channel capacity behind (16 by
  default). It then loses the oldest events and keeps receiving from there.
- Events emitted while nobody is subscribed are dropped and logged at debug
  level.
- Emitting `DeviceDisconnected` also removes that peripheral from the
  manager.
- `add_peripheral` raises `ValueError` if a peripheral with the same id is
  already known.

## What it does not do

This package contains no backend. Nothing in it talks to a Bluetooth
adapter or to the operating system's Bluetooth stack. `Peripheral`,
`Central` and `Manager` are abstract interfaces only: scanning, connecting,
reading and writing have to come from a backend that implements them. There
is no command-line tool.

## Running the tests

```
pip install btlekit[test]
pytest
```