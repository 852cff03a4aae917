"""Types and abstract interfaces that make up the Bluetooth LE API."""

from __future__ import annotations

import enum
import functools
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import AsyncIterator, Dict, FrozenSet, Hashable, Iterable, List, Optional
from uuid import UUID

from .bdaddr import BDAddr


class AddressType(enum.Enum):
    """Whether a device address is random or public."""

    RANDOM = "random"
    PUBLIC = "public"

    @classmethod
    def default(cls) -> "AddressType":
        return cls.PUBLIC

    @classmethod
    def from_str(cls, value: str) -> Optional["AddressType"]:
        """Map ``"public"``/``"random"`` to an address type, else None."""
        return {"public": cls.PUBLIC, "random": cls.RANDOM}.get(value)

    @classmethod
    def from_u8(cls, value: int) -> Optional["AddressType"]:
        """Map 1 (public) or 2 (random) to an address type, else None."""
        return {1: cls.PUBLIC, 2: cls.RANDOM}.get(value)

    def num(self) -> int:
        """The numeric code of this address type."""
        return 1 if self is AddressType.PUBLIC else 2


@dataclass(frozen=True)
class ValueNotification:
    """A notification sent by a peripheral because a value changed."""

    uuid: UUID
    value: bytes


class CharPropFlags(enum.IntFlag):
    """Operations supported by a characteristic."""

    BROADCAST = 0x01
    READ = 0x02
    WRITE_WITHOUT_RESPONSE = 0x04
    WRITE = 0x08
    NOTIFY = 0x10
    INDICATE = 0x20
    AUTHENTICATED_SIGNED_WRITES = 0x40
    EXTENDED_PROPERTIES = 0x80

    def __repr__(self) -> str:
        names = [m.name for m in type(self) if m.name and self & m == m]
        return f"CharPropFlags({' | '.join(names) if names else '0x0'})"


@dataclass(frozen=True, order=True)
class Descriptor:
    """A descriptor attached to a characteristic."""

    uuid: UUID
    service_uuid: UUID
    characteristic_uuid: UUID

    def __str__(self) -> str:
        return f"uuid: {self.uuid}"


@functools.total_ordering
@dataclass(frozen=True)
class Characteristic:
    """A GATT characteristic, identified by its UUID."""

    uuid: UUID
    service_uuid: UUID
    properties: CharPropFlags = CharPropFlags(0)
    descriptors: FrozenSet[Descriptor] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "properties", CharPropFlags(self.properties))
        object.__setattr__(self, "descriptors", frozenset(self.descriptors))

    def _key(self):
        return (self.uuid, self.service_uuid, int(self.properties), tuple(sorted(self.descriptors)))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Characteristic):
            return NotImplemented
        return self._key() < other._key()

    def __str__(self) -> str:
        return f"uuid: {self.uuid}, char properties: {self.properties!r}"


@functools.total_ordering
@dataclass(frozen=True)
class Service:
    """A GATT service: a group of characteristics."""

    uuid: UUID
    primary: bool = True
    characteristics: FrozenSet[Characteristic] = frozenset()

    def __post_init__(self) -> None:
        object.__setattr__(self, "characteristics", frozenset(self.characteristics))

    def _key(self):
        return (self.uuid, self.primary, tuple(sorted(self.characteristics)))

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Service):
            return NotImplemented
        return self._key() < other._key()


@dataclass
class PeripheralProperties:
    """What the advertising reports have told us about a peripheral."""

    address: BDAddr = field(default_factory=BDAddr)
    address_type: Optional[AddressType] = None
    local_name: Optional[str] = None
    tx_power_level: Optional[int] = None
    rssi: Optional[int] = None
    manufacturer_data: Dict[int, bytes] = field(default_factory=dict)
    service_data: Dict[UUID, bytes] = field(default_factory=dict)
    services: List[UUID] = field(default_factory=list)
    class_: Optional[int] = None


@dataclass
class ScanFilter:
    """Restricts a scan to devices advertising at least one of ``services``."""

    services: List[UUID] = field(default_factory=list)


class WriteType(enum.Enum):
    """Kind of characteristic write."""

    WITH_RESPONSE = "with_response"
    WITHOUT_RESPONSE = "without_response"


@dataclass
class CentralEvent:
    """Base of all events emitted by a central."""

    id: Hashable


@dataclass
class DeviceDiscovered(CentralEvent):
    pass


@dataclass
class DeviceUpdated(CentralEvent):
    pass


@dataclass
class DeviceConnected(CentralEvent):
    pass


@dataclass
class DeviceDisconnected(CentralEvent):
    pass


@dataclass
class ManufacturerDataAdvertisement(CentralEvent):
    """Manufacturer data was advertised by a device."""

    manufacturer_data: Dict[int, bytes] = field(default_factory=dict)


@dataclass
class ServiceDataAdvertisement(CentralEvent):
    """Service data was advertised by a device."""

    service_data: Dict[UUID, bytes] = field(default_factory=dict)


@dataclass
class ServicesAdvertisement(CentralEvent):
    """The advertised services of a device changed."""

    services: List[UUID] = field(default_factory=list)


class Peripheral(ABC):
    """A device to communicate with (the BLE "server")."""

    @abstractmethod
    def id(self) -> Hashable:
        """The unique identifier of the peripheral."""

    @abstractmethod
    def address(self) -> BDAddr:
        """The MAC address of the peripheral."""

    @abstractmethod
    async def properties(self) -> Optional[PeripheralProperties]:
        """The advertised properties of the peripheral."""

    @abstractmethod
    def services(self) -> FrozenSet[Service]:
        """The services discovered so far; empty until discover_services."""

    def characteristics(self) -> FrozenSet[Characteristic]:
        """All characteristics of all discovered services."""
        return frozenset(c for service in self.services() for c in service.characteristics)

    @abstractmethod
    async def is_connected(self) -> bool:
        """True if currently connected."""

    @abstractmethod
    async def connect(self) -> None:
        """Connect to the device."""

    @abstractmethod
    async def disconnect(self) -> None:
        """Terminate the connection."""

    @abstractmethod
    async def discover_services(self) -> None:
        """Discover all services and their characteristics."""

    @abstractmethod
    async def write(self, characteristic: Characteristic, data: bytes, write_type: WriteType) -> None:
        """Write ``data`` to a characteristic."""

    @abstractmethod
    async def read(self, characteristic: Characteristic) -> bytes:
        """Read the value of a characteristic."""

    @abstractmethod
    async def subscribe(self, characteristic: Characteristic) -> None:
        """Enable notify or indicate on a characteristic."""

    @abstractmethod
    async def unsubscribe(self, characteristic: Characteristic) -> None:
        """Disable notify or indicate on a characteristic."""

    @abstractmethod
    async def notifications(self) -> AsyncIterator[ValueNotification]:
        """A stream of value notifications from the device."""

    @abstractmethod
    async def write_descriptor(self, descriptor: Descriptor, data: bytes) -> None:
        """Write ``data`` to a descriptor."""

    @abstractmethod
    async def read_descriptor(self, descriptor: Descriptor) -> bytes:
        """Read the value of a descriptor."""


class Central(ABC):
    """The BLE client: scans for and connects to peripherals."""

    @abstractmethod
    async def events(self) -> AsyncIterator[CentralEvent]:
        """A stream of events of this central."""

    @abstractmethod
    async def start_scan(self, scan_filter: ScanFilter) -> None:
        """Start scanning for devices."""

    @abstractmethod
    async def stop_scan(self) -> None:
        """Stop scanning."""

    @abstractmethod
    async def peripherals(self) -> List[Peripheral]:
        """All peripherals discovered so far."""

    @abstractmethod
    async def peripheral(self, peripheral_id: Hashable) -> Peripheral:
        """The discovered peripheral with the given id."""

    @abstractmethod
    async def add_peripheral(self, peripheral_id: Hashable) -> Peripheral:
        """Add a peripheral without a scan result."""

    @abstractmethod
    async def adapter_info(self) -> str:
        """A free-form description of the adapter."""


class Manager(ABC):
    """Entry point giving access to the system's adapters."""

    @abstractmethod
    async def adapters(self) -> List[Central]:
        """All Bluetooth adapters on the system."""


def _all_characteristics(services: Iterable[Service]) -> FrozenSet[Characteristic]:
    return frozenset(c for s in services for c in s.characteristics)