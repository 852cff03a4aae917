"""Bluetooth device addresses (the 6-byte MAC address of a device)."""

from __future__ import annotations

import string
from dataclasses import dataclass, field
from typing import Iterable, Union

_HEX_DIGITS = frozenset(string.hexdigits)


class ParseBDAddrError(ValueError):
    """Raised when a Bluetooth address cannot be built from its input."""


class IncorrectByteCountError(ParseBDAddrError):
    """The input does not describe exactly 6 bytes."""

    def __init__(self) -> None:
        super().__init__("Bluetooth address has to be 6 bytes long")


class InvalidDigitError(ParseBDAddrError):
    """The input contains something that is not a valid hex byte."""

    def __init__(self, part: str) -> None:
        self.part = part
        super().__init__(f"Invalid digit in address: {part!r}")


def _parse_byte(part: str) -> int:
    """Parse one hexadecimal byte, accepting an optional leading '+'."""
    digits = part[1:] if part.startswith("+") else part
    if not digits or not all(c in _HEX_DIGITS for c in digits):
        raise InvalidDigitError(part)
    value = int(digits, 16)
    if value > 0xFF:
        raise InvalidDigitError(part)
    return value


@dataclass(frozen=True, order=True)
class BDAddr:
    """The 6-byte address identifying a Bluetooth device.

    ``address[0]`` is the most significant byte, ``address[5]`` the least.
    """

    address: bytes = field(default=bytes(6))

    def __post_init__(self) -> None:
        data = bytes(self.address)
        if len(data) != 6:
            raise IncorrectByteCountError()
        object.__setattr__(self, "address", data)

    @classmethod
    def parse(cls, s: str) -> "BDAddr":
        """Parse ``aa:bb:cc:dd:ee:ff`` or ``aabbccddeeff``."""
        if ":" in s:
            return cls.from_str_delim(s)
        return cls.from_str_no_delim(s)

    @classmethod
    def from_str_delim(cls, s: str) -> "BDAddr":
        """Parse an address whose bytes are separated by colons."""
        values = [_parse_byte(part) for part in s.split(":")]
        if len(values) != 6:
            raise IncorrectByteCountError()
        return cls(bytes(values))

    @classmethod
    def from_str_no_delim(cls, s: str) -> "BDAddr":
        """Parse an address written as 12 hex digits without delimiters."""
        if len(s.encode("utf-8")) != 12:
            raise IncorrectByteCountError()
        if not s.isascii():
            raise InvalidDigitError(s)
        return cls(bytes(_parse_byte(s[i:i + 2]) for i in range(0, 12, 2)))

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, Iterable[int]]) -> "BDAddr":
        """Build an address from exactly 6 bytes."""
        return cls(bytes(data))

    @classmethod
    def from_int(cls, value: int) -> "BDAddr":
        """Build an address from an integer that fits in 48 bits."""
        if not 0 <= value < 1 << 48:
            raise IncorrectByteCountError()
        return cls(value.to_bytes(6, "big"))

    def to_bytes(self) -> bytes:
        """Return the 6 address bytes, most significant first."""
        return self.address

    def __bytes__(self) -> bytes:
        return self.address

    def __int__(self) -> int:
        return int.from_bytes(self.address, "big")

    def __index__(self) -> int:
        return int(self)

    def is_random_static(self) -> bool:
        """True if the address is a random static address."""
        return self.address[5] & 0b11 == 0b11

    def to_string_no_delim(self) -> str:
        """The address as 12 lower-case hex digits without delimiters."""
        return self.address.hex()

    def __str__(self) -> str:
        return format(self, "X")

    def __repr__(self) -> str:
        return f"BDAddr('{self}')"

    def __format__(self, spec: str) -> str:
        if spec in ("", "X"):
            return ":".join(f"{b:02X}" for b in self.address)
        if spec == "x":
            return ":".join(f"{b:02x}" for b in self.address)
        raise ValueError(f"Unknown format code {spec!r} for BDAddr")