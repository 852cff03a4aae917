"""Bluetooth Low Energy addresses, short UUIDs, GATT types and adapter event handling."""

__version__ = "0.1.0"
__all__ = ["adapter_manager", "api", "bdaddr", "bleuuid"]