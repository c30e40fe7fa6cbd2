"""Data models for IQOS devices."""

from .device_info import DeviceInfo
from .enums import BrightnessLevel, ConnectionState, ToggleFeature
from .gatt import GattCharacteristic, GattService
from .vibration import VibrationSettings

__all__ = [
    "BrightnessLevel",
    "ConnectionState",
    "DeviceInfo",
    "GattCharacteristic",
    "GattService",
    "ToggleFeature",
    "VibrationSettings",
]
