"""BLE protocol implementation."""

from .characteristics import (
    BATTERY_CHARACTERISTIC_UUID,
    CONTROL_CHARACTERISTIC_PREFIX,
    MANUFACTURER_NAME_UUID,
    MODEL_NUMBER_UUID,
    SERIAL_NUMBER_UUID,
    SOFTWARE_REVISION_UUID,
    find_characteristic,
    format_uuid,
    resolve_control_characteristic,
)
from .signals import (
    BRIGHTNESS_SIGNALS,
    TOGGLE_SIGNALS,
    VibrationTrigger,
    checksum,
    encode_brightness,
    encode_toggle,
    encode_vibration,
    vibration_register,
)

__all__ = [
    "BATTERY_CHARACTERISTIC_UUID",
    "BRIGHTNESS_SIGNALS",
    "CONTROL_CHARACTERISTIC_PREFIX",
    "MANUFACTURER_NAME_UUID",
    "MODEL_NUMBER_UUID",
    "SERIAL_NUMBER_UUID",
    "SOFTWARE_REVISION_UUID",
    "TOGGLE_SIGNALS",
    "VibrationTrigger",
    "checksum",
    "encode_brightness",
    "encode_toggle",
    "encode_vibration",
    "find_characteristic",
    "format_uuid",
    "resolve_control_characteristic",
    "vibration_register",
]
