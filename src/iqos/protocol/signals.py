"""Command frames for the IQOS ILUMA control characteristic.

Literal frames were captured from the vendor app and are sent verbatim.
Several of them do not satisfy the checksum rule used for built frames,
so they must never be recomputed.
"""

from __future__ import annotations

from enum import IntFlag
from typing import Final

from ..models.enums import BrightnessLevel, ToggleFeature
from ..models.vibration import VibrationSettings


class VibrationTrigger(IntFlag):
    """Bits of the 16-bit vibration register."""

    PUFF_END = 0x0001
    MANUALLY_TERMINATED = 0x0010
    HEATING_START = 0x0100
    STARTING_TO_USE = 0x1000


BRIGHTNESS_HIGH_SIGNAL_FIRST: Final = bytes([0x00, 0xC0, 0x46, 0x23, 0x64, 0x00, 0x00, 0x00, 0x4F])
BRIGHTNESS_HIGH_SIGNAL_SECOND: Final = bytes([0x00, 0xC0, 0x02, 0x23, 0xC3])
BRIGHTNESS_HIGH_SIGNAL_THIRD: Final = bytes([0x00, 0xC9, 0x44, 0x24, 0x64, 0x00, 0x00, 0x00, 0x34])
BRIGHTNESS_LOW_SIGNAL_FIRST: Final = bytes([0x00, 0xC0, 0x46, 0x23, 0x1E, 0x00, 0x00, 0x00, 0xE1])
BRIGHTNESS_LOW_SIGNAL_SECOND: Final = bytes([0x00, 0xC0, 0x02, 0x23, 0xC3])
BRIGHTNESS_LOW_SIGNAL_THIRD: Final = bytes([0x00, 0xC9, 0x44, 0x24, 0x1E, 0x00, 0x00, 0x00, 0x9A])

SMARTGESTURE_ENABLE_SIGNAL: Final = bytes([0x00, 0xC9, 0x47, 0x24, 0x04, 0x01, 0x00, 0x00, 0x3C])
SMARTGESTURE_DISABLE_SIGNAL: Final = bytes([0x00, 0xC9, 0x47, 0x24, 0x04, 0x00, 0x00, 0x00, 0x57])
AUTOSTART_ENABLE_SIGNAL: Final = bytes([0x00, 0xC9, 0x47, 0x24, 0x01, 0x01, 0x00, 0x00, 0x3F])
AUTOSTART_DISABLE_SIGNAL: Final = bytes([0x00, 0xC9, 0x47, 0x24, 0x01, 0x00, 0x00, 0x00, 0x54])
FLEXPUFF_ENABLE_SIGNAL: Final = bytes([0x00, 0xD2, 0x45, 0x22, 0x03, 0x01, 0x00, 0x00, 0x0A])
FLEXPUFF_DISABLE_SIGNAL: Final = bytes([0x00, 0xD2, 0x45, 0x22, 0x03, 0x00, 0x00, 0x00, 0x0A])

VIBRATION_SIGNAL_PREFIX: Final = bytes([0x00, 0xC9, 0x44, 0x23, 0x10, 0x00])

# Frames must be written in tuple order
BRIGHTNESS_SIGNALS: Final[dict[BrightnessLevel, tuple[bytes, bytes, bytes]]] = {
    BrightnessLevel.HIGH: (
        BRIGHTNESS_HIGH_SIGNAL_FIRST,
        BRIGHTNESS_HIGH_SIGNAL_SECOND,
        BRIGHTNESS_HIGH_SIGNAL_THIRD,
    ),
    BrightnessLevel.LOW: (
        BRIGHTNESS_LOW_SIGNAL_FIRST,
        BRIGHTNESS_LOW_SIGNAL_SECOND,
        BRIGHTNESS_LOW_SIGNAL_THIRD,
    ),
}

# (enable, disable)
TOGGLE_SIGNALS: Final[dict[ToggleFeature, tuple[bytes, bytes]]] = {
    ToggleFeature.SMARTGESTURE: (SMARTGESTURE_ENABLE_SIGNAL, SMARTGESTURE_DISABLE_SIGNAL),
    ToggleFeature.AUTOSTART: (AUTOSTART_ENABLE_SIGNAL, AUTOSTART_DISABLE_SIGNAL),
    ToggleFeature.FLEXPUFF: (FLEXPUFF_ENABLE_SIGNAL, FLEXPUFF_DISABLE_SIGNAL),
}


def checksum(data: bytes) -> int:
    """Return the 8-bit wraparound sum of data."""
    return sum(data) & 0xFF


def encode_brightness(level: BrightnessLevel) -> tuple[bytes, bytes, bytes]:
    """Build the three brightness frames.

    Returns:
        Frames of 9, 5 and 9 bytes, to be written in order
    """
    return BRIGHTNESS_SIGNALS[level]


def vibration_register(settings: VibrationSettings) -> int:
    """Combine the enabled triggers into the 16-bit vibration register."""
    reg = VibrationTrigger(0)
    if settings.when_heating_start:
        reg |= VibrationTrigger.HEATING_START
    if settings.when_starting_to_use:
        reg |= VibrationTrigger.STARTING_TO_USE
    if settings.when_puff_end:
        reg |= VibrationTrigger.PUFF_END
    if settings.when_manually_terminated:
        reg |= VibrationTrigger.MANUALLY_TERMINATED
    return int(reg)


def encode_vibration(settings: VibrationSettings) -> bytes:
    """Build the vibration settings frame.

    Format:
        [prefix:6][register:2 big-endian][checksum:1]
    """
    frame = VIBRATION_SIGNAL_PREFIX + vibration_register(settings).to_bytes(2, byteorder='big')
    return frame + bytes([checksum(frame)])


def encode_toggle(feature: ToggleFeature, enable: bool) -> bytes:
    """Select the literal on/off frame for a feature."""
    enable_signal, disable_signal = TOGGLE_SIGNALS[feature]
    return enable_signal if enable else disable_signal
