"""GATT characteristic identifiers and lookup."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Final

from ..models.gatt import GattCharacteristic, GattService

_LOGGER = logging.getLogger(__name__)

# Vendor control characteristic, matched by prefix
CONTROL_CHARACTERISTIC_PREFIX: Final = "FFE9"

# Standard Device Information characteristics
MODEL_NUMBER_UUID: Final = "2A24"
SERIAL_NUMBER_UUID: Final = "2A25"
SOFTWARE_REVISION_UUID: Final = "2A28"
MANUFACTURER_NAME_UUID: Final = "2A29"

# Vendor holder battery characteristic, percentage at byte 2
BATTERY_CHARACTERISTIC_UUID: Final = "F8A54120-B041-11E4-9BE7-0002A5D5C51B"
BATTERY_LEVEL_OFFSET: Final = 2

_SIG_BASE_SUFFIX: Final = "-0000-1000-8000-00805f9b34fb"


def format_uuid(uuid: str) -> str:
    """Format a 128-bit UUID string as a characteristic identifier.

    Bluetooth SIG base UUIDs are shortened to their 16-bit form, everything
    is upper-cased:
        "0000ffe9-0000-1000-8000-00805f9b34fb" -> "FFE9"
        "f8a54120-b041-11e4-9be7-0002a5d5c51b" -> "F8A54120-B041-11E4-9BE7-0002A5D5C51B"
    """
    uuid = uuid.lower()
    if uuid.startswith("0000") and uuid.endswith(_SIG_BASE_SUFFIX):
        return uuid[4:8].upper()
    return uuid.upper()


def resolve_control_characteristic(services: Iterable[GattService]) -> str:
    """Find the vendor control characteristic in a discovered tree.

    Services and characteristics are scanned in discovery order and the
    first identifier starting with CONTROL_CHARACTERISTIC_PREFIX wins.

    Returns:
        Full identifier of the match, or "" if there is none
    """
    for service in services:
        for characteristic in service.characteristics:
            if characteristic.uuid.startswith(CONTROL_CHARACTERISTIC_PREFIX):
                _LOGGER.debug(
                    "Control characteristic %s found in service %s",
                    characteristic.uuid,
                    service.uuid,
                )
                return characteristic.uuid
    return ""


def find_characteristic(
        services: Iterable[GattService],
        uuid: str,
) -> GattCharacteristic | None:
    """Return the first characteristic whose identifier equals uuid."""
    for service in services:
        for characteristic in service.characteristics:
            if characteristic.uuid == uuid:
                return characteristic
    return None
