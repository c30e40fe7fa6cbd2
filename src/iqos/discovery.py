"""Scanning for nearby IQOS devices."""

from __future__ import annotations

import logging

from bleak import BleakScanner
from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)

DEFAULT_NAME_PREFIX = "IQOS"


async def discover_devices(
        timeout: float = 10.0,
        name_prefix: str = DEFAULT_NAME_PREFIX,
) -> dict[str, BLEDevice]:
    """Scan for IQOS devices by advertised name.

    Args:
        timeout: Scan duration in seconds (default: 10)
        name_prefix: Advertised name prefix to match, case-insensitive

    Returns:
        Matching devices keyed by address
    """
    _LOGGER.debug("Scanning for %s devices (%.1fs)", name_prefix, timeout)
    devices = await BleakScanner.discover(timeout=timeout)

    prefix = name_prefix.upper()
    found = {
        device.address: device
        for device in devices
        if device.name and device.name.upper().startswith(prefix)
    }

    _LOGGER.info("Found %d %s device(s)", len(found), name_prefix)
    return found
