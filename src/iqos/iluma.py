"""ILUMA command set."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import TYPE_CHECKING

from .exceptions import IncompatibleModelError
from .models.enums import BrightnessLevel, ToggleFeature
from .models.vibration import VibrationSettings
from .protocol.signals import encode_brightness, encode_toggle, encode_vibration

if TYPE_CHECKING:
    from .device import IQOSDevice

_LOGGER = logging.getLogger(__name__)


class IlumaControls:
    """Commands supported by ILUMA holders.

    Every command checks the model family first and raises
    IncompatibleModelError without touching the transport when the device
    is not an ILUMA. Any device exposing is_iluma() and write_signals()
    can be driven.
    """

    def __init__(self, device: IQOSDevice):
        self._device = device

    async def _send(self, name: str, signals: Sequence[bytes]) -> None:
        _LOGGER.debug("Sending %s to %s (%d frames)", name, self._device.mac_address, len(signals))
        await self._device.write_signals(signals)

    def _check_model(self) -> None:
        if not self._device.is_iluma():
            raise IncompatibleModelError()

    async def update_brightness(self, level: BrightnessLevel | str) -> None:
        """Set holder LED brightness.

        Args:
            level: BrightnessLevel or its text ("high"/"low")

        Raises:
            IncompatibleModelError: If the device is not an ILUMA
            ConfigurationError: If level text is invalid
            NotReadyError: If the device is not ready
            TransportError: If a write fails (earlier frames stay applied)
        """
        self._check_model()
        if isinstance(level, str):
            level = BrightnessLevel.from_str(level)
        await self._send(f"brightness {level}", encode_brightness(level))

    async def update_vibration_settings(self, settings: VibrationSettings) -> None:
        """Choose which events make the holder vibrate."""
        self._check_model()
        await self._send("vibration settings", [encode_vibration(settings)])

    async def update_toggle(self, feature: ToggleFeature | str, enable: bool) -> None:
        """Switch an on/off feature.

        Args:
            feature: ToggleFeature or its text name
            enable: True to enable, False to disable
        """
        self._check_model()
        if isinstance(feature, str):
            feature = ToggleFeature.from_str(feature)
        state = "on" if enable else "off"
        await self._send(f"{feature} {state}", [encode_toggle(feature, enable)])

    async def update_smartgesture(self, enable: bool) -> None:
        await self.update_toggle(ToggleFeature.SMARTGESTURE, enable)

    async def update_autostart(self, enable: bool) -> None:
        await self.update_toggle(ToggleFeature.AUTOSTART, enable)

    async def update_flexpuff(self, enable: bool) -> None:
        await self.update_toggle(ToggleFeature.FLEXPUFF, enable)
