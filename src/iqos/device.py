"""Main IQOS BLE device class."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import replace
from typing import TYPE_CHECKING, Final

from .exceptions import NotReadyError, TransportError
from .models.device_info import DeviceInfo
from .models.enums import ConnectionState
from .models.gatt import GattService
from .protocol.characteristics import (
    BATTERY_CHARACTERISTIC_UUID,
    BATTERY_LEVEL_OFFSET,
    MANUFACTURER_NAME_UUID,
    MODEL_NUMBER_UUID,
    SERIAL_NUMBER_UUID,
    SOFTWARE_REVISION_UUID,
    find_characteristic,
    resolve_control_characteristic,
)
from .transport import BLEConnection

if TYPE_CHECKING:
    from bleak.backends.device import BLEDevice

    from .iluma import IlumaControls

_LOGGER = logging.getLogger(__name__)

_TRANSITIONS: Final[dict[ConnectionState, frozenset[ConnectionState]]] = {
    ConnectionState.DISCONNECTED: frozenset({ConnectionState.CONNECTING}),
    ConnectionState.CONNECTING: frozenset({
        ConnectionState.CONNECTED,
        ConnectionState.DISCONNECTED,
    }),
    ConnectionState.CONNECTED: frozenset({
        ConnectionState.DISCOVERING,
        ConnectionState.DISCONNECTED,
    }),
    ConnectionState.DISCOVERING: frozenset({
        ConnectionState.DISCOVERING,
        ConnectionState.READY,
        ConnectionState.DISCONNECTED,
    }),
    ConnectionState.READY: frozenset({
        ConnectionState.DISCOVERING,
        ConnectionState.DISCONNECTED,
    }),
}

# DeviceInfo field -> Device Information characteristic
_TEXT_FIELDS: Final[dict[str, str]] = {
    "model_number": MODEL_NUMBER_UUID,
    "serial_number": SERIAL_NUMBER_UUID,
    "software_revision": SOFTWARE_REVISION_UUID,
    "manufacturer_name": MANUFACTURER_NAME_UUID,
}


class IQOSDevice:
    """IQOS heated-tobacco device reached over BLE.

    Usage:
        async with IQOSDevice("AA:BB:CC:DD:EE:FF") as device:
            if device.is_iluma():
                await device.iluma.update_autostart(True)

    Commands are accepted only once the device is READY and the vendor
    control characteristic has been resolved. Writes are serialized per
    device, so frames of concurrent commands never interleave.
    """

    def __init__(
            self,
            mac_address: str,
            ble_device: BLEDevice | None = None,
            model_number: str = "",
            serial_number: str = "",
            software_revision: str = "",
            manufacturer_name: str = "",
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
    ):
        """Initialize IQOS device.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice from a previous scan
            model_number: Known model number (refreshed on initialize)
            serial_number: Known serial number (refreshed on initialize)
            software_revision: Known software revision (refreshed on initialize)
            manufacturer_name: Known manufacturer name (refreshed on initialize)
            timeout: BLE connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts (default: 4)
            use_services_cache: Enable GATT service caching (default: True)
        """
        self.mac_address = mac_address
        self._connection = BLEConnection(
            mac_address,
            ble_device,
            timeout=timeout,
            max_attempts=max_attempts,
            use_services_cache=use_services_cache,
        )

        self._info = DeviceInfo(
            model_number=model_number,
            serial_number=serial_number,
            software_revision=software_revision,
            manufacturer_name=manufacturer_name,
        )
        self._state = ConnectionState.DISCONNECTED
        self._services: list[GattService] = []
        self._control_characteristic = ""
        self._write_lock = asyncio.Lock()

    async def __aenter__(self) -> IQOSDevice:
        """Connect and initialize device."""
        await self.connect()
        try:
            await self.initialize()
        except Exception:
            await self.disconnect()
            raise
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Disconnect from device."""
        await self.disconnect()

    @property
    def state(self) -> ConnectionState:
        """Current connection lifecycle state."""
        return self._state

    @property
    def device_info(self) -> DeviceInfo:
        return self._info

    @property
    def model_number(self) -> str:
        return self._info.model_number

    @property
    def serial_number(self) -> str:
        return self._info.serial_number

    @property
    def software_revision(self) -> str:
        return self._info.software_revision

    @property
    def manufacturer_name(self) -> str:
        return self._info.manufacturer_name

    @property
    def battery_level(self) -> int:
        """Holder battery level in percent (0 until refreshed)."""
        return self._info.battery_level

    @property
    def control_characteristic(self) -> str:
        """Resolved control characteristic identifier ("" if unresolved)."""
        return self._control_characteristic

    @property
    def iluma(self) -> IlumaControls:
        """ILUMA command set for this device."""
        from .iluma import IlumaControls

        return IlumaControls(self)

    def is_iluma(self) -> bool:
        """Check if the model number belongs to the ILUMA family."""
        return "ILUMA" in self._info.model_number.upper()

    def is_connected(self) -> bool:
        """Query the live link state from the transport."""
        return self._connection.is_connected

    def _transition(self, new_state: ConnectionState) -> None:
        if new_state not in _TRANSITIONS[self._state]:
            raise NotReadyError(
                f"Cannot move from {self._state.value} to {new_state.value}"
            )
        _LOGGER.debug("%s: %s -> %s", self.mac_address, self._state.value, new_state.value)
        self._state = new_state

    def _drop(self) -> None:
        """Collapse to DISCONNECTED after a transport failure or teardown."""
        if self._state is not ConnectionState.DISCONNECTED:
            self._transition(ConnectionState.DISCONNECTED)
        self._control_characteristic = ""

    async def connect(self) -> None:
        """Establish the BLE link.

        Raises:
            TransportError: If the transport fails to connect
        """
        if self._state is not ConnectionState.DISCONNECTED:
            return  # Already connected or connecting

        self._transition(ConnectionState.CONNECTING)
        try:
            await self._connection.connect()
        except BaseException:
            # also on cancellation
            self._drop()
            raise
        self._transition(ConnectionState.CONNECTED)
        _LOGGER.info("Connected to %s", self.mac_address)

    async def discover_services(self) -> list[GattService]:
        """Enumerate services of the connected device.

        Leaves the device in DISCOVERING; initialize() resolves the control
        characteristic and moves on to READY.

        Raises:
            NotReadyError: If not connected
            TransportError: If enumeration fails
        """
        if self._state in (ConnectionState.DISCONNECTED, ConnectionState.CONNECTING):
            raise NotReadyError(f"Device {self.mac_address} is not connected")

        self._transition(ConnectionState.DISCOVERING)
        try:
            self._services = await self._connection.discover_services()
        except TransportError:
            self._drop()
            raise
        return self._services

    async def initialize(self) -> None:
        """Discover services, resolve the control characteristic and refresh info.

        A missing control characteristic is not fatal here, but every command
        will then fail with NotReadyError.

        Raises:
            NotReadyError: If not connected
            TransportError: If discovery or info refresh fails
        """
        services = await self.discover_services()

        self._control_characteristic = resolve_control_characteristic(services)
        if not self._control_characteristic:
            _LOGGER.warning(
                "No control characteristic found on %s, commands will be rejected",
                self.mac_address,
            )

        await self.update_device_info()
        self._transition(ConnectionState.READY)

        _LOGGER.info(
            "Initialized %s: model=%r, serial=%r, software=%r, battery=%d%%",
            self.mac_address,
            self.model_number,
            self.serial_number,
            self.software_revision,
            self.battery_level,
        )

    async def update_device_info(self) -> DeviceInfo:
        """Read identity and battery data from the device.

        Device Information characteristics (2A24, 2A25, 2A28, 2A29) are read as
        UTF-8 text, the holder battery level is byte 2 of the vendor battery
        characteristic. Characteristics missing from the discovered tree keep
        their current value.

        Returns:
            The refreshed DeviceInfo snapshot

        Raises:
            NotReadyError: If services have not been discovered
            TransportError: If a read fails
        """
        if self._state not in (ConnectionState.DISCOVERING, ConnectionState.READY):
            raise NotReadyError(
                f"Device {self.mac_address} has not discovered services"
            )

        changes: dict[str, str | int] = {}
        try:
            for field_name, uuid in _TEXT_FIELDS.items():
                if find_characteristic(self._services, uuid) is None:
                    _LOGGER.debug("%s not present, keeping %s", uuid, field_name)
                    continue
                data = await self._connection.read(uuid)
                changes[field_name] = data.decode("utf-8", errors="replace").rstrip("\x00")

            if find_characteristic(self._services, BATTERY_CHARACTERISTIC_UUID) is not None:
                data = await self._connection.read(BATTERY_CHARACTERISTIC_UUID)
                if len(data) > BATTERY_LEVEL_OFFSET:
                    changes["battery_level"] = data[BATTERY_LEVEL_OFFSET]
                else:
                    _LOGGER.debug("Battery response too short: %s", data.hex())
        except TransportError:
            self._drop()
            raise

        self._info = replace(self._info, **changes)
        return self._info

    async def disconnect(self) -> None:
        """Tear down the BLE link.

        The device is DISCONNECTED afterwards even if the transport reports
        an error, which is then re-raised.
        """
        try:
            await self._connection.disconnect()
        finally:
            self._drop()
            _LOGGER.info("Disconnected from %s", self.mac_address)

    async def write_signals(self, signals: Sequence[bytes]) -> None:
        """Write frames to the control characteristic in order.

        This is the write path used by capability command sets such as
        IlumaControls; nothing else writes to the control characteristic.
        Each frame uses write-with-response and is awaited before the next
        one. The first failure aborts the sequence, frames already sent are
        not rolled back.

        Raises:
            NotReadyError: If not READY or no control characteristic
            TransportError: If a write fails
        """
        async with self._write_lock:
            if self._state is not ConnectionState.READY:
                raise NotReadyError(f"Device {self.mac_address} is not ready")
            if not self._control_characteristic:
                raise NotReadyError(
                    f"Device {self.mac_address} has no control characteristic"
                )

            for index, signal in enumerate(signals):
                _LOGGER.debug(
                    "Writing frame %d/%d to %s: %s",
                    index + 1,
                    len(signals),
                    self._control_characteristic,
                    signal.hex(),
                )
                try:
                    await self._connection.write(
                        self._control_characteristic,
                        signal,
                        response=True,
                    )
                except TransportError:
                    self._drop()
                    raise
