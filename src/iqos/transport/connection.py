"""BLE connection management."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from bleak import BleakClient, BleakScanner
from bleak_retry_connector import BleakClientWithServiceCache, establish_connection

from ..exceptions import BLEConnectionError, BLETimeoutError
from ..models.gatt import GattCharacteristic, GattService
from ..protocol.characteristics import format_uuid

if TYPE_CHECKING:
    from bleak.backends.characteristic import BleakGATTCharacteristic
    from bleak.backends.device import BLEDevice

_LOGGER = logging.getLogger(__name__)


class BLEConnection:
    """Manages BLE connection to an IQOS device.

    Features:
    - Automatic retry logic with bleak-retry-connector
    - Service caching for faster reconnections
    - Characteristics addressed by formatted identifier ("FFE9", ...)
    """

    def __init__(
            self,
            mac_address: str,
            ble_device: BLEDevice | None = None,
            timeout: float = 10.0,
            max_attempts: int = 4,
            use_services_cache: bool = True,
    ):
        """Initialize BLE connection manager.

        Args:
            mac_address: Device MAC address
            ble_device: Optional BLEDevice from a previous scan
            timeout: Connection timeout in seconds (default: 10)
            max_attempts: Maximum connection attempts for bleak-retry-connector (default: 4)
            use_services_cache: Enable GATT service caching for faster reconnections (default: True)
        """
        self.mac_address = mac_address
        self.ble_device = ble_device
        self.timeout = timeout
        self.max_attempts = max_attempts
        self.use_services_cache = use_services_cache

        self._client: BleakClient | None = None
        self._characteristics: dict[str, BleakGATTCharacteristic] = {}

    async def connect(self) -> None:
        """Establish BLE connection to device.

        Uses bleak-retry-connector for automatic retry logic and service caching.

        Raises:
            BLEConnectionError: If connection fails
            BLETimeoutError: If connection times out
        """
        if self._client and self._client.is_connected:
            return  # Already connected

        try:
            _LOGGER.debug(
                "Connecting to %s with bleak-retry-connector (max_attempts=%d)",
                self.mac_address,
                self.max_attempts
            )

            # Resolve MAC to BLEDevice if not provided
            if self.ble_device:
                device = self.ble_device
            else:
                device = await BleakScanner.find_device_by_address(
                    self.mac_address,
                    timeout=self.timeout
                )
                if device is None:
                    raise BLEConnectionError(
                        f"Device {self.mac_address} not found during scan"
                    )

            self._client = await establish_connection(
                client_class=BleakClientWithServiceCache,
                device=device,
                name=device.name or self.mac_address,
                max_attempts=self.max_attempts,
                use_services_cache=self.use_services_cache,
                timeout=self.timeout,
            )

            _LOGGER.debug("Connected to %s", self.mac_address)

        except BLEConnectionError:
            raise
        except asyncio.TimeoutError as e:
            raise BLETimeoutError(
                f"Connection timeout after {self.timeout}s"
            ) from e
        except Exception as e:
            raise BLEConnectionError(
                f"Failed to connect: {e}"
            ) from e

    async def disconnect(self) -> None:
        """Disconnect from device.

        Raises:
            BLEConnectionError: If the stack reports a disconnect failure
        """
        client = self._client
        self._client = None
        self._characteristics = {}
        if client is None or not client.is_connected:
            return

        _LOGGER.debug("Disconnecting from %s", self.mac_address)
        try:
            await client.disconnect()
        except Exception as e:
            raise BLEConnectionError(f"Disconnect failed: {e}") from e

    async def discover_services(self) -> list[GattService]:
        """Enumerate services and characteristics of the connected device.

        Returns:
            Services in discovery order, with formatted identifiers

        Raises:
            BLEConnectionError: If not connected
        """
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        services: list[GattService] = []
        characteristics: dict[str, BleakGATTCharacteristic] = {}
        for service in self._client.services:
            chars: list[GattCharacteristic] = []
            for char in service.characteristics:
                uuid = format_uuid(char.uuid)
                characteristics.setdefault(uuid, char)
                chars.append(GattCharacteristic(uuid=uuid, properties=tuple(char.properties)))
            services.append(GattService(uuid=format_uuid(service.uuid), characteristics=chars))

        self._characteristics = characteristics
        _LOGGER.debug(
            "Discovered %d services, %d characteristics",
            len(services),
            len(characteristics),
        )
        return services

    def _get_characteristic(self, characteristic_id: str) -> BleakGATTCharacteristic:
        if not self._client or not self._client.is_connected:
            raise BLEConnectionError("Not connected")

        char = self._characteristics.get(characteristic_id)
        if char is None:
            raise BLEConnectionError(
                f"Characteristic {characteristic_id} not discovered"
            )
        return char

    async def write(
            self,
            characteristic_id: str,
            payload: bytes,
            response: bool = True,
    ) -> None:
        """Write payload to a characteristic.

        Args:
            characteristic_id: Formatted characteristic identifier
            payload: Bytes to write
            response: Wait for write confirmation (default: True)

        Raises:
            BLEConnectionError: If not connected or write fails
        """
        char = self._get_characteristic(characteristic_id)
        try:
            await self._client.write_gatt_char(char, payload, response=response)
        except Exception as e:
            raise BLEConnectionError(f"Write failed: {e}") from e

    async def read(self, characteristic_id: str) -> bytes:
        """Read the value of a characteristic.

        Raises:
            BLEConnectionError: If not connected or read fails
        """
        char = self._get_characteristic(characteristic_id)
        try:
            return bytes(await self._client.read_gatt_char(char))
        except Exception as e:
            raise BLEConnectionError(f"Read failed: {e}") from e

    @property
    def is_connected(self) -> bool:
        """Check if currently connected to device."""
        return self._client is not None and self._client.is_connected
