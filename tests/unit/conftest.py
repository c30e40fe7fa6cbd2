"""Shared fakes for device tests."""

from __future__ import annotations

import asyncio

import pytest

from iqos import IQOSDevice
from iqos.exceptions import BLEConnectionError
from iqos.models.gatt import GattCharacteristic, GattService

BATTERY_UUID = "F8A54120-B041-11E4-9BE7-0002A5D5C51B"


def iluma_services() -> list[GattService]:
    return [
        GattService(
            uuid="180A",
            characteristics=[
                GattCharacteristic("2A24", ("read",)),
                GattCharacteristic("2A25", ("read",)),
                GattCharacteristic("2A28", ("read",)),
                GattCharacteristic("2A29", ("read",)),
            ],
        ),
        GattService(
            uuid="DAEBB240-B041-11E4-9E45-0002A5D5C51B",
            characteristics=[GattCharacteristic(BATTERY_UUID, ("read", "notify"))],
        ),
        GattService(
            uuid="FFE0",
            characteristics=[GattCharacteristic("FFE9", ("write",))],
        ),
    ]


def iluma_values() -> dict[str, bytes]:
    return {
        "2A24": b"IQOS ILUMA",
        "2A25": b"SN-0001\x00",
        "2A28": b"1.2.3",
        "2A29": b"Philip Morris Products S.A.",
        BATTERY_UUID: bytes([0x0F, 0x00, 0x4B, 0x18, 0x54, 0x0F, 0x64]),
    }


class FakeConnection:
    """In-memory stand-in for BLEConnection."""

    def __init__(
            self,
            services: list[GattService] | None = None,
            values: dict[str, bytes] | None = None,
            fail_connect: bool = False,
            connect_delay: float = 0.0,
            fail_discover: bool = False,
            fail_read: bool = False,
            fail_disconnect: bool = False,
            fail_write_at: int | None = None,
    ):
        self.services = iluma_services() if services is None else services
        self.values = iluma_values() if values is None else values
        self.fail_connect = fail_connect
        self.connect_delay = connect_delay
        self.fail_discover = fail_discover
        self.fail_read = fail_read
        self.fail_disconnect = fail_disconnect
        self.fail_write_at = fail_write_at

        self.connected = False
        self.connect_calls = 0
        self.reads: list[str] = []
        self.write_attempts = 0
        self.written: list[tuple[str, bytes, bool]] = []

    async def connect(self) -> None:
        self.connect_calls += 1
        if self.connect_delay:
            await asyncio.sleep(self.connect_delay)
        if self.fail_connect:
            raise BLEConnectionError("Failed to connect: out of range")
        self.connected = True

    async def discover_services(self) -> list[GattService]:
        if self.fail_discover:
            raise BLEConnectionError("Service discovery failed")
        return self.services

    async def read(self, characteristic_id: str) -> bytes:
        self.reads.append(characteristic_id)
        if self.fail_read:
            raise BLEConnectionError("Read failed: not permitted")
        return self.values.get(characteristic_id, b"")

    async def write(self, characteristic_id: str, payload: bytes, response: bool = True) -> None:
        index = self.write_attempts
        self.write_attempts += 1
        await asyncio.sleep(0)
        if self.fail_write_at is not None and index == self.fail_write_at:
            raise BLEConnectionError("Write failed: link lost")
        self.written.append((characteristic_id, payload, response))

    async def disconnect(self) -> None:
        self.connected = False
        if self.fail_disconnect:
            raise BLEConnectionError("Disconnect failed")

    @property
    def is_connected(self) -> bool:
        return self.connected


@pytest.fixture
def make_device():
    """Build an IQOSDevice wired to a FakeConnection."""

    def _make(model_number: str = "", **fake_kwargs) -> tuple[IQOSDevice, FakeConnection]:
        device = IQOSDevice(mac_address="AA:BB:CC:DD:EE:FF", model_number=model_number)
        fake = FakeConnection(**fake_kwargs)
        device._connection = fake  # Inject fake connection
        return device, fake

    return _make
