"""Test ILUMA command dispatch on IQOSDevice."""

from __future__ import annotations

import asyncio

import pytest

from iqos import BrightnessLevel, ConnectionState, IlumaControls, VibrationSettings
from iqos.exceptions import (
    BLEConnectionError,
    ConfigurationError,
    IncompatibleModelError,
    NotReadyError,
    TransportError,
)
from iqos.models.gatt import GattCharacteristic, GattService

HIGH_FRAMES = [
    bytes.fromhex("00c0462364000000 4f"),
    bytes.fromhex("00c00223c3"),
    bytes.fromhex("00c9442464000000 34"),
]
LOW_FRAMES = [
    bytes.fromhex("00c046231e000000 e1"),
    bytes.fromhex("00c00223c3"),
    bytes.fromhex("00c944241e000000 9a"),
]


async def _ready(make_device, **kwargs):
    device, fake = make_device(**kwargs)
    await device.connect()
    await device.initialize()
    return device, fake


@pytest.mark.asyncio
async def test_smartgesture_on_writes_one_frame(make_device) -> None:
    """An ILUMA device sends exactly the smartgesture enable frame."""
    device, fake = await _ready(make_device, model_number="IQOS ILUMA")

    await device.iluma.update_smartgesture(True)

    assert fake.written == [
        ("FFE9", bytes([0x00, 0xC9, 0x47, 0x24, 0x04, 0x01, 0x00, 0x00, 0x3C]), True),
    ]


@pytest.mark.asyncio
async def test_autostart_on_non_iluma_writes_nothing(make_device) -> None:
    """A non-ILUMA model is rejected before any write."""
    services = [GattService("FFE0", [GattCharacteristic("FFE9")])]
    device, fake = await _ready(make_device, model_number="ONE", services=services)

    with pytest.raises(IncompatibleModelError, match="not an IQOS ILUMA"):
        await device.iluma.update_autostart(True)

    assert fake.write_attempts == 0
    assert device.state is ConnectionState.READY


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "command",
    [
        lambda iluma: iluma.update_brightness(BrightnessLevel.HIGH),
        lambda iluma: iluma.update_vibration_settings(VibrationSettings(when_puff_end=True)),
        lambda iluma: iluma.update_smartgesture(False),
        lambda iluma: iluma.update_autostart(False),
        lambda iluma: iluma.update_flexpuff(True),
        lambda iluma: iluma.update_toggle("flexpuff", True),
    ],
)
async def test_every_command_is_model_gated(make_device, command) -> None:
    device, fake = make_device(model_number="ONE")

    with pytest.raises(IncompatibleModelError):
        await command(IlumaControls(device))

    assert fake.write_attempts == 0
    assert fake.connect_calls == 0


@pytest.mark.asyncio
async def test_brightness_high_writes_three_frames_in_order(make_device) -> None:
    device, fake = await _ready(make_device)

    await device.iluma.update_brightness(BrightnessLevel.HIGH)

    assert fake.written == [("FFE9", frame, True) for frame in HIGH_FRAMES]


@pytest.mark.asyncio
async def test_brightness_accepts_text(make_device) -> None:
    device, fake = await _ready(make_device)

    await device.iluma.update_brightness("LOW")

    assert [payload for _, payload, _ in fake.written] == LOW_FRAMES


@pytest.mark.asyncio
async def test_brightness_invalid_text_writes_nothing(make_device) -> None:
    device, fake = await _ready(make_device)

    with pytest.raises(ConfigurationError):
        await device.iluma.update_brightness("medium")

    assert fake.write_attempts == 0


@pytest.mark.asyncio
async def test_brightness_aborts_on_first_failed_frame(make_device) -> None:
    """Frames after a failed write are not sent and earlier ones stay sent."""
    device, fake = await _ready(make_device, fail_write_at=1)

    with pytest.raises(BLEConnectionError, match="link lost"):
        await device.iluma.update_brightness(BrightnessLevel.HIGH)

    assert fake.write_attempts == 2
    assert fake.written == [("FFE9", HIGH_FRAMES[0], True)]
    assert device.state is ConnectionState.DISCONNECTED


@pytest.mark.asyncio
async def test_vibration_settings_frame(make_device) -> None:
    device, fake = await _ready(make_device)

    await device.iluma.update_vibration_settings(
        VibrationSettings(when_heating_start=True, when_puff_end=True)
    )

    assert fake.written == [("FFE9", bytes.fromhex("00c9442310000101 42"), True)]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("method", "enable", "expected"),
    [
        ("update_smartgesture", False, "00c9472404000000 57"),
        ("update_autostart", True, "00c9472401010000 3f"),
        ("update_autostart", False, "00c9472401000000 54"),
        ("update_flexpuff", True, "00d2452203010000 0a"),
        ("update_flexpuff", False, "00d2452203000000 0a"),
    ],
)
async def test_toggle_commands(make_device, method, enable, expected) -> None:
    device, fake = await _ready(make_device)

    await getattr(device.iluma, method)(enable)

    assert fake.written == [("FFE9", bytes.fromhex(expected), True)]


@pytest.mark.asyncio
async def test_missing_control_characteristic_is_not_ready(make_device) -> None:
    """No FFE9 characteristic means commands fail with NotReadyError, not a transport error."""
    services = [GattService("FFE0", [GattCharacteristic("FFE4")])]
    device, fake = await _ready(make_device, model_number="IQOS ILUMA", services=services)

    with pytest.raises(NotReadyError, match="no control characteristic") as exc_info:
        await device.iluma.update_autostart(True)

    assert not isinstance(exc_info.value, TransportError)
    assert fake.write_attempts == 0


@pytest.mark.asyncio
async def test_command_before_initialize_is_not_ready(make_device) -> None:
    device, fake = make_device(model_number="IQOS ILUMA")
    await device.connect()

    with pytest.raises(NotReadyError, match="not ready"):
        await device.iluma.update_flexpuff(True)

    assert fake.write_attempts == 0


@pytest.mark.asyncio
async def test_concurrent_commands_do_not_interleave(make_device) -> None:
    device, fake = await _ready(make_device)

    await asyncio.gather(
        device.iluma.update_brightness(BrightnessLevel.HIGH),
        device.iluma.update_brightness(BrightnessLevel.LOW),
    )

    assert [payload for _, payload, _ in fake.written] == HIGH_FRAMES + LOW_FRAMES


class _MinimalDevice:
    """Device variant that only provides the command-set hooks."""

    mac_address = "11:22:33:44:55:66"

    def __init__(self, model: str):
        self.model = model
        self.sent: list[list[bytes]] = []

    def is_iluma(self) -> bool:
        return "ILUMA" in self.model

    async def write_signals(self, signals) -> None:
        self.sent.append(list(signals))


@pytest.mark.asyncio
async def test_controls_drive_any_device_with_write_signals() -> None:
    device = _MinimalDevice("IQOS ILUMA")

    await IlumaControls(device).update_brightness(BrightnessLevel.LOW)
    await IlumaControls(device).update_autostart(False)

    assert device.sent == [LOW_FRAMES, [bytes.fromhex("00c9472401000000 54")]]


@pytest.mark.asyncio
async def test_controls_gate_any_device_variant() -> None:
    device = _MinimalDevice("IQOS ONE")

    with pytest.raises(IncompatibleModelError):
        await IlumaControls(device).update_flexpuff(True)

    assert device.sent == []
