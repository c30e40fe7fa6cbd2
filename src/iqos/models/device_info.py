"""Device identity snapshot model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class DeviceInfo:
    """Identity and battery data of one IQOS unit."""

    model_number: str = ""
    serial_number: str = ""
    software_revision: str = ""
    manufacturer_name: str = ""
    battery_level: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.battery_level <= 0xFF:
            raise ValueError(
                f"battery_level out of range: {self.battery_level} (must be 0-255)"
            )
