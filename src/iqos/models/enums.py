from __future__ import annotations

from enum import Enum

from ..exceptions import ConfigurationError


class ConnectionState(Enum):
    """Connection lifecycle of an IQOS device."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    DISCOVERING = "discovering"
    READY = "ready"


class BrightnessLevel(Enum):
    """ILUMA holder LED brightness."""
    HIGH = "high"
    LOW = "low"

    @classmethod
    def from_str(cls, value: str) -> BrightnessLevel:
        """Parse a brightness level, case-insensitive.

        Raises:
            ConfigurationError: If value is not "high" or "low"
        """
        try:
            return cls(value.lower())
        except ValueError as e:
            raise ConfigurationError(f"Invalid brightness level: {value!r}") from e

    def __str__(self) -> str:
        return self.value


class ToggleFeature(Enum):
    """ILUMA features switched on or off with a single frame."""
    SMARTGESTURE = "smartgesture"
    AUTOSTART = "autostart"
    FLEXPUFF = "flexpuff"

    @classmethod
    def from_str(cls, value: str) -> ToggleFeature:
        """Parse a feature name, case-insensitive.

        Raises:
            ConfigurationError: If value is not a known feature
        """
        try:
            return cls(value.lower())
        except ValueError as e:
            raise ConfigurationError(f"Invalid feature: {value!r}") from e

    def __str__(self) -> str:
        return self.value
