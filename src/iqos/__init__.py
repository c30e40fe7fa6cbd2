"""IQOS BLE Protocol Package.

  Pure Python package for controlling IQOS heated-tobacco devices over BLE.
  """

from .device import IQOSDevice
from .discovery import discover_devices
from .exceptions import (
    BLEConnectionError,
    BLETimeoutError,
    ConfigurationError,
    IncompatibleModelError,
    IQOSError,
    NotReadyError,
    TransportError,
)
from .iluma import IlumaControls
from .models import (
    BrightnessLevel,
    ConnectionState,
    DeviceInfo,
    GattCharacteristic,
    GattService,
    ToggleFeature,
    VibrationSettings,
)
from .protocol import CONTROL_CHARACTERISTIC_PREFIX
from .transport import BLEConnection

__version__ = "0.1.0"

__all__ = [
    # Main API
    "IQOSDevice",
    "IlumaControls",
    "BLEConnection",
    "discover_devices",
    # Exceptions
    "IQOSError",
    "TransportError",
    "BLEConnectionError",
    "BLETimeoutError",
    "ConfigurationError",
    "IncompatibleModelError",
    "NotReadyError",
    # Models
    "BrightnessLevel",
    "ConnectionState",
    "DeviceInfo",
    "GattCharacteristic",
    "GattService",
    "ToggleFeature",
    "VibrationSettings",
    # Constants
    "CONTROL_CHARACTERISTIC_PREFIX",
]
