"""Exception hierarchy for the IQOS BLE package."""


class IQOSError(Exception):
    """Base exception for all IQOS errors."""


class TransportError(IQOSError):
    """Any failure reported by the BLE transport."""


class BLEConnectionError(TransportError):
    """Connection, discovery, read or write failed at the BLE layer."""


class BLETimeoutError(TransportError):
    """BLE operation did not complete within the configured timeout."""


class ConfigurationError(IQOSError):
    """Invalid user supplied setting (e.g. an unknown brightness level)."""


class IncompatibleModelError(IQOSError):
    """Operation is not supported by this device model."""

    def __init__(self, message: str = "This device is not an IQOS ILUMA model"):
        super().__init__(message)


class NotReadyError(IQOSError):
    """Device is not connected and initialized, or has no control characteristic."""
