"""Transport-neutral snapshot of a discovered GATT tree."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class GattCharacteristic:
    """One discovered characteristic.

    Attributes:
        uuid: Identifier text, e.g. "FFE9" or "F8A54120-B041-11E4-9BE7-0002A5D5C51B"
        properties: GATT properties reported by the stack ("read", "write", ...)
    """

    uuid: str
    properties: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class GattService:
    """One discovered service with its characteristics in discovery order."""

    uuid: str
    characteristics: list[GattCharacteristic] = field(default_factory=list)
