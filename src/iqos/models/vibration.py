"""Vibration trigger settings for ILUMA holders."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

# Option names accepted by VibrationSettings.from_args
_ARG_FIELDS = {
    "charge": "when_charging_start",
    "heating": "when_heating_start",
    "starting": "when_starting_to_use",
    "terminated": "when_manually_terminated",
    "puffend": "when_puff_end",
}


@dataclass(frozen=True, slots=True)
class VibrationSettings:
    """Which events make the holder vibrate.

    Note: when_charging_start is accepted for completeness but has no known
    register bit, so it never changes the encoded frame.
    """

    when_charging_start: bool = False
    when_heating_start: bool = False
    when_starting_to_use: bool = False
    when_puff_end: bool = False
    when_manually_terminated: bool = False

    @classmethod
    def from_args(cls, args: Sequence[str]) -> VibrationSettings:
        """Parse option/value pairs such as ``["heating", "on", "puffend", "off"]``.

        A value of "on" enables the option, anything else disables it.
        Unknown options and a trailing option without a value are ignored.
        """
        values: dict[str, bool] = {}
        for i in range(0, len(args) - 1, 2):
            field_name = _ARG_FIELDS.get(args[i])
            if field_name is not None:
                values[field_name] = args[i + 1] == "on"
        return cls(**values)
