"""Test control characteristic resolution."""

import pytest

from iqos.models.gatt import GattCharacteristic, GattService
from iqos.protocol.characteristics import (
    find_characteristic,
    format_uuid,
    resolve_control_characteristic,
)


def _service(uuid: str, *chars: str) -> GattService:
    return GattService(uuid=uuid, characteristics=[GattCharacteristic(c) for c in chars])


class TestFormatUuid:
    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("0000ffe9-0000-1000-8000-00805f9b34fb", "FFE9"),
            ("00002A24-0000-1000-8000-00805F9B34FB", "2A24"),
            (
                "f8a54120-b041-11e4-9be7-0002a5d5c51b",
                "F8A54120-B041-11E4-9BE7-0002A5D5C51B",
            ),
        ],
    )
    def test_format(self, raw, expected):
        assert format_uuid(raw) == expected


class TestResolveControlCharacteristic:
    def test_finds_match(self):
        services = [_service("180A", "2A24", "2A25"), _service("FFE0", "FFE4", "FFE9")]
        assert resolve_control_characteristic(services) == "FFE9"

    def test_returns_full_identifier(self):
        services = [_service("FFE0", "FFE9ABCD-0000-1000-8000-00805F9B34FB")]
        assert resolve_control_characteristic(services) == "FFE9ABCD-0000-1000-8000-00805F9B34FB"

    def test_first_match_wins(self):
        services = [
            _service("AAAA", "FFE9-FIRST"),
            _service("BBBB", "FFE9-SECOND"),
        ]
        assert resolve_control_characteristic(services) == "FFE9-FIRST"

    def test_no_match(self):
        services = [_service("180A", "2A24"), _service("FFE0", "FFE4")]
        assert resolve_control_characteristic(services) == ""

    def test_empty_tree(self):
        assert resolve_control_characteristic([]) == ""

    def test_prefix_is_case_sensitive(self):
        assert resolve_control_characteristic([_service("FFE0", "ffe9")]) == ""


class TestFindCharacteristic:
    def test_found(self):
        services = [_service("180A", "2A24", "2A25")]
        assert find_characteristic(services, "2A25") == GattCharacteristic("2A25")

    def test_missing(self):
        assert find_characteristic([_service("180A", "2A24")], "2A29") is None
