"""Scan for IQOS devices or change ILUMA settings.

Usage:
    uv run python examples/iluma_control.py scan --duration 10
    uv run python examples/iluma_control.py info AA:BB:CC:DD:EE:FF
    uv run python examples/iluma_control.py brightness AA:BB:CC:DD:EE:FF high
    uv run python examples/iluma_control.py autostart AA:BB:CC:DD:EE:FF on
    uv run python examples/iluma_control.py vibration AA:BB:CC:DD:EE:FF heating on puffend off
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys

from iqos import (
    IQOSDevice,
    IQOSError,
    ToggleFeature,
    VibrationSettings,
    discover_devices,
)


async def scan(duration: float) -> None:
    """Print IQOS devices seen during the scan."""
    print(f"Scanning for IQOS devices ({duration:.1f}s)...")
    devices = await discover_devices(timeout=duration)
    if not devices:
        print("No devices found")
    for address, device in sorted(devices.items()):
        print(f"  {address}: {device.name}")


async def run_command(args: argparse.Namespace) -> None:
    """Connect to one device and run the requested command."""
    async with IQOSDevice(args.address) as device:
        if args.command == "info":
            print(f"model={device.model_number}")
            print(f"serial={device.serial_number}")
            print(f"software={device.software_revision}")
            print(f"manufacturer={device.manufacturer_name}")
            print(f"battery={device.battery_level}%")
            print(f"iluma={device.is_iluma()}")
        elif args.command == "brightness":
            await device.iluma.update_brightness(args.level)
            print(f"Brightness set to {args.level.lower()}")
        elif args.command == "vibration":
            settings = VibrationSettings.from_args(args.options)
            await device.iluma.update_vibration_settings(settings)
            print(f"Vibration settings applied: {settings}")
        else:
            feature = ToggleFeature.from_str(args.command)
            await device.iluma.update_toggle(feature, args.state == "on")
            print(f"{feature} {args.state}")


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Control IQOS ILUMA devices over BLE.")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    scan_parser = sub.add_parser("scan", help="Scan for IQOS devices")
    scan_parser.add_argument(
        "--duration",
        type=float,
        default=10.0,
        help="Scan duration in seconds. Default: 10",
    )

    info_parser = sub.add_parser("info", help="Show device information")
    info_parser.add_argument("address")

    brightness_parser = sub.add_parser("brightness", help="Set LED brightness")
    brightness_parser.add_argument("address")
    brightness_parser.add_argument("level", help="high or low")

    vibration_parser = sub.add_parser("vibration", help="Set vibration triggers")
    vibration_parser.add_argument("address")
    vibration_parser.add_argument(
        "options",
        nargs="+",
        help="Pairs of charge|heating|starting|terminated|puffend and on|off",
    )

    for feature in ToggleFeature:
        toggle_parser = sub.add_parser(feature.value, help=f"Enable or disable {feature}")
        toggle_parser.add_argument("address")
        toggle_parser.add_argument("state", choices=["on", "off"])

    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        if args.command == "scan":
            asyncio.run(scan(args.duration))
        else:
            asyncio.run(run_command(args))
    except IQOSError as err:
        print(f"Error: {err}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
