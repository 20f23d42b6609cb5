"""
Area Selector CLI - Main entry point.

Watches the MQTT area topic and prints each selected rectangle, or checks a
YAML config file.
"""

import argparse
import sys
import threading
from typing import Optional

import yaml

from areasel_app.config import AppConfig
from areasel_app.presenter import format_coordinate_rows
from areasel_draw.logging import create_logger
from areasel_mqtt import AreaSelectedMessage, AreaSubscriber

DEFAULT_TOPIC = "areasel/areas/#"


def print_area(msg: AreaSelectedMessage, precision: int = 6) -> None:
    """Print one received area in the presenter's row format."""
    print(f"📍 {msg.app_id} #{msg.sequence} ({msg.timestamp.value})")
    for row in format_coordinate_rows(msg.area, precision):
        print(f"   {row}")


def watch(
    broker: str = "localhost",
    port: int = 1883,
    topic: str = DEFAULT_TOPIC,
    precision: int = 6,
    stop_event: Optional[threading.Event] = None,
) -> int:
    """
    Print areas until Ctrl-C (or until stop_event is set).

    Returns:
        Process exit code
    """
    subscriber = AreaSubscriber(
        broker_host=broker,
        broker_port=port,
        topic=topic,
        on_area=lambda msg: print_area(msg, precision),
        logger=create_logger("watcher"),
        client_id="areasel_cli_watch",
    )

    if not subscriber.connect(timeout=5.0):
        print(
            f"❌ Unable to connect to MQTT broker at {broker}:{port}. Is mosquitto running?",
            file=sys.stderr,
        )
        return 1

    subscriber.start()
    print(f"👀 Watching {topic} (Ctrl-C to quit)")

    stop_event = stop_event or threading.Event()
    try:
        while not stop_event.wait(timeout=0.5):
            pass
    except KeyboardInterrupt:
        print()
    finally:
        subscriber.stop()

    stats = subscriber.get_stats()
    print(f"✅ {stats['areas_received']} areas received, {stats['messages_rejected']} rejected")
    return 0


def show_config(config_path: str) -> int:
    """Validate a config file and print the resolved configuration."""
    config = AppConfig.from_yaml(config_path)
    data = config.to_dict()
    if data.get("mqtt_config", {}).get("password"):
        data["mqtt_config"]["password"] = "***"
    print(yaml.safe_dump(data, sort_keys=False, allow_unicode=True), end="")
    if config.area_topic:
        print(f"# area topic: {config.area_topic}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="areasel-cli",
        description="Area Selector CLI - watch selected areas over MQTT",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Print every area any selector publishes
  areasel-cli watch

  # Only one selector, custom broker
  areasel-cli --broker mqtt.local watch --topic areasel/areas/moscow_selector

  # Check a config file
  areasel-cli show-config config/area_selector.yaml
"""
    )

    parser.add_argument(
        "--broker",
        default="localhost",
        help="MQTT broker host (default: localhost)"
    )
    parser.add_argument(
        "--port",
        type=int,
        default=1883,
        help="MQTT broker port (default: 1883)"
    )

    subparsers = parser.add_subparsers(dest='command', help='Available commands')

    watch_parser = subparsers.add_parser('watch', help='Print selected areas as they arrive')
    watch_parser.add_argument(
        '--topic',
        default=DEFAULT_TOPIC,
        help=f"Area topic or wildcard (default: {DEFAULT_TOPIC})"
    )
    watch_parser.add_argument(
        '--precision',
        type=int,
        default=6,
        help="Decimals per coordinate (default: 6)"
    )

    config_parser = subparsers.add_parser('show-config', help='Validate and print a config file')
    config_parser.add_argument('config', help='Path to area selector YAML')

    return parser


def main(argv=None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        if args.command == 'watch':
            code = watch(args.broker, args.port, args.topic, args.precision)
        elif args.command == 'show-config':
            code = show_config(args.config)
        else:
            parser.error(f"Unknown command: {args.command}")

    except (FileNotFoundError, ValueError) as e:
        print(f"❌ Error: {e}", file=sys.stderr)
        sys.exit(1)

    sys.exit(code)


if __name__ == '__main__':
    main()
