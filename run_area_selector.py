"""
Area Selector Demo
==================

Demonstrates the draw controller without a browser: rectangles are "drawn"
on a headless map surface and the selected area is printed (and published
over MQTT when a broker is given).

Architecture:
- areasel_map: InMemoryMapSurface (layers, tools, events)
- areasel_draw: DrawController (single rectangle, closed ring)
- areasel_app: format_coordinate_rows (presenter rows)
- areasel_mqtt: AreaPublisher (optional sink)

Usage:
    python run_area_selector.py
    python run_area_selector.py --broker localhost
"""

import argparse

from areasel_app import format_coordinate_rows
from areasel_draw import AreaCoordinates, attach
from areasel_draw.logging import create_logger
from areasel_map import InMemoryMapSurface
from areasel_mqtt import AreaPublisher

# (south, west, north, east) drags around central Moscow
DRAGS = [
    (55.70, 37.50, 55.80, 37.70),
    (55.74, 37.58, 55.76, 37.64),
]


def main():
    parser = argparse.ArgumentParser(description="Headless area selector demo")
    parser.add_argument("--broker", help="MQTT broker host (omit to skip publishing)")
    parser.add_argument("--port", type=int, default=1883)
    args = parser.parse_args()

    # 1. Optional MQTT sink
    publisher = None
    if args.broker:
        publisher = AreaPublisher(
            broker_host=args.broker,
            broker_port=args.port,
            topic="areasel/areas/demo",
            app_id="demo",
            logger=create_logger("publisher"),
        )
        if not publisher.connect(timeout=5.0):
            print(f"⚠️  Broker {args.broker}:{args.port} unreachable, printing only")

    # 2. Callback: print rows, then publish
    def on_area_selected(area: AreaCoordinates) -> None:
        print("📍 Selected area")
        for row in format_coordinate_rows(area):
            print(f"   {row}")
        if publisher is not None:
            publisher.publish_selection(area)

    # 3. Attach to a headless surface and replay the drags
    surface = InMemoryMapSurface()
    print("🗺️  Drawing rectangles...")
    with attach(surface, on_area_selected):
        for south, west, north, east in DRAGS:
            surface.draw_rectangle(south=south, west=west, north=north, east=east)

    # 4. Everything released on exit
    print()
    print("✓ Demo completed!")
    print(f"  Surface clean: {surface.is_clean()}")
    if publisher is not None:
        print(f"  Published: {publisher.get_stats()['message_count']}")
        publisher.disconnect()


if __name__ == "__main__":
    main()
