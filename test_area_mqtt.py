"""
Test MQTT Area Pub/Sub (Without Real Broker)
============================================

Exercises message formatting on the publisher side and message handling on
the subscriber side by feeding the subscriber callback directly.

Usage:
    pytest test_area_mqtt.py
"""

import json
from types import SimpleNamespace

import pytest

from areasel_draw import AreaCoordinates, LatLngBounds
from areasel_draw.logging import create_logger
from areasel_mqtt import (
    SCHEMA_VERSION,
    AreaPublisher,
    AreaSelectedMessage,
    AreaSubscriber,
    Timestamp,
)

TOPIC = "areasel/areas/test_selector"


@pytest.fixture
def area():
    return AreaCoordinates.from_bounds(
        LatLngBounds(south=10.0, west=20.0, north=10.5, east=20.5)
    )


@pytest.fixture
def publisher():
    return AreaPublisher(
        broker_host="localhost",
        topic=TOPIC,
        app_id="test_selector",
        logger=create_logger("test"),
    )


@pytest.fixture
def received():
    return []


@pytest.fixture
def subscriber(received):
    return AreaSubscriber(
        broker_host="localhost",
        topic=TOPIC,
        on_area=received.append,
        logger=create_logger("test"),
    )


def deliver(subscriber, payload):
    """Simulate the MQTT network thread handing over one message."""
    if not isinstance(payload, bytes):
        payload = json.dumps(payload).encode('utf-8')
    subscriber._on_message(None, None, SimpleNamespace(topic=TOPIC, payload=payload))


def test_message_serialization(publisher, area):
    msg = publisher.build_message(area)
    data = publisher.format_message(msg)

    assert data['schema_version'] == SCHEMA_VERSION
    assert data['app_id'] == "test_selector"
    assert data['sequence'] == 1
    assert data['coordinates'] == area.to_list()
    assert data['bounds'] == {'south': 10.0, 'west': 20.0, 'north': 10.5, 'east': 20.5}

    restored = AreaSelectedMessage.from_dict(json.loads(json.dumps(data)))
    assert restored == msg


def test_sequence_numbers_increase(publisher, area):
    sequences = [publisher.build_message(area).sequence for _ in range(3)]
    assert sequences == [1, 2, 3]


def test_publish_without_broker_returns_false(publisher, area):
    assert not publisher.is_connected()
    assert publisher.publish_selection(area) is False
    assert publisher.get_stats()['message_count'] == 0


def test_disconnect_without_connect_is_noop(publisher):
    publisher.disconnect()
    publisher.disconnect()
    assert not publisher.is_connected()


@pytest.mark.parametrize("field", ['schema_version', 'timestamp', 'app_id', 'sequence', 'coordinates'])
def test_missing_field_rejected(publisher, area, field):
    data = publisher.format_message(publisher.build_message(area))
    del data[field]

    with pytest.raises(ValueError, match="Missing"):
        AreaSelectedMessage.from_dict(data)


@pytest.mark.parametrize("override", [
    {'timestamp': "yesterday"},
    {'sequence': 0},
    {'sequence': "first"},
    {'app_id': ""},
    {'coordinates': [[10.5, 20.0], [10.5, 20.5], [10.0, 20.5], [10.0, 20.0]]},
])
def test_invalid_field_rejected(publisher, area, override):
    data = publisher.format_message(publisher.build_message(area))
    data.update(override)

    with pytest.raises(ValueError):
        AreaSelectedMessage.from_dict(data)


def test_subscriber_delivers_valid_area(subscriber, received, publisher, area):
    deliver(subscriber, publisher.format_message(publisher.build_message(area)))

    assert len(received) == 1
    assert received[0].area == area
    assert received[0].app_id == "test_selector"
    stats = subscriber.get_stats()
    assert stats['areas_received'] == 1
    assert stats['messages_rejected'] == 0


@pytest.mark.parametrize("payload", [
    b"{not json",
    b"\xff\xfe",
    [1, 2, 3],
    {'schema_version': "1.0"},
    {
        'schema_version': "1.0",
        'timestamp': Timestamp.now().value,
        'app_id': "test_selector",
        'sequence': 1,
        # SE first: not a NW, NE, SE, SW, NW ring
        'coordinates': [[10.0, 20.5], [10.0, 20.0], [10.5, 20.0], [10.5, 20.5], [10.0, 20.5]],
    },
])
def test_subscriber_rejects_bad_payloads(subscriber, received, payload):
    deliver(subscriber, payload)

    assert received == []
    stats = subscriber.get_stats()
    assert stats['areas_received'] == 0
    assert stats['messages_rejected'] == 1


def test_subscriber_survives_callback_error(publisher, area):
    def explode(msg):
        raise RuntimeError("dashboard offline")

    subscriber = AreaSubscriber(
        broker_host="localhost",
        topic=TOPIC,
        on_area=explode,
        logger=create_logger("test"),
    )

    deliver(subscriber, publisher.format_message(publisher.build_message(area)))
    deliver(subscriber, publisher.format_message(publisher.build_message(area)))

    assert subscriber.get_stats()['areas_received'] == 2


def test_subscriber_stop_without_connect_is_noop(subscriber):
    subscriber.stop()
    stats = subscriber.get_stats()
    assert stats['running'] is False
    assert stats['connected'] is False
