"""
Shared fixtures for the test suite.
"""

import pytest

from rainmaker_notify.models import Device, Node, Param
from rainmaker_notify.storage import NodeStorage, NotificationStore

SUITE = "group.test.rainmaker"


@pytest.fixture(autouse=True)
def fresh_config(monkeypatch):
    """Drop the cached global config so env changes never leak between tests."""
    monkeypatch.setattr("rainmaker_notify.core.config._config", None)


@pytest.fixture
def storage_dir(tmp_path):
    return str(tmp_path / "storage")


@pytest.fixture
def notification_store(storage_dir):
    return NotificationStore(SUITE, base_dir=storage_dir)


@pytest.fixture
def node_storage(storage_dir):
    return NodeStorage(SUITE, base_dir=storage_dir)


@pytest.fixture
def sample_nodes():
    light = Node(
        node_id="node-light",
        devices=[
            Device(
                name="Light",
                type="esp.device.lightbulb",
                params=[
                    Param(name="Name", type="esp.param.name", data_type="string", value="Living Room Light"),
                    Param(name="Power", type="esp.param.power", data_type="bool", value=False),
                    Param(name="Brightness", type="esp.param.brightness", data_type="int", value=50),
                ],
            )
        ],
    )
    multi = Node(
        node_id="node-multi",
        devices=[
            Device(name="Switch", device_name="Hall Switch"),
            Device(name="Fan"),
        ],
    )
    return [light, multi]


def make_payload(event_type=None, event_data=None, title="RainMaker", body="Original body", timestamp=1700000000.5):
    """Build a push payload in the shape delivered by the cloud."""
    event_data_payload = {}
    if event_type is not None:
        event_data_payload["event_type"] = event_type
    if event_data is not None:
        event_data_payload["event_data"] = event_data
    if timestamp is not None:
        event_data_payload["timestamp"] = timestamp
    return {
        "aps": {
            "alert": {
                "title": title,
                "body": body,
                "event_data_payload": event_data_payload,
            }
        }
    }
