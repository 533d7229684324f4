"""
Tests for push payload parsing and classification.
"""

import json
import time

import pytest

from rainmaker_notify.notifications import (
    EventPayload,
    NotificationClassifier,
    NotificationEventType,
    classify,
    combined_device_names,
)
from rainmaker_notify.notifications.classifier import format_param_value

from conftest import make_payload


SHARING = NotificationEventType.NODE_SHARING_ADD.value


class TestEventPayload:
    """Test payload parsing defaults."""
    
    def test_full_payload(self):
        payload = EventPayload.from_user_info(
            make_payload("rmaker.event.node_connected", {"node_id": "n1"}, timestamp=1700000000.75)
        )
        
        assert payload.event_type == NotificationEventType.NODE_CONNECTED
        assert payload.event_data == {"node_id": "n1"}
        assert payload.notification.title == "RainMaker"
        assert payload.notification.body == "Original body"
        assert payload.notification.timestamp == 1700000000.75
    
    def test_missing_alert_fields_default(self):
        before = time.time()
        payload = EventPayload.from_user_info({"aps": {}})
        
        assert payload.event_type is None
        assert payload.event_data == {}
        assert payload.notification.title == ""
        assert payload.notification.body == ""
        assert payload.notification.timestamp >= before
    
    def test_wrong_types_are_ignored(self):
        payload = EventPayload.from_user_info({
            "aps": {"alert": {
                "title": 42,
                "event_data_payload": {"event_type": 7, "event_data": "x", "timestamp": "soon"},
            }}
        })
        
        assert payload.notification.title == ""
        assert payload.event_type is None
        assert payload.event_data == {}
    
    def test_integer_timestamp(self):
        payload = EventPayload.from_user_info(make_payload(timestamp=1700000000))
        
        assert payload.notification.timestamp == 1700000000.0
    
    @pytest.mark.parametrize("timestamp", [float("inf"), float("-inf"), float("nan"), 10 ** 400])
    def test_non_finite_timestamp_falls_back_to_now(self, timestamp):
        before = time.time()
        payload = EventPayload.from_user_info(make_payload(timestamp=timestamp))
        
        assert before <= payload.notification.timestamp <= time.time()


class TestClassifierWithoutNodes:
    """Classification when no node details are cached."""
    
    def test_unknown_event_type_is_dropped(self):
        assert classify(make_payload("rmaker.event.something_else", {})) is None
    
    def test_missing_event_type_is_dropped(self):
        assert classify(make_payload(None, {"node_id": "n1"})) is None
    
    def test_not_a_push_payload_is_dropped(self):
        assert classify({}) is None
    
    @pytest.mark.parametrize("event_type,body", [
        ("rmaker.event.user_node_added", "New device(s) are added. Tap to view."),
        ("rmaker.event.user_node_removed", "Some device(s) were removed. Tap to view."),
        ("rmaker.event.node_connected", "Some device(s) are now online. Tap to view."),
        ("rmaker.event.node_disconnected", "Some device(s) went offline. Tap to view."),
        ("rmaker.event.alert", "Alert received from a device."),
    ])
    def test_generic_bodies(self, event_type, body):
        notification = classify(make_payload(event_type, {"nodes": ["n1"], "node_id": "n1"}))
        
        assert notification.body == body
        assert notification.title == "RainMaker"
        assert notification.timestamp == 1700000000.5
    
    def test_sharing_accepted(self):
        notification = classify(make_payload(SHARING, {
            "accept": True, "secondary_user_name": "bob@example.com", "nodes": ["n1"],
        }))
        
        assert notification.body == "bob@example.com accepted sharing request for device(s)."
    
    def test_sharing_declined(self):
        notification = classify(make_payload(SHARING, {
            "accept": False, "secondary_user_name": "bob@example.com", "nodes": ["n1"],
        }))
        
        assert notification.body == "bob@example.com declined sharing request for device(s)."
    
    def test_sharing_request(self):
        notification = classify(make_payload(SHARING, {
            "primary_user_name": "alice@example.com",
            "metadata": {"devices": [{"name": "Light"}, {"name": "Fan"}]},
        }))
        
        assert notification.body == (
            "alice@example.com wants to share Light and Fan with you. Tap to accept or decline."
        )
    
    def test_sharing_request_without_metadata(self):
        notification = classify(make_payload(SHARING, {"primary_user_name": "alice@example.com"}))
        
        assert notification.body.startswith("alice@example.com wants to share device(s) with you.")
    
    def test_sharing_without_user_keeps_payload_body(self):
        notification = classify(make_payload(SHARING, {"accept": True}))
        
        assert notification.body == "Original body"
    
    def test_alert_string(self):
        body = json.dumps({"esp.alert.str": "Temperature too high"})
        notification = classify(make_payload("rmaker.event.alert", {"message_body": body}))
        
        assert notification.body == "Temperature too high"
    
    def test_alert_params_without_node_cache_use_keys(self):
        body = json.dumps({"Sensor": {"Temperature": 41.5}})
        notification = classify(make_payload("rmaker.event.alert", {"message_body": body, "node_id": "n1"}))
        
        assert notification.body == "Sensor reported Temperature: 41.5."
    
    def test_alert_unreadable_body(self):
        notification = classify(make_payload("rmaker.event.alert", {"message_body": "{oops"}))
        
        assert notification.body == "Alert received from a device."


class TestClassifierWithNodes:
    """Classification resolving device names from the node cache."""
    
    @pytest.fixture
    def classifier(self, node_storage, sample_nodes):
        node_storage.save_node_details(sample_nodes)
        return NotificationClassifier(node_storage)
    
    def test_disconnected_single_device(self, classifier):
        notification = classifier.classify(make_payload("rmaker.event.node_disconnected", {"node_id": "node-light"}))
        
        assert notification.body == "Living Room Light is now offline."
    
    def test_connected_multiple_devices(self, classifier):
        notification = classifier.classify(make_payload("rmaker.event.node_connected", {"node_id": "node-multi"}))
        
        assert notification.body == "Hall Switch, Fan are now online."
    
    def test_disconnected_unknown_node_keeps_generic(self, classifier):
        notification = classifier.classify(make_payload("rmaker.event.node_disconnected", {"node_id": "other"}))
        
        assert notification.body == "Some device(s) went offline. Tap to view."
    
    def test_associated(self, classifier):
        notification = classifier.classify(make_payload("rmaker.event.user_node_added", {"nodes": ["node-light"]}))
        
        assert notification.body == "Living Room Light is added."
    
    def test_disassociated_multiple_nodes(self, classifier):
        notification = classifier.classify(
            make_payload("rmaker.event.user_node_removed", {"nodes": ["node-light", "node-multi"]})
        )
        
        assert notification.body == "Living Room Light, Hall Switch, Fan are removed."
    
    def test_sharing_accepted_names_devices(self, classifier):
        notification = classifier.classify(make_payload(SHARING, {
            "accept": True, "secondary_user_name": "bob", "nodes": ["node-multi"],
        }))
        
        assert notification.body == "bob accepted sharing request for Hall Switch and Fan."
    
    def test_alert_params_use_device_names_and_types(self, classifier):
        body = json.dumps({"Light": {"Power": True, "Brightness": 80}})
        notification = classifier.classify(
            make_payload("rmaker.event.alert", {"message_body": body, "node_id": "node-light"})
        )
        
        assert notification.body == (
            "Living Room Light reported Power: true. Living Room Light reported Brightness: 80."
        )
    
    def test_alert_param_with_mismatched_type_is_skipped(self, classifier):
        body = json.dumps({"Light": {"Brightness": "bright"}})
        notification = classifier.classify(
            make_payload("rmaker.event.alert", {"message_body": body, "node_id": "node-light"})
        )
        
        assert notification.body == "Alert received from a device."


class TestHelpers:
    """Test formatting helpers."""
    
    def test_combined_device_names(self):
        assert combined_device_names([]) == "device(s)"
        assert combined_device_names(["A"]) == "A"
        assert combined_device_names(["A", "B"]) == "A and B"
        assert combined_device_names(["A", "B", "C"]) == "A, B and C"
    
    def test_format_param_value(self):
        assert format_param_value(True, "bool") == "true"
        assert format_param_value(5, "int") == "5"
        assert format_param_value(True, "int") is None
        assert format_param_value(5, "float") == "5.0"
        assert format_param_value("on", "string") == "on"
        assert format_param_value(False, None) == "false"
        assert format_param_value([1], None) is None
