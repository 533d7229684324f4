"""
Tests for the notification service.
"""

import sqlite3

from rainmaker_notify.notifications import NotificationClassifier, NotificationService

from conftest import make_payload


class TestNotificationService:
    """Test classification plus persistence."""
    
    def test_recognised_event_is_stored(self, notification_store):
        service = NotificationService(notification_store)
        notification = service.handle(make_payload("rmaker.event.node_disconnected", {"node_id": "n1"}))
        
        assert notification.body == "Some device(s) went offline. Tap to view."
        assert notification_store.get_delivered_notifications() == [notification]
    
    def test_unknown_event_is_not_stored(self, notification_store):
        service = NotificationService(notification_store)
        
        assert service.handle(make_payload("rmaker.event.unknown", {})) is None
        assert notification_store.get_delivered_notifications() is None
    
    def test_sharing_request_is_not_stored(self, notification_store):
        service = NotificationService(notification_store)
        notification = service.handle(make_payload(
            "rmaker.event.user_node_sharing_add", {"primary_user_name": "alice"}
        ))
        
        assert notification.body.startswith("alice wants to share")
        assert notification_store.get_delivered_notifications() is None
    
    def test_sharing_answer_is_stored(self, notification_store):
        service = NotificationService(notification_store)
        service.handle(make_payload(
            "rmaker.event.user_node_sharing_add",
            {"accept": False, "secondary_user_name": "bob", "nodes": ["n1"]},
        ))
        
        stored = notification_store.get_delivered_notifications()
        assert stored[0].body == "bob declined sharing request for device(s)."
    
    def test_uses_node_cache(self, notification_store, node_storage, sample_nodes):
        node_storage.save_node_details(sample_nodes)
        service = NotificationService(notification_store, NotificationClassifier(node_storage))
        service.handle(make_payload("rmaker.event.node_connected", {"node_id": "node-light"}))
        
        assert notification_store.get_delivered_notifications()[0].body == "Living Room Light is now online."
    
    def test_history_sorted_by_payload_timestamp(self, notification_store):
        service = NotificationService(notification_store)
        service.handle(make_payload("rmaker.event.node_connected", {}, title="late", timestamp=300))
        service.handle(make_payload("rmaker.event.node_connected", {}, title="early", timestamp=100))
        
        titles = [n.title for n in notification_store.get_delivered_notifications()]
        assert titles == ["late", "early"]
    
    def test_non_finite_payload_timestamp_keeps_history(self, notification_store):
        service = NotificationService(notification_store)
        service.handle(make_payload("rmaker.event.node_connected", {}, title="keep", timestamp=1))
        service.handle(make_payload("rmaker.event.node_connected", {}, title="next", timestamp=float("inf")))
        
        titles = [n.title for n in notification_store.get_delivered_notifications()]
        assert titles == ["next", "keep"]
    
    def test_locked_storage_does_not_raise(self, notification_store):
        notification_store.busy_timeout = 0.05
        service = NotificationService(notification_store)
        
        holder = sqlite3.connect(notification_store.db_path, isolation_level=None)
        holder.execute("BEGIN EXCLUSIVE")
        try:
            notification = service.handle(make_payload("rmaker.event.node_connected", {}))
        finally:
            holder.rollback()
            holder.close()
        
        assert notification.body == "Some device(s) are now online. Tap to view."
        assert notification_store.get_delivered_notifications() is None
