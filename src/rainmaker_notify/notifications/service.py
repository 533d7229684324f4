"""
Classify incoming push notifications and keep them in history.
"""

import logging
from typing import Any, Mapping, Optional

from ..models import NotificationRecord
from ..storage.notifications import NotificationStore
from .classifier import NotificationClassifier, sharing_response
from .events import EventPayload, NotificationEventType

logger = logging.getLogger(__name__)


class NotificationService:
    """
    Entry point for the notification-delivery process.
    
    Every recognised notification is saved to history, except pending
    sharing requests: those are answered from the notification itself and
    the answer arrives later as its own accepted/declined event.
    """

    def __init__(self, store: NotificationStore, classifier: Optional[NotificationClassifier] = None):
        """
        Initialize notification service.
        
        Args:
            store: Notification history
            classifier: Classifier (defaults to one without node lookup)
        """
        self.store = store
        self.classifier = classifier or NotificationClassifier()

    def handle(self, user_info: Mapping[str, Any]) -> Optional[NotificationRecord]:
        """
        Classify a push payload and save the result.
        
        Args:
            user_info: Push payload dictionary
            
        Returns:
            Notification to display, or None if the payload was dropped
        """
        payload = EventPayload.from_user_info(user_info)
        notification = self.classifier.classify_payload(payload)
        if notification is None:
            return None
        
        if is_sharing_request(payload):
            logger.info("Sharing request received; not kept in history")
            return notification
        
        self.store.store_notification(notification)
        logger.info(f"Handled {payload.event_type.value} notification")
        return notification


def is_sharing_request(payload: EventPayload) -> bool:
    """True for a sharing request that has not been answered yet."""
    return (
        payload.event_type is NotificationEventType.NODE_SHARING_ADD
        and sharing_response(payload.event_data) is None
    )
