"""
Push notification event types and payload parsing.
"""

import math
import time
from enum import Enum
from typing import Any, Dict, Mapping, Optional

from pydantic import BaseModel, Field

from ..models import NotificationRecord


class NotificationKeys:
    """Keys used in push payloads."""

    APS = "aps"
    ALERT = "alert"
    TITLE = "title"
    BODY = "body"
    EVENT_DATA_PAYLOAD = "event_data_payload"
    TIMESTAMP = "timestamp"
    EVENT_DATA = "event_data"
    EVENT_TYPE = "event_type"
    NODE_ID = "node_id"
    MESSAGE_BODY = "message_body"
    PRIMARY_USER_NAME = "primary_user_name"
    SECONDARY_USER_NAME = "secondary_user_name"
    METADATA = "metadata"
    NODES = "nodes"
    ACCEPT = "accept"
    CONNECTIVITY = "connectivity"
    CONNECTED = "connected"


class NotificationEventType(str, Enum):
    """Cloud events that produce a user notification."""

    NODE_ASSOCIATED = "rmaker.event.user_node_added"
    NODE_DISASSOCIATED = "rmaker.event.user_node_removed"
    NODE_CONNECTED = "rmaker.event.node_connected"
    NODE_DISCONNECTED = "rmaker.event.node_disconnected"
    NODE_SHARING_ADD = "rmaker.event.user_node_sharing_add"
    NODE_ALERT = "rmaker.event.alert"

    @classmethod
    def parse(cls, value: Any) -> Optional["NotificationEventType"]:
        """Return the matching event type, or None if unknown."""
        try:
            return cls(value)
        except ValueError:
            return None


def _mapping(value: Any) -> Dict[str, Any]:
    return dict(value) if isinstance(value, Mapping) else {}


def _string(value: Any, default: str = "") -> str:
    return value if isinstance(value, str) else default


def _timestamp(value: Any) -> Optional[float]:
    """Finite epoch seconds, or None for anything else."""
    # bool is an int subclass but never a timestamp
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    try:
        value = float(value)
    except OverflowError:
        return None
    return value if math.isfinite(value) else None


class EventPayload(BaseModel):
    """
    Parsed push payload.
    
    Payload structure:
    {
        "aps": {"alert": {
            "title": "...",
            "body": "...",
            "event_data_payload": {
                "event_data": {...},
                "event_type": "rmaker.event.node_connected",
                "timestamp": 1736937000.0
            }
        }}
    }
    
    Missing or wrongly typed fields fall back to defaults; parsing never
    fails.
    """

    event_type: Optional[NotificationEventType] = Field(
        None, description="Recognised event type; None when absent or unknown"
    )
    raw_event_type: str = Field("", description="Event type string as received")
    event_data: Dict[str, Any] = Field(default_factory=dict)
    notification: NotificationRecord = Field(default_factory=NotificationRecord)

    @classmethod
    def from_user_info(cls, user_info: Mapping[str, Any]) -> "EventPayload":
        """
        Build from the user info dictionary of a push notification.
        
        Args:
            user_info: Push payload
            
        Returns:
            Parsed payload
        """
        aps = _mapping(user_info.get(NotificationKeys.APS)) if isinstance(user_info, Mapping) else {}
        alert = _mapping(aps.get(NotificationKeys.ALERT))
        event_data_payload = _mapping(alert.get(NotificationKeys.EVENT_DATA_PAYLOAD))
        
        timestamp = _timestamp(event_data_payload.get(NotificationKeys.TIMESTAMP))
        if timestamp is None:
            timestamp = time.time()
        
        raw_event_type = _string(event_data_payload.get(NotificationKeys.EVENT_TYPE))
        
        return cls(
            event_type=NotificationEventType.parse(raw_event_type),
            raw_event_type=raw_event_type,
            event_data=_mapping(event_data_payload.get(NotificationKeys.EVENT_DATA)),
            notification=NotificationRecord(
                title=_string(alert.get(NotificationKeys.TITLE)),
                body=_string(alert.get(NotificationKeys.BODY)),
                timestamp=timestamp,
            ),
        )
