"""
Push notification handling: payload parsing, classification and persistence.
"""

from .events import EventPayload, NotificationEventType, NotificationKeys
from .classifier import NotificationClassifier, classify, combined_device_names
from .service import NotificationService
from .formatting import date_time_strings

__all__ = [
    "EventPayload",
    "NotificationEventType",
    "NotificationKeys",
    "NotificationClassifier",
    "classify",
    "combined_device_names",
    "NotificationService",
    "date_time_strings",
]
