"""
Bounded history of delivered notifications.
"""

import logging
from typing import List, Optional

from ..models import NotificationRecord
from .exceptions import SerializationError, StorageError
from .local_storage import LocalStorage, LocalStorageKeys
from .serializer import decode_list, encode_list, list_adapter

logger = logging.getLogger(__name__)

DEFAULT_NOTIFICATION_LIMIT = 200

_records = list_adapter(NotificationRecord)


class NotificationStore(LocalStorage):
    """
    Notification history shared by the app and the notification extension.
    
    History is persisted newest insert first. A new record is prepended and
    the history is cut to `limit` entries, so the records evicted are always
    the ones inserted earliest, whatever their timestamps. Reads return the
    same records sorted by timestamp instead, which means a backdated record
    can be listed after records inserted before it.
    
    `store_notification` is a read-modify-write of the whole history. Two
    processes storing at the same moment can both read the same history and
    the last write wins, dropping the other record. Callers needing
    stronger guarantees must arrange a single writer.
    
    No failure reaches the caller: unreadable history, encode errors and
    storage errors (e.g. a locked database) are logged and treated as
    "no notifications" / "write skipped".
    """

    def __init__(
        self,
        suite_name: Optional[str] = None,
        limit: int = DEFAULT_NOTIFICATION_LIMIT,
        base_dir: Optional[str] = None,
    ):
        """
        Initialize notification store.
        
        Args:
            suite_name: Shared suite identifier
            limit: Maximum number of notifications kept
            base_dir: Directory holding suite databases
        """
        if limit < 1:
            raise ValueError(f"Notification limit must be at least 1, got {limit}")
        self.notification_limit = limit
        super().__init__(suite_name, base_dir=base_dir)

    def _read_history(self) -> Optional[List[NotificationRecord]]:
        """
        Stored history in persisted (insertion) order.
        
        Returns:
            List of notifications, or None if nothing is stored
            
        Raises:
            SerializationError: If the stored data cannot be decoded
            StorageError: If the store cannot be read
        """
        data = self.get_data(LocalStorageKeys.NOTIFICATION_STORE)
        if data is None:
            return None
        return decode_list(_records, data)

    def get_delivered_notifications(self) -> Optional[List[NotificationRecord]]:
        """
        Get stored notifications, most recent timestamp first.
        
        Returns:
            List of notifications, or None if nothing is stored or the
            stored data cannot be read
        """
        try:
            notifications = self._read_history()
        except SerializationError as e:
            logger.error(f"Discarding unreadable notification history: {e}")
            return None
        except StorageError as e:
            logger.error(f"Notification history unavailable: {e}")
            return None
        
        if notifications is None:
            return None
        
        notifications.sort(key=lambda n: n.timestamp, reverse=True)
        return notifications

    def store_notification(self, notification: NotificationRecord) -> None:
        """
        Prepend a notification and trim history to the limit.
        
        Args:
            notification: Notification to save
        """
        notifications: List[NotificationRecord] = []
        try:
            notifications.extend(self._read_history() or [])
        except SerializationError as e:
            logger.error(f"Replacing unreadable notification history: {e}")
        except StorageError as e:
            logger.error(f"Notification not stored: {e}")
            return
        
        notifications.insert(0, notification)
        notifications = notifications[: self.notification_limit]
        
        try:
            encoded = encode_list(_records, notifications)
            self.save_data(encoded, LocalStorageKeys.NOTIFICATION_STORE)
        except StorageError as e:
            logger.error(f"Notification not stored: {e}")
            return
        
        logger.debug(f"Stored notification '{notification.title}' ({len(notifications)} in history)")

    def cleanup_notifications(self) -> None:
        """Remove all stored notifications."""
        try:
            self.cleanup_data(LocalStorageKeys.NOTIFICATION_STORE)
        except StorageError as e:
            logger.error(f"Notification history not cleaned up: {e}")
            return
        logger.info("Cleaned up notification history")
