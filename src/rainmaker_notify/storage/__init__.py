"""
Shared local storage for the app and the notification extension.

Everything is stored as serialized blobs in a key-value store scoped to a
suite, so separate processes pointing at the same suite share data.
"""

from .exceptions import SerializationError, StorageError
from .local_storage import LocalStorage, LocalStorageKeys
from .notifications import NotificationStore
from .nodes import NodeStorage
from .node_groups import NodeGroupStorage
from .handler import LocalStorageHandler

__all__ = [
    "SerializationError",
    "StorageError",
    "LocalStorage",
    "LocalStorageKeys",
    "NotificationStore",
    "NodeStorage",
    "NodeGroupStorage",
    "LocalStorageHandler",
]
