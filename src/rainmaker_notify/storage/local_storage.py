"""
Suite-scoped key-value storage backed by SQLite.
"""

import logging
import sqlite3
from contextlib import closing
from pathlib import Path
from typing import List, Optional

from .. import get_storage_dir
from .exceptions import StorageError

logger = logging.getLogger(__name__)

# Database used when no suite is given
STANDARD_SUITE = "standard"


class LocalStorageKeys:
    """Keys of the blobs kept in local storage."""

    NODE_DETAILS = "com.espressif.node.details"
    NOTIFICATION_STORE = "com.espressif.notifications.store"
    NODE_GROUPS = "com.espressif.node.groups"


class LocalStorage:
    """
    Opaque blob storage keyed by string, scoped to a named suite.
    
    Each suite is a separate SQLite file under the storage directory, so the
    main application and the notification extension can share data by
    opening the same suite. A connection is opened per call; a write is
    visible to any later read once the call returns. There is no
    transaction spanning a read and a later write.
    """

    # Seconds to wait on a database locked by another process
    busy_timeout = 5.0

    def __init__(self, suite_name: Optional[str] = None, base_dir: Optional[str] = None):
        """
        Initialize local storage.
        
        Args:
            suite_name: Shared suite identifier (app group). None selects
                the standard, non-shared suite.
            base_dir: Directory holding suite databases (defaults to
                RAINMAKER_STORAGE_BASE_DIR or ~/.rainmaker/storage)
        """
        self.suite_name = suite_name or STANDARD_SUITE
        self.base_dir = Path(base_dir or get_storage_dir()).expanduser()
        self.db_path = self.base_dir / f"{self.suite_name}.db"
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        try:
            return sqlite3.connect(self.db_path, timeout=self.busy_timeout)
        except sqlite3.Error as e:
            raise StorageError(f"Cannot open storage at {self.db_path}: {e}") from e

    def _init_db(self) -> None:
        """Initialize database schema."""
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute("""
                    CREATE TABLE IF NOT EXISTS defaults (
                        key TEXT PRIMARY KEY,
                        value BLOB NOT NULL
                    )
                """)
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Cannot initialize storage at {self.db_path}: {e}") from e
        
        logger.debug(f"Initialized local storage suite '{self.suite_name}' at {self.db_path}")

    def save_data(self, data: bytes, key: str) -> None:
        """
        Save a blob, replacing any previous value.
        
        Args:
            data: Bytes to store
            key: Key the data is stored under
        """
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute(
                    "INSERT OR REPLACE INTO defaults (key, value) VALUES (?, ?)",
                    (key, sqlite3.Binary(data)),
                )
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to save '{key}': {e}") from e
        
        logger.debug(f"Saved {len(data)} bytes under '{key}'")

    def get_data(self, key: str) -> Optional[bytes]:
        """
        Get a blob.
        
        Args:
            key: Key the data is stored under
            
        Returns:
            Stored bytes or None if the key is not present
        """
        try:
            with closing(self._connect()) as conn, conn:
                cursor = conn.execute("SELECT value FROM defaults WHERE key = ?", (key,))
                row = cursor.fetchone()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to read '{key}': {e}") from e
        
        if not row:
            logger.debug(f"No data stored under '{key}'")
            return None
        
        return bytes(row[0])

    def cleanup_data(self, key: str) -> None:
        """
        Remove the blob stored under a key. Missing keys are ignored.
        
        Args:
            key: Key to remove
        """
        try:
            with closing(self._connect()) as conn, conn:
                conn.execute("DELETE FROM defaults WHERE key = ?", (key,))
                conn.commit()
        except sqlite3.Error as e:
            raise StorageError(f"Failed to remove '{key}': {e}") from e
        
        logger.debug(f"Removed '{key}' from suite '{self.suite_name}'")

    def keys(self) -> List[str]:
        """List all keys in this suite."""
        try:
            with closing(self._connect()) as conn, conn:
                cursor = conn.execute("SELECT key FROM defaults ORDER BY key")
                return [row[0] for row in cursor.fetchall()]
        except sqlite3.Error as e:
            raise StorageError(f"Failed to list keys: {e}") from e
