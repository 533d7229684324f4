"""
Single entry point to all locally stored user data.
"""

import logging
from typing import List, Optional

from ..core.config import StorageConfig
from ..models import Node, NodeGroup, NotificationRecord
from .node_groups import NodeGroupStorage
from .nodes import NodeStorage
from .notifications import NotificationStore

logger = logging.getLogger(__name__)


class LocalStorageHandler:
    """
    Facade over the node, node group and notification stores.
    
    All three stores use the shared app group suite so the notification
    extension sees what the app saved.
    """

    def __init__(self, config: Optional[StorageConfig] = None):
        """
        Initialize storage handler.
        
        Args:
            config: Storage configuration (defaults to the global config)
        """
        if config is None:
            from ..core.config import get_config
            config = get_config().storage
        
        self.config = config
        self.nodes_handler = NodeStorage(config.app_group, base_dir=config.base_dir)
        self.node_group_handler = NodeGroupStorage(config.app_group, base_dir=config.base_dir)
        self.notification_handler = NotificationStore(
            config.app_group,
            limit=config.notification_limit,
            base_dir=config.base_dir,
        )

    # Nodes

    def save_node_details(self, nodes: Optional[List[Node]]) -> None:
        self.nodes_handler.save_node_details(nodes)

    def fetch_node_details(self) -> Optional[List[Node]]:
        return self.nodes_handler.fetch_node_details()

    def cleanup_node_details(self) -> None:
        self.nodes_handler.cleanup_node_details()

    # Node groups

    def save_node_groups(self, node_groups: List[NodeGroup]) -> None:
        self.node_group_handler.save_node_groups(node_groups)

    def fetch_node_groups(self) -> List[NodeGroup]:
        return self.node_group_handler.fetch_node_groups()

    def cleanup_node_groups(self) -> None:
        self.node_group_handler.cleanup_node_groups()

    # Notifications

    def get_delivered_notifications(self) -> Optional[List[NotificationRecord]]:
        return self.notification_handler.get_delivered_notifications()

    def store_notification(self, notification: NotificationRecord) -> None:
        self.notification_handler.store_notification(notification)

    def cleanup_notifications(self) -> None:
        self.notification_handler.cleanup_notifications()

    def cleanup_data(self) -> None:
        """Remove all locally stored data of the current user (logout)."""
        self.cleanup_node_details()
        self.cleanup_node_groups()
        self.cleanup_notifications()
        logger.info("Cleaned up all local user data")
