"""
Local cache of the user's node groups.
"""

import logging
from typing import List

from ..models import NodeGroup
from .exceptions import SerializationError
from .local_storage import LocalStorage, LocalStorageKeys
from .serializer import decode_list, encode_list, list_adapter

logger = logging.getLogger(__name__)

_groups = list_adapter(NodeGroup)


class NodeGroupStorage(LocalStorage):
    """Node groups created by the user."""

    def save_node_groups(self, node_groups: List[NodeGroup]) -> None:
        try:
            encoded = encode_list(_groups, node_groups)
        except SerializationError as e:
            logger.error(f"Node groups not saved: {e}")
            return
        
        self.save_data(encoded, LocalStorageKeys.NODE_GROUPS)
        logger.debug(f"Saved {len(node_groups)} node group(s)")

    def fetch_node_groups(self) -> List[NodeGroup]:
        """
        Fetch stored node groups.
        
        Returns:
            List of groups; empty if nothing is stored or it is unreadable
        """
        data = self.get_data(LocalStorageKeys.NODE_GROUPS)
        if data is None:
            return []
        
        try:
            return decode_list(_groups, data)
        except SerializationError as e:
            logger.error(f"Discarding unreadable node groups: {e}")
            return []

    def cleanup_node_groups(self) -> None:
        self.cleanup_data(LocalStorageKeys.NODE_GROUPS)
        logger.info("Cleaned up node groups")
