"""
Local cache of the user's nodes.
"""

import logging
from typing import Dict, List, Optional

from ..models import Node
from .exceptions import SerializationError
from .local_storage import LocalStorage, LocalStorageKeys
from .serializer import decode_list, encode_list, list_adapter

logger = logging.getLogger(__name__)

_nodes = list_adapter(Node)


class NodeStorage(LocalStorage):
    """
    Node details saved by the app for use by the notification extension.
    """

    def save_node_details(self, nodes: Optional[List[Node]]) -> None:
        """
        Save node details of the current user.
        
        Args:
            nodes: User nodes. None leaves the stored list untouched.
        """
        if nodes is None:
            return
        
        try:
            encoded = encode_list(_nodes, nodes)
        except SerializationError as e:
            logger.error(f"Node details not saved: {e}")
            return
        
        self.save_data(encoded, LocalStorageKeys.NODE_DETAILS)
        logger.debug(f"Saved details of {len(nodes)} node(s)")

    def fetch_node_details(self) -> Optional[List[Node]]:
        """
        Fetch node details of the current user.
        
        Returns:
            List of nodes, or None if nothing is stored or it is unreadable
        """
        data = self.get_data(LocalStorageKeys.NODE_DETAILS)
        if data is None:
            return None
        
        try:
            return decode_list(_nodes, data)
        except SerializationError as e:
            logger.error(f"Discarding unreadable node details: {e}")
            return None

    def cleanup_node_details(self) -> None:
        """Remove all stored node details."""
        self.cleanup_data(LocalStorageKeys.NODE_DETAILS)
        logger.info("Cleaned up node details")

    def get_device_list_dictionary(self) -> Optional[Dict[str, List[str]]]:
        """
        Map each node id to the display names of its devices.
        
        Returns:
            {node_id: [device name, ...]} or None if no nodes are cached
        """
        nodes = self.fetch_node_details()
        if nodes is None:
            return None
        
        return {node.node_id or "": node.device_names() for node in nodes}

    def get_node(self, node_id: str) -> Optional[Node]:
        """Get a cached node by id."""
        for node in self.fetch_node_details() or []:
            if node.node_id == node_id:
                return node
        return None
