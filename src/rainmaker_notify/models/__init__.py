"""
Data models for notifications, nodes, node groups and cloud responses.
"""

from .notification import NotificationRecord
from .node import Device, Node, NodeInfo, Param, NAME_PARAM_TYPE
from .node_group import NodeGroup
from .cloud import (
    CloudResponse,
    CreateSharingResponse,
    SharingRequest,
    SharingRequests,
    shared_device_names,
    split_by_status,
)

__all__ = [
    "NotificationRecord",
    "Device",
    "Node",
    "NodeInfo",
    "Param",
    "NAME_PARAM_TYPE",
    "NodeGroup",
    "CloudResponse",
    "CreateSharingResponse",
    "SharingRequest",
    "SharingRequests",
    "shared_device_names",
    "split_by_status",
]
