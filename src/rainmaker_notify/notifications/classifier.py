"""
Turns push payloads into the notification shown to the user.
"""

import json
import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from ..models import Node, NotificationRecord, shared_device_names
from ..storage.nodes import NodeStorage
from .events import EventPayload, NotificationEventType, NotificationKeys

logger = logging.getLogger(__name__)

# Key of a preformatted alert message inside an alert message body
ALERT_STRING_KEY = "esp.alert.str"

DEFAULT_DEVICES_TEXT = "device(s)"


def combined_device_names(names: Sequence[str]) -> str:
    """
    Join device names for a sentence: "A", "A and B", "A, B and C".
    """
    if not names:
        return DEFAULT_DEVICES_TEXT
    if len(names) == 1:
        return names[0]
    return f"{', '.join(names[:-1])} and {names[-1]}"


def format_param_value(value: Any, data_type: Optional[str]) -> Optional[str]:
    """
    Render a reported param value according to the param's data type.
    
    Returns None when the value does not match the declared type.
    """
    kind = (data_type or "").lower()
    
    if kind == "int":
        if isinstance(value, int) and not isinstance(value, bool):
            return str(value)
        return None
    if kind == "bool":
        if isinstance(value, bool):
            return "true" if value else "false"
        return None
    if kind == "float":
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(float(value))
        return None
    if kind == "string":
        return value if isinstance(value, str) else None
    
    # Unknown type: go by the value itself
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str):
        return value
    return None


class NotificationClassifier:
    """
    Maps a push payload to its event type and builds the final notification.
    
    Device names are resolved through the node cache when one is given.
    Without it, or when the nodes are not cached, each event falls back to
    its generic message.
    """

    def __init__(self, node_lookup: Optional[NodeStorage] = None):
        """
        Initialize classifier.
        
        Args:
            node_lookup: Node cache used to resolve node ids to device names
        """
        self.node_lookup = node_lookup

    def classify(self, user_info: Mapping[str, Any]) -> Optional[NotificationRecord]:
        """
        Classify a raw push payload.
        
        Args:
            user_info: Push payload dictionary
            
        Returns:
            Notification to display, or None if the event type is unknown
        """
        return self.classify_payload(EventPayload.from_user_info(user_info))

    def classify_payload(self, payload: EventPayload) -> Optional[NotificationRecord]:
        """Build the notification for an already parsed payload."""
        event_type = payload.event_type
        data = payload.event_data
        notification = payload.notification
        
        if event_type is NotificationEventType.NODE_CONNECTED:
            return self.node_connected(data, notification)
        elif event_type is NotificationEventType.NODE_DISCONNECTED:
            return self.node_disconnected(data, notification)
        elif event_type is NotificationEventType.NODE_SHARING_ADD:
            accept = sharing_response(data)
            if accept is True:
                return self.node_sharing_accepted(data, notification)
            elif accept is False:
                return self.node_sharing_declined(data, notification)
            return self.node_sharing_request(data, notification)
        elif event_type is NotificationEventType.NODE_ALERT:
            return self.node_alert(data, notification)
        elif event_type is NotificationEventType.NODE_ASSOCIATED:
            return self.node_associated(data, notification)
        elif event_type is NotificationEventType.NODE_DISASSOCIATED:
            return self.node_disassociated(data, notification)
        
        logger.debug(f"Dropping notification with unknown event type '{payload.raw_event_type}'")
        return None

    # Event handlers

    def node_associated(self, data: Dict[str, Any], notification: NotificationRecord) -> NotificationRecord:
        body = "New device(s) are added. Tap to view."
        devices = self._devices_for_nodes(data.get(NotificationKeys.NODES))
        if devices:
            body = _device_sentence(devices, "is added.", "are added.")
        return notification.model_copy(update={"body": body})

    def node_disassociated(self, data: Dict[str, Any], notification: NotificationRecord) -> NotificationRecord:
        body = "Some device(s) were removed. Tap to view."
        devices = self._devices_for_nodes(data.get(NotificationKeys.NODES))
        if devices:
            body = _device_sentence(devices, "is removed.", "are removed.")
        return notification.model_copy(update={"body": body})

    def node_connected(self, data: Dict[str, Any], notification: NotificationRecord) -> NotificationRecord:
        body = "Some device(s) are now online. Tap to view."
        devices = self._devices_for_node(data.get(NotificationKeys.NODE_ID))
        if devices:
            body = _device_sentence(devices, "is now online.", "are now online.")
        return notification.model_copy(update={"body": body})

    def node_disconnected(self, data: Dict[str, Any], notification: NotificationRecord) -> NotificationRecord:
        body = "Some device(s) went offline. Tap to view."
        devices = self._devices_for_node(data.get(NotificationKeys.NODE_ID))
        if devices:
            body = _device_sentence(devices, "is now offline.", "are now offline.")
        return notification.model_copy(update={"body": body})

    def node_sharing_accepted(self, data: Dict[str, Any], notification: NotificationRecord) -> NotificationRecord:
        secondary_user = data.get(NotificationKeys.SECONDARY_USER_NAME)
        nodes = data.get(NotificationKeys.NODES)
        if not isinstance(secondary_user, str) or not isinstance(nodes, list):
            return notification
        
        devices = combined_device_names(self._devices_for_nodes(nodes))
        return notification.model_copy(
            update={"body": f"{secondary_user} accepted sharing request for {devices}."}
        )

    def node_sharing_declined(self, data: Dict[str, Any], notification: NotificationRecord) -> NotificationRecord:
        secondary_user = data.get(NotificationKeys.SECONDARY_USER_NAME)
        nodes = data.get(NotificationKeys.NODES)
        if not isinstance(secondary_user, str) or not isinstance(nodes, list):
            return notification
        
        devices = combined_device_names(self._devices_for_nodes(nodes))
        return notification.model_copy(
            update={"body": f"{secondary_user} declined sharing request for {devices}."}
        )

    def node_sharing_request(self, data: Dict[str, Any], notification: NotificationRecord) -> NotificationRecord:
        primary_user = data.get(NotificationKeys.PRIMARY_USER_NAME)
        if not isinstance(primary_user, str):
            return notification
        
        # Shared devices are listed in the request metadata
        names = shared_device_names(data.get(NotificationKeys.METADATA)) or []
        
        body = (
            f"{primary_user} wants to share {combined_device_names(names)} with you. "
            "Tap to accept or decline."
        )
        return notification.model_copy(update={"body": body})

    def node_alert(self, data: Dict[str, Any], notification: NotificationRecord) -> NotificationRecord:
        """
        Alert raised by a node.
        
        The message body is a JSON string. It either carries a ready-made
        message under "esp.alert.str", or the reported params per device:
        {"Light": {"Power": true}}.
        """
        default = notification.model_copy(update={"body": "Alert received from a device."})
        
        message_body = data.get(NotificationKeys.MESSAGE_BODY)
        if not isinstance(message_body, str):
            return default
        
        try:
            alert = json.loads(message_body)
        except ValueError as e:
            logger.warning(f"Unreadable alert message body: {e}")
            return default
        
        if not isinstance(alert, dict):
            return default
        
        alert_string = alert.get(ALERT_STRING_KEY)
        if isinstance(alert_string, str):
            return notification.model_copy(update={"body": alert_string})
        
        node_id = data.get(NotificationKeys.NODE_ID)
        if not isinstance(node_id, str):
            return default
        
        message = self._reported_params_message(self._node(node_id), alert)
        if message:
            return notification.model_copy(update={"body": message})
        return default

    # Helpers

    def _node(self, node_id: str) -> Optional[Node]:
        if self.node_lookup is None:
            return None
        return self.node_lookup.get_node(node_id)

    def _device_mapping(self) -> Optional[Dict[str, List[str]]]:
        if self.node_lookup is None:
            return None
        return self.node_lookup.get_device_list_dictionary()

    def _devices_for_nodes(self, node_ids: Any) -> List[str]:
        """Device names of all listed nodes, in order."""
        if not isinstance(node_ids, list):
            return []
        mapping = self._device_mapping()
        if not mapping:
            return []
        
        devices: List[str] = []
        for node_id in node_ids:
            if isinstance(node_id, str):
                devices.extend(mapping.get(node_id, []))
        return devices

    def _devices_for_node(self, node_id: Any) -> List[str]:
        return self._devices_for_nodes([node_id])

    def _reported_params_message(self, node: Optional[Node], alert: Dict[str, Any]) -> Optional[str]:
        reported: List[str] = []
        for device_key, params in alert.items():
            if not isinstance(params, dict):
                continue
            device = node.get_device(device_key) if node else None
            device_name = (device.get_device_name() if device else None) or device_key
            
            for param_name, raw_value in params.items():
                param = device.get_param(param_name) if device else None
                value = format_param_value(raw_value, param.data_type if param else None)
                if value is not None:
                    reported.append(f"{device_name} reported {param_name}: {value}.")
        
        return " ".join(reported) if reported else None


def sharing_response(data: Mapping[str, Any]) -> Optional[bool]:
    """
    Answer carried by a sharing event.
    
    Returns:
        True if accepted, False if declined, None for a new request
    """
    accept = data.get(NotificationKeys.ACCEPT)
    return accept if isinstance(accept, bool) else None


def _device_sentence(devices: List[str], singular: str, plural: str) -> str:
    if len(devices) == 1:
        return f"{devices[0]} {singular}"
    return f"{', '.join(devices)} {plural}"


def classify(user_info: Mapping[str, Any]) -> Optional[NotificationRecord]:
    """Classify a push payload without resolving device names."""
    return NotificationClassifier().classify(user_info)
