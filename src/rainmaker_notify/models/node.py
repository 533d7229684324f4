"""
Node and device models cached from the RainMaker cloud.

Only the fields needed to resolve device names and parameter types for
notifications are modelled; anything else in the cloud payload is ignored.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

# Param type carrying the user-assigned device name
NAME_PARAM_TYPE = "esp.param.name"


class Param(BaseModel):
    """A device parameter (power, brightness, name, ...)."""

    name: Optional[str] = None
    type: Optional[str] = None
    data_type: Optional[str] = Field(None, description="int, float, bool or string")
    ui_type: Optional[str] = None
    properties: Optional[List[str]] = None
    value: Any = None


class Device(BaseModel):
    """A device exposed by a node."""

    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    type: Optional[str] = None
    primary: Optional[str] = None
    params: Optional[List[Param]] = None
    device_name: str = Field("", alias="deviceName")

    def get_device_name(self) -> Optional[str]:
        """
        Name shown to the user.
        
        The value of the name param wins, then the stored display name,
        then the device's raw name.
        """
        for param in self.params or []:
            if param.type == NAME_PARAM_TYPE and isinstance(param.value, str):
                return param.value
        return self.device_name or self.name

    def get_param(self, name: str) -> Optional[Param]:
        for param in self.params or []:
            if param.name == name:
                return param
        return None


class NodeInfo(BaseModel):
    name: Optional[str] = None
    fw_version: Optional[str] = None
    type: Optional[str] = None


class Node(BaseModel):
    """
    A RainMaker node (one physical board) and its devices.
    """

    model_config = ConfigDict(populate_by_name=True)

    node_id: Optional[str] = Field(None, alias="id")
    config_version: Optional[str] = None
    info: Optional[NodeInfo] = None
    devices: Optional[List[Device]] = None
    primary: Optional[List[str]] = None
    secondary: Optional[List[str]] = None
    is_connected: bool = False
    timestamp: int = Field(0, description="Last connectivity change, milliseconds")

    def get_device(self, name: str) -> Optional[Device]:
        for device in self.devices or []:
            if device.name == name:
                return device
        return None

    def device_names(self) -> List[str]:
        """Display names of all devices on this node."""
        names = []
        for device in self.devices or []:
            device_name = device.get_device_name()
            if device_name:
                names.append(device_name)
        return names
