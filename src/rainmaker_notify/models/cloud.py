"""
Cloud API response models: per-node results and node sharing requests.
"""

from typing import Any, List, Optional, Sequence, Tuple

from pydantic import BaseModel, Field, field_validator

SUCCESS_STATUS = "success"


class CloudResponse(BaseModel):
    """
    Result reported by the cloud for one node, or for the whole request.
    """

    status: str = Field(..., description="'success' or 'failure'")
    description: str = Field(..., description="Human readable outcome")
    node_id: Optional[str] = None
    error_code: Optional[int] = None

    @property
    def succeeded(self) -> bool:
        return self.status.lower() == SUCCESS_STATUS


def split_by_status(
    responses: Sequence[CloudResponse],
) -> Tuple[List[CloudResponse], List[CloudResponse]]:
    """
    Separate per-node results of a multi-node call.
    
    Returns:
        (succeeded, failed), each in the original order
    """
    succeeded = [r for r in responses if r.succeeded]
    failed = [r for r in responses if not r.succeeded]
    return succeeded, failed


def shared_device_names(metadata: Any) -> Optional[List[str]]:
    """
    Device names listed in sharing metadata.
    
    Args:
        metadata: {"devices": [{"name": "Light"}, ...]}
        
    Returns:
        Names in order, or None when the metadata has no device list
    """
    if not isinstance(metadata, dict):
        return None
    devices = metadata.get("devices")
    if not isinstance(devices, list):
        return None
    return [
        device["name"]
        for device in devices
        if isinstance(device, dict) and isinstance(device.get("name"), str)
    ]


class SharingRequest(BaseModel):
    """
    A request to share nodes with another user.
    
    `metadata` arrives as {"devices": [{"name": "Light"}, ...]} and is kept
    as the list of shared device names.
    """

    request_id: str
    request_status: Optional[str] = None
    request_timestamp: Optional[float] = None
    node_ids: Optional[List[str]] = None
    user_name: Optional[str] = None
    primary_user_name: Optional[str] = None
    metadata: Optional[List[str]] = None

    @field_validator("metadata", mode="before")
    @classmethod
    def device_names(cls, v: Any) -> Optional[List[str]]:
        if isinstance(v, list):
            return v
        return shared_device_names(v)


class SharingRequests(BaseModel):
    """One page of sharing requests."""

    sharing_requests: Optional[List[SharingRequest]] = None
    next_request_id: Optional[str] = None
    next_user_name: Optional[str] = None


class CreateSharingResponse(BaseModel):
    """Response to creating a sharing request."""

    status: str
    request_id: str
    description: str
