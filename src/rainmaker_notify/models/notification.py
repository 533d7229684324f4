"""
Notification record model.
"""

import time

from pydantic import BaseModel, ConfigDict, Field


class NotificationRecord(BaseModel):
    """
    A delivered notification as shown in the notification history.
    
    Records carry no identity: two records with equal content are still two
    entries. They are created by the classifier, prepended to history by the
    notification store and never mutated afterwards.
    """

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "title": "Device offline",
                "body": "Living Room Light is now offline.",
                "timestamp": 1736937000.25,
            }
        },
    )

    title: str = Field("", description="Notification title")
    body: str = Field("", description="Notification body text")
    timestamp: float = Field(
        default_factory=time.time,
        allow_inf_nan=False,
        description="Delivery time in seconds since epoch",
    )
