from datetime import datetime
from typing import Any, Dict, Literal, Optional

from pydantic import Field

from gymcrm.api.types import CamelModel

NotificationType = Literal[
    "booking_created", "customer_created", "booking_updated", "booking_cancelled",
    "invoice_created", "invoice_paid", "broadcast", "general",
]


class NotificationCreate(CamelModel):
    type: NotificationType = "general"
    title: str = Field(min_length=1)
    message: str = Field(min_length=1)
    data: Dict[str, Any] = {}
    link: Optional[str] = None
    broadcast: bool = False
    expires_at: Optional[datetime] = None


class NotificationOut(CamelModel):
    id: int
    type: str
    title: str
    message: str
    data: Dict[str, Any] = {}
    link: Optional[str] = None
    read: bool
    broadcast: bool
    expires_at: Optional[datetime] = None
    created_at: datetime

    @classmethod
    def from_notification(cls, notification, read: bool) -> "NotificationOut":
        return cls.model_validate(notification).model_copy(update={"read": read})
