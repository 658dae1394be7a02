"""Admin notification and push schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AdminNotificationCreate(BaseModel):
    type: str = Field(default="info", max_length=40)
    title: str = Field(min_length=1, max_length=120)
    message: str | None = Field(default=None, max_length=2000)


class AdminNotificationRead(BaseModel):
    id: int
    type: str
    title: str
    message: str | None
    created_at: datetime
    read: bool

    model_config = ConfigDict(from_attributes=True)


class PushSubscriptionKeys(BaseModel):
    p256dh: str
    auth: str


class PushSubscriptionPayload(BaseModel):
    endpoint: str = Field(min_length=1, max_length=1000)
    keys: PushSubscriptionKeys
