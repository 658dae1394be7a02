"""Order API schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class AcceptOrderRequest(BaseModel):
    """Optional ETA in minutes; clamped server-side."""

    minutes: float | None = Field(default=None, allow_inf_nan=False)


class AcceptOrderResponse(BaseModel):
    id: str
    status: str
    deliveryTime: datetime


class CancelOrderRequest(BaseModel):
    orderId: str | None = None


class OrderStatusUpdate(BaseModel):
    status: str


class OrderStatusResponse(BaseModel):
    id: str
    status: str

    model_config = ConfigDict(from_attributes=True)


class CancelOrderResponse(BaseModel):
    success: bool = True
    data: OrderStatusResponse


class OrderSummary(BaseModel):
    id: str
    status: str
    name: str | None = None
    phone: str | None = None
    selected_option: str | None = None
    deliveryTime: datetime | None = None
    created_at: datetime | None = None


class CurrentOrdersResponse(BaseModel):
    orders: list[OrderSummary]
    totalCount: int
    restaurant_id: str
