"""Schema exports."""

from orderdesk.schemas.auth import AuthUserResponse, LoginRequest, TokenResponse
from orderdesk.schemas.availability import AvailabilityRequest
from orderdesk.schemas.notification import AdminNotificationCreate, AdminNotificationRead, PushSubscriptionPayload
from orderdesk.schemas.order import (
    AcceptOrderRequest,
    AcceptOrderResponse,
    CancelOrderRequest,
    CancelOrderResponse,
    CurrentOrdersResponse,
    OrderSummary,
    OrderStatusResponse,
    OrderStatusUpdate,
)
from orderdesk.schemas.restaurant import RestaurantSelection
from orderdesk.schemas.rules import BlockedAddressCreate, BlockedAddressRead, ClosureWindowCreate, ClosureWindowRead
from orderdesk.schemas.zone import DeliveryZoneCreate, DeliveryZonePatch, DeliveryZoneRead

__all__ = [
    "AuthUserResponse",
    "LoginRequest",
    "TokenResponse",
    "AvailabilityRequest",
    "AdminNotificationCreate",
    "AdminNotificationRead",
    "PushSubscriptionPayload",
    "AcceptOrderRequest",
    "AcceptOrderResponse",
    "CancelOrderRequest",
    "CancelOrderResponse",
    "CurrentOrdersResponse",
    "OrderSummary",
    "OrderStatusResponse",
    "OrderStatusUpdate",
    "RestaurantSelection",
    "BlockedAddressCreate",
    "BlockedAddressRead",
    "ClosureWindowCreate",
    "ClosureWindowRead",
    "DeliveryZoneCreate",
    "DeliveryZonePatch",
    "DeliveryZoneRead",
]
