"""Application models package."""

from orderdesk.models.audit_log import AuditLog
from orderdesk.models.delivery_zone import DeliveryZone
from orderdesk.models.notification import AdminNotification, AdminPushSubscription
from orderdesk.models.order import Order
from orderdesk.models.ordering_rules import BlockedAddress, ClosureWindow
from orderdesk.models.restaurant import Restaurant, RestaurantAdmin
from orderdesk.models.user import User

__all__ = [
    "User", "Restaurant", "RestaurantAdmin", "Order", "DeliveryZone", "ClosureWindow", "BlockedAddress",
    "AdminNotification", "AdminPushSubscription", "AuditLog",
]
