"""API router composition."""

from fastapi import APIRouter

from orderdesk.api.v1.endpoints import (
    admin_orders,
    auth,
    availability,
    delivery_zones,
    notifications,
    orders,
    restaurants,
    rules,
)

api_router: APIRouter = APIRouter()
api_router.include_router(auth.router, prefix="/auth", tags=["auth"])
api_router.include_router(notifications.admin_router, prefix="/admin", tags=["notifications"])
api_router.include_router(rules.router, prefix="/admin", tags=["ordering-rules"])
api_router.include_router(delivery_zones.router, prefix="/admin", tags=["delivery-zones"])
api_router.include_router(admin_orders.router, prefix="/admin", tags=["admin-orders"])
api_router.include_router(notifications.push_router, prefix="/push", tags=["push"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(restaurants.router, prefix="/restaurants", tags=["restaurants"])
# path-parameter prefix; keep last
api_router.include_router(availability.router, tags=["availability"])
