"""Admin notification feed and push endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from orderdesk.api.deps import read_json_body
from orderdesk.core.errors import ValidationFailed
from orderdesk.db.session import get_db
from orderdesk.schemas.notification import AdminNotificationCreate, AdminNotificationRead, PushSubscriptionPayload
from orderdesk.services import admin_notifications
from orderdesk.services.notifications import NotificationDispatcher, get_dispatcher, notify_staff_push
from orderdesk.services.push import sanitize_push_payload
from orderdesk.services.tenant_context import TenantContext, get_tenant_context

admin_router: APIRouter = APIRouter()
push_router: APIRouter = APIRouter()


@admin_router.get("/notifications")
def list_notifications(
    ctx: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
) -> dict[str, list[AdminNotificationRead]]:
    rows = admin_notifications.list_notifications(db, ctx.restaurant_id)
    return {"notifications": [AdminNotificationRead.model_validate(row) for row in rows]}


@admin_router.post("/notifications", status_code=status.HTTP_201_CREATED)
def create_notification(
    payload: AdminNotificationCreate,
    ctx: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
) -> dict[str, AdminNotificationRead]:
    row = admin_notifications.create_notification(db, ctx.restaurant_id, payload)
    return {"notification": AdminNotificationRead.model_validate(row)}


@admin_router.post("/notifications/read-all")
def read_all(
    ctx: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
) -> dict[str, bool]:
    admin_notifications.mark_all_read(db, ctx.restaurant_id)
    return {"ok": True}


@admin_router.post("/push/subscribe")
def subscribe(
    payload: PushSubscriptionPayload,
    ctx: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
) -> dict[str, bool]:
    admin_notifications.upsert_push_subscription(db, ctx.restaurant_id, payload)
    return {"ok": True}


@push_router.post("/send")
def send_push(
    body: dict[str, Any] = Depends(read_json_body),
    ctx: TenantContext = Depends(get_tenant_context),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> dict[str, Any]:
    if not body:
        raise ValidationFailed("INVALID_BODY")
    payload = sanitize_push_payload(body)
    notify_staff_push(dispatcher, ctx.restaurant_id, payload)
    return {"ok": True, "payload": payload}
