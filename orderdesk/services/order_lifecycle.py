"""Guarded order status transitions scoped to the caller's restaurant."""

from __future__ import annotations

import logging
import math
from datetime import datetime, timedelta
from typing import Any

from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from orderdesk.core.errors import InvalidTransitionError, NotFoundError, ValidationFailed
from orderdesk.db.records import OrderRecord, order_record
from orderdesk.models.order import Order
from orderdesk.services.audit_service import log_order_transition
from orderdesk.services.tenant_context import TenantContext, UUID_RE
from orderdesk.utils.time import utc_now

logger = logging.getLogger(__name__)

ORDER_STATUSES: tuple[str, ...] = ("pending", "accepted", "cancelled", "completed")
OPEN_STATUSES: tuple[str, ...] = ("pending", "accepted")

ALLOWED_TRANSITIONS: dict[str, set[str]] = {
    "pending": {"accepted", "cancelled"},
    "accepted": {"cancelled", "completed"},
    "cancelled": set(),
    "completed": set(),
}

MIN_ETA_MINUTES = 5
MAX_ETA_MINUTES = 180
DEFAULT_ETA_MINUTES = 30


def can_transition(current: str, new: str) -> bool:
    """Return whether an order can move from current to new status; staying put is allowed."""
    return new == current or new in ALLOWED_TRANSITIONS.get(current, set())


def source_statuses(new: str) -> set[str]:
    return {status for status in ORDER_STATUSES if can_transition(status, new)}


def clamp_minutes(value: float | None) -> float:
    """Clamp a requested ETA to [5, 180] minutes, defaulting to 30."""
    if value is None or not math.isfinite(value):
        return DEFAULT_ETA_MINUTES
    return max(MIN_ETA_MINUTES, min(MAX_ETA_MINUTES, value))


def parse_order_id(raw: str | None) -> str:
    order_id = str(raw or "").strip()
    if not order_id:
        raise ValidationFailed("Missing order id")
    if not UUID_RE.match(order_id):
        raise ValidationFailed("Invalid order id")
    return order_id


def _status_timestamps(new_status: str, now: datetime) -> dict[Any, Any]:
    if new_status == "accepted":
        return {Order.accepted_at: now}
    if new_status == "cancelled":
        return {Order.cancelled_at: now}
    return {}


def _scoped(order_id: str, restaurant_id: str):
    return (Order.id == order_id, Order.restaurant_id == restaurant_id)


def apply_transition(
    db: Session,
    ctx: TenantContext,
    order_id: str,
    new_status: str,
    *,
    values: dict[Any, Any] | None = None,
    action_type: str,
) -> OrderRecord:
    """Move one order to ``new_status`` if it belongs to ``ctx`` and the move is allowed.

    The UPDATE itself carries the tenant and source-status filters, so concurrent
    callers race at the row level only. Missing and foreign orders both raise
    NotFoundError.
    """
    current = db.scalar(select(Order).where(*_scoped(order_id, ctx.restaurant_id)))
    if current is None:
        raise NotFoundError("Order not found")
    before = order_record(current)

    changes: dict[Any, Any] = {Order.status: new_status, **(values or {})}
    result = db.execute(
        update(Order)
        .where(*_scoped(order_id, ctx.restaurant_id), Order.status.in_(source_statuses(new_status)))
        .values(changes)
        .execution_options(synchronize_session=False)
    )
    if result.rowcount == 0:
        db.rollback()
        status_now = db.scalar(select(Order.status).where(*_scoped(order_id, ctx.restaurant_id)))
        if status_now is None:
            raise NotFoundError("Order not found")
        raise InvalidTransitionError(f"Cannot change order status from {status_now} to {new_status}")

    db.expire_all()
    updated = db.scalar(select(Order).where(*_scoped(order_id, ctx.restaurant_id)))
    record = order_record(updated)
    log_order_transition(db, ctx, action_type=action_type, before=before, after=record)
    db.commit()
    logger.info("order %s -> %s (restaurant=%s user=%s)", order_id, new_status, ctx.restaurant_id, ctx.user.id)
    return record


def accept_order(
    db: Session,
    ctx: TenantContext,
    raw_order_id: str | None,
    minutes: float | None,
    now: datetime | None = None,
) -> tuple[OrderRecord, float]:
    """Accept an order and set its ETA to now + clamped minutes.

    Re-accepting recomputes the ETA from the new ``now``.
    """
    order_id = parse_order_id(raw_order_id)
    effective_minutes = clamp_minutes(minutes)
    now = now or utc_now()
    eta = now + timedelta(minutes=effective_minutes)

    record = apply_transition(
        db,
        ctx,
        order_id,
        "accepted",
        values={Order.delivery_time: eta, Order.legacy_delivery_time: eta, **_status_timestamps("accepted", now)},
        action_type="ORDER_ACCEPTED",
    )
    return record, effective_minutes


def cancel_order(db: Session, ctx: TenantContext, raw_order_id: str | None) -> OrderRecord:
    order_id = str(raw_order_id or "").strip()
    if not order_id:
        raise ValidationFailed("Brak poprawnego orderId")
    if not UUID_RE.match(order_id):
        # cannot exist in any tenant; same answer as a foreign order
        raise NotFoundError("Zamówienie nie istnieje lub nie należy do Twojej restauracji.")
    try:
        return apply_transition(
            db,
            ctx,
            order_id,
            "cancelled",
            values=_status_timestamps("cancelled", utc_now()),
            action_type="ORDER_CANCELLED",
        )
    except NotFoundError as exc:
        raise NotFoundError("Zamówienie nie istnieje lub nie należy do Twojej restauracji.") from exc


def update_order_status(db: Session, ctx: TenantContext, raw_order_id: str | None, new_status: str) -> OrderRecord:
    """Generic status change limited to known statuses and allowed transitions."""
    order_id = parse_order_id(raw_order_id)
    status = str(new_status or "").strip().lower()
    if status not in ORDER_STATUSES:
        raise ValidationFailed("Validation", details={"status": f"must be one of {', '.join(ORDER_STATUSES)}"})
    return apply_transition(
        db,
        ctx,
        order_id,
        status,
        values=_status_timestamps(status, utc_now()),
        action_type="ORDER_STATUS_CHANGED",
    )


def list_current_orders(
    db: Session,
    ctx: TenantContext,
    *,
    scope: str = "open",
    limit: int = 20,
    offset: int = 0,
) -> tuple[list[OrderRecord], int]:
    """Newest-first page of the tenant's orders and the total matching count.

    ``scope="open"`` keeps only orders that can still change; any other scope lists everything.
    """
    filters = [Order.restaurant_id == ctx.restaurant_id]
    if scope == "open":
        filters.append(Order.status.in_(OPEN_STATUSES))

    total = db.scalar(select(func.count()).select_from(Order).where(*filters)) or 0
    rows = db.scalars(
        select(Order).where(*filters).order_by(Order.created_at.desc()).offset(offset).limit(limit)
    ).all()
    return [order_record(row) for row in rows], total
