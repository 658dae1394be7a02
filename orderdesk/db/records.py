"""Canonical records built from ORM rows at the data-access boundary.

Older deployments stored some values under legacy column names. The mapping
below is the only place that knows about them.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from orderdesk.models.order import Order


def _aware(value: datetime | None) -> datetime | None:
    # sqlite drops tzinfo on round-trip; stored values are always UTC
    if value is not None and value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


@dataclass(frozen=True)
class OrderRecord:
    id: str
    restaurant_id: str
    status: str
    name: str | None
    contact_email: str | None
    phone: str | None
    selected_option: str | None
    delivery_time: datetime | None
    created_at: datetime | None = None

    def snapshot(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "delivery_time": self.delivery_time.isoformat() if self.delivery_time else None,
        }


def order_record(order: Order) -> OrderRecord:
    """Normalize an order row, preferring the current ETA column over the legacy one."""
    return OrderRecord(
        id=order.id,
        restaurant_id=order.restaurant_id,
        status=order.status,
        name=order.name,
        contact_email=order.contact_email,
        phone=order.phone,
        selected_option=order.selected_option,
        delivery_time=_aware(order.delivery_time or order.legacy_delivery_time),
        created_at=_aware(order.created_at),
    )
