"""Delivery zone configuration per restaurant."""

from __future__ import annotations

from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import Session

from orderdesk.core.errors import NotFoundError, ValidationFailed
from orderdesk.models.delivery_zone import DeliveryZone
from orderdesk.schemas.zone import DeliveryZoneCreate, DeliveryZonePatch

NULLABLE_ZONE_FIELDS = {"free_over"}


def build_zone_patch(payload: DeliveryZonePatch) -> dict[str, Any]:
    """Keep only the keys the client sent; only ``free_over`` may be cleared with null."""
    patch = payload.model_dump(exclude_unset=True)
    return {
        key: value
        for key, value in patch.items()
        if value is not None or key in NULLABLE_ZONE_FIELDS
    }


def list_zones(db: Session, restaurant_id: str) -> list[DeliveryZone]:
    return db.scalars(
        select(DeliveryZone)
        .where(DeliveryZone.restaurant_id == restaurant_id)
        .order_by(DeliveryZone.min_distance_km.asc())
    ).all()


def create_zone(db: Session, restaurant_id: str, payload: DeliveryZoneCreate) -> DeliveryZone:
    zone = DeliveryZone(restaurant_id=restaurant_id, **payload.model_dump())
    db.add(zone)
    db.commit()
    db.refresh(zone)
    return zone


def _get_scoped_zone(db: Session, restaurant_id: str, zone_id: str) -> DeliveryZone:
    zone = db.scalar(
        select(DeliveryZone).where(DeliveryZone.id == zone_id, DeliveryZone.restaurant_id == restaurant_id)
    )
    if zone is None:
        raise NotFoundError("Not found")
    return zone


def patch_zone(db: Session, restaurant_id: str, zone_id: str, payload: DeliveryZonePatch) -> DeliveryZone:
    zone_id = str(zone_id or "").strip()
    if not zone_id:
        raise ValidationFailed("Missing id")
    patch = build_zone_patch(payload)
    if not patch:
        raise ValidationFailed("Empty patch")

    zone = _get_scoped_zone(db, restaurant_id, zone_id)
    for key, value in patch.items():
        setattr(zone, key, value)
    db.commit()
    db.refresh(zone)
    return zone


def delete_zone(db: Session, restaurant_id: str, zone_id: str) -> None:
    zone_id = str(zone_id or "").strip()
    if not zone_id:
        raise ValidationFailed("Missing id")
    zone = _get_scoped_zone(db, restaurant_id, zone_id)
    db.delete(zone)
    db.commit()
