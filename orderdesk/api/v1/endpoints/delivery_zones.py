"""Delivery zone configuration endpoints."""

from typing import Any

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from orderdesk.api.deps import order_staff, parse_body, read_json_body, restaurant_managers
from orderdesk.db.session import get_db
from orderdesk.schemas.zone import DeliveryZoneCreate, DeliveryZonePatch, DeliveryZoneRead
from orderdesk.services import zone_service
from orderdesk.services.tenant_context import TenantContext

router: APIRouter = APIRouter()


@router.get("/delivery-zones")
def list_zones(
    ctx: TenantContext = Depends(restaurant_managers),
    db: Session = Depends(get_db),
) -> dict[str, list[DeliveryZoneRead]]:
    zones = zone_service.list_zones(db, ctx.restaurant_id)
    return {"zones": [DeliveryZoneRead.model_validate(zone) for zone in zones]}


@router.post("/delivery-zones", status_code=status.HTTP_201_CREATED)
def create_zone(
    payload: DeliveryZoneCreate,
    ctx: TenantContext = Depends(restaurant_managers),
    db: Session = Depends(get_db),
) -> dict[str, DeliveryZoneRead]:
    zone = zone_service.create_zone(db, ctx.restaurant_id, payload)
    return {"zone": DeliveryZoneRead.model_validate(zone)}


@router.patch("/{zone_id}")
def patch_zone(
    zone_id: str,
    body: dict[str, Any] = Depends(read_json_body),
    ctx: TenantContext = Depends(order_staff),
    db: Session = Depends(get_db),
) -> dict[str, DeliveryZoneRead]:
    payload = parse_body(DeliveryZonePatch, body)
    zone = zone_service.patch_zone(db, ctx.restaurant_id, zone_id, payload)
    return {"zone": DeliveryZoneRead.model_validate(zone)}


@router.delete("/{zone_id}")
def delete_zone(
    zone_id: str,
    ctx: TenantContext = Depends(order_staff),
    db: Session = Depends(get_db),
) -> dict[str, bool]:
    zone_service.delete_zone(db, ctx.restaurant_id, zone_id)
    return {"ok": True}
