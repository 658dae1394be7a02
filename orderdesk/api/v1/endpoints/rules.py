"""Closure window and blocked address management."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from orderdesk.api.deps import restaurant_managers
from orderdesk.db.session import get_db
from orderdesk.schemas.rules import BlockedAddressCreate, BlockedAddressRead, ClosureWindowCreate, ClosureWindowRead
from orderdesk.services import rules_service
from orderdesk.services.tenant_context import TenantContext

router: APIRouter = APIRouter()


@router.get("/closure-windows")
def list_closure_windows(
    ctx: TenantContext = Depends(restaurant_managers),
    db: Session = Depends(get_db),
) -> dict[str, list[ClosureWindowRead]]:
    windows = rules_service.list_closure_windows(db, ctx.restaurant_id)
    return {"windows": [ClosureWindowRead.model_validate(window) for window in windows]}


@router.post("/closure-windows", status_code=status.HTTP_201_CREATED)
def create_closure_window(
    payload: ClosureWindowCreate,
    ctx: TenantContext = Depends(restaurant_managers),
    db: Session = Depends(get_db),
) -> dict[str, ClosureWindowRead]:
    window = rules_service.create_closure_window(db, ctx.restaurant_id, payload)
    return {"window": ClosureWindowRead.model_validate(window)}


@router.delete("/closure-windows/{window_id}")
def delete_closure_window(
    window_id: int,
    ctx: TenantContext = Depends(restaurant_managers),
    db: Session = Depends(get_db),
) -> dict[str, bool]:
    rules_service.delete_closure_window(db, ctx.restaurant_id, window_id)
    return {"ok": True}


@router.get("/blocked-addresses")
def list_blocked_addresses(
    ctx: TenantContext = Depends(restaurant_managers),
    db: Session = Depends(get_db),
) -> dict[str, list[BlockedAddressRead]]:
    rows = rules_service.list_blocked_addresses(db, ctx.restaurant_id)
    return {"addresses": [BlockedAddressRead.model_validate(row) for row in rows]}


@router.post("/blocked-addresses", status_code=status.HTTP_201_CREATED)
def create_blocked_address(
    payload: BlockedAddressCreate,
    ctx: TenantContext = Depends(restaurant_managers),
    db: Session = Depends(get_db),
) -> dict[str, BlockedAddressRead]:
    row = rules_service.create_blocked_address(db, ctx.restaurant_id, payload)
    return {"address": BlockedAddressRead.model_validate(row)}


@router.delete("/blocked-addresses/{blocked_id}")
def delete_blocked_address(
    blocked_id: int,
    ctx: TenantContext = Depends(restaurant_managers),
    db: Session = Depends(get_db),
) -> dict[str, bool]:
    rules_service.delete_blocked_address(db, ctx.restaurant_id, blocked_id)
    return {"ok": True}
