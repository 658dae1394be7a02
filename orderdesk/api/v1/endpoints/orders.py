"""Order listing, cancellation and status endpoints."""

from typing import Any, Literal

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from orderdesk.api.deps import any_member, parse_body, read_json_body
from orderdesk.db.session import get_db
from orderdesk.schemas.order import (
    CancelOrderRequest,
    CancelOrderResponse,
    CurrentOrdersResponse,
    OrderStatusResponse,
    OrderStatusUpdate,
    OrderSummary,
)
from orderdesk.services.order_lifecycle import cancel_order, list_current_orders, update_order_status
from orderdesk.services.tenant_context import TenantContext, get_tenant_context

router: APIRouter = APIRouter()


@router.get("/current", response_model=CurrentOrdersResponse)
def current_orders(
    scope: Literal["open", "all"] = "open",
    limit: int = Query(default=20, ge=1, le=100),
    offset: int = Query(default=0, ge=0),
    ctx: TenantContext = Depends(any_member),
    db: Session = Depends(get_db),
) -> CurrentOrdersResponse:
    """Orders of the caller's restaurant, newest first."""
    records, total = list_current_orders(db, ctx, scope=scope, limit=limit, offset=offset)
    return CurrentOrdersResponse(
        orders=[
            OrderSummary(
                id=record.id,
                status=record.status,
                name=record.name,
                phone=record.phone,
                selected_option=record.selected_option,
                deliveryTime=record.delivery_time,
                created_at=record.created_at,
            )
            for record in records
        ],
        totalCount=total,
        restaurant_id=ctx.restaurant_id,
    )


@router.post("/cancel", response_model=CancelOrderResponse)
def cancel(
    body: dict[str, Any] = Depends(read_json_body),
    ctx: TenantContext = Depends(get_tenant_context),
    db: Session = Depends(get_db),
) -> CancelOrderResponse:
    """Cancel an order of the caller's restaurant; foreign orders answer 404."""
    payload = parse_body(CancelOrderRequest, body)
    record = cancel_order(db, ctx, payload.orderId)
    return CancelOrderResponse(data=OrderStatusResponse(id=record.id, status=record.status))


@router.patch("/{order_id}", response_model=OrderStatusResponse)
def change_status(
    order_id: str,
    payload: OrderStatusUpdate,
    ctx: TenantContext = Depends(any_member),
    db: Session = Depends(get_db),
) -> OrderStatusResponse:
    record = update_order_status(db, ctx, order_id, payload.status)
    return OrderStatusResponse(id=record.id, status=record.status)
