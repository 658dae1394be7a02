"""Order acceptance endpoint for restaurant staff."""

from typing import Any

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from orderdesk.api.deps import order_staff, parse_body, read_json_body
from orderdesk.db.session import get_db
from orderdesk.schemas.order import AcceptOrderRequest, AcceptOrderResponse
from orderdesk.services.notifications import NotificationDispatcher, get_dispatcher, notify_order_accepted
from orderdesk.services.order_lifecycle import accept_order, parse_order_id
from orderdesk.services.tenant_context import TenantContext

router: APIRouter = APIRouter()


@router.post("/{order_id}/accept", response_model=AcceptOrderResponse)
def accept(
    order_id: str,
    body: dict[str, Any] = Depends(read_json_body),
    ctx: TenantContext = Depends(order_staff),
    db: Session = Depends(get_db),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher),
) -> AcceptOrderResponse:
    """Accept a pending order and publish its ETA to the customer."""
    parse_order_id(order_id)
    payload = parse_body(AcceptOrderRequest, body)

    record, minutes = accept_order(db, ctx, order_id, payload.minutes)
    notify_order_accepted(dispatcher, record, minutes)

    return AcceptOrderResponse(id=record.id, status=record.status, deliveryTime=record.delivery_time)
