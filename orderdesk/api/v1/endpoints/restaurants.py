"""Restaurant selection endpoints backing the admin panel's tenant switcher."""

from fastapi import APIRouter, Depends, Query, Request, Response
from sqlalchemy.orm import Session

from orderdesk.db.privileged import PrivilegedStore
from orderdesk.db.session import get_db
from orderdesk.schemas.restaurant import RestaurantSelection
from orderdesk.services.role_gate import lookup_role
from orderdesk.services.tenant_context import forget_restaurant, get_privileged_store, resolve_tenant_context

router: APIRouter = APIRouter()


@router.get("/ensure-cookie", response_model=RestaurantSelection)
def ensure_cookie(
    request: Request,
    response: Response,
    restaurant: str | None = Query(default=None, max_length=64),
    db: Session = Depends(get_db),
    store: PrivilegedStore = Depends(get_privileged_store),
) -> RestaurantSelection:
    """Select the restaurant named by ``restaurant`` if the caller belongs to it and store it in cookies."""
    ctx = resolve_tenant_context(request, response, db, store, preferred_slug=restaurant)
    return RestaurantSelection(
        restaurant_id=ctx.restaurant_id,
        restaurant_slug=store.restaurant_slug(ctx.restaurant_id),
        role=lookup_role(store, ctx.user.id, ctx.restaurant_id),
    )


@router.post("/clear-cookie")
def clear_cookie(response: Response) -> dict[str, bool]:
    forget_restaurant(response)
    return {"ok": True}
