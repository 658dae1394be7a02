"""Public pre-checkout availability check."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from orderdesk.core.errors import NotFoundError
from orderdesk.db.session import get_db
from orderdesk.schemas.availability import AvailabilityRequest
from orderdesk.services.availability import check_availability
from orderdesk.services.restaurant_service import get_restaurant_by_slug
from orderdesk.utils.time import utc_now

router: APIRouter = APIRouter()


@router.post("/{city}/check-availability")
def check(city: str, payload: AvailabilityRequest, db: Session = Depends(get_db)) -> dict[str, bool]:
    restaurant = get_restaurant_by_slug(db, city)
    if restaurant is None:
        raise NotFoundError("Brak restauracji")

    check_availability(db, restaurant.id, method=payload.method, address=payload.address, now=utc_now())
    return {"ok": True}
