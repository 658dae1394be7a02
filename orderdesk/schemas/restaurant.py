"""Restaurant selection schemas."""

from pydantic import BaseModel


class RestaurantSelection(BaseModel):
    """Tenant chosen for the session and the caller's role in it."""

    restaurant_id: str
    restaurant_slug: str | None = None
    role: str | None = None
