"""Restaurant lookups for public, slug-addressed routes."""

from sqlalchemy.orm import Session

from orderdesk.models.restaurant import Restaurant


def get_restaurant_by_slug(db: Session, slug: str) -> Restaurant | None:
    """Return the active restaurant served under ``slug``."""
    return (
        db.query(Restaurant)
        .filter(
            Restaurant.slug == slug.strip().lower(),
            Restaurant.active.is_(True),
        )
        .first()
    )
