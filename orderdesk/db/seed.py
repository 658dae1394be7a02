"""Database seeding helpers."""

import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from orderdesk.core.config import settings
from orderdesk.core.security import get_password_hash
from orderdesk.models.user import User

logger = logging.getLogger(__name__)


def ensure_admin_user(session: Session) -> bool:
    """Ensure the bootstrap login from ADMIN_EMAIL/ADMIN_PASSWORD exists in development only."""
    if settings.is_production or not settings.admin_email or not settings.admin_password:
        return False

    existing_user = session.scalar(select(User).where(User.email == settings.admin_email).limit(1))
    if existing_user is not None:
        return True

    try:
        hashed_password = get_password_hash(settings.admin_password)
    except ValueError as exc:
        logger.warning("Skipping admin seed: %s", exc)
        return False

    session.add(User(email=settings.admin_email, password_hash=hashed_password, is_active=True))
    session.commit()
    logger.info("[BOOTSTRAP] created login %s", settings.admin_email)
    return True
