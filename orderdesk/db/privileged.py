"""Privileged datastore handle for cross-tenant membership lookups.

Built once at startup and handed only to the tenant resolver and the role gate.
Queries select explicit columns so they keep working on schemas that predate
``restaurant_admins.role``.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from sqlalchemy import Select, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from orderdesk.core.errors import RoleLookupError
from orderdesk.db.migrations import SchemaFeatures
from orderdesk.models.restaurant import Restaurant, RestaurantAdmin

logger = logging.getLogger(__name__)


class PrivilegedStore:
    def __init__(self, session_factory: Callable[[], Session], features: SchemaFeatures) -> None:
        self._session_factory = session_factory
        self.features = features

    def _scalar(self, stmt: Select) -> Any:
        try:
            with self._session_factory() as db:
                return db.scalar(stmt)
        except SQLAlchemyError as exc:
            logger.error("Membership lookup failed: %s", exc)
            raise RoleLookupError() from exc

    def has_membership(self, user_id: str, restaurant_id: str) -> bool:
        stmt = (
            select(RestaurantAdmin.restaurant_id)
            .where(RestaurantAdmin.user_id == user_id, RestaurantAdmin.restaurant_id == restaurant_id)
            .limit(1)
        )
        return self._scalar(stmt) is not None

    def first_restaurant_id(self, user_id: str) -> str | None:
        """Return the restaurant of the user's earliest membership."""
        stmt = (
            select(RestaurantAdmin.restaurant_id)
            .where(RestaurantAdmin.user_id == user_id)
            .order_by(RestaurantAdmin.added_at.asc())
            .limit(1)
        )
        return self._scalar(stmt)

    def membership_role(self, user_id: str, restaurant_id: str) -> str | None:
        stmt = (
            select(RestaurantAdmin.role)
            .where(RestaurantAdmin.user_id == user_id, RestaurantAdmin.restaurant_id == restaurant_id)
            .limit(1)
        )
        return self._scalar(stmt)

    def restaurant_slug(self, restaurant_id: str) -> str | None:
        return self._scalar(select(Restaurant.slug).where(Restaurant.id == restaurant_id))

    def restaurant_id_for_slug(self, slug: str) -> str | None:
        return self._scalar(select(Restaurant.id).where(Restaurant.slug == slug).limit(1))
