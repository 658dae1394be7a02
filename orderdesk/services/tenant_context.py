"""Resolve the restaurant (tenant) a request acts on."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, replace

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from orderdesk.core.config import settings
from orderdesk.core.errors import NoRestaurantAccess
from orderdesk.core.security import resolve_identity
from orderdesk.db.privileged import PrivilegedStore
from orderdesk.db.session import get_db
from orderdesk.models.user import User

logger = logging.getLogger(__name__)

UUID_RE = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[1-5][0-9a-f]{3}-[89ab][0-9a-f]{3}-[0-9a-f]{12}$",
    re.IGNORECASE,
)
_UUID_NOISE_RE = re.compile(r"[<>\s'\"]")


@dataclass(frozen=True)
class TenantContext:
    """Authorization unit computed once per request."""

    user: User
    restaurant_id: str
    role: str | None = None

    def with_role(self, role: str) -> "TenantContext":
        return replace(self, role=role)


def normalize_uuid(value: str | None) -> str | None:
    """Strip quoting noise and return the lowercased value only if it is a v1-5 UUID."""
    if not value:
        return None
    cleaned = _UUID_NOISE_RE.sub("", str(value)).strip().lower()
    return cleaned if UUID_RE.match(cleaned) else None


def get_privileged_store(request: Request) -> PrivilegedStore:
    return request.app.state.privileged


def remember_restaurant(response: Response | None, store: PrivilegedStore, restaurant_id: str) -> None:
    """Write the tenant hint cookies; failures never affect the resolved context."""
    if response is None:
        return
    try:
        response.set_cookie(
            settings.restaurant_cookie_name,
            restaurant_id,
            max_age=settings.restaurant_cookie_max_age,
            path="/",
            samesite="lax",
            httponly=True,
            secure=settings.is_production,
        )
        slug = store.restaurant_slug(restaurant_id)
        if slug:
            response.set_cookie(
                settings.restaurant_slug_cookie_name,
                slug,
                max_age=settings.restaurant_cookie_max_age,
                path="/",
                samesite="lax",
                httponly=False,
                secure=settings.is_production,
            )
    except Exception:
        logger.debug("Could not refresh restaurant cookies", exc_info=True)


def forget_restaurant(response: Response) -> None:
    response.delete_cookie(
        settings.restaurant_cookie_name,
        path="/",
        samesite="lax",
        httponly=True,
        secure=settings.is_production,
    )
    response.delete_cookie(
        settings.restaurant_slug_cookie_name,
        path="/",
        samesite="lax",
        secure=settings.is_production,
    )


def _member_restaurant_for_slug(store: PrivilegedStore, user_id: str, slug: str) -> str | None:
    restaurant_id = normalize_uuid(store.restaurant_id_for_slug(slug.strip().lower()))
    if restaurant_id and store.has_membership(user_id, restaurant_id):
        return restaurant_id
    return None


def resolve_tenant_context(
    request: Request,
    response: Response | None,
    db: Session,
    store: PrivilegedStore,
    *,
    preferred_slug: str | None = None,
) -> TenantContext:
    """Pick the restaurant the request acts on.

    A ``preferred_slug`` wins when the user is a member of that restaurant; an
    unknown or foreign slug falls back to the earliest membership and ignores the
    cookie hint. Without a slug the ``restaurant_id`` cookie is honoured when the
    membership exists.
    """
    user = resolve_identity(request, db)

    restaurant_id: str | None = None
    if preferred_slug:
        restaurant_id = _member_restaurant_for_slug(store, user.id, preferred_slug)
        if restaurant_id is None:
            logger.info("Restaurant %r not available to user %s; using first membership", preferred_slug, user.id)
    else:
        hinted = normalize_uuid(request.cookies.get(settings.restaurant_cookie_name))
        if hinted and store.has_membership(user.id, hinted):
            restaurant_id = hinted

    if restaurant_id is None:
        restaurant_id = normalize_uuid(store.first_restaurant_id(user.id))
        if restaurant_id is None:
            raise NoRestaurantAccess()

    remember_restaurant(response, store, restaurant_id)
    return TenantContext(user=user, restaurant_id=restaurant_id)


def get_tenant_context(
    request: Request,
    response: Response,
    db: Session = Depends(get_db),
    store: PrivilegedStore = Depends(get_privileged_store),
) -> TenantContext:
    """FastAPI dependency: tenant context without a role requirement."""
    return resolve_tenant_context(request, response, db, store)
