"""Role checks for tenant-scoped admin operations."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from orderdesk.core.errors import AdminAuthError
from orderdesk.db.privileged import PrivilegedStore
from orderdesk.db.session import get_db
from orderdesk.services.tenant_context import TenantContext, get_privileged_store, resolve_tenant_context

logger = logging.getLogger(__name__)

DEFAULT_ROLES: tuple[str, ...] = ("admin", "owner")
LEGACY_MEMBERSHIP_ROLE = "admin"

_legacy_warning_logged = False


def _warn_legacy_schema() -> None:
    global _legacy_warning_logged
    if not _legacy_warning_logged:
        logger.warning("Membership role column unavailable; treating membership as %r", LEGACY_MEMBERSHIP_ROLE)
        _legacy_warning_logged = True


def lookup_role(store: PrivilegedStore, user_id: str, restaurant_id: str) -> str | None:
    """Role of the (user, restaurant) membership, or None without one."""
    if not store.features.membership_role_column:
        if not store.has_membership(user_id, restaurant_id):
            return None
        _warn_legacy_schema()
        return LEGACY_MEMBERSHIP_ROLE
    return store.membership_role(user_id, restaurant_id) or None


def check_role(ctx: TenantContext, store: PrivilegedStore, roles: Iterable[str] = DEFAULT_ROLES) -> TenantContext:
    """Confirm the (user, restaurant) membership carries one of ``roles``."""
    role = lookup_role(store, ctx.user.id, ctx.restaurant_id)
    if role is None:
        raise AdminAuthError(403, "FORBIDDEN", "Brak dostępu.")
    if role not in set(roles):
        raise AdminAuthError(403, "FORBIDDEN_ROLE", "Brak uprawnień.")
    return ctx.with_role(role)


def require_restaurant_access(*roles: str) -> Callable[..., TenantContext]:
    """Build a dependency resolving the tenant and enforcing an accepted role set."""
    accepted: tuple[str, ...] = roles or DEFAULT_ROLES

    def _dependency(
        request: Request,
        response: Response,
        db: Session = Depends(get_db),
        store: PrivilegedStore = Depends(get_privileged_store),
    ) -> TenantContext:
        ctx = resolve_tenant_context(request, response, db, store)
        return check_role(ctx, store, accepted)

    return _dependency
