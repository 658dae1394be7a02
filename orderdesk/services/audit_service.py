"""Audit trail for tenant-scoped order transitions."""

from __future__ import annotations

from sqlalchemy.orm import Session

from orderdesk.db.records import OrderRecord
from orderdesk.models import AuditLog
from orderdesk.services.tenant_context import TenantContext


def log_order_transition(
    db: Session,
    ctx: TenantContext,
    *,
    action_type: str,
    before: OrderRecord,
    after: OrderRecord,
) -> None:
    """Stage an audit row in the caller's transaction; it commits with the transition."""
    db.add(
        AuditLog(
            actor_user_id=ctx.user.id,
            actor_identifier=ctx.user.email,
            restaurant_id=ctx.restaurant_id,
            action_type=action_type,
            order_id=after.id,
            before_snapshot=before.snapshot(),
            after_snapshot=after.snapshot(),
        )
    )
