"""Web Push delivery to a restaurant's admin browsers."""

from __future__ import annotations

import json
import logging
import re
from typing import Any

from pywebpush import WebPushException, webpush
from sqlalchemy import delete, select

from orderdesk.core.config import settings
from orderdesk.db import session as db_session
from orderdesk.models.notification import AdminPushSubscription

logger = logging.getLogger(__name__)

DEFAULT_PUSH_URL = "/admin/current-orders"
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*:")
GONE_STATUSES = {404, 410}


class PushDeliveryError(RuntimeError):
    """No subscription of the restaurant accepted the push."""


def clamp_str(value: Any, max_length: int) -> str | None:
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    if not stripped:
        return None
    return stripped[:max_length]


def normalize_internal_url(value: Any, fallback: str = DEFAULT_PUSH_URL) -> str:
    """Accept only absolute in-app paths; anything else becomes ``fallback``."""
    url = clamp_str(value, 300)
    if not url:
        return fallback
    if not url.startswith("/") or url.startswith("//"):
        return fallback
    if _SCHEME_RE.match(url):
        return fallback
    if "\n" in url or "\r" in url:
        return fallback
    return url


def sanitize_push_payload(raw: dict[str, Any]) -> dict[str, str]:
    return {
        "type": clamp_str(raw.get("type"), 40) or "manual",
        "title": clamp_str(raw.get("title"), 120) or "Nowe zamówienie",
        "body": clamp_str(raw.get("body"), 240) or "Kliknij, aby zobaczyć szczegóły.",
        "url": normalize_internal_url(raw.get("url")),
    }


def _mask_endpoint(endpoint: str) -> str:
    return f"…{endpoint[-24:]}" if len(endpoint) > 24 else endpoint


def send_push_for_restaurant(restaurant_id: str, payload: dict[str, str]) -> int:
    """Push ``payload`` to every subscription of the restaurant; returns the delivered count.

    Subscriptions the push service reports as gone are removed. A failing
    subscription never stops delivery to the others. PushDeliveryError is raised
    only when every attempted subscription failed, so a retry cannot re-deliver.
    """
    if not settings.vapid_public_key or not settings.vapid_private_key:
        logger.warning("[push] VAPID keys not set; skipping")
        return 0

    with db_session.SessionLocal() as db:
        subscriptions = db.scalars(
            select(AdminPushSubscription).where(AdminPushSubscription.restaurant_id == restaurant_id).limit(500)
        ).all()

        delivered = 0
        failed = 0
        gone: list[int] = []
        data = json.dumps(payload, ensure_ascii=False)
        for subscription in subscriptions:
            try:
                webpush(
                    subscription_info=subscription.subscription,
                    data=data,
                    vapid_private_key=settings.vapid_private_key,
                    vapid_claims={"sub": settings.vapid_subject},
                )
                delivered += 1
            except WebPushException as exc:
                status_code = exc.response.status_code if exc.response is not None else None
                if status_code in GONE_STATUSES:
                    gone.append(subscription.id)
                else:
                    failed += 1
                    logger.error("[push] delivery failed for %s: %s", _mask_endpoint(subscription.endpoint), exc)
            except Exception as exc:
                failed += 1
                logger.error("[push] transport error for %s: %r", _mask_endpoint(subscription.endpoint), exc)

        if gone:
            db.execute(delete(AdminPushSubscription).where(AdminPushSubscription.id.in_(gone)))
            db.commit()
            logger.info("[push] removed %d expired subscriptions", len(gone))

    logger.info("[push] restaurant=%s delivered=%d/%d", restaurant_id, delivered, len(subscriptions))
    if failed and not delivered:
        raise PushDeliveryError(f"push failed for all {failed} subscriptions of restaurant {restaurant_id}")
    return delivered
