"""Checks deciding whether a restaurant accepts an order right now."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

import httpx
from sqlalchemy.orm import Session

from orderdesk.core.config import settings
from orderdesk.core.errors import AppError
from orderdesk.models.ordering_rules import BlockedAddress, ClosureWindow
from orderdesk.models.restaurant import Restaurant
from orderdesk.utils.time import sunday_based_weekday, to_restaurant_local

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DistanceResult:
    """Driving distance; ``km`` is None when it could not be verified."""

    km: float | None
    max_km: float | None

    @property
    def exceeds_max(self) -> bool:
        return self.km is not None and self.max_km is not None and self.km > self.max_km


def closure_matches(window: ClosureWindow, local_now: datetime) -> bool:
    """A window needs both bounds to match; incomplete windows never block."""
    if window.weekday is not None and window.weekday != sunday_based_weekday(local_now):
        return False
    if window.start_time is None or window.end_time is None:
        return False
    current = local_now.time().replace(tzinfo=None)
    return window.start_time <= current <= window.end_time


def is_ordering_open(db: Session, restaurant_id: str, instant: datetime) -> bool:
    """Return True unless an active closure window covers ``instant``."""
    windows = (
        db.query(ClosureWindow)
        .filter(
            ClosureWindow.restaurant_id == restaurant_id,
            ClosureWindow.is_active.is_(True),
        )
        .all()
    )
    local_now = to_restaurant_local(instant)
    return not any(closure_matches(window, local_now) for window in windows)


def normalize_address(address: str | None) -> str:
    return str(address or "").strip().lower()


def pattern_blocks(block_type: str, pattern: str, normalized_address: str) -> bool:
    """Unknown block types never match."""
    needle = str(pattern or "").lower()
    if block_type == "exact":
        return normalized_address == needle
    if block_type == "prefix":
        return normalized_address.startswith(needle)
    if block_type == "contains":
        return needle in normalized_address
    return False


def is_address_blocked(db: Session, restaurant_id: str, address: str | None) -> bool:
    normalized = normalize_address(address)
    rows = (
        db.query(BlockedAddress)
        .filter(
            BlockedAddress.restaurant_id == restaurant_id,
            BlockedAddress.active.is_(True),
        )
        .all()
    )
    return any(pattern_blocks(row.type, row.pattern, normalized) for row in rows)


def _meters_from_payload(payload: object) -> float | None:
    try:
        element = payload["rows"][0]["elements"][0]  # type: ignore[index]
        meters = element["distance"]["value"]
    except (KeyError, IndexError, TypeError):
        return None
    if isinstance(meters, bool) or not isinstance(meters, (int, float)):
        return None
    return float(meters)


def get_driving_distance_km(
    db: Session,
    restaurant_id: str,
    address: str,
    *,
    client: httpx.Client | None = None,
) -> DistanceResult:
    """Ask the distance-matrix API once; any gap or failure reports ``km=None``."""
    restaurant: Restaurant | None = db.get(Restaurant, restaurant_id)
    if restaurant is None:
        return DistanceResult(km=None, max_km=None)

    max_km = restaurant.max_delivery_km
    if restaurant.lat is None or restaurant.lon is None or not settings.google_maps_api_key:
        return DistanceResult(km=None, max_km=max_km)

    params = {
        "origins": f"{restaurant.lat},{restaurant.lon}",
        "destinations": address,
        "key": settings.google_maps_api_key,
    }
    owns_client = client is None
    http = client or httpx.Client(timeout=settings.http_timeout_seconds)
    try:
        response = http.get(settings.distance_matrix_url, params=params)
        if not response.is_success:
            logger.warning("Distance API answered %s for restaurant %s", response.status_code, restaurant_id)
            return DistanceResult(km=None, max_km=max_km)
        meters = _meters_from_payload(response.json())
    except (httpx.HTTPError, ValueError) as exc:
        logger.warning("Distance API unavailable: %s", exc)
        return DistanceResult(km=None, max_km=max_km)
    finally:
        if owns_client:
            http.close()

    return DistanceResult(km=meters / 1000 if meters is not None else None, max_km=max_km)


def check_availability(
    db: Session,
    restaurant_id: str,
    *,
    method: str | None,
    address: str | None,
    now: datetime,
    client: httpx.Client | None = None,
) -> None:
    """Raise a 403 AppError when the order cannot be placed."""
    if not is_ordering_open(db, restaurant_id, now):
        raise AppError("Zamówienia chwilowo wstrzymane", status=403, code="ORDERING_CLOSED")

    if method != "delivery":
        return

    address_text = str(address or "")
    if is_address_blocked(db, restaurant_id, address_text):
        raise AppError("Adres zablokowany", status=403, code="ADDRESS_BLOCKED")

    distance = get_driving_distance_km(db, restaurant_id, address_text, client=client)
    if distance.exceeds_max:
        raise AppError(f"Poza zasięgiem ({distance.km:.1f} km)", status=403, code="OUT_OF_RANGE")
