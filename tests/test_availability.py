"""Availability checks: closure windows, blocked addresses and delivery range."""

from datetime import datetime, time, timezone
from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from orderdesk import main as main_module
from orderdesk.core.config import settings
from orderdesk.core.errors import AppError
from orderdesk.db import session as db_session
from orderdesk.db.base import Base
from orderdesk.main import app
from orderdesk.models import BlockedAddress, ClosureWindow, Restaurant
from orderdesk.services.availability import (
    check_availability,
    get_driving_distance_km,
    is_address_blocked,
    is_ordering_open,
    pattern_blocks,
)

# 2024-06-12 is a Wednesday; Warsaw is UTC+2 in June.
WEDNESDAY = 3


def _warsaw(hour: int, minute: int) -> datetime:
    return datetime(2024, 6, 12, hour - 2, minute, tzinfo=timezone.utc)


def _prepare_db(tmp_path: Path, monkeypatch):
    engine = create_engine(f"sqlite:///{tmp_path / 'availability.db'}", connect_args={"check_same_thread": False})
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(main_module, "engine", engine)
    monkeypatch.setattr(main_module, "SessionLocal", testing_session_local)
    return testing_session_local


def _restaurant(session_local, **overrides) -> str:
    with session_local() as db:
        restaurant = Restaurant(slug="gdansk", name="Gdańsk", city="Gdańsk", **overrides)
        db.add(restaurant)
        db.commit()
        return restaurant.id


def _add(session_local, *rows) -> None:
    with session_local() as db:
        db.add_all(rows)
        db.commit()


def _distance_client(handler) -> httpx.Client:
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_closure_window_bounds(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local)
    _add(session_local, ClosureWindow(restaurant_id=rid, weekday=WEDNESDAY, start_time=time(10, 0), end_time=time(22, 0)))

    with session_local() as db:
        assert not is_ordering_open(db, rid, _warsaw(21, 59))
        assert not is_ordering_open(db, rid, _warsaw(10, 0))
        assert is_ordering_open(db, rid, _warsaw(22, 1))
        assert is_ordering_open(db, rid, _warsaw(9, 59))


def test_closure_window_other_weekday_or_inactive(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local)
    _add(
        session_local,
        ClosureWindow(restaurant_id=rid, weekday=0, start_time=time(0, 0), end_time=time(23, 59)),
        ClosureWindow(restaurant_id=rid, weekday=None, start_time=time(0, 0), end_time=time(23, 59), is_active=False),
    )

    with session_local() as db:
        assert is_ordering_open(db, rid, _warsaw(12, 0))


def test_closure_window_without_end_never_blocks(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local)
    _add(session_local, ClosureWindow(restaurant_id=rid, weekday=None, start_time=time(0, 0), end_time=None))

    with session_local() as db:
        assert is_ordering_open(db, rid, _warsaw(12, 0))


def test_pattern_types() -> None:
    assert pattern_blocks("exact", "ul. stara 5", "ul. stara 5")
    assert not pattern_blocks("exact", "ul. stara", "ul. stara 5")
    assert pattern_blocks("contains", "stara", "ul. stara 5")
    assert not pattern_blocks("regex", "stara", "ul. stara 5")


def test_prefix_block_is_case_insensitive(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local)
    _add(session_local, BlockedAddress(restaurant_id=rid, pattern="ul. stara", type="prefix"))

    with session_local() as db:
        assert is_address_blocked(db, rid, "  ul. Stara 5 ")
        assert not is_address_blocked(db, rid, "ul. Nowa 5")


def test_missing_api_key_never_rejects(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local, lat=54.35, lon=18.65, max_delivery_km=0)
    monkeypatch.setattr(settings, "google_maps_api_key", "")

    with session_local() as db:
        result = get_driving_distance_km(db, rid, "ul. Długa 1")
        check_availability(db, rid, method="delivery", address="ul. Długa 1", now=_warsaw(12, 0))

    assert result.km is None
    assert not result.exceeds_max


def test_distance_api_error_status_is_unverified(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local, lat=54.35, lon=18.65, max_delivery_km=5)
    monkeypatch.setattr(settings, "google_maps_api_key", "test-key")
    client = _distance_client(lambda request: httpx.Response(503, text="unavailable"))

    with session_local() as db:
        result = get_driving_distance_km(db, rid, "ul. Długa 1", client=client)

    assert result.km is None


def test_distance_over_limit_is_out_of_range(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local, lat=54.35, lon=18.65, max_delivery_km=5)
    monkeypatch.setattr(settings, "google_maps_api_key", "test-key")
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json={"rows": [{"elements": [{"distance": {"value": 7250}}]}]})

    with session_local() as db:
        with pytest.raises(AppError) as exc_info:
            check_availability(
                db, rid, method="delivery", address="ul. Długa 1", now=_warsaw(12, 0), client=_distance_client(handler)
            )

    assert exc_info.value.status == 403
    assert exc_info.value.code == "OUT_OF_RANGE"
    assert exc_info.value.message == "Poza zasięgiem (7.2 km)"
    assert seen[0].url.params["origins"] == "54.35,18.65"


def test_takeaway_skips_address_checks(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local)
    _add(session_local, BlockedAddress(restaurant_id=rid, pattern="stara", type="contains"))

    with session_local() as db:
        check_availability(db, rid, method="takeaway", address="ul. Stara 5", now=_warsaw(12, 0))


def test_check_availability_endpoint(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local)
    _add(session_local, BlockedAddress(restaurant_id=rid, pattern="ul. stara", type="prefix"))

    with TestClient(app) as client:
        ok = client.post("/api/gdansk/check-availability", json={"address": "ul. Nowa 5", "method": "delivery"})
        blocked = client.post("/api/gdansk/check-availability", json={"address": "ul. Stara 5", "method": "delivery"})
        unknown = client.post("/api/krakow/check-availability", json={"address": "x", "method": "delivery"})

    assert ok.status_code == 200
    assert ok.json() == {"ok": True}
    assert blocked.status_code == 403
    assert blocked.json() == {"error": "Adres zablokowany", "code": "ADDRESS_BLOCKED"}
    assert unknown.status_code == 404


def test_check_availability_endpoint_when_closed(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    rid = _restaurant(session_local)
    _add(session_local, ClosureWindow(restaurant_id=rid, weekday=None, start_time=time(0, 0), end_time=time(23, 59, 59)))

    with TestClient(app) as client:
        response = client.post("/api/gdansk/check-availability", json={"method": "takeaway"})

    assert response.status_code == 403
    assert response.json()["code"] == "ORDERING_CLOSED"
