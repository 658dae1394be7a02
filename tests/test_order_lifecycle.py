"""Order acceptance, cancellation and status transition tests."""

from datetime import datetime, timedelta, timezone
from pathlib import Path
from uuid import uuid4

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, select
from sqlalchemy.orm import sessionmaker

from orderdesk import main as main_module
from orderdesk.core.config import settings
from orderdesk.core.security import create_access_token, get_password_hash
from orderdesk.db import session as db_session
from orderdesk.db.base import Base
from orderdesk.main import app
from orderdesk.models import AuditLog, Order, Restaurant, RestaurantAdmin, User
from orderdesk.services.order_lifecycle import can_transition, clamp_minutes
from orderdesk.utils.time import format_local_hhmm


def _prepare_db(tmp_path: Path, monkeypatch):
    engine = create_engine(f"sqlite:///{tmp_path / 'orders.db'}", connect_args={"check_same_thread": False})
    testing_session_local = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(db_session, "engine", engine)
    monkeypatch.setattr(db_session, "SessionLocal", testing_session_local)
    monkeypatch.setattr(main_module, "engine", engine)
    monkeypatch.setattr(main_module, "SessionLocal", testing_session_local)
    return testing_session_local


def _seed(session_local, *, staff_role: str = "employee") -> dict[str, str]:
    with session_local() as db:
        home = Restaurant(slug="gdansk", name="Gdańsk", city="Gdańsk")
        foreign = Restaurant(slug="sopot", name="Sopot", city="Sopot")
        staff = User(email="staff@example.com", password_hash=get_password_hash("secret123"))
        manager = User(email="manager@example.com", password_hash=get_password_hash("secret123"))
        db.add_all([home, foreign, staff, manager])
        db.flush()
        db.add_all(
            [
                RestaurantAdmin(user_id=staff.id, restaurant_id=home.id, role=staff_role),
                RestaurantAdmin(user_id=manager.id, restaurant_id=home.id, role="manager"),
            ]
        )
        own_order = Order(restaurant_id=home.id, name="Anna", contact_email="anna@example.com", selected_option="delivery")
        foreign_order = Order(restaurant_id=foreign.id, name="Piotr", contact_email="piotr@example.com")
        db.add_all([own_order, foreign_order])
        db.commit()
        return {
            "home": home.id,
            "foreign": foreign.id,
            "staff": staff.id,
            "manager": manager.id,
            "order": own_order.id,
            "foreign_order": foreign_order.id,
        }


def _bearer(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {create_access_token({'sub': user_id})}"}


def _silence_notifications(monkeypatch) -> list[dict]:
    sent: list[dict] = []

    def _fake_send(to, **kwargs):
        sent.append({"to": to, **kwargs})
        return True

    monkeypatch.setattr("orderdesk.services.email.send_order_accepted_email", _fake_send)
    return sent


def _parse(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _accept(client: TestClient, order_id: str, user_id: str, body=None):
    return client.post(f"/api/admin/{order_id}/accept", json=body, headers=_bearer(user_id))


def test_transition_table_and_clamp() -> None:
    assert can_transition("pending", "accepted")
    assert can_transition("accepted", "accepted")
    assert can_transition("accepted", "completed")
    assert not can_transition("cancelled", "accepted")
    assert not can_transition("completed", "pending")
    assert clamp_minutes(1) == 5
    assert clamp_minutes(999) == 180
    assert clamp_minutes(None) == 30
    assert clamp_minutes(float("nan")) == 30
    assert clamp_minutes(42.5) == 42.5


def test_accept_sets_clamped_eta(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    _silence_notifications(monkeypatch)

    with TestClient(app) as client:
        for requested, expected in ((1, 5), (999, 180), (None, 30)):
            before = datetime.now(timezone.utc)
            body = {} if requested is None else {"minutes": requested}
            response = _accept(client, ids["order"], ids["staff"], body)
            after = datetime.now(timezone.utc)

            assert response.status_code == 200
            payload = response.json()
            assert payload["id"] == ids["order"]
            assert payload["status"] == "accepted"
            eta = _parse(payload["deliveryTime"])
            assert before + timedelta(minutes=expected) <= eta <= after + timedelta(minutes=expected)

    assert response.headers["cache-control"] == "no-store"


def test_accept_writes_both_eta_columns_and_audit(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    _silence_notifications(monkeypatch)

    with TestClient(app) as client:
        response = _accept(client, ids["order"], ids["staff"], {"minutes": 20})
    assert response.status_code == 200

    with session_local() as db:
        order = db.get(Order, ids["order"])
        assert order.status == "accepted"
        assert order.delivery_time is not None
        assert order.legacy_delivery_time == order.delivery_time
        assert order.accepted_at is not None
        audit = db.scalars(select(AuditLog).where(AuditLog.order_id == ids["order"])).all()
        assert [entry.action_type for entry in audit] == ["ORDER_ACCEPTED"]
        assert audit[0].before_snapshot["status"] == "pending"
        assert audit[0].after_snapshot["status"] == "accepted"


def test_reaccept_overwrites_eta(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    _silence_notifications(monkeypatch)

    with TestClient(app) as client:
        first = _accept(client, ids["order"], ids["staff"], {"minutes": 10})
        second = _accept(client, ids["order"], ids["staff"], {"minutes": 60})

    assert second.status_code == 200
    delta = _parse(second.json()["deliveryTime"]) - _parse(first.json()["deliveryTime"])
    assert delta >= timedelta(minutes=50)


def test_accept_sends_one_email_with_local_time(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    sent = _silence_notifications(monkeypatch)

    with TestClient(app) as client:
        response = _accept(client, ids["order"], ids["staff"], {"minutes": 25})

    eta = _parse(response.json()["deliveryTime"])
    assert len(sent) == 1
    assert sent[0]["to"] == "anna@example.com"
    assert sent[0]["name"] == "Anna"
    assert sent[0]["minutes"] == 25
    assert sent[0]["mode"] == "delivery"
    assert sent[0]["time_str"] == format_local_hhmm(eta)


def test_email_failure_does_not_fail_acceptance(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    attempts: list[str] = []

    def _broken_send(to, **kwargs):
        attempts.append(to)
        raise RuntimeError("provider down")

    monkeypatch.setattr("orderdesk.services.email.send_order_accepted_email", _broken_send)
    monkeypatch.setattr(settings, "notify_retry_delay", 0.0)

    with TestClient(app) as client:
        response = _accept(client, ids["order"], ids["staff"], {"minutes": 15})

    assert response.status_code == 200
    assert len(attempts) == 4
    with session_local() as db:
        assert db.get(Order, ids["order"]).status == "accepted"


def test_accept_rejects_invalid_id_and_body(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    _silence_notifications(monkeypatch)

    with TestClient(app) as client:
        bad_id = _accept(client, "not-a-uuid", ids["staff"], {"minutes": 10})
        bad_minutes = _accept(client, ids["order"], ids["staff"], {"minutes": "soon"})

    assert bad_id.status_code == 400
    assert bad_id.json()["error"] == "Invalid order id"
    assert bad_minutes.status_code == 400


def test_accept_foreign_order_is_not_found(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    sent = _silence_notifications(monkeypatch)

    with TestClient(app) as client:
        foreign = _accept(client, ids["foreign_order"], ids["staff"], {"minutes": 10})
        missing = _accept(client, str(uuid4()), ids["staff"], {"minutes": 10})

    assert foreign.status_code == 404
    assert missing.status_code == 404
    assert foreign.json() == missing.json()
    assert sent == []
    with session_local() as db:
        assert db.get(Order, ids["foreign_order"]).status == "pending"


def test_accept_requires_order_staff_role(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    _silence_notifications(monkeypatch)

    with TestClient(app) as client:
        response = _accept(client, ids["order"], ids["manager"], {"minutes": 10})

    assert response.status_code == 403
    assert response.json()["code"] == "FORBIDDEN_ROLE"


def test_accept_cancelled_order_conflicts(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    _silence_notifications(monkeypatch)

    with TestClient(app) as client:
        client.post("/api/orders/cancel", json={"orderId": ids["order"]}, headers=_bearer(ids["staff"]))
        response = _accept(client, ids["order"], ids["staff"], {"minutes": 10})

    assert response.status_code == 409
    assert response.json()["code"] == "INVALID_TRANSITION"


def test_cancel_own_order_and_repeat(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)

    with TestClient(app) as client:
        first = client.post("/api/orders/cancel", json={"orderId": ids["order"]}, headers=_bearer(ids["staff"]))
        again = client.post("/api/orders/cancel", json={"orderId": ids["order"]}, headers=_bearer(ids["staff"]))

    assert first.status_code == 200
    assert first.json() == {"success": True, "data": {"id": ids["order"], "status": "cancelled"}}
    assert again.status_code == 200
    with session_local() as db:
        assert db.get(Order, ids["order"]).cancelled_at is not None


def test_cancel_foreign_or_malformed_order_is_not_found(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)

    with TestClient(app) as client:
        foreign = client.post("/api/orders/cancel", json={"orderId": ids["foreign_order"]}, headers=_bearer(ids["staff"]))
        malformed = client.post("/api/orders/cancel", json={"orderId": "42"}, headers=_bearer(ids["staff"]))
        empty = client.post("/api/orders/cancel", json={}, headers=_bearer(ids["staff"]))

    assert foreign.status_code == 404
    assert foreign.json()["error"] == "Zamówienie nie istnieje lub nie należy do Twojej restauracji."
    assert malformed.status_code == 404
    assert empty.status_code == 400
    with session_local() as db:
        assert db.get(Order, ids["foreign_order"]).status == "pending"


def test_patch_status_follows_transition_table(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    _silence_notifications(monkeypatch)
    url = f"/api/orders/{ids['order']}"

    with TestClient(app) as client:
        headers = _bearer(ids["manager"])
        skip = client.patch(url, json={"status": "completed"}, headers=headers)
        unknown = client.patch(url, json={"status": "teleported"}, headers=headers)
        accepted = client.patch(url, json={"status": "accepted"}, headers=headers)
        completed = client.patch(url, json={"status": "completed"}, headers=headers)
        foreign = client.patch(f"/api/orders/{ids['foreign_order']}", json={"status": "accepted"}, headers=headers)

    assert skip.status_code == 409
    assert unknown.status_code == 400
    assert accepted.json() == {"id": ids["order"], "status": "accepted"}
    assert completed.json()["status"] == "completed"
    assert foreign.status_code == 404


def test_current_orders_lists_open_orders_of_own_restaurant(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)
    later = datetime.now(timezone.utc) + timedelta(hours=1)
    with session_local() as db:
        newer = Order(restaurant_id=ids["home"], name="Ewa", created_at=later)
        done = Order(restaurant_id=ids["home"], name="Jan", status="cancelled", created_at=later + timedelta(minutes=5))
        db.add_all([newer, done, Order(restaurant_id=ids["foreign"], name="Obcy", created_at=later)])
        db.commit()
        newer_id, done_id = newer.id, done.id

    with TestClient(app) as client:
        headers = _bearer(ids["staff"])
        open_orders = client.get("/api/orders/current", headers=headers)
        everything = client.get("/api/orders/current", params={"scope": "all", "limit": 2}, headers=headers)
        too_many = client.get("/api/orders/current", params={"limit": 500}, headers=headers)

    assert open_orders.status_code == 200
    payload = open_orders.json()
    assert [order["id"] for order in payload["orders"]] == [newer_id, ids["order"]]
    assert payload["totalCount"] == 2
    assert payload["restaurant_id"] == ids["home"]
    assert ids["foreign_order"] not in {order["id"] for order in payload["orders"]}

    assert [order["id"] for order in everything.json()["orders"]] == [done_id, newer_id]
    assert everything.json()["totalCount"] == 3
    assert too_many.status_code == 400


def test_current_orders_requires_membership(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    _seed(session_local)

    with TestClient(app) as client:
        anonymous = client.get("/api/orders/current")

    assert anonymous.status_code == 401


def test_routing_errors_use_error_body(tmp_path: Path, monkeypatch) -> None:
    session_local = _prepare_db(tmp_path, monkeypatch)
    ids = _seed(session_local)

    with TestClient(app) as client:
        unknown = client.get("/api/no-such-route")
        wrong_method = client.get("/api/orders/cancel", headers=_bearer(ids["staff"]))

    assert unknown.status_code == 404
    assert unknown.json() == {"error": "Not Found"}
    assert unknown.headers["cache-control"] == "no-store"
    assert wrong_method.status_code == 405
    assert wrong_method.json() == {"error": "Method Not Allowed"}
