"""Admin management of closure windows and blocked addresses."""

from sqlalchemy import select
from sqlalchemy.orm import Session

from orderdesk.core.errors import NotFoundError, ValidationFailed
from orderdesk.models.ordering_rules import BlockedAddress, ClosureWindow
from orderdesk.schemas.rules import BlockedAddressCreate, ClosureWindowCreate


def list_closure_windows(db: Session, restaurant_id: str) -> list[ClosureWindow]:
    return db.scalars(
        select(ClosureWindow)
        .where(ClosureWindow.restaurant_id == restaurant_id)
        .order_by(ClosureWindow.weekday.asc(), ClosureWindow.start_time.asc())
    ).all()


def create_closure_window(db: Session, restaurant_id: str, payload: ClosureWindowCreate) -> ClosureWindow:
    if payload.start_time and payload.end_time and payload.start_time >= payload.end_time:
        raise ValidationFailed("Godzina 'od' musi być wcześniejsza niż 'do'.")
    window = ClosureWindow(restaurant_id=restaurant_id, **payload.model_dump())
    db.add(window)
    db.commit()
    db.refresh(window)
    return window


def delete_closure_window(db: Session, restaurant_id: str, window_id: int) -> None:
    window = db.scalar(
        select(ClosureWindow).where(ClosureWindow.id == window_id, ClosureWindow.restaurant_id == restaurant_id)
    )
    if window is None:
        raise NotFoundError("Not found")
    db.delete(window)
    db.commit()


def list_blocked_addresses(db: Session, restaurant_id: str) -> list[BlockedAddress]:
    return db.scalars(
        select(BlockedAddress)
        .where(BlockedAddress.restaurant_id == restaurant_id)
        .order_by(BlockedAddress.created_at.desc())
    ).all()


def create_blocked_address(db: Session, restaurant_id: str, payload: BlockedAddressCreate) -> BlockedAddress:
    data = payload.model_dump()
    data["pattern"] = data["pattern"].strip().lower()
    if not data["pattern"]:
        raise ValidationFailed("Validation", details={"pattern": "must not be blank"})
    blocked = BlockedAddress(restaurant_id=restaurant_id, **data)
    db.add(blocked)
    db.commit()
    db.refresh(blocked)
    return blocked


def delete_blocked_address(db: Session, restaurant_id: str, blocked_id: int) -> None:
    blocked = db.scalar(
        select(BlockedAddress).where(BlockedAddress.id == blocked_id, BlockedAddress.restaurant_id == restaurant_id)
    )
    if blocked is None:
        raise NotFoundError("Not found")
    db.delete(blocked)
    db.commit()
