"""Tenant-scoped notification feed and push subscriptions."""

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from orderdesk.models.notification import AdminNotification, AdminPushSubscription
from orderdesk.schemas.notification import AdminNotificationCreate, PushSubscriptionPayload

FEED_LIMIT = 50


def list_notifications(db: Session, restaurant_id: str) -> list[AdminNotification]:
    """Newest first, capped at 50."""
    return db.scalars(
        select(AdminNotification)
        .where(AdminNotification.restaurant_id == restaurant_id)
        .order_by(AdminNotification.created_at.desc(), AdminNotification.id.desc())
        .limit(FEED_LIMIT)
    ).all()


def create_notification(db: Session, restaurant_id: str, payload: AdminNotificationCreate) -> AdminNotification:
    notification = AdminNotification(restaurant_id=restaurant_id, **payload.model_dump())
    db.add(notification)
    db.commit()
    db.refresh(notification)
    return notification


def mark_all_read(db: Session, restaurant_id: str) -> int:
    result = db.execute(
        update(AdminNotification)
        .where(AdminNotification.restaurant_id == restaurant_id, AdminNotification.read.is_(False))
        .values(read=True)
    )
    db.commit()
    return result.rowcount


def upsert_push_subscription(db: Session, restaurant_id: str, payload: PushSubscriptionPayload) -> AdminPushSubscription:
    """Register a browser; an endpoint already known moves to the caller's restaurant."""
    subscription = db.scalar(
        select(AdminPushSubscription).where(AdminPushSubscription.endpoint == payload.endpoint)
    )
    if subscription is None:
        subscription = AdminPushSubscription(endpoint=payload.endpoint, restaurant_id=restaurant_id, subscription={})
        db.add(subscription)
    subscription.restaurant_id = restaurant_id
    subscription.subscription = payload.model_dump()
    db.commit()
    db.refresh(subscription)
    return subscription
