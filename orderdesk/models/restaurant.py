"""Restaurant (tenant) and membership ORM models."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import Boolean, DateTime, Enum, Float, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from orderdesk.db.base import Base

RESTAURANT_ROLES = ("owner", "admin", "manager", "employee")


class Restaurant(Base):
    """One tenant: a restaurant location served under its own city slug."""

    __tablename__ = "restaurants"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    slug: Mapped[str] = mapped_column(String(64), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    city: Mapped[str] = mapped_column(String(128), nullable=False)
    phone: Mapped[str | None] = mapped_column(String(32), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    address: Mapped[str | None] = mapped_column(String(255), nullable=True)
    lat: Mapped[float | None] = mapped_column(Float, nullable=True)
    lon: Mapped[float | None] = mapped_column(Float, nullable=True)
    max_delivery_km: Mapped[float | None] = mapped_column(Float, nullable=True)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    admins: Mapped[list["RestaurantAdmin"]] = relationship(back_populates="restaurant")


class RestaurantAdmin(Base):
    """Membership edge granting a user a role within one restaurant."""

    __tablename__ = "restaurant_admins"

    user_id: Mapped[str] = mapped_column(ForeignKey("users.id"), primary_key=True)
    restaurant_id: Mapped[str] = mapped_column(ForeignKey("restaurants.id"), primary_key=True, index=True)
    role: Mapped[str] = mapped_column(Enum(*RESTAURANT_ROLES, name="restaurant_role"), nullable=False, default="employee")
    added_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    user: Mapped["User"] = relationship(back_populates="memberships")
    restaurant: Mapped[Restaurant] = relationship(back_populates="admins")
