"""Delivery zone ORM model."""

from decimal import Decimal
from uuid import uuid4

from sqlalchemy import Boolean, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column

from orderdesk.db.base import Base


class DeliveryZone(Base):
    """Distance band with its own pricing and ETA bounds."""

    __tablename__ = "delivery_zones"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=lambda: str(uuid4()))
    restaurant_id: Mapped[str] = mapped_column(ForeignKey("restaurants.id"), nullable=False, index=True)
    min_distance_km: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False, default=Decimal("0"))
    max_distance_km: Mapped[Decimal] = mapped_column(Numeric(8, 2), nullable=False, default=Decimal("0"))
    min_order_value: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    cost: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    free_over: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    eta_min_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    eta_max_minutes: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    cost_fixed: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    cost_per_km: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False, default=Decimal("0"))
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
