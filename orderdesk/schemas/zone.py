"""Delivery zone schemas."""

from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field


class DeliveryZonePatch(BaseModel):
    """Partial zone update; numeric strings are coerced, negatives rejected."""

    min_distance_km: float | None = Field(default=None, ge=0)
    max_distance_km: float | None = Field(default=None, ge=0)
    min_order_value: float | None = Field(default=None, ge=0)
    cost: float | None = Field(default=None, ge=0)
    free_over: float | None = Field(default=None, ge=0)
    eta_min_minutes: int | None = Field(default=None, ge=0)
    eta_max_minutes: int | None = Field(default=None, ge=0)
    cost_fixed: float | None = Field(default=None, ge=0)
    cost_per_km: float | None = Field(default=None, ge=0)


class DeliveryZoneCreate(BaseModel):
    min_distance_km: float = Field(default=0, ge=0)
    max_distance_km: float = Field(ge=0)
    min_order_value: float = Field(default=0, ge=0)
    cost: float = Field(default=0, ge=0)
    free_over: float | None = Field(default=None, ge=0)
    eta_min_minutes: int = Field(default=0, ge=0)
    eta_max_minutes: int = Field(default=0, ge=0)
    cost_fixed: float = Field(default=0, ge=0)
    cost_per_km: float = Field(default=0, ge=0)
    active: bool = True


class DeliveryZoneRead(BaseModel):
    id: str
    restaurant_id: str
    min_distance_km: Decimal
    max_distance_km: Decimal
    min_order_value: Decimal
    cost: Decimal
    free_over: Decimal | None
    eta_min_minutes: int
    eta_max_minutes: int
    cost_fixed: Decimal
    cost_per_km: Decimal
    active: bool

    model_config = ConfigDict(from_attributes=True)
