"""Closure window and blocked address schemas."""

from datetime import time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

BlockType = Literal["exact", "prefix", "contains"]


class ClosureWindowCreate(BaseModel):
    weekday: int | None = Field(default=None, ge=0, le=6)
    start_time: time | None = None
    end_time: time | None = None
    reason: str | None = Field(default=None, max_length=300)
    is_active: bool = True


class ClosureWindowRead(ClosureWindowCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)


class BlockedAddressCreate(BaseModel):
    pattern: str = Field(min_length=1, max_length=500)
    type: BlockType = "contains"
    note: str | None = Field(default=None, max_length=500)
    active: bool = True


class BlockedAddressRead(BlockedAddressCreate):
    id: int

    model_config = ConfigDict(from_attributes=True)
