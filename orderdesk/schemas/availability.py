"""Public availability check schemas."""

from pydantic import BaseModel


class AvailabilityRequest(BaseModel):
    address: str | None = None
    method: str | None = None
