"""Shared request dependencies for API routes."""

from __future__ import annotations

from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from orderdesk.core.errors import ValidationFailed
from orderdesk.services.role_gate import require_restaurant_access

ModelT = TypeVar("ModelT", bound=BaseModel)

order_staff = require_restaurant_access("admin", "employee")
restaurant_managers = require_restaurant_access("owner", "admin", "manager")
any_member = require_restaurant_access("owner", "admin", "manager", "employee")


async def read_json_body(request: Request) -> dict[str, Any]:
    """Return the JSON object body, or an empty dict for a missing or malformed body."""
    try:
        body = await request.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def parse_body(model: type[ModelT], body: dict[str, Any]) -> ModelT:
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        raise ValidationFailed(
            "Validation",
            details=exc.errors(include_url=False, include_context=False, include_input=False),
        ) from exc
