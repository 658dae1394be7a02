"""Typed application errors rendered as JSON at the request boundary."""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Error carrying an HTTP status, a machine-readable code and a message."""

    status: int = 500
    code: str | None = "INTERNAL_ERROR"

    def __init__(
        self,
        message: str,
        *,
        status: int | None = None,
        code: str | None = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if status is not None:
            self.status = status
        if code is not None:
            self.code = code
        self.details = details

    def to_body(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.message}
        if self.code:
            body["code"] = self.code
        if self.details is not None:
            body["details"] = self.details
        return body


class UnauthorizedError(AppError):
    status = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Unauthorized") -> None:
        super().__init__(message)


class AdminAuthError(AppError):
    """Authorization failure for a tenant-scoped admin operation."""

    def __init__(self, status: int, code: str, message: str) -> None:
        super().__init__(message, status=status, code=code)


class NoRestaurantAccess(AdminAuthError):
    def __init__(self, message: str = "No restaurant access") -> None:
        super().__init__(403, "NO_RESTAURANT_ACCESS", message)


class RoleLookupError(AdminAuthError):
    def __init__(self, message: str = "Błąd autoryzacji.") -> None:
        super().__init__(500, "ROLE_LOOKUP_ERROR", message)


class NotFoundError(AppError):
    """Resource absent or outside the caller's tenant; the two are not distinguished."""

    status = 404
    code = None

    def __init__(self, message: str = "Not found") -> None:
        super().__init__(message)


class ValidationFailed(AppError):
    status = 400
    code = None

    def __init__(self, message: str = "Validation", details: Any = None) -> None:
        super().__init__(message, details=details)


class InvalidTransitionError(AppError):
    status = 409
    code = "INVALID_TRANSITION"
