"""Security utilities: password hashing, JWT access tokens and request identity."""

import json
import re
from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any
from urllib.parse import unquote

from fastapi import Request
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from orderdesk.core.config import settings
from orderdesk.core.errors import UnauthorizedError
from orderdesk.models.user import User

pwd_context: CryptContext = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

AUTH_COOKIE_RE = re.compile(rf"^{re.escape(settings.auth_cookie_prefix)}.*-auth-token(?:\.(\d+))?$")


def get_password_hash(password: str) -> str:
    """Hash a plaintext password."""
    if len(password.encode("utf-8")) > 72:
        raise ValueError("ADMIN_PASSWORD exceeds the 72-byte limit. Use a shorter password.")
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plaintext password against its hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict[str, Any], expires_minutes: int | None = None) -> str:
    """Create a signed JWT access token from payload data."""
    to_encode: dict[str, Any] = data.copy()
    expire: datetime = datetime.now(timezone.utc) + timedelta(
        minutes=expires_minutes if expires_minutes is not None else settings.jwt_expire_minutes
    )
    to_encode.update({"exp": expire, "aud": settings.jwt_audience})
    return jwt.encode(
        to_encode,
        settings.jwt_secret_key,
        algorithm=settings.jwt_algorithm,
    )


def verify_token(token: str) -> dict[str, Any]:
    """Decode and validate a JWT token payload."""
    try:
        payload: dict[str, Any] = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
        )
    except JWTError as exc:
        raise UnauthorizedError("Could not validate credentials") from exc

    return payload


def _token_from_session_json(text: str) -> str | None:
    try:
        parsed = json.loads(text)
    except ValueError:
        return None
    if not isinstance(parsed, dict):
        return None

    candidates = (
        parsed.get("access_token"),
        (parsed.get("currentSession") or {}).get("access_token"),
        ((parsed.get("data") or {}).get("session") or {}).get("access_token"),
    )
    for candidate in candidates:
        if isinstance(candidate, str) and candidate:
            return candidate
    return None


def read_access_token_from_cookies(cookies: Mapping[str, str]) -> str | None:
    """Rebuild the session token, which may be split over numbered cookies.

    Fragments named ``<prefix>...-auth-token.<n>`` are joined in ascending ``n``;
    an unsuffixed ``...-auth-token`` cookie is used when no fragments exist.
    """
    fragments: list[tuple[int, str]] = []
    whole: str | None = None
    for name, value in cookies.items():
        match = AUTH_COOKIE_RE.match(name)
        if match is None:
            continue
        if match.group(1) is None:
            whole = value
        else:
            fragments.append((int(match.group(1)), value))

    if fragments:
        raw = "".join(value for _, value in sorted(fragments))
    else:
        raw = whole or ""
    if not raw:
        return None
    return _token_from_session_json(unquote(raw))


def extract_access_token(request: Request) -> str | None:
    """Prefer the bearer header, then fall back to the session cookies."""
    header = request.headers.get("authorization", "")
    if header.startswith("Bearer "):
        token = header[len("Bearer "):].strip()
        if token:
            return token
    return read_access_token_from_cookies(request.cookies)


def resolve_identity(request: Request, db: Session) -> User:
    """Return the verified, active user behind the request or raise UnauthorizedError."""
    token = extract_access_token(request)
    if not token:
        raise UnauthorizedError()

    payload: dict[str, Any] = verify_token(token)
    user_id = payload.get("sub")
    if not user_id:
        raise UnauthorizedError("Invalid authentication token")

    user: User | None = db.get(User, str(user_id))
    if user is None or not user.is_active:
        raise UnauthorizedError()
    return user
