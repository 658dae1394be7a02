"""Authentication endpoints (API JWT)."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session

from orderdesk.api.deps import any_member
from orderdesk.core.errors import UnauthorizedError
from orderdesk.core.security import create_access_token, verify_password
from orderdesk.db.session import get_db
from orderdesk.models.user import User
from orderdesk.schemas.auth import AuthUserResponse, LoginRequest, TokenResponse
from orderdesk.services.tenant_context import TenantContext

router: APIRouter = APIRouter()
logger = logging.getLogger(__name__)


@router.post("/login", response_model=TokenResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> TokenResponse:
    user: User | None = db.scalar(select(User).where(User.email == payload.email.strip().lower()).limit(1))
    if user is None or not user.is_active or not verify_password(payload.password, user.password_hash):
        logger.info("[AUTH] failed login for %s", payload.email)
        raise UnauthorizedError("Incorrect email or password")
    return TokenResponse(access_token=create_access_token(data={"sub": user.id, "email": user.email}))


@router.get("/me", response_model=AuthUserResponse)
def me(ctx: TenantContext = Depends(any_member)) -> AuthUserResponse:
    return AuthUserResponse(
        id=ctx.user.id,
        email=ctx.user.email,
        restaurant_id=ctx.restaurant_id,
        role=ctx.role or "",
    )
