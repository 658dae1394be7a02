"""FastAPI entrypoint for the multi-tenant restaurant admin API."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from orderdesk.api.v1.api import api_router
from orderdesk.core.config import settings
from orderdesk.core.errors import AppError
from orderdesk.core.logging import configure_logging
from orderdesk.db.base import Base
from orderdesk.db.migrations import detect_schema_features, ensure_sqlite_schema
from orderdesk.db.privileged import PrivilegedStore
from orderdesk.db.seed import ensure_admin_user
from orderdesk.db.session import SessionLocal, engine

logger = logging.getLogger(__name__)

app = FastAPI(title="Restaurant Order Desk")
app.include_router(api_router, prefix="/api")


@app.middleware("http")
async def no_store_cache(request: Request, call_next):
    response = await call_next(request)
    response.headers["Cache-Control"] = "no-store"
    return response


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status, content=exc.to_body())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"error": exc.detail}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={"error": "Validation", "details": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=500,
        content={"error": "Internal error", "code": "INTERNAL_ERROR"},
        headers={"Cache-Control": "no-store"},
    )


@app.on_event("startup")
def startup() -> None:
    configure_logging(settings)
    Base.metadata.create_all(bind=engine)
    ensure_sqlite_schema(engine)

    features = detect_schema_features(engine, role_column_override=settings.membership_role_column)
    app.state.privileged = PrivilegedStore(SessionLocal, features)
    logger.info("[BOOTSTRAP] membership role column: %s", "yes" if features.membership_role_column else "no")

    with SessionLocal() as session:
        try:
            admin_present = ensure_admin_user(session)
            logger.info("[BOOTSTRAP] admin login present: %s", "yes" if admin_present else "no")
        except Exception:
            logger.exception("[BOOTSTRAP] Seed failed; continuing startup.")


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
