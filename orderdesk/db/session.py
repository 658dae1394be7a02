"""Database engine and session management."""

from collections.abc import Generator

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from orderdesk.core.config import settings


def _engine_options(url: str) -> dict:
    if url.startswith("sqlite"):
        # request handlers and background notification jobs share the file
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.database_url, **_engine_options(settings.database_url))
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Yield a request-scoped session; uncommitted work is discarded on close."""
    db: Session = SessionLocal()
    try:
        yield db
    finally:
        db.close()
