"""Lightweight schema updates and schema feature detection."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy import inspect, text
from sqlalchemy.engine import Connection, Engine

logger = logging.getLogger(__name__)

ORDER_LEGACY_COLUMNS: dict[str, str] = {
    "delivery_time": "DATETIME",
    "deliveryTime": "DATETIME",
    "accepted_at": "DATETIME",
    "cancelled_at": "DATETIME",
}


@dataclass(frozen=True)
class SchemaFeatures:
    """Optional columns present in the connected database."""

    membership_role_column: bool = True


def _sqlite_column_names(connection: Connection, table_name: str) -> set[str]:
    """Return column names for a SQLite table using PRAGMA table_info."""
    rows = connection.execute(text(f"PRAGMA table_info({table_name});")).mappings().all()
    return {str(row["name"]) for row in rows}


def ensure_sqlite_schema(engine: Engine) -> None:
    """Add ETA/transition columns to order tables created by older releases."""
    if engine.dialect.name != "sqlite":
        return

    with engine.begin() as connection:
        table_rows = connection.execute(text("SELECT name FROM sqlite_master WHERE type='table';")).all()
        table_names: set[str] = {str(row[0]) for row in table_rows}
        if "orders" not in table_names:
            return

        order_columns = _sqlite_column_names(connection, "orders")
        for column, column_type in ORDER_LEGACY_COLUMNS.items():
            if column not in order_columns:
                logger.info("Adding missing orders.%s column", column)
                connection.execute(text(f'ALTER TABLE orders ADD COLUMN "{column}" {column_type} NULL'))


def detect_schema_features(engine: Engine, *, role_column_override: bool | None = None) -> SchemaFeatures:
    """Inspect the database once and record which optional columns exist."""
    if role_column_override is not None:
        return SchemaFeatures(membership_role_column=role_column_override)

    inspector = inspect(engine)
    if not inspector.has_table("restaurant_admins"):
        return SchemaFeatures()
    columns = {column["name"] for column in inspector.get_columns("restaurant_admins")}
    has_role = "role" in columns
    if not has_role:
        logger.warning("restaurant_admins.role column missing; memberships will be treated as admin")
    return SchemaFeatures(membership_role_column=has_role)
