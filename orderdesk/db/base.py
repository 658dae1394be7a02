"""Shared SQLAlchemy base declarative class and model imports."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for ORM models."""


# Import model modules so metadata is populated before create_all.
from orderdesk.models import audit_log as _audit_log  # noqa: E402,F401
from orderdesk.models import delivery_zone as _delivery_zone  # noqa: E402,F401
from orderdesk.models import notification as _notification  # noqa: E402,F401
from orderdesk.models import order as _order  # noqa: E402,F401
from orderdesk.models import ordering_rules as _ordering_rules  # noqa: E402,F401
from orderdesk.models import restaurant as _restaurant  # noqa: E402,F401
from orderdesk.models import user as _user  # noqa: E402,F401
