"""Declarative base shared by all ORM models."""

import uuid
from datetime import datetime, timezone

from sqlalchemy.orm import declarative_base


Base = declarative_base()


def utcnow() -> datetime:
    """Timezone-aware current UTC time (column default)."""
    return datetime.now(timezone.utc)


def new_rowguid() -> str:
    """Fresh external GUID for a row."""
    return str(uuid.uuid4())
