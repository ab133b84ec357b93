"""Data layer - persistence, query composition and the unit of work."""

from .models import Base
from .repositories import SqlAlchemyEntityStore
from .uow import UnitOfWork, create_uow

__all__ = [
    "Base",
    "create_uow",
    "SqlAlchemyEntityStore",
    "UnitOfWork",
]
