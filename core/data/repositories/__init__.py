"""Repository implementations."""

from .entity_store_impl import SqlAlchemyEntityStore

__all__ = ["SqlAlchemyEntityStore"]
