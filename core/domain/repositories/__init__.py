"""Repository interfaces."""

from .entity_store import EntityStore, Predicate, Projection, QueryTransform, distinct_in_order

__all__ = ["EntityStore", "Predicate", "Projection", "QueryTransform", "distinct_in_order"]
