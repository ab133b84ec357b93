"""Repository interface shared by every entity type."""

from abc import ABC, abstractmethod
from typing import Any, Callable, Generic, Iterable, List, Optional, Sequence, TypeVar

T = TypeVar("T")
R = TypeVar("R")

# Backend boolean expression over T (e.g. a SQLAlchemy column expression)
Predicate = Any
# Query -> query transformations for ordering and paging
QueryTransform = Callable[[Any], Any]
Projection = Callable[[T], R]


class EntityStore(ABC, Generic[T]):
    """Abstract uniform CRUD and query surface for one entity type."""

    @abstractmethod
    async def get_all(self) -> List[T]:
        """Return every row, unfiltered."""
        pass

    @abstractmethod
    async def find(
        self,
        predicate: Predicate,
        projection: Optional[Projection] = None,
        distinct: bool = False,
    ) -> List[Any]:
        """Return rows matching ``predicate``.

        Args:
            predicate: Boolean filter expression
            projection: Optional reshaping function applied to each row
            distinct: Drop repeated projected rows (first occurrence wins)

        Returns:
            Entities, or projected results when ``projection`` is given
        """
        pass

    @abstractmethod
    async def find_single(
        self,
        predicate: Predicate,
        projection: Optional[Projection] = None,
        related_paths: Sequence[str] = (),
    ) -> Optional[Any]:
        """Return the first matching row (projected), or None if absent.

        Args:
            predicate: Boolean filter expression
            projection: Optional reshaping function
            related_paths: Dotted relationship paths to load before projecting

        Returns:
            Projected row or None
        """
        pass

    @abstractmethod
    async def find_with_projection(
        self,
        projection: Projection,
        predicate: Optional[Predicate] = None,
        related_paths: Sequence[str] = (),
        order_by: Optional[QueryTransform] = None,
        page: Optional[QueryTransform] = None,
    ) -> List[Any]:
        """General list query: relations, filter, ordering, paging, shaping."""
        pass

    @abstractmethod
    async def add(self, entity: T) -> T:
        """Stage an insert. Persisted on the next save_changes()."""
        pass

    @abstractmethod
    async def update(self, entity: T) -> None:
        """Stage a row replace and flush it."""
        pass

    @abstractmethod
    async def remove(self, entity: T) -> None:
        """Stage a row delete and flush it."""
        pass


def distinct_in_order(rows: Iterable[R]) -> List[R]:
    """Drop repeated rows, keeping the first occurrence of each."""
    seen = set()
    unique: List[R] = []
    for row in rows:
        if row in seen:
            continue
        seen.add(row)
        unique.append(row)
    return unique
