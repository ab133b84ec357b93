"""SQLAlchemy implementation of the generic EntityStore."""

import logging
from typing import Any, Generic, List, Optional, Sequence, Type, TypeVar

from sqlalchemy import Select, select
from sqlalchemy.exc import InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from core.domain.exceptions import StorageFaultError
from core.domain.repositories.entity_store import (
    EntityStore,
    Predicate,
    Projection,
    QueryTransform,
    distinct_in_order,
)


logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlAlchemyEntityStore(EntityStore[T], Generic[T]):
    """
    EntityStore bound to one ORM model class and one AsyncSession.

    Projections are plain callables run on loaded rows, so every relation a
    projection touches must be listed in ``related_paths`` (relationships are
    declared ``lazy="raise"``).
    """

    def __init__(self, session: AsyncSession, model: Type[T]) -> None:
        """Initialize store.

        Args:
            session: SQLAlchemy async session shared with the unit of work
            model: ORM model class this store reads and writes
        """
        self._session = session
        self._model = model

    @property
    def model(self) -> Type[T]:
        return self._model

    async def get_all(self) -> List[T]:
        """Return every row of the table."""
        return await self._scalars(select(self._model))

    async def find(
        self,
        predicate: Predicate,
        projection: Optional[Projection] = None,
        distinct: bool = False,
    ) -> List[Any]:
        """Return rows matching predicate, optionally projected and deduplicated."""
        rows = await self._scalars(select(self._model).where(predicate))

        if projection is None:
            return rows

        results = [projection(row) for row in rows]
        return distinct_in_order(results) if distinct else results

    async def find_single(
        self,
        predicate: Predicate,
        projection: Optional[Projection] = None,
        related_paths: Sequence[str] = (),
    ) -> Optional[Any]:
        """Return first matching row or None.

        Args:
            predicate: Boolean filter expression
            projection: Optional reshaping function
            related_paths: Dotted relationship paths to eager load

        Returns:
            Projected row, entity, or None when nothing matches
        """
        query = (
            select(self._model)
            .options(*self._loader_options(related_paths))
            .where(predicate)
            .limit(1)
        )
        rows = await self._scalars(query)

        if not rows:
            return None

        row = rows[0]
        return projection(row) if projection is not None else row

    async def find_with_projection(
        self,
        projection: Projection,
        predicate: Optional[Predicate] = None,
        related_paths: Sequence[str] = (),
        order_by: Optional[QueryTransform] = None,
        page: Optional[QueryTransform] = None,
    ) -> List[Any]:
        """List query applied in fixed order: relations, filter, order, page, shape."""
        query: Select = select(self._model).options(*self._loader_options(related_paths))

        if predicate is not None:
            query = query.where(predicate)

        if order_by is not None:
            query = order_by(query)

        if page is not None:
            query = page(query)

        rows = await self._scalars(query)
        return [projection(row) for row in rows]

    async def add(self, entity: T) -> T:
        """Stage insert (no flush)."""
        self._session.add(entity)
        return entity

    async def update(self, entity: T) -> None:
        """Stage update and flush so later reads in the transaction see it."""
        self._session.add(entity)
        await self._flush()

    async def remove(self, entity: T) -> None:
        """Stage delete and flush so later reads in the transaction see it."""
        await self._session.delete(entity)
        await self._flush()

    # =========================================================================
    # PRIVATE METHODS
    # =========================================================================

    def _loader_options(self, related_paths: Sequence[str]) -> List[Any]:
        """Turn dotted relationship paths into chained selectinload options.

        An unknown attribute name raises AttributeError.
        """
        options = []
        for path in related_paths:
            current = self._model
            option = None
            for name in path.split("."):
                attribute = getattr(current, name)
                option = selectinload(attribute) if option is None else option.selectinload(attribute)
                current = attribute.property.mapper.class_
            if option is not None:
                options.append(option)
        return options

    async def _scalars(self, query: Select) -> List[T]:
        try:
            result = await self._session.execute(query)
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Storage fault while querying {self._model.__name__}: {e}")
            raise StorageFaultError(str(e)) from e
        return list(result.scalars().all())

    async def _flush(self) -> None:
        try:
            await self._session.flush()
        except (OperationalError, InterfaceError) as e:
            logger.error(f"Storage fault while flushing {self._model.__name__}: {e}")
            raise StorageFaultError(str(e)) from e
