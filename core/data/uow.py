"""Unit of Work pattern for atomic multi-entity transactions."""

import logging
from typing import Dict, Optional, Type

from sqlalchemy.ext.asyncio import AsyncSession, AsyncSessionTransaction, async_sessionmaker

from .models import (
    AddressModel,
    AddressTypeModel,
    BusinessEntityAddressModel,
    BusinessEntityModel,
    EmailAddressModel,
    PasswordModel,
    PersonModel,
    ProductCategoryModel,
    ProductModel,
    ProductSubcategoryModel,
    ShoppingCartItemModel,
    StateProvinceModel,
)
from .repositories.entity_store_impl import SqlAlchemyEntityStore


logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Unit of Work pattern for atomic transactions.

    Responsibilities:
    1. Own the SQLAlchemy session lifetime (opened on enter, closed on exit)
    2. Open at most one transaction at a time
    3. Atomic commit/rollback of everything staged through its stores
    4. Lazy initialization of one EntityStore per entity type

    Usage:
        async with create_uow(session_factory) as uow:
            await uow.begin_transaction()
            entity = await uow.business_entities.add(BusinessEntityModel())
            await uow.save_changes()  # entity.business_entity_id is now set
            ...
            await uow.commit()
    """

    def __init__(self, session_factory: async_sessionmaker) -> None:
        """Initialize Unit of Work.

        Args:
            session_factory: SQLAlchemy async session factory
        """
        self._session_factory = session_factory
        self._session: Optional[AsyncSession] = None
        self._transaction: Optional[AsyncSessionTransaction] = None

        # Lazy-loaded stores, keyed by model class
        self._stores: Dict[type, SqlAlchemyEntityStore] = {}

    async def __aenter__(self) -> "UnitOfWork":
        """Open the session."""
        self._session = self._session_factory()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Roll back an open transaction on error, then release the session."""
        try:
            if exc_type is not None and self._transaction is not None:
                logger.error(f"Transaction failed: {exc_val}")
                await self.rollback()
        finally:
            await self._session.close()
            self._session = None
            self._stores.clear()

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork not initialized. Use async context manager.")
        return self._session

    @property
    def in_transaction(self) -> bool:
        return self._transaction is not None

    # =========================================================================
    # TRANSACTION CONTROL
    # =========================================================================

    async def begin_transaction(self) -> AsyncSessionTransaction:
        """Open the transaction.

        Reads issued earlier on this unit of work already auto-began a
        database transaction; that transaction is adopted so those reads and
        the following writes are atomic together.

        Raises:
            RuntimeError: If a transaction is already open
        """
        session = self.session
        if self._transaction is not None:
            raise RuntimeError("A transaction is already open on this UnitOfWork.")

        if session.in_transaction():
            self._transaction = session.get_transaction()
        else:
            self._transaction = await session.begin()
        return self._transaction

    async def commit(self) -> None:
        """Commit all staged writes. No-op without an open transaction."""
        if self._transaction is None:
            return
        try:
            await self.session.commit()
            logger.info("✅ Transaction committed")
        except Exception as e:
            logger.error(f"❌ Commit failed: {e}")
            await self.session.rollback()
            raise
        finally:
            self._transaction = None

    async def rollback(self) -> None:
        """Discard all writes since begin_transaction. No-op without an open transaction."""
        if self._transaction is None:
            return
        try:
            await self.session.rollback()
            logger.warning("Transaction rolled back")
        finally:
            self._transaction = None

    async def save_changes(self) -> None:
        """Flush staged inserts and assign generated IDs without ending the transaction."""
        await self.session.flush()

    # =========================================================================
    # STORES
    # =========================================================================

    def _store(self, model: Type) -> SqlAlchemyEntityStore:
        store = self._stores.get(model)
        if store is None:
            store = SqlAlchemyEntityStore(self.session, model)
            self._stores[model] = store
        return store

    @property
    def products(self) -> SqlAlchemyEntityStore[ProductModel]:
        return self._store(ProductModel)

    @property
    def categories(self) -> SqlAlchemyEntityStore[ProductCategoryModel]:
        return self._store(ProductCategoryModel)

    @property
    def subcategories(self) -> SqlAlchemyEntityStore[ProductSubcategoryModel]:
        return self._store(ProductSubcategoryModel)

    @property
    def persons(self) -> SqlAlchemyEntityStore[PersonModel]:
        return self._store(PersonModel)

    @property
    def passwords(self) -> SqlAlchemyEntityStore[PasswordModel]:
        return self._store(PasswordModel)

    @property
    def email_addresses(self) -> SqlAlchemyEntityStore[EmailAddressModel]:
        return self._store(EmailAddressModel)

    @property
    def business_entities(self) -> SqlAlchemyEntityStore[BusinessEntityModel]:
        return self._store(BusinessEntityModel)

    @property
    def addresses(self) -> SqlAlchemyEntityStore[AddressModel]:
        return self._store(AddressModel)

    @property
    def business_entity_addresses(self) -> SqlAlchemyEntityStore[BusinessEntityAddressModel]:
        return self._store(BusinessEntityAddressModel)

    @property
    def state_provinces(self) -> SqlAlchemyEntityStore[StateProvinceModel]:
        return self._store(StateProvinceModel)

    @property
    def address_types(self) -> SqlAlchemyEntityStore[AddressTypeModel]:
        return self._store(AddressTypeModel)

    @property
    def shopping_cart_items(self) -> SqlAlchemyEntityStore[ShoppingCartItemModel]:
        return self._store(ShoppingCartItemModel)


def create_uow(session_factory: async_sessionmaker) -> UnitOfWork:
    """Create a new Unit of Work instance.

    Args:
        session_factory: SQLAlchemy async session factory

    Returns:
        UnitOfWork instance
    """
    return UnitOfWork(session_factory)
