"""Tests for CartApplicationService workflows."""

from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError

from core.application.dtos.cart_dto import CartItemRequest
from core.application.services import CartApplicationService
from core.data.models import ShoppingCartItemModel
from core.data.repositories import SqlAlchemyEntityStore
from core.domain.exceptions import (
    CartItemNotFoundError,
    CartUpdateFailedError,
    ConcurrencyError,
    NotFoundError,
)
from tests.support import FIXED_NOW, count_rows, seed_business_entity


@pytest.fixture
def service(test_session_factory, clock) -> CartApplicationService:
    return CartApplicationService(test_session_factory, clock)


async def _lines(session_factory):
    async with session_factory() as session:
        result = await session.execute(select(ShoppingCartItemModel))
        return list(result.scalars().all())


@pytest.mark.asyncio
async def test_adding_same_product_twice_merges_into_one_line(
    service, test_session_factory, catalog, clock
):
    owner = await seed_business_entity(test_session_factory)
    product_id = catalog.products["mountain_black"]

    await service.add_item(owner, CartItemRequest(product_id=product_id, quantity=2))
    clock.advance(minutes=5)
    await service.add_item(owner, CartItemRequest(product_id=product_id, quantity=2))

    lines = await _lines(test_session_factory)
    assert len(lines) == 1
    assert lines[0].quantity == 4
    assert lines[0].date_created.replace(tzinfo=None) == FIXED_NOW.replace(tzinfo=None)
    assert lines[0].modified_date > lines[0].date_created


@pytest.mark.asyncio
async def test_lines_are_per_owner(service, test_session_factory, catalog):
    first = await seed_business_entity(test_session_factory)
    second = await seed_business_entity(test_session_factory)
    product_id = catalog.products["jersey"]

    await service.add_item(first, CartItemRequest(product_id=product_id, quantity=1))
    await service.add_item(second, CartItemRequest(product_id=product_id, quantity=1))

    assert await count_rows(test_session_factory, ShoppingCartItemModel) == 2


@pytest.mark.asyncio
async def test_remove_decrements_quantity(service, test_session_factory, catalog):
    owner = await seed_business_entity(test_session_factory)
    product_id = catalog.products["jersey"]
    await service.add_item(owner, CartItemRequest(product_id=product_id, quantity=4))

    await service.remove_item(owner, CartItemRequest(product_id=product_id, quantity=1))

    lines = await _lines(test_session_factory)
    assert [line.quantity for line in lines] == [3]


@pytest.mark.asyncio
async def test_removing_more_than_held_deletes_the_line(service, test_session_factory, catalog):
    owner = await seed_business_entity(test_session_factory)
    product_id = catalog.products["jersey"]
    await service.add_item(owner, CartItemRequest(product_id=product_id, quantity=4))

    await service.remove_item(owner, CartItemRequest(product_id=product_id, quantity=10))

    assert await count_rows(test_session_factory, ShoppingCartItemModel) == 0


@pytest.mark.asyncio
async def test_removing_missing_line_is_not_found(service, test_session_factory, catalog):
    owner = await seed_business_entity(test_session_factory)

    with pytest.raises(NotFoundError) as exc_info:
        await service.remove_item(
            owner, CartItemRequest(product_id=catalog.products["jersey"], quantity=1)
        )

    assert isinstance(exc_info.value, CartItemNotFoundError)
    assert exc_info.value.product_id == catalog.products["jersey"]


@pytest.mark.asyncio
async def test_cart_summary_totals(service, test_session_factory, catalog):
    owner = await seed_business_entity(test_session_factory)
    # Socks list at 5, jerseys at 10
    await service.add_item(owner, CartItemRequest(product_id=catalog.products["socks"], quantity=3))
    await service.add_item(owner, CartItemRequest(product_id=catalog.products["jersey"], quantity=2))

    cart = await service.get_cart(owner)

    assert cart.details.item_count == 5
    assert cart.details.total_price == Decimal("35")
    by_product = {line.product_id: line for line in cart.items}
    assert by_product[catalog.products["socks"]].total_price == Decimal("15")
    assert by_product[catalog.products["jersey"]].product_name == "Long-Sleeve Jersey"


@pytest.mark.asyncio
async def test_empty_cart_is_absent(service, test_session_factory, catalog):
    owner = await seed_business_entity(test_session_factory)

    assert await service.get_cart(owner) is None


@pytest.mark.asyncio
async def test_lost_insert_race_is_retryable(service, test_session_factory, catalog, monkeypatch):
    owner = await seed_business_entity(test_session_factory)
    product_id = catalog.products["jersey"]
    await service.add_item(owner, CartItemRequest(product_id=product_id, quantity=1))

    original_find_single = SqlAlchemyEntityStore.find_single
    lookups = []

    async def stale_find_single(self, predicate, projection=None, related_paths=()):
        lookups.append(predicate)
        if len(lookups) == 1:
            # The concurrent writer's row is not visible yet
            return None
        return await original_find_single(self, predicate, projection, related_paths)

    monkeypatch.setattr(SqlAlchemyEntityStore, "find_single", stale_find_single)

    with pytest.raises(CartUpdateFailedError) as exc_info:
        await service.add_item(owner, CartItemRequest(product_id=product_id, quantity=1))

    assert exc_info.value.retryable is True
    assert isinstance(exc_info.value.cause, ConcurrencyError)
    assert isinstance(exc_info.value.cause.__cause__, IntegrityError)

    lines = await _lines(test_session_factory)
    assert [line.quantity for line in lines] == [1]


@pytest.mark.asyncio
async def test_unknown_product_is_rejected_and_not_retryable(service, test_session_factory, catalog):
    owner = await seed_business_entity(test_session_factory)

    with pytest.raises(CartUpdateFailedError) as exc_info:
        await service.add_item(owner, CartItemRequest(product_id=999_999, quantity=1))

    assert exc_info.value.retryable is False
    assert isinstance(exc_info.value.cause, IntegrityError)
    assert await count_rows(test_session_factory, ShoppingCartItemModel) == 0


@pytest.mark.asyncio
async def test_failed_decrement_is_rolled_back(service, test_session_factory, catalog, monkeypatch):
    owner = await seed_business_entity(test_session_factory)
    product_id = catalog.products["jersey"]
    await service.add_item(owner, CartItemRequest(product_id=product_id, quantity=4))

    async def failing_update(self, entity):
        raise RuntimeError("write rejected")

    monkeypatch.setattr(SqlAlchemyEntityStore, "update", failing_update)

    with pytest.raises(CartUpdateFailedError) as exc_info:
        await service.remove_item(owner, CartItemRequest(product_id=product_id, quantity=1))

    assert isinstance(exc_info.value.__cause__, RuntimeError)
    assert exc_info.value.retryable is False
    lines = await _lines(test_session_factory)
    assert [line.quantity for line in lines] == [4]


@pytest.mark.asyncio
async def test_failed_line_delete_is_rolled_back(service, test_session_factory, catalog, monkeypatch):
    owner = await seed_business_entity(test_session_factory)
    product_id = catalog.products["jersey"]
    await service.add_item(owner, CartItemRequest(product_id=product_id, quantity=2))

    async def failing_remove(self, entity):
        raise RuntimeError("delete rejected")

    monkeypatch.setattr(SqlAlchemyEntityStore, "remove", failing_remove)

    with pytest.raises(CartUpdateFailedError):
        await service.remove_item(owner, CartItemRequest(product_id=product_id, quantity=5))

    lines = await _lines(test_session_factory)
    assert [line.quantity for line in lines] == [2]
