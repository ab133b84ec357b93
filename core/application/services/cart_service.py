"""Application service for shopping cart workflows."""

import logging
from decimal import Decimal
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.cart_dto import CartItemRequest, CartSummaryDTO, ShoppingCartDTO
from core.application.interfaces import IClock
from core.data.models import ShoppingCartItemModel
from core.data.query import CART_LINE_PATHS, project_cart_line
from core.data.uow import UnitOfWork, create_uow
from core.domain.exceptions import CartItemNotFoundError, CartUpdateFailedError, ConcurrencyError


logger = logging.getLogger(__name__)


def _line_predicate(business_entity_id: int, product_id: int):
    return and_(
        ShoppingCartItemModel.business_entity_id == business_entity_id,
        ShoppingCartItemModel.product_id == product_id,
    )


class CartApplicationService:
    """
    Application service for the shopping cart.

    A cart holds at most one line per (business entity, product); adding the
    same product again merges quantities into that line.
    """

    def __init__(self, session_factory: async_sessionmaker, clock: IClock) -> None:
        self._session_factory = session_factory
        self._clock = clock

    async def add_item(self, business_entity_id: int, request: CartItemRequest) -> None:
        """Insert a cart line or increase the quantity of the existing one.

        Raises:
            CartUpdateFailedError: On any failure (rolled back). When a
                concurrent writer created the same line first, the cause is a
                ConcurrencyError and the error is retryable.
        """
        logger.info(
            f"Adding product {request.product_id} x{request.quantity} "
            f"to cart of {business_entity_id}"
        )

        async with create_uow(self._session_factory) as uow:
            await uow.begin_transaction()
            try:
                now = self._clock.now()
                existing = await uow.shopping_cart_items.find_single(
                    _line_predicate(business_entity_id, request.product_id)
                )

                if existing is None:
                    await uow.shopping_cart_items.add(
                        ShoppingCartItemModel(
                            business_entity_id=business_entity_id,
                            product_id=request.product_id,
                            quantity=request.quantity,
                            date_created=now,
                            modified_date=now,
                        )
                    )
                else:
                    existing.quantity += request.quantity
                    existing.modified_date = now
                    await uow.shopping_cart_items.update(existing)

                await uow.save_changes()
                await uow.commit()
            except IntegrityError as e:
                await uow.rollback()
                cause = await self._classify_integrity_error(
                    uow, business_entity_id, request.product_id, e
                )
                logger.warning(f"Cart insert rejected for {business_entity_id}: {cause}")
                raise CartUpdateFailedError(
                    "An error occurred while adding the item to the cart. See cause for details.",
                    cause=cause,
                ) from cause
            except Exception as e:
                logger.error(f"❌ Add to cart failed for {business_entity_id}: {e}", exc_info=True)
                await uow.rollback()
                raise CartUpdateFailedError(
                    "An error occurred while adding the item to the cart. See cause for details.",
                    cause=e,
                ) from e

        logger.info(f"✅ Cart updated for {business_entity_id}")

    async def remove_item(self, business_entity_id: int, request: CartItemRequest) -> None:
        """Decrease a line's quantity, deleting the line when it reaches zero.

        Quantity never goes negative: removing more than is held deletes the line.

        Raises:
            CartItemNotFoundError: If the line does not exist (nothing was written)
            CartUpdateFailedError: If the write fails (rolled back)
        """
        logger.info(
            f"Removing product {request.product_id} x{request.quantity} "
            f"from cart of {business_entity_id}"
        )

        async with create_uow(self._session_factory) as uow:
            existing = await uow.shopping_cart_items.find_single(
                _line_predicate(business_entity_id, request.product_id)
            )
            if existing is None:
                raise CartItemNotFoundError(business_entity_id, request.product_id)

            await uow.begin_transaction()
            try:
                remaining = max(existing.quantity - request.quantity, 0)
                if remaining == 0:
                    await uow.shopping_cart_items.remove(existing)
                else:
                    existing.quantity = remaining
                    existing.modified_date = self._clock.now()
                    await uow.shopping_cart_items.update(existing)

                await uow.save_changes()
                await uow.commit()
            except Exception as e:
                logger.error(f"❌ Remove from cart failed for {business_entity_id}: {e}", exc_info=True)
                await uow.rollback()
                raise CartUpdateFailedError(
                    "An error occurred while removing the item from the cart. See cause for details.",
                    cause=e,
                ) from e

        logger.info(f"✅ Cart updated for {business_entity_id}")

    async def get_cart(self, business_entity_id: int) -> Optional[ShoppingCartDTO]:
        """Return the cart lines with their summary, or None for an empty cart."""
        async with create_uow(self._session_factory) as uow:
            lines = await uow.shopping_cart_items.find_with_projection(
                project_cart_line,
                predicate=ShoppingCartItemModel.business_entity_id == business_entity_id,
                related_paths=CART_LINE_PATHS,
            )

        if not lines:
            return None

        details = CartSummaryDTO(
            total_price=sum((line.total_price for line in lines), Decimal("0")),
            item_count=sum(line.quantity for line in lines),
        )
        return ShoppingCartDTO(details=details, items=lines)

    # =========================================================================
    # PRIVATE METHODS
    # =========================================================================

    async def _classify_integrity_error(
        self,
        uow: UnitOfWork,
        business_entity_id: int,
        product_id: int,
        error: IntegrityError,
    ) -> Exception:
        """Tell a lost insert race (line now exists) apart from other constraint failures."""
        line = await uow.shopping_cart_items.find_single(
            _line_predicate(business_entity_id, product_id)
        )
        if line is None:
            return error

        conflict = ConcurrencyError(
            f"Cart line for product {product_id} was created concurrently; retry the request."
        )
        conflict.__cause__ = error
        return conflict
