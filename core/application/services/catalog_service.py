"""Application service for catalog reads (products, categories, colors)."""

import logging
from typing import List, Optional

from sqlalchemy.ext.asyncio import async_sessionmaker

from core.application.dtos.product_dto import (
    CategoryDTO,
    DetailedProductDTO,
    ProductDTO,
    SubcategoryDTO,
)
from core.data.models import ProductModel, ProductSubcategoryModel
from core.data.query import (
    DETAILED_PRODUCT_PATHS,
    SUMMARY_PRODUCT_PATHS,
    build_color_predicate,
    build_pagination,
    build_product_order_by,
    build_product_predicate,
    project_category,
    project_product_color,
    project_product_detail,
    project_product_summary,
    project_subcategory,
)
from core.data.uow import create_uow
from core.domain.value_objects import DEFAULT_PAGE_SIZE, ProductFilter, SortKey


logger = logging.getLogger(__name__)


class CatalogApplicationService:
    """
    Application service for catalog queries.

    All operations are read-only: no transaction is opened.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        recent_products_count: int = DEFAULT_PAGE_SIZE,
    ) -> None:
        """Initialize catalog service.

        Args:
            session_factory: SQLAlchemy async session factory
            recent_products_count: Page size used when recent products are
                requested without a positive count
        """
        self._session_factory = session_factory
        self._recent_products_count = recent_products_count

    async def list_products(self, product_filter: ProductFilter) -> List[ProductDTO]:
        """List one page of products matching the filter, in summary shape."""
        logger.debug(f"Listing products: {product_filter}")

        async with create_uow(self._session_factory) as uow:
            return await uow.products.find_with_projection(
                project_product_summary,
                predicate=build_product_predicate(product_filter),
                related_paths=SUMMARY_PRODUCT_PATHS,
                order_by=build_product_order_by(product_filter.sort_key),
                page=build_pagination(product_filter.page_number, product_filter.page_size),
            )

    async def get_product(self, product_id: int) -> Optional[DetailedProductDTO]:
        """Get one product in detailed shape, or None if it does not exist."""
        async with create_uow(self._session_factory) as uow:
            return await uow.products.find_single(
                ProductModel.product_id == product_id,
                projection=project_product_detail,
                related_paths=DETAILED_PRODUCT_PATHS,
            )

    async def list_recent_products(self, count: int = 0) -> List[ProductDTO]:
        """Newest products first. A non-positive count falls back to the configured default."""
        page_size = count if count > 0 else self._recent_products_count
        return await self.list_products(
            ProductFilter(sort_key=SortKey.DATE_DESC.value, page_size=page_size)
        )

    async def list_categories(self) -> List[CategoryDTO]:
        async with create_uow(self._session_factory) as uow:
            categories = await uow.categories.get_all()
            return [project_category(category) for category in categories]

    async def list_subcategories(self, category_id: int) -> List[SubcategoryDTO]:
        async with create_uow(self._session_factory) as uow:
            return await uow.subcategories.find(
                ProductSubcategoryModel.product_category_id == category_id,
                projection=project_subcategory,
            )

    async def list_colors(
        self,
        category_id: Optional[int] = None,
        subcategory_id: Optional[int] = None,
    ) -> List[str]:
        """Distinct product colors, sorted, optionally narrowed by category."""
        async with create_uow(self._session_factory) as uow:
            colors = await uow.products.find(
                build_color_predicate(category_id, subcategory_id),
                projection=project_product_color,
                distinct=True,
            )
        return sorted(colors)
