"""
Product query composition.

Translates a ProductFilter into the three pieces the EntityStore consumes:
a boolean predicate, an ordering transform and a pagination transform.

Predicate clauses are ANDed in a fixed order and each one is added only
when its source field is present:

1. base: subcategory is set and standard cost > 0
2. category: subcategory's parent category equals category_id
3. subcategory: only together with category_id
4. min price / 5. max price (standard cost, inclusive)
6. colors: color in selected_colors
7. search: name contains search_text
"""
from typing import Callable, Optional

from sqlalchemy import Select, and_
from sqlalchemy.sql.elements import ColumnElement

from core.data.models import ProductModel, ProductSubcategoryModel
from core.domain.value_objects import ProductFilter, SortKey


QueryTransform = Callable[[Select], Select]


# =============================================================================
# PREDICATES
# =============================================================================

def _category_clauses(category_id: Optional[int], subcategory_id: Optional[int]) -> list:
    # An isolated subcategory filter (no category) is ignored
    if category_id is None:
        return []

    clauses = [
        ProductModel.subcategory.has(
            ProductSubcategoryModel.product_category_id == category_id
        )
    ]
    if subcategory_id is not None:
        clauses.append(ProductModel.product_subcategory_id == subcategory_id)
    return clauses


def build_product_predicate(product_filter: ProductFilter) -> ColumnElement:
    """Build the WHERE clause for a product listing."""
    clauses = [
        ProductModel.product_subcategory_id.isnot(None),
        ProductModel.standard_cost > 0,
    ]

    clauses.extend(
        _category_clauses(product_filter.category_id, product_filter.subcategory_id)
    )

    if product_filter.min_price is not None:
        clauses.append(ProductModel.standard_cost >= product_filter.min_price)

    if product_filter.max_price is not None:
        clauses.append(ProductModel.standard_cost <= product_filter.max_price)

    if product_filter.selected_colors:
        clauses.append(ProductModel.color.in_(sorted(product_filter.selected_colors)))

    if product_filter.search_text:
        clauses.append(ProductModel.name.contains(product_filter.search_text))

    return and_(*clauses)


def build_color_predicate(
    category_id: Optional[int] = None,
    subcategory_id: Optional[int] = None,
) -> ColumnElement:
    """Products that carry a color, narrowed by category (and subcategory)."""
    clauses = [ProductModel.color.isnot(None), ProductModel.color != ""]
    clauses.extend(_category_clauses(category_id, subcategory_id))
    return and_(*clauses)


# =============================================================================
# ORDERING & PAGINATION
# =============================================================================

_ORDERINGS = {
    SortKey.PRICE_ASC: ProductModel.standard_cost.asc(),
    SortKey.PRICE_DESC: ProductModel.standard_cost.desc(),
    SortKey.NAME_ASC: ProductModel.name.asc(),
    SortKey.NAME_DESC: ProductModel.name.desc(),
    SortKey.DATE_ASC: ProductModel.created_at.asc(),
    SortKey.DATE_DESC: ProductModel.created_at.desc(),
}


def build_product_order_by(sort_key: Optional[str]) -> Optional[QueryTransform]:
    """
    Map a sort key to an ordering transform.

    Unknown or absent keys give None: the store's default order is kept.
    """
    key = SortKey.parse(sort_key)
    if key is None:
        return None

    ordering = _ORDERINGS[key]
    return lambda query: query.order_by(ordering)


def build_pagination(page_number: int, page_size: int) -> QueryTransform:
    """Skip ``(page_number - 1) * page_size`` rows and take ``page_size``.

    Inputs are assumed validated by the caller.
    """
    skip = (page_number - 1) * page_size
    return lambda query: query.offset(skip).limit(page_size)
