"""Query composition: predicates, orderings, pagination and projections."""

from .product_query import (
    build_color_predicate,
    build_pagination,
    build_product_order_by,
    build_product_predicate,
)
from .projections import (
    CART_LINE_PATHS,
    DETAILED_PRODUCT_PATHS,
    SUMMARY_PRODUCT_PATHS,
    project_address_type,
    project_cart_line,
    project_category,
    project_product_color,
    project_product_detail,
    project_product_summary,
    project_state,
    project_subcategory,
)

__all__ = [
    "CART_LINE_PATHS",
    "DETAILED_PRODUCT_PATHS",
    "SUMMARY_PRODUCT_PATHS",
    "build_color_predicate",
    "build_pagination",
    "build_product_order_by",
    "build_product_predicate",
    "project_address_type",
    "project_cart_line",
    "project_category",
    "project_product_color",
    "project_product_detail",
    "project_product_summary",
    "project_state",
    "project_subcategory",
]
