"""Domain value objects."""

from .product_filter import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, ProductFilter, SortKey

__all__ = [
    "DEFAULT_PAGE_NUMBER",
    "DEFAULT_PAGE_SIZE",
    "ProductFilter",
    "SortKey",
]
