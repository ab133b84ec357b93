"""Product filter description value object."""
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import FrozenSet, Optional


DEFAULT_PAGE_SIZE = 12
DEFAULT_PAGE_NUMBER = 1


class SortKey(str, Enum):
    """Closed set of supported product orderings."""

    PRICE_ASC = "PriceAsc"
    PRICE_DESC = "PriceDesc"
    NAME_ASC = "NameAsc"
    NAME_DESC = "NameDesc"
    DATE_ASC = "DateAsc"
    DATE_DESC = "DateDesc"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["SortKey"]:
        """
        Resolve a raw sort key.

        Unknown or empty keys resolve to None ("no ordering"), never an error.
        """
        if not value:
            return None
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class ProductFilter:
    """
    Structured product filter description.

    Every field except the paging pair is optional; an absent field adds
    no clause to the resulting query. ``subcategory_id`` is only honored
    together with ``category_id``.
    """
    category_id: Optional[int] = None
    subcategory_id: Optional[int] = None
    min_price: Optional[Decimal] = None
    max_price: Optional[Decimal] = None
    selected_colors: FrozenSet[str] = field(default_factory=frozenset)
    sort_key: Optional[str] = None
    search_text: Optional[str] = None
    page_size: int = DEFAULT_PAGE_SIZE
    page_number: int = DEFAULT_PAGE_NUMBER

    def __post_init__(self):
        # Accept any iterable of colors but keep the dataclass hashable
        if not isinstance(self.selected_colors, frozenset):
            object.__setattr__(self, "selected_colors", frozenset(self.selected_colors or ()))
