"""Application DTOs for catalog operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from core.domain.value_objects import DEFAULT_PAGE_NUMBER, DEFAULT_PAGE_SIZE, ProductFilter


class ProductFilterRequest(BaseModel):
    """Request DTO describing a product listing filter."""

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "category_id": 1,
                "min_price": "10.00",
                "selected_colors": ["Black", "Red"],
                "sort_by": "PriceAsc",
                "page_size": 12,
                "page_number": 1,
            }
        },
    )

    category_id: Optional[int] = Field(None, description="Product category ID")
    subcategory_id: Optional[int] = Field(
        None, description="Subcategory ID (only applied together with category_id)"
    )
    min_price: Optional[Decimal] = Field(None, ge=0, description="Minimum standard cost")
    max_price: Optional[Decimal] = Field(None, ge=0, description="Maximum standard cost")
    selected_colors: List[str] = Field(default_factory=list, description="Allowed colors")
    sort_by: Optional[str] = Field(None, description="PriceAsc, PriceDesc, NameAsc, NameDesc, DateAsc, DateDesc")
    search_text: Optional[str] = Field(None, description="Substring of the product name")
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0, description="Page size")
    page_number: int = Field(default=DEFAULT_PAGE_NUMBER, ge=1, description="1-based page number")

    def to_filter(self) -> ProductFilter:
        """Convert to the domain filter description."""
        return ProductFilter(
            category_id=self.category_id,
            subcategory_id=self.subcategory_id,
            min_price=self.min_price,
            max_price=self.max_price,
            selected_colors=frozenset(self.selected_colors),
            sort_key=self.sort_by,
            search_text=self.search_text,
            page_size=self.page_size,
            page_number=self.page_number,
        )


class ProductDTO(BaseModel):
    """Summary product view used in listings."""

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64")

    product_id: int
    name: str
    list_price: Decimal
    standard_cost: Decimal
    color: Optional[str] = None
    large_photo: Optional[bytes] = None
    created_at: Optional[datetime] = None


class DetailedProductDTO(ProductDTO):
    """Detailed product view used on the product page."""

    product_class: Optional[str] = Field(None, description="H = High, M = Medium, L = Low")
    style: Optional[str] = Field(None, description="W = Womens, M = Mens, U = Universal")
    size: Optional[str] = None
    product_category_id: Optional[int] = None
    product_subcategory_id: Optional[int] = None
    description: Optional[str] = None


class CategoryDTO(BaseModel):
    """Catalog category."""

    model_config = ConfigDict(frozen=True)

    product_category_id: int
    name: str


class SubcategoryDTO(BaseModel):
    """Catalog subcategory."""

    model_config = ConfigDict(frozen=True)

    product_subcategory_id: int
    product_category_id: int
    name: str
