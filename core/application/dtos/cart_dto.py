"""Application DTOs for shopping cart operations."""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class CartItemRequest(BaseModel):
    """Request DTO for adding or removing a quantity of a product."""

    model_config = ConfigDict(frozen=True)

    product_id: int = Field(..., description="Product ID")
    quantity: int = Field(..., gt=0, description="Quantity to add or remove")


class CartLineDTO(BaseModel):
    """One cart line joined with its product."""

    model_config = ConfigDict(frozen=True, ser_json_bytes="base64")

    transaction_id: int
    product_id: int
    product_name: str
    large_photo: Optional[bytes] = None
    quantity: int
    list_price: Decimal
    date_created: datetime
    modified_date: datetime

    @computed_field
    @property
    def total_price(self) -> Decimal:
        return self.list_price * self.quantity


class CartSummaryDTO(BaseModel):
    """Cart aggregates."""

    model_config = ConfigDict(frozen=True)

    total_price: Decimal = Field(..., ge=0, description="Sum of line totals")
    item_count: int = Field(..., ge=0, description="Sum of quantities")


class ShoppingCartDTO(BaseModel):
    """Cart lines plus their summary."""

    model_config = ConfigDict(frozen=True)

    details: CartSummaryDTO
    items: List[CartLineDTO] = Field(default_factory=list)
