"""Application DTOs."""

from .cart_dto import CartItemRequest, CartLineDTO, CartSummaryDTO, ShoppingCartDTO
from .product_dto import (
    CategoryDTO,
    DetailedProductDTO,
    ProductDTO,
    ProductFilterRequest,
    SubcategoryDTO,
)
from .user_dto import (
    AddressTypeDTO,
    LoginRequest,
    LoginResult,
    RegisteredUserDTO,
    RegisterUserRequest,
    StateDTO,
    UpdateUserRequest,
)

__all__ = [
    "AddressTypeDTO",
    "CartItemRequest",
    "CartLineDTO",
    "CartSummaryDTO",
    "CategoryDTO",
    "DetailedProductDTO",
    "LoginRequest",
    "LoginResult",
    "ProductDTO",
    "ProductFilterRequest",
    "RegisteredUserDTO",
    "RegisterUserRequest",
    "ShoppingCartDTO",
    "StateDTO",
    "SubcategoryDTO",
    "UpdateUserRequest",
]
