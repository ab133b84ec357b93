"""Database models."""

from .base import Base
from .cart_model import ShoppingCartItemModel
from .person_model import (
    AddressModel,
    AddressTypeModel,
    BusinessEntityAddressModel,
    BusinessEntityModel,
    EmailAddressModel,
    PasswordModel,
    PersonModel,
    StateProvinceModel,
)
from .product_model import (
    ProductCategoryModel,
    ProductDescriptionModel,
    ProductModel,
    ProductPhotoModel,
    ProductProductPhotoModel,
    ProductSubcategoryModel,
)

__all__ = [
    "AddressModel",
    "AddressTypeModel",
    "Base",
    "BusinessEntityAddressModel",
    "BusinessEntityModel",
    "EmailAddressModel",
    "PasswordModel",
    "PersonModel",
    "ProductCategoryModel",
    "ProductDescriptionModel",
    "ProductModel",
    "ProductPhotoModel",
    "ProductProductPhotoModel",
    "ProductSubcategoryModel",
    "ShoppingCartItemModel",
    "StateProvinceModel",
]
