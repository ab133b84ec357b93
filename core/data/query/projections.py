"""
Output projections and the related paths each one needs loaded.

Representative photo/description: the first related row encountered is used
when several exist. There is no ordering guarantee behind "first"; it is a
good-enough display choice, not a tie-break rule.
"""
from typing import Iterable, Optional

from core.application.dtos.cart_dto import CartLineDTO
from core.application.dtos.product_dto import (
    CategoryDTO,
    DetailedProductDTO,
    ProductDTO,
    SubcategoryDTO,
)
from core.application.dtos.user_dto import AddressTypeDTO, StateDTO
from core.data.models import (
    AddressTypeModel,
    ProductCategoryModel,
    ProductModel,
    ProductProductPhotoModel,
    ProductSubcategoryModel,
    ShoppingCartItemModel,
    StateProvinceModel,
)


SUMMARY_PRODUCT_PATHS = ("photos.photo",)
DETAILED_PRODUCT_PATHS = ("photos.photo", "descriptions", "subcategory.category")
CART_LINE_PATHS = ("product.photos.photo",)


def _representative_photo(photos: Iterable[ProductProductPhotoModel]) -> Optional[bytes]:
    for link in photos:
        if link.photo is not None:
            return link.photo.large_photo
    return None


def project_product_summary(product: ProductModel) -> ProductDTO:
    """Summary shape: id, name, prices, color, one large photo."""
    return ProductDTO(
        product_id=product.product_id,
        name=product.name,
        list_price=product.list_price,
        standard_cost=product.standard_cost,
        color=product.color,
        large_photo=_representative_photo(product.photos),
        created_at=product.created_at,
    )


def project_product_detail(product: ProductModel) -> DetailedProductDTO:
    """Detailed shape: summary plus classification, category ids, one description."""
    description = next(iter(product.descriptions), None)
    subcategory = product.subcategory

    return DetailedProductDTO(
        product_id=product.product_id,
        name=product.name,
        list_price=product.list_price,
        standard_cost=product.standard_cost,
        color=product.color,
        large_photo=_representative_photo(product.photos),
        created_at=product.created_at,
        product_class=product.product_class,
        style=product.style,
        size=product.size,
        product_category_id=subcategory.product_category_id if subcategory else None,
        product_subcategory_id=product.product_subcategory_id,
        description=description.description if description else None,
    )


def project_cart_line(item: ShoppingCartItemModel) -> CartLineDTO:
    """Cart line joined with product name, price and photo."""
    return CartLineDTO(
        transaction_id=item.transaction_id,
        product_id=item.product_id,
        product_name=item.product.name,
        large_photo=_representative_photo(item.product.photos),
        quantity=item.quantity,
        list_price=item.product.list_price,
        date_created=item.date_created,
        modified_date=item.modified_date,
    )


def project_product_color(product: ProductModel) -> str:
    return product.color


def project_category(category: ProductCategoryModel) -> CategoryDTO:
    return CategoryDTO(product_category_id=category.product_category_id, name=category.name)


def project_subcategory(subcategory: ProductSubcategoryModel) -> SubcategoryDTO:
    return SubcategoryDTO(
        product_subcategory_id=subcategory.product_subcategory_id,
        product_category_id=subcategory.product_category_id,
        name=subcategory.name,
    )


def project_state(state: StateProvinceModel) -> StateDTO:
    return StateDTO(state_province_id=state.state_province_id, name=state.name)


def project_address_type(address_type: AddressTypeModel) -> AddressTypeDTO:
    return AddressTypeDTO(address_type_id=address_type.address_type_id, name=address_type.name)
