"""Shopping cart endpoints for REST API."""

from fastapi import APIRouter, Depends, HTTPException

from core.application.dtos.cart_dto import CartItemRequest, ShoppingCartDTO
from core.application.services import CartApplicationService

from apps.api.deps import get_cart_service, get_current_business_entity_id

router = APIRouter(prefix="/cart", tags=["cart"])


@router.get("", response_model=ShoppingCartDTO)
async def get_cart(
    business_entity_id: int = Depends(get_current_business_entity_id),
    service: CartApplicationService = Depends(get_cart_service),
) -> ShoppingCartDTO:
    """Get the caller's cart.

    Raises:
        HTTPException: 404 when the cart is empty
    """
    cart = await service.get_cart(business_entity_id)
    if cart is None:
        raise HTTPException(status_code=404, detail="Cart is empty")
    return cart


@router.put("")
async def add_item(
    request: CartItemRequest,
    business_entity_id: int = Depends(get_current_business_entity_id),
    service: CartApplicationService = Depends(get_cart_service),
) -> dict[str, str]:
    """Add a quantity of a product to the caller's cart."""
    await service.add_item(business_entity_id, request)
    return {"message": "Item added successfully."}


@router.delete("")
async def remove_item(
    request: CartItemRequest,
    business_entity_id: int = Depends(get_current_business_entity_id),
    service: CartApplicationService = Depends(get_cart_service),
) -> dict[str, str]:
    """Remove a quantity of a product from the caller's cart."""
    await service.remove_item(business_entity_id, request)
    return {"message": "Item removed successfully."}
