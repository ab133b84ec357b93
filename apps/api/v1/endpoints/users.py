"""User endpoints for REST API."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from core.application.dtos.user_dto import (
    AddressTypeDTO,
    LoginRequest,
    LoginResult,
    RegisteredUserDTO,
    RegisterUserRequest,
    StateDTO,
    UpdateUserRequest,
)
from core.application.services import UserApplicationService

from apps.api.deps import get_current_business_entity_id, get_user_service

router = APIRouter(prefix="/users", tags=["users"])


def _require_owner(business_entity_id: int, current_business_entity_id: int) -> None:
    if business_entity_id != current_business_entity_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="User can only modify owned account.",
        )


@router.post("/register", response_model=RegisteredUserDTO, status_code=201)
async def register_user(
    request: RegisterUserRequest,
    service: UserApplicationService = Depends(get_user_service),
) -> RegisteredUserDTO:
    """Register a new user account.

    Args:
        request: RegisterUserRequest DTO
        service: UserApplicationService instance

    Returns:
        RegisteredUserDTO with the new business entity ID
    """
    return await service.register_user(request)


@router.post("/login", response_model=LoginResult)
async def login(
    request: LoginRequest,
    service: UserApplicationService = Depends(get_user_service),
) -> LoginResult:
    """Check credentials.

    Raises:
        HTTPException: 400 with the failure reason when credentials are rejected
    """
    result = await service.authenticate(request.email, request.password)
    if not result.is_successful:
        raise HTTPException(status_code=400, detail=result.message)
    return result


@router.get("/states", response_model=List[StateDTO])
async def list_states(
    service: UserApplicationService = Depends(get_user_service),
) -> List[StateDTO]:
    return await service.list_states()


@router.get("/address-types", response_model=List[AddressTypeDTO])
async def list_address_types(
    service: UserApplicationService = Depends(get_user_service),
) -> List[AddressTypeDTO]:
    return await service.list_address_types()


@router.patch("/{business_entity_id}", status_code=204)
async def update_user(
    business_entity_id: int,
    request: UpdateUserRequest,
    current_business_entity_id: int = Depends(get_current_business_entity_id),
    service: UserApplicationService = Depends(get_user_service),
) -> Response:
    """Partially update the caller's own account."""
    _require_owner(business_entity_id, current_business_entity_id)
    await service.update_user(business_entity_id, request)
    return Response(status_code=204)


@router.delete("/{business_entity_id}", status_code=204)
async def delete_user(
    business_entity_id: int,
    current_business_entity_id: int = Depends(get_current_business_entity_id),
    service: UserApplicationService = Depends(get_user_service),
) -> Response:
    """Delete the caller's own account and everything that belongs to it."""
    _require_owner(business_entity_id, current_business_entity_id)
    await service.delete_user(business_entity_id)
    return Response(status_code=204)
