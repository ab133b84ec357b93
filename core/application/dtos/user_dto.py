"""Application DTOs for user operations."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class RegisterUserRequest(BaseModel):
    """Request DTO for registering a new user."""

    model_config = ConfigDict(frozen=True)

    person_type: str = Field(default="IN", max_length=2, description="Person type code")
    name_style: bool = Field(default=False)
    title: Optional[str] = Field(None, max_length=8)
    first_name: str = Field(..., min_length=1, max_length=50)
    middle_name: Optional[str] = Field(None, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    email_address: str = Field(..., min_length=3, max_length=50, description="Login email")
    password: str = Field(..., min_length=1, description="Plain text password")
    email_promotion: int = Field(default=0, ge=0, le=2)
    address_type_id: int = Field(..., description="Address type ID")
    address_line1: str = Field(..., min_length=1, max_length=60)
    address_line2: Optional[str] = Field(None, max_length=60)
    city: str = Field(..., min_length=1, max_length=30)
    state_province_id: int = Field(default=1)
    postal_code: str = Field(..., min_length=1, max_length=15)


class UpdateUserRequest(BaseModel):
    """Partial update: every field left as None is not touched."""

    model_config = ConfigDict(frozen=True)

    title: Optional[str] = Field(None, max_length=8)
    first_name: Optional[str] = Field(None, max_length=50)
    middle_name: Optional[str] = Field(None, max_length=50)
    last_name: Optional[str] = Field(None, max_length=50)
    email_address: Optional[str] = Field(None, max_length=50)
    password: Optional[str] = None
    email_promotion: Optional[int] = Field(None, ge=0, le=2)
    address_type_id: Optional[int] = None
    address_line1: Optional[str] = Field(None, max_length=60)
    address_line2: Optional[str] = Field(None, max_length=60)
    city: Optional[str] = Field(None, max_length=30)
    state_province_id: Optional[int] = None
    postal_code: Optional[str] = Field(None, max_length=15)


class RegisteredUserDTO(BaseModel):
    """Response DTO for a completed registration."""

    model_config = ConfigDict(frozen=True)

    business_entity_id: int


class LoginRequest(BaseModel):
    """Credentials supplied by the caller."""

    model_config = ConfigDict(frozen=True)

    email: str
    password: str


class LoginResult(BaseModel):
    """Outcome of a credential check."""

    model_config = ConfigDict(frozen=True)

    is_successful: bool
    message: str
    business_entity_id: Optional[int] = None


class StateDTO(BaseModel):
    """State/province dropdown entry."""

    model_config = ConfigDict(frozen=True)

    state_province_id: int
    name: str


class AddressTypeDTO(BaseModel):
    """Address type dropdown entry."""

    model_config = ConfigDict(frozen=True)

    address_type_id: int
    name: str
