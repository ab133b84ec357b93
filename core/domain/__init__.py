"""Domain layer - pure domain types and interfaces."""

from .exceptions import (
    CartItemNotFoundError,
    CartUpdateFailedError,
    ConcurrencyError,
    NotFoundError,
    RegistrationFailedError,
    StorageFaultError,
    StorefrontError,
    TransactionFailureError,
    UserDeletionFailedError,
    UserNotFoundError,
    UserUpdateFailedError,
    ValidationFailureError,
)
from .repositories import EntityStore
from .value_objects import ProductFilter, SortKey

__all__ = [
    "CartItemNotFoundError",
    "CartUpdateFailedError",
    "ConcurrencyError",
    "EntityStore",
    "NotFoundError",
    "ProductFilter",
    "RegistrationFailedError",
    "SortKey",
    "StorageFaultError",
    "StorefrontError",
    "TransactionFailureError",
    "UserDeletionFailedError",
    "UserNotFoundError",
    "UserUpdateFailedError",
    "ValidationFailureError",
]
