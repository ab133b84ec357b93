"""
Domain error taxonomy.

NotFound and ValidationFailure are caller errors raised before any write
happens. TransactionFailure wraps whatever went wrong while a transaction
was open (the transaction has already been rolled back when it is raised).
StorageFault is a driver/connectivity failure.
"""
from typing import Optional


class StorefrontError(Exception):
    """Base class for all storefront core errors."""


# =============================================================================
# NOT FOUND
# =============================================================================

class NotFoundError(StorefrontError):
    """A lookup by identity found zero rows where exactly one was required."""


class UserNotFoundError(NotFoundError):
    """No BusinessEntity row exists for the given id."""

    def __init__(self, business_entity_id: int):
        self.business_entity_id = business_entity_id
        super().__init__(
            f"User not found with the provided BusinessEntityId: {business_entity_id}"
        )


class CartItemNotFoundError(NotFoundError):
    """The (business entity, product) pair has no cart row."""

    def __init__(self, business_entity_id: int, product_id: int):
        self.business_entity_id = business_entity_id
        self.product_id = product_id
        super().__init__(
            f"Item with ProductId {product_id} not found in cart "
            f"for BusinessEntityId {business_entity_id}"
        )


# =============================================================================
# VALIDATION
# =============================================================================

class ValidationFailureError(StorefrontError):
    """Caller-supplied data violates a precondition enforced by the core."""


# =============================================================================
# STORAGE
# =============================================================================

class StorageFaultError(StorefrontError):
    """Connectivity or driver-level failure of the backing store."""


class ConcurrencyError(StorefrontError):
    """A concurrent writer created the row first ("row now exists")."""


# =============================================================================
# TRANSACTION FAILURES
# =============================================================================

class TransactionFailureError(StorefrontError):
    """
    Raised by a workflow after it rolled back its transaction.

    The original exception is kept both as ``cause`` and as ``__cause__``
    (the workflows raise it with ``raise ... from exc``).
    """

    operation = "transaction"

    def __init__(self, message: Optional[str] = None, cause: Optional[BaseException] = None):
        self.cause = cause
        super().__init__(message or f"An error occurred during {self.operation}.")

    @property
    def retryable(self) -> bool:
        """True when the failure came from a lost insert race."""
        return isinstance(self.cause, ConcurrencyError)


class RegistrationFailedError(TransactionFailureError):
    operation = "user registration"


class UserUpdateFailedError(TransactionFailureError):
    operation = "user update"


class UserDeletionFailedError(TransactionFailureError):
    operation = "user deletion"


class CartUpdateFailedError(TransactionFailureError):
    operation = "cart update"


__all__ = [
    "CartItemNotFoundError",
    "CartUpdateFailedError",
    "ConcurrencyError",
    "NotFoundError",
    "RegistrationFailedError",
    "StorageFaultError",
    "StorefrontError",
    "TransactionFailureError",
    "UserDeletionFailedError",
    "UserNotFoundError",
    "UserUpdateFailedError",
    "ValidationFailureError",
]
