"""Application layer interfaces."""
from abc import ABC, abstractmethod
from datetime import datetime


class IHashFunction(ABC):
    """
    Interface for password hashing.

    Implementations must be deterministic: the same plaintext and salt
    always give the same hash.
    """

    @abstractmethod
    def salt(self) -> str:
        """
        Generate a fresh salt.

        Returns:
            Opaque salt string (at most 10 characters)
        """
        pass

    @abstractmethod
    def hash(self, plaintext: str, salt: str) -> str:
        """
        Hash a plaintext password with a salt.

        Args:
            plaintext: Password supplied by the user
            salt: Salt previously produced by salt()

        Returns:
            Opaque hash string
        """
        pass


class IClock(ABC):
    """Source of the current time for created/modified timestamps."""

    @abstractmethod
    def now(self) -> datetime:
        """Return the current time."""
        pass


__all__ = ["IClock", "IHashFunction"]
