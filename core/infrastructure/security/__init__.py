"""Security adapters."""

from .hash_function import Pbkdf2HashFunction

__all__ = ["Pbkdf2HashFunction"]
