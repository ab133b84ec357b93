"""PBKDF2 password hashing."""

import base64
import hashlib
import secrets

from core.application.interfaces import IHashFunction


DEFAULT_ITERATIONS = 100_000
SALT_LENGTH = 10


class Pbkdf2HashFunction(IHashFunction):
    """
    PBKDF2-HMAC-SHA256 password hashing.

    The salt is 10 URL-safe base64 characters derived from 8 random bytes,
    which fits the 10-character salt column.
    """

    def __init__(self, iterations: int = DEFAULT_ITERATIONS):
        self.iterations = iterations

    def salt(self) -> str:
        return base64.urlsafe_b64encode(secrets.token_bytes(8)).decode("ascii")[:SALT_LENGTH]

    def hash(self, plaintext: str, salt: str) -> str:
        digest = hashlib.pbkdf2_hmac(
            "sha256",
            plaintext.encode("utf-8"),
            salt.encode("utf-8"),
            self.iterations,
        )
        return base64.b64encode(digest).decode("ascii")

