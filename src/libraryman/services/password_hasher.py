"""
PBKDF2 password hashing.

Hashes are stored as ``pbkdf2_sha256$<iterations>$<salt hex>$<hash hex>`` so
the iteration count can be raised later without invalidating old hashes.
Plaintext is NFKC-normalized before hashing, so visually identical input
typed on different keyboards yields the same credential.
"""

import os
import unicodedata

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC

from libraryman.domain.services.passwords import PasswordVerifier

ALGORITHM = "pbkdf2_sha256"
SALT_BYTES = 16
KEY_BYTES = 32


def normalize_password(plain: str) -> bytes:
    """Return the canonical byte form a password is hashed from."""
    return unicodedata.normalize("NFKC", plain).encode("utf-8")


class Pbkdf2PasswordVerifier(PasswordVerifier):
    """PBKDF2-HMAC-SHA256 implementation of PasswordVerifier."""

    def __init__(self, iterations: int = 310_000):
        if iterations <= 0:
            raise ValueError("iterations must be positive")
        self.iterations = iterations

    @staticmethod
    def _kdf(salt: bytes, iterations: int) -> PBKDF2HMAC:
        return PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=KEY_BYTES,
            salt=salt,
            iterations=iterations,
        )

    def hash(self, plain: str) -> str:
        salt = os.urandom(SALT_BYTES)
        key = self._kdf(salt, self.iterations).derive(normalize_password(plain))
        return f"{ALGORITHM}${self.iterations}${salt.hex()}${key.hex()}"

    def matches(self, plain: str, hashed: str) -> bool:
        try:
            algorithm, iterations, salt_hex, key_hex = hashed.split("$")
            if algorithm != ALGORITHM:
                return False
            kdf = self._kdf(bytes.fromhex(salt_hex), int(iterations))
            expected = bytes.fromhex(key_hex)
        except (AttributeError, ValueError):
            return False

        try:
            kdf.verify(normalize_password(plain), expected)
        except InvalidKey:
            return False
        return True

    def same_password(self, first: str, second: str) -> bool:
        return normalize_password(first) == normalize_password(second)
