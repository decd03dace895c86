"""Abstract password hashing capability."""

from abc import ABC, abstractmethod


class PasswordVerifier(ABC):
    """
    One-way password hashing.

    Implementations must never store or return the plaintext, and must
    treat a malformed stored hash as a non-match rather than an error.
    """

    @abstractmethod
    def hash(self, plain: str) -> str:
        """
        Hash a plaintext password.

        Args:
            plain: Password as submitted by the user

        Returns:
            Encoded hash suitable for storage
        """
        pass

    @abstractmethod
    def matches(self, plain: str, hashed: str) -> bool:
        """
        Check a plaintext password against a stored hash.

        Args:
            plain: Password as submitted by the user
            hashed: Hash previously produced by ``hash``

        Returns:
            True if the password produces the stored hash
        """
        pass

    @abstractmethod
    def same_password(self, first: str, second: str) -> bool:
        """
        Compare two submitted plaintext passwords.

        Uses the same normalization as ``hash`` so two strings are equal
        here exactly when they would hash to the same credential.
        """
        pass
