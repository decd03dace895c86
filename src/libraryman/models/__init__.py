"""
Models package.

Contains the RFC 7807 error models shared by every module.
Module-specific models are located in their respective module directories.
"""

from libraryman.models.errors import ProblemDetail, ValidationErrorDetail

__all__ = [
    "ProblemDetail",
    "ValidationErrorDetail",
]
