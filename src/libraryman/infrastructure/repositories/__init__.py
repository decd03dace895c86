"""Abstract repository interfaces for infrastructure operations."""

from libraryman.infrastructure.repositories.member_repository import (
    MemberRepository,
    UnknownSortFieldError,
)
from libraryman.infrastructure.repositories.newsletter_repository import (
    NewsletterRepository,
    NewsletterSubscription,
)
from libraryman.infrastructure.repositories.obligations_repository import (
    Borrowing,
    Fine,
    ObligationsRepository,
)

__all__ = [
    "Borrowing",
    "Fine",
    "MemberRepository",
    "NewsletterRepository",
    "NewsletterSubscription",
    "ObligationsRepository",
    "UnknownSortFieldError",
]
