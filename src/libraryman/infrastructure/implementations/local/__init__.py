"""Local file-based infrastructure implementations for development."""

from libraryman.infrastructure.implementations.local.member_repository import (
    LocalMemberRepository,
)
from libraryman.infrastructure.implementations.local.newsletter_repository import (
    LocalNewsletterRepository,
)
from libraryman.infrastructure.implementations.local.obligations_repository import (
    LocalObligationsRepository,
)

__all__ = [
    "LocalMemberRepository",
    "LocalNewsletterRepository",
    "LocalObligationsRepository",
]
