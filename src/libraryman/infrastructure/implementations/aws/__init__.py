"""AWS infrastructure implementations package."""

from libraryman.infrastructure.implementations.aws.member_repository import (
    AWSMemberRepository,
)
from libraryman.infrastructure.implementations.aws.newsletter_repository import (
    AWSNewsletterRepository,
)
from libraryman.infrastructure.implementations.aws.obligations_repository import (
    AWSObligationsRepository,
)

__all__ = [
    "AWSMemberRepository",
    "AWSNewsletterRepository",
    "AWSObligationsRepository",
]
