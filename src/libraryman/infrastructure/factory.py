"""
Infrastructure factory for provider selection.

Selects appropriate repository implementations based on configuration:
- local: JSON files for development
- aws: DynamoDB tables via PynamoDB

Usage:
    from libraryman.infrastructure import InfrastructureFactory
    from libraryman.config import get_settings

    factory = InfrastructureFactory.from_settings(get_settings())
    member_repo = factory.get_member_repository()
"""

from typing import TYPE_CHECKING, Literal

from loguru import logger

from libraryman.infrastructure.repositories import (
    MemberRepository,
    NewsletterRepository,
    ObligationsRepository,
)

if TYPE_CHECKING:
    from libraryman.config import Settings

InfrastructureProvider = Literal["local", "aws"]

DEFAULT_LOCAL_DIR = "./.libraryman_data"


class InfrastructureFactory:
    """
    Factory for creating infrastructure repository instances.

    Repositories are built on first request and reused, so per-store
    locks and table configuration are shared by everything using the
    same factory.
    """

    def __init__(self, provider: InfrastructureProvider | None = None, **config):
        """
        Initialize infrastructure factory.

        Args:
            provider: Infrastructure provider ("local", "aws").
                     If None, uses "local" as default.
            **config: Provider-specific configuration options

        Raises:
            ValueError: If provider is not supported
        """
        if provider is None:
            provider = "local"
        if provider not in ("local", "aws"):
            raise ValueError(f"Unsupported provider: {provider}")

        self.provider = provider
        self.config = config
        self._members: MemberRepository | None = None
        self._obligations: ObligationsRepository | None = None
        self._newsletter: NewsletterRepository | None = None

        logger.info(f"Initialized InfrastructureFactory with provider: {provider}")

    @classmethod
    def from_settings(cls, settings: "Settings") -> "InfrastructureFactory":
        """
        Create factory from Settings object.

        Args:
            settings: Application settings from config.py

        Returns:
            InfrastructureFactory configured from settings
        """
        config = {
            "base_dir": settings.infrastructure_base_dir,
            "aws_region": settings.aws_region,
            "members_table": settings.aws_members_table,
            "obligations_table": settings.aws_obligations_table,
            "newsletter_table": settings.aws_newsletter_table,
            "auto_create_resources": settings.auto_create_resources,
        }

        return cls(provider=settings.infrastructure_provider, **config)

    def get_member_repository(self) -> MemberRepository:
        """
        Get member repository for configured provider.

        Returns:
            MemberRepository implementation
        """
        if self._members is None:
            if self.provider == "local":
                from libraryman.infrastructure.implementations.local import (
                    LocalMemberRepository,
                )

                self._members = LocalMemberRepository(
                    base_dir=self.config.get("base_dir", DEFAULT_LOCAL_DIR)
                )
            else:
                from libraryman.infrastructure.implementations.aws import (
                    AWSMemberRepository,
                )

                self._members = AWSMemberRepository(
                    table_name=self.config.get("members_table", "libraryman-members"),
                    region_name=self.config.get("aws_region", "eu-west-1"),
                    auto_create_table=self.config.get("auto_create_resources", False),
                )
        return self._members

    def get_obligations_repository(self) -> ObligationsRepository:
        """
        Get borrowing/fine repository for configured provider.

        Returns:
            ObligationsRepository implementation
        """
        if self._obligations is None:
            if self.provider == "local":
                from libraryman.infrastructure.implementations.local import (
                    LocalObligationsRepository,
                )

                self._obligations = LocalObligationsRepository(
                    base_dir=self.config.get("base_dir", DEFAULT_LOCAL_DIR)
                )
            else:
                from libraryman.infrastructure.implementations.aws import (
                    AWSObligationsRepository,
                )

                self._obligations = AWSObligationsRepository(
                    table_name=self.config.get(
                        "obligations_table", "libraryman-obligations"
                    ),
                    region_name=self.config.get("aws_region", "eu-west-1"),
                    auto_create_table=self.config.get("auto_create_resources", False),
                )
        return self._obligations

    def get_newsletter_repository(self) -> NewsletterRepository:
        """
        Get newsletter subscription repository for configured provider.

        Returns:
            NewsletterRepository implementation
        """
        if self._newsletter is None:
            if self.provider == "local":
                from libraryman.infrastructure.implementations.local import (
                    LocalNewsletterRepository,
                )

                self._newsletter = LocalNewsletterRepository(
                    base_dir=self.config.get("base_dir", DEFAULT_LOCAL_DIR)
                )
            else:
                from libraryman.infrastructure.implementations.aws import (
                    AWSNewsletterRepository,
                )

                self._newsletter = AWSNewsletterRepository(
                    table_name=self.config.get(
                        "newsletter_table", "libraryman-newsletter"
                    ),
                    region_name=self.config.get("aws_region", "eu-west-1"),
                    auto_create_table=self.config.get("auto_create_resources", False),
                )
        return self._newsletter
