"""
Dependency injection container for the LibraryMan backend.

This module provides centralized dependency injection using FastAPI's Depends
with typing.Annotated for clean type hints throughout the application.

Process-wide components (the infrastructure factory and the member lookup
cache) are created by the lifespan handler and read from ``app.state``;
tests replace them through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Request

from libraryman.api.v1.members.services import MemberService
from libraryman.api.v1.newsletter.services import NewsletterService
from libraryman.config import Settings, get_settings
from libraryman.domain.services import (
    NotificationSink,
    ObligationsChecker,
    PasswordVerifier,
)
from libraryman.infrastructure import InfrastructureFactory
from libraryman.services.member_cache import MemberLookupCache
from libraryman.services.notification_sinks import (
    LoggingNotificationSink,
    WebhookNotificationSink,
)
from libraryman.services.obligations_checker import RepositoryObligationsChecker
from libraryman.services.password_hasher import Pbkdf2PasswordVerifier

# ============================================================================
# Settings Dependencies
# ============================================================================

SettingsDep = Annotated[Settings, Depends(get_settings)]
"""Injected Settings instance (cached via lru_cache)."""


# ============================================================================
# Application-scoped Dependencies
# ============================================================================


def get_infrastructure_factory(request: Request) -> InfrastructureFactory:
    """
    Get the infrastructure factory created at startup.

    Args:
        request: Current request (gives access to app.state)

    Returns:
        Application infrastructure factory
    """
    return request.app.state.infrastructure


InfrastructureFactoryDep = Annotated[
    InfrastructureFactory, Depends(get_infrastructure_factory)
]
"""Injected InfrastructureFactory instance."""


def get_member_cache(request: Request) -> MemberLookupCache:
    """
    Get the member lookup cache created at startup.

    Args:
        request: Current request (gives access to app.state)

    Returns:
        Application member cache
    """
    return request.app.state.member_cache


MemberCacheDep = Annotated[MemberLookupCache, Depends(get_member_cache)]
"""Injected MemberLookupCache instance."""


# ============================================================================
# Capability Dependencies
# ============================================================================


def get_password_verifier(settings: SettingsDep) -> PasswordVerifier:
    """
    Get the password hashing capability.

    Args:
        settings: Application settings (injected)

    Returns:
        PBKDF2 password verifier
    """
    return Pbkdf2PasswordVerifier(iterations=settings.password_hash_iterations)


PasswordVerifierDep = Annotated[PasswordVerifier, Depends(get_password_verifier)]
"""Injected PasswordVerifier."""


def get_notification_sink(settings: SettingsDep) -> NotificationSink:
    """
    Get the account notification sink.

    Args:
        settings: Application settings (injected)

    Returns:
        Webhook sink when a URL is configured, logging sink otherwise
    """
    if settings.notification_webhook_url:
        return WebhookNotificationSink(
            url=settings.notification_webhook_url,
            timeout=settings.notification_timeout_seconds,
        )
    return LoggingNotificationSink()


NotificationSinkDep = Annotated[NotificationSink, Depends(get_notification_sink)]
"""Injected NotificationSink."""


def get_obligations_checker(factory: InfrastructureFactoryDep) -> ObligationsChecker:
    """
    Get the borrowing/fine obligations check.

    Args:
        factory: Infrastructure factory (injected)

    Returns:
        Obligations checker backed by the obligations repository
    """
    return RepositoryObligationsChecker(factory.get_obligations_repository())


ObligationsCheckerDep = Annotated[ObligationsChecker, Depends(get_obligations_checker)]
"""Injected ObligationsChecker."""


# ============================================================================
# Service Dependencies
# ============================================================================


def get_member_service(
    factory: InfrastructureFactoryDep,
    cache: MemberCacheDep,
    passwords: PasswordVerifierDep,
    notifications: NotificationSinkDep,
    obligations: ObligationsCheckerDep,
) -> MemberService:
    """
    Get the member service wired to its collaborators.

    Returns:
        Member service
    """
    return MemberService(
        repository=factory.get_member_repository(),
        cache=cache,
        passwords=passwords,
        notifications=notifications,
        obligations=obligations,
    )


MemberServiceDep = Annotated[MemberService, Depends(get_member_service)]
"""Injected MemberService."""


def get_newsletter_service(factory: InfrastructureFactoryDep) -> NewsletterService:
    """
    Get the newsletter service.

    Args:
        factory: Infrastructure factory (injected)

    Returns:
        Newsletter service
    """
    return NewsletterService(factory.get_newsletter_repository())


NewsletterServiceDep = Annotated[NewsletterService, Depends(get_newsletter_service)]
"""Injected NewsletterService."""
