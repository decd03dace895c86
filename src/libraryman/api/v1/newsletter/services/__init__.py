"""
Newsletter service for subscribe/unsubscribe.

A subscription is a single record per email that flips between active and
inactive; it is never deleted, so re-subscribing is distinguishable from
subscribing for the first time.
"""

import re
from datetime import UTC, datetime

from libraryman.api.v1.members.request import EMAIL_PATTERN
from libraryman.api.v1.newsletter.response import SubscriptionOutcome
from libraryman.core.logging import logger
from libraryman.infrastructure.repositories.newsletter_repository import (
    NewsletterRepository,
    NewsletterSubscription,
)
from libraryman.utils.security import read_unsubscribe_token

EMAIL_REGEX = re.compile(EMAIL_PATTERN)


class NewsletterService:
    """Service for newsletter subscription state."""

    def __init__(self, repository: NewsletterRepository):
        self.repository = repository

    async def subscribe(self, email: str) -> SubscriptionOutcome:
        """
        Subscribe an address, reactivating it if it unsubscribed before.

        Args:
            email: Subscriber address

        Returns:
            Outcome of the request
        """
        email = email.strip().lower()
        if not EMAIL_REGEX.match(email):
            return SubscriptionOutcome.INVALID_EMAIL

        now = datetime.now(UTC)
        existing = await self.repository.find_by_email(email)

        if existing is None:
            await self.repository.save(
                NewsletterSubscription(email=email, active=True, subscribed_at=now)
            )
            logger.info("New newsletter subscription")
            return SubscriptionOutcome.SUBSCRIBED

        if existing.active:
            return SubscriptionOutcome.ALREADY_SUBSCRIBED

        existing.active = True
        existing.subscribed_at = now
        await self.repository.save(existing)
        logger.info("Newsletter subscription reactivated")
        return SubscriptionOutcome.RESUBSCRIBED

    async def unsubscribe(self, token: str) -> SubscriptionOutcome:
        """
        Unsubscribe the address a signed token was issued for.

        Args:
            token: Token from the unsubscribe link

        Returns:
            Outcome of the request
        """
        email = read_unsubscribe_token(token)
        if email is None:
            return SubscriptionOutcome.INVALID_TOKEN

        existing = await self.repository.find_by_email(email)
        if existing is None:
            return SubscriptionOutcome.INVALID_TOKEN

        if not existing.active:
            return SubscriptionOutcome.ALREADY_UNSUBSCRIBED

        existing.active = False
        existing.unsubscribed_at = datetime.now(UTC)
        await self.repository.save(existing)
        logger.info("Newsletter subscription cancelled")
        return SubscriptionOutcome.UNSUBSCRIBED


__all__ = ["NewsletterService"]
