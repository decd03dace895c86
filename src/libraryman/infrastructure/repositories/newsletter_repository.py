"""Abstract interface for newsletter subscription storage."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime


@dataclass
class NewsletterSubscription:
    """
    Newsletter subscription keyed by email.

    Attributes:
        email: Subscriber address (stored lowercase)
        active: Whether newsletters are currently sent
        subscribed_at: Most recent (re-)subscription time
        unsubscribed_at: Most recent unsubscription time, if any
    """

    email: str
    active: bool
    subscribed_at: datetime
    unsubscribed_at: datetime | None = None


class NewsletterRepository(ABC):
    """Abstract interface for subscription storage operations."""

    @abstractmethod
    async def find_by_email(self, email: str) -> NewsletterSubscription | None:
        """
        Retrieve a subscription by email.

        Args:
            email: Subscriber address

        Returns:
            Subscription if the address was ever subscribed, None otherwise
        """
        pass

    @abstractmethod
    async def save(self, subscription: NewsletterSubscription) -> None:
        """Store or replace a subscription."""
        pass
