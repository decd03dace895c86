"""Abstract sink for account lifecycle notifications."""

from abc import ABC, abstractmethod

from libraryman.domain.models import Member


class NotificationSink(ABC):
    """
    Receives account events after the member store has been updated.

    Delivery is fire-and-forget: implementations swallow and log their own
    failures, so callers never see an exception from a notification.
    """

    @abstractmethod
    async def notify_account_created(self, member: Member) -> None:
        """Announce a newly persisted account."""
        pass

    @abstractmethod
    async def notify_account_updated(self, member: Member) -> None:
        """Announce changed profile details."""
        pass

    @abstractmethod
    async def notify_account_deleted(self, member: Member) -> None:
        """Announce an account that is about to be removed."""
        pass
