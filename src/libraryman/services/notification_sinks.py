"""
Account notification sinks.

Two implementations of NotificationSink:
- LoggingNotificationSink: records each event in the application log
- WebhookNotificationSink: POSTs each event as JSON to a configured URL

Events carry the member as a MemberView, never the password hash.
"""

from typing import Any

import httpx

from libraryman.api.v1.members.response import MemberView
from libraryman.core.logging import logger
from libraryman.domain.models import Member
from libraryman.domain.services.notifications import NotificationSink

ACCOUNT_CREATED = "account_created"
ACCOUNT_UPDATED = "account_updated"
ACCOUNT_DELETED = "account_deleted"

SUBJECTS = {
    ACCOUNT_CREATED: "Welcome to LibraryMan!",
    ACCOUNT_UPDATED: "Your Account Details Have Been Updated",
    ACCOUNT_DELETED: "Your LibraryMan Account Has Been Deleted",
}

MESSAGES = {
    ACCOUNT_CREATED: (
        "Dear {name}, your library account has been created. "
        "Your member id is {member_id}."
    ),
    ACCOUNT_UPDATED: (
        "Dear {name}, the details of your library account have been updated. "
        "If you did not make this change, please contact the library."
    ),
    ACCOUNT_DELETED: (
        "Dear {name}, your library account has been deleted. "
        "Thank you for being a member."
    ),
}


def build_event(event: str, member: Member) -> dict[str, Any]:
    """Build the JSON body describing one account event."""
    view = MemberView(
        member_id=member.member_id,
        role=member.role,
        name=member.name,
        username=member.username,
        email=member.email,
        membership_date=member.membership_date,
    )
    return {
        "event": event,
        "subject": SUBJECTS[event],
        "message": MESSAGES[event].format(name=member.name, member_id=member.member_id),
        "member": view.model_dump(mode="json"),
    }


class LoggingNotificationSink(NotificationSink):
    """Writes account events to the log instead of delivering them."""

    async def notify_account_created(self, member: Member) -> None:
        self._log(ACCOUNT_CREATED, member)

    async def notify_account_updated(self, member: Member) -> None:
        self._log(ACCOUNT_UPDATED, member)

    async def notify_account_deleted(self, member: Member) -> None:
        self._log(ACCOUNT_DELETED, member)

    def _log(self, event: str, member: Member) -> None:
        logger.info(
            f"Notification {event} for member {member.member_id} <{member.email}>: "
            f"{SUBJECTS[event]}"
        )


class WebhookNotificationSink(NotificationSink):
    """
    Delivers account events to an HTTP endpoint.

    Delivery errors are logged and dropped; the member workflow that
    triggered the event has already committed.
    """

    def __init__(self, url: str, timeout: float = 5.0):
        if not url:
            raise ValueError("Webhook URL cannot be empty")
        self.url = url
        self.timeout = timeout

    async def notify_account_created(self, member: Member) -> None:
        await self._deliver(ACCOUNT_CREATED, member)

    async def notify_account_updated(self, member: Member) -> None:
        await self._deliver(ACCOUNT_UPDATED, member)

    async def notify_account_deleted(self, member: Member) -> None:
        await self._deliver(ACCOUNT_DELETED, member)

    async def _deliver(self, event: str, member: Member) -> None:
        payload = build_event(event, member)
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(self.url, json=payload)
                response.raise_for_status()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(
                f"Failed to deliver {event} for member {member.member_id}: {e}"
            )
            return

        logger.debug(f"Delivered {event} for member {member.member_id}")
