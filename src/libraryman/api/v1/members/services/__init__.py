"""
Member service for account lifecycle and credential management.

This service provides the business rules behind the member endpoints:
- Listing and lookup, with lookups served from the member cache
- Account creation, profile update and deletion with notifications
- Password change with verification of the current password

Every store write goes through ``_persist`` or ``_remove``, which evict the
member's cache entry both before and after the store call.
"""

from dataclasses import replace

from libraryman.api.v1.members.request import (
    NewMember,
    PasswordChangeRequest,
    UpdateMemberRequest,
)
from libraryman.api.v1.members.response import MemberView
from libraryman.core.logging import logger
from libraryman.domain.exceptions import (
    DeletionBlockedError,
    InvalidCredentialError,
    InvalidSortFieldError,
    ResourceNotFoundError,
)
from libraryman.domain.models import Member, Page, PageRequest
from libraryman.domain.services import (
    NotificationSink,
    ObligationsChecker,
    PasswordVerifier,
)
from libraryman.infrastructure.repositories.member_repository import (
    MemberRepository,
    UnknownSortFieldError,
)
from libraryman.services.member_cache import MemberLookupCache

MEMBER_NOT_FOUND = "Member not found"


def to_view(member: Member) -> MemberView:
    """Translate a stored member to its transfer shape, dropping the hash."""
    return MemberView(
        member_id=member.member_id,
        role=member.role,
        name=member.name,
        username=member.username,
        email=member.email,
        membership_date=member.membership_date,
    )


def to_entity(new_member: NewMember) -> Member:
    """Translate an account creation payload to a member entity."""
    return Member(
        member_id=new_member.member_id,
        role=new_member.role,
        name=new_member.name,
        username=new_member.username,
        email=new_member.email,
        password_hash=new_member.password_hash,
        membership_date=new_member.membership_date,
    )


class MemberService:
    """
    Service for member account workflows.

    Collaborators are injected so each can be swapped independently:
    the store, the lookup cache, password hashing, notifications and the
    borrowing/fine obligations check that guards deletion.
    """

    def __init__(
        self,
        repository: MemberRepository,
        cache: MemberLookupCache,
        passwords: PasswordVerifier,
        notifications: NotificationSink,
        obligations: ObligationsChecker,
    ):
        self.repository = repository
        self.cache = cache
        self.passwords = passwords
        self.notifications = notifications
        self.obligations = obligations

    async def list_members(self, page_request: PageRequest) -> Page[MemberView]:
        """
        Retrieve one page of members.

        Args:
            page_request: Page number, size and sort key

        Returns:
            Page of member views

        Raises:
            InvalidSortFieldError: If the sort key is not a member property
        """
        try:
            page = await self.repository.find_page(page_request)
        except UnknownSortFieldError as e:
            logger.warning(f"Rejected member listing: {e}")
            raise InvalidSortFieldError(
                "The specified 'sortBy' value is invalid."
            ) from e
        return page.map(to_view)

    async def get_member_by_id(self, member_id: int) -> MemberView | None:
        """
        Retrieve a member, consulting the lookup cache first.

        Args:
            member_id: Member identifier

        Returns:
            Member view, or None if no member has this id
        """
        cached = self.cache.get(member_id)
        if cached is not None:
            return cached

        member = await self.repository.find_by_id(member_id)
        if member is None:
            return None

        view = to_view(member)
        self.cache.put(member_id, view)
        return view

    async def add_member(self, new_member: NewMember) -> MemberView:
        """
        Open a member account.

        The password in ``new_member`` must already be hashed. The creation
        notification receives the member as stored, including any id or
        membership date the store assigned.

        Args:
            new_member: Account details with hashed password

        Returns:
            The stored member
        """
        # an explicit id may name an existing record, which upsert replaces
        member = await self._persist(to_entity(new_member))
        logger.info(f"Created member {member.member_id} ({member.username})")

        await self.notifications.notify_account_created(member)
        return to_view(member)

    async def update_member(
        self, member_id: int, details: UpdateMemberRequest
    ) -> MemberView:
        """
        Replace name, username and email of a member.

        Args:
            member_id: Member identifier
            details: New profile details

        Returns:
            The updated member

        Raises:
            ResourceNotFoundError: If no member has this id
        """
        member = await self._require(member_id)

        updated = await self._persist(
            replace(
                member,
                name=details.name,
                username=details.username,
                email=details.email,
            )
        )
        logger.info(f"Updated member {member_id}")

        await self.notifications.notify_account_updated(updated)
        return to_view(updated)

    async def delete_member(self, member_id: int) -> None:
        """
        Delete a member with no outstanding obligations.

        Args:
            member_id: Member identifier

        Raises:
            ResourceNotFoundError: If no member has this id
            DeletionBlockedError: If the member has unpaid fines or books out
        """
        member = await self._require(member_id)

        if await self.obligations.has_outstanding_obligations(member_id):
            raise DeletionBlockedError(
                "Member has outstanding fines or borrowed books and cannot be deleted"
            )

        self.cache.evict(member_id)
        await self.notifications.notify_account_deleted(member)
        await self._remove(member)
        await self.obligations.release_member_records(member_id)
        logger.info(f"Deleted member {member_id}")

    async def update_password(
        self, member_id: int, change: PasswordChangeRequest
    ) -> None:
        """
        Change a member's password after verifying the current one.

        Args:
            member_id: Member identifier
            change: Current and new plaintext passwords

        Raises:
            ResourceNotFoundError: If no member has this id
            InvalidCredentialError: If the current password is wrong or
                the new password equals it
        """
        member = await self._require(member_id)

        if not self.passwords.matches(change.current_password, member.password_hash):
            logger.warning(f"Password change for member {member_id}: wrong password")
            raise InvalidCredentialError("Current password is incorrect")

        if self.passwords.same_password(change.current_password, change.new_password):
            raise InvalidCredentialError(
                "New password must be different from the old password"
            )

        await self._persist(
            replace(member, password_hash=self.passwords.hash(change.new_password))
        )
        logger.info(f"Password changed for member {member_id}")

    async def _require(self, member_id: int) -> Member:
        member = await self.repository.find_by_id(member_id)
        if member is None:
            raise ResourceNotFoundError(MEMBER_NOT_FOUND)
        return member

    async def _persist(self, member: Member) -> Member:
        self.cache.evict(member.member_id)
        try:
            return await self.repository.upsert(member)
        finally:
            # a lookup racing the write may have cached the old record
            self.cache.evict(member.member_id)

    async def _remove(self, member: Member) -> None:
        self.cache.evict(member.member_id)
        try:
            await self.repository.delete(member)
        finally:
            self.cache.evict(member.member_id)


__all__ = ["MemberService", "to_entity", "to_view"]
