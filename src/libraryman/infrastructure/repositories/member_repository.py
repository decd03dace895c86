"""
Abstract interface for member record storage.

Stores are responsible for:
- Assigning member ids and membership dates on first save
- Atomic single-record upsert
- Sorting and slicing pages of members
- Username/email uniqueness where the backend supports it
"""

from abc import ABC, abstractmethod

from libraryman.domain.models import Member, Page, PageRequest


class UnknownSortFieldError(Exception):
    """Raised by a store asked to sort by a property members do not have."""

    def __init__(self, field: str):
        super().__init__(f"No property '{field}' found for type 'Member'")
        self.field = field


class MemberRepository(ABC):
    """
    Abstract interface for member storage operations.

    Backend failures surface as ``UnexpectedFailureError``.
    """

    @abstractmethod
    async def find_by_id(self, member_id: int) -> Member | None:
        """
        Retrieve a member by id.

        Args:
            member_id: Member identifier

        Returns:
            Member if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_page(self, page_request: PageRequest) -> Page[Member]:
        """
        Retrieve one sorted page of members.

        Args:
            page_request: Page number, size and sort key

        Returns:
            The requested page (empty content past the last page)

        Raises:
            UnknownSortFieldError: If ``sort_by`` is not a member property
        """
        pass

    @abstractmethod
    async def upsert(self, member: Member) -> Member:
        """
        Insert a new member or replace an existing one.

        Args:
            member: Member to store; a None id asks the store to assign one

        Returns:
            The member as persisted, with store-assigned fields filled in
        """
        pass

    @abstractmethod
    async def delete(self, member: Member) -> None:
        """
        Remove a member.

        Args:
            member: Member to remove (matched by id)
        """
        pass
