"""
Abstract interface for borrowing and fine records.

Only the queries account deletion needs are exposed here: counting what a
member still owes, and clearing a member's settled history.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal


@dataclass
class Borrowing:
    """
    A book lent to a member.

    Attributes:
        borrowing_id: Unique borrowing identifier
        member_id: Borrowing member
        book_id: Borrowed book
        borrowed_at: When the book left the library
        returned_at: When it came back, None while still out
    """

    borrowing_id: str
    member_id: int
    book_id: int
    borrowed_at: datetime
    returned_at: datetime | None = None

    @property
    def active(self) -> bool:
        return self.returned_at is None


@dataclass
class Fine:
    """
    A fine charged to a member.

    Attributes:
        fine_id: Unique fine identifier
        member_id: Charged member
        amount: Amount owed
        paid: Whether the fine has been settled
    """

    fine_id: str
    member_id: int
    amount: Decimal
    paid: bool = False


class ObligationsRepository(ABC):
    """Abstract interface for borrowing and fine storage operations."""

    @abstractmethod
    async def save_borrowing(self, borrowing: Borrowing) -> None:
        """Store or replace a borrowing record."""
        pass

    @abstractmethod
    async def save_fine(self, fine: Fine) -> None:
        """Store or replace a fine record."""
        pass

    @abstractmethod
    async def count_active_borrowings(self, member_id: int) -> int:
        """
        Count books the member has not returned.

        Args:
            member_id: Member identifier

        Returns:
            Number of borrowings with no return date
        """
        pass

    @abstractmethod
    async def count_outstanding_fines(self, member_id: int) -> int:
        """
        Count unpaid fines of a member.

        Args:
            member_id: Member identifier

        Returns:
            Number of fines not yet paid
        """
        pass

    @abstractmethod
    async def purge_member_records(self, member_id: int) -> int:
        """
        Delete every borrowing and fine record of a member.

        Args:
            member_id: Member identifier

        Returns:
            Number of records removed
        """
        pass
