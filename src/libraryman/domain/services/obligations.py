"""Abstract check for borrowing obligations that block account deletion."""

from abc import ABC, abstractmethod


class ObligationsChecker(ABC):
    """Answers whether a member still owes the library anything."""

    @abstractmethod
    async def has_outstanding_obligations(self, member_id: int) -> bool:
        """
        Check for unpaid fines or books not yet returned.

        Args:
            member_id: Member to check

        Returns:
            True if the member has an unpaid fine or an active borrowing
        """
        pass

    @abstractmethod
    async def release_member_records(self, member_id: int) -> None:
        """
        Drop the settled borrowing and fine history of a member.

        Only called once ``has_outstanding_obligations`` returned False.
        """
        pass
