"""ObligationsChecker backed by the borrowing/fine repository."""

from libraryman.core.logging import logger
from libraryman.domain.services.obligations import ObligationsChecker
from libraryman.infrastructure.repositories.obligations_repository import (
    ObligationsRepository,
)


class RepositoryObligationsChecker(ObligationsChecker):
    """Counts unpaid fines and unreturned books in the obligations store."""

    def __init__(self, repository: ObligationsRepository):
        self.repository = repository

    async def has_outstanding_obligations(self, member_id: int) -> bool:
        fines = await self.repository.count_outstanding_fines(member_id)
        borrowings = await self.repository.count_active_borrowings(member_id)

        if fines or borrowings:
            logger.info(
                f"Member {member_id} has {fines} unpaid fine(s) and "
                f"{borrowings} active borrowing(s)"
            )
            return True
        return False

    async def release_member_records(self, member_id: int) -> None:
        await self.repository.purge_member_records(member_id)
