"""
Local file-based borrowing and fine repository implementation.

Stores records as JSON files in a local directory structure:
    {base_dir}/
        borrowings/
            {borrowing_id}.json
        fines/
            {fine_id}.json
"""

import json
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any

from loguru import logger

from libraryman.domain.exceptions import UnexpectedFailureError
from libraryman.infrastructure.repositories.obligations_repository import (
    Borrowing,
    Fine,
    ObligationsRepository,
)


class LocalObligationsRepository(ObligationsRepository):
    """File-based borrowing and fine storage for local development."""

    def __init__(self, base_dir: str = "./.libraryman_data"):
        """
        Initialize local obligations repository.

        Args:
            base_dir: Base directory for record storage
        """
        self.base_dir = Path(base_dir)
        self.borrowings_dir = self.base_dir / "borrowings"
        self.fines_dir = self.base_dir / "fines"

        self.borrowings_dir.mkdir(parents=True, exist_ok=True)
        self.fines_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Initialized LocalObligationsRepository at {self.base_dir}")

    def _borrowing_to_dict(self, borrowing: Borrowing) -> dict[str, Any]:
        return {
            "borrowing_id": borrowing.borrowing_id,
            "member_id": borrowing.member_id,
            "book_id": borrowing.book_id,
            "borrowed_at": borrowing.borrowed_at.isoformat(),
            "returned_at": (
                borrowing.returned_at.isoformat() if borrowing.returned_at else None
            ),
        }

    def _dict_to_borrowing(self, data: dict[str, Any]) -> Borrowing:
        return Borrowing(
            borrowing_id=data["borrowing_id"],
            member_id=data["member_id"],
            book_id=data["book_id"],
            borrowed_at=datetime.fromisoformat(data["borrowed_at"]),
            returned_at=(
                datetime.fromisoformat(data["returned_at"])
                if data.get("returned_at")
                else None
            ),
        )

    def _fine_to_dict(self, fine: Fine) -> dict[str, Any]:
        return {
            "fine_id": fine.fine_id,
            "member_id": fine.member_id,
            "amount": str(fine.amount),
            "paid": fine.paid,
        }

    def _dict_to_fine(self, data: dict[str, Any]) -> Fine:
        return Fine(
            fine_id=data["fine_id"],
            member_id=data["member_id"],
            amount=Decimal(data["amount"]),
            paid=data.get("paid", False),
        )

    def _read_dir(self, directory: Path) -> list[tuple[Path, dict[str, Any]]]:
        try:
            return [
                (path, json.loads(path.read_text()))
                for path in directory.glob("*.json")
            ]
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read {directory.name} records: {e}")
            raise UnexpectedFailureError("Obligations store is unavailable") from e

    def _write(self, path: Path, data: dict[str, Any]) -> None:
        try:
            path.write_text(json.dumps(data, indent=2))
        except OSError as e:
            logger.error(f"Failed to write {path.name}: {e}")
            raise UnexpectedFailureError("Obligations store is unavailable") from e

    async def save_borrowing(self, borrowing: Borrowing) -> None:
        """Store borrowing to file."""
        self._write(
            self.borrowings_dir / f"{borrowing.borrowing_id}.json",
            self._borrowing_to_dict(borrowing),
        )

    async def save_fine(self, fine: Fine) -> None:
        """Store fine to file."""
        self._write(self.fines_dir / f"{fine.fine_id}.json", self._fine_to_dict(fine))

    async def count_active_borrowings(self, member_id: int) -> int:
        """Count borrowings of member with no return date."""
        borrowings = (
            self._dict_to_borrowing(data) for _, data in self._read_dir(self.borrowings_dir)
        )
        return sum(1 for b in borrowings if b.member_id == member_id and b.active)

    async def count_outstanding_fines(self, member_id: int) -> int:
        """Count unpaid fines of member."""
        fines = (self._dict_to_fine(data) for _, data in self._read_dir(self.fines_dir))
        return sum(1 for f in fines if f.member_id == member_id and not f.paid)

    async def purge_member_records(self, member_id: int) -> int:
        """Delete borrowing and fine files belonging to member."""
        removed = 0

        for directory in (self.borrowings_dir, self.fines_dir):
            for path, data in self._read_dir(directory):
                if data.get("member_id") != member_id:
                    continue
                try:
                    path.unlink(missing_ok=True)
                except OSError as e:
                    logger.error(f"Failed to delete {path.name}: {e}")
                    raise UnexpectedFailureError(
                        "Obligations store is unavailable"
                    ) from e
                removed += 1

        logger.info(f"Purged {removed} borrowing/fine records of member {member_id}")
        return removed
