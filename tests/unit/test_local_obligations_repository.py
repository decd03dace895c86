"""Tests for the local JSON borrowing/fine repository."""

import shutil
import tempfile
from datetime import UTC, datetime
from decimal import Decimal
from pathlib import Path

import pytest

from libraryman.infrastructure.implementations.local import LocalObligationsRepository
from libraryman.infrastructure.repositories.obligations_repository import (
    Borrowing,
    Fine,
)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for record files."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    shutil.rmtree(temp_path)


@pytest.fixture
def repo(temp_dir):
    """Create a local obligations repository instance."""
    return LocalObligationsRepository(base_dir=str(temp_dir))


def _borrowing(borrowing_id, member_id, returned=False) -> Borrowing:
    return Borrowing(
        borrowing_id=borrowing_id,
        member_id=member_id,
        book_id=100,
        borrowed_at=datetime(2024, 2, 1, tzinfo=UTC),
        returned_at=datetime(2024, 2, 20, tzinfo=UTC) if returned else None,
    )


def test_borrowing_active_flag():
    """Test a borrowing is active until returned."""
    assert _borrowing("b1", 1).active
    assert not _borrowing("b1", 1, returned=True).active


@pytest.mark.asyncio
async def test_counts_start_at_zero(repo):
    """Test an empty store reports nothing owed."""
    assert await repo.count_active_borrowings(1) == 0
    assert await repo.count_outstanding_fines(1) == 0


@pytest.mark.asyncio
async def test_count_active_borrowings(repo):
    """Test only unreturned borrowings of the member are counted."""
    await repo.save_borrowing(_borrowing("b1", 1))
    await repo.save_borrowing(_borrowing("b2", 1, returned=True))
    await repo.save_borrowing(_borrowing("b3", 2))

    assert await repo.count_active_borrowings(1) == 1
    assert await repo.count_active_borrowings(2) == 1


@pytest.mark.asyncio
async def test_count_outstanding_fines(repo):
    """Test only unpaid fines of the member are counted."""
    await repo.save_fine(Fine(fine_id="f1", member_id=1, amount=Decimal("2.50")))
    await repo.save_fine(Fine(fine_id="f2", member_id=1, amount=Decimal("1.00"), paid=True))

    assert await repo.count_outstanding_fines(1) == 1


@pytest.mark.asyncio
async def test_save_replaces_record(repo):
    """Test saving the same id again replaces the earlier state."""
    await repo.save_fine(Fine(fine_id="f1", member_id=1, amount=Decimal("2.50")))
    await repo.save_fine(Fine(fine_id="f1", member_id=1, amount=Decimal("2.50"), paid=True))

    assert await repo.count_outstanding_fines(1) == 0


@pytest.mark.asyncio
async def test_purge_member_records(repo, temp_dir):
    """Test purge removes every record of one member and nobody else's."""
    await repo.save_borrowing(_borrowing("b1", 1, returned=True))
    await repo.save_fine(Fine(fine_id="f1", member_id=1, amount=Decimal("3"), paid=True))
    await repo.save_borrowing(_borrowing("b2", 2))

    removed = await repo.purge_member_records(1)

    assert removed == 2
    assert not (temp_dir / "borrowings" / "b1.json").exists()
    assert (temp_dir / "borrowings" / "b2.json").exists()
    assert await repo.count_active_borrowings(2) == 1
