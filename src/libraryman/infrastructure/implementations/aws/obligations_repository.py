"""
AWS DynamoDB implementation for borrowing and fine records.

Both record kinds share one table partitioned by member, so every
deletion-time query is a single partition read.
"""

from decimal import Decimal

from pynamodb.attributes import (
    BooleanAttribute,
    NumberAttribute,
    UnicodeAttribute,
    UTCDateTimeAttribute,
)
from pynamodb.exceptions import PynamoDBException
from pynamodb.models import Model

from libraryman.core.logging import logger
from libraryman.domain.exceptions import UnexpectedFailureError
from libraryman.infrastructure.repositories.obligations_repository import (
    Borrowing,
    Fine,
    ObligationsRepository,
)

BORROWING = "borrowing"
FINE = "fine"


class ObligationModel(Model):
    """PynamoDB model for borrowing and fine records.

    DynamoDB Table Schema:
    - Partition Key: member_id (number)
    - Sort Key: record_id ("borrowing#<id>" or "fine#<id>")
    """

    class Meta:
        table_name = None
        region = None

    member_id = NumberAttribute(hash_key=True)
    record_id = UnicodeAttribute(range_key=True)
    kind = UnicodeAttribute()
    book_id = NumberAttribute(null=True)
    borrowed_at = UTCDateTimeAttribute(null=True)
    returned_at = UTCDateTimeAttribute(null=True)
    amount = UnicodeAttribute(null=True)
    paid = BooleanAttribute(default=False)


class AWSObligationsRepository(ObligationsRepository):
    """AWS DynamoDB implementation of ObligationsRepository using PynamoDB."""

    def __init__(
        self,
        table_name: str = "libraryman-obligations",
        region_name: str = "eu-west-1",
        auto_create_table: bool = False,
    ):
        if not table_name:
            raise ValueError("table_name cannot be empty")

        ObligationModel.Meta.table_name = table_name
        ObligationModel.Meta.region = region_name

        if auto_create_table and not ObligationModel.exists():
            logger.info(f"Creating DynamoDB table: {table_name}")
            ObligationModel.create_table(
                read_capacity_units=5, write_capacity_units=5, wait=True
            )

        logger.info(f"Initialized AWSObligationsRepository with table={table_name}")

    def _records(self, member_id: int, kind: str) -> list[ObligationModel]:
        try:
            return list(
                ObligationModel.query(
                    hash_key=member_id,
                    range_key_condition=ObligationModel.record_id.startswith(f"{kind}#"),
                )
            )
        except PynamoDBException as e:
            logger.error(f"Failed to query {kind} records of member {member_id}: {e}")
            raise UnexpectedFailureError("Obligations store is unavailable") from e

    def _save(self, model: ObligationModel) -> None:
        try:
            model.save()
        except PynamoDBException as e:
            logger.error(f"Failed to save {model.record_id}: {e}")
            raise UnexpectedFailureError("Obligations store is unavailable") from e

    async def save_borrowing(self, borrowing: Borrowing) -> None:
        """Store a borrowing item."""
        self._save(
            ObligationModel(
                member_id=borrowing.member_id,
                record_id=f"{BORROWING}#{borrowing.borrowing_id}",
                kind=BORROWING,
                book_id=borrowing.book_id,
                borrowed_at=borrowing.borrowed_at,
                returned_at=borrowing.returned_at,
            )
        )

    async def save_fine(self, fine: Fine) -> None:
        """Store a fine item."""
        self._save(
            ObligationModel(
                member_id=fine.member_id,
                record_id=f"{FINE}#{fine.fine_id}",
                kind=FINE,
                amount=str(Decimal(fine.amount)),
                paid=fine.paid,
            )
        )

    async def count_active_borrowings(self, member_id: int) -> int:
        """Count borrowing items with no return date."""
        return sum(1 for r in self._records(member_id, BORROWING) if r.returned_at is None)

    async def count_outstanding_fines(self, member_id: int) -> int:
        """Count unpaid fine items."""
        return sum(1 for r in self._records(member_id, FINE) if not r.paid)

    async def purge_member_records(self, member_id: int) -> int:
        """Delete every item in the member's partition."""
        records = self._records(member_id, BORROWING) + self._records(member_id, FINE)
        try:
            with ObligationModel.batch_write() as batch:
                for record in records:
                    batch.delete(record)
        except PynamoDBException as e:
            logger.error(f"Failed to purge records of member {member_id}: {e}")
            raise UnexpectedFailureError("Obligations store is unavailable") from e

        logger.info(f"Purged {len(records)} borrowing/fine records of member {member_id}")
        return len(records)
