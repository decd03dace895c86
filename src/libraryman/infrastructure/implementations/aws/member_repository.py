"""
AWS DynamoDB implementation for member storage using PynamoDB ORM.

DynamoDB has no server-side ordering across partitions, so pages are
produced by scanning the table and sorting in memory. That is fine for a
library's member count; a larger deployment would add a GSI per sort key.
"""

from datetime import UTC, datetime

from pynamodb.attributes import NumberAttribute, UnicodeAttribute, UTCDateTimeAttribute
from pynamodb.exceptions import DoesNotExist, PutError, PynamoDBException
from pynamodb.models import Model

from libraryman.core.logging import logger
from libraryman.domain.exceptions import DuplicateMemberError, UnexpectedFailureError
from libraryman.domain.models import (
    MEMBER_SORT_FIELDS,
    Member,
    MemberRole,
    Page,
    PageRequest,
)
from libraryman.infrastructure.repositories.member_repository import (
    MemberRepository,
    UnknownSortFieldError,
)

# Attempts at claiming a fresh member id before giving up
MAX_ID_CLAIM_ATTEMPTS = 5


class MemberModel(Model):
    """PynamoDB model for member storage.

    DynamoDB Table Schema:
    - Partition Key: member_id (number)
    - Attributes: role, name, username, email, password_hash, membership_date

    Note: table_name and region are configured in AWSMemberRepository.__init__
    """

    class Meta:
        table_name = None
        region = None

    member_id = NumberAttribute(hash_key=True)
    role = UnicodeAttribute()
    name = UnicodeAttribute()
    username = UnicodeAttribute()
    email = UnicodeAttribute()
    password_hash = UnicodeAttribute()
    membership_date = UTCDateTimeAttribute()


class AWSMemberRepository(MemberRepository):
    """AWS DynamoDB implementation of MemberRepository using PynamoDB."""

    def __init__(
        self,
        table_name: str = "libraryman-members",
        region_name: str = "eu-west-1",
        auto_create_table: bool = False,
    ):
        """Initialize PynamoDB model.

        Args:
            table_name: DynamoDB table name (from settings.aws_members_table)
            region_name: AWS region (from settings.aws_region)
            auto_create_table: If True, create table if it doesn't exist
        """
        if not table_name:
            raise ValueError("table_name cannot be empty")
        if not region_name:
            raise ValueError("region_name cannot be empty")

        MemberModel.Meta.table_name = table_name
        MemberModel.Meta.region = region_name

        self.table_name = table_name
        self.region_name = region_name

        if auto_create_table and not MemberModel.exists():
            logger.info(f"Creating DynamoDB table: {table_name}")
            MemberModel.create_table(
                read_capacity_units=5, write_capacity_units=5, wait=True
            )

        logger.info(
            f"Initialized AWSMemberRepository (PynamoDB) with table={table_name}, region={region_name}"
        )

    def _scan(self) -> list[Member]:
        try:
            return [self._model_to_member(model) for model in MemberModel.scan()]
        except PynamoDBException as e:
            logger.error(f"Failed to scan members: {e}")
            raise UnexpectedFailureError("Member store is unavailable") from e

    async def find_by_id(self, member_id: int) -> Member | None:
        """Get a member by partition key."""
        try:
            return self._model_to_member(MemberModel.get(hash_key=member_id))
        except DoesNotExist:
            return None
        except PynamoDBException as e:
            logger.error(f"Failed to get member {member_id}: {e}")
            raise UnexpectedFailureError("Member store is unavailable") from e

    async def find_page(self, page_request: PageRequest) -> Page[Member]:
        """Scan, sort and slice the members table."""
        sort_by = page_request.sort_by
        if sort_by not in MEMBER_SORT_FIELDS:
            raise UnknownSortFieldError(sort_by)

        members = sorted(
            self._scan(),
            key=lambda m: (
                getattr(m, sort_by).value
                if sort_by == "role"
                else getattr(m, sort_by)
            ),
            reverse=page_request.sort_dir == "desc",
        )
        start = page_request.offset
        return Page(
            content=members[start : start + page_request.size],
            page=page_request.page,
            size=page_request.size,
            total_elements=len(members),
        )

    async def upsert(self, member: Member) -> Member:
        """Save member, claiming the next free id for new records."""
        existing = self._scan()
        for other in existing:
            if other.member_id != member.member_id and (
                other.username == member.username or other.email == member.email
            ):
                raise DuplicateMemberError(
                    "A member with this username or email already exists"
                )

        model = self._member_to_model(member)
        if model.membership_date is None:
            model.membership_date = datetime.now(UTC)
        elif model.membership_date.tzinfo is None:
            model.membership_date = model.membership_date.replace(tzinfo=UTC)

        try:
            if member.member_id is not None:
                model.save()
            else:
                self._insert_with_new_id(model, existing)
        except PynamoDBException as e:
            logger.error(f"Failed to save member: {e}")
            raise UnexpectedFailureError("Member store is unavailable") from e

        logger.debug(f"Saved member: id={model.member_id}")
        return self._model_to_member(model)

    def _insert_with_new_id(self, model: MemberModel, existing: list[Member]) -> None:
        next_id = max((m.member_id for m in existing), default=0) + 1
        for _ in range(MAX_ID_CLAIM_ATTEMPTS):
            model.member_id = next_id
            try:
                model.save(condition=MemberModel.member_id.does_not_exist())
                return
            except PutError as e:
                if e.cause_response_code != "ConditionalCheckFailedException":
                    raise
                next_id += 1
        raise UnexpectedFailureError("Could not allocate a member id")

    async def delete(self, member: Member) -> None:
        """Delete member item."""
        try:
            MemberModel(member_id=member.member_id).delete()
        except PynamoDBException as e:
            logger.error(f"Failed to delete member {member.member_id}: {e}")
            raise UnexpectedFailureError("Member store is unavailable") from e

        logger.info(f"Deleted member {member.member_id}")

    def _member_to_model(self, member: Member) -> MemberModel:
        model = MemberModel(member_id=member.member_id)
        model.role = member.role.value
        model.name = member.name
        model.username = member.username
        model.email = member.email
        model.password_hash = member.password_hash
        model.membership_date = member.membership_date
        return model

    def _model_to_member(self, model: MemberModel) -> Member:
        return Member(
            member_id=int(model.member_id),
            role=MemberRole(model.role),
            name=model.name,
            username=model.username,
            email=model.email,
            password_hash=model.password_hash,
            membership_date=model.membership_date,
        )
