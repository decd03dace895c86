"""
Local file-based member repository implementation.

Stores members as JSON files in a local directory structure:
    {base_dir}/
        members/
            {member_id}.json
"""

import asyncio
import json
from dataclasses import replace
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from loguru import logger

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


class LocalMemberRepository(MemberRepository):
    """
    File-based member storage for local development.

    Writes go through a temporary file and an atomic rename, and id
    assignment is serialized with a lock, so concurrent requests in one
    process never see a half-written record.
    """

    def __init__(self, base_dir: str = "./.libraryman_data"):
        """
        Initialize local member repository.

        Args:
            base_dir: Base directory for member storage
        """
        self.base_dir = Path(base_dir)
        self.members_dir = self.base_dir / "members"
        self._lock = asyncio.Lock()

        self.members_dir.mkdir(parents=True, exist_ok=True)

        logger.info(f"Initialized LocalMemberRepository at {self.base_dir}")

    def _member_path(self, member_id: int) -> Path:
        """Get path to member file."""
        return self.members_dir / f"{member_id}.json"

    def _member_to_dict(self, member: Member) -> dict[str, Any]:
        """Convert Member to JSON-serializable dict."""
        return {
            "member_id": member.member_id,
            "role": member.role.value,
            "name": member.name,
            "username": member.username,
            "email": member.email,
            "password_hash": member.password_hash,
            "membership_date": (
                member.membership_date.isoformat() if member.membership_date else None
            ),
        }

    def _dict_to_member(self, data: dict[str, Any]) -> Member:
        """Convert dict to Member."""
        return Member(
            member_id=data["member_id"],
            role=MemberRole(data["role"]),
            name=data["name"],
            username=data["username"],
            email=data["email"],
            password_hash=data["password_hash"],
            membership_date=(
                datetime.fromisoformat(data["membership_date"])
                if data.get("membership_date")
                else None
            ),
        )

    def _load_all(self) -> list[Member]:
        try:
            return [
                self._dict_to_member(json.loads(path.read_text()))
                for path in self.members_dir.glob("*.json")
            ]
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to read member store: {e}")
            raise UnexpectedFailureError("Member store is unavailable") from e

    def _write(self, member: Member) -> None:
        path = self._member_path(member.member_id)
        tmp_path = path.with_suffix(".tmp")
        try:
            tmp_path.write_text(json.dumps(self._member_to_dict(member), indent=2))
            tmp_path.replace(path)
        except OSError as e:
            logger.error(f"Failed to write member {member.member_id}: {e}")
            raise UnexpectedFailureError("Member store is unavailable") from e

    async def find_by_id(self, member_id: int) -> Member | None:
        """Retrieve member from file."""
        path = self._member_path(member_id)

        if not path.exists():
            return None

        try:
            return self._dict_to_member(json.loads(path.read_text()))
        except (OSError, ValueError, KeyError) as e:
            logger.error(f"Failed to read member {member_id}: {e}")
            raise UnexpectedFailureError("Member store is unavailable") from e

    async def find_page(self, page_request: PageRequest) -> Page[Member]:
        """Sort all members in memory and slice out the requested page."""
        sort_by = page_request.sort_by
        if sort_by not in MEMBER_SORT_FIELDS:
            raise UnknownSortFieldError(sort_by)

        def sort_key(member: Member) -> Any:
            value = getattr(member, sort_by)
            return value.value if isinstance(value, MemberRole) else value

        members = sorted(
            self._load_all(),
            key=sort_key,
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
        """Store member, assigning id and membership date when unset."""
        async with self._lock:
            existing = self._load_all()

            for other in existing:
                if other.member_id == member.member_id:
                    continue
                if other.username == member.username or other.email == member.email:
                    raise DuplicateMemberError(
                        "A member with this username or email already exists"
                    )

            if member.member_id is None:
                next_id = max((m.member_id for m in existing), default=0) + 1
                member = replace(member, member_id=next_id)
            if member.membership_date is None:
                member = replace(member, membership_date=datetime.now(UTC))
            elif member.membership_date.tzinfo is None:
                member = replace(
                    member, membership_date=member.membership_date.replace(tzinfo=UTC)
                )

            self._write(member)

        logger.info(f"Saved member {member.member_id}")
        return member

    async def delete(self, member: Member) -> None:
        """Delete member file."""
        path = self._member_path(member.member_id)

        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.error(f"Failed to delete member {member.member_id}: {e}")
            raise UnexpectedFailureError("Member store is unavailable") from e

        logger.info(f"Deleted member {member.member_id}")
