"""Global pytest configuration and fixtures for all tests."""

import os
import tempfile
from dataclasses import replace
from datetime import UTC, datetime

# Settings are read once at import time, so the test environment has to be
# in place before anything from libraryman is imported.
os.environ.update(
    {
        "SECRET_KEY": "test-secret-key-minimum-32-characters-long-for-testing",
        "ENABLE_DOCS": "false",
        "INFRASTRUCTURE_PROVIDER": "local",
        "INFRASTRUCTURE_BASE_DIR": tempfile.mkdtemp(prefix="libraryman-tests-"),
        "PASSWORD_HASH_ITERATIONS": "1000",
        "NOTIFICATION_WEBHOOK_URL": "",
        "LOG_LEVEL": "WARNING",
    }
)

import pytest  # noqa: E402

from libraryman.domain.exceptions import DuplicateMemberError  # noqa: E402
from libraryman.domain.models import (  # noqa: E402
    MEMBER_SORT_FIELDS,
    Member,
    MemberRole,
    Page,
    PageRequest,
)
from libraryman.domain.services import (  # noqa: E402
    NotificationSink,
    ObligationsChecker,
)
from libraryman.infrastructure.repositories.member_repository import (  # noqa: E402
    MemberRepository,
    UnknownSortFieldError,
)
from libraryman.services.member_cache import MemberLookupCache  # noqa: E402
from libraryman.services.password_hasher import Pbkdf2PasswordVerifier  # noqa: E402


class InMemoryMemberRepository(MemberRepository):
    """Dict-backed member store that records every call it receives."""

    def __init__(self):
        self.members: dict[int, Member] = {}
        self.calls: list[tuple[str, int | None]] = []
        self.fail_next_write: Exception | None = None

    async def find_by_id(self, member_id):
        self.calls.append(("find_by_id", member_id))
        member = self.members.get(member_id)
        return replace(member) if member else None

    async def find_page(self, page_request: PageRequest):
        self.calls.append(("find_page", None))
        if page_request.sort_by not in MEMBER_SORT_FIELDS:
            raise UnknownSortFieldError(page_request.sort_by)
        members = sorted(
            self.members.values(),
            key=lambda m: getattr(m, page_request.sort_by),
            reverse=page_request.sort_dir == "desc",
        )
        start = page_request.offset
        return Page(
            content=[replace(m) for m in members[start : start + page_request.size]],
            page=page_request.page,
            size=page_request.size,
            total_elements=len(members),
        )

    async def upsert(self, member):
        self.calls.append(("upsert", member.member_id))
        if self.fail_next_write is not None:
            error, self.fail_next_write = self.fail_next_write, None
            raise error
        for other in self.members.values():
            if other.member_id != member.member_id and (
                other.username == member.username or other.email == member.email
            ):
                raise DuplicateMemberError("duplicate")
        if member.member_id is None:
            member = replace(member, member_id=max(self.members, default=0) + 1)
        if member.membership_date is None:
            member = replace(member, membership_date=datetime.now(UTC))
        self.members[member.member_id] = replace(member)
        return replace(member)

    async def delete(self, member):
        self.calls.append(("delete", member.member_id))
        if self.fail_next_write is not None:
            error, self.fail_next_write = self.fail_next_write, None
            raise error
        self.members.pop(member.member_id, None)


class RecordingNotificationSink(NotificationSink):
    """Keeps (event, member) pairs instead of delivering them."""

    def __init__(self):
        self.events: list[tuple[str, Member]] = []

    async def notify_account_created(self, member):
        self.events.append(("created", replace(member)))

    async def notify_account_updated(self, member):
        self.events.append(("updated", replace(member)))

    async def notify_account_deleted(self, member):
        self.events.append(("deleted", replace(member)))


class StubObligationsChecker(ObligationsChecker):
    """Reports the members listed in ``blocked`` as owing something."""

    def __init__(self, blocked: set[int] | None = None):
        self.blocked = blocked or set()
        self.released: list[int] = []

    async def has_outstanding_obligations(self, member_id):
        return member_id in self.blocked

    async def release_member_records(self, member_id):
        self.released.append(member_id)


@pytest.fixture
def passwords():
    """Fast PBKDF2 verifier."""
    return Pbkdf2PasswordVerifier(iterations=1000)


@pytest.fixture
def member_repo():
    """Empty in-memory member store."""
    return InMemoryMemberRepository()


@pytest.fixture
def member_cache():
    """Fresh member lookup cache."""
    return MemberLookupCache(ttl_seconds=600, max_entries=100)


@pytest.fixture
def notifications():
    """Recording notification sink."""
    return RecordingNotificationSink()


@pytest.fixture
def obligations():
    """Obligations checker with nobody blocked."""
    return StubObligationsChecker()


@pytest.fixture
def make_member(passwords):
    """Build a Member with sensible defaults and a hash of 'secret-pass'."""

    def _make(member_id=None, **overrides) -> Member:
        suffix = member_id if member_id is not None else "new"
        values = {
            "member_id": member_id,
            "role": MemberRole.USER,
            "name": f"Member {suffix}",
            "username": f"member{suffix}",
            "email": f"member{suffix}@example.com",
            "password_hash": passwords.hash("secret-pass"),
            "membership_date": datetime(2024, 1, 15, 9, 30, tzinfo=UTC),
        }
        values.update(overrides)
        return Member(**values)

    return _make
