"""
Member entity and pagination types.

``Member`` is what the stores persist. It is never handed to API callers
directly: the transfer shapes in ``libraryman.api.v1.members`` drop the
password hash.
"""

import math
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Generic, Literal, TypeVar

T = TypeVar("T")
U = TypeVar("U")

SortDirection = Literal["asc", "desc"]


class MemberRole(str, Enum):
    """Access level of a library account."""

    USER = "USER"
    LIBRARIAN = "LIBRARIAN"
    ADMIN = "ADMIN"


@dataclass
class Member:
    """
    Library account record.

    Attributes:
        member_id: Store-assigned identifier, None until first persisted
        role: Account role
        name: Display name
        username: Login name (uniqueness enforced by the store)
        email: Contact address (uniqueness enforced by the store)
        password_hash: One-way hash produced by a PasswordVerifier
        membership_date: When the account was opened, None until persisted
    """

    member_id: int | None
    role: MemberRole
    name: str
    username: str
    email: str
    password_hash: str
    membership_date: datetime | None = None


# Attribute names a store may sort members by
MEMBER_SORT_FIELDS: frozenset[str] = frozenset(
    {"member_id", "role", "name", "username", "email", "membership_date"}
)


@dataclass(frozen=True)
class PageRequest:
    """Zero-based page selection with an optional sort key."""

    page: int = 0
    size: int = 5
    sort_by: str = "member_id"
    sort_dir: SortDirection = "asc"

    @property
    def offset(self) -> int:
        return self.page * self.size


@dataclass
class Page(Generic[T]):
    """One page of results plus the totals needed to navigate the rest."""

    content: list[T]
    page: int
    size: int
    total_elements: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        self.total_pages = (
            math.ceil(self.total_elements / self.size) if self.size > 0 else 0
        )

    def map(self, fn: Callable[[T], U]) -> "Page[U]":
        """Return the same page with ``fn`` applied to every item."""
        return Page(
            content=[fn(item) for item in self.content],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )
