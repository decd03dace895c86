"""
Process-wide cache of member lookups.

Entries are filled by reads and only ever removed by writers: nothing
updates a cached view in place. One instance is created per application
in the lifespan handler and injected wherever members are read or written.
"""

import time
from dataclasses import dataclass

from libraryman.api.v1.members.response import MemberView
from libraryman.core.logging import logger


@dataclass(frozen=True)
class CacheEntry:
    view: MemberView
    expires_at: float | None

    def is_expired(self, now: float) -> bool:
        return self.expires_at is not None and now >= self.expires_at


class MemberLookupCache:
    """Member id to MemberView snapshots, with expiry and a size bound."""

    def __init__(self, ttl_seconds: int = 600, max_entries: int = 10_000):
        """
        Args:
            ttl_seconds: Lifetime of an entry; 0 keeps entries until evicted
            max_entries: Oldest entries are dropped beyond this size
        """
        if max_entries <= 0:
            raise ValueError("max_entries must be positive")
        self.ttl_seconds = ttl_seconds
        self.max_entries = max_entries
        self._entries: dict[int, CacheEntry] = {}

    def get(self, member_id: int) -> MemberView | None:
        entry = self._entries.get(member_id)
        if entry is None:
            return None
        if entry.is_expired(time.monotonic()):
            self._entries.pop(member_id, None)
            return None
        return entry.view

    def put(self, member_id: int, view: MemberView) -> None:
        expires_at = time.monotonic() + self.ttl_seconds if self.ttl_seconds else None
        self._entries.pop(member_id, None)
        self._entries[member_id] = CacheEntry(view=view, expires_at=expires_at)

        while len(self._entries) > self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]

    def evict(self, member_id: int) -> None:
        if self._entries.pop(member_id, None) is not None:
            logger.debug(f"Evicted cached member {member_id}")

    def clear(self) -> None:
        count = len(self._entries)
        self._entries.clear()
        logger.info(f"Cleared {count} member cache entries")

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, member_id: object) -> bool:
        return member_id in self._entries
