"""
Local file-based newsletter subscription repository.

All subscriptions live in a single JSON document keyed by email:
    {base_dir}/
        newsletter.json
"""

import asyncio
import json
from datetime import datetime
from pathlib import Path
from typing import Any

from loguru import logger

from libraryman.domain.exceptions import UnexpectedFailureError
from libraryman.infrastructure.repositories.newsletter_repository import (
    NewsletterRepository,
    NewsletterSubscription,
)


class LocalNewsletterRepository(NewsletterRepository):
    """File-based subscription storage for local development."""

    def __init__(self, base_dir: str = "./.libraryman_data"):
        self.base_dir = Path(base_dir)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self.file_path = self.base_dir / "newsletter.json"
        self._lock = asyncio.Lock()

        logger.info(f"Initialized LocalNewsletterRepository at {self.file_path}")

    def _load(self) -> dict[str, dict[str, Any]]:
        if not self.file_path.exists():
            return {}
        try:
            return json.loads(self.file_path.read_text())
        except (OSError, ValueError) as e:
            logger.error(f"Failed to read newsletter store: {e}")
            raise UnexpectedFailureError("Newsletter store is unavailable") from e

    async def find_by_email(self, email: str) -> NewsletterSubscription | None:
        """Look up subscription in the JSON document."""
        data = self._load().get(email.lower())
        if data is None:
            return None

        return NewsletterSubscription(
            email=data["email"],
            active=data["active"],
            subscribed_at=datetime.fromisoformat(data["subscribed_at"]),
            unsubscribed_at=(
                datetime.fromisoformat(data["unsubscribed_at"])
                if data.get("unsubscribed_at")
                else None
            ),
        )

    async def save(self, subscription: NewsletterSubscription) -> None:
        """Rewrite the JSON document with the subscription replaced."""
        async with self._lock:
            subscriptions = self._load()
            subscriptions[subscription.email.lower()] = {
                "email": subscription.email.lower(),
                "active": subscription.active,
                "subscribed_at": subscription.subscribed_at.isoformat(),
                "unsubscribed_at": (
                    subscription.unsubscribed_at.isoformat()
                    if subscription.unsubscribed_at
                    else None
                ),
            }
            try:
                self.file_path.write_text(json.dumps(subscriptions, indent=2))
            except OSError as e:
                logger.error(f"Failed to write newsletter store: {e}")
                raise UnexpectedFailureError("Newsletter store is unavailable") from e
