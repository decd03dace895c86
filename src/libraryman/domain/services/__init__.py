"""
Domain services - capability interfaces.

Contracts for password hashing, account notifications and borrowing
obligations. Concrete implementations live in ``libraryman.services``.
"""

from libraryman.domain.services.notifications import NotificationSink
from libraryman.domain.services.obligations import ObligationsChecker
from libraryman.domain.services.passwords import PasswordVerifier

__all__ = ["NotificationSink", "ObligationsChecker", "PasswordVerifier"]
