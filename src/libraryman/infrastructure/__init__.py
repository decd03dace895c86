"""
Infrastructure abstraction layer for storage.

This module provides repository interfaces and implementations for:
- Member records
- Borrowing and fine records (deletion obligations)
- Newsletter subscriptions

Supports multiple providers via factory pattern:
- local: JSON files for development
- aws: DynamoDB via PynamoDB
"""

from libraryman.infrastructure.factory import InfrastructureFactory

__all__ = ["InfrastructureFactory"]
