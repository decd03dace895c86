"""
Domain layer - business entities and rules.

This package contains:
- Models: Member entity, roles and pagination types
- Services: Capability interfaces the member workflows depend on
- Exceptions: Domain-specific error taxonomy
"""
