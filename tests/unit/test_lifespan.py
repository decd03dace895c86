"""
Unit tests for application lifecycle.
"""

from unittest.mock import MagicMock

import pytest

from libraryman.infrastructure import InfrastructureFactory
from libraryman.lifespan import lifespan
from libraryman.services.member_cache import MemberLookupCache


@pytest.mark.asyncio
async def test_lifespan_creates_state():
    """Test startup attaches the factory and the member cache."""
    mock_app = MagicMock()

    async with lifespan(mock_app):
        assert isinstance(mock_app.state.infrastructure, InfrastructureFactory)
        assert isinstance(mock_app.state.member_cache, MemberLookupCache)
        assert mock_app.state.member_cache.ttl_seconds == 600


@pytest.mark.asyncio
async def test_lifespan_clears_cache_on_shutdown():
    """Test shutdown drops cached member views."""
    mock_app = MagicMock()

    async with lifespan(mock_app):
        cache = mock_app.state.member_cache
        cache._entries[1] = MagicMock()

    assert len(cache) == 0
