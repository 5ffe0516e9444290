from datetime import datetime, timezone

import pytest

from time_mcp import TimeMCP


@pytest.fixture
def anyio_backend() -> str:
    """Return the backend name for anyio. Test only against asyncio. Trio is not supported."""
    return "asyncio"


@pytest.fixture
def mcp() -> TimeMCP:
    return TimeMCP()


@pytest.fixture
def fixed_instant() -> datetime:
    """A winter instant: New York on EST, London on GMT."""
    return datetime(2025, 1, 15, 21, 9, 31, 654321, tzinfo=timezone.utc)
