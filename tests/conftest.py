"""
Shared fixtures for the injury scraper tests.
"""

import pytest

from support import ESPN_PAGE, FakeClock


@pytest.fixture
def espn_page() -> str:
    return ESPN_PAGE


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()
