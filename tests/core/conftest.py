"""Core test fixtures — a fixed clock and a small populated AppState.

Invariants:
    - Pure fixtures: no IO, no DB, no event loop
    - NOW is timezone-aware UTC, like the request clock
"""

import pytest

from shipyard.core.app_state import AppState
from shipyard.core.catalog import add_listing
from shipyard.core.credentials import register
from shipyard.core.records import ListingDraft

from tests.core.sample_data import NOW, STRONG_PASSWORD


@pytest.fixture
def state():
    return AppState()


@pytest.fixture
def seller(state):
    return register(state, "Ada Shipwright", "ada#1234", "ada@example.com", STRONG_PASSWORD, NOW)


@pytest.fixture
def buyer(state):
    return register(state, "Bo Trader", "bo#5678", "bo@example.com", STRONG_PASSWORD, NOW)


@pytest.fixture
def listing(state, seller):
    draft = ListingDraft(
        name="Falcon Hauler", price=1200, category="transport",
        description="Fast cargo ship", tags="@fast cargo",
    )
    return add_listing(state, draft, seller, NOW)
