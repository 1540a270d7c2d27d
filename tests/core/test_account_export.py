"""Account Export — document shape and parsing.

Invariants:
    - The export never contains password material
    - parse_account_export accepts what export_account produces
"""

import json

import pytest

from shipyard.core.account_export import (
    EXPORT_FORMAT_VERSION, export_account, parse_account_export,
)
from shipyard.core.errors import ExportFormatError
from shipyard.core.messaging import send_message
from shipyard.core.preferences import record_purchase, toggle_wishlist
from shipyard.core.records import User

from tests.core.sample_data import NOW


@pytest.fixture
def exported(state, seller, buyer, listing):
    toggle_wishlist(state, buyer, listing.id)
    record_purchase(state, buyer, listing, NOW)
    send_message(state, listing, buyer, "hello", NOW)
    state.custom_search_tags.add("@rare")
    return export_account(state, buyer, NOW)


def test_export_shape(exported, buyer, listing):
    assert exported["format_version"] == EXPORT_FORMAT_VERSION
    assert exported["profile"]["email"] == "bo@example.com"
    assert exported["preferences"]["wishlist"] == [listing.id]
    assert exported["preferences"]["custom_search_tags"] == ["@rare"]
    assert len(exported["messages"]) == 1
    json.dumps(exported)


def test_export_has_no_password_material(exported):
    assert "password_hash" not in exported["profile"]
    assert "password_salt" not in exported["profile"]


def test_export_only_includes_own_conversations(state, seller, buyer, listing):
    send_message(state, listing, buyer, "hello", NOW)
    outsider = User(
        id="x", name="Cy", handle="cy#0001", email="cy@example.com",
        password_hash="", password_salt="", joined_at=NOW,
    )
    assert export_account(state, outsider, NOW)["messages"] == []


def test_parse_round_trip(exported):
    parsed = parse_account_export(json.loads(json.dumps(exported)))
    assert parsed.exported_at == NOW
    assert parsed.purchases[0].price == 1200
    assert parsed.messages[0].body == "hello"
    assert parsed.custom_search_tags == {"@rare"}


@pytest.mark.parametrize("document", [
    [],
    {"format_version": 99},
    {"format_version": EXPORT_FORMAT_VERSION, "exported_at": "2026-01-01T00:00:00Z"},
])
def test_parse_rejects_bad_documents(document):
    with pytest.raises(ExportFormatError):
        parse_account_export(document)
