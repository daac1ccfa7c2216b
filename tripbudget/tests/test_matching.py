"""
Tests for spending-to-budget reconciliation policies.
"""
from tripbudget.services.matching import (
    DEFAULT_MATCH_POLICY, any_of, match_by_budget_item_id, match_by_normalized_name, normalize_name
)


def test_normalize_name():
    """Test names compare without case or extra whitespace."""
    assert normalize_name("  Hotel   Stay ") == "hotel stay"
    assert normalize_name("STRASSE") == normalize_name("straße")


def test_match_by_id(make_budget_item, make_spending_item):
    """Test linked spending matches regardless of its name."""
    hotel = make_budget_item("hotel", 100, ["a"], name="Hotel")
    linked = make_spending_item("s1", 40, ["a"], budget_item_id="hotel", name="Room deposit")
    assert match_by_budget_item_id(linked, hotel)
    assert not match_by_normalized_name(linked, hotel)


def test_match_by_id_other_item(make_budget_item, make_spending_item):
    """Test spending linked elsewhere does not match, even with the same name."""
    hotel = make_budget_item("hotel", 100, ["a"], name="Hotel")
    other = make_spending_item("s1", 40, ["a"], budget_item_id="hotel2", name="Hotel")
    assert not match_by_budget_item_id(other, hotel)
    assert not match_by_normalized_name(other, hotel)
    assert not DEFAULT_MATCH_POLICY(other, hotel)


def test_match_by_name_for_unlinked(make_budget_item, make_spending_item):
    """Test unlinked spending falls back to a case-insensitive name match."""
    hotel = make_budget_item("hotel", 100, ["a"], name="Hotel")
    unlinked = make_spending_item("s1", 40, ["a"], name="  hotel ")
    assert not match_by_budget_item_id(unlinked, hotel)
    assert match_by_normalized_name(unlinked, hotel)
    assert DEFAULT_MATCH_POLICY(unlinked, hotel)


def test_unlinked_different_name(make_budget_item, make_spending_item):
    """Test unlinked spending with another name matches nothing."""
    hotel = make_budget_item("hotel", 100, ["a"], name="Hotel")
    snacks = make_spending_item("s1", 10, ["a"], name="Snacks")
    assert not DEFAULT_MATCH_POLICY(snacks, hotel)


def test_id_only_policy(make_budget_item, make_spending_item):
    """Test a policy built without the name fallback."""
    policy = any_of(match_by_budget_item_id)
    hotel = make_budget_item("hotel", 100, ["a"], name="Hotel")
    assert not policy(make_spending_item("s1", 40, ["a"], name="Hotel"), hotel)
    assert policy(make_spending_item("s2", 40, ["a"], budget_item_id="hotel"), hotel)
