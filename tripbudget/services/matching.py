"""
Policies deciding which spending items draw down a budget item.

A policy is a predicate (spending_item, budget_item) -> bool. Linked spending
matches by id. Older spending records carry no link, so they fall back to a
case-insensitive name match; that fallback can attach spending to the wrong
item when two budget items share a name, and it is logged when it fires.
"""
import logging
from typing import Callable
from tripbudget.schemas.ledger import BudgetItemRecord, SpendingItemRecord

logger = logging.getLogger(__name__)

MatchPolicy = Callable[[SpendingItemRecord, BudgetItemRecord], bool]


def normalize_name(name: str) -> str:
    """Normalize an item name for comparison."""
    return " ".join(name.split()).casefold()


def match_by_budget_item_id(spending_item: SpendingItemRecord, budget_item: BudgetItemRecord) -> bool:
    """Match spending explicitly linked to the budget item."""
    return spending_item.budget_item_id is not None and spending_item.budget_item_id == budget_item.id


def match_by_normalized_name(spending_item: SpendingItemRecord, budget_item: BudgetItemRecord) -> bool:
    """Match unlinked spending whose name equals the budget item's name."""
    if spending_item.budget_item_id is not None:
        return False
    matched = normalize_name(spending_item.name) == normalize_name(budget_item.name)
    if matched:
        logger.debug(
            f"Spending item {spending_item.id} matched budget item {budget_item.id} by name '{budget_item.name}'"
        )
    return matched


def any_of(*policies: MatchPolicy) -> MatchPolicy:
    """Combine policies; a spending item matches if any policy matches."""
    def combined(spending_item: SpendingItemRecord, budget_item: BudgetItemRecord) -> bool:
        return any(policy(spending_item, budget_item) for policy in policies)
    return combined


DEFAULT_MATCH_POLICY: MatchPolicy = any_of(match_by_budget_item_id, match_by_normalized_name)
