"""
Balance aggregation over a trip's budget and spending items.
"""
import enum
import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Sequence, Union
from tripbudget.schemas.ledger import TripRecord, BudgetItemRecord, SpendingItemRecord
from tripbudget.schemas.budget import ItemRemaining, CategoryTotal
from tripbudget.schemas.dashboard import MemberBalance, TripTotals
from tripbudget.services.share_service import per_member_share
from tripbudget.services.matching import MatchPolicy, DEFAULT_MATCH_POLICY

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


class ContributionBasis(str, enum.Enum):
    """Which per-member share counts as what a member paid for the group."""
    BUDGETED = "budgeted"  # Assigned to a planned budget item
    SPENT = "spent"  # Recorded on a completed spending item


def completed_spending(spending_items: Iterable[SpendingItemRecord]) -> List[SpendingItemRecord]:
    """Spending items with a financial effect. Drafts are skipped."""
    return [item for item in spending_items if item.is_completed]


def sum_amounts(items: Iterable[Union[BudgetItemRecord, SpendingItemRecord]]) -> Decimal:
    """Sum item amounts at full precision."""
    return sum((Decimal(item.amount) for item in items), ZERO)


def compute_balances(
    trip: TripRecord,
    budget_items: Sequence[BudgetItemRecord],
    spending_items: Sequence[SpendingItemRecord]
) -> Dict[str, MemberBalance]:
    """
    Fold budget and completed spending items into per-member balances.

    budgeted accumulates each member's share of the budget items they are
    assigned to; spent accumulates their share of completed spending items,
    taken from the spending item's own member_ids (who actually paid may
    differ from who was planned). remaining = budgeted - spent and may be
    negative.

    Every trip member is present in the result, in trip order. Ids found on
    items but not on the trip are appended after them.
    """
    budgeted: Dict[str, Decimal] = {member.id: ZERO for member in trip.members}
    spent: Dict[str, Decimal] = {member.id: ZERO for member in trip.members}

    def track(member_id: str, item_id: str):
        if member_id not in budgeted:
            logger.warning(f"Item {item_id} on trip {trip.id} references unknown member {member_id}")
            budgeted[member_id] = ZERO
            spent[member_id] = ZERO

    for item in budget_items:
        for member_id, share in per_member_share(item.amount, item.member_ids).items():
            track(member_id, item.id)
            budgeted[member_id] += share

    for item in completed_spending(spending_items):
        for member_id, share in per_member_share(item.amount, item.member_ids).items():
            track(member_id, item.id)
            spent[member_id] += share

    return {
        member_id: MemberBalance(
            budgeted=budgeted[member_id],
            spent=spent[member_id],
            remaining=budgeted[member_id] - spent[member_id]
        )
        for member_id in budgeted
    }


def compute_trip_totals(
    budget_items: Sequence[BudgetItemRecord],
    spending_items: Sequence[SpendingItemRecord]
) -> TripTotals:
    """Compute total budgeted, total completed spending and what is left."""
    total_budgeted = sum_amounts(budget_items)
    total_spent = sum_amounts(completed_spending(spending_items))
    return TripTotals(
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        remaining_budget=total_budgeted - total_spent
    )


def matched_spending(
    budget_item: BudgetItemRecord,
    spending_items: Sequence[SpendingItemRecord],
    policy: MatchPolicy = DEFAULT_MATCH_POLICY
) -> List[SpendingItemRecord]:
    """Completed spending items that draw down this budget item."""
    return [item for item in completed_spending(spending_items) if policy(item, budget_item)]


def item_remaining(
    budget_item: BudgetItemRecord,
    spending_items: Sequence[SpendingItemRecord],
    policy: MatchPolicy = DEFAULT_MATCH_POLICY
) -> Decimal:
    """Budget item amount minus matched completed spending. Negative when over-spent."""
    return Decimal(budget_item.amount) - sum_amounts(matched_spending(budget_item, spending_items, policy))


def remaining_budget_items(
    budget_items: Sequence[BudgetItemRecord],
    spending_items: Sequence[SpendingItemRecord],
    policy: MatchPolicy = DEFAULT_MATCH_POLICY
) -> List[ItemRemaining]:
    """Build the remaining-budget table, one row per budget item in input order."""
    rows = []
    for budget_item in budget_items:
        spent = sum_amounts(matched_spending(budget_item, spending_items, policy))
        remaining = Decimal(budget_item.amount) - spent
        rows.append(ItemRemaining(
            item=budget_item,
            spent=spent,
            remaining=remaining,
            is_over_budget=remaining < 0
        ))
    return rows


def category_breakdown(items: Iterable[Union[BudgetItemRecord, SpendingItemRecord]]) -> List[CategoryTotal]:
    """
    Total item amounts per category, largest first.

    Spending items that are not completed are ignored.
    """
    totals: Dict = {}
    counts: Dict = {}
    for item in items:
        if not getattr(item, "is_completed", True):
            continue
        totals[item.category] = totals.get(item.category, ZERO) + Decimal(item.amount)
        counts[item.category] = counts.get(item.category, 0) + 1

    grand_total = sum(totals.values(), ZERO)
    breakdown = [
        CategoryTotal(
            category=category,
            total_amount=total,
            item_count=counts[category],
            percentage=float(total / grand_total * 100) if grand_total > 0 else 0.0
        )
        for category, total in totals.items()
    ]
    breakdown.sort(key=lambda x: x.total_amount, reverse=True)
    return breakdown


def member_contributions(
    balances: Dict[str, MemberBalance],
    basis: ContributionBasis = ContributionBasis.BUDGETED
) -> Dict[str, Decimal]:
    """Pick each member's contribution from their balance for the given basis."""
    basis = ContributionBasis(basis)
    if basis == ContributionBasis.SPENT:
        return {member_id: balance.spent for member_id, balance in balances.items()}
    return {member_id: balance.budgeted for member_id, balance in balances.items()}
