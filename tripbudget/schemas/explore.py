"""
Pydantic schemas for explore-mode snapshots sent by the client.
"""
from pydantic import model_validator
from typing import List
from tripbudget.schemas.budget import PositiveAmount, MemberIdList
from tripbudget.schemas.ledger import BudgetItemRecord, SpendingItemRecord, LedgerSnapshot


class ExploreBudgetItem(BudgetItemRecord):
    """Budget item from a client snapshot, validated like a created item."""
    amount: PositiveAmount
    member_ids: MemberIdList


class ExploreSpendingItem(SpendingItemRecord):
    """Spending item from a client snapshot, validated like a created item."""
    amount: PositiveAmount
    member_ids: MemberIdList


class ExploreSnapshot(LedgerSnapshot):
    """Client-held trip snapshot. Every item member must be on the trip."""
    budget_items: List[ExploreBudgetItem] = []
    spending_items: List[ExploreSpendingItem] = []

    @model_validator(mode="after")
    def members_on_trip(self):
        known = {member.id for member in self.trip.members}
        unknown = []
        for item in [*self.budget_items, *self.spending_items]:
            for member_id in item.member_ids:
                if member_id not in known and member_id not in unknown:
                    unknown.append(member_id)
        if unknown:
            raise ValueError(f"Unknown member ids: {', '.join(unknown)}")
        return self
