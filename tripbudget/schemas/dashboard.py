"""
Pydantic schemas for balances and the trip dashboard.
"""
from pydantic import BaseModel
from typing import List
from decimal import Decimal
from tripbudget.schemas.budget import ItemRemaining, CategoryTotal


class MemberBalance(BaseModel):
    """Per-member planned share, spent share and the difference."""
    budgeted: Decimal = Decimal(0)
    spent: Decimal = Decimal(0)
    remaining: Decimal = Decimal(0)  # budgeted - spent, negative when over budget


class TripTotals(BaseModel):
    """Trip-level budget aggregates."""
    total_budgeted: Decimal
    total_spent: Decimal  # Completed spending only
    remaining_budget: Decimal


class BudgetComparison(BaseModel):
    """Planned vs actual spending, rounded for display."""
    total_budgeted: Decimal
    total_spent: Decimal
    difference: Decimal  # Absolute gap between plan and actual
    is_over_budget: bool
    verdict: str


class MemberCard(BaseModel):
    """Schema for one member card on the dashboard."""
    member_id: str
    name: str
    budgeted: Decimal
    spent: Decimal
    remaining: Decimal


class DashboardResponse(BaseModel):
    """Schema for the trip dashboard."""
    trip_id: str
    trip_name: str
    currency_symbol: str
    members: List[MemberCard]
    totals: TripTotals
    comparison: BudgetComparison
    remaining_items: List[ItemRemaining] = []
    budget_categories: List[CategoryTotal] = []  # Planned spending by category
    spending_categories: List[CategoryTotal] = []  # Completed spending by category
