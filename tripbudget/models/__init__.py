"""Models package - Import all models for SQLAlchemy registration."""
from tripbudget.models.trip import Trip, TripMember, MemberStatus
from tripbudget.models.budget import BudgetItem, ExpenseCategory
from tripbudget.models.spending import SpendingItem

__all__ = [
    "Trip",
    "TripMember",
    "MemberStatus",
    "BudgetItem",
    "ExpenseCategory",
    "SpendingItem",
]
