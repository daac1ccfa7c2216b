"""
Pydantic schemas for ledger records consumed by the settlement core.

These mirror the ORM rows but carry no validation of their own: amounts and
member sets are checked when records are created, and again by the share
calculator, which raises InvalidInputError on bad data.
"""
from pydantic import BaseModel, EmailStr
from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from tripbudget.models.trip import MemberStatus
from tripbudget.models.budget import ExpenseCategory


class MemberRecord(BaseModel):
    """A trip member."""
    id: str
    name: str
    email: Optional[EmailStr] = None
    status: MemberStatus = MemberStatus.JOINED

    class Config:
        from_attributes = True


class TripRecord(BaseModel):
    """A trip with its ordered member list. members[0] is the owner."""
    id: str
    name: str
    members: List[MemberRecord] = []
    join_code: Optional[str] = None

    class Config:
        from_attributes = True


class BudgetItemRecord(BaseModel):
    """A planned expense, shared equally among member_ids."""
    id: str
    trip_id: Optional[str] = None  # Snapshot items may omit it
    name: str
    amount: Decimal
    category: ExpenseCategory = ExpenseCategory.MISCELLANEOUS
    member_ids: List[str]
    created_at: Optional[datetime] = None
    is_unplanned: bool = False

    class Config:
        from_attributes = True


class SpendingItemRecord(BaseModel):
    """An actual payment. Only completed items count toward totals."""
    id: str
    trip_id: Optional[str] = None
    budget_item_id: Optional[str] = None
    name: str
    amount: Decimal
    category: ExpenseCategory = ExpenseCategory.MISCELLANEOUS
    member_ids: List[str]
    created_at: Optional[datetime] = None
    is_completed: bool = False

    class Config:
        from_attributes = True


class LedgerSnapshot(BaseModel):
    """Everything the core needs about one trip, as a single document."""
    trip: TripRecord
    budget_items: List[BudgetItemRecord] = []
    spending_items: List[SpendingItemRecord] = []
