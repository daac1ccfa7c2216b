"""
Pydantic schemas for settlement reports.
"""
from pydantic import BaseModel
from typing import List, Optional
from datetime import date
from decimal import Decimal


class MemberShareLine(BaseModel):
    """Schema for one row of the member breakdown."""
    member_id: str
    name: str
    total: Decimal  # Rounded to 2 decimal places


class SettlementLine(BaseModel):
    """Schema for a single transfer in a settlement report."""
    from_member_id: Optional[str] = None
    from_name: str
    to_member_id: Optional[str] = None
    to_name: str
    amount: Decimal  # Rounded to 2 decimal places
    text: str  # e.g. "Bob pays ₹50.00 to Alice"


class SettlementReport(BaseModel):
    """Schema for the display/export-ready settlement summary."""
    trip_id: str
    trip_name: str
    basis: str  # "budgeted" or "spent"
    currency_symbol: str
    total_expenses: Decimal
    member_count: int
    per_person_share: Decimal
    member_breakdown: List[MemberShareLine] = []
    settlements: List[SettlementLine] = []
    all_settled: bool
    settled_message: Optional[str] = None  # "✓ All settled!" when there is nothing to transfer
    summary: str
    file_name: str
    generated_on: Optional[date] = None
