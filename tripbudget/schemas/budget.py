"""
Pydantic schemas for budget items and budget summaries.
"""
from pydantic import AfterValidator, BaseModel, Field, field_validator
from typing import Annotated, List, Optional
from decimal import Decimal
from tripbudget.models.budget import ExpenseCategory
from tripbudget.schemas.ledger import BudgetItemRecord


def check_member_ids(v: List[str]) -> List[str]:
    """Item payloads need at least one member. Duplicates are dropped."""
    unique = list(dict.fromkeys(v))
    if not unique:
        raise ValueError("Select at least one member")
    return unique


# Same precision as the Numeric(15, 2) amount columns
PositiveAmount = Annotated[Decimal, Field(gt=0, max_digits=15, decimal_places=2)]
MemberIdList = Annotated[List[str], AfterValidator(check_member_ids)]


class BudgetItemCreate(BaseModel):
    """Schema for budget item creation."""
    name: str
    amount: PositiveAmount
    category: ExpenseCategory = ExpenseCategory.MISCELLANEOUS
    member_ids: MemberIdList
    is_unplanned: bool = False

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        """Item names must not be blank."""
        if not v.strip():
            raise ValueError("Item name is required")
        return v.strip()


class RecordSpendRequest(BaseModel):
    """Schema for marking a budget item as spent. Defaults to its remaining amount."""
    amount: Optional[PositiveAmount] = None
    member_ids: Optional[MemberIdList] = None  # Defaults to the budget item's members


class ItemRemaining(BaseModel):
    """Schema for one row of the remaining budget items table."""
    item: BudgetItemRecord
    spent: Decimal  # Completed spending matched to this item
    remaining: Decimal  # May be negative when over-spent
    is_over_budget: bool


class CategoryTotal(BaseModel):
    """Schema for category breakdown item."""
    category: ExpenseCategory
    total_amount: Decimal
    item_count: int
    percentage: float  # Percentage of the grand total (0-100)
