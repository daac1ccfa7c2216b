"""
Pydantic schemas for spending items.
"""
from pydantic import BaseModel, field_validator
from typing import Optional
from tripbudget.models.budget import ExpenseCategory
from tripbudget.schemas.budget import PositiveAmount, MemberIdList


class SpendingItemCreate(BaseModel):
    """Schema for recording a spending item."""
    budget_item_id: Optional[str] = None  # Absent for unplanned spending
    name: str
    amount: PositiveAmount
    category: ExpenseCategory = ExpenseCategory.MISCELLANEOUS
    member_ids: MemberIdList  # Members who actually paid
    is_completed: bool = True

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        """Item names must not be blank."""
        if not v.strip():
            raise ValueError("Item name is required")
        return v.strip()


class SpendingItemUpdate(BaseModel):
    """Schema for spending item update."""
    name: Optional[str] = None
    amount: Optional[PositiveAmount] = None
    category: Optional[ExpenseCategory] = None
    member_ids: Optional[MemberIdList] = None
    is_completed: Optional[bool] = None
