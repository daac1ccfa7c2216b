"""
Budget item model for planned trip expenses.
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, Boolean, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
from tripbudget.db.base import BaseModel
import enum


class ExpenseCategory(str, enum.Enum):
    """Expense category enumeration shared by budget and spending items."""
    FOOD = "Food"
    ACCOMMODATION = "Accommodation"
    TRANSPORT = "Transport"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    MISCELLANEOUS = "Miscellaneous"


class BudgetItem(BaseModel):
    """Planned expense shared equally among its members."""
    __tablename__ = "budget_items"

    trip_id = Column(String(36), ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(200), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    category = Column(SQLEnum(ExpenseCategory), nullable=False, default=ExpenseCategory.MISCELLANEOUS)
    member_ids = Column(JSON, nullable=False)  # List of TripMember ids sharing this item
    is_unplanned = Column(Boolean, default=False, nullable=False)

    # Relationships
    trip = relationship("Trip", back_populates="budget_items")
    spending_items = relationship("SpendingItem", back_populates="budget_item")
