"""
Spending item model for actual payments.
"""
from sqlalchemy import Column, String, Numeric, ForeignKey, Boolean, JSON, Enum as SQLEnum
from sqlalchemy.orm import relationship
from tripbudget.db.base import BaseModel
from tripbudget.models.budget import ExpenseCategory


class SpendingItem(BaseModel):
    """Actual payment event, optionally drawn against a budget item."""
    __tablename__ = "spending_items"

    trip_id = Column(String(36), ForeignKey("trips.id"), nullable=False, index=True)
    budget_item_id = Column(String(36), ForeignKey("budget_items.id"), nullable=True, index=True)
    name = Column(String(200), nullable=False)
    amount = Column(Numeric(15, 2), nullable=False)
    category = Column(SQLEnum(ExpenseCategory), nullable=False, default=ExpenseCategory.MISCELLANEOUS)
    member_ids = Column(JSON, nullable=False)  # Members who actually paid
    is_completed = Column(Boolean, default=False, nullable=False)  # Drafts have no financial effect

    # Relationships
    trip = relationship("Trip", back_populates="spending_items")
    budget_item = relationship("BudgetItem", back_populates="spending_items")
