"""
Trip model for group travel budgeting.
"""
from sqlalchemy import Column, String, Enum as SQLEnum, ForeignKey, Integer
from sqlalchemy.orm import relationship
from tripbudget.db.base import BaseModel
import enum


class MemberStatus(str, enum.Enum):
    """Member status enumeration."""
    OWNER = "owner"
    CO_ORGANIZER = "co-organizer"
    JOINED = "joined"
    INVITED = "invited"
    PENDING = "pending"


class Trip(BaseModel):
    """Trip model representing a shared budgeting workspace."""
    __tablename__ = "trips"

    name = Column(String(200), nullable=False)
    join_code = Column(String(12), unique=True, nullable=False, index=True)

    # Relationships
    members = relationship(
        "TripMember",
        back_populates="trip",
        order_by="TripMember.position",
        cascade="all, delete-orphan"
    )
    budget_items = relationship("BudgetItem", back_populates="trip", cascade="all, delete-orphan")
    spending_items = relationship("SpendingItem", back_populates="trip", cascade="all, delete-orphan")


class TripMember(BaseModel):
    """Member of a trip. Position 0 is the owner."""
    __tablename__ = "trip_members"

    trip_id = Column(String(36), ForeignKey("trips.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(100), nullable=True)
    status = Column(SQLEnum(MemberStatus), default=MemberStatus.JOINED, nullable=False)
    position = Column(Integer, nullable=False, default=0)  # Order within the trip's member list

    # Relationships
    trip = relationship("Trip", back_populates="members")
