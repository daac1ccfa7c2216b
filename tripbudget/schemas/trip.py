"""
Pydantic schemas for Trip and member payloads.
"""
from pydantic import BaseModel, EmailStr, field_validator
from typing import List, Optional
from datetime import datetime
from tripbudget.models.trip import MemberStatus
from tripbudget.schemas.ledger import MemberRecord


class MemberCreate(BaseModel):
    """Schema for adding a member to a trip."""
    name: str
    email: Optional[EmailStr] = None
    status: MemberStatus = MemberStatus.INVITED

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v):
        """Member names must not be blank."""
        if not v.strip():
            raise ValueError("Member name is required")
        return v.strip()


class MemberUpdate(BaseModel):
    """Schema for renaming a member or changing its status."""
    name: Optional[str] = None
    email: Optional[EmailStr] = None
    status: Optional[MemberStatus] = None


class TripCreate(BaseModel):
    """Schema for trip creation. The first member becomes the owner."""
    name: str
    member_names: List[str]

    @field_validator("name")
    @classmethod
    def name_min_length(cls, v):
        """Trip names need at least 3 characters."""
        if len(v.strip()) < 3:
            raise ValueError("Trip name must be at least 3 characters")
        return v.strip()

    @field_validator("member_names")
    @classmethod
    def fill_member_names(cls, v):
        """Require 1-20 members; blank names become 'Member N'."""
        if not 1 <= len(v) <= 20:
            raise ValueError("A trip needs between 1 and 20 members")
        return [name.strip() or f"Member {i + 1}" for i, name in enumerate(v)]


class TripResponse(BaseModel):
    """Schema for trip response."""
    id: str
    name: str
    join_code: str
    members: List[MemberRecord] = []
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
