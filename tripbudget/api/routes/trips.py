"""
Trip and member management routes.
"""
import logging
import secrets
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from tripbudget.db.session import get_db
from tripbudget.models.trip import Trip, TripMember, MemberStatus
from tripbudget.models.budget import BudgetItem
from tripbudget.models.spending import SpendingItem
from tripbudget.schemas.ledger import MemberRecord
from tripbudget.schemas.trip import TripCreate, TripResponse, MemberCreate, MemberUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/trips", tags=["trips"])


def get_trip_or_404(trip_id: str, db: Session) -> Trip:
    """Load a trip or fail with 404."""
    trip = db.query(Trip).filter(Trip.id == trip_id).first()
    if not trip:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Trip not found"
        )
    return trip


def get_member_or_404(trip_id: str, member_id: str, db: Session) -> TripMember:
    """Load a member of the trip or fail with 404."""
    member = db.query(TripMember).filter(
        TripMember.trip_id == trip_id,
        TripMember.id == member_id
    ).first()
    if not member:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Member not found"
        )
    return member


def check_member_ids(trip: Trip, member_ids: list):
    """Reject member ids that are not on the trip."""
    known = {member.id for member in trip.members}
    unknown = [member_id for member_id in member_ids if member_id not in known]
    if unknown:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unknown member ids: {', '.join(unknown)}"
        )


def generate_join_code(db: Session) -> str:
    """Generate a join code not used by any other trip."""
    while True:
        code = secrets.token_hex(3).upper()
        if not db.query(Trip).filter(Trip.join_code == code).first():
            return code


@router.post("", response_model=TripResponse, status_code=status.HTTP_201_CREATED)
async def create_trip(
    trip_data: TripCreate,
    db: Session = Depends(get_db)
):
    """Create a new trip. The first member is the owner."""
    new_trip = Trip(name=trip_data.name, join_code=generate_join_code(db))
    db.add(new_trip)
    db.flush()

    for position, name in enumerate(trip_data.member_names):
        db.add(TripMember(
            trip_id=new_trip.id,
            name=name,
            status=MemberStatus.OWNER if position == 0 else MemberStatus.JOINED,
            position=position
        ))

    db.commit()
    db.refresh(new_trip)
    logger.info(f"Created trip {new_trip.id} with {len(trip_data.member_names)} members")

    return new_trip


@router.get("/{trip_id}", response_model=TripResponse)
async def get_trip(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Get trip details with members."""
    return get_trip_or_404(trip_id, db)


@router.delete("/{trip_id}")
async def delete_trip(
    trip_id: str,
    db: Session = Depends(get_db)
):
    """Delete a trip with all its members and items."""
    trip = get_trip_or_404(trip_id, db)
    db.delete(trip)
    db.commit()

    return {"message": "Trip deleted successfully"}


@router.post("/{trip_id}/members", response_model=MemberRecord, status_code=status.HTTP_201_CREATED)
async def add_member(
    trip_id: str,
    member_data: MemberCreate,
    db: Session = Depends(get_db)
):
    """Add a member to the trip."""
    trip = get_trip_or_404(trip_id, db)

    if member_data.status == MemberStatus.OWNER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A trip has exactly one owner"
        )

    position = max((member.position for member in trip.members), default=-1) + 1
    member = TripMember(
        trip_id=trip_id,
        name=member_data.name,
        email=member_data.email,
        status=member_data.status,
        position=position
    )
    db.add(member)
    db.commit()
    db.refresh(member)

    return member


@router.patch("/{trip_id}/members/{member_id}", response_model=MemberRecord)
async def update_member(
    trip_id: str,
    member_id: str,
    member_data: MemberUpdate,
    db: Session = Depends(get_db)
):
    """Rename a member or change its status. The owner's status is fixed."""
    get_trip_or_404(trip_id, db)
    member = get_member_or_404(trip_id, member_id, db)

    if member_data.status is not None and member_data.status != member.status:
        if member.status == MemberStatus.OWNER:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Owner status cannot be changed"
            )
        if member_data.status == MemberStatus.OWNER:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="A trip has exactly one owner"
            )
        member.status = member_data.status

    if member_data.name is not None:
        if not member_data.name.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Member name is required"
            )
        member.name = member_data.name.strip()
    if member_data.email is not None:
        member.email = member_data.email

    db.commit()
    db.refresh(member)

    return member


@router.delete("/{trip_id}/members/{member_id}")
async def remove_member(
    trip_id: str,
    member_id: str,
    db: Session = Depends(get_db)
):
    """Remove a member from the trip. The owner cannot be removed."""
    get_trip_or_404(trip_id, db)
    member = get_member_or_404(trip_id, member_id, db)

    if member.status == MemberStatus.OWNER:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="The trip owner cannot be removed"
        )

    # Items keep member ids in JSON, so the reference check happens here
    items = db.query(BudgetItem).filter(BudgetItem.trip_id == trip_id).all()
    items += db.query(SpendingItem).filter(SpendingItem.trip_id == trip_id).all()
    if any(member_id in item.member_ids for item in items):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail="Member is assigned to budget or spending items"
        )

    db.delete(member)
    db.commit()

    return {"message": "Member removed successfully"}
