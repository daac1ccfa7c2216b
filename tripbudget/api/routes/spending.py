"""
Spending item management routes.
"""
import logging
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from tripbudget.db.session import get_db
from tripbudget.models.spending import SpendingItem
from tripbudget.schemas.ledger import SpendingItemRecord
from tripbudget.schemas.spending import SpendingItemCreate, SpendingItemUpdate
from tripbudget.services.ledger_provider import LedgerProvider
from tripbudget.api.dependencies import get_ledger_provider
from tripbudget.api.routes.trips import get_trip_or_404, check_member_ids
from tripbudget.api.routes.budget import get_budget_item_or_404, ensure_within_remaining

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/spending", tags=["spending"])


def get_spending_item_or_404(trip_id: str, item_id: str, db: Session) -> SpendingItem:
    """Load a spending item of the trip or fail with 404."""
    item = db.query(SpendingItem).filter(
        SpendingItem.trip_id == trip_id,
        SpendingItem.id == item_id
    ).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Spending item not found"
        )
    return item


@router.get("/{trip_id}/items", response_model=List[SpendingItemRecord])
async def list_spending_items(
    trip_id: str,
    provider: LedgerProvider = Depends(get_ledger_provider)
):
    """List spending items (drafts included) for a trip."""
    return provider.get_spending_items(trip_id)


@router.post("/{trip_id}/items", response_model=SpendingItemRecord, status_code=status.HTTP_201_CREATED)
async def create_spending_item(
    trip_id: str,
    item_data: SpendingItemCreate,
    db: Session = Depends(get_db),
    provider: LedgerProvider = Depends(get_ledger_provider)
):
    """Record a payment, optionally against a budget item."""
    trip = get_trip_or_404(trip_id, db)
    check_member_ids(trip, item_data.member_ids)

    if item_data.budget_item_id:
        budget_item = get_budget_item_or_404(trip_id, item_data.budget_item_id, db)
        if item_data.is_completed:
            ensure_within_remaining(trip_id, budget_item, item_data.amount, provider)

    item = SpendingItem(
        trip_id=trip_id,
        budget_item_id=item_data.budget_item_id,
        name=item_data.name,
        amount=item_data.amount,
        category=item_data.category,
        member_ids=item_data.member_ids,
        is_completed=item_data.is_completed
    )
    db.add(item)
    db.commit()
    db.refresh(item)
    logger.debug(f"Recorded spending item {item.id} on trip {trip_id} (completed={item.is_completed})")

    return item


@router.patch("/{trip_id}/items/{item_id}", response_model=SpendingItemRecord)
async def update_spending_item(
    trip_id: str,
    item_id: str,
    item_data: SpendingItemUpdate,
    db: Session = Depends(get_db),
    provider: LedgerProvider = Depends(get_ledger_provider)
):
    """Update a spending item, e.g. to mark a draft as completed."""
    trip = get_trip_or_404(trip_id, db)
    item = get_spending_item_or_404(trip_id, item_id, db)

    if item_data.member_ids is not None:
        check_member_ids(trip, item_data.member_ids)
        item.member_ids = list(item_data.member_ids)
    if item_data.name is not None:
        if not item_data.name.strip():
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Item name is required"
            )
        item.name = item_data.name.strip()
    if item_data.amount is not None:
        item.amount = item_data.amount
    if item_data.category is not None:
        item.category = item_data.category
    if item_data.is_completed is not None:
        item.is_completed = item_data.is_completed

    if item.is_completed and item.budget_item_id:
        budget_item = get_budget_item_or_404(trip_id, item.budget_item_id, db)
        ensure_within_remaining(trip_id, budget_item, item.amount, provider, exclude_spending_id=item.id)

    db.commit()
    db.refresh(item)

    return item


@router.delete("/{trip_id}/items/{item_id}")
async def delete_spending_item(
    trip_id: str,
    item_id: str,
    db: Session = Depends(get_db)
):
    """Delete a spending item."""
    get_trip_or_404(trip_id, db)
    item = get_spending_item_or_404(trip_id, item_id, db)
    db.delete(item)
    db.commit()

    return {"message": "Spending item deleted successfully"}
