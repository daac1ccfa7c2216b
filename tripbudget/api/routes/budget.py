"""
Budget item management routes.
"""
from decimal import Decimal
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List, Optional
from tripbudget.db.session import get_db
from tripbudget.models.budget import BudgetItem
from tripbudget.models.spending import SpendingItem
from tripbudget.schemas.ledger import BudgetItemRecord, SpendingItemRecord
from tripbudget.schemas.budget import BudgetItemCreate, ItemRemaining, RecordSpendRequest
from tripbudget.services.balance_service import item_remaining, remaining_budget_items
from tripbudget.services.ledger_provider import LedgerProvider
from tripbudget.api.dependencies import get_ledger_provider
from tripbudget.api.routes.trips import get_trip_or_404, check_member_ids

router = APIRouter(prefix="/budget", tags=["budget"])


def get_budget_item_or_404(trip_id: str, item_id: str, db: Session) -> BudgetItem:
    """Load a budget item of the trip or fail with 404."""
    item = db.query(BudgetItem).filter(
        BudgetItem.trip_id == trip_id,
        BudgetItem.id == item_id
    ).first()
    if not item:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Budget item not found"
        )
    return item


def remaining_for_item(
    trip_id: str,
    budget_item: BudgetItem,
    provider: LedgerProvider,
    exclude_spending_id: Optional[str] = None
) -> Decimal:
    """Remaining balance of a budget item, optionally ignoring one spending item."""
    spending_items = [
        item for item in provider.get_spending_items(trip_id)
        if item.id != exclude_spending_id
    ]
    return item_remaining(BudgetItemRecord.model_validate(budget_item), spending_items)


def ensure_within_remaining(
    trip_id: str,
    budget_item: BudgetItem,
    amount: Decimal,
    provider: LedgerProvider,
    exclude_spending_id: Optional[str] = None
):
    """Reject completed spending larger than what is left on its budget item."""
    remaining = remaining_for_item(trip_id, budget_item, provider, exclude_spending_id)
    if amount > remaining:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Amount exceeds remaining budget for '{budget_item.name}' ({remaining:.2f} left)"
        )


@router.get("/{trip_id}/items", response_model=List[BudgetItemRecord])
async def list_budget_items(
    trip_id: str,
    provider: LedgerProvider = Depends(get_ledger_provider)
):
    """List budget items for a trip."""
    return provider.get_budget_items(trip_id)


@router.post("/{trip_id}/items", response_model=BudgetItemRecord, status_code=status.HTTP_201_CREATED)
async def create_budget_item(
    trip_id: str,
    item_data: BudgetItemCreate,
    db: Session = Depends(get_db)
):
    """Add a planned expense to the trip."""
    trip = get_trip_or_404(trip_id, db)
    check_member_ids(trip, item_data.member_ids)

    item = BudgetItem(
        trip_id=trip_id,
        name=item_data.name,
        amount=item_data.amount,
        category=item_data.category,
        member_ids=item_data.member_ids,
        is_unplanned=item_data.is_unplanned
    )
    db.add(item)
    db.commit()
    db.refresh(item)

    return item


@router.delete("/{trip_id}/items/{item_id}")
async def delete_budget_item(
    trip_id: str,
    item_id: str,
    db: Session = Depends(get_db)
):
    """Delete a budget item. Spending recorded against it is kept but unlinked."""
    get_trip_or_404(trip_id, db)
    item = get_budget_item_or_404(trip_id, item_id, db)

    db.query(SpendingItem).filter(
        SpendingItem.budget_item_id == item_id
    ).update({SpendingItem.budget_item_id: None}, synchronize_session=False)
    db.delete(item)
    db.commit()

    return {"message": "Budget item deleted successfully"}


@router.get("/{trip_id}/remaining", response_model=List[ItemRemaining])
async def get_remaining_budget(
    trip_id: str,
    provider: LedgerProvider = Depends(get_ledger_provider)
):
    """Get what is left on each budget item after completed spending."""
    return remaining_budget_items(
        provider.get_budget_items(trip_id),
        provider.get_spending_items(trip_id)
    )


@router.post(
    "/{trip_id}/items/{item_id}/spend",
    response_model=SpendingItemRecord,
    status_code=status.HTTP_201_CREATED
)
async def record_budget_item_spent(
    trip_id: str,
    item_id: str,
    spend: Optional[RecordSpendRequest] = None,
    db: Session = Depends(get_db),
    provider: LedgerProvider = Depends(get_ledger_provider)
):
    """Mark a planned item as spent, recording its remaining amount by default."""
    trip = get_trip_or_404(trip_id, db)
    budget_item = get_budget_item_or_404(trip_id, item_id, db)
    spend = spend or RecordSpendRequest()

    remaining = remaining_for_item(trip_id, budget_item, provider)
    amount = spend.amount if spend.amount is not None else remaining
    if amount <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"'{budget_item.name}' is already fully spent"
        )
    if amount > remaining:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Amount exceeds remaining budget for '{budget_item.name}' ({remaining:.2f} left)"
        )

    member_ids = spend.member_ids or list(budget_item.member_ids)
    check_member_ids(trip, member_ids)

    spending_item = SpendingItem(
        trip_id=trip_id,
        budget_item_id=budget_item.id,
        name=budget_item.name,
        amount=amount,
        category=budget_item.category,
        member_ids=member_ids,
        is_completed=True
    )
    db.add(spending_item)
    db.commit()
    db.refresh(spending_item)

    return spending_item
