"""
Dashboard routes.
"""
from fastapi import APIRouter, Depends
from tripbudget.core.config import settings
from tripbudget.schemas.dashboard import DashboardResponse
from tripbudget.services.ledger_provider import LedgerProvider
from tripbudget.services.report_service import build_dashboard
from tripbudget.api.dependencies import get_ledger_provider

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/{trip_id}", response_model=DashboardResponse)
async def get_dashboard(
    trip_id: str,
    provider: LedgerProvider = Depends(get_ledger_provider)
):
    """Get member balances, budget totals and remaining items for a trip."""
    snapshot = provider.get_snapshot(trip_id)
    return build_dashboard(
        snapshot.trip,
        snapshot.budget_items,
        snapshot.spending_items,
        currency_symbol=settings.CURRENCY_SYMBOL
    )
