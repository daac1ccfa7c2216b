"""
Settlement report routes.
"""
from datetime import date
from fastapi import APIRouter, Depends
from typing import Optional
from tripbudget.core.config import settings
from tripbudget.schemas.settlement import SettlementReport
from tripbudget.services.balance_service import ContributionBasis
from tripbudget.services.ledger_provider import LedgerProvider
from tripbudget.services.report_service import build_settlement_report
from tripbudget.api.dependencies import get_ledger_provider

router = APIRouter(prefix="/settlement", tags=["settlement"])


@router.get("/{trip_id}", response_model=SettlementReport)
async def get_settlement_report(
    trip_id: str,
    basis: Optional[ContributionBasis] = None,
    generated_on: Optional[date] = None,
    provider: LedgerProvider = Depends(get_ledger_provider)
):
    """Get who owes whom for a trip, ready for display or export."""
    snapshot = provider.get_snapshot(trip_id)
    return build_settlement_report(
        snapshot.trip,
        snapshot.budget_items,
        snapshot.spending_items,
        basis=basis or ContributionBasis(settings.DEFAULT_CONTRIBUTION_BASIS),
        currency_symbol=settings.CURRENCY_SYMBOL,
        generated_on=generated_on
    )
