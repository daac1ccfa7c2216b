"""
Explore-mode routes computing reports from a client-held trip snapshot.
"""
from datetime import date
from fastapi import APIRouter
from typing import Optional
from tripbudget.core.config import settings
from tripbudget.schemas.explore import ExploreSnapshot
from tripbudget.schemas.dashboard import DashboardResponse
from tripbudget.schemas.settlement import SettlementReport
from tripbudget.services.balance_service import ContributionBasis
from tripbudget.services.ledger_provider import SnapshotLedgerProvider
from tripbudget.services.report_service import build_dashboard, build_settlement_report

router = APIRouter(prefix="/explore", tags=["explore"])


@router.post("/dashboard", response_model=DashboardResponse)
async def explore_dashboard(snapshot: ExploreSnapshot):
    """Build a dashboard for a trip that only exists on the client."""
    provider = SnapshotLedgerProvider(snapshot)
    local = provider.get_snapshot(snapshot.trip.id)
    return build_dashboard(
        local.trip,
        local.budget_items,
        local.spending_items,
        currency_symbol=settings.CURRENCY_SYMBOL
    )


@router.post("/report", response_model=SettlementReport)
async def explore_report(
    snapshot: ExploreSnapshot,
    basis: Optional[ContributionBasis] = None,
    generated_on: Optional[date] = None
):
    """Build a settlement report for a trip that only exists on the client."""
    provider = SnapshotLedgerProvider(snapshot)
    local = provider.get_snapshot(snapshot.trip.id)
    return build_settlement_report(
        local.trip,
        local.budget_items,
        local.spending_items,
        basis=basis or ContributionBasis(settings.DEFAULT_CONTRIBUTION_BASIS),
        currency_symbol=settings.CURRENCY_SYMBOL,
        generated_on=generated_on
    )
