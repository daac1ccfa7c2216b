"""
Report formatting for dashboards and settlement exports.

Everything upstream works at full Decimal precision; amounts are rounded to
two decimal places only here.
"""
from datetime import date
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional, Sequence, Union
from tripbudget.core.utils import report_file_name
from tripbudget.schemas.ledger import TripRecord, BudgetItemRecord, SpendingItemRecord
from tripbudget.schemas.budget import CategoryTotal
from tripbudget.schemas.dashboard import (
    MemberBalance, TripTotals, BudgetComparison, MemberCard, DashboardResponse
)
from tripbudget.schemas.settlement import MemberShareLine, SettlementLine, SettlementReport
from tripbudget.services.balance_service import (
    ContributionBasis, compute_balances, compute_trip_totals, completed_spending,
    sum_amounts, remaining_budget_items, category_breakdown
)
from tripbudget.services.settlement_service import Transfer, calculate_settlement

CENT = Decimal("0.01")
ALL_SETTLED_MESSAGE = "✓ All settled!"
DEFAULT_CURRENCY_SYMBOL = "₹"


def round_money(value: Union[Decimal, int]) -> Decimal:
    """Round an amount to 2 decimal places for display."""
    rounded = Decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)
    # Avoid showing "-0.00"
    return rounded if rounded != 0 else abs(rounded)


def format_money(value: Union[Decimal, int], currency_symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Render an amount with the currency symbol."""
    return f"{currency_symbol}{round_money(value)}"


def format_summary(
    trip: TripRecord,
    items: Sequence[Union[BudgetItemRecord, SpendingItemRecord]],
    settlements: Sequence[Transfer],
    balances: Dict[str, MemberBalance],
    basis: ContributionBasis = ContributionBasis.BUDGETED,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    generated_on: Optional[date] = None
) -> SettlementReport:
    """
    Turn settlement results into a display/export-ready summary.

    items are the expenses the report covers (budget items, or spending
    items for a spending report; drafts are skipped). The member breakdown
    shows each member's contribution for the chosen basis.
    """
    basis = ContributionBasis(basis)
    covered = [item for item in items if getattr(item, "is_completed", True)]
    total_expenses = sum_amounts(covered)
    member_count = len(trip.members)
    per_person_share = total_expenses / member_count if member_count else Decimal(0)

    breakdown = []
    for member in trip.members:
        balance = balances.get(member.id, MemberBalance())
        total = balance.spent if basis == ContributionBasis.SPENT else balance.budgeted
        breakdown.append(MemberShareLine(member_id=member.id, name=member.name, total=round_money(total)))

    lines = []
    for transfer in settlements:
        amount = round_money(transfer.amount)
        lines.append(SettlementLine(
            from_member_id=transfer.from_member_id,
            from_name=transfer.from_name,
            to_member_id=transfer.to_member_id,
            to_name=transfer.to_name,
            amount=amount,
            text=f"{transfer.from_name} pays {currency_symbol}{amount} to {transfer.to_name}"
        ))

    all_settled = not lines

    # Create summary text
    summary_lines = [
        trip.name,
        f"Total expenses: {format_money(total_expenses, currency_symbol)}",
        f"Members: {member_count}",
        f"Per person share: {format_money(per_person_share, currency_symbol)}",
        "\nMember breakdown:",
    ]
    for row in breakdown:
        summary_lines.append(f"  {row.name}: {currency_symbol}{row.total}")
    summary_lines.append("\nSettlement:")
    if all_settled:
        summary_lines.append(f"  {ALL_SETTLED_MESSAGE}")
    for line in lines:
        summary_lines.append(f"  {line.text}")
    if generated_on:
        summary_lines.append(f"\nGenerated: {generated_on.strftime('%d/%m/%Y')}")

    return SettlementReport(
        trip_id=trip.id,
        trip_name=trip.name,
        basis=basis.value,
        currency_symbol=currency_symbol,
        total_expenses=round_money(total_expenses),
        member_count=member_count,
        per_person_share=round_money(per_person_share),
        member_breakdown=breakdown,
        settlements=lines,
        all_settled=all_settled,
        settled_message=ALL_SETTLED_MESSAGE if all_settled else None,
        summary="\n".join(summary_lines),
        file_name=report_file_name(trip.name),
        generated_on=generated_on
    )


def build_settlement_report(
    trip: TripRecord,
    budget_items: Sequence[BudgetItemRecord],
    spending_items: Sequence[SpendingItemRecord],
    basis: ContributionBasis = ContributionBasis.BUDGETED,
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
    generated_on: Optional[date] = None
) -> SettlementReport:
    """Run the settlement for a snapshot and format it."""
    calculation = calculate_settlement(trip, budget_items, spending_items, basis)
    if calculation.basis == ContributionBasis.SPENT:
        items: List = completed_spending(spending_items)
    else:
        items = list(budget_items)
    return format_summary(
        trip,
        items,
        calculation.transfers,
        calculation.balances,
        basis=calculation.basis,
        currency_symbol=currency_symbol,
        generated_on=generated_on
    )


def format_budget_comparison(totals: TripTotals) -> BudgetComparison:
    """Compare planned and actual spending."""
    difference = totals.total_budgeted - totals.total_spent
    return BudgetComparison(
        total_budgeted=round_money(totals.total_budgeted),
        total_spent=round_money(totals.total_spent),
        difference=round_money(abs(difference)),
        is_over_budget=difference < 0,
        verdict="Saved money!" if difference >= 0 else "Spent more than planned"
    )


def _rounded_categories(rows: List[CategoryTotal]) -> List[CategoryTotal]:
    return [row.model_copy(update={"total_amount": round_money(row.total_amount)}) for row in rows]


def build_dashboard(
    trip: TripRecord,
    budget_items: Sequence[BudgetItemRecord],
    spending_items: Sequence[SpendingItemRecord],
    currency_symbol: str = DEFAULT_CURRENCY_SYMBOL
) -> DashboardResponse:
    """Assemble member cards, totals and the remaining-items table for a trip.

    All amounts are rounded for display; the comparison is worked out from
    the unrounded totals.
    """
    balances = compute_balances(trip, budget_items, spending_items)
    totals = compute_trip_totals(budget_items, spending_items)
    names = {member.id: member.name for member in trip.members}

    cards = [
        MemberCard(
            member_id=member_id,
            name=names.get(member_id, "Unknown"),
            budgeted=round_money(balance.budgeted),
            spent=round_money(balance.spent),
            remaining=round_money(balance.remaining)
        )
        for member_id, balance in balances.items()
    ]
    remaining_items = [
        row.model_copy(update={"spent": round_money(row.spent), "remaining": round_money(row.remaining)})
        for row in remaining_budget_items(budget_items, spending_items)
    ]

    return DashboardResponse(
        trip_id=trip.id,
        trip_name=trip.name,
        currency_symbol=currency_symbol,
        members=cards,
        totals=TripTotals(
            total_budgeted=round_money(totals.total_budgeted),
            total_spent=round_money(totals.total_spent),
            remaining_budget=round_money(totals.remaining_budget)
        ),
        comparison=format_budget_comparison(totals),
        remaining_items=remaining_items,
        budget_categories=_rounded_categories(category_breakdown(budget_items)),
        spending_categories=_rounded_categories(category_breakdown(spending_items))
    )
