"""
Settlement service for fair settlement calculation.
"""
import logging
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Sequence, Union
from tripbudget.schemas.ledger import TripRecord, MemberRecord, BudgetItemRecord, SpendingItemRecord
from tripbudget.schemas.dashboard import MemberBalance
from tripbudget.services.balance_service import (
    ContributionBasis, compute_balances, member_contributions, completed_spending, sum_amounts
)

logger = logging.getLogger(__name__)

# Balances closer to zero than this are treated as settled
SETTLEMENT_EPSILON = Decimal("0.01")


@dataclass(frozen=True)
class Transfer:
    """Represents a single transfer between members."""
    from_member_id: Optional[str]
    from_name: str
    to_member_id: Optional[str]
    to_name: str
    amount: Decimal


@dataclass
class SettlementCalculation:
    """Inputs and result of one settlement run."""
    basis: ContributionBasis
    total_expenses: Decimal
    member_count: int
    per_person_share: Decimal
    contributions: Dict[str, Decimal] = field(default_factory=dict)
    balances: Dict[str, MemberBalance] = field(default_factory=dict)
    transfers: List[Transfer] = field(default_factory=list)


def solve_settlements(
    members: Sequence[MemberRecord],
    per_person_share: Union[Decimal, int],
    member_contributions: Mapping[str, Decimal],
    epsilon: Decimal = SETTLEMENT_EPSILON
) -> List[Transfer]:
    """
    Produce transfers that bring every member's balance to zero.

    Each member's balance is contribution - per_person_share (positive means
    owed money). Debtors are matched against creditors greedily, largest
    first; ties keep member-list order. Balances within epsilon of zero are
    treated as settled and transfers of epsilon or less are not emitted.
    The result has at most debtors + creditors - 1 transfers.
    """
    per_person_share = Decimal(per_person_share)
    names = {member.id: member.name for member in members}

    balances = [
        [member.id, Decimal(member_contributions.get(member.id, 0)) - per_person_share]
        for member in members
    ]

    # Separate debtors (owe money) and creditors (are owed money)
    debtors = sorted([b for b in balances if b[1] < -epsilon], key=lambda x: x[1])
    creditors = sorted([b for b in balances if b[1] > epsilon], key=lambda x: x[1], reverse=True)

    transfers = []
    debt_idx = 0
    cred_idx = 0

    while debt_idx < len(debtors) and cred_idx < len(creditors):
        debtor_id, debt_amount = debtors[debt_idx]
        creditor_id, cred_amount = creditors[cred_idx]

        # Transfer the minimum of what's owed and what's needed
        settle_amount = min(abs(debt_amount), cred_amount)
        if settle_amount > epsilon:
            transfers.append(Transfer(
                from_member_id=debtor_id,
                from_name=names.get(debtor_id, "Unknown"),
                to_member_id=creditor_id,
                to_name=names.get(creditor_id, "Unknown"),
                amount=settle_amount
            ))

        debtors[debt_idx][1] = debt_amount + settle_amount
        creditors[cred_idx][1] = cred_amount - settle_amount

        if abs(debtors[debt_idx][1]) < epsilon:
            debt_idx += 1
        if abs(creditors[cred_idx][1]) < epsilon:
            cred_idx += 1

    return transfers


def calculate_settlement(
    trip: TripRecord,
    budget_items: Sequence[BudgetItemRecord],
    spending_items: Sequence[SpendingItemRecord],
    basis: ContributionBasis = ContributionBasis.BUDGETED
) -> SettlementCalculation:
    """
    Calculate settlement for a trip snapshot.

    Contributions come from the balance aggregator using the same basis as
    the expense total: planned budget items for BUDGETED, completed spending
    for SPENT. The fair share is that total split evenly over all trip
    members.
    """
    basis = ContributionBasis(basis)
    balances = compute_balances(trip, budget_items, spending_items)
    contributions = member_contributions(balances, basis)

    if basis == ContributionBasis.SPENT:
        total_expenses = sum_amounts(completed_spending(spending_items))
    else:
        total_expenses = sum_amounts(budget_items)

    member_count = len(trip.members)
    per_person_share = total_expenses / member_count if member_count else Decimal(0)

    transfers = solve_settlements(trip.members, per_person_share, contributions)
    logger.debug(
        f"Settlement for trip {trip.id} ({basis.value}): total={total_expenses}, "
        f"members={member_count}, transfers={len(transfers)}"
    )

    return SettlementCalculation(
        basis=basis,
        total_expenses=total_expenses,
        member_count=member_count,
        per_person_share=per_person_share,
        contributions=contributions,
        balances=balances,
        transfers=transfers
    )
