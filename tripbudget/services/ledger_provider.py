"""
Ledger data providers supplying trip snapshots to the settlement core.

The core only sees TripRecord / BudgetItemRecord / SpendingItemRecord values;
it does not know whether they came from the database or from a local
snapshot (explore mode).
"""
from abc import ABC, abstractmethod
from typing import List
from sqlalchemy.orm import Session
from tripbudget.core.exceptions import TripNotFoundError
from tripbudget.models.trip import Trip
from tripbudget.models.budget import BudgetItem
from tripbudget.models.spending import SpendingItem
from tripbudget.schemas.ledger import (
    TripRecord, BudgetItemRecord, SpendingItemRecord, LedgerSnapshot
)


class LedgerProvider(ABC):
    """Read contract for trip ledger data."""

    @abstractmethod
    def get_trip(self, trip_id: str) -> TripRecord:
        """Return the trip with its ordered members."""

    @abstractmethod
    def get_budget_items(self, trip_id: str) -> List[BudgetItemRecord]:
        """Return the trip's budget items, oldest first."""

    @abstractmethod
    def get_spending_items(self, trip_id: str) -> List[SpendingItemRecord]:
        """Return the trip's spending items, oldest first."""

    def get_snapshot(self, trip_id: str) -> LedgerSnapshot:
        """Read everything for a trip in one go."""
        return LedgerSnapshot(
            trip=self.get_trip(trip_id),
            budget_items=self.get_budget_items(trip_id),
            spending_items=self.get_spending_items(trip_id)
        )


class SqlLedgerProvider(LedgerProvider):
    """Ledger provider backed by the SQLAlchemy session."""

    def __init__(self, db: Session):
        self.db = db

    def _get_trip_row(self, trip_id: str) -> Trip:
        trip = self.db.query(Trip).filter(Trip.id == trip_id).first()
        if not trip:
            raise TripNotFoundError(trip_id)
        return trip

    def get_trip(self, trip_id: str) -> TripRecord:
        return TripRecord.model_validate(self._get_trip_row(trip_id))

    def get_budget_items(self, trip_id: str) -> List[BudgetItemRecord]:
        self._get_trip_row(trip_id)
        items = self.db.query(BudgetItem).filter(
            BudgetItem.trip_id == trip_id
        ).order_by(BudgetItem.created_at, BudgetItem.id).all()
        return [BudgetItemRecord.model_validate(item) for item in items]

    def get_spending_items(self, trip_id: str) -> List[SpendingItemRecord]:
        self._get_trip_row(trip_id)
        items = self.db.query(SpendingItem).filter(
            SpendingItem.trip_id == trip_id
        ).order_by(SpendingItem.created_at, SpendingItem.id).all()
        return [SpendingItemRecord.model_validate(item) for item in items]


class SnapshotLedgerProvider(LedgerProvider):
    """Ledger provider serving a single in-memory trip snapshot."""

    def __init__(self, snapshot: LedgerSnapshot):
        self.snapshot = snapshot

    def _check_trip(self, trip_id: str):
        if trip_id != self.snapshot.trip.id:
            raise TripNotFoundError(trip_id)

    def get_trip(self, trip_id: str) -> TripRecord:
        self._check_trip(trip_id)
        return self.snapshot.trip

    def get_budget_items(self, trip_id: str) -> List[BudgetItemRecord]:
        self._check_trip(trip_id)
        return [item for item in self.snapshot.budget_items if item.trip_id in (None, trip_id)]

    def get_spending_items(self, trip_id: str) -> List[SpendingItemRecord]:
        self._check_trip(trip_id)
        return [item for item in self.snapshot.spending_items if item.trip_id in (None, trip_id)]
