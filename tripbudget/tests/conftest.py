"""
Shared fixtures for the test suite.
"""
import os

# Settings are read on import, so point the app at SQLite first
os.environ["DATABASE_URL"] = "sqlite://"

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import tripbudget.models  # noqa: F401
from tripbudget.db.base import Base
from tripbudget.db.session import get_db
from tripbudget.main import app
from tripbudget.schemas.ledger import (
    TripRecord, MemberRecord, BudgetItemRecord, SpendingItemRecord
)
from tripbudget.models.trip import MemberStatus


@pytest.fixture
def engine():
    """In-memory SQLite engine shared by every connection in a test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db_session(session_factory):
    db = session_factory()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client(session_factory):
    """Test client with a fresh session per request."""
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def trip():
    """Trip with three members: Alice (owner), Bob and Carol."""
    return TripRecord(
        id="trip1",
        name="Goa Trip",
        members=[
            MemberRecord(id="a", name="Alice", status=MemberStatus.OWNER),
            MemberRecord(id="b", name="Bob"),
            MemberRecord(id="c", name="Carol"),
        ],
        join_code="ABC123"
    )


def budget_item(item_id, amount, member_ids, name=None, category="Miscellaneous"):
    """Build a budget item record."""
    return BudgetItemRecord(
        id=item_id,
        trip_id="trip1",
        name=name or item_id,
        amount=Decimal(str(amount)),
        category=category,
        member_ids=member_ids
    )


def spending_item(item_id, amount, member_ids, budget_item_id=None, name=None,
                  is_completed=True, category="Miscellaneous"):
    """Build a spending item record."""
    return SpendingItemRecord(
        id=item_id,
        trip_id="trip1",
        budget_item_id=budget_item_id,
        name=name or item_id,
        amount=Decimal(str(amount)),
        category=category,
        member_ids=member_ids,
        is_completed=is_completed
    )


@pytest.fixture
def make_budget_item():
    return budget_item


@pytest.fixture
def make_spending_item():
    return spending_item
