"""
Shared route dependencies.
"""
from fastapi import Depends
from sqlalchemy.orm import Session
from tripbudget.db.session import get_db
from tripbudget.services.ledger_provider import LedgerProvider, SqlLedgerProvider


def get_ledger_provider(db: Session = Depends(get_db)) -> LedgerProvider:
    """Dependency for reading trip snapshots from the database."""
    return SqlLedgerProvider(db)
