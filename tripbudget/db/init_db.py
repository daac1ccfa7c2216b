"""
Database initialization script.
"""
from tripbudget.db.session import init_db

# Import all models so SQLAlchemy can register them
from tripbudget.models import Trip, TripMember, BudgetItem, SpendingItem  # noqa: F401

if __name__ == "__main__":
    print("Initializing database...")
    init_db()
    print("Database initialized successfully!")
