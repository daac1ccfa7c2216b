"""
Error types raised by the settlement core and ledger providers.
"""


class InvalidInputError(ValueError):
    """Raised when an item reaches the core with no members or a non-positive amount."""


class TripNotFoundError(LookupError):
    """Raised by a ledger provider when the requested trip does not exist."""

    def __init__(self, trip_id: str):
        super().__init__(f"Trip not found: {trip_id}")
        self.trip_id = trip_id
