"""TripBudget: group trip budgeting, balances and settlement."""
