"""
Share calculation for equally split items.
"""
from decimal import Decimal
from typing import Dict, Iterable
from tripbudget.core.exceptions import InvalidInputError


def per_member_share(amount: Decimal, member_ids: Iterable[str]) -> Dict[str, Decimal]:
    """
    Split an amount equally among a set of members.

    Every distinct member receives amount / member count at full Decimal
    precision; no remainder is redistributed, so 100 / 3 gives three shares
    of 33.333... Duplicate ids count once and the result keeps first-seen
    order.

    Args:
        amount: Positive item amount
        member_ids: Non-empty collection of member ids

    Returns:
        Mapping of member id to share

    Raises:
        InvalidInputError: If member_ids is empty or amount is not positive
    """
    members = list(dict.fromkeys(member_ids))
    if not members:
        raise InvalidInputError("Cannot split an amount among zero members")
    amount = Decimal(amount)
    if amount <= 0:
        raise InvalidInputError(f"Amount must be positive, got {amount}")

    share = amount / len(members)
    return {member_id: share for member_id in members}
