"""
Container policy.

Eligibility, sellability, tradeability and valuation rules as pure
functions dispatching on container type.
"""

from cardledger.policy.eligibility import (
    BINDER_CAPACITY,
    DECK_CAPACITY,
    SELLABLE_BINDER_TYPES,
    TRADEABLE_BINDER_TYPES,
    binder_accepts,
    can_add_to_binder,
    can_add_to_deck,
    can_swap_in_binder,
    is_binder_sellable,
    is_binder_tradeable,
    is_deck_sellable,
)
from cardledger.policy.pricing import (
    PREMIUM_BINDER_TYPES,
    PREMIUM_RATE,
    binder_selling_value,
    needs_trade_confirmation,
    trade_value_difference,
)

__all__ = [
    "BINDER_CAPACITY",
    "DECK_CAPACITY",
    "PREMIUM_BINDER_TYPES",
    "PREMIUM_RATE",
    "SELLABLE_BINDER_TYPES",
    "TRADEABLE_BINDER_TYPES",
    "binder_accepts",
    "binder_selling_value",
    "can_add_to_binder",
    "can_add_to_deck",
    "can_swap_in_binder",
    "is_binder_sellable",
    "is_binder_tradeable",
    "is_deck_sellable",
    "needs_trade_confirmation",
    "trade_value_difference",
]
