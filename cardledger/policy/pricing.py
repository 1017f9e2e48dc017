"""
Sale valuation rules.

The 10% premium is applied here and nowhere else. It covers sellable
binders of type RARES or LUXURY; PAUPER binders, decks and single cards
sell at face value.
"""

from decimal import Decimal

from cardledger.enums import BinderType

PREMIUM_RATE = Decimal("0.10")
PREMIUM_BINDER_TYPES = frozenset({BinderType.RARES, BinderType.LUXURY})


def binder_selling_value(
    binder_type: BinderType,
    total_value: Decimal,
    selling_price: Decimal,
) -> Decimal:
    """
    Amount credited when a binder is sold.

    Premium binders sell for max(total value, asking price) plus the
    premium. Every other type sells for its total value.

    Example:
        LUXURY, total 100, asking 150 -> 150 * 1.10 = 165
    """
    if binder_type not in PREMIUM_BINDER_TYPES:
        return total_value
    return max(total_value, selling_price) * (1 + PREMIUM_RATE)


def trade_value_difference(outgoing_value: Decimal, incoming_value: Decimal) -> Decimal:
    """Positive when the incoming card is worth more than the outgoing one."""
    return incoming_value - outgoing_value


def needs_trade_confirmation(difference: Decimal, threshold: Decimal) -> bool:
    """Trades this far out of balance must be confirmed by the user."""
    return abs(difference) >= threshold
