"""
Card and container classifications.

Enum values equal their names so they serialize the same way everywhere
(selection widgets, logs, result envelopes).
"""

from decimal import Decimal
from enum import Enum


class Rarity(str, Enum):
    """Card tier. Drives binder eligibility, never value."""

    COMMON = "COMMON"
    UNCOMMON = "UNCOMMON"
    RARE = "RARE"
    LEGENDARY = "LEGENDARY"


class Variant(str, Enum):
    """Cosmetic card version with a fixed value multiplier."""

    NORMAL = "NORMAL"
    EXTENDED_ART = "EXTENDED_ART"
    FULL_ART = "FULL_ART"
    ALT_ART = "ALT_ART"

    @property
    def multiplier(self) -> Decimal:
        """Value multiplier applied to a card's base value."""
        return VARIANT_MULTIPLIERS[self]


VARIANT_MULTIPLIERS: dict[Variant, Decimal] = {
    Variant.NORMAL: Decimal("1.0"),
    Variant.EXTENDED_ART: Decimal("1.5"),
    Variant.FULL_ART: Decimal("2.0"),
    Variant.ALT_ART: Decimal("3.0"),
}


class BinderType(str, Enum):
    """
    Binder curation rules.

    - NON_CURATED: anything goes, tradeable
    - PAUPER: commons and uncommons, sellable
    - RARES: rares and legendaries, sellable with premium
    - LUXURY: non-normal variants, sellable with premium
    - COLLECTOR: rare+ non-normal variants, tradeable
    """

    NON_CURATED = "NON_CURATED"
    PAUPER = "PAUPER"
    RARES = "RARES"
    LUXURY = "LUXURY"
    COLLECTOR = "COLLECTOR"


class DeckType(str, Enum):
    """Deck classification. Only SELLABLE decks can be sold."""

    NORMAL = "NORMAL"
    SELLABLE = "SELLABLE"
