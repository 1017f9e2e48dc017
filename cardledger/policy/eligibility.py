"""
Container eligibility rules.

Pure functions over container type and card attributes. Containers call
these from can_add_card(); nothing here touches container state.

INVARIANT: Capacity is checked before content. A full container refuses
every card regardless of type.
"""

from cardledger.enums import BinderType, DeckType, Rarity, Variant

# Binder capacity counts unique entries; deck capacity counts copies.
BINDER_CAPACITY = 20
DECK_CAPACITY = 10

LOW_RARITIES = frozenset({Rarity.COMMON, Rarity.UNCOMMON})
HIGH_RARITIES = frozenset({Rarity.RARE, Rarity.LEGENDARY})

SELLABLE_BINDER_TYPES = frozenset({BinderType.PAUPER, BinderType.RARES, BinderType.LUXURY})
TRADEABLE_BINDER_TYPES = frozenset({BinderType.NON_CURATED, BinderType.COLLECTOR})


def binder_accepts(binder_type: BinderType, rarity: Rarity, variant: Variant) -> bool:
    """
    Check a card's attributes against a binder's content rule.

    | Type        | Rule                                    |
    |-------------|-----------------------------------------|
    | PAUPER      | COMMON or UNCOMMON                      |
    | RARES       | RARE or LEGENDARY                       |
    | LUXURY      | any non-NORMAL variant                  |
    | COLLECTOR   | RARE or LEGENDARY with non-NORMAL variant |
    | NON_CURATED | anything                                |
    """
    if binder_type == BinderType.PAUPER:
        return rarity in LOW_RARITIES
    if binder_type == BinderType.RARES:
        return rarity in HIGH_RARITIES
    if binder_type == BinderType.LUXURY:
        return variant != Variant.NORMAL
    if binder_type == BinderType.COLLECTOR:
        return rarity in HIGH_RARITIES and variant != Variant.NORMAL
    return True


def can_add_to_binder(
    binder_type: BinderType,
    rarity: Rarity,
    variant: Variant,
    unique_cards: int,
    capacity: int = BINDER_CAPACITY,
) -> bool:
    """Full binder check: room for another unique entry, then content rule."""
    if unique_cards >= capacity:
        return False
    return binder_accepts(binder_type, rarity, variant)


def can_swap_in_binder(
    unique_cards: int,
    incoming_held: bool,
    outgoing_count: int,
    capacity: int = BINDER_CAPACITY,
) -> bool:
    """
    Room check for a one-for-one trade.

    The swap adds an entry only when the incoming card is new to the binder
    and the outgoing entry still holds copies afterwards.
    """
    if incoming_held or outgoing_count <= 1:
        return True
    return unique_cards < capacity


def can_add_to_deck(total_cards: int, capacity: int = DECK_CAPACITY) -> bool:
    """Decks only limit the number of copies; any card is welcome."""
    return total_cards < capacity


def is_binder_sellable(binder_type: BinderType) -> bool:
    return binder_type in SELLABLE_BINDER_TYPES


def is_binder_tradeable(binder_type: BinderType) -> bool:
    return binder_type in TRADEABLE_BINDER_TYPES


def is_deck_sellable(deck_type: DeckType) -> bool:
    return deck_type == DeckType.SELLABLE
