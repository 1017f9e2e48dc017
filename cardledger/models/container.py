"""
Card containers — quantity bookkeeping for collections, binders and decks.

A container maps each CardKey to a copy count and remembers the Card that
first introduced the key. Rules about WHAT may enter a container live in
cardledger.policy; the classes here only delegate to them.

INVARIANT: Counts never go negative. A key may stay present at count 0;
unique_cards() ignores such entries, total_cards() sums all counts.

INVARIANT: add_card() never checks eligibility. Callers check
can_add_card() first.
"""

import sys
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass, field
from decimal import Decimal
from typing import ClassVar

from cardledger.enums import BinderType, DeckType
from cardledger.models.card import Card, CardKey
from cardledger.policy import (
    BINDER_CAPACITY,
    DECK_CAPACITY,
    binder_selling_value,
    can_add_to_binder,
    can_add_to_deck,
    can_swap_in_binder,
    is_binder_sellable,
    is_binder_tradeable,
    is_deck_sellable,
)

UNLIMITED_CAPACITY = sys.maxsize


@dataclass(eq=False)
class CardContainer(ABC):
    """
    Base container. Compared by identity, never by contents.

    Attributes:
        name: Display name (not unique)
        capacity: Maximum entries, as interpreted by the subclass rule
    """

    kind: ClassVar[str] = "container"

    name: str
    capacity: int = field(default=UNLIMITED_CAPACITY, init=False)
    _counts: dict[CardKey, int] = field(default_factory=dict, init=False, repr=False)
    _cards: dict[CardKey, Card] = field(default_factory=dict, init=False, repr=False)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    def add_card(self, card: Card) -> None:
        """Add one copy. The first Card stored for a name is kept."""
        key = card.key
        self._cards.setdefault(key, card)
        self._counts[key] = self._counts.get(key, 0) + 1

    def remove_card(self, card: Card) -> None:
        """Remove one copy, floored at 0. The entry itself is kept."""
        key = card.key
        if key in self._counts:
            self._counts[key] = max(0, self._counts[key] - 1)

    def discard_card(self, card: Card) -> int:
        """
        Drop the entry for this card entirely, whatever its count.

        Returns:
            The number of copies dropped (0 if absent)
        """
        key = card.key
        self._cards.pop(key, None)
        return self._counts.pop(key, 0)

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def has_card(self, card_name: str) -> bool:
        """Check for an entry by name (any count, including 0)."""
        return CardKey(card_name) in self._counts

    def __contains__(self, card_name: str) -> bool:
        return self.has_card(card_name)

    def card_count(self, card: Card) -> int:
        return self._counts.get(card.key, 0)

    def get_card(self, card_name: str) -> Card | None:
        """The stored Card for a name, or None."""
        return self._cards.get(CardKey(card_name))

    def cards(self) -> Iterator[Card]:
        """Iterate over stored cards, zero-count entries included."""
        return iter(self._cards.values())

    def cards_with_counts(self) -> dict[Card, int]:
        """Copy of the card -> count mapping, zero-count entries included."""
        return {self._cards[key]: count for key, count in self._counts.items()}

    def active_cards(self) -> list[tuple[Card, int]]:
        """(card, count) pairs with count > 0, in insertion order."""
        return [(self._cards[key], count) for key, count in self._counts.items() if count > 0]

    def total_cards(self) -> int:
        """Total copies across all entries."""
        return sum(self._counts.values())

    def unique_cards(self) -> int:
        """Number of entries with at least one copy."""
        return sum(1 for count in self._counts.values() if count > 0)

    def total_value(self) -> Decimal:
        """Sum of card total value times copies."""
        return sum(
            (self._cards[key].total_value * count for key, count in self._counts.items()),
            Decimal(0),
        )

    def is_tradeable(self) -> bool:
        return False

    # -------------------------------------------------------------------------
    # Subtype rules
    # -------------------------------------------------------------------------

    @abstractmethod
    def can_add_card(self, card: Card) -> bool:
        """Whether one more copy of this card may be added."""

    @abstractmethod
    def is_sellable(self) -> bool:
        """Whether the container can be sold."""

    @abstractmethod
    def selling_value(self) -> Decimal:
        """Amount credited if the container is sold."""


@dataclass(eq=False)
class Collection(CardContainer):
    """The master pool. Accepts everything, effectively unlimited."""

    kind: ClassVar[str] = "collection"

    name: str = "Main Collection"

    def can_add_card(self, card: Card) -> bool:
        return self.total_cards() < self.capacity

    def is_sellable(self) -> bool:
        return True

    def selling_value(self) -> Decimal:
        return self.total_value()

    def find_matching_card(self, template: Card) -> Card | None:
        """
        Find the stored card with the same name, rarity and variant.

        Used to reconcile a returning card with the existing entry instead
        of introducing a look-alike.
        """
        for card in self._cards.values():
            if card.matches(template):
                return card
        return None


@dataclass(eq=False)
class Binder(CardContainer):
    """
    A typed binder of up to 20 unique cards.

    selling_price tracks total_value() after every add or remove. LUXURY
    binders may have it raised manually between changes.
    """

    kind: ClassVar[str] = "binder"

    binder_type: BinderType = BinderType.NON_CURATED
    capacity: int = field(default=BINDER_CAPACITY, init=False)
    selling_price: Decimal = field(default=Decimal(0), init=False)

    def add_card(self, card: Card) -> None:
        super().add_card(card)
        self.selling_price = self.total_value()

    def remove_card(self, card: Card) -> None:
        super().remove_card(card)
        self.selling_price = self.total_value()

    def discard_card(self, card: Card) -> int:
        dropped = super().discard_card(card)
        self.selling_price = self.total_value()
        return dropped

    def set_selling_price(self, price: Decimal) -> None:
        self.selling_price = price

    def can_add_card(self, card: Card) -> bool:
        return can_add_to_binder(
            self.binder_type,
            card.rarity,
            card.variant,
            unique_cards=self.unique_cards(),
            capacity=self.capacity,
        )

    def can_swap(self, outgoing: Card, incoming: Card) -> bool:
        """Whether trading one outgoing copy for one incoming copy stays within capacity."""
        return can_swap_in_binder(
            unique_cards=self.unique_cards(),
            incoming_held=self.card_count(incoming) > 0,
            outgoing_count=self.card_count(outgoing),
            capacity=self.capacity,
        )

    def is_sellable(self) -> bool:
        return is_binder_sellable(self.binder_type)

    def is_tradeable(self) -> bool:
        return is_binder_tradeable(self.binder_type)

    def selling_value(self) -> Decimal:
        return binder_selling_value(self.binder_type, self.total_value(), self.selling_price)


@dataclass(eq=False)
class Deck(CardContainer):
    """A typed deck of up to 10 copies. No content restriction."""

    kind: ClassVar[str] = "deck"

    deck_type: DeckType = DeckType.NORMAL
    capacity: int = field(default=DECK_CAPACITY, init=False)

    def can_add_card(self, card: Card) -> bool:
        return can_add_to_deck(self.total_cards(), self.capacity)

    def is_sellable(self) -> bool:
        return is_deck_sellable(self.deck_type)

    def selling_value(self) -> Decimal:
        return self.total_value()
