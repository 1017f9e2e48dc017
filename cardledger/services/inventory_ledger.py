"""
Inventory Ledger — the owning aggregate for cards, containers and cash.

The ledger owns exactly one Collection, an ordered list of binders and
decks, and a money balance. Every operation that moves cards or money goes
through here.

INVARIANTS:
- Checks precede mutation; a refused operation changes nothing
- Moves, sales and trades shift exactly one copy
- delete_container() returns every copy to the Collection
- sell_container() liquidates the container's cards with it

Precondition failures of move/sell/trade are silent no-ops reported by a
False return value. Callers that need a reason use container_actions.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from decimal import Decimal
from threading import RLock

from cardledger.config import settings
from cardledger.enums import BinderType, DeckType
from cardledger.models.card import Card
from cardledger.models.container import Binder, CardContainer, Collection, Deck
from cardledger.models.failure import FailureKind, LedgerError

logger = logging.getLogger(__name__)


class ContainerNotFoundError(LedgerError):
    """Raised when an operation names a container the ledger does not own."""

    def __init__(self, container_name: str):
        self.container_name = container_name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"'{container_name}' is not part of this inventory.",
            suggestion="Refresh the container list and try again.",
        )


@dataclass
class InventoryLedger:
    """
    Owns the Collection, the binder/deck list and the cash balance.

    Mutating operations hold a single re-entrant lock so the invariants
    above also hold if the ledger is shared between threads.
    """

    collection: Collection = field(default_factory=Collection)
    money: Decimal = field(default_factory=lambda: settings.starting_balance)
    _containers: list[CardContainer] = field(default_factory=list, repr=False)
    _lock: RLock = field(default_factory=RLock, repr=False)

    @contextmanager
    def lock(self) -> Iterator[None]:
        """Hold the ledger lock across a multi-step action."""
        with self._lock:
            yield

    # =========================================================================
    # CONTAINER LIST
    # =========================================================================

    def containers(self) -> list[CardContainer]:
        """All binders and decks in creation order."""
        return list(self._containers)

    def binders(self) -> list[Binder]:
        return [c for c in self._containers if isinstance(c, Binder)]

    def decks(self) -> list[Deck]:
        return [c for c in self._containers if isinstance(c, Deck)]

    def owns(self, container: CardContainer) -> bool:
        """True if the container is in this ledger's list (identity check)."""
        return container in self._containers

    def create_binder(self, name: str, binder_type: BinderType) -> Binder:
        """Create a binder and append it to the container list."""
        with self._lock:
            binder = Binder(name=name, binder_type=binder_type)
            self._containers.append(binder)
        logger.info(
            "container_created",
            extra={"container_kind": binder.kind, "container_name": name, "type": binder_type.value},
        )
        return binder

    def create_deck(self, name: str, deck_type: DeckType) -> Deck:
        """Create a deck and append it to the container list."""
        with self._lock:
            deck = Deck(name=name, deck_type=deck_type)
            self._containers.append(deck)
        logger.info(
            "container_created",
            extra={"container_kind": deck.kind, "container_name": name, "type": deck_type.value},
        )
        return deck

    def delete_container(self, container: CardContainer) -> None:
        """
        Delete a container, returning every copy it holds to the Collection.

        Each card is reconciled against the Collection's existing entry via
        find_matching_card(); unmatched cards are added as they are.

        Raises:
            ContainerNotFoundError: If the ledger does not own the container
        """
        with self._lock:
            if not self.owns(container):
                raise ContainerNotFoundError(container.name)

            returned = 0
            for template, count in container.cards_with_counts().items():
                real_card = self.collection.find_matching_card(template) or template
                for _ in range(count):
                    self.collection.add_card(real_card)
                returned += count

            self._containers.remove(container)

        logger.info(
            "container_deleted",
            extra={"container_name": container.name, "cards_returned": returned},
        )

    # =========================================================================
    # MONEY
    # =========================================================================

    def add_money(self, amount: Decimal | int | str) -> None:
        with self._lock:
            self.money += Decimal(str(amount))

    # =========================================================================
    # CARD MOVEMENT
    # =========================================================================

    def add_to_collection(self, card: Card, copies: int = 1) -> Card:
        """
        Add copies of a card to the Collection.

        If the Collection already holds a card with the same name, rarity
        and variant, that stored card is reused.

        Returns:
            The card as stored in the Collection
        """
        with self._lock:
            stored = self.collection.find_matching_card(card) or card
            for _ in range(copies):
                self.collection.add_card(stored)
        return stored

    def move_card(self, card: Card, destination: CardContainer) -> bool:
        """
        Move one copy from the Collection into an owned container.

        No-op unless the Collection holds a copy and the destination
        accepts the card.

        Returns:
            True if a copy was moved
        """
        with self._lock:
            stored = self.collection.get_card(card.name)
            if (
                stored is None
                or self.collection.card_count(stored) < 1
                or not self.owns(destination)
                or not destination.can_add_card(stored)
            ):
                logger.debug(
                    "move_skipped",
                    extra={"card_name": card.name, "container_name": destination.name},
                )
                return False

            self.collection.remove_card(stored)
            destination.add_card(stored)
        return True

    def return_card(self, container: CardContainer, card: Card) -> bool:
        """
        Move one copy from an owned container back to the Collection.

        Returns:
            True if a copy was returned
        """
        with self._lock:
            stored = container.get_card(card.name)
            if stored is None or container.card_count(stored) < 1 or not self.owns(container):
                return False

            container.remove_card(stored)
            real_card = self.collection.find_matching_card(stored) or stored
            self.collection.add_card(real_card)
        return True

    # =========================================================================
    # SALES
    # =========================================================================

    def sell_card(self, card: Card) -> bool:
        """
        Sell one copy from the Collection for its total value.

        Returns:
            True if a copy was sold
        """
        with self._lock:
            if self.collection.card_count(card) < 1:
                logger.debug("card_sale_skipped", extra={"card_name": card.name})
                return False

            stored = self.collection.get_card(card.name) or card
            self.collection.remove_card(stored)
            self.money += stored.total_value

        logger.info(
            "card_sold",
            extra={"card_name": stored.name, "amount": str(stored.total_value)},
        )
        return True

    def sell_container(self, container: CardContainer) -> bool:
        """
        Sell an owned, sellable container for its selling value.

        The container leaves the ledger together with its cards; nothing is
        returned to the Collection.

        Returns:
            True if the container was sold
        """
        with self._lock:
            if not self.owns(container) or not container.is_sellable():
                logger.debug("container_sale_skipped", extra={"container_name": container.name})
                return False

            amount = container.selling_value()
            self.money += amount
            self._containers.remove(container)

        logger.info(
            "container_sold",
            extra={
                "container_name": container.name,
                "amount": str(amount),
                "cards_liquidated": container.total_cards(),
            },
        )
        return True

    # =========================================================================
    # TRADES
    # =========================================================================

    def trade_card(self, binder: Binder, outgoing: Card, incoming: Card) -> bool:
        """
        Swap one binder card for one Collection card.

        The outgoing card leaves the inventory; the incoming card is taken
        from the Collection, not duplicated.

        Requires a tradeable, owned binder holding the outgoing card, a
        Collection holding the incoming card, and room in the binder if the
        swap would add an entry.

        Returns:
            True if the trade happened
        """
        with self._lock:
            incoming_stored = self.collection.get_card(incoming.name)
            if (
                not self.owns(binder)
                or not binder.is_tradeable()
                or binder.card_count(outgoing) < 1
                or incoming_stored is None
                or self.collection.card_count(incoming_stored) < 1
                or not binder.can_swap(outgoing, incoming_stored)
            ):
                logger.debug(
                    "trade_skipped",
                    extra={
                        "container_name": binder.name,
                        "outgoing": outgoing.name,
                        "incoming": incoming.name,
                    },
                )
                return False

            binder.remove_card(outgoing)
            binder.add_card(incoming_stored)
            self.collection.remove_card(incoming_stored)

        logger.info(
            "trade_completed",
            extra={
                "container_name": binder.name,
                "outgoing": outgoing.name,
                "incoming": incoming_stored.name,
            },
        )
        return True

    # =========================================================================
    # TOTALS
    # =========================================================================

    def total_card_count(self) -> int:
        """Copies in the Collection plus copies in every container."""
        with self._lock:
            return self.collection.total_cards() + sum(
                c.total_cards() for c in self._containers
            )
