"""
Ledger Commands — the single surface a presentation layer calls.

Every command returns an OperationResult:
- Success carries the operation's data and a confirmation message
- LedgerError becomes a known failure
- RuleRefusal becomes a refusal
- A False return from a silent no-op ledger call becomes a refusal
- Anything else becomes an unknown failure, logged with its traceback

Callers render result.description and never see a raw exception.
"""

import logging
from collections.abc import Callable
from decimal import Decimal
from typing import Any

from cardledger.enums import BinderType, DeckType, Rarity, Variant
from cardledger.models.card import Card
from cardledger.models.container import Binder, CardContainer
from cardledger.models.failure import (
    ClassifiedError,
    FailureKind,
    OperationResult,
    RuleRefusal,
    create_unknown_failure,
)
from cardledger.services import container_actions
from cardledger.services.inventory_ledger import InventoryLedger
from cardledger.services.stats import container_summary, ledger_stats

logger = logging.getLogger(__name__)


class LedgerCommands:
    """Wraps an InventoryLedger and converts every outcome into a result."""

    def __init__(self, ledger: InventoryLedger | None = None) -> None:
        self.ledger = ledger if ledger is not None else InventoryLedger()

    def _run(
        self,
        operation: str,
        action: Callable[[], Any],
        message: Callable[[Any], str] | None = None,
    ) -> OperationResult[Any]:
        try:
            data = action()
        except ClassifiedError as e:
            event = "operation_refused" if isinstance(e, RuleRefusal) else "operation_failed"
            logger.info(event, extra={"operation": operation, "failure_kind": e.kind.value})
            return e.to_result()
        except Exception as e:
            logger.error(
                "operation_crashed",
                extra={"operation": operation},
                exc_info=True,
            )
            return create_unknown_failure(e)

        return OperationResult.success(data, message=message(data) if message else None)

    def _run_flag(
        self,
        operation: str,
        action: Callable[[], bool],
        refusal_kind: FailureKind,
        refusal_message: str,
        success_message: str,
    ) -> OperationResult[Any]:
        def checked() -> bool:
            if not action():
                raise RuleRefusal(kind=refusal_kind, message=refusal_message)
            return True

        return self._run(operation, checked, lambda _: success_message)

    # =========================================================================
    # CONTAINERS
    # =========================================================================

    def create_binder(self, name: str, binder_type: BinderType | str) -> OperationResult[Any]:
        return self._run(
            "create_binder",
            lambda: container_actions.new_binder(self.ledger, name, binder_type),
            lambda binder: f"Created binder {binder.name}",
        )

    def create_deck(self, name: str, deck_type: DeckType | str) -> OperationResult[Any]:
        return self._run(
            "create_deck",
            lambda: container_actions.new_deck(self.ledger, name, deck_type),
            lambda deck: f"Created deck {deck.name}",
        )

    def delete_container(self, container: CardContainer) -> OperationResult[Any]:
        return self._run(
            "delete_container",
            lambda: self.ledger.delete_container(container),
            lambda _: f"Successfully deleted {container.name}",
        )

    def sell_container(self, container: CardContainer) -> OperationResult[Any]:
        return self._run_flag(
            "sell_container",
            lambda: self.ledger.sell_container(container),
            FailureKind.NOT_SELLABLE,
            f"{container.name} cannot be sold.",
            f"Sold {container.name}",
        )

    def quote_sale(self, container: CardContainer) -> OperationResult[Any]:
        return self._run(
            "quote_sale",
            lambda: container_actions.quote_sale(container),
            lambda quote: f"Sell for ${quote.selling_value:.2f}?",
        )

    def set_selling_price(self, binder: Binder, price: Decimal | int | str) -> OperationResult[Any]:
        return self._run(
            "set_selling_price",
            lambda: container_actions.set_selling_price(binder, price),
            lambda new_price: f"{binder.name} now asks ${new_price:.2f}",
        )

    # =========================================================================
    # CARDS
    # =========================================================================

    def register_card(
        self,
        name: str,
        rarity: Rarity | str,
        variant: Variant | str,
        base_value: Decimal | int | float | str,
    ) -> OperationResult[Any]:
        return self._run(
            "register_card",
            lambda: container_actions.register_card(self.ledger, name, rarity, variant, base_value),
            lambda card: f"Added {card.name} to the collection",
        )

    def adjust_count(self, card: Card, delta: int) -> OperationResult[Any]:
        return self._run(
            "adjust_count",
            lambda: container_actions.adjust_collection_count(self.ledger, card, delta),
            lambda count: f"{card.name}: {count} copies",
        )

    def add_card(self, container: CardContainer, card: Card) -> OperationResult[Any]:
        return self._run(
            "add_card",
            lambda: container_actions.add_card_to_container(self.ledger, container, card),
            lambda _: f"Added {card.name} to {container.name}",
        )

    def remove_card(self, container: CardContainer, card: Card) -> OperationResult[Any]:
        return self._run(
            "remove_card",
            lambda: container_actions.return_card_to_collection(self.ledger, container, card),
            lambda _: f"Returned {card.name} to the collection",
        )

    def move_card(self, card: Card, destination: CardContainer) -> OperationResult[Any]:
        return self._run_flag(
            "move_card",
            lambda: self.ledger.move_card(card, destination),
            FailureKind.CARD_NOT_ALLOWED,
            f"Could not move {card.name} to {destination.name}.",
            f"Moved {card.name} to {destination.name}",
        )

    def sell_card(self, card: Card) -> OperationResult[Any]:
        return self._run_flag(
            "sell_card",
            lambda: self.ledger.sell_card(card),
            FailureKind.CARD_NOT_IN_COLLECTION,
            "Could not sell card.",
            "Sold successfully.",
        )

    def trade(
        self,
        binder: Binder,
        outgoing: Card,
        incoming: Card,
        confirmed: bool = False,
    ) -> OperationResult[Any]:
        return self._run(
            "trade",
            lambda: container_actions.perform_trade(
                self.ledger, binder, outgoing, incoming, confirmed=confirmed
            ),
            lambda _: f"Traded {outgoing.name} for {incoming.name}",
        )

    # =========================================================================
    # VIEWS
    # =========================================================================

    def stats(self) -> OperationResult[Any]:
        return self._run("stats", lambda: ledger_stats(self.ledger))

    def details(self, container: CardContainer) -> OperationResult[Any]:
        return self._run("details", lambda: container_summary(container))
