"""
Container actions — validated operations with explainable failures.

The ledger's move/sell/trade calls are silent no-ops on failure. The
actions here check the same preconditions first and raise a LedgerError
(bad input or state) or RuleRefusal (a container rule said no) that names
the reason. They then delegate the mutation to the ledger.

INVARIANT: Every check runs before any mutation, under the ledger lock.
"""

import logging
from decimal import Decimal, InvalidOperation

from pydantic import BaseModel, Field

from cardledger.config import settings
from cardledger.enums import BinderType, DeckType, Rarity, Variant
from cardledger.models.card import Card, create_card
from cardledger.models.container import Binder, CardContainer, Deck
from cardledger.models.failure import FailureKind, LedgerError, RuleRefusal
from cardledger.policy import binder_accepts, needs_trade_confirmation, trade_value_difference
from cardledger.services.inventory_ledger import ContainerNotFoundError, InventoryLedger

logger = logging.getLogger(__name__)


# =============================================================================
# ERRORS
# =============================================================================


class CardNotInCollectionError(LedgerError):
    def __init__(self, card_name: str):
        self.card_name = card_name
        super().__init__(
            kind=FailureKind.CARD_NOT_IN_COLLECTION,
            message="Card not found in collection",
            detail=f"card={card_name}",
            suggestion="Add the card to your collection first.",
        )


class CardNotInContainerError(LedgerError):
    def __init__(self, card_name: str, container_name: str):
        self.card_name = card_name
        self.container_name = container_name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"'{card_name}' is not in {container_name}",
        )


class DuplicateCardError(RuleRefusal):
    def __init__(self, card_name: str, container_name: str):
        self.card_name = card_name
        self.container_name = container_name
        super().__init__(
            kind=FailureKind.DUPLICATE_CARD,
            message=f"Card already exists in {container_name}",
            detail=f"card={card_name}",
        )


class CardNotAllowedError(RuleRefusal):
    """Raised when a container's rules reject a card."""

    def __init__(self, card: Card, container: CardContainer, reason: str):
        self.card_name = card.name
        self.container_name = container.name
        self.reason = reason
        super().__init__(
            kind=FailureKind.CARD_NOT_ALLOWED,
            message=reason,
            detail=f"card={card.name} rarity={card.rarity.value} variant={card.variant.value}",
        )


class ContainerFullError(RuleRefusal):
    def __init__(self, container: CardContainer):
        self.container_name = container.name
        super().__init__(
            kind=FailureKind.CAPACITY_EXCEEDED,
            message=f"{container.name} is full.",
            detail=f"capacity={container.capacity}",
        )


class PriceTooLowError(LedgerError):
    def __init__(self, price: Decimal, minimum: Decimal):
        self.price = price
        self.minimum = minimum
        super().__init__(
            kind=FailureKind.PRICE_TOO_LOW,
            message=f"Price must be at least ${minimum:.2f}",
            detail=f"price={price}",
        )


# =============================================================================
# RESULT MODELS
# =============================================================================


class TradeQuote(BaseModel):
    """Value comparison shown before a trade is confirmed."""

    outgoing_value: Decimal
    incoming_value: Decimal
    value_difference: Decimal = Field(
        ...,
        description="incoming - outgoing; positive means the binder gains value",
    )
    needs_confirmation: bool


class SaleQuote(BaseModel):
    """What selling a container would credit."""

    container_name: str
    sellable: bool
    selling_value: Decimal


# =============================================================================
# CONTAINER CREATION
# =============================================================================


def _validated_name(name: str) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise LedgerError(
            kind=FailureKind.MISSING_REQUIRED,
            message="Name cannot be empty.",
        )
    return cleaned


def new_binder(ledger: InventoryLedger, name: str, binder_type: BinderType | str) -> Binder:
    """
    Validate input and create a binder.

    Raises:
        LedgerError: If the name is blank or the type is unknown
    """
    try:
        parsed = BinderType(binder_type)
    except ValueError as e:
        raise LedgerError(
            kind=FailureKind.INVALID_INPUT,
            message="Unknown binder type.",
            detail=f"binder_type={binder_type!r}",
        ) from e
    return ledger.create_binder(_validated_name(name), parsed)


def new_deck(ledger: InventoryLedger, name: str, deck_type: DeckType | str) -> Deck:
    """
    Validate input and create a deck.

    Raises:
        LedgerError: If the name is blank or the type is unknown
    """
    try:
        parsed = DeckType(deck_type)
    except ValueError as e:
        raise LedgerError(
            kind=FailureKind.INVALID_INPUT,
            message="Unknown deck type.",
            detail=f"deck_type={deck_type!r}",
        ) from e
    return ledger.create_deck(_validated_name(name), parsed)


# =============================================================================
# COLLECTION ACTIONS
# =============================================================================


def register_card(
    ledger: InventoryLedger,
    name: str,
    rarity: Rarity | str,
    variant: Variant | str,
    base_value: Decimal | int | float | str,
) -> Card:
    """
    Validate raw card input and add one copy to the Collection.

    Raises:
        InvalidCardError: If the input is invalid
        LedgerError: If a different card already uses the name
    """
    card = create_card(name, rarity, variant, base_value)

    with ledger.lock():
        existing = ledger.collection.get_card(card.name)
        if existing is not None and not existing.matches(card):
            raise LedgerError(
                kind=FailureKind.INVALID_INPUT,
                message=f"A different card named '{card.name}' is already in the collection.",
                detail=f"existing={existing.rarity.value}/{existing.variant.value}",
                suggestion="Use a distinct name for a different printing.",
            )
        stored = ledger.add_to_collection(card)

    logger.info("card_registered", extra={"card_name": stored.name})
    return stored


def adjust_collection_count(ledger: InventoryLedger, card: Card, delta: int) -> int:
    """
    Add or remove copies of a card already known to the Collection.

    Returns:
        The new copy count

    Raises:
        CardNotInCollectionError: If the Collection has never held the card
        LedgerError: If removing more copies than the Collection holds
    """
    with ledger.lock():
        stored = ledger.collection.get_card(card.name)
        if stored is None:
            raise CardNotInCollectionError(card.name)

        current = ledger.collection.card_count(stored)
        if delta < 0 and current < -delta:
            if current == 0:
                message = "Card already at 0 copies."
            else:
                message = f"Only {current} copies of '{stored.name}' in the collection."
            raise LedgerError(kind=FailureKind.INVALID_INPUT, message=message)

        if delta > 0:
            ledger.add_to_collection(stored, copies=delta)
        for _ in range(-delta):
            ledger.collection.remove_card(stored)

        return ledger.collection.card_count(stored)


# =============================================================================
# CONTAINER ACTIONS
# =============================================================================


def _require_owned(ledger: InventoryLedger, container: CardContainer) -> None:
    if not ledger.owns(container):
        raise ContainerNotFoundError(container.name)


def add_card_to_container(ledger: InventoryLedger, container: CardContainer, card: Card) -> None:
    """
    Move one copy from the Collection into a container, explaining refusals.

    Checks, in order:
    1. The Collection holds at least one copy
    2. The container does not already hold the card
    3. The container's rules accept the card

    Raises:
        ContainerNotFoundError: If the ledger does not own the container
        CardNotInCollectionError: Check 1 failed
        DuplicateCardError: Check 2 failed
        CardNotAllowedError: Check 3 failed on content
        ContainerFullError: Check 3 failed on capacity
    """
    with ledger.lock():
        _require_owned(ledger, container)

        stored = ledger.collection.get_card(card.name)
        if stored is None or ledger.collection.card_count(stored) < 1:
            raise CardNotInCollectionError(card.name)

        if container.card_count(stored) > 0:
            raise DuplicateCardError(stored.name, container.name)

        if not container.can_add_card(stored):
            if isinstance(container, Binder) and not binder_accepts(
                container.binder_type, stored.rarity, stored.variant
            ):
                raise CardNotAllowedError(stored, container, "Card type not allowed.")
            raise ContainerFullError(container)

        if not ledger.move_card(stored, container):
            raise LedgerError(
                kind=FailureKind.INVARIANT_VIOLATION,
                message="Move refused after all checks passed.",
                detail=f"card={stored.name} container={container.name}",
            )

    logger.info(
        "card_added_to_container",
        extra={"card_name": stored.name, "container_name": container.name},
    )


def return_card_to_collection(
    ledger: InventoryLedger, container: CardContainer, card: Card
) -> None:
    """
    Move one copy from a container back to the Collection.

    Raises:
        ContainerNotFoundError: If the ledger does not own the container
        CardNotInContainerError: If the container holds no copy
    """
    with ledger.lock():
        _require_owned(ledger, container)
        if container.card_count(card) < 1:
            raise CardNotInContainerError(card.name, container.name)
        ledger.return_card(container, card)


def set_selling_price(binder: Binder, price: Decimal | int | str) -> Decimal:
    """
    Set a LUXURY binder's asking price.

    The price may not undercut the binder's current total value. The next
    add or remove resets it to the total value.

    Raises:
        RuleRefusal: If the binder type does not take a manual price
        LedgerError: If the price is not a number
        PriceTooLowError: If the price is below the total value
    """
    if binder.binder_type != BinderType.LUXURY:
        raise RuleRefusal(
            kind=FailureKind.PRICE_LOCKED,
            message="Only LUXURY binders accept a custom price.",
            detail=f"binder_type={binder.binder_type.value}",
        )

    try:
        new_price = Decimal(str(price).strip())
    except InvalidOperation as e:
        raise LedgerError(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid number.",
            detail=f"price={price!r}",
        ) from e
    if not new_price.is_finite():
        raise LedgerError(
            kind=FailureKind.INVALID_INPUT,
            message="Invalid number.",
            detail=f"price={price!r}",
        )

    minimum = binder.total_value()
    if new_price < minimum:
        raise PriceTooLowError(new_price, minimum)

    binder.set_selling_price(new_price)
    return new_price


# =============================================================================
# TRADES AND SALES
# =============================================================================


def quote_trade(
    binder: Binder,
    outgoing: Card,
    incoming: Card,
    threshold: Decimal | None = None,
) -> TradeQuote:
    """
    Compare the two sides of a trade before it happens.

    The outgoing side is valued as the binder stores it. Pass the incoming
    card as the Collection stores it; perform_trade() does this lookup.

    Raises:
        RuleRefusal: If the binder does not trade
        CardNotInContainerError: If the binder does not hold the outgoing card
        CardNotAllowedError: If the incoming card breaks the binder's rules
        ContainerFullError: If the swap would add an entry to a full binder
    """
    if threshold is None:
        threshold = settings.unbalanced_trade_threshold

    if not binder.is_tradeable():
        raise RuleRefusal(
            kind=FailureKind.NOT_TRADEABLE,
            message=f"{binder.binder_type.value} binders cannot trade.",
        )
    held = binder.get_card(outgoing.name)
    if held is None or binder.card_count(held) < 1:
        raise CardNotInContainerError(outgoing.name, binder.name)
    if not binder_accepts(binder.binder_type, incoming.rarity, incoming.variant):
        raise CardNotAllowedError(
            incoming, binder, "Card does not meet the requirements of the binder."
        )
    if not binder.can_swap(held, incoming):
        raise ContainerFullError(binder)

    difference = trade_value_difference(held.total_value, incoming.total_value)
    return TradeQuote(
        outgoing_value=held.total_value,
        incoming_value=incoming.total_value,
        value_difference=difference,
        needs_confirmation=needs_trade_confirmation(difference, threshold),
    )


def perform_trade(
    ledger: InventoryLedger,
    binder: Binder,
    outgoing: Card,
    incoming: Card,
    confirmed: bool = False,
) -> TradeQuote:
    """
    Quote and execute a trade.

    Both sides are resolved to the cards the inventory actually stores, so
    the quote describes exactly what moves. Unbalanced trades are refused
    until the caller passes confirmed=True.

    Raises:
        Everything quote_trade() raises, plus:
        ContainerNotFoundError: If the ledger does not own the binder
        CardNotInCollectionError: If the Collection holds no incoming copy
        RuleRefusal: If the trade needs confirmation
    """
    with ledger.lock():
        _require_owned(ledger, binder)

        stored_incoming = ledger.collection.get_card(incoming.name)
        if stored_incoming is None or ledger.collection.card_count(stored_incoming) < 1:
            raise CardNotInCollectionError(incoming.name)

        quote = quote_trade(binder, outgoing, stored_incoming)
        if quote.needs_confirmation and not confirmed:
            raise RuleRefusal(
                kind=FailureKind.UNCONFIRMED_TRADE,
                message=f"Unbalanced trade: value difference ${quote.value_difference:.2f}.",
                suggestion="Confirm the trade to proceed.",
            )

        if not ledger.trade_card(binder, outgoing, stored_incoming):
            raise LedgerError(
                kind=FailureKind.INVARIANT_VIOLATION,
                message="Trade refused after all checks passed.",
                detail=f"outgoing={outgoing.name} incoming={stored_incoming.name}",
            )
    return quote


def quote_sale(container: CardContainer) -> SaleQuote:
    return SaleQuote(
        container_name=container.name,
        sellable=container.is_sellable(),
        selling_value=container.selling_value(),
    )
