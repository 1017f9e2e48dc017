"""Read-only summaries of a ledger and its containers."""

from decimal import Decimal

from pydantic import BaseModel, Field

from cardledger.models.container import Binder, CardContainer, Deck
from cardledger.services.inventory_ledger import InventoryLedger


class LedgerStats(BaseModel):
    """Headline numbers for the whole inventory."""

    money: Decimal
    total_cards: int
    collection_value: Decimal
    binder_count: int
    deck_count: int


class CardLine(BaseModel):
    """One card entry inside a container summary."""

    name: str
    rarity: str
    variant: str
    base_value: Decimal
    total_value: Decimal
    count: int


class ContainerSummary(BaseModel):
    """Everything a details view shows about a container."""

    name: str
    kind: str
    container_type: str | None = Field(
        default=None,
        description="Binder or deck type name; None for the collection",
    )
    capacity: int
    total_cards: int
    unique_cards: int
    total_value: Decimal
    sellable: bool
    tradeable: bool
    selling_value: Decimal | None = Field(
        default=None,
        description="Present only when the container is sellable",
    )
    cards: list[CardLine] = Field(default_factory=list)


def ledger_stats(ledger: InventoryLedger) -> LedgerStats:
    with ledger.lock():
        return LedgerStats(
            money=ledger.money,
            total_cards=ledger.total_card_count(),
            collection_value=ledger.collection.total_value(),
            binder_count=len(ledger.binders()),
            deck_count=len(ledger.decks()),
        )


def container_summary(container: CardContainer) -> ContainerSummary:
    """
    Summarize a container for display.

    Only entries with at least one copy are listed, sorted by name.
    """
    container_type = None
    if isinstance(container, Binder):
        container_type = container.binder_type.value
    elif isinstance(container, Deck):
        container_type = container.deck_type.value

    sellable = container.is_sellable()
    lines = [
        CardLine(
            name=card.name,
            rarity=card.rarity.value,
            variant=card.variant.value,
            base_value=card.base_value,
            total_value=card.total_value,
            count=count,
        )
        for card, count in sorted(container.active_cards(), key=lambda pair: pair[0].name)
    ]

    return ContainerSummary(
        name=container.name,
        kind=container.kind,
        container_type=container_type,
        capacity=container.capacity,
        total_cards=container.total_cards(),
        unique_cards=container.unique_cards(),
        total_value=container.total_value(),
        sellable=sellable,
        tradeable=container.is_tradeable(),
        selling_value=container.selling_value() if sellable else None,
        cards=lines,
    )
