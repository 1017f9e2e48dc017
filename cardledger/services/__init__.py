"""
CardLedger services.

The inventory ledger, validated container actions, summaries and the
command surface that wraps them.
"""

from cardledger.services.commands import LedgerCommands
from cardledger.services.container_actions import (
    CardNotAllowedError,
    CardNotInCollectionError,
    CardNotInContainerError,
    ContainerFullError,
    DuplicateCardError,
    PriceTooLowError,
    SaleQuote,
    TradeQuote,
    add_card_to_container,
    adjust_collection_count,
    new_binder,
    new_deck,
    perform_trade,
    quote_sale,
    quote_trade,
    register_card,
    return_card_to_collection,
    set_selling_price,
)
from cardledger.services.inventory_ledger import ContainerNotFoundError, InventoryLedger
from cardledger.services.stats import (
    CardLine,
    ContainerSummary,
    LedgerStats,
    container_summary,
    ledger_stats,
)

__all__ = [
    "CardLine",
    "CardNotAllowedError",
    "CardNotInCollectionError",
    "CardNotInContainerError",
    "ContainerFullError",
    "ContainerNotFoundError",
    "ContainerSummary",
    "DuplicateCardError",
    "InventoryLedger",
    "LedgerCommands",
    "LedgerStats",
    "PriceTooLowError",
    "SaleQuote",
    "TradeQuote",
    "add_card_to_container",
    "adjust_collection_count",
    "container_summary",
    "ledger_stats",
    "new_binder",
    "new_deck",
    "perform_trade",
    "quote_sale",
    "quote_trade",
    "register_card",
    "return_card_to_collection",
    "set_selling_price",
]
