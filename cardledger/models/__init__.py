from cardledger.models.card import Card, CardKey, InvalidCardError, create_card
from cardledger.models.container import (
    UNLIMITED_CAPACITY,
    Binder,
    CardContainer,
    Collection,
    Deck,
)
from cardledger.models.failure import (
    ClassifiedError,
    FailureDetail,
    FailureKind,
    LedgerError,
    OperationResult,
    OutcomeType,
    RuleRefusal,
    create_unknown_failure,
)

__all__ = [
    "Binder",
    "Card",
    "CardContainer",
    "CardKey",
    "ClassifiedError",
    "Collection",
    "Deck",
    "FailureDetail",
    "FailureKind",
    "InvalidCardError",
    "LedgerError",
    "OperationResult",
    "OutcomeType",
    "RuleRefusal",
    "UNLIMITED_CAPACITY",
    "create_card",
    "create_unknown_failure",
]
