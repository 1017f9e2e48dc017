from decimal import Decimal

import pytest

from cardledger.enums import Rarity, Variant
from cardledger.models.card import Card
from cardledger.services.commands import LedgerCommands
from cardledger.services.inventory_ledger import InventoryLedger


@pytest.fixture
def ledger() -> InventoryLedger:
    """An empty ledger with a zero balance."""
    return InventoryLedger(money=Decimal(0))


@pytest.fixture
def commands(ledger: InventoryLedger) -> LedgerCommands:
    return LedgerCommands(ledger)


@pytest.fixture
def pikachu() -> Card:
    return Card("Pikachu", Rarity.COMMON, Variant.NORMAL, Decimal("5.00"))


@pytest.fixture
def bulbasaur() -> Card:
    return Card("Bulbasaur", Rarity.UNCOMMON, Variant.NORMAL, Decimal("2.00"))


@pytest.fixture
def charizard() -> Card:
    return Card("Charizard", Rarity.RARE, Variant.NORMAL, Decimal("40.00"))


@pytest.fixture
def mewtwo_alt() -> Card:
    return Card("Mewtwo", Rarity.LEGENDARY, Variant.ALT_ART, Decimal("50.00"))


@pytest.fixture
def eevee_full_art() -> Card:
    return Card("Eevee", Rarity.COMMON, Variant.FULL_ART, Decimal("3.00"))
