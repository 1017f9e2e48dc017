from decimal import Decimal

import pytest

from cardledger.enums import BinderType, DeckType, Rarity, Variant
from cardledger.models.card import Card
from cardledger.models.container import Binder, Deck
from cardledger.models.failure import FailureKind
from cardledger.services.inventory_ledger import ContainerNotFoundError, InventoryLedger


def _stock(ledger: InventoryLedger, card: Card, copies: int = 1) -> Card:
    return ledger.add_to_collection(card, copies=copies)


class TestContainerList:
    def test_new_ledger_is_empty(self, ledger: InventoryLedger) -> None:
        assert ledger.money == 0
        assert ledger.containers() == []
        assert ledger.collection.total_cards() == 0

    def test_default_balance_from_settings(self) -> None:
        assert InventoryLedger().money == Decimal(0)

    def test_create_binder_and_deck_keep_order(self, ledger: InventoryLedger) -> None:
        binder = ledger.create_binder("Rares", BinderType.RARES)
        deck = ledger.create_deck("Starter", DeckType.NORMAL)

        assert isinstance(binder, Binder)
        assert isinstance(deck, Deck)
        assert ledger.containers() == [binder, deck]
        assert ledger.binders() == [binder]
        assert ledger.decks() == [deck]

    def test_duplicate_names_are_distinct_containers(self, ledger: InventoryLedger) -> None:
        first = ledger.create_deck("Same", DeckType.NORMAL)
        second = ledger.create_deck("Same", DeckType.NORMAL)
        assert len(ledger.containers()) == 2
        assert ledger.owns(first) and ledger.owns(second)

    def test_containers_returns_copy(self, ledger: InventoryLedger) -> None:
        ledger.create_deck("Starter", DeckType.NORMAL)
        ledger.containers().clear()
        assert len(ledger.containers()) == 1

    def test_owns_is_identity(self, ledger: InventoryLedger) -> None:
        ledger.create_deck("Starter", DeckType.NORMAL)
        assert not ledger.owns(Deck("Starter", DeckType.NORMAL))


class TestAddToCollection:
    def test_adds_copies(self, ledger: InventoryLedger, pikachu: Card) -> None:
        _stock(ledger, pikachu, copies=3)
        assert ledger.collection.card_count(pikachu) == 3

    def test_reuses_matching_card(self, ledger: InventoryLedger) -> None:
        first = Card("Pikachu", Rarity.COMMON, Variant.NORMAL, Decimal("1"))
        again = Card("Pikachu", Rarity.COMMON, Variant.NORMAL, Decimal("1"))
        _stock(ledger, first)
        stored = _stock(ledger, again)
        assert stored is first
        assert ledger.collection.card_count(first) == 2


class TestMoveCard:
    def test_move_shifts_one_copy(self, ledger: InventoryLedger, charizard: Card) -> None:
        _stock(ledger, charizard, copies=2)
        binder = ledger.create_binder("Rares", BinderType.RARES)

        assert ledger.move_card(charizard, binder) is True
        assert ledger.collection.card_count(charizard) == 1
        assert binder.card_count(charizard) == 1

    def test_rares_binder_scenario(
        self, ledger: InventoryLedger, charizard: Card, mewtwo_alt: Card, pikachu: Card
    ) -> None:
        for card in (charizard, mewtwo_alt, pikachu):
            _stock(ledger, card)
        binder = ledger.create_binder("Rares", BinderType.RARES)

        assert ledger.move_card(charizard, binder)
        assert ledger.move_card(mewtwo_alt, binder)
        assert not ledger.move_card(pikachu, binder)

        assert binder.unique_cards() == 2
        assert ledger.collection.card_count(pikachu) == 1

    def test_move_without_copy_is_noop(self, ledger: InventoryLedger, pikachu: Card) -> None:
        deck = ledger.create_deck("Starter", DeckType.NORMAL)
        assert ledger.move_card(pikachu, deck) is False
        assert deck.total_cards() == 0

    def test_move_at_zero_copies_is_noop(self, ledger: InventoryLedger, pikachu: Card) -> None:
        _stock(ledger, pikachu)
        ledger.collection.remove_card(pikachu)
        deck = ledger.create_deck("Starter", DeckType.NORMAL)
        assert ledger.move_card(pikachu, deck) is False

    def test_move_to_unowned_container_is_noop(
        self, ledger: InventoryLedger, pikachu: Card
    ) -> None:
        _stock(ledger, pikachu)
        stranger = Deck("Elsewhere", DeckType.NORMAL)
        assert ledger.move_card(pikachu, stranger) is False
        assert ledger.collection.card_count(pikachu) == 1

    def test_move_into_full_deck_is_noop(self, ledger: InventoryLedger, pikachu: Card) -> None:
        _stock(ledger, pikachu, copies=11)
        deck = ledger.create_deck("Starter", DeckType.NORMAL)
        for _ in range(10):
            assert ledger.move_card(pikachu, deck)
        assert ledger.move_card(pikachu, deck) is False
        assert ledger.collection.card_count(pikachu) == 1

    def test_move_uses_stored_card(self, ledger: InventoryLedger) -> None:
        stored = Card("Pikachu", Rarity.COMMON, Variant.NORMAL, Decimal("1"))
        look_alike = Card("Pikachu", Rarity.LEGENDARY, Variant.ALT_ART, Decimal("999"))
        _stock(ledger, stored)
        deck = ledger.create_deck("Starter", DeckType.NORMAL)

        assert ledger.move_card(look_alike, deck)
        assert deck.get_card("Pikachu") is stored
        assert deck.total_value() == Decimal("1")


class TestReturnCard:
    def test_return_moves_copy_back(self, ledger: InventoryLedger, pikachu: Card) -> None:
        _stock(ledger, pikachu)
        deck = ledger.create_deck("Starter", DeckType.NORMAL)
        ledger.move_card(pikachu, deck)

        assert ledger.return_card(deck, pikachu) is True
        assert deck.card_count(pikachu) == 0
        assert ledger.collection.card_count(pikachu) == 1

    def test_return_without_copy_is_noop(self, ledger: InventoryLedger, pikachu: Card) -> None:
        deck = ledger.create_deck("Starter", DeckType.NORMAL)
        assert ledger.return_card(deck, pikachu) is False


class TestDeleteContainer:
    def test_delete_returns_all_copies(
        self, ledger: InventoryLedger, pikachu: Card, bulbasaur: Card
    ) -> None:
        _stock(ledger, pikachu, copies=3)
        _stock(ledger, bulbasaur)
        deck = ledger.create_deck("Starter", DeckType.NORMAL)
        for _ in range(3):
            ledger.move_card(pikachu, deck)
        ledger.move_card(bulbasaur, deck)
        value_before = ledger.collection.total_value() + deck.total_value()

        ledger.delete_container(deck)

        assert not ledger.owns(deck)
        assert ledger.collection.card_count(pikachu) == 3
        assert ledger.collection.card_count(bulbasaur) == 1
        assert ledger.collection.total_value() == value_before
        assert ledger.money == 0

    def test_delete_empty_container(self, ledger: InventoryLedger) -> None:
        binder = ledger.create_binder("Empty", BinderType.PAUPER)
        ledger.delete_container(binder)
        assert ledger.containers() == []

    def test_delete_unowned_container_raises(self, ledger: InventoryLedger) -> None:
        with pytest.raises(ContainerNotFoundError) as exc_info:
            ledger.delete_container(Deck("Elsewhere", DeckType.NORMAL))
        assert exc_info.value.kind == FailureKind.NOT_FOUND

    def test_delete_keeps_total_card_count(self, ledger: InventoryLedger, pikachu: Card) -> None:
        _stock(ledger, pikachu, copies=4)
        deck = ledger.create_deck("Starter", DeckType.NORMAL)
        ledger.move_card(pikachu, deck)
        ledger.move_card(pikachu, deck)
        before = ledger.total_card_count()
        ledger.delete_container(deck)
        assert ledger.total_card_count() == before


class TestSellCard:
    def test_sell_credits_total_value(self, ledger: InventoryLedger, mewtwo_alt: Card) -> None:
        _stock(ledger, mewtwo_alt)
        assert ledger.sell_card(mewtwo_alt) is True
        assert ledger.money == Decimal("150")
        assert ledger.collection.card_count(mewtwo_alt) == 0

    def test_sell_twice_then_refuse(self, ledger: InventoryLedger, pikachu: Card) -> None:
        _stock(ledger, pikachu, copies=2)

        assert ledger.sell_card(pikachu)
        assert ledger.sell_card(pikachu)
        assert ledger.money == Decimal("10")
        assert ledger.sell_card(pikachu) is False
        assert ledger.money == Decimal("10")

    def test_sell_unknown_card_is_noop(self, ledger: InventoryLedger, pikachu: Card) -> None:
        assert ledger.sell_card(pikachu) is False
        assert ledger.money == 0

    def test_sell_uses_stored_value(self, ledger: InventoryLedger) -> None:
        _stock(ledger, Card("Pikachu", Rarity.COMMON, Variant.NORMAL, Decimal("1")))
        ledger.sell_card(Card("Pikachu", Rarity.COMMON, Variant.ALT_ART, Decimal("100")))
        assert ledger.money == Decimal("1")


class TestSellContainer:
    def test_sell_luxury_binder_with_premium(self, ledger: InventoryLedger) -> None:
        gold = Card("Gold", Rarity.COMMON, Variant.FULL_ART, Decimal("50"))
        _stock(ledger, gold)
        binder = ledger.create_binder("Shiny", BinderType.LUXURY)
        ledger.move_card(gold, binder)
        binder.set_selling_price(Decimal("150"))

        assert ledger.sell_container(binder) is True
        assert ledger.money == Decimal("165")
        assert not ledger.owns(binder)

    def test_sell_liquidates_cards(self, ledger: InventoryLedger, pikachu: Card) -> None:
        _stock(ledger, pikachu, copies=2)
        deck = ledger.create_deck("Sale", DeckType.SELLABLE)
        ledger.move_card(pikachu, deck)

        assert ledger.sell_container(deck)
        assert ledger.money == Decimal("5")
        assert ledger.collection.card_count(pikachu) == 1
        assert ledger.total_card_count() == 1

    def test_non_sellable_is_noop(self, ledger: InventoryLedger, pikachu: Card) -> None:
        _stock(ledger, pikachu)
        deck = ledger.create_deck("Keep", DeckType.NORMAL)
        ledger.move_card(pikachu, deck)

        assert ledger.sell_container(deck) is False
        assert ledger.owns(deck)
        assert ledger.money == 0

    @pytest.mark.parametrize("binder_type", [BinderType.NON_CURATED, BinderType.COLLECTOR])
    def test_tradeable_binders_do_not_sell(
        self, ledger: InventoryLedger, binder_type: BinderType
    ) -> None:
        binder = ledger.create_binder("Trade", binder_type)
        assert ledger.sell_container(binder) is False
        assert ledger.owns(binder)

    def test_unowned_container_is_noop(self, ledger: InventoryLedger) -> None:
        assert ledger.sell_container(Deck("Elsewhere", DeckType.SELLABLE)) is False
        assert ledger.money == 0


class TestTradeCard:
    def test_trade_swaps_one_copy(
        self, ledger: InventoryLedger, pikachu: Card, bulbasaur: Card
    ) -> None:
        _stock(ledger, pikachu)
        _stock(ledger, bulbasaur)
        binder = ledger.create_binder("Trades", BinderType.NON_CURATED)
        ledger.move_card(pikachu, binder)
        before = ledger.total_card_count()

        assert ledger.trade_card(binder, pikachu, bulbasaur) is True
        assert binder.card_count(pikachu) == 0
        assert binder.card_count(bulbasaur) == 1
        assert ledger.collection.card_count(bulbasaur) == 0
        assert ledger.total_card_count() == before - 1

    def test_non_tradeable_binder_is_noop(
        self, ledger: InventoryLedger, charizard: Card, mewtwo_alt: Card
    ) -> None:
        _stock(ledger, charizard)
        _stock(ledger, mewtwo_alt)
        binder = ledger.create_binder("Rares", BinderType.RARES)
        ledger.move_card(charizard, binder)

        assert ledger.trade_card(binder, charizard, mewtwo_alt) is False
        assert binder.card_count(charizard) == 1
        assert ledger.collection.card_count(mewtwo_alt) == 1

    def test_missing_outgoing_is_noop(
        self, ledger: InventoryLedger, pikachu: Card, bulbasaur: Card
    ) -> None:
        _stock(ledger, bulbasaur)
        binder = ledger.create_binder("Trades", BinderType.NON_CURATED)
        assert ledger.trade_card(binder, pikachu, bulbasaur) is False
        assert ledger.collection.card_count(bulbasaur) == 1

    def test_missing_incoming_is_noop(
        self, ledger: InventoryLedger, pikachu: Card, bulbasaur: Card
    ) -> None:
        _stock(ledger, pikachu)
        binder = ledger.create_binder("Trades", BinderType.NON_CURATED)
        ledger.move_card(pikachu, binder)
        assert ledger.trade_card(binder, pikachu, bulbasaur) is False
        assert binder.card_count(pikachu) == 1


    def test_trade_into_full_binder_is_noop(self, ledger: InventoryLedger) -> None:
        binder = ledger.create_binder("Bulk", BinderType.NON_CURATED)
        cards = [Card(f"Card {i}", Rarity.COMMON, Variant.NORMAL, Decimal("1")) for i in range(20)]
        for card in cards[:19]:
            _stock(ledger, card)
            ledger.move_card(card, binder)
        _stock(ledger, cards[0])
        ledger.move_card(cards[0], binder)
        _stock(ledger, cards[19])
        ledger.move_card(cards[19], binder)
        newcomer = _stock(ledger, Card("Newcomer", Rarity.COMMON, Variant.NORMAL, Decimal("1")))
        assert binder.unique_cards() == 20
        assert binder.card_count(cards[0]) == 2

        assert ledger.trade_card(binder, cards[0], newcomer) is False
        assert binder.unique_cards() == 20
        assert ledger.collection.card_count(newcomer) == 1

        assert ledger.trade_card(binder, cards[1], newcomer) is True
        assert binder.unique_cards() == 20


class TestMoney:
    def test_add_money_accepts_strings(self, ledger: InventoryLedger) -> None:
        ledger.add_money("12.34")
        ledger.add_money(1)
        assert ledger.money == Decimal("13.34")


class TestTotalCardCount:
    def test_counts_collection_and_containers(
        self, ledger: InventoryLedger, pikachu: Card, charizard: Card
    ) -> None:
        _stock(ledger, pikachu, copies=3)
        _stock(ledger, charizard, copies=2)
        deck = ledger.create_deck("Starter", DeckType.NORMAL)
        binder = ledger.create_binder("Rares", BinderType.RARES)
        ledger.move_card(pikachu, deck)
        ledger.move_card(charizard, binder)

        assert ledger.total_card_count() == 5

    def test_moves_do_not_change_total(self, ledger: InventoryLedger, pikachu: Card) -> None:
        _stock(ledger, pikachu, copies=5)
        deck = ledger.create_deck("Starter", DeckType.NORMAL)
        for _ in range(3):
            ledger.move_card(pikachu, deck)
        ledger.return_card(deck, pikachu)
        assert ledger.total_card_count() == 5
