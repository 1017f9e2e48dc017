from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import TypeVar

from cardledger.enums import Rarity, Variant
from cardledger.models.failure import FailureKind, LedgerError


class InvalidCardError(LedgerError):
    """Raised when card parameters fail validation."""

    def __init__(self, message: str, detail: str | None = None):
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message=message,
            detail=detail,
            suggestion="Check the card name and base value and try again.",
        )


@dataclass(frozen=True, slots=True)
class CardKey:
    """
    Identity of a card inside a container.

    Two cards with the same name are the same entry, whatever their rarity,
    variant or value. Containers key their counts by CardKey so that this
    aliasing is visible at the call site instead of hidden in __eq__.
    """

    name: str


@dataclass(frozen=True, slots=True)
class Card:
    """
    An immutable tradeable card.

    Equality and hashing use the name only.

    Attributes:
        name: Unique card name
        rarity: Card tier
        variant: Cosmetic version (sets the value multiplier)
        base_value: Price before the variant multiplier, never negative
    """

    name: str
    rarity: Rarity = field(compare=False)
    variant: Variant = field(compare=False)
    base_value: Decimal = field(compare=False)

    def __post_init__(self) -> None:
        if not self.name or not self.name.strip():
            raise InvalidCardError("Card name cannot be empty.")
        object.__setattr__(self, "rarity", _parse_enum(Rarity, self.rarity, "rarity"))
        object.__setattr__(self, "variant", _parse_enum(Variant, self.variant, "variant"))
        value = _to_decimal(self.base_value)
        if value < 0:
            raise InvalidCardError(
                "Value must not be negative.",
                detail=f"base_value={value}",
            )
        object.__setattr__(self, "base_value", value)

    @property
    def key(self) -> CardKey:
        return CardKey(self.name)

    @property
    def total_value(self) -> Decimal:
        """Base value times the variant multiplier."""
        return self.base_value * self.variant.multiplier

    def matches(self, other: "Card") -> bool:
        """True if name, rarity and variant are all equal."""
        return (
            self.name == other.name
            and self.rarity == other.rarity
            and self.variant == other.variant
        )

    def __str__(self) -> str:
        return (
            f"Name: {self.name} | Rarity: {self.rarity.value} | "
            f"Variant: {self.variant.value} | Base Value: ${self.base_value:.2f} | "
            f"Total Value: ${self.total_value:.2f}"
        )


EnumT = TypeVar("EnumT", Rarity, Variant)


def _parse_enum(enum_type: type[EnumT], value: EnumT | str, label: str) -> EnumT:
    try:
        return enum_type(value)
    except ValueError as e:
        raise InvalidCardError(f"Unknown {label}.", detail=f"{label}={value!r}") from e


def _to_decimal(value: Decimal | int | float | str) -> Decimal:
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            # str() keeps floats like 0.1 from turning into binary noise
            result = Decimal(str(value).strip())
        except InvalidOperation as e:
            raise InvalidCardError(
                "Base value must be a number.",
                detail=f"base_value={value!r}",
            ) from e
    if not result.is_finite():
        raise InvalidCardError(
            "Base value must be a number.",
            detail=f"base_value={value!r}",
        )
    return result


def create_card(
    name: str,
    rarity: Rarity | str,
    variant: Variant | str,
    base_value: Decimal | int | float | str,
) -> Card:
    """
    Build a Card from raw input.

    Accepts enum members or their names, and a base value given as any
    number or numeric string. The name is stripped.

    Raises:
        InvalidCardError: If any parameter is invalid
    """
    return Card(
        name=(name or "").strip(),
        rarity=_parse_enum(Rarity, rarity, "rarity"),
        variant=_parse_enum(Variant, variant, "variant"),
        base_value=_to_decimal(base_value),
    )
