"""
Operation Result Envelope — Uniform Outcome Classification.

Every ledger command returns an OperationResult so the presentation layer
can render outcomes without knowing which operation produced them.

Outcome types:
- Success: Operation completed
- Refusal: A container rule declined the request (expected, explainable)
- KnownFailure: Input or state was invalid and the system knows why
- UnknownFailure: Something unexpected happened

INVARIANT: Checks precede mutation. A failure of any kind means the ledger
is exactly as it was before the call.
"""

from enum import Enum
from typing import Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    # Input validation failures
    INVALID_INPUT = "invalid_input"
    MISSING_REQUIRED = "missing_required"

    # Resource failures
    NOT_FOUND = "not_found"
    CARD_NOT_IN_COLLECTION = "card_not_in_collection"

    # Container rule violations
    DUPLICATE_CARD = "duplicate_card"
    CARD_NOT_ALLOWED = "card_not_allowed"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    NOT_SELLABLE = "not_sellable"
    NOT_TRADEABLE = "not_tradeable"
    PRICE_TOO_LOW = "price_too_low"
    PRICE_LOCKED = "price_locked"
    UNCONFIRMED_TRADE = "unconfirmed_trade"

    # Internal errors
    INVARIANT_VIOLATION = "invariant_violation"

    # Unknown
    UNKNOWN = "unknown"


class OutcomeType(str, Enum):
    """High-level outcome classification."""

    SUCCESS = "success"
    REFUSAL = "refusal"
    KNOWN_FAILURE = "known_failure"
    UNKNOWN_FAILURE = "unknown_failure"


T = TypeVar("T")

UNKNOWN_FAILURE_MESSAGE = "The operation failed for an unexpected reason."
UNKNOWN_FAILURE_SUGGESTION = "Nothing was changed. If this persists, please report the issue."


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class OperationResult(BaseModel, Generic[T]):
    """
    Universal result envelope for ledger commands.

    Every result is classified into one of four outcome types, so no
    failure reaches the user unexplained.
    """

    outcome: OutcomeType = Field(
        ...,
        description="High-level classification of the result",
    )
    data: T | None = Field(
        default=None,
        description="Result data (present on success)",
    )
    message: str | None = Field(
        default=None,
        description="Confirmation text for successful operations",
    )
    failure: FailureDetail | None = Field(
        default=None,
        description="Failure details (present on non-success)",
    )

    @property
    def ok(self) -> bool:
        """True when the operation succeeded."""
        return self.outcome == OutcomeType.SUCCESS

    @property
    def description(self) -> str:
        """The single line of text a caller shows to the user."""
        if self.failure is not None:
            return self.failure.message
        return self.message or ""

    @classmethod
    def success(cls, data: Any = None, message: str | None = None) -> "OperationResult[Any]":
        return cls(outcome=OutcomeType.SUCCESS, data=data, message=message)

    @classmethod
    def failed(cls, outcome: OutcomeType, **failure: Any) -> "OperationResult[Any]":
        """
        Create a non-success result of the given outcome type.

        Keyword arguments are the FailureDetail fields (kind, message,
        detail, suggestion).
        """
        if outcome == OutcomeType.SUCCESS:
            raise ValueError("failed() needs a non-success outcome")
        return cls(outcome=outcome, failure=FailureDetail(**failure))

    @classmethod
    def refusal(cls, kind: FailureKind, message: str, **extra: str | None) -> "OperationResult[Any]":
        """A container rule declined the request, e.g. a COMMON card offered to a RARES binder."""
        return cls.failed(OutcomeType.REFUSAL, kind=kind, message=message, **extra)

    @classmethod
    def known_failure(
        cls, kind: FailureKind, message: str, **extra: str | None
    ) -> "OperationResult[Any]":
        """The input or state was invalid, e.g. a negative base value."""
        return cls.failed(OutcomeType.KNOWN_FAILURE, kind=kind, message=message, **extra)

    @classmethod
    def unknown_failure(cls, detail: str | None = None) -> "OperationResult[Any]":
        """The message is fixed. Only the technical detail varies."""
        return cls.failed(
            OutcomeType.UNKNOWN_FAILURE,
            kind=FailureKind.UNKNOWN,
            message=UNKNOWN_FAILURE_MESSAGE,
            detail=detail,
            suggestion=UNKNOWN_FAILURE_SUGGESTION,
        )


class ClassifiedError(Exception):
    """
    An exception that already knows how it should be reported.

    Subclasses fix the outcome type; instances carry the failure kind and
    the user-facing message. str(error) is the message.
    """

    outcome: ClassVar[OutcomeType] = OutcomeType.KNOWN_FAILURE

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion

    def to_result(self) -> OperationResult[Any]:
        return OperationResult.failed(
            self.outcome,
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class LedgerError(ClassifiedError):
    """Known, explainable failure: bad input or an impossible state."""

    outcome = OutcomeType.KNOWN_FAILURE


class RuleRefusal(ClassifiedError):
    """
    A container rule declined the request.

    The input is well-formed; the target simply does not accept it.
    """

    outcome = OutcomeType.REFUSAL


def create_unknown_failure(exception: Exception) -> OperationResult[Any]:
    """
    Create an unknown failure result from an exception.

    Only the exception type is exposed; the message may contain internals.
    """
    return OperationResult.unknown_failure(detail=type(exception).__name__)
