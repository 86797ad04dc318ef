"""Outcome and failure types shared by the validators and steppers.

Every validation call produces exactly one :class:`VerificationOutcome`, and
every stepping call produces either ``None`` (success) or a
:class:`SteppingFailure`. Neither is ever raised; both carry a user-facing
``message`` so the caller can surface them directly in a status line.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FieldKind(Enum):
    """The fixed-purpose fields of a transaction record."""

    DATE = "date"
    AMOUNT = "amount"
    TX_METHOD = "tx_method"
    TX_TYPE = "tx_type"
    TAGS = "tags"

    @property
    def label(self) -> str:
        return _KIND_LABELS[self]


_KIND_LABELS: dict[FieldKind, str] = {
    FieldKind.DATE: "Date",
    FieldKind.AMOUNT: "Amount",
    FieldKind.TX_METHOD: "Tx Method",
    FieldKind.TX_TYPE: "Tx Type",
    FieldKind.TAGS: "Tags",
}


class StepDirection(Enum):
    INCREASE = "increase"
    DECREASE = "decrease"


class OutcomeStatus(Enum):
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    EMPTY = "empty"


class RejectionReason(Enum):
    """Why a validator did not accept its buffer."""

    PARSING_ERROR = "parsing_error"
    INVALID_DATE = "invalid_date"
    INVALID_YEAR = "invalid_year"
    INVALID_MONTH = "invalid_month"
    INVALID_DAY = "invalid_day"
    YEAR_OUT_OF_RANGE = "year_out_of_range"
    MONTH_OUT_OF_RANGE = "month_out_of_range"
    DAY_OUT_OF_RANGE = "day_out_of_range"
    NON_EXISTING_DATE = "non_existing_date"
    AMOUNT_BELOW_ZERO = "amount_below_zero"
    INVALID_TX_METHOD = "invalid_tx_method"
    INVALID_TX_TYPE = "invalid_tx_type"
    NON_EXISTING_TAG = "non_existing_tag"

    @property
    def message(self) -> str:
        return _REJECTION_MESSAGES[self]


_REJECTION_MESSAGES: dict[RejectionReason, str] = {
    RejectionReason.PARSING_ERROR: "Could not parse the value",
    RejectionReason.INVALID_DATE: "Date: Unknown date format. Expected YYYY-MM-DD",
    RejectionReason.INVALID_YEAR: "Date: Year must be 4 digits",
    RejectionReason.INVALID_MONTH: "Date: Month must be 2 digits",
    RejectionReason.INVALID_DAY: "Date: Day must be 2 digits",
    RejectionReason.YEAR_OUT_OF_RANGE: "Date: Year must be between 2022 and 2037",
    RejectionReason.MONTH_OUT_OF_RANGE: "Date: Month must be between 01 and 12",
    RejectionReason.DAY_OUT_OF_RANGE: "Date: Day must be between 01 and 31",
    RejectionReason.NON_EXISTING_DATE: "Date: This date does not exist",
    RejectionReason.AMOUNT_BELOW_ZERO: "Amount: Value must be bigger than zero",
    RejectionReason.INVALID_TX_METHOD: "Tx Method: Transaction method not found",
    RejectionReason.INVALID_TX_TYPE: "Tx Type: Must be Income, Expense or Transfer",
    RejectionReason.NON_EXISTING_TAG: "Tags: One or more tags do not exist",
}


@dataclass(frozen=True, slots=True)
class VerificationOutcome:
    """Tri-state result of a single validation call.

    Build instances through :meth:`accepted`, :meth:`rejected` and
    :meth:`empty`; ``reason`` is set exactly when ``status`` is ``REJECTED``.
    """

    kind: FieldKind
    status: OutcomeStatus
    reason: RejectionReason | None = None

    def __post_init__(self) -> None:
        if (self.status is OutcomeStatus.REJECTED) != (self.reason is not None):
            raise ValueError("reason must be set exactly for rejected outcomes")

    @classmethod
    def accepted(cls, kind: FieldKind) -> VerificationOutcome:
        return cls(kind, OutcomeStatus.ACCEPTED)

    @classmethod
    def rejected(cls, kind: FieldKind, reason: RejectionReason) -> VerificationOutcome:
        return cls(kind, OutcomeStatus.REJECTED, reason)

    @classmethod
    def empty(cls, kind: FieldKind) -> VerificationOutcome:
        return cls(kind, OutcomeStatus.EMPTY)

    @property
    def is_accepted(self) -> bool:
        return self.status is OutcomeStatus.ACCEPTED

    @property
    def is_rejected(self) -> bool:
        return self.status is OutcomeStatus.REJECTED

    @property
    def is_empty(self) -> bool:
        return self.status is OutcomeStatus.EMPTY

    @property
    def message(self) -> str | None:
        """User-facing text for a rejection; ``None`` otherwise."""

        if self.reason is None:
            return None
        if self.reason is RejectionReason.PARSING_ERROR:
            return f"{self.kind.label}: {self.reason.message}"
        return self.reason.message


class SteppingFailure(Enum):
    """Why a stepping call could not produce a successor value."""

    INVALID_DATE = "invalid_date"
    INVALID_TX_METHOD = "invalid_tx_method"
    INVALID_AMOUNT = "invalid_amount"
    INVALID_TX_TYPE = "invalid_tx_type"
    INVALID_TAGS = "invalid_tags"
    UNKNOWN_AMOUNT_STATE = "unknown_amount_state"

    @property
    def message(self) -> str:
        return _STEPPING_MESSAGES[self]


_STEPPING_MESSAGES: dict[SteppingFailure, str] = {
    SteppingFailure.INVALID_DATE: "Date: Failed to step due to invalid date format",
    SteppingFailure.INVALID_TX_METHOD: "Tx Method: Failed to step as the tx method does not exist",
    SteppingFailure.INVALID_AMOUNT: "Amount: Failed to step due to invalid amount format",
    SteppingFailure.INVALID_TX_TYPE: "Tx Type: Failed to step due to invalid tx type",
    SteppingFailure.INVALID_TAGS: "Tags: Failed to step as the tag does not exist",
    SteppingFailure.UNKNOWN_AMOUNT_STATE: (
        "Amount: Failed to step value. Current value cannot be determined"
    ),
}


__all__ = [
    "FieldKind",
    "StepDirection",
    "OutcomeStatus",
    "RejectionReason",
    "VerificationOutcome",
    "SteppingFailure",
]
