"""Whole-record checks run before a transaction draft is handed off.

Field validators look at one box at a time. Before a draft leaves the editor
two more things must hold: the required boxes are filled, and a transfer does
not move money from a method to itself.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from .buffer import FieldBuffer
from .models import FieldKind, VerificationOutcome
from .store import FieldStore
from .validators import FieldValidator


class TransactionDraft(BaseModel):
    """Raw text of every editable box of a transaction record.

    ``to_method`` only matters for transfers.
    """

    model_config = ConfigDict(extra="forbid")

    date: str = ""
    details: str = ""
    from_method: str = ""
    to_method: str = ""
    amount: str = ""
    tx_type: str = ""
    tags: str = ""

    @property
    def is_transfer(self) -> bool:
        return self.tx_type == "Transfer"


class CheckingError(Enum):
    EMPTY_DATE = "empty_date"
    EMPTY_METHOD = "empty_method"
    EMPTY_AMOUNT = "empty_amount"
    EMPTY_TX_TYPE = "empty_tx_type"
    SAME_TX_METHOD = "same_tx_method"

    @property
    def message(self) -> str:
        return _CHECKING_MESSAGES[self]


_CHECKING_MESSAGES: dict[CheckingError, str] = {
    CheckingError.EMPTY_DATE: "Date: Date cannot be empty",
    CheckingError.EMPTY_METHOD: "Tx Method: TX Method cannot be empty",
    CheckingError.EMPTY_AMOUNT: "Amount: Amount cannot be empty",
    CheckingError.EMPTY_TX_TYPE: "Tx Type: Transaction Type cannot be empty",
    CheckingError.SAME_TX_METHOD: "Tx Method: From and To methods cannot be the same for Transfer",
}

# (draft attribute, field kind) in on-screen order.
_FIELDS: tuple[tuple[str, FieldKind], ...] = (
    ("date", FieldKind.DATE),
    ("from_method", FieldKind.TX_METHOD),
    ("amount", FieldKind.AMOUNT),
    ("tx_type", FieldKind.TX_TYPE),
    ("tags", FieldKind.TAGS),
)


def verify_draft(
    draft: TransactionDraft,
    store: FieldStore,
    validator: FieldValidator | None = None,
) -> dict[str, VerificationOutcome]:
    """Validate every box of ``draft`` in place.

    Corrected text is written back to the draft. Returns the outcome per
    attribute name; ``to_method`` is only included for transfers (the type is
    validated before it so an abbreviated ``t`` counts).
    """

    validator = validator or FieldValidator()
    outcomes: dict[str, VerificationOutcome] = {}

    for name, kind in _FIELDS:
        buf = FieldBuffer(getattr(draft, name))
        outcomes[name] = validator.verify(kind, buf, store)
        setattr(draft, name, buf.text)

    if draft.is_transfer:
        buf = FieldBuffer(draft.to_method)
        outcomes["to_method"] = validator.verify_tx_method(buf, store)
        draft.to_method = buf.text

    return outcomes


def check_draft(draft: TransactionDraft) -> CheckingError | None:
    """Return the first completeness problem of ``draft``, if any."""

    if not draft.date:
        return CheckingError.EMPTY_DATE
    if not draft.from_method:
        return CheckingError.EMPTY_METHOD
    if draft.is_transfer and not draft.to_method:
        return CheckingError.EMPTY_METHOD
    if not draft.amount:
        return CheckingError.EMPTY_AMOUNT
    if not draft.tx_type:
        return CheckingError.EMPTY_TX_TYPE
    if draft.is_transfer and draft.from_method == draft.to_method:
        return CheckingError.SAME_TX_METHOD
    return None


__all__ = ["TransactionDraft", "CheckingError", "verify_draft", "check_draft"]
