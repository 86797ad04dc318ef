"""Public interface for the ``txedit`` package.

Field validation and stepping for a transaction-record editor. This module
only re-exports the stable import surface; there is no runtime logic here.
"""

from .api import (
    step_amount,
    step_date,
    step_tags,
    step_tx_method,
    step_tx_type,
    verify_amount,
    verify_date,
    verify_tags,
    verify_tags_forced,
    verify_tx_method,
    verify_tx_type,
)
from .buffer import FieldBuffer, TextBuffer
from .fuzzy import autofill_tag, best_fuzzy_match
from .models import (
    FieldKind,
    OutcomeStatus,
    RejectionReason,
    StepDirection,
    SteppingFailure,
    VerificationOutcome,
)
from .records import CheckingError, TransactionDraft, check_draft, verify_draft
from .steppers import FieldStepper
from .store import FieldStore, SqlFieldStore, StaticFieldStore, StoreError
from .validators import FieldValidator, Verifier

__all__ = [
    # API
    "verify_date",
    "verify_amount",
    "verify_tx_method",
    "verify_tx_type",
    "verify_tags",
    "verify_tags_forced",
    "step_date",
    "step_amount",
    "step_tx_method",
    "step_tx_type",
    "step_tags",
    "FieldValidator",
    "FieldStepper",
    "Verifier",
    # Buffers / store
    "TextBuffer",
    "FieldBuffer",
    "FieldStore",
    "StaticFieldStore",
    "SqlFieldStore",
    "StoreError",
    "best_fuzzy_match",
    "autofill_tag",
    # Models / types
    "FieldKind",
    "OutcomeStatus",
    "RejectionReason",
    "StepDirection",
    "SteppingFailure",
    "VerificationOutcome",
    # Records
    "TransactionDraft",
    "CheckingError",
    "verify_draft",
    "check_draft",
]
