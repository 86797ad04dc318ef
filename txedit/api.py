"""Public function interface for the ``txedit`` package.

One validate and one step function per field kind, backed by shared default
:class:`~txedit.validators.FieldValidator` and
:class:`~txedit.steppers.FieldStepper` instances. Neither keeps state between
calls, so sharing them is safe; build your own instances to inject a different
fuzzy matcher.
"""

from __future__ import annotations

from .buffer import TextBuffer
from .models import StepDirection, SteppingFailure, VerificationOutcome
from .steppers import FieldStepper
from .store import FieldStore
from .validators import FieldValidator

_VALIDATOR = FieldValidator()
_STEPPER = FieldStepper(_VALIDATOR)


def verify_date(buffer: TextBuffer) -> VerificationOutcome:
    return _VALIDATOR.verify_date(buffer)


def verify_amount(buffer: TextBuffer) -> VerificationOutcome:
    return _VALIDATOR.verify_amount(buffer)


def verify_tx_method(buffer: TextBuffer, store: FieldStore) -> VerificationOutcome:
    return _VALIDATOR.verify_tx_method(buffer, store)


def verify_tx_type(buffer: TextBuffer) -> VerificationOutcome:
    return _VALIDATOR.verify_tx_type(buffer)


def verify_tags(buffer: TextBuffer) -> None:
    _VALIDATOR.verify_tags(buffer)


def verify_tags_forced(buffer: TextBuffer, store: FieldStore) -> VerificationOutcome:
    return _VALIDATOR.verify_tags_forced(buffer, store)


def step_date(buffer: TextBuffer, direction: StepDirection) -> SteppingFailure | None:
    return _STEPPER.step_date(buffer, direction)


def step_amount(buffer: TextBuffer, direction: StepDirection) -> SteppingFailure | None:
    return _STEPPER.step_amount(buffer, direction)


def step_tx_method(
    buffer: TextBuffer, direction: StepDirection, store: FieldStore
) -> SteppingFailure | None:
    return _STEPPER.step_tx_method(buffer, direction, store)


def step_tx_type(buffer: TextBuffer, direction: StepDirection) -> SteppingFailure | None:
    return _STEPPER.step_tx_type(buffer, direction)


def step_tags(
    buffer: TextBuffer, direction: StepDirection, store: FieldStore, *, autofill: str = ""
) -> SteppingFailure | None:
    """Step the trailing tag; ``autofill`` replaces an unknown one."""

    return _STEPPER.step_tags(buffer, direction, store, autofill=autofill)


__all__ = [
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
]
