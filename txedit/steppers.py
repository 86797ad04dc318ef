"""Directional stepping (arrow-key navigation) for every field kind.

A :class:`FieldStepper` wraps a :class:`~txedit.validators.Verifier`. Each
``step_*`` method validates the buffer first and then, depending on the
outcome, overwrites it with the next/previous value:

========  ==================================  ===========================
Field     Accepted                            Empty
========  ==================================  ===========================
Date      +/- one day, stops at the bounds    ``2022-01-01``
Amount    +/- 1.00, stops at the bounds       ``1.00``
Method    next/previous store entry (cyclic)  first store entry
Type      Income -> Expense -> Transfer       ``Income``
Tags      next/previous store tag for the     first store tag
          trailing segment (cyclic)
========  ==================================  ===========================

Methods return ``None`` on success and a
:class:`~txedit.models.SteppingFailure` when no sensible successor exists.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, timedelta

from .buffer import TextBuffer
from .logging_setup import get_logger
from .models import (
    FieldKind,
    RejectionReason,
    StepDirection,
    SteppingFailure,
    VerificationOutcome,
)
from .store import FieldStore
from .validators import DATE_CEILING, DATE_FLOOR, TX_TYPES, FieldValidator, Verifier

_logger = get_logger("steppers")

AMOUNT_CEILING = 9_999_999_999.99
AMOUNT_FLOOR = 0.00
AMOUNT_STEP = 1.0
AMOUNT_DEFAULT = "1.00"


def _cycle(index: int, size: int, direction: StepDirection) -> int:
    if direction is StepDirection.INCREASE:
        return (index + 1) % size
    return (index - 1) % size


def _index_casefold(items: Sequence[str], value: str) -> int | None:
    lower = value.lower()
    for i, item in enumerate(items):
        if item.lower() == lower:
            return i
    return None


class FieldStepper:
    """Steppers for every field kind, built on a validator."""

    def __init__(self, verifier: Verifier | None = None) -> None:
        self.verifier: Verifier = verifier if verifier is not None else FieldValidator()

    def _fail(self, failure: SteppingFailure, outcome: VerificationOutcome) -> SteppingFailure:
        _logger.debug("cannot step %s: %s", outcome.kind.value, outcome.reason)
        return failure

    # ---- Date -------------------------------------------------------------

    def step_date(self, buffer: TextBuffer, direction: StepDirection) -> SteppingFailure | None:
        outcome = self.verifier.verify_date(buffer)
        if outcome.is_rejected:
            return self._fail(SteppingFailure.INVALID_DATE, outcome)
        if outcome.is_empty:
            # Either direction starts from the floor.
            buffer.text = DATE_FLOOR.isoformat()
            return None

        current = date.fromisoformat(buffer.text)
        if direction is StepDirection.INCREASE:
            if current != DATE_CEILING:
                current += timedelta(days=1)
        elif current != DATE_FLOOR:
            current -= timedelta(days=1)
        buffer.text = current.isoformat()
        return None

    # ---- Amount -----------------------------------------------------------

    def step_amount(self, buffer: TextBuffer, direction: StepDirection) -> SteppingFailure | None:
        outcome = self.verifier.verify_amount(buffer)
        if outcome.is_empty:
            buffer.text = AMOUNT_DEFAULT
            return None
        if outcome.is_rejected:
            if outcome.reason is RejectionReason.AMOUNT_BELOW_ZERO:
                # Decrease keeps the corrected magnitude.
                if direction is StepDirection.INCREASE:
                    buffer.text = AMOUNT_DEFAULT
                return None
            return self._fail(SteppingFailure.INVALID_AMOUNT, outcome)

        try:
            current = float(buffer.text)
        except ValueError:
            return self._fail(SteppingFailure.UNKNOWN_AMOUNT_STATE, outcome)

        if direction is StepDirection.INCREASE:
            if current + AMOUNT_STEP <= AMOUNT_CEILING:
                current += AMOUNT_STEP
        elif current - AMOUNT_STEP >= AMOUNT_FLOOR:
            current -= AMOUNT_STEP
        buffer.text = f"{current:.2f}"
        return None

    # ---- Transaction method -----------------------------------------------

    def step_tx_method(
        self, buffer: TextBuffer, direction: StepDirection, store: FieldStore
    ) -> SteppingFailure | None:
        methods = store.list_known_methods()
        outcome = self.verifier.verify_tx_method(buffer, store)
        if outcome.is_rejected:
            return self._fail(SteppingFailure.INVALID_TX_METHOD, outcome)
        if not methods:
            return self._fail(SteppingFailure.INVALID_TX_METHOD, outcome)
        if outcome.is_empty:
            buffer.text = methods[0]
            return None

        index = _index_casefold(methods, buffer.text)
        if index is None:
            # The store changed between the two reads.
            return self._fail(SteppingFailure.INVALID_TX_METHOD, outcome)
        buffer.text = methods[_cycle(index, len(methods), direction)]
        return None

    # ---- Transaction type -------------------------------------------------

    def step_tx_type(self, buffer: TextBuffer, direction: StepDirection) -> SteppingFailure | None:
        outcome = self.verifier.verify_tx_type(buffer)
        if not buffer.text:
            buffer.text = TX_TYPES[0]
            return None

        first = buffer.text[0].lower()
        index = next((i for i, t in enumerate(TX_TYPES) if t[0].lower() == first), 0)
        buffer.text = TX_TYPES[_cycle(index, len(TX_TYPES), direction)]

        # The rewrite happens either way; the failure tells the caller the
        # previous content was not canonical.
        if outcome.is_rejected:
            return self._fail(SteppingFailure.INVALID_TX_TYPE, outcome)
        return None

    # ---- Tags -------------------------------------------------------------

    def step_tags(
        self,
        buffer: TextBuffer,
        direction: StepDirection,
        store: FieldStore,
        *,
        autofill: str = "",
    ) -> SteppingFailure | None:
        """Step the trailing tag of a comma list; earlier tags stay untouched.

        ``autofill`` is the caller's suggestion for an unknown trailing tag;
        it replaces that tag and the step reports ``INVALID_TAGS``.
        """

        tags = store.list_known_tags()
        if not buffer.text:
            if not tags:
                return SteppingFailure.INVALID_TAGS
            buffer.text = tags[0]
            return None

        segments = [s.strip() for s in buffer.text.split(",")]
        working = segments.pop()

        index = _index_casefold(tags, working)
        if index is None:
            if working:
                segments.append(autofill)
                buffer.text = ", ".join(segments)
                _logger.debug("unknown trailing tag %r replaced by %r", working, autofill)
                return SteppingFailure.INVALID_TAGS
            # Trailing comma: start the next tag from the first known one.
            if tags:
                segments.append(tags[0])
            buffer.text = ", ".join(segments)
            return None

        segments.append(tags[_cycle(index, len(tags), direction)])
        buffer.text = ", ".join(segments)
        return None

    # ---- Dispatch ---------------------------------------------------------

    def step(
        self,
        kind: FieldKind,
        buffer: TextBuffer,
        direction: StepDirection,
        store: FieldStore | None = None,
        *,
        autofill: str = "",
    ) -> SteppingFailure | None:
        """Run the stepper for ``kind``."""

        if kind is FieldKind.DATE:
            return self.step_date(buffer, direction)
        if kind is FieldKind.AMOUNT:
            return self.step_amount(buffer, direction)
        if kind is FieldKind.TX_TYPE:
            return self.step_tx_type(buffer, direction)
        if store is None:
            raise ValueError(f"{kind.value} stepping needs a store")
        if kind is FieldKind.TX_METHOD:
            return self.step_tx_method(buffer, direction, store)
        return self.step_tags(buffer, direction, store, autofill=autofill)


__all__ = ["FieldStepper", "AMOUNT_CEILING", "AMOUNT_FLOOR"]
