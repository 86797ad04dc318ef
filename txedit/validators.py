"""Per-field validation with auto-correction.

Each ``verify_*`` method takes a mutable text buffer (see
:mod:`txedit.buffer`), normalizes it in place and returns a
:class:`~txedit.models.VerificationOutcome`. A rejected buffer is left holding
a best-effort correction that the next call can pick up, so repeatedly
validating converges towards an accepted value.

Only two read-only store lookups happen here (known methods and known tags);
the store is passed per call. The fuzzy matcher used for method correction is
injected at construction time.
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from datetime import date
from typing import Protocol

from .arithmetic import OPERATORS, ExpressionError, evaluate_expression, has_operator
from .buffer import TextBuffer
from .fuzzy import best_fuzzy_match
from .logging_setup import get_logger
from .models import FieldKind, RejectionReason, VerificationOutcome
from .store import FieldStore

_logger = get_logger("validators")

DATE_FLOOR = date(2022, 1, 1)
DATE_CEILING = date(2037, 12, 31)
DEFAULT_YEAR = "2022"

AMOUNT_INTEGER_DIGITS = 10

TX_TYPES: tuple[str, ...] = ("Income", "Expense", "Transfer")

type Matcher = Callable[[str, Sequence[str]], str]


class Verifier(Protocol):
    """What a stepper needs from a validator."""

    def verify_date(self, buffer: TextBuffer) -> VerificationOutcome: ...

    def verify_amount(self, buffer: TextBuffer) -> VerificationOutcome: ...

    def verify_tx_method(self, buffer: TextBuffer, store: FieldStore) -> VerificationOutcome: ...

    def verify_tx_type(self, buffer: TextBuffer) -> VerificationOutcome: ...

    def verify_tags(self, buffer: TextBuffer) -> None: ...

    def verify_tags_forced(self, buffer: TextBuffer, store: FieldStore) -> VerificationOutcome: ...


# ---------------------------------------------------------------------------
# Small parsing helpers
# ---------------------------------------------------------------------------


def _parse_unsigned(part: str) -> int | None:
    if part.isascii() and part.isdigit():
        return int(part)
    return None


def _two_digits(value: int, upper: int) -> str:
    """Pad single digits, clamp values above ``upper``, re-render the rest."""

    if value < 10:
        return f"0{value}"
    if value > upper:
        return str(upper)
    return f"{value:02d}"


def _clamp_segment(value: int, lower: int, upper: int, width: int) -> str:
    return f"{min(max(value, lower), upper):0{width}d}"


def split_tags(text: str) -> list[str]:
    """Trimmed, non-empty, first-seen-unique comma tokens (case-sensitive)."""

    unique: list[str] = []
    seen: set[str] = set()
    for token in (t.strip() for t in text.split(",")):
        if token and token not in seen:
            seen.add(token)
            unique.append(token)
    return unique


# ---------------------------------------------------------------------------
# Validator
# ---------------------------------------------------------------------------


class FieldValidator:
    """Validators for every field kind of a transaction record."""

    def __init__(self, *, matcher: Matcher = best_fuzzy_match) -> None:
        self._matcher = matcher

    # ---- Date -------------------------------------------------------------

    def verify_date(self, buffer: TextBuffer) -> VerificationOutcome:
        """Validate and correct a ``YYYY-MM-DD`` date.

        Structure is checked before values, one rule per call: year length,
        month length, day length, year range (2022..2037), month range, day
        range, and finally whether the calendar date exists. Each failed rule
        rewrites only its own segment.
        """

        kind = FieldKind.DATE
        if not buffer.text:
            return VerificationOutcome.empty(kind)

        text = "".join(c for c in buffer.text if c.isnumeric() or c == "-")
        buffer.text = text

        parts = text.split("-")
        if len(parts) != 3:
            buffer.text = DATE_FLOOR.isoformat()
            return VerificationOutcome.rejected(kind, RejectionReason.INVALID_DATE)

        year_s, month_s, day_s = parts
        year, month, day = (_parse_unsigned(p) for p in parts)
        if year is None or month is None or day is None:
            return VerificationOutcome.rejected(kind, RejectionReason.PARSING_ERROR)

        if len(year_s) != 4:
            year_s = DEFAULT_YEAR if len(year_s) < 4 else year_s[:4]
            buffer.text = f"{year_s}-{month_s}-{day_s}"
            return VerificationOutcome.rejected(kind, RejectionReason.INVALID_YEAR)
        if len(month_s) != 2:
            buffer.text = f"{year_s}-{_two_digits(month, 12)}-{day_s}"
            return VerificationOutcome.rejected(kind, RejectionReason.INVALID_MONTH)
        if len(day_s) != 2:
            buffer.text = f"{year_s}-{month_s}-{_two_digits(day, 31)}"
            return VerificationOutcome.rejected(kind, RejectionReason.INVALID_DAY)

        if not DATE_FLOOR.year <= year <= DATE_CEILING.year:
            clamped = _clamp_segment(year, DATE_FLOOR.year, DATE_CEILING.year, 4)
            buffer.text = f"{clamped}-{month_s}-{day_s}"
            return VerificationOutcome.rejected(kind, RejectionReason.YEAR_OUT_OF_RANGE)
        if not 1 <= month <= 12:
            buffer.text = f"{year_s}-{_clamp_segment(month, 1, 12, 2)}-{day_s}"
            return VerificationOutcome.rejected(kind, RejectionReason.MONTH_OUT_OF_RANGE)
        if not 1 <= day <= 31:
            buffer.text = f"{year_s}-{month_s}-{_clamp_segment(day, 1, 31, 2)}"
            return VerificationOutcome.rejected(kind, RejectionReason.DAY_OUT_OF_RANGE)

        try:
            date(year, month, day)
        except ValueError:
            return VerificationOutcome.rejected(kind, RejectionReason.NON_EXISTING_DATE)

        return VerificationOutcome.accepted(kind)

    # ---- Amount -----------------------------------------------------------

    def verify_amount(self, buffer: TextBuffer) -> VerificationOutcome:
        """Validate an amount, evaluating any inline arithmetic first.

        The canonical form is ``<digits>.<2 digits>`` with at most 10 integer
        digits. Zero or negative results are rewritten as their magnitude and
        rejected so the caller can confirm the flip.
        """

        kind = FieldKind.AMOUNT
        if not buffer.text:
            return VerificationOutcome.empty(kind)

        text = "".join(
            c for c in buffer.text if (c.isascii() and c.isdigit()) or c == "." or c in OPERATORS
        )
        buffer.text = text
        if not text:
            return VerificationOutcome.rejected(kind, RejectionReason.PARSING_ERROR)

        if has_operator(text):
            try:
                text = evaluate_expression(text)
            except ExpressionError as e:
                _logger.debug("amount expression %r not evaluated: %s", text, e)
                return VerificationOutcome.rejected(kind, RejectionReason.PARSING_ERROR)
            buffer.text = text

        if "." in text:
            if not text.split(".")[1]:
                text += "00"
        else:
            text += ".00"
        buffer.text = text

        try:
            value = float(text)
        except ValueError:
            return VerificationOutcome.rejected(kind, RejectionReason.PARSING_ERROR)

        if value <= 0:
            buffer.text = f"{value - value * 2:.2f}"
            return VerificationOutcome.rejected(kind, RejectionReason.AMOUNT_BELOW_ZERO)

        whole, fraction = text.split(".")
        if len(fraction) < 2:
            fraction = fraction + "0"
        elif len(fraction) > 2:
            fraction = fraction[:2]

        if len(whole) > AMOUNT_INTEGER_DIGITS:
            whole = whole[:AMOUNT_INTEGER_DIGITS]
            # Leading zeros can truncate down to nothing but zeros.
            if float(f"{whole}.{fraction}") <= 0:
                buffer.text = "0.00"
                return VerificationOutcome.rejected(kind, RejectionReason.AMOUNT_BELOW_ZERO)

        buffer.text = f"{whole}.{fraction}"
        return VerificationOutcome.accepted(kind)

    # ---- Transaction method -----------------------------------------------

    def verify_tx_method(self, buffer: TextBuffer, store: FieldStore) -> VerificationOutcome:
        """Accept a known method (any casing) or correct to the closest one."""

        kind = FieldKind.TX_METHOD
        methods = store.list_known_methods()

        text = buffer.text.strip()
        buffer.text = text
        if not text:
            return VerificationOutcome.empty(kind)

        lower = text.lower()
        for method in methods:
            if method.lower() == lower:
                buffer.text = method
                return VerificationOutcome.accepted(kind)

        suggestion = self._matcher(text, methods)
        _logger.debug("unknown tx method %r, suggesting %r", text, suggestion)
        buffer.text = suggestion
        return VerificationOutcome.rejected(kind, RejectionReason.INVALID_TX_METHOD)

    # ---- Transaction type -------------------------------------------------

    def verify_tx_type(self, buffer: TextBuffer) -> VerificationOutcome:
        """Expand a first letter to Income, Expense or Transfer."""

        kind = FieldKind.TX_TYPE
        text = buffer.text.replace(" ", "")
        buffer.text = text
        if not text:
            return VerificationOutcome.empty(kind)

        lower = text.lower()
        for tx_type in TX_TYPES:
            if lower.startswith(tx_type[0].lower()):
                buffer.text = tx_type
                return VerificationOutcome.accepted(kind)

        buffer.text = ""
        return VerificationOutcome.rejected(kind, RejectionReason.INVALID_TX_TYPE)

    # ---- Tags -------------------------------------------------------------

    def verify_tags(self, buffer: TextBuffer) -> None:
        """Trim, drop empties and dedupe a tag list without consulting the store."""

        buffer.text = ", ".join(split_tags(buffer.text))

    def verify_tags_forced(self, buffer: TextBuffer, store: FieldStore) -> VerificationOutcome:
        """Normalize like :meth:`verify_tags`, then keep only stored tags."""

        kind = FieldKind.TAGS
        if not buffer.text:
            return VerificationOutcome.empty(kind)

        known = set(store.list_known_tags())
        unique = split_tags(buffer.text)
        kept = [tag for tag in unique if tag in known]
        buffer.text = ", ".join(kept)

        if len(kept) == len(unique):
            return VerificationOutcome.accepted(kind)
        _logger.debug("dropped unknown tag(s): %s", [t for t in unique if t not in known])
        return VerificationOutcome.rejected(kind, RejectionReason.NON_EXISTING_TAG)

    # ---- Dispatch ---------------------------------------------------------

    def verify(
        self, kind: FieldKind, buffer: TextBuffer, store: FieldStore | None = None
    ) -> VerificationOutcome:
        """Run the validator for ``kind``. Tags use the store-checked variant."""

        if kind is FieldKind.DATE:
            return self.verify_date(buffer)
        if kind is FieldKind.AMOUNT:
            return self.verify_amount(buffer)
        if kind is FieldKind.TX_TYPE:
            return self.verify_tx_type(buffer)
        if store is None:
            raise ValueError(f"{kind.value} validation needs a store")
        if kind is FieldKind.TX_METHOD:
            return self.verify_tx_method(buffer, store)
        return self.verify_tags_forced(buffer, store)


__all__ = [
    "FieldValidator",
    "Verifier",
    "Matcher",
    "split_tags",
    "DATE_FLOOR",
    "DATE_CEILING",
    "TX_TYPES",
]
