"""Terminal field entry helpers (prompt_toolkit-based).

Small adapters that plug the validators and steppers into prompt_toolkit so a
single field can be edited interactively:

- ``FieldInputValidator``: a prompt_toolkit ``Validator`` reporting rejection
  messages inline.
- ``TagAutoSuggest``: greyed completion of the trailing tag.
- ``prompt_field(...)``: one-line prompt where Up/Down step the value and
  Enter auto-corrects, submitting only once the text is accepted (or empty).

The prompt_toolkit ``Buffer`` already exposes a writable ``text`` attribute, so
key bindings hand ``event.app.current_buffer`` to the core unchanged.
"""

from __future__ import annotations

from typing import Any

from prompt_toolkit import PromptSession
from prompt_toolkit.auto_suggest import AutoSuggest, Suggestion
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.styles import Style
from prompt_toolkit.validation import ValidationError, Validator

from .buffer import FieldBuffer, TextBuffer
from .fuzzy import autofill_tag
from .logging_setup import get_logger
from .models import FieldKind, StepDirection, VerificationOutcome
from .steppers import FieldStepper
from .store import FieldStore
from .validators import FieldValidator

_logger = get_logger("term_ui")

_HINT = "↑/↓ to step • Enter to accept • Esc or Ctrl+C to cancel"


def _needs_store(kind: FieldKind) -> bool:
    return kind in (FieldKind.TX_METHOD, FieldKind.TAGS)


def _verify(
    validator: FieldValidator, kind: FieldKind, buffer: TextBuffer, store: FieldStore | None
) -> VerificationOutcome | None:
    # Tags without a store can only be normalized, never rejected.
    if kind is FieldKind.TAGS and store is None:
        validator.verify_tags(buffer)
        return None
    return validator.verify(kind, buffer, store)


class FieldInputValidator(Validator):
    """Reject text the core would not accept, without rewriting it."""

    def __init__(
        self,
        kind: FieldKind,
        *,
        store: FieldStore | None = None,
        validator: FieldValidator | None = None,
    ) -> None:
        if kind is FieldKind.TX_METHOD and store is None:
            raise ValueError("tx method input needs a store")
        self._kind = kind
        self._store = store
        self._validator = validator or FieldValidator()

    def validate(self, document) -> None:
        outcome = _verify(self._validator, self._kind, FieldBuffer(document.text), self._store)
        if outcome is not None and outcome.is_rejected:
            raise ValidationError(
                cursor_position=len(document.text),
                message=outcome.message or "Invalid value",
            )


class TagAutoSuggest(AutoSuggest):
    """Suggest the rest of the trailing tag from the store."""

    def __init__(self, store: FieldStore) -> None:
        self._store = store

    def get_suggestion(self, buffer, document):
        text = document.text
        segment = text.split(",")[-1].strip()
        if not segment or not text.endswith(segment):
            return None
        candidate = autofill_tag(text, self._store.list_known_tags())
        if len(candidate) > len(segment) and candidate.lower().startswith(segment.lower()):
            return Suggestion(candidate[len(segment) :])
        return None


def prompt_field(
    kind: FieldKind,
    *,
    store: FieldStore | None = None,
    default: str = "",
    session: PromptSession | None = None,
    message: str | None = None,
    validator: FieldValidator | None = None,
) -> str | None:
    """Edit one field interactively and return its accepted text.

    Up/Down call the stepper for ``kind``; Enter validates in place and
    submits when the outcome is accepted or empty, otherwise the corrected
    text stays in the buffer with the rejection message in the toolbar.
    Returns ``None`` when canceled via Esc or Ctrl+C.
    """

    if kind is FieldKind.TX_METHOD and store is None:
        raise ValueError("tx method input needs a store")

    validator = validator or FieldValidator()
    stepper = FieldStepper(validator)
    status: list[str | None] = [None]

    kb = KeyBindings()

    def _step(event: Any, direction: StepDirection) -> None:
        b = event.app.current_buffer
        if _needs_store(kind) and store is None:
            return
        autofill = ""
        if kind is FieldKind.TAGS and store is not None:
            autofill = autofill_tag(b.text, store.list_known_tags())
        failure = stepper.step(kind, b, direction, store, autofill=autofill)
        status[0] = failure.message if failure is not None else None
        b.cursor_position = len(b.text)

    @kb.add("up", eager=True)
    def _(event) -> None:
        _step(event, StepDirection.INCREASE)

    @kb.add("down", eager=True)
    def _(event) -> None:
        _step(event, StepDirection.DECREASE)

    @kb.add("enter", eager=True)
    def _(event) -> None:
        b = event.app.current_buffer
        outcome = _verify(validator, kind, b, store)
        b.cursor_position = len(b.text)
        if outcome is not None and outcome.is_rejected:
            status[0] = outcome.message
            _logger.debug("%s rejected on enter: %s", kind.value, outcome.reason)
            return
        status[0] = None
        b.validate_and_handle()

    @kb.add("escape")
    def _(event) -> None:  # pragma: no cover - exercised indirectly
        event.app.exit(result=None)

    @kb.add("c-c", eager=True)
    def _(event) -> None:  # pragma: no cover - exercised indirectly
        event.app.exit(result=None)

    def _toolbar() -> str:
        return status[0] or _HINT

    if session is None:
        sess: PromptSession = PromptSession(key_bindings=kb)
    else:
        sess = PromptSession(
            input=getattr(session, "input", None),
            output=getattr(session, "output", None),
            key_bindings=kb,
        )

    prompt_kwargs: dict[str, Any] = {
        "message": message or f"{kind.label}: ",
        "default": default,
        "key_bindings": kb,
        "bottom_toolbar": _toolbar,
        "style": Style.from_dict({"auto-suggestion": "fg:#888888"}),
    }
    if kind is FieldKind.TAGS and store is not None:
        prompt_kwargs["auto_suggest"] = TagAutoSuggest(store)

    return sess.prompt(**prompt_kwargs)


__all__ = ["FieldInputValidator", "TagAutoSuggest", "prompt_field"]
