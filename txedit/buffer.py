"""Mutable text holders handed to validators and steppers.

Anything with a read/write ``text`` attribute qualifies. ``FieldBuffer`` is the
plain in-memory version; ``prompt_toolkit.buffer.Buffer`` satisfies the same
protocol, so key bindings can pass ``event.app.current_buffer`` straight in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol


class TextBuffer(Protocol):
    text: str


@dataclass(slots=True)
class FieldBuffer:
    text: str = ""

    def __str__(self) -> str:
        return self.text


__all__ = ["TextBuffer", "FieldBuffer"]
