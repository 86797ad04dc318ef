"""Approximate string matching for method correction and tag autofill."""

from __future__ import annotations

from collections.abc import Sequence
from difflib import SequenceMatcher


def similarity(a: str, b: str) -> float:
    """Case-insensitive similarity in ``[0, 1]``; higher is closer."""

    return SequenceMatcher(None, a.lower(), b.lower()).ratio()


def best_fuzzy_match(query: str, candidates: Sequence[str]) -> str:
    """Return the candidate closest to ``query``.

    Ties go to the earliest candidate so the result follows store order. With
    no candidates the query itself is returned.
    """

    best: str | None = None
    best_score = -1.0
    for cand in candidates:
        score = similarity(query, cand)
        if score > best_score:
            best, best_score = cand, score
    return query if best is None else best


def autofill_tag(text: str, tags: Sequence[str]) -> str:
    """Suggest a full tag name for the trailing comma segment of ``text``.

    Prefers the first tag that starts with the segment (case-insensitive),
    then the fuzzy best match. An empty segment yields an empty string.
    """

    segment = text.split(",")[-1].strip()
    if not segment:
        return ""
    lower = segment.lower()
    for tag in tags:
        if tag.lower().startswith(lower):
            return tag
    return best_fuzzy_match(segment, tags)


__all__ = ["similarity", "best_fuzzy_match", "autofill_tag"]
