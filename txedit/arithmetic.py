"""Inline arithmetic for amount fields.

Users may type ``1+5*10`` into an amount box. Evaluation is deliberately not
conventional precedence: operators are resolved by *symbol priority* and the
*first textual occurrence* of each symbol.

Algorithm
---------
Repeat once per operator character in the input:

1. Walk the symbols in the order ``* / + -`` and pick the first one present.
2. Take the operator-free run immediately left of its first occurrence and the
   one immediately right of it.
3. If one side is missing, the present side is the sub-result (so ``-5``
   collapses to ``5``). Otherwise compute ``left <op> right`` and format it with
   two decimals.
4. Replace every occurrence of the text ``left<op>right`` with the sub-result
   and start again from ``*``.

Example: ``2+3*4`` -> ``2+12.00`` -> ``14.00``.

Same-priority chains are only reduced one match per pass, so ``10-3-2`` goes
``7.00-2`` -> ``5.00`` only because there are two passes. Inputs whose passes
run out early keep their leftover operators and fail to parse later.
"""

from __future__ import annotations

OPERATORS: tuple[str, ...] = ("*", "/", "+", "-")


class ExpressionError(ValueError):
    """An operand could not be read as a number (or was a zero divisor)."""


def has_operator(text: str) -> bool:
    return any(op in text for op in OPERATORS)


def _operand_after(text: str, location: int) -> str:
    out: list[str] = []
    for ch in text[location + 1 :]:
        if ch in OPERATORS:
            break
        out.append(ch)
    return "".join(out)


def _operand_before(text: str, location: int) -> str:
    out: list[str] = []
    for ch in reversed(text[:location]):
        if ch in OPERATORS:
            break
        out.append(ch)
    return "".join(reversed(out))


def _to_number(operand: str) -> float:
    try:
        return float(operand)
    except ValueError as e:
        raise ExpressionError(f"not a number: {operand!r}") from e


def _apply(symbol: str, left: float, right: float) -> float:
    if symbol == "*":
        return left * right
    if symbol == "/":
        if right == 0:
            raise ExpressionError("division by zero")
        return left / right
    if symbol == "+":
        return left + right
    return left - right


def _reduce_once(text: str) -> str:
    for symbol in OPERATORS:
        location = text.find(symbol)
        if location == -1:
            continue
        left = _operand_before(text, location)
        right = _operand_after(text, location)
        if not left or not right:
            result = right if not left else left
        else:
            result = f"{_apply(symbol, _to_number(left), _to_number(right)):.2f}"
        return text.replace(f"{left}{symbol}{right}", result)
    return text


def evaluate_expression(text: str) -> str:
    """Resolve the operators in ``text`` and return the resulting string.

    The result is not normalized (it may lack decimals or still carry
    operators); callers finish that. Raises :class:`ExpressionError` when an
    operand is not numeric.
    """

    passes = sum(1 for ch in text if ch in OPERATORS)
    working = text
    for _ in range(passes):
        working = _reduce_once(working)
    return working


__all__ = ["OPERATORS", "ExpressionError", "has_operator", "evaluate_expression"]
