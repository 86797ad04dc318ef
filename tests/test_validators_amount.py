import pytest

from txedit import FieldBuffer, RejectionReason, verify_amount
from txedit.arithmetic import ExpressionError, _reduce_once, evaluate_expression


def _verify(text: str):
    buf = FieldBuffer(text)
    outcome = verify_amount(buf)
    return outcome, buf.text


# ---- Expression evaluation -----------------------------------------------------


def test_multiplication_is_resolved_before_earlier_addition():
    # 3*4 goes first even though + appears earlier in the text.
    assert evaluate_expression("3*4") == "12.00"
    assert evaluate_expression("2+3*4") == "14.00"


def test_single_pass_reduces_only_the_highest_priority_symbol():
    assert _reduce_once("2+3*4") == "2+12.00"
    assert _reduce_once("2+12.00") == "14.00"


def test_same_priority_chain_is_reduced_left_to_right_one_match_per_pass():
    assert evaluate_expression("10-3-2") == "5.00"


def test_one_sided_operator_keeps_the_present_operand():
    assert evaluate_expression("5*") == "5"
    assert evaluate_expression("*5") == "5"


def test_non_numeric_operand_raises():
    with pytest.raises(ExpressionError):
        evaluate_expression("1.2.3+4")


def test_division_by_zero_raises():
    with pytest.raises(ExpressionError):
        evaluate_expression("5/0")


# ---- Validator -------------------------------------------------------------------


def test_empty_buffer_is_empty_outcome():
    outcome, text = _verify("")
    assert outcome.is_empty
    assert text == ""


def test_expression_is_evaluated_and_accepted():
    outcome, text = _verify("2+3*4")
    assert outcome.is_accepted
    assert text == "14.00"


def test_mixed_expression_uses_symbol_priority():
    outcome, text = _verify("1+5*10")
    assert outcome.is_accepted
    assert text == "51.00"


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("12", "12.00"),
        ("12.", "12.00"),
        ("12.5", "12.50"),
        ("12.345", "12.34"),
        ("$1,234.5", "1234.50"),
        ("123456789012", "1234567890.00"),
    ],
)
def test_decimal_normalization(raw, expected):
    outcome, text = _verify(raw)
    assert outcome.is_accepted
    assert text == expected


def test_accepted_amount_is_idempotent():
    buf = FieldBuffer("14.00")
    assert verify_amount(buf).is_accepted
    assert verify_amount(buf).is_accepted
    assert buf.text == "14.00"


def test_text_without_numbers_is_a_parsing_error():
    outcome, text = _verify("abc")
    assert outcome.reason is RejectionReason.PARSING_ERROR
    assert text == ""


def test_unparseable_number_is_a_parsing_error():
    outcome, text = _verify("1.2.3")
    assert outcome.reason is RejectionReason.PARSING_ERROR
    assert text == "1.2.3"


def test_division_by_zero_is_a_parsing_error_and_keeps_the_expression():
    outcome, text = _verify("5/0")
    assert outcome.reason is RejectionReason.PARSING_ERROR
    assert text == "5/0"


def test_zero_is_below_zero():
    outcome, text = _verify("0")
    assert outcome.reason is RejectionReason.AMOUNT_BELOW_ZERO
    assert text == "0.00"


def test_negative_result_is_reflected_to_its_magnitude():
    outcome, text = _verify("2-5")
    assert outcome.reason is RejectionReason.AMOUNT_BELOW_ZERO
    assert outcome.message == "Amount: Value must be bigger than zero"
    assert text == "3.00"


def test_leading_minus_collapses_to_the_magnitude():
    # A lone "-" has no left operand, so the right side is the sub-result.
    outcome, text = _verify("-5")
    assert outcome.is_accepted
    assert text == "5.00"


def test_integer_cap_that_leaves_only_zeros_is_below_zero():
    outcome, text = _verify("00000000001")
    assert outcome.reason is RejectionReason.AMOUNT_BELOW_ZERO
    assert text == "0.00"


@pytest.mark.parametrize("raw", ["٥", "５", "٥٠"])
def test_non_ascii_digits_are_not_amount_digits(raw):
    outcome, text = _verify(raw)
    assert outcome.reason is RejectionReason.PARSING_ERROR
    assert text == ""
