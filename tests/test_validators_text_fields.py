from txedit import (
    FieldBuffer,
    FieldKind,
    FieldValidator,
    RejectionReason,
    StaticFieldStore,
    best_fuzzy_match,
    verify_tags,
    verify_tags_forced,
    verify_tx_method,
    verify_tx_type,
)
from txedit.fuzzy import autofill_tag

STORE = StaticFieldStore(methods=["Bank", "Cash"], tags=["food", "travel"])


# ---- Fuzzy helpers --------------------------------------------------------------


def test_best_fuzzy_match_prefers_closest_candidate():
    assert best_fuzzy_match("bnak", ["Bank", "Cash"]) == "Bank"
    assert best_fuzzy_match("csah", ["Bank", "Cash"]) == "Cash"


def test_best_fuzzy_match_without_candidates_returns_query():
    assert best_fuzzy_match("anything", []) == "anything"


def test_autofill_tag_prefers_prefix_then_fuzzy():
    tags = ["food", "travel", "transport"]
    assert autofill_tag("food, tra", tags) == "travel"
    assert autofill_tag("food, trnsport", tags) == "transport"
    assert autofill_tag("food, ", tags) == ""


# ---- Transaction method ---------------------------------------------------------


def test_method_match_is_case_insensitive_and_canonicalized():
    buf = FieldBuffer("  bank ")
    outcome = verify_tx_method(buf, STORE)
    assert outcome.is_accepted
    assert outcome.kind is FieldKind.TX_METHOD
    assert buf.text == "Bank"
    # Idempotent on the canonical value.
    assert verify_tx_method(buf, STORE).is_accepted
    assert buf.text == "Bank"


def test_unknown_method_is_corrected_to_nearest_and_rejected():
    buf = FieldBuffer("bnak")
    outcome = verify_tx_method(buf, STORE)
    assert outcome.reason is RejectionReason.INVALID_TX_METHOD
    assert buf.text == "Bank"


def test_whitespace_only_method_is_empty():
    buf = FieldBuffer("   ")
    assert verify_tx_method(buf, STORE).is_empty
    assert buf.text == ""


def test_injected_matcher_is_used_for_corrections():
    validator = FieldValidator(matcher=lambda query, candidates: candidates[-1])
    buf = FieldBuffer("zzz")
    assert validator.verify_tx_method(buf, STORE).is_rejected
    assert buf.text == "Cash"


# ---- Transaction type -----------------------------------------------------------


def test_type_expands_from_first_letter():
    for raw, expected in [("exp", "Expense"), ("i", "Income"), (" T r", "Transfer")]:
        buf = FieldBuffer(raw)
        assert verify_tx_type(buf).is_accepted
        assert buf.text == expected


def test_unknown_type_clears_the_buffer():
    buf = FieldBuffer("x")
    outcome = verify_tx_type(buf)
    assert outcome.reason is RejectionReason.INVALID_TX_TYPE
    assert buf.text == ""


def test_empty_type_is_empty():
    assert verify_tx_type(FieldBuffer("  ")).is_empty


def test_canonical_type_is_idempotent():
    buf = FieldBuffer("Expense")
    assert verify_tx_type(buf).is_accepted
    assert verify_tx_type(buf).is_accepted
    assert buf.text == "Expense"


# ---- Tags -----------------------------------------------------------------------


def test_plain_tag_normalizer_trims_and_dedupes_case_sensitively():
    buf = FieldBuffer(" food, ,travel,food ,Food")
    verify_tags(buf)
    assert buf.text == "food, travel, Food"


def test_forced_tags_accepts_known_tags():
    buf = FieldBuffer("food,travel, food")
    outcome = verify_tags_forced(buf, STORE)
    assert outcome.is_accepted
    assert buf.text == "food, travel"


def test_forced_tags_filters_unknown_tags_and_rejects():
    # "Food" is a distinct tag after case-sensitive dedup and not in the store.
    buf = FieldBuffer("food, Food, travel")
    outcome = verify_tags_forced(buf, STORE)
    assert outcome.reason is RejectionReason.NON_EXISTING_TAG
    assert buf.text == "food, travel"
    # The retained subset is accepted on the next pass.
    assert verify_tags_forced(buf, STORE).is_accepted


def test_forced_tags_empty_buffer_is_empty():
    assert verify_tags_forced(FieldBuffer(""), STORE).is_empty


def test_dispatch_routes_by_kind():
    validator = FieldValidator()
    buf = FieldBuffer("cash")
    assert validator.verify(FieldKind.TX_METHOD, buf, STORE).is_accepted
    assert buf.text == "Cash"
    buf = FieldBuffer("travel")
    assert validator.verify(FieldKind.TAGS, buf, STORE).kind is FieldKind.TAGS
