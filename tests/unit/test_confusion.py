import math

import pytest

from domain.errors import ClassIndexError, NonFiniteValueError
from domain.evaluation import (
    build_confusion_matrix,
    canonical_class_key,
    confusion_matrix_stats,
    predict_class,
    resolve_decision_rule,
)
from domain.schemas import ClassSizing, DecisionRule, TnrDenominator

BINARY_PAIRS = [(0.9, 1.0), (0.1, 0.0), (0.6, 1.0), (0.4, 0.0)]


# ------------------------------------------------------------------
# Class keys and decision rules
# ------------------------------------------------------------------


@pytest.mark.parametrize(
    ("value", "expected"),
    [(1.0, "1"), (0.0, "0"), (0.5, "0.5"), (2.0, "2"), (1.0000000001, "1")],
)
def test_canonical_class_key(value: float, expected: str) -> None:
    assert canonical_class_key(value) == expected


def test_resolve_auto_rule_precedence() -> None:
    assert resolve_decision_rule(DecisionRule.AUTO, 0.3, 2) is DecisionRule.THRESHOLD
    assert resolve_decision_rule(DecisionRule.AUTO, None, 2) is DecisionRule.ROUND
    assert resolve_decision_rule(DecisionRule.AUTO, None, 3) is DecisionRule.TRUNCATE
    assert resolve_decision_rule(DecisionRule.AUTO, None, 1) is DecisionRule.TRUNCATE


def test_explicit_rule_is_kept() -> None:
    assert resolve_decision_rule(DecisionRule.TRUNCATE, 0.3, 2) is DecisionRule.TRUNCATE


def test_threshold_rule_requires_threshold() -> None:
    with pytest.raises(ValueError):
        resolve_decision_rule(DecisionRule.THRESHOLD, None, 2)


def test_predict_class_rules() -> None:
    assert predict_class(0.5, DecisionRule.ROUND) == 1
    assert predict_class(0.49, DecisionRule.ROUND) == 0
    assert predict_class(1.99, DecisionRule.TRUNCATE) == 1
    assert predict_class(0.75, DecisionRule.THRESHOLD, 0.8) == 0
    assert predict_class(0.85, DecisionRule.THRESHOLD, 0.8) == 1


# ------------------------------------------------------------------
# build_confusion_matrix
# ------------------------------------------------------------------


def test_binary_matrix_uses_half_rounding() -> None:
    matrix = build_confusion_matrix(BINARY_PAIRS)

    assert matrix == [[2, 0], [0, 2]]


def test_matrix_sum_equals_pair_count() -> None:
    pairs = BINARY_PAIRS + [(0.7, 0.0), (0.2, 1.0), (0.55, 0.0)]
    matrix = build_confusion_matrix(pairs)

    assert sum(sum(row) for row in matrix) == len(pairs)
    # rows are predicted, columns are actual
    assert matrix == [[2, 1], [2, 2]]


def test_explicit_threshold_shifts_decision() -> None:
    matrix = build_confusion_matrix(BINARY_PAIRS, threshold=0.7)

    # 0.6 with actual 1 now falls below the threshold
    assert matrix == [[2, 1], [0, 1]]


def test_multiclass_without_threshold_truncates() -> None:
    pairs = [(0.2, 0.0), (1.7, 1.0), (2.1, 2.0), (1.0, 2.0)]

    assert build_confusion_matrix(pairs) == [[1, 0, 0], [0, 1, 1], [0, 0, 1]]


def test_forced_truncate_rule_on_binary_input() -> None:
    matrix = build_confusion_matrix(BINARY_PAIRS, rule=DecisionRule.TRUNCATE)

    assert matrix == [[2, 2], [0, 0]]


def test_float_noise_in_labels_is_one_class() -> None:
    pairs = [(0.9, 1.0), (0.8, 1.0000000001), (0.1, 0.0)]

    assert build_confusion_matrix(pairs) == [[1, 0], [0, 2]]


def test_predicted_index_out_of_range_raises() -> None:
    with pytest.raises(ClassIndexError) as exc_info:
        build_confusion_matrix([(0.9, 1.0), (0.1, 0.0), (1.6, 1.0)])

    assert exc_info.value.kind == "predicted"
    assert exc_info.value.index == 2
    assert exc_info.value.size == 2


def test_negative_actual_label_raises() -> None:
    with pytest.raises(ClassIndexError) as exc_info:
        build_confusion_matrix([(0.1, -1.0), (0.9, 1.0)])

    assert exc_info.value.kind == "actual"


def test_label_gap_overflows_observed_sizing() -> None:
    with pytest.raises(ClassIndexError):
        build_confusion_matrix([(0.1, 0.0), (2.0, 2.0)])


def test_label_gap_fits_max_label_sizing() -> None:
    matrix = build_confusion_matrix([(0.1, 0.0), (2.0, 2.0)], sizing=ClassSizing.MAX_LABEL)

    assert matrix == [[1, 0, 0], [0, 0, 0], [0, 0, 1]]


def test_max_label_sizing_ignores_predictions() -> None:
    with pytest.raises(ClassIndexError) as exc_info:
        build_confusion_matrix([(0.1, 0.0), (3.2, 1.0)], rule=DecisionRule.TRUNCATE, sizing=ClassSizing.MAX_LABEL)

    assert exc_info.value.kind == "predicted"
    assert exc_info.value.index == 3
    assert exc_info.value.size == 2


def test_empty_pairs_give_empty_matrix() -> None:
    assert build_confusion_matrix([]) == []


def test_non_finite_score_raises() -> None:
    with pytest.raises(NonFiniteValueError):
        build_confusion_matrix([(float("nan"), 1.0), (0.1, 0.0)])


# ------------------------------------------------------------------
# confusion_matrix_stats
# ------------------------------------------------------------------


def test_stats_counts_and_rates() -> None:
    stats = confusion_matrix_stats([[5, 2], [1, 10]])
    c0, c1 = stats

    assert (c0.label, c0.tp, c0.fp, c0.fn, c0.tn) == (0, 5, 2, 1, 10)
    assert c0.tpr == pytest.approx(5 / 6)
    assert c0.fpr == pytest.approx(2 / 12)
    assert c0.fnr == pytest.approx(1 / 6)
    assert c0.tnr == pytest.approx(10 / 12)

    assert (c1.label, c1.tp, c1.fp, c1.fn, c1.tn) == (1, 10, 1, 2, 5)
    assert c1.tpr == pytest.approx(10 / 12)
    assert c1.fpr == pytest.approx(1 / 6)


def test_stats_legacy_tnr_denominator() -> None:
    c0 = confusion_matrix_stats([[5, 2], [1, 10]], tnr_denominator=TnrDenominator.FN)[0]

    assert c0.tnr == pytest.approx(10 / 11)


def test_stats_zero_denominator_is_nan() -> None:
    c0 = confusion_matrix_stats([[0, 0], [0, 5]])[0]

    assert math.isnan(c0.tpr)
    assert math.isnan(c0.fnr)
    assert c0.fpr == 0.0
    assert c0.tnr == 1.0


def test_stats_sorted_by_label_for_multiclass() -> None:
    stats = confusion_matrix_stats([[1, 0, 0], [0, 1, 1], [0, 0, 1]])

    assert [s.label for s in stats] == [0, 1, 2]
    # class 2: TP=1, FN=1 (predicted 1), FP=0
    assert (stats[2].tp, stats[2].fp, stats[2].fn, stats[2].tn) == (1, 0, 1, 2)


def test_stats_rejects_non_square_matrix() -> None:
    with pytest.raises(ValueError):
        confusion_matrix_stats([[1, 2, 3], [4, 5, 6]])


def test_stats_empty_matrix() -> None:
    assert confusion_matrix_stats([]) == []
