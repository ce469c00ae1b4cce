# Backend/evaluator/services/scoring.py
"""
Rubric score validation and aggregation.

Validation and totalling are separate calls: a caller may total a
partially filled score set (e.g. to show progress) without it being valid.
No rounding happens here; formatting is left to the presentation layer.
"""
import math
from numbers import Real
from typing import Any, List, Mapping, Optional

from .rubric_catalog import get_rubric


def _is_finite_number(value: Any) -> bool:
    # bool is an int subclass but never a meaningful score
    if not isinstance(value, Real) or isinstance(value, bool):
        return False
    if isinstance(value, int):
        # ints are exact; ones too large for a float are still finite
        return True
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def _as_float(value: Any) -> Optional[float]:
    if not _is_finite_number(value):
        return None
    try:
        return float(value)
    except OverflowError:
        return None


def score_errors(prompt_id: str, scores: Mapping[str, Any]) -> List[str]:
    """
    Return every reason ``scores`` is not a valid score set for ``prompt_id``.
    An empty list means the set is valid.
    """
    rubric = get_rubric(prompt_id)
    if rubric is None:
        return [f"Unknown prompt '{prompt_id}'"]

    errors: List[str] = []
    expected = set(rubric.category_keys)
    provided = set(scores)

    for key in rubric.category_keys:
        if key not in provided:
            errors.append(f"Missing score for category '{key}'")
    for key in sorted(provided - expected):
        errors.append(f"Unexpected category '{key}'")

    for key in rubric.category_keys:
        if key not in provided:
            continue
        value = scores[key]
        max_score = rubric.categories[key].max_score
        if not _is_finite_number(value):
            errors.append(f"Score for '{key}' must be a finite number")
        elif value < 0 or value > max_score:
            errors.append(f"Score for '{key}' is outside [0, {max_score}]")
    return errors


def validate_scores(prompt_id: str, scores: Mapping[str, Any]) -> bool:
    """True when the keys match the rubric exactly and every score is within its bounds."""
    return not score_errors(prompt_id, scores)


def calculate_total_score(prompt_id: str, scores: Mapping[str, Any]) -> float:
    """
    Sum of the provided scores for ``prompt_id``. Categories missing from ``scores`` (and
    non-numeric values, or numbers too large to hold as a float) contribute 0,
    so the total is always defined even for a score set that would not validate.
    """
    total = 0.0
    for value in scores.values():
        number = _as_float(value)
        if number is not None:
            total += number
    return total
