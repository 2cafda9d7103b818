"""Score math shared by all evaluators.

Every function here is pure. Scores are kept inside ``[0, 10]`` by these
helpers so evaluators and aggregators never need to clamp on their own.
"""

from __future__ import annotations

from typing import Iterable

from .results import CategoryResult, FeatureResult, ProfileFeatureResult
from .specs import FeatureScore

MAX_SCORE = 10.0
MIN_SCORE = 0.0
# Highest score an incomplete component set may display
INCOMPLETE_CAP = 9.9

GRADE_THRESHOLDS = (
    (9.0, "A"),
    (8.0, "B"),
    (7.0, "C"),
    (5.0, "D"),
)


def clamp_score(value: float) -> float:
    return max(MIN_SCORE, min(MAX_SCORE, value))


def per_component_score(have: int, total: int) -> float:
    """Score the share of components that satisfy a check.

    Args:
        have: Number of components that pass.
        total: Number of components considered.

    Returns:
        ``10 * have / total`` clamped to ``[0, 10]``; 0 when ``total <= 0``.
        When not every component passes the result never reaches 10 and is
        capped at 9.9 if it would round to 10.0.
    """
    if total <= 0:
        return MIN_SCORE
    score = clamp_score(MAX_SCORE * have / total)
    if have < total and round(score, 1) >= MAX_SCORE:
        return INCOMPLETE_CAP
    return score


def boolean_score(present: bool) -> float:
    return MAX_SCORE if present else MIN_SCORE


def to_grade(score: float) -> str:
    """Map a score to a letter grade (lower band bounds are inclusive)."""
    for threshold, grade in GRADE_THRESHOLDS:
        if score >= threshold:
            return grade
    return "F"


def compute_category_score(features: Iterable[FeatureResult]) -> float:
    """Weighted average of feature scores, renormalized over applicable features.

    Ignored features contribute neither score nor weight. Returns 0 when the
    remaining weight is not positive.
    """
    applicable = [f for f in features if not f.ignored]
    total_weight = sum(f.weight for f in applicable)
    if total_weight <= 0:
        return MIN_SCORE
    return clamp_score(sum(f.score * f.weight for f in applicable) / total_weight)


def compute_overall_score(categories: Iterable[CategoryResult]) -> float:
    """Weighted average of category scores, informational categories excluded."""
    counted = [c for c in categories if not c.informational]
    total_weight = sum(c.weight for c in counted)
    if total_weight <= 0:
        return MIN_SCORE
    return clamp_score(sum(c.score * c.weight for c in counted) / total_weight)


def compute_profile_score(items: Iterable[ProfileFeatureResult]) -> float:
    """Mean score of the required, applicable items of a profile.

    Optional items and ignored items are reported but do not affect the
    profile score. Returns 0 when no item qualifies.
    """
    scored = [i.score for i in items if i.required and not i.ignored]
    if not scored:
        return MIN_SCORE
    return clamp_score(sum(scored) / len(scored))


# Description helpers


def no_components_na() -> str:
    return "N/A (no components)"


def missing_field(name: str) -> str:
    return f"missing {name}"


def present_field(name: str) -> str:
    return f"present {name}"


def non_supported_spdx_field() -> str:
    return "N/A (SPDX)"


def unknown_spec() -> str:
    return "N/A (unknown spec)"


def comp_description(have: int, total: int, name: str) -> str:
    return f"{have}/{total} have {name}"


# FeatureScore builders


def score_comp_na() -> FeatureScore:
    """Not applicable because the document has no components."""
    return FeatureScore(score=per_component_score(0, 0), desc=no_components_na(), ignore=True)


def score_comp_full(have: int, total: int, name: str) -> FeatureScore:
    return FeatureScore(score=per_component_score(have, total), desc=comp_description(have, total, name))


def score_comp_custom(have: int, total: int, desc: str) -> FeatureScore:
    return FeatureScore(score=per_component_score(have, total), desc=desc)


def score_present(name: str) -> FeatureScore:
    return FeatureScore(score=boolean_score(True), desc=present_field(name))


def score_missing(name: str, ignore: bool = False) -> FeatureScore:
    return FeatureScore(score=boolean_score(False), desc=missing_field(name), ignore=ignore)


def score_unknown_spec() -> FeatureScore:
    return FeatureScore(score=boolean_score(False), desc=unknown_spec(), ignore=True)
