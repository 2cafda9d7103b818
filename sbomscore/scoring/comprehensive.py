"""Comprehensive (quality) scoring.

Runs every feature of the requested categories against a document, computes
each category's renormalized weighted score and the overall weighted score.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from sbomscore.logging import getLogger, log_debug, log_info

from . import formulae
from .results import CategoryResult, ComprehensiveResult, FeatureResult

if TYPE_CHECKING:
    from sbomscore.document import Document

    from .catalog import Catalog
    from .specs import CategorySpec, FeatureSpec

logger = getLogger(__name__)


def evaluate_feature(doc: Document, spec: FeatureSpec) -> FeatureResult:
    """Run one feature evaluator and wrap its output."""
    outcome = spec.evaluate(doc)
    return FeatureResult(
        key=spec.key,
        name=spec.name,
        weight=spec.weight,
        score=formulae.clamp_score(outcome.score),
        desc=outcome.desc,
        ignored=outcome.ignore,
    )


def evaluate_category(doc: Document, category: CategorySpec, catalog: Catalog) -> CategoryResult:
    """Evaluate every resolvable feature of a category.

    Feature keys with no spec in the catalog are skipped.
    """
    features = []
    for feature_key in category.features:
        spec = catalog.get_feature(feature_key)
        if spec is None:
            log_debug(logger, "[Comprehensive] feature not in catalog", category=category.key, feature=feature_key)
            continue
        features.append(evaluate_feature(doc, spec))

    score = formulae.compute_category_score(features)
    log_debug(
        logger,
        "[Comprehensive] category evaluated",
        category=category.key,
        features=len(features),
        weight=category.weight,
        score=round(score, 2),
    )
    return CategoryResult(
        key=category.key,
        name=category.name,
        weight=category.weight,
        score=score,
        features=tuple(features),
        informational=category.informational,
    )


def evaluate(category_keys: Iterable[str], catalog: Catalog, doc: Document) -> ComprehensiveResult:
    """Score a document against the requested categories.

    Args:
        category_keys: Canonical category keys, evaluated in the given order.
            Keys missing from the catalog are skipped.
        catalog: Catalog providing category and feature specs.
        doc: Document to evaluate. It is only read.

    Returns:
        ComprehensiveResult with per-category results, the overall score and
        its letter grade.
    """
    category_keys = list(category_keys)
    log_info(logger, "[Comprehensive] evaluation started", categories=len(category_keys))

    categories = []
    for key in category_keys:
        spec = catalog.get_category(key)
        if spec is None:
            log_debug(logger, "[Comprehensive] category not in catalog", category=key)
            continue
        categories.append(evaluate_category(doc, spec, catalog))

    score = formulae.compute_overall_score(categories)
    grade = formulae.to_grade(score)
    log_info(logger, "[Comprehensive] evaluation completed", score=round(score, 2), grade=grade)
    return ComprehensiveResult(categories=tuple(categories), score=score, grade=grade)
