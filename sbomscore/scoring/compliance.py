"""Profile compliance evaluation.

Each profile item is classified as passed or failed from its required flag,
its score and whether it applied to the document:

* not applicable: passes only when optional
* required: passes only with full marks (10)
* optional: passes on any positive score
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Iterable

from sbomscore.logging import getLogger, log_debug, log_info

from . import formulae
from .enums import ComplianceState
from .results import ProfileFeatureResult, ProfileResult

if TYPE_CHECKING:
    from sbomscore.document import Document

    from .catalog import Catalog
    from .specs import FeatureScore, ProfileFeatureSpec, ProfileSpec

logger = getLogger(__name__)


def is_passed(required: bool, outcome: FeatureScore) -> bool:
    if outcome.ignore:
        return not required
    if required:
        return outcome.score >= formulae.MAX_SCORE
    return outcome.score > formulae.MIN_SCORE


def evaluate_profile_feature(doc: Document, spec: ProfileFeatureSpec) -> ProfileFeatureResult:
    """Run one profile item evaluator and classify the outcome."""
    outcome = spec.evaluate(doc)
    return ProfileFeatureResult(
        key=spec.key,
        name=spec.name,
        required=spec.required,
        score=formulae.clamp_score(outcome.score),
        passed=is_passed(spec.required, outcome),
        desc=outcome.desc,
        ignored=outcome.ignore,
    )


def evaluate_profile(doc: Document, profile: ProfileSpec, catalog: Catalog) -> ProfileResult:
    items = []
    for feature_key in profile.features:
        spec = catalog.get_profile_feature(profile.key, feature_key)
        if spec is None:
            log_debug(logger, "[Compliance] profile feature not in catalog", profile=profile.key, feature=feature_key)
            continue
        items.append(evaluate_profile_feature(doc, spec))

    score = formulae.compute_profile_score(items)
    log_debug(
        logger,
        "[Compliance] profile evaluated",
        profile=profile.key,
        items=len(items),
        failed_required=sum(1 for i in items if i.required and not i.passed),
        score=round(score, 2),
    )
    return ProfileResult(
        key=profile.key,
        name=profile.name,
        score=score,
        message=profile.description,
        items=tuple(items),
    )


def evaluate(profile_keys: Iterable[str], catalog: Catalog, doc: Document) -> list[ProfileResult]:
    """Evaluate a document against compliance profiles.

    Args:
        profile_keys: Canonical profile keys in the order to report them.
            Keys missing from the catalog are skipped.
        catalog: Catalog providing profile and profile feature specs.
        doc: Document to evaluate. It is only read.

    Returns:
        One ProfileResult per resolvable profile. No overall compliance verdict
        is derived here.
    """
    profile_keys = list(profile_keys)
    log_info(logger, "[Compliance] evaluation started", profiles=len(profile_keys))

    results = []
    for key in profile_keys:
        profile = catalog.get_profile(key)
        if profile is None:
            log_debug(logger, "[Compliance] profile not in catalog", profile=key)
            continue
        results.append(evaluate_profile(doc, profile, catalog))

    log_info(logger, "[Compliance] evaluation completed", profiles=len(results))
    return results


def all_required_passed(result: ProfileResult) -> ComplianceState:
    """Derive a verdict under the "every required item passes" policy.

    This is one policy a caller may apply to a ProfileResult; ``evaluate``
    never calls it. A profile whose items were all not applicable is
    SKIPPED.
    """
    if result.items and all(item.ignored for item in result.items):
        return ComplianceState.SKIPPED
    if result.failed_required_items():
        return ComplianceState.FAIL
    return ComplianceState.PASS
