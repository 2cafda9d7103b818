"""Licensing features: presence, validity and risk of component licenses."""

from __future__ import annotations

from sbomscore.document import Document
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore

from .checks import (
    are_licenses_valid,
    count,
    has_deprecated_license,
    has_meaningful_license,
    has_restrictive_license,
)


def comp_with_licenses(doc: Document) -> FeatureScore:
    """Share of components with a concluded license other than NOASSERTION/NONE."""
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    have = count(comps, lambda c: has_meaningful_license(c.concluded_licenses))
    return formulae.score_comp_full(have, len(comps), "licenses")


def comp_with_valid_licenses(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    have = count(comps, lambda c: are_licenses_valid(c.concluded_licenses))
    return formulae.score_comp_full(have, len(comps), "valid SPDX licenses")


def comp_with_declared_licenses(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    have = count(comps, lambda c: has_meaningful_license(c.declared_licenses))
    return formulae.score_comp_full(have, len(comps), "declared")


def sbom_data_license(doc: Document) -> FeatureScore:
    licenses = doc.spec.licenses
    if not licenses:
        return FeatureScore(score=0.0, desc="no data license", ignore=True)
    if not are_licenses_valid(licenses):
        return FeatureScore(score=0.0, desc="invalid data license")
    first = licenses[0]
    return FeatureScore(
        score=formulae.boolean_score(True),
        desc=first.short_id.strip() or first.name.strip() or "data license present",
    )


def comp_no_deprecated_licenses(doc: Document) -> FeatureScore:
    """Share of components whose concluded licenses are all current."""
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    offending = count(comps, has_deprecated_license)
    return formulae.score_comp_custom(len(comps) - offending, len(comps), f"{offending} deprecated")


def comp_no_restrictive_licenses(doc: Document) -> FeatureScore:
    """Share of components without copyleft or restricted concluded licenses."""
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    offending = count(comps, has_restrictive_license)
    return formulae.score_comp_custom(len(comps) - offending, len(comps), f"{offending} restrictive")
