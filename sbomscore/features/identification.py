"""Identification features: can components be told apart and looked up."""

from __future__ import annotations

from sbomscore.document import Document
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore

from .checks import count, has_name, has_version


def comp_with_name(doc: Document) -> FeatureScore:
    """Share of components with a non-empty name."""
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    return formulae.score_comp_full(count(comps, has_name), len(comps), "names")


def comp_with_version(doc: Document) -> FeatureScore:
    """Share of components with a non-empty version."""
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    return formulae.score_comp_full(count(comps, has_version), len(comps), "versions")


def comp_with_identifiers(doc: Document) -> FeatureScore:
    """Share of components whose local id (bom-ref, SPDXID) is present and unique."""
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()

    occurrences: dict[str, int] = {}
    for component in comps:
        local_id = component.id.strip()
        if local_id:
            occurrences[local_id] = occurrences.get(local_id, 0) + 1

    have = sum(1 for component in comps if occurrences.get(component.id.strip()) == 1)
    return formulae.score_comp_full(have, len(comps), "unique IDs")
