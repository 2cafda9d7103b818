"""Vulnerability and traceability features: identifiers usable against
vulnerability databases."""

from __future__ import annotations

from sbomscore.document import Document
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore

from .checks import count, has_valid_cpe, has_valid_purl


def comp_with_purl(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    return formulae.score_comp_full(count(comps, has_valid_purl), len(comps), "PURLs")


def comp_with_cpe(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    return formulae.score_comp_full(count(comps, has_valid_cpe), len(comps), "CPEs")
