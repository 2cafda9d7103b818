"""Integrity features: checksums and signatures."""

from __future__ import annotations

from sbomscore.document import Document, SpecType
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore
from sbomscore.vocabulary import parse_spec_type

from .checks import count, has_strong_checksum, has_text, has_weak_checksum


def comp_with_strong_checksums(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    return formulae.score_comp_full(count(comps, has_strong_checksum), len(comps), "strong checksums")


def comp_with_weak_checksums(doc: Document) -> FeatureScore:
    """Penalize components that rely on weak checksums only.

    Scored over components that carry any recognized checksum: the share of
    those that also carry a strong one.
    """
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()

    with_any = weak_only = 0
    for component in comps:
        strong, weak = has_strong_checksum(component), has_weak_checksum(component)
        if strong or weak:
            with_any += 1
        if weak and not strong:
            weak_only += 1

    if not with_any:
        return FeatureScore(score=0.0, desc="no checksums found")

    if weak_only == 0:
        desc = "complete"
    elif weak_only == 1:
        desc = "upgrade 1 component to SHA-256+"
    else:
        desc = f"upgrade {weak_only} components to SHA-256+"
    return formulae.score_comp_custom(with_any - weak_only, with_any, desc)


def sbom_signature(doc: Document) -> FeatureScore:
    """Presence of a signature and its key material.

    Verification is out of scope; a signature without a public key or
    certificate gets half credit.
    """
    if parse_spec_type(doc.spec.spec_type) == SpecType.SPDX:
        return FeatureScore(score=0.0, desc="not supported by SPDX", ignore=True)

    signature = doc.signature
    if signature is None or not has_text(signature.algorithm) or not has_text(signature.value):
        return formulae.score_missing("signature")

    if not has_text(signature.public_key) and not signature.certificate_path:
        return FeatureScore(score=5.0, desc="missing public key or certificate")
    return formulae.score_present("signature")
