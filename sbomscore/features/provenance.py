"""Provenance features: who created the SBOM, when, and with what."""

from __future__ import annotations

from sbomscore.document import Document, SpecType
from sbomscore.identifiers import is_rfc3339_timestamp
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore
from sbomscore.vocabulary import CYCLONEDX_LIFECYCLES, parse_spec_type

from .checks import has_sbom_author, has_text


def sbom_creation_timestamp(doc: Document) -> FeatureScore:
    timestamp = doc.spec.creation_timestamp.strip()
    if not timestamp:
        return formulae.score_missing("timestamp")
    if not is_rfc3339_timestamp(timestamp):
        return FeatureScore(score=formulae.boolean_score(False), desc="fix timestamp format")
    return FeatureScore(score=formulae.boolean_score(True), desc="complete")


def sbom_authors(doc: Document) -> FeatureScore:
    if has_sbom_author(doc):
        return FeatureScore(score=formulae.boolean_score(True), desc="complete")
    return formulae.score_missing("author")


def sbom_tool_version(doc: Document) -> FeatureScore:
    """Score creation tools.

    Full score when any tool has both name and version, half score when
    tools only carry names, nothing otherwise.
    """
    if not doc.tools:
        return formulae.score_missing("tool")

    complete = missing_name = missing_version = 0
    for tool in doc.tools:
        named, versioned = has_text(tool.name), has_text(tool.version)
        if named and versioned:
            complete += 1
        elif versioned:
            missing_name += 1
        elif named:
            missing_version += 1

    if complete:
        return FeatureScore(score=formulae.boolean_score(True), desc="complete")
    if missing_version:
        return FeatureScore(score=5.0, desc=f"add version to {missing_version} tools")
    if missing_name:
        return FeatureScore(score=0.0, desc=f"add name to {missing_name} tools")
    return FeatureScore(score=0.0, desc="add tool")


def sbom_supplier(doc: Document) -> FeatureScore:
    """Document-level supplier, a CycloneDX-only field."""
    spec = parse_spec_type(doc.spec.spec_type)
    if spec == SpecType.SPDX:
        return FeatureScore(score=formulae.boolean_score(False), desc=formulae.non_supported_spdx_field())
    if spec == SpecType.CYCLONEDX:
        if doc.supplier is not None and doc.supplier.is_present():
            return FeatureScore(score=formulae.boolean_score(True), desc="complete")
        return formulae.score_missing("supplier")
    return formulae.score_unknown_spec()


def sbom_namespace(doc: Document) -> FeatureScore:
    """SPDX document namespace or CycloneDX serial number."""
    if parse_spec_type(doc.spec.spec_type) == SpecType.UNKNOWN:
        return formulae.score_unknown_spec()
    if has_text(doc.spec.namespace):
        return formulae.score_present("namespace")
    return formulae.score_missing("namespace")


def sbom_lifecycle(doc: Document) -> FeatureScore:
    """CycloneDX lifecycle phase, N/A for SPDX."""
    spec = parse_spec_type(doc.spec.spec_type)
    if spec == SpecType.SPDX:
        return FeatureScore(score=formulae.boolean_score(False), desc=formulae.non_supported_spdx_field())
    if spec != SpecType.CYCLONEDX:
        return formulae.score_unknown_spec()

    phases = [phase.strip().lower() for phase in doc.lifecycles if phase.strip()]
    if not phases:
        return formulae.score_missing("lifecycle")
    if any(phase in CYCLONEDX_LIFECYCLES for phase in phases):
        return FeatureScore(score=formulae.boolean_score(True), desc="complete")
    return FeatureScore(score=formulae.boolean_score(False), desc="add valid lifecycle")
