"""Structural features: can the SBOM be reliably parsed by tooling."""

from __future__ import annotations

from sbomscore.document import Document, SpecType
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore
from sbomscore.vocabulary import parse_spec_type, supported_file_formats, supported_versions


def _spec_name(doc: Document) -> str:
    spec = doc.spec.spec_type
    return (spec.value if isinstance(spec, SpecType) else str(spec)).strip().lower()


def sbom_spec_declared(doc: Document) -> FeatureScore:
    name = _spec_name(doc)
    if not name:
        return formulae.score_missing("spec")
    if parse_spec_type(name) == SpecType.UNKNOWN:
        return FeatureScore(score=0.0, desc=f"unsupported spec: {name}")
    return FeatureScore(score=formulae.boolean_score(True), desc=name)


def sbom_spec_version(doc: Document) -> FeatureScore:
    name = _spec_name(doc)
    version = doc.spec.version.strip()
    if not name or not version:
        return formulae.score_missing("spec/version")
    if version in supported_versions(parse_spec_type(name)):
        return FeatureScore(score=formulae.boolean_score(True), desc=version)
    return FeatureScore(score=0.0, desc=f"unsupported version: {version} (spec {name})")


def sbom_file_format(doc: Document) -> FeatureScore:
    name = _spec_name(doc)
    file_format = doc.spec.file_format.strip().lower()
    if not name or not file_format:
        return formulae.score_missing("file format")
    if file_format in supported_file_formats(parse_spec_type(name)):
        return FeatureScore(score=formulae.boolean_score(True), desc=file_format)
    return FeatureScore(score=0.0, desc=f"unsupported format: {file_format} (spec {name})")


def sbom_schema_valid(doc: Document) -> FeatureScore:
    if doc.spec.schema_valid:
        return FeatureScore(score=formulae.boolean_score(True), desc="schema valid")
    return FeatureScore(score=0.0, desc="schema invalid")
