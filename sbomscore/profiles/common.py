"""Profile checks shared by several compliance profiles.

Profile checks differ from comprehensive features in two ways: their
descriptions are phrased as compliance statements, and a document without
components fails component checks (score 0) instead of being not applicable.
"""

from __future__ import annotations

from typing import Callable

from sbomscore.document import Component, Document, SpecType
from sbomscore.features.checks import (
    are_licenses_valid,
    count,
    has_complete_tool,
    has_meaningful_license,
    has_meaningful_text,
    has_text,
)
from sbomscore.identifiers import is_rfc3339_timestamp
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore
from sbomscore.vocabulary import parse_spec_type, supported_file_formats, supported_versions

NO_COMPONENTS = "no components declared in SBOM"

AGGREGATE_COMPLETE = "complete"
AGGREGATE_UNKNOWN = "unknown"
AGGREGATE_INCOMPLETE = "incomplete"


def score_components(doc: Document, predicate: Callable[[Component], bool], field: str) -> FeatureScore:
    """Score the share of components satisfying a predicate.

    Args:
        doc: Document under evaluation.
        predicate: Check applied to each component.
        field: What the check looks for, used in the description.

    Returns:
        FeatureScore; 0 with an explanatory description when the document has
        no components.
    """
    comps = doc.components
    if not comps:
        return FeatureScore(score=0.0, desc=NO_COMPONENTS)
    have = count(comps, predicate)
    total = len(comps)
    if have == total:
        desc = f"{field} declared for all components"
    else:
        desc = f"{field} declared for {have} of {total} components"
    return FeatureScore(score=formulae.per_component_score(have, total), desc=desc)


def sbom_spec(doc: Document) -> FeatureScore:
    spec = parse_spec_type(doc.spec.spec_type)
    if spec == SpecType.UNKNOWN:
        raw = str(getattr(doc.spec.spec_type, "value", doc.spec.spec_type)).strip()
        if not raw:
            return formulae.score_missing("spec")
        return FeatureScore(score=0.0, desc=f"unsupported spec: {raw}")
    return formulae.score_present(spec.value)


def sbom_spec_version(doc: Document) -> FeatureScore:
    spec = parse_spec_type(doc.spec.spec_type)
    version = doc.spec.version.strip()
    if spec == SpecType.UNKNOWN:
        return formulae.score_missing("spec")
    if not version:
        return formulae.score_missing("version")
    if version in supported_versions(spec):
        return formulae.score_present(version)
    return FeatureScore(score=0.0, desc=f"unsupported spec version: {version} (spec {spec.value})")


def sbom_machine_format(doc: Document) -> FeatureScore:
    """Machine readable spec and serialization format."""
    spec = parse_spec_type(doc.spec.spec_type)
    file_format = doc.spec.file_format.strip().lower()
    if spec == SpecType.UNKNOWN:
        return formulae.score_missing("spec")
    if not file_format:
        return formulae.score_missing("file format")
    if file_format in supported_file_formats(spec):
        return formulae.score_present(f"{spec.value} {file_format}")
    return FeatureScore(score=0.0, desc=f"unsupported file format: {file_format} (spec {spec.value})")


def sbom_schema(doc: Document) -> FeatureScore:
    if doc.spec.schema_valid:
        return formulae.score_present("valid schema")
    return FeatureScore(score=0.0, desc="invalid schema")


def sbom_namespace(doc: Document) -> FeatureScore:
    if has_text(doc.spec.namespace):
        return formulae.score_present("namespace")
    return formulae.score_missing("namespace")


def sbom_creation_timestamp(doc: Document) -> FeatureScore:
    timestamp = doc.spec.creation_timestamp.strip()
    if not timestamp:
        return FeatureScore(score=0.0, desc="SBOM creation timestamp missing")
    if not is_rfc3339_timestamp(timestamp):
        return FeatureScore(score=0.0, desc="SBOM creation timestamp present but not RFC3339 compliant")
    return FeatureScore(score=10.0, desc="SBOM creation timestamp declared")


def sbom_authors(doc: Document) -> FeatureScore:
    """SBOM author, falling back to the generating tool, supplier or manufacturer."""
    if any(has_text(a.name) or has_text(a.email) for a in doc.authors):
        return FeatureScore(score=10.0, desc="SBOM author declared explicitly")

    for tool in doc.tools:
        named, versioned = has_text(tool.name), has_text(tool.version)
        if named and versioned:
            return FeatureScore(score=10.0, desc="SBOM author inferred from SBOM generation tool")
        if named:
            return FeatureScore(score=5.0, desc="SBOM author inferred from SBOM generation tool (name only)")
        if versioned:
            return FeatureScore(score=0.0, desc="SBOM author inferred from SBOM generation tool (version only)")

    if doc.supplier is not None and doc.supplier.is_present():
        return FeatureScore(score=10.0, desc="SBOM author inferred from supplier (fallback)")
    if doc.manufacturer is not None and doc.manufacturer.is_present():
        return FeatureScore(score=10.0, desc="SBOM author inferred from manufacturer (fallback)")
    return FeatureScore(score=0.0, desc="SBOM author information missing")


def sbom_tool(doc: Document) -> FeatureScore:
    if has_complete_tool(doc):
        return formulae.score_present("tool name and version")
    if any(has_text(tool.name) for tool in doc.tools):
        return FeatureScore(score=5.0, desc="tool version missing")
    return formulae.score_missing("tool")


def sbom_dependencies(doc: Document) -> FeatureScore:
    """Primary component declares its direct dependencies.

    A primary component without dependencies is accepted when a composition
    states its dependency list is complete.
    """
    primary = doc.primary_component()
    if primary is None or not primary.id:
        return FeatureScore(score=0.0, desc="define primary component")

    direct = doc.dependencies_of(primary.id)
    if direct:
        return FeatureScore(
            score=10.0,
            desc=f"primary component declares {len(direct)} direct (top-level) dependencies",
        )

    for composition in doc.compositions:
        if composition.scope != "dependencies" or primary.id not in composition.dependencies:
            continue
        if composition.aggregate == AGGREGATE_COMPLETE:
            return FeatureScore(
                score=10.0,
                desc="primary component declares no direct dependencies and states relationship completeness (complete)",
            )
        if composition.aggregate == AGGREGATE_UNKNOWN:
            return FeatureScore(
                score=5.0,
                desc="primary component declares no direct dependencies and states relationship completeness as unknown",
            )
        if composition.aggregate == AGGREGATE_INCOMPLETE:
            return FeatureScore(
                score=0.0,
                desc="primary component declares no direct dependencies and states relationship completeness as incomplete",
            )

    return FeatureScore(
        score=0.0,
        desc="primary component declares no direct dependencies and does not declare relationship completeness",
    )


def sbom_signature(doc: Document) -> FeatureScore:
    signature = doc.signature
    if signature is None or not has_text(signature.algorithm) or not has_text(signature.value):
        return formulae.score_missing("signature")
    if not has_text(signature.public_key) and not signature.certificate_path:
        return FeatureScore(score=5.0, desc="signature without public key or certificate")
    return formulae.score_present("signature")


def sbom_data_license(doc: Document) -> FeatureScore:
    licenses = doc.spec.licenses
    if not licenses:
        return formulae.score_missing("data license")
    if are_licenses_valid(licenses):
        return formulae.score_present(f"data license {licenses[0].short_id or licenses[0].name}".strip())
    return FeatureScore(score=0.0, desc="invalid data license")


def comp_name(doc: Document) -> FeatureScore:
    return score_components(doc, lambda c: has_text(c.name), "name")


def comp_version(doc: Document) -> FeatureScore:
    return score_components(doc, lambda c: has_text(c.version), "version")


def comp_valid_license(doc: Document) -> FeatureScore:
    """Components whose concluded or declared licenses are all recognized."""

    def valid(component: Component) -> bool:
        licenses = component.concluded_licenses or component.declared_licenses
        return has_meaningful_license(licenses) and are_licenses_valid(licenses)

    return score_components(doc, valid, "valid license")


def comp_source_code_url(doc: Document) -> FeatureScore:
    return score_components(doc, lambda c: has_text(c.source_code_url), "source code URL")


def comp_download_url(doc: Document) -> FeatureScore:
    return score_components(doc, lambda c: has_meaningful_text(c.download_url), "download URL")


def comp_source_hash(doc: Document) -> FeatureScore:
    return score_components(doc, lambda c: has_text(c.source_code_hash), "source code hash")


def comp_copyright(doc: Document) -> FeatureScore:
    return score_components(doc, lambda c: has_meaningful_text(c.copyright), "copyright")
