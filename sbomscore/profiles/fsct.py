"""Framing Software Component Transparency (FSCT v3) baseline profile.

FSCT v3 is the third edition of the NTIA minimum elements. The baseline asks
for presence and transparency rather than validity: any hash algorithm, any
identifier scheme and any license text count, and "unknown" is an acceptable
answer where the standard allows one (supplier, dependency completeness).
Every element is required.
"""

from __future__ import annotations

from sbomscore.document import Document
from sbomscore.features.checks import (
    has_any_unique_id,
    has_meaningful_license,
    has_meaningful_text,
    has_text,
)
from sbomscore.identifiers import is_strong_checksum, is_weak_checksum, normalize_algorithm
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore, ProfileFeatureSpec

from . import common

KEY = "fsct"
NAME = "Framing Software Component Transparency (v3)"
DESCRIPTION = "FSCT v3 Baseline Profile (NTIA Minimum Elements 3rd Edition)"

UNKNOWN_SUPPLIER = "unknown"


def _describe(field: str, have: int, total: int, detail: str = "") -> str:
    suffix = f" ({detail})" if detail else ""
    if have == total:
        return f"{field} declared for all components{suffix}"
    if have:
        return f"{field} declared for {have} components; missing for {total - have}{suffix}"
    return f"{field} missing for all {total} components"


def _score(field: str, have: int, total: int, detail: str = "") -> FeatureScore:
    return FeatureScore(score=formulae.per_component_score(have, total), desc=_describe(field, have, total, detail))


def _no_components() -> FeatureScore:
    return FeatureScore(score=0.0, desc=common.NO_COMPONENTS)


def sbom_authors(doc: Document) -> FeatureScore:
    """Entity that created the SBOM data; tools do not count.

    A name or email identifies the author. Contact details alone (phone or
    website) are accepted when no legal entity name is available.
    """
    if not doc.authors:
        return formulae.score_missing("authors")
    if any(has_text(a.name) or has_text(a.email) for a in doc.authors):
        return FeatureScore(score=10.0, desc="SBOM author entity explicitly identified")
    if any(has_text(a.phone) or has_text(a.url) for a in doc.authors):
        return FeatureScore(score=10.0, desc="SBOM author declared using contact information only")
    return FeatureScore(score=0.0, desc="add authors")


def sbom_primary_component(doc: Document) -> FeatureScore:
    if doc.primary_component() is not None:
        return formulae.score_present("primary component")
    return formulae.score_missing("primary component")


def dependency_completeness(doc: Document, component_id: str) -> str | None:
    """Return the completeness aggregate declared for a component's dependencies.

    An SBOM-wide declaration applies to every component. None means nothing
    was declared.
    """
    for composition in doc.compositions:
        if composition.sbom_complete:
            return composition.aggregate
        if composition.scope != "dependencies":
            continue
        if component_id in composition.dependencies:
            return composition.aggregate
    return None


def sbom_relationships(doc: Document) -> FeatureScore:
    """Direct dependencies of the primary component and their completeness.

    The primary component must state whether its dependency list is complete,
    even when it is empty; "unknown" is an acceptable statement. Completeness
    of each direct dependency is reported but does not lower the score.
    """
    primary = doc.primary_component()
    if primary is None or not primary.id:
        return FeatureScore(score=0.0, desc="define primary component")

    direct = doc.dependencies_of(primary.id)
    if dependency_completeness(doc, primary.id) is None:
        return FeatureScore(
            score=0.0,
            desc=f"{len(direct)} direct dependencies declared, but dependency completeness missing for primary component",
        )

    declared = sum(1 for dep in direct if dependency_completeness(doc, dep) is not None)
    if not direct:
        desc = "no dependencies declared; completeness explicitly indicated for primary component"
    elif declared == len(direct):
        desc = "dependency relationships and completeness declared for primary and all direct dependencies"
    elif declared:
        desc = (
            f"dependency relationships declared; completeness declared for primary and {declared} direct "
            f"dependencies; missing for {len(direct) - declared} direct dependencies"
        )
    else:
        desc = (
            "dependency relationships declared; completeness declared for primary component; "
            f"missing for all {len(direct)} direct dependencies"
        )
    return FeatureScore(score=10.0, desc=desc)


def comp_supplier(doc: Document) -> FeatureScore:
    """Supplier per component; an explicit "unknown" supplier counts."""
    comps = doc.components
    if not comps:
        return _no_components()

    identified = unknown = 0
    for component in comps:
        supplier = component.supplier
        if supplier is None:
            continue
        if supplier.name.strip().lower() == UNKNOWN_SUPPLIER:
            unknown += 1
        elif supplier.is_present():
            identified += 1

    total = len(comps)
    have = identified + unknown
    if have == total and unknown and not identified:
        desc = "supplier declared as unknown for all components"
    elif have == total and unknown:
        desc = f"supplier identified for {identified} components; explicitly unknown for {unknown}"
    elif have == total:
        desc = "supplier identified for all components"
    else:
        desc = _describe("supplier", have, total)
    return FeatureScore(score=formulae.per_component_score(have, total), desc=desc)


def comp_uniq_id(doc: Document) -> FeatureScore:
    """At least one identifier of any scheme per component; not validated."""
    comps = doc.components
    if not comps:
        return _no_components()

    schemes = (
        ("PURL", "purls"),
        ("CPE", "cpes"),
        ("SWHID", "swhids"),
        ("SWID", "swids"),
        ("OmniborID", "omnibor_ids"),
    )
    seen = [label for label, attr in schemes if any(has_text(v) for c in comps for v in getattr(c, attr))]
    have = sum(1 for c in comps if has_any_unique_id(c))
    return _score("unique identifier", have, len(comps), ", ".join(seen))


def comp_checksum(doc: Document) -> FeatureScore:
    """At least one recognized hash per component; weak algorithms count."""
    comps = doc.components
    if not comps:
        return _no_components()

    algorithms: set[str] = set()
    have = 0
    for component in comps:
        found = {
            normalize_algorithm(c.algorithm)
            for c in component.checksums
            if has_text(c.value) and (is_weak_checksum(c.algorithm) or is_strong_checksum(c.algorithm))
        }
        if found:
            have += 1
            algorithms |= found
    return _score("cryptographic hash", have, len(comps), ", ".join(sorted(algorithms)))


def comp_license(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return _no_components()
    have = sum(1 for c in comps if has_meaningful_license(c.concluded_licenses))
    return _score("license", have, len(comps))


def comp_copyright(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return _no_components()
    have = sum(1 for c in comps if has_meaningful_text(c.copyright))
    return _score("copyright", have, len(comps))


FEATURES = [
    ProfileFeatureSpec("sbom_authors", "SBOM Author", True, sbom_authors, "Entity that created the SBOM data"),
    ProfileFeatureSpec(
        "sbom_timestamp", "SBOM Timestamp", True, common.sbom_creation_timestamp, "RFC 3339 creation timestamp"
    ),
    ProfileFeatureSpec(
        "sbom_primary_component",
        "Primary Component",
        True,
        sbom_primary_component,
        "Subject of the SBOM and root of the dependencies",
    ),
    ProfileFeatureSpec(
        "sbom_relationships",
        "Dependency Relationships",
        True,
        sbom_relationships,
        "Direct dependencies with declared completeness",
    ),
    ProfileFeatureSpec("comp_name", "Component Name", True, common.comp_name, "Supplier-defined component names"),
    ProfileFeatureSpec(
        "comp_version", "Component Version", True, common.comp_version, "Supplier-defined component versions"
    ),
    ProfileFeatureSpec("comp_supplier", "Component Supplier", True, comp_supplier, "Supplier or explicit unknown"),
    ProfileFeatureSpec(
        "comp_uniq_id", "Component Unique ID", True, comp_uniq_id, "PURL, CPE, SWHID, SWID or OmniBOR ID"
    ),
    ProfileFeatureSpec("comp_checksum", "Component Checksum", True, comp_checksum, "Any cryptographic hash"),
    ProfileFeatureSpec("comp_license", "Component License", True, comp_license, "Concluded license"),
    ProfileFeatureSpec("comp_copyright", "Component Copyright", True, comp_copyright, "Copyright text"),
]
