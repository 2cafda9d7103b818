"""NTIA minimum elements, 2025 revision (request for comments draft).

Keeps every 2021 element and adds the generating tool, the generation
context, the software producer, component hashes, component licenses and
software identifiers. Every element is required.
"""

from __future__ import annotations

from sbomscore.document import Component, Document, SpecType
from sbomscore.features.checks import has_any_checksum, has_meaningful_license, has_text
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore, ProfileFeatureSpec
from sbomscore.vocabulary import parse_spec_type

from . import common, ntia

KEY = "ntia-2025"
NAME = "NTIA Minimum Elements (2025) - RFC"
DESCRIPTION = "NTIA Minimum Elements 2025 RFC Profile"


def sbom_tool_name(doc: Document) -> FeatureScore:
    if any(has_text(tool.name) for tool in doc.tools):
        return formulae.score_present("tool name")
    return formulae.score_missing("tool name")


def sbom_generation_context(doc: Document) -> FeatureScore:
    """When in the lifecycle the SBOM was generated.

    Declared lifecycle phases are preferred; the creation timestamp is
    accepted as the minimal context.
    """
    if parse_spec_type(doc.spec.spec_type) == SpecType.UNKNOWN:
        return formulae.score_missing("generation context")
    phases = [phase.strip() for phase in doc.lifecycles if has_text(phase)]
    if phases:
        return formulae.score_present(f"generation context (lifecycle {', '.join(phases)})")
    if has_text(doc.spec.creation_timestamp):
        return formulae.score_present("generation context (creation timestamp)")
    return formulae.score_missing("generation context")


def sbom_software_producer(doc: Document) -> FeatureScore:
    if doc.supplier is not None and doc.supplier.is_present():
        return formulae.score_present("software producer (supplier)")
    if doc.manufacturer is not None and doc.manufacturer.is_present():
        return formulae.score_present("software producer (manufacturer)")
    return formulae.score_missing("software producer")


def comp_hash(doc: Document) -> FeatureScore:
    return common.score_components(doc, has_any_checksum, "hash")


def comp_license(doc: Document) -> FeatureScore:
    return common.score_components(
        doc,
        lambda c: has_meaningful_license(c.concluded_licenses) or has_meaningful_license(c.declared_licenses),
        "license",
    )


def comp_software_identifiers(doc: Document) -> FeatureScore:
    """SPDX packages need an SPDXID or PURL; CycloneDX components a PURL or CPE."""
    spec = parse_spec_type(doc.spec.spec_type)

    def identified(component: Component) -> bool:
        if spec == SpecType.SPDX:
            return has_text(component.id) or any(has_text(purl) for purl in component.purls)
        if spec == SpecType.CYCLONEDX:
            return any(has_text(value) for value in (*component.purls, *component.cpes))
        return False

    return common.score_components(doc, identified, "software identifier")


FEATURES = [
    ProfileFeatureSpec(
        "sbom_machine_format",
        "Automation Support",
        True,
        common.sbom_machine_format,
        "Valid spec (SPDX/CycloneDX) and format (JSON/XML)",
    ),
    ProfileFeatureSpec("sbom_creator", "SBOM Author", True, common.sbom_authors, "Entity that created the SBOM"),
    ProfileFeatureSpec(
        "sbom_timestamp", "SBOM Timestamp", True, common.sbom_creation_timestamp, "ISO 8601 creation timestamp"
    ),
    ProfileFeatureSpec("sbom_tool_name", "Tool Name", True, sbom_tool_name, "Name of the tool that generated the SBOM"),
    ProfileFeatureSpec(
        "sbom_generation_context",
        "Generation Context",
        True,
        sbom_generation_context,
        "Lifecycle phase in which the SBOM was generated",
    ),
    ProfileFeatureSpec(
        "sbom_software_producer",
        "Software Producer",
        True,
        sbom_software_producer,
        "Supplier or manufacturer of the described software",
    ),
    ProfileFeatureSpec("comp_name", "Component Name", True, common.comp_name, "All components must have names"),
    ProfileFeatureSpec(
        "comp_version", "Component Version", True, common.comp_version, "Version strings for all components"
    ),
    ProfileFeatureSpec(
        "comp_uniq_id", "Component Other Identifiers", True, ntia.comp_uniq_id, "PURL, CPE, or other unique IDs"
    ),
    ProfileFeatureSpec("comp_hash", "Component Hash", True, comp_hash, "Cryptographic hash for all components"),
    ProfileFeatureSpec("comp_license", "Component License", True, comp_license, "License for all components"),
    ProfileFeatureSpec(
        "comp_software_identifiers",
        "Software Identifiers",
        True,
        comp_software_identifiers,
        "SPDXID, PURL or CPE for all components",
    ),
    ProfileFeatureSpec(
        "sbom_dependencies",
        "Dependency Relationships",
        True,
        common.sbom_dependencies,
        "Component dependency mapping",
    ),
]
