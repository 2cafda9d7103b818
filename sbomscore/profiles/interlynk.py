"""Interlynk default profile.

Every item is required and reuses the evaluator of the matching
comprehensive feature, so the profile reads as a pass/fail view of the
quality score.
"""

from __future__ import annotations

from sbomscore.document import Document
from sbomscore.features import (
    completeness,
    identification,
    integrity,
    licensing,
    provenance,
    structural,
    vulnerability,
)
from sbomscore.features.checks import count, has_any_checksum, has_sha256_plus_checksum
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore, ProfileFeatureSpec

KEY = "interlynk"
NAME = "Interlynk Profile"
DESCRIPTION = "Interlynk Default Scoring Profile"


def comp_checksums(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    return formulae.score_comp_full(count(comps, has_any_checksum), len(comps), "checksums")


def comp_sha256(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    return formulae.score_comp_full(count(comps, has_sha256_plus_checksum), len(comps), "SHA-256+ checksums")


FEATURES = [
    ProfileFeatureSpec("comp_name", "Component Name", True, identification.comp_with_name, "components with name"),
    ProfileFeatureSpec(
        "comp_version", "Component Version", True, identification.comp_with_version, "components with version"
    ),
    ProfileFeatureSpec(
        "comp_local_id",
        "Component Local IDs",
        True,
        identification.comp_with_identifiers,
        "components with local identifiers",
    ),
    ProfileFeatureSpec(
        "sbom_timestamp", "SBOM Creation Time", True, provenance.sbom_creation_timestamp, "Document creation time"
    ),
    ProfileFeatureSpec("sbom_authors", "SBOM Authors", True, provenance.sbom_authors, "Document authors"),
    ProfileFeatureSpec(
        "sbom_tool", "SBOM Creation Tool", True, provenance.sbom_tool_version, "Document creator tool & version"
    ),
    ProfileFeatureSpec("sbom_supplier", "SBOM Supplier", True, provenance.sbom_supplier, "Document supplier"),
    ProfileFeatureSpec("sbom_namespace", "SBOM Namespace", True, provenance.sbom_namespace, "Document URI/namespace"),
    ProfileFeatureSpec("sbom_lifecycle", "SBOM Lifecycle", True, provenance.sbom_lifecycle, "Document Lifecycle"),
    ProfileFeatureSpec("comp_checksums", "Component Checksum", True, comp_checksums, "components with checksums"),
    ProfileFeatureSpec("comp_sha256", "Component Checksum SHA256", True, comp_sha256, "components with SHA-256+"),
    ProfileFeatureSpec("sbom_signature", "SBOM Signature", True, integrity.sbom_signature, "Document signature"),
    ProfileFeatureSpec(
        "comp_dependencies",
        "Component Dependencies",
        True,
        completeness.comp_with_dependencies,
        "components with dependencies",
    ),
    ProfileFeatureSpec(
        "sbom_completeness",
        "SBOM Completeness",
        True,
        completeness.sbom_completeness_declared,
        "components with declared completeness",
    ),
    ProfileFeatureSpec(
        "sbom_primary_component",
        "Primary Component",
        True,
        completeness.sbom_primary_component,
        "Primary component identified",
    ),
    ProfileFeatureSpec(
        "comp_source_code",
        "Component Source Code",
        True,
        completeness.comp_with_source_code,
        "components with source code",
    ),
    ProfileFeatureSpec(
        "comp_supplier", "Component Supplier", True, completeness.comp_with_supplier, "components with supplier"
    ),
    ProfileFeatureSpec(
        "comp_purpose", "Component Type", True, completeness.comp_with_purpose, "components with primary purpose"
    ),
    ProfileFeatureSpec(
        "comp_licenses", "Component License", True, licensing.comp_with_licenses, "components with licenses"
    ),
    ProfileFeatureSpec(
        "comp_valid_licenses",
        "Component Valid License",
        True,
        licensing.comp_with_valid_licenses,
        "components with valid licenses",
    ),
    ProfileFeatureSpec(
        "comp_declared_licenses",
        "Component Declared License",
        True,
        licensing.comp_with_declared_licenses,
        "components with original licenses",
    ),
    ProfileFeatureSpec("sbom_data_license", "SBOM Data License", True, licensing.sbom_data_license, "Document data license"),
    ProfileFeatureSpec(
        "comp_no_deprecated_licenses",
        "Component With No Deprecated License",
        True,
        licensing.comp_no_deprecated_licenses,
        "components without deprecated licenses",
    ),
    ProfileFeatureSpec(
        "comp_no_restrictive_licenses",
        "Component With No Restrictive License",
        True,
        licensing.comp_no_restrictive_licenses,
        "components without restrictive licenses",
    ),
    ProfileFeatureSpec("comp_purl", "Component PURL", True, vulnerability.comp_with_purl, "components with PURL"),
    ProfileFeatureSpec("comp_cpe", "Component CPE", True, vulnerability.comp_with_cpe, "components with CPE"),
    ProfileFeatureSpec("sbom_spec_declared", "SBOM Spec", True, structural.sbom_spec_declared, "SBOM spec declared"),
    ProfileFeatureSpec("sbom_spec_version", "SBOM Spec Version", True, structural.sbom_spec_version, "SBOM spec version"),
    ProfileFeatureSpec("sbom_file_format", "SBOM File Format", True, structural.sbom_file_format, "SBOM file format"),
    ProfileFeatureSpec("sbom_schema_valid", "SBOM Schema", True, structural.sbom_schema_valid, "Schema validation"),
]
