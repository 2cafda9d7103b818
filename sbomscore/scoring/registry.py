"""Built-in catalog: categories, features, profiles and alias tables."""

from __future__ import annotations

from sbomscore.features import (
    completeness,
    compquality,
    identification,
    integrity,
    licensing,
    provenance,
    structural,
    vulnerability,
)
from sbomscore.profiles import bsi, fsct, interlynk, ntia, ntia_2025, oct

from .catalog import Aliases, Catalog
from .specs import CategorySpec, FeatureSpec, ProfileFeatureSpec, ProfileSpec

CATEGORY_IDENTIFICATION = "identification"
CATEGORY_PROVENANCE = "provenance"
CATEGORY_INTEGRITY = "integrity"
CATEGORY_COMPLETENESS = "completeness"
CATEGORY_LICENSING = "licensing_and_compliance"
CATEGORY_VULNERABILITY = "vulnerability_and_traceability"
CATEGORY_STRUCTURAL = "structural"
CATEGORY_COMPONENT_INFO = "compinfo"

PROFILE_INTERLYNK = interlynk.KEY
PROFILE_NTIA = ntia.KEY
PROFILE_NTIA_2025 = ntia_2025.KEY
PROFILE_BSI_V1_1 = bsi.V1_1_KEY
PROFILE_BSI_V2_0 = bsi.V2_0_KEY
PROFILE_OCT = oct.KEY
PROFILE_FSCT = fsct.KEY

DEFAULT_PROFILES = (PROFILE_INTERLYNK, PROFILE_NTIA, PROFILE_BSI_V1_1)

# (category key, display name, weight, description, informational, [(feature key, display name, weight, evaluator)])
_CATEGORY_TABLE = [
    (
        CATEGORY_IDENTIFICATION,
        "Identification",
        10,
        "Identification of components is critical for understanding supply chain metadata",
        False,
        [
            ("comp_with_name", "Component With Name", 0.40, identification.comp_with_name),
            ("comp_with_version", "Component With Version", 0.35, identification.comp_with_version),
            ("comp_with_identifiers", "Component With Local IDs", 0.25, identification.comp_with_identifiers),
        ],
    ),
    (
        CATEGORY_PROVENANCE,
        "Provenance",
        12,
        "Enables trust and audit trails",
        False,
        [
            ("sbom_creation_timestamp", "Document Creation Time", 0.20, provenance.sbom_creation_timestamp),
            ("sbom_authors", "Document Authors", 0.20, provenance.sbom_authors),
            ("sbom_tool_version", "Document Creator Tool & Version", 0.20, provenance.sbom_tool_version),
            ("sbom_supplier", "Document Supplier", 0.15, provenance.sbom_supplier),
            ("sbom_namespace", "Document URI/Namespace", 0.15, provenance.sbom_namespace),
            ("sbom_lifecycle", "Document Lifecycle", 0.10, provenance.sbom_lifecycle),
        ],
    ),
    (
        CATEGORY_INTEGRITY,
        "Integrity",
        15,
        "Allows for verification if artifacts were altered",
        False,
        [
            ("comp_with_strong_checksums", "Component With Strong Checksums", 0.50, integrity.comp_with_strong_checksums),
            ("comp_with_weak_checksums", "Component With Weak Checksums", 0.40, integrity.comp_with_weak_checksums),
            ("sbom_signature", "Document Signature", 0.10, integrity.sbom_signature),
        ],
    ),
    (
        CATEGORY_COMPLETENESS,
        "Completeness",
        12,
        "Allows for vulnerability and impact analysis",
        False,
        [
            ("comp_with_dependencies", "Component With Dependencies", 0.25, completeness.comp_with_dependencies),
            (
                "sbom_completeness_declared",
                "Component With Declared Completeness",
                0.15,
                completeness.sbom_completeness_declared,
            ),
            ("sbom_primary_component", "Primary Component", 0.20, completeness.sbom_primary_component),
            ("comp_with_source_code", "Component With Source Code", 0.15, completeness.comp_with_source_code),
            ("comp_with_supplier", "Component With Supplier", 0.15, completeness.comp_with_supplier),
            ("comp_with_purpose", "Component With Primary Purpose", 0.10, completeness.comp_with_purpose),
        ],
    ),
    (
        CATEGORY_LICENSING,
        "Licensing",
        15,
        "Determines redistribution rights and legal compliance",
        False,
        [
            ("comp_with_licenses", "Components With Licenses", 0.20, licensing.comp_with_licenses),
            ("comp_with_valid_licenses", "Component With Valid Licenses", 0.20, licensing.comp_with_valid_licenses),
            (
                "comp_with_declared_licenses",
                "Component With Original Licenses",
                0.15,
                licensing.comp_with_declared_licenses,
            ),
            ("sbom_data_license", "Document Data License", 0.10, licensing.sbom_data_license),
            (
                "comp_no_deprecated_licenses",
                "Component Without Deprecated Licenses",
                0.15,
                licensing.comp_no_deprecated_licenses,
            ),
            (
                "comp_no_restrictive_licenses",
                "Component Without Restrictive Licenses",
                0.20,
                licensing.comp_no_restrictive_licenses,
            ),
        ],
    ),
    (
        CATEGORY_VULNERABILITY,
        "Vulnerability",
        10,
        "Ability to map components to vulnerability databases",
        False,
        [
            ("comp_with_purl", "Component With PURL", 0.50, vulnerability.comp_with_purl),
            ("comp_with_cpe", "Component With CPE", 0.50, vulnerability.comp_with_cpe),
        ],
    ),
    (
        CATEGORY_STRUCTURAL,
        "Structural",
        8,
        "If a BOM can't be reliably parsed, all downstream automation fails",
        False,
        [
            ("sbom_spec_declared", "SBOM Spec", 0.30, structural.sbom_spec_declared),
            ("sbom_spec_version", "SBOM Spec Version", 0.30, structural.sbom_spec_version),
            ("sbom_file_format", "SBOM File Format", 0.20, structural.sbom_file_format),
            ("sbom_schema_valid", "Schema Validation", 0.20, structural.sbom_schema_valid),
        ],
    ),
    (
        CATEGORY_COMPONENT_INFO,
        "Component Quality (Info)",
        10,
        "Real-time component risk assessment based on external threat intelligence. "
        "These metrics are informational only and do NOT affect the overall quality score",
        True,
        [
            ("comp_eol_eos", "Component No Longer Maintained or Declared EOL", 0.10, compquality.comp_eol_eos),
            ("comp_malicious", "Component tagged as malicious in threat databases", 0.30, compquality.comp_malicious),
            (
                "comp_vuln_sev_critical",
                "Component with vulnerabilities in CISA's Known Exploited Vulns",
                0.30,
                compquality.comp_vuln_sev_critical,
            ),
            ("comp_kev", "Component which are actively exploited", 0.30, compquality.comp_kev),
            (
                "comp_purl_valid",
                "Component purl resolves to a package manager or repository",
                0.30,
                compquality.comp_purl_valid,
            ),
            ("comp_cpe_valid", "Component cpe is found in NVD CPE database", 0.30, compquality.comp_cpe_valid),
        ],
    ),
]

# (profile key, name, description, feature specs)
_PROFILE_TABLE = [
    (interlynk.KEY, interlynk.NAME, interlynk.DESCRIPTION, interlynk.FEATURES),
    (ntia.KEY, ntia.NAME, ntia.DESCRIPTION, ntia.FEATURES),
    (ntia_2025.KEY, ntia_2025.NAME, ntia_2025.DESCRIPTION, ntia_2025.FEATURES),
    (bsi.V1_1_KEY, bsi.V1_1_NAME, bsi.V1_1_DESCRIPTION, bsi.V1_1_FEATURES),
    (bsi.V2_0_KEY, bsi.V2_0_NAME, bsi.V2_0_DESCRIPTION, bsi.V2_0_FEATURES),
    (oct.KEY, oct.NAME, oct.DESCRIPTION, oct.FEATURES),
    (fsct.KEY, fsct.NAME, fsct.DESCRIPTION, fsct.FEATURES),
]

CATEGORY_ALIASES = {
    "licensing": CATEGORY_LICENSING,
    "licensingandcompliance": CATEGORY_LICENSING,
    "vulnerability": CATEGORY_VULNERABILITY,
    "vulnerabilityandtraceability": CATEGORY_VULNERABILITY,
    "componentquality(info)": CATEGORY_COMPONENT_INFO,
    "component_quality_info": CATEGORY_COMPONENT_INFO,
}

FEATURE_ALIASES = {
    "name": "comp_with_name",
    "version": "comp_with_version",
    "local_ids": "comp_with_identifiers",
    "timestamp": "sbom_creation_timestamp",
    "authors": "sbom_authors",
    "tool": "sbom_tool_version",
    "purl": "comp_with_purl",
    "cpe": "comp_with_cpe",
}

PROFILE_ALIASES = {
    "nita-minimum-elements": PROFILE_NTIA,
    "ntia-minimum-elements": PROFILE_NTIA,
    "ntia2025": PROFILE_NTIA_2025,
    "ntia_2025": PROFILE_NTIA_2025,
    "ntia-minimum-elements-2025": PROFILE_NTIA_2025,
    "bsi": PROFILE_BSI_V1_1,
    "bsi-v1_1": PROFILE_BSI_V1_1,
    "bsi-v2": PROFILE_BSI_V2_0,
    "bsi-v2_0": PROFILE_BSI_V2_0,
    "openchain-telco": PROFILE_OCT,
    "fsct-v3": PROFILE_FSCT,
    "fsctv3": PROFILE_FSCT,
    "framing-software-component-transparency": PROFILE_FSCT,
}


def build_categories() -> tuple[list[CategorySpec], list[FeatureSpec]]:
    categories = []
    features = []
    for key, name, weight, description, informational, feature_rows in _CATEGORY_TABLE:
        for feature_key, feature_name, feature_weight, evaluate in feature_rows:
            features.append(FeatureSpec(feature_key, feature_name, feature_weight, evaluate))
        categories.append(
            CategorySpec(
                key=key,
                name=name,
                weight=weight,
                features=tuple(row[0] for row in feature_rows),
                description=description,
                informational=informational,
            )
        )
    return categories, features


def build_profiles() -> tuple[list[ProfileSpec], dict[str, list[ProfileFeatureSpec]]]:
    profiles = []
    profile_features = {}
    for key, name, description, specs in _PROFILE_TABLE:
        profiles.append(ProfileSpec(key=key, name=name, description=description, features=tuple(s.key for s in specs)))
        profile_features[key] = list(specs)
    return profiles, profile_features


def build_default_catalog() -> Catalog:
    """Build the catalog of built-in categories and profiles.

    Returns:
        A new Catalog. Building is cheap and deterministic, so callers may
        build one per evaluation or share a single instance.
    """
    categories, features = build_categories()
    profiles, profile_features = build_profiles()
    return Catalog(
        categories=categories,
        features=features,
        profiles=profiles,
        profile_features=profile_features,
        aliases=Aliases(category=CATEGORY_ALIASES, feature=FEATURE_ALIASES, profile=PROFILE_ALIASES),
        default_profiles=DEFAULT_PROFILES,
    )
