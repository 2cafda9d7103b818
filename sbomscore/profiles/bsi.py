"""BSI TR-03183-2 compliance profiles (v1.1 and v2.0).

v2.0 extends v1.1 with a document signature, links to other BOMs,
vulnerability disclosure, SHA-256 component hashes and validated
component licenses.
"""

from __future__ import annotations

import re

from packaging import version as pkg_version

from sbomscore.document import Component, Contact, Document, SpecType
from sbomscore.features.checks import (
    are_licenses_valid,
    has_any_checksum,
    has_meaningful_license,
    has_sha256_plus_checksum,
    has_text,
)
from sbomscore.logging import getLogger
from sbomscore.scoring import formulae
from sbomscore.scoring.graph import analyze_document_graph
from sbomscore.scoring.specs import FeatureScore, ProfileFeatureSpec
from sbomscore.vocabulary import parse_spec_type

from . import common

logger = getLogger(__name__)

V1_1_KEY = "bsi-v1.1"
V1_1_NAME = "BSI TR-03183-2 v1.1"
V1_1_DESCRIPTION = "BSI TR-03183-2 v1.1 Profile"

V2_0_KEY = "bsi-v2.0"
V2_0_NAME = "BSI TR-03183-2 v2.0"
V2_0_DESCRIPTION = "BSI TR-03183-2 v2.0 Profile"

VALID_SPDX_VERSIONS = ("SPDX-2.3",)
MIN_CYCLONEDX_VERSION = "1.4"
MAX_CYCLONEDX_VERSION = "1.6"

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")
URL_PATTERN = re.compile(r"^https?://[^\s/$.?#].[^\s]*$", re.IGNORECASE)


def _is_valid_email(value: str) -> bool:
    return bool(EMAIL_PATTERN.match(value.strip()))


def _is_valid_url(value: str) -> bool:
    return bool(URL_PATTERN.match(value.strip()))


def _has_contact(contact: Contact | None) -> bool:
    if contact is None:
        return False
    return _is_valid_email(contact.email) or _is_valid_url(contact.url)


def _is_supported_cyclonedx_version(value: str) -> bool:
    """Check a CycloneDX version against the accepted range (inclusive)."""
    try:
        parsed = pkg_version.parse(value)
    except pkg_version.InvalidVersion:
        logger.debug(f"[BSI] Unparsable CycloneDX version {value!r}")
        return False
    return pkg_version.parse(MIN_CYCLONEDX_VERSION) <= parsed <= pkg_version.parse(MAX_CYCLONEDX_VERSION)


def sbom_spec_version(doc: Document) -> FeatureScore:
    """Spec version accepted by BSI.

    10 when the version is accepted, 5 when the spec is supported but the
    version is not, 0 for any other spec.
    """
    spec = parse_spec_type(doc.spec.spec_type)
    ver = doc.spec.version.strip()

    if spec == SpecType.SPDX:
        supported = ver in VALID_SPDX_VERSIONS
    elif spec == SpecType.CYCLONEDX:
        supported = _is_supported_cyclonedx_version(ver)
    else:
        return FeatureScore(score=0.0, desc="unsupported spec")

    if supported:
        return FeatureScore(score=10.0, desc=f"supported: {spec.value} {ver}")
    return FeatureScore(score=5.0, desc=f"spec supported but not version: {ver}")


def sbom_build(doc: Document) -> FeatureScore:
    spec = parse_spec_type(doc.spec.spec_type)
    if spec == SpecType.SPDX:
        return FeatureScore(score=0.0, desc=formulae.non_supported_spdx_field(), ignore=True)
    if spec == SpecType.UNKNOWN:
        return formulae.score_unknown_spec()
    if any(phase.strip().lower() == "build" for phase in doc.lifecycles):
        return FeatureScore(score=10.0, desc="lifecycle includes build")
    return FeatureScore(score=0.0, desc="no build phase in lifecycle")


def sbom_creator(doc: Document) -> FeatureScore:
    """SBOM creator reachable through an email address or URL.

    Authors are checked first, then the document supplier and manufacturer.
    """
    if any(_has_contact(author) for author in doc.authors):
        return FeatureScore(score=10.0, desc="creator contact declared")
    if _has_contact(doc.supplier):
        return FeatureScore(score=10.0, desc="creator contact inferred from supplier (fallback)")
    if _has_contact(doc.manufacturer):
        return FeatureScore(score=10.0, desc="creator contact inferred from manufacturer (fallback)")
    if any(author.is_present() for author in doc.authors):
        return FeatureScore(score=0.0, desc="creator declared without email or URL")
    return FeatureScore(score=0.0, desc="creator contact missing")


def sbom_uri(doc: Document) -> FeatureScore:
    if has_text(doc.spec.namespace):
        return FeatureScore(score=10.0, desc="has URI")
    return FeatureScore(score=0.0, desc="no URI")


def comp_license(doc: Document) -> FeatureScore:
    return common.comp_valid_license(doc)


def comp_hash(doc: Document) -> FeatureScore:
    return common.score_components(doc, has_any_checksum, "checksum")


def comp_depth(doc: Document) -> FeatureScore:
    return analyze_document_graph(doc).to_feature_score()


def sbom_signature(doc: Document) -> FeatureScore:
    signature = doc.signature
    if signature is None:
        return FeatureScore(score=0.0, desc="no signature provided")
    return common.sbom_signature(doc)


def sbom_bomlinks(doc: Document) -> FeatureScore:
    links = [link for link in doc.external_references if has_text(link)]
    if not links:
        return FeatureScore(score=0.0, desc="no bom links found")
    return FeatureScore(score=10.0, desc=f"found {len(links)} bom links")


def sbom_vulnerabilities(doc: Document) -> FeatureScore:
    """Known vulnerabilities; an SBOM without any scores best."""
    spec = parse_spec_type(doc.spec.spec_type)
    if spec == SpecType.SPDX:
        return FeatureScore(score=0.0, desc=formulae.non_supported_spdx_field(), ignore=True)

    ids = [vuln.id.strip() for vuln in doc.vulnerabilities if has_text(vuln.id)]
    if ids:
        return FeatureScore(score=0.0, desc="vulnerabilities found: " + ", ".join(ids))
    return FeatureScore(score=10.0, desc="no vulnerabilities found")


def comp_hash_sha256(doc: Document) -> FeatureScore:
    return common.score_components(doc, has_sha256_plus_checksum, "SHA-256 or stronger checksum")


def comp_associated_license(doc: Document) -> FeatureScore:
    """Licenses tied to the component: concluded for SPDX, any for CycloneDX."""
    spec = parse_spec_type(doc.spec.spec_type)
    if spec == SpecType.UNKNOWN:
        return formulae.score_unknown_spec()

    def associated(component: Component) -> bool:
        if spec == SpecType.SPDX:
            licenses = component.concluded_licenses
        else:
            licenses = [*component.concluded_licenses, *component.declared_licenses]
        return has_meaningful_license(licenses) and are_licenses_valid(licenses)

    return common.score_components(doc, associated, "associated license")


V1_1_FEATURES = [
    ProfileFeatureSpec("sbom_spec", "SBOM Formats", True, common.sbom_spec, "SPDX or CycloneDX"),
    ProfileFeatureSpec("sbom_spec_version", "SBOM Spec Version", True, sbom_spec_version, "Valid supported version"),
    ProfileFeatureSpec("sbom_build", "Build Information", False, sbom_build, "Build phase indication"),
    ProfileFeatureSpec("sbom_depth", "SBOM Depth", True, common.sbom_dependencies, "Complete dependency tree"),
    ProfileFeatureSpec("sbom_creator", "Creator Info", True, sbom_creator, "Contact email/URL"),
    ProfileFeatureSpec(
        "sbom_timestamp", "Creation Time", True, common.sbom_creation_timestamp, "Valid timestamp (ISO-8601)"
    ),
    ProfileFeatureSpec("sbom_uri", "URI/Namespace", True, sbom_uri, "Unique SBOM identifier"),
    ProfileFeatureSpec("comp_name", "Component Name", True, common.comp_name, "All components named"),
    ProfileFeatureSpec("comp_version", "Component Version", True, common.comp_version, "Version for each component"),
    ProfileFeatureSpec("comp_license", "Component License", True, comp_license, "License information"),
    ProfileFeatureSpec("comp_hash", "Component Hash", True, comp_hash, "Checksums for components"),
    ProfileFeatureSpec(
        "comp_source_code_url", "Component Source URL", False, common.comp_source_code_url, "Source code repository"
    ),
    ProfileFeatureSpec(
        "comp_download_url", "Component Download URL", True, common.comp_download_url, "Where to obtain component"
    ),
    ProfileFeatureSpec("comp_source_hash", "Component Source Hash", False, common.comp_source_hash, "Hash of source code"),
    ProfileFeatureSpec("comp_depth", "Component Dependencies", True, comp_depth, "Dependency relationships"),
]

V2_0_FEATURES = [
    *V1_1_FEATURES,
    ProfileFeatureSpec(
        "sbom_signature", "Digital Signature", True, sbom_signature, "Cryptographic signature verification"
    ),
    ProfileFeatureSpec("sbom_bomlinks", "External References", False, sbom_bomlinks, "Links to other SBOMs"),
    ProfileFeatureSpec(
        "sbom_vulnerabilities",
        "Vulnerability Info",
        False,
        sbom_vulnerabilities,
        "Known vulnerabilities (absence preferred)",
    ),
    ProfileFeatureSpec("comp_hash_sha256", "SHA-256 Checksums", True, comp_hash_sha256, "SHA-256 or stronger required"),
    ProfileFeatureSpec(
        "comp_associated_license", "License Validation", True, comp_associated_license, "Valid SPDX license identifiers"
    ),
]
