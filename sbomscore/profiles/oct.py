"""OpenChain Telco SBOM profile.

OCT mandates SPDX. For documents in any other spec every item is reported
as not applicable.
"""

from __future__ import annotations

from functools import wraps

from sbomscore.document import Document, SpecType
from sbomscore.features.checks import has_complete_tool, has_meaningful_license, has_text
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import Evaluator, FeatureScore, ProfileFeatureSpec
from sbomscore.vocabulary import parse_spec_type

from . import common

KEY = "oct"
NAME = "OpenChain Telco (OCT)"
DESCRIPTION = "OpenChain Telco (OCT) Profile"


def spdx_only(evaluate: Evaluator) -> Evaluator:
    """Mark an evaluator as applicable to SPDX documents only."""

    @wraps(evaluate)
    def wrapper(doc: Document) -> FeatureScore:
        spec = parse_spec_type(doc.spec.spec_type)
        if spec == SpecType.CYCLONEDX:
            return FeatureScore(score=0.0, desc="N/A (CycloneDX)", ignore=True)
        if spec != SpecType.SPDX:
            return formulae.score_unknown_spec()
        return evaluate(doc)

    return wrapper


def _document_field(value: str, name: str) -> FeatureScore:
    if has_text(value):
        return formulae.score_present(name)
    return formulae.score_missing(name)


def sbom_spdxid(doc: Document) -> FeatureScore:
    return _document_field(doc.spec.spdx_id, "spdxid")


def sbom_name(doc: Document) -> FeatureScore:
    return _document_field(doc.spec.name, "sbom name")


def sbom_comment(doc: Document) -> FeatureScore:
    return _document_field(doc.spec.comment, "creator comment")


def sbom_organization(doc: Document) -> FeatureScore:
    return _document_field(doc.spec.organization, "creator org")


def sbom_tool(doc: Document) -> FeatureScore:
    if has_complete_tool(doc):
        return formulae.score_present("sbom tool")
    return formulae.score_missing("sbom tool")


def sbom_data_license(doc: Document) -> FeatureScore:
    if any(has_text(lic.name) or has_text(lic.short_id) for lic in doc.spec.licenses):
        return formulae.score_present("data license")
    return formulae.score_missing("data license")


def pack_spdxid(doc: Document) -> FeatureScore:
    return common.score_components(doc, lambda c: has_text(c.id), "SPDXID")


def pack_file_analyzed(doc: Document) -> FeatureScore:
    return common.score_components(doc, lambda c: c.file_analyzed, "files analyzed")


def pack_license_con(doc: Document) -> FeatureScore:
    return common.score_components(
        doc,
        lambda c: has_meaningful_license(c.concluded_licenses),
        "concluded license",
    )


def pack_license_dec(doc: Document) -> FeatureScore:
    return common.score_components(
        doc,
        lambda c: has_meaningful_license(c.declared_licenses),
        "declared license",
    )


FEATURES = [
    ProfileFeatureSpec("sbom_spec", "SBOM Format", True, spdx_only(common.sbom_spec), "Must be SPDX"),
    ProfileFeatureSpec("sbom_spec_version", "Spec Version", True, spdx_only(common.sbom_spec_version), "SPDX version"),
    ProfileFeatureSpec("sbom_spdxid", "SPDX ID", True, spdx_only(sbom_spdxid), "Document SPDXID"),
    ProfileFeatureSpec("sbom_name", "Document Name", True, spdx_only(sbom_name), "SBOM name"),
    ProfileFeatureSpec("sbom_comment", "Document Comment", False, spdx_only(sbom_comment), "Additional info"),
    ProfileFeatureSpec(
        "sbom_organization", "Creator organization", True, spdx_only(sbom_organization), "Organization info"
    ),
    ProfileFeatureSpec("sbom_tool", "Creator Tool", True, spdx_only(sbom_tool), "Tool name & version"),
    ProfileFeatureSpec("sbom_namespace", "Document Namespace", True, spdx_only(common.sbom_namespace), "Unique namespace"),
    ProfileFeatureSpec("sbom_data_license", "Data License", True, spdx_only(sbom_data_license), "CC0-1.0 or similar"),
    ProfileFeatureSpec("pack_name", "Package name", True, spdx_only(common.comp_name), "All packages named"),
    ProfileFeatureSpec("pack_version", "Package Version", True, spdx_only(common.comp_version), "Package versions"),
    ProfileFeatureSpec("pack_spdxid", "Package SPDXID", True, spdx_only(pack_spdxid), "Unique SPDX IDs"),
    ProfileFeatureSpec(
        "pack_download_url",
        "Package Download Location",
        False,
        spdx_only(common.comp_download_url),
        "Where to get package",
    ),
    ProfileFeatureSpec(
        "pack_file_analyzed", "Package Analyzed", False, spdx_only(pack_file_analyzed), "File analysis status"
    ),
    ProfileFeatureSpec(
        "pack_license_con", "Package License Concluded", True, spdx_only(pack_license_con), "Concluded license"
    ),
    ProfileFeatureSpec(
        "pack_license_dec", "Package License Declared", True, spdx_only(pack_license_dec), "Declared license"
    ),
    ProfileFeatureSpec("pack_copyright", "Package Copyright", True, spdx_only(common.comp_copyright), "Copyright text"),
]
