"""NTIA minimum elements profile.

Every element is required. The SBOM author falls back to the generating
tool, then to the document supplier or manufacturer.
"""

from __future__ import annotations

from sbomscore.document import Document
from sbomscore.features.checks import has_valid_cpe, has_valid_purl
from sbomscore.scoring.specs import FeatureScore, ProfileFeatureSpec

from . import common

KEY = "ntia"
NAME = "NTIA Minimum Elements"
DESCRIPTION = "NTIA Minimum Elements Profile"


def comp_uniq_id(doc: Document) -> FeatureScore:
    """Components carrying a valid PURL or CPE."""
    result = common.score_components(doc, lambda c: has_valid_purl(c) or has_valid_cpe(c), "unique identifier")
    if result.desc.endswith("all components"):
        return FeatureScore(score=result.score, desc=f"{result.desc} (PURL, CPE)")
    return result


FEATURES = [
    ProfileFeatureSpec(
        "sbom_machine_format",
        "Automation Support",
        True,
        common.sbom_machine_format,
        "Valid spec (SPDX/CycloneDX) and format (JSON/XML)",
    ),
    ProfileFeatureSpec("comp_name", "Component Name", True, common.comp_name, "All components must have names"),
    ProfileFeatureSpec(
        "comp_version", "Component Version", True, common.comp_version, "Version strings for all components"
    ),
    ProfileFeatureSpec(
        "comp_uniq_id", "Component Other Identifiers", True, comp_uniq_id, "PURL, CPE, or other unique IDs"
    ),
    ProfileFeatureSpec(
        "sbom_dependencies",
        "Dependency Relationships",
        True,
        common.sbom_dependencies,
        "Component dependency mapping",
    ),
    ProfileFeatureSpec("sbom_creator", "SBOM Author", True, common.sbom_authors, "Tool or person who created SBOM"),
    ProfileFeatureSpec(
        "sbom_timestamp", "SBOM Timestamp", True, common.sbom_creation_timestamp, "ISO 8601 creation timestamp"
    ),
]
