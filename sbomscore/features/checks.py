"""Field predicates shared by comprehensive features and profile checks."""

from __future__ import annotations

from typing import Callable, Iterable

from sbomscore.document import Component, Document
from sbomscore.identifiers import (
    is_sha256_or_stronger,
    is_strong_checksum,
    is_valid_cpe,
    is_valid_purl,
    is_weak_checksum,
)
from sbomscore.licenses import License, is_meaningful_license_text

# SPDX placeholders for a field with no value
NO_VALUE_MARKERS = frozenset({"NOASSERTION", "NONE"})


def count(components: Iterable[Component], predicate: Callable[[Component], bool]) -> int:
    return sum(1 for component in components if predicate(component))


def has_text(value: str | None) -> bool:
    return bool(value and value.strip())


def has_meaningful_text(value: str | None) -> bool:
    """Value is set and is not an SPDX NOASSERTION or NONE placeholder."""
    return has_text(value) and value.strip().upper() not in NO_VALUE_MARKERS


def has_name(component: Component) -> bool:
    return has_text(component.name)


def has_version(component: Component) -> bool:
    return has_text(component.version)


def has_strong_checksum(component: Component) -> bool:
    return any(is_strong_checksum(c.algorithm) and has_text(c.value) for c in component.checksums)


def has_weak_checksum(component: Component) -> bool:
    return any(is_weak_checksum(c.algorithm) and has_text(c.value) for c in component.checksums)


def has_any_checksum(component: Component) -> bool:
    return any(has_text(c.value) for c in component.checksums)


def has_sha256_plus_checksum(component: Component) -> bool:
    return any(is_sha256_or_stronger(c.algorithm) and has_text(c.value) for c in component.checksums)


def has_valid_purl(component: Component) -> bool:
    return any(is_valid_purl(purl) for purl in component.purls)


def has_valid_cpe(component: Component) -> bool:
    return any(is_valid_cpe(cpe) for cpe in component.cpes)


def has_any_unique_id(component: Component) -> bool:
    """Component carries at least one external identifier of any kind."""
    return any(
        has_text(value)
        for value in (*component.purls, *component.cpes, *component.swids, *component.swhids, *component.omnibor_ids)
    )


def has_meaningful_license(licenses: Iterable[License]) -> bool:
    """At least one license is not empty, NOASSERTION or NONE."""
    return any(is_meaningful_license_text(lic.short_id) or is_meaningful_license_text(lic.name) for lic in licenses)


def are_licenses_valid(licenses: Iterable[License]) -> bool:
    """Every license is SPDX, ScanCode or a ``LicenseRef-`` custom reference."""
    licenses = list(licenses)
    if not licenses:
        return False
    for lic in licenses:
        if lic.source in ("spdx", "aboutcode"):
            continue
        if lic.source == "custom" and (lic.short_id.startswith("LicenseRef-") or lic.name.startswith("LicenseRef-")):
            continue
        return False
    return True


def has_deprecated_license(component: Component) -> bool:
    return any(lic.deprecated for lic in component.concluded_licenses)


def has_restrictive_license(component: Component) -> bool:
    return any(lic.restrictive for lic in component.concluded_licenses)


def has_supplier(component: Component) -> bool:
    return component.supplier is not None and component.supplier.is_present()


def has_supplier_or_manufacturer(component: Component) -> bool:
    if has_supplier(component):
        return True
    return component.manufacturer is not None and component.manufacturer.is_present()


def has_sbom_author(doc: Document) -> bool:
    """The SBOM names an author (person or organization) with a name or email."""
    return any(has_text(author.name) or has_text(author.email) for author in doc.authors)


def has_complete_tool(doc: Document) -> bool:
    return any(has_text(tool.name) and has_text(tool.version) for tool in doc.tools)


def has_outgoing_dependencies(doc: Document, component: Component) -> bool:
    return bool(component.id) and bool(doc.dependencies_of(component.id))
