"""Specification vocabularies: versions, file formats, purposes, lifecycles."""

from __future__ import annotations

from .document import SpecType

SUPPORTED_SPECS = (SpecType.SPDX, SpecType.CYCLONEDX)

SPEC_VERSIONS = {
    SpecType.SPDX: ("SPDX-2.1", "SPDX-2.2", "SPDX-2.3"),
    SpecType.CYCLONEDX: ("1.0", "1.1", "1.2", "1.3", "1.4", "1.5", "1.6"),
}

FILE_FORMATS = {
    SpecType.SPDX: ("json", "rdf", "yaml", "tag-value"),
    SpecType.CYCLONEDX: ("json", "xml"),
}

PRIMARY_PURPOSES = {
    SpecType.SPDX: (
        "application",
        "framework",
        "library",
        "container",
        "operating-system",
        "device",
        "firmware",
        "source",
        "archive",
        "file",
        "install",
        "other",
    ),
    SpecType.CYCLONEDX: (
        "application",
        "framework",
        "library",
        "container",
        "operating-system",
        "device",
        "firmware",
        "file",
    ),
}

CYCLONEDX_LIFECYCLES = ("design", "pre-build", "build", "post-build", "operations", "discovery", "decommission")


def parse_spec_type(value: str | SpecType) -> SpecType:
    """Map a spec name to SpecType; anything unrecognized is UNKNOWN."""
    if isinstance(value, SpecType):
        return value
    lowered = value.strip().lower()
    if lowered == "spdx":
        return SpecType.SPDX
    if lowered in ("cyclonedx", "cdx"):
        return SpecType.CYCLONEDX
    return SpecType.UNKNOWN


def supported_versions(spec: SpecType) -> tuple[str, ...]:
    return SPEC_VERSIONS.get(spec, ())


def supported_file_formats(spec: SpecType) -> tuple[str, ...]:
    return FILE_FORMATS.get(spec, ())


def supported_primary_purposes(spec: SpecType) -> tuple[str, ...]:
    return PRIMARY_PURPOSES.get(spec, ())
