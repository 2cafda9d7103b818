"""Normalized, read-only SBOM document model.

The scoring engine does not parse SPDX or CycloneDX files. Parsers upstream
build a :class:`Document` from either format, normalizing dependency data into
:class:`Relationship` entries (``source`` depends on each of ``targets``).
Evaluators only read from these objects. Sequence fields are tuples; lists
passed to the constructors are converted.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from enum import Enum

from .licenses import License


def _freeze(instance) -> None:
    """Store list arguments of a frozen dataclass as tuples."""
    for f in fields(instance):
        value = getattr(instance, f.name)
        if isinstance(value, list):
            object.__setattr__(instance, f.name, tuple(value))


class SpecType(str, Enum):
    """SBOM specification a document was produced in."""

    SPDX = "spdx"
    """SPDX documents (tag-value, JSON, YAML, RDF)."""

    CYCLONEDX = "cyclonedx"
    """CycloneDX documents (JSON, XML)."""

    UNKNOWN = ""
    """Specification could not be determined."""


@dataclass(frozen=True)
class Checksum:
    algorithm: str
    value: str = ""


@dataclass(frozen=True)
class Contact:
    """Author, supplier or manufacturer entity."""

    name: str = ""
    email: str = ""
    url: str = ""
    phone: str = ""

    def is_present(self) -> bool:
        return any(value.strip() for value in (self.name, self.email, self.url))


@dataclass(frozen=True)
class Tool:
    name: str = ""
    version: str = ""


@dataclass(frozen=True)
class Signature:
    """Signature block attached to an SBOM.

    Only the presence of the material is inspected; cryptographic
    verification happens elsewhere.
    """

    algorithm: str = ""
    value: str = ""
    public_key: str = ""
    certificate_path: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _freeze(self)


@dataclass(frozen=True)
class Vulnerability:
    id: str


@dataclass(frozen=True)
class Composition:
    """CycloneDX composition (completeness) declaration.

    Attributes:
        aggregate: ``complete``, ``incomplete``, ``unknown`` and the other
            CycloneDX aggregate values.
        scope: ``dependencies`` or ``assemblies`` when the declaration is
            restricted to listed components.
        sbom_complete: The declaration covers the whole SBOM.
    """

    aggregate: str
    scope: str = ""
    dependencies: tuple[str, ...] = field(default_factory=tuple)
    assemblies: tuple[str, ...] = field(default_factory=tuple)
    sbom_complete: bool = False

    def __post_init__(self) -> None:
        _freeze(self)


@dataclass(frozen=True)
class Relationship:
    """Depends-on edges declared for one source component."""

    source: str
    targets: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        _freeze(self)


@dataclass(frozen=True)
class Component:
    id: str = ""
    name: str = ""
    version: str = ""
    primary_purpose: str = ""
    purls: tuple[str, ...] = field(default_factory=tuple)
    cpes: tuple[str, ...] = field(default_factory=tuple)
    swids: tuple[str, ...] = field(default_factory=tuple)
    swhids: tuple[str, ...] = field(default_factory=tuple)
    omnibor_ids: tuple[str, ...] = field(default_factory=tuple)
    checksums: tuple[Checksum, ...] = field(default_factory=tuple)
    concluded_licenses: tuple[License, ...] = field(default_factory=tuple)
    declared_licenses: tuple[License, ...] = field(default_factory=tuple)
    supplier: Contact | None = None
    manufacturer: Contact | None = None
    source_code_url: str = ""
    download_url: str = ""
    source_code_hash: str = ""
    copyright: str = ""
    file_analyzed: bool = False
    is_primary: bool = False

    def __post_init__(self) -> None:
        _freeze(self)


@dataclass(frozen=True)
class SpecInfo:
    """Document-level specification metadata.

    Attributes:
        spec_type: Specification the document was written in.
        version: Specification version string (``SPDX-2.3``, ``1.6``).
        file_format: Serialization format (``json``, ``xml``, ``tag-value``).
        creation_timestamp: Raw creation timestamp string.
        namespace: SPDX document namespace or CycloneDX serial number.
        licenses: Data licenses declared for the document itself.
        schema_valid: Result of schema validation performed by the parser.
    """

    spec_type: SpecType = SpecType.UNKNOWN
    version: str = ""
    file_format: str = ""
    creation_timestamp: str = ""
    namespace: str = ""
    name: str = ""
    spdx_id: str = ""
    comment: str = ""
    organization: str = ""
    licenses: tuple[License, ...] = field(default_factory=tuple)
    schema_valid: bool = False

    def __post_init__(self) -> None:
        _freeze(self)


@dataclass(frozen=True)
class Document:
    spec: SpecInfo = field(default_factory=SpecInfo)
    components: tuple[Component, ...] = field(default_factory=tuple)
    relationships: tuple[Relationship, ...] = field(default_factory=tuple)
    authors: tuple[Contact, ...] = field(default_factory=tuple)
    tools: tuple[Tool, ...] = field(default_factory=tuple)
    supplier: Contact | None = None
    manufacturer: Contact | None = None
    signature: Signature | None = None
    vulnerabilities: tuple[Vulnerability, ...] = field(default_factory=tuple)
    lifecycles: tuple[str, ...] = field(default_factory=tuple)
    compositions: tuple[Composition, ...] = field(default_factory=tuple)
    external_references: tuple[str, ...] = field(default_factory=tuple)
    filename: str = ""

    def __post_init__(self) -> None:
        _freeze(self)

    def primary_component(self) -> Component | None:
        """Return the component flagged as the SBOM subject, if any."""
        for component in self.components:
            if component.is_primary:
                return component
        return None

    def component_ids(self) -> set[str]:
        return {component.id for component in self.components if component.id}

    def dependencies_of(self, component_id: str) -> list[str]:
        """Return the direct depends-on targets of a component, in order."""
        targets: list[str] = []
        for relationship in self.relationships:
            if relationship.source == component_id:
                targets.extend(relationship.targets)
        return targets
