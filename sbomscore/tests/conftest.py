"""Shared document factories for sbomscore tests."""

from __future__ import annotations

import dataclasses

import pytest

from sbomscore.document import (
    Checksum,
    Component,
    Composition,
    Contact,
    Document,
    Relationship,
    Signature,
    SpecInfo,
    SpecType,
    Tool,
)
from sbomscore.licenses import License
from sbomscore.scoring.registry import build_default_catalog

MIT = License(short_id="MIT", name="mit", source="spdx")
CC0 = License(short_id="CC0-1.0", name="cc0-1.0", source="spdx")


def _make_component(component_id: str, **overrides) -> Component:
    """Build a component that satisfies every component-level check."""
    values = dict(
        id=component_id,
        name=component_id,
        version="1.0.0",
        primary_purpose="library",
        purls=[f"pkg:pypi/{component_id}@1.0.0"],
        cpes=[f"cpe:2.3:a:acme:{component_id}:1.0.0:*:*:*:*:*:*:*"],
        checksums=[Checksum("SHA-256", "a" * 64)],
        concluded_licenses=[MIT],
        declared_licenses=[MIT],
        supplier=Contact(name="Acme", email="security@acme.example"),
        source_code_url=f"https://github.com/acme/{component_id}",
        download_url=f"https://pypi.org/project/{component_id}",
        source_code_hash="b" * 64,
        copyright="Copyright 2024 Acme",
        file_analyzed=True,
    )
    values.update(overrides)
    return Component(**values)


def _make_document(**overrides) -> Document:
    """Build a CycloneDX 1.6 document that satisfies every document-level check.

    ``app`` is the primary component and depends on ``lib``.
    """
    values = dict(
        spec=SpecInfo(
            spec_type=SpecType.CYCLONEDX,
            version="1.6",
            file_format="json",
            creation_timestamp="2024-05-01T10:00:00Z",
            namespace="urn:uuid:3e671687-395b-41f5-a30f-a58921a69b79",
            name="app",
            licenses=[CC0],
            schema_valid=True,
        ),
        components=[
            _make_component("app", primary_purpose="application", is_primary=True),
            _make_component("lib"),
        ],
        relationships=[Relationship("app", ["lib"])],
        authors=[Contact(name="Jane Doe", email="jane@acme.example")],
        tools=[Tool("sbomgen", "2.1.0")],
        supplier=Contact(name="Acme", url="https://acme.example"),
        signature=Signature(algorithm="RS256", value="c2lnbmF0dXJl", public_key="-----BEGIN PUBLIC KEY-----"),
        lifecycles=["build"],
        compositions=[Composition(aggregate="complete", scope="dependencies", dependencies=["app", "lib"])],
        external_references=["urn:cdx:3e671687-395b-41f5-a30f-a58921a69b79/1#app"],
        filename="app.cdx.json",
    )
    values.update(overrides)
    return Document(**values)


def _with_spec(doc: Document, **changes) -> Document:
    """Return a copy of ``doc`` with some SpecInfo fields changed."""
    return dataclasses.replace(doc, spec=dataclasses.replace(doc.spec, **changes))


@pytest.fixture
def catalog():
    """Built-in catalog."""
    return build_default_catalog()


@pytest.fixture
def cdx_document() -> Document:
    """Complete CycloneDX document."""
    return _make_document()


@pytest.fixture
def spdx_document() -> Document:
    """Complete SPDX 2.3 document."""
    doc = _make_document(
        signature=None,
        lifecycles=[],
        compositions=[],
        supplier=None,
        filename="app.spdx.json",
    )
    return _with_spec(
        doc,
        spec_type=SpecType.SPDX,
        version="SPDX-2.3",
        namespace="https://acme.example/spdxdocs/app-1.0.0",
        spdx_id="SPDXRef-DOCUMENT",
        comment="Generated during release build",
        organization="Acme",
    )


@pytest.fixture
def empty_document() -> Document:
    """Document with no components and no metadata."""
    return Document()


@pytest.fixture
def make_component():
    """Factory for complete components; keyword arguments override fields."""
    return _make_component


@pytest.fixture
def make_document():
    """Factory for complete CycloneDX documents; keyword arguments override fields."""
    return _make_document


@pytest.fixture
def with_spec():
    """Helper returning a document copy with changed SpecInfo fields."""
    return _with_spec
