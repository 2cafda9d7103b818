"""Completeness features: dependencies, completeness declarations and
component metadata needed for impact analysis."""

from __future__ import annotations

from sbomscore.document import Composition, Document, SpecType
from sbomscore.scoring import formulae
from sbomscore.scoring.specs import FeatureScore
from sbomscore.vocabulary import parse_spec_type, supported_primary_purposes

from .checks import count, has_outgoing_dependencies, has_supplier, has_text

AGGREGATE_COMPLETE = "complete"
SCOPE_DEPENDENCIES = "dependencies"
SCOPE_ASSEMBLIES = "assemblies"


def _component_word(n: int) -> str:
    return "component" if n == 1 else "components"


def _declares_complete_dependencies(compositions: list[Composition], component_id: str) -> bool:
    return any(
        c.aggregate == AGGREGATE_COMPLETE and c.scope == SCOPE_DEPENDENCIES and component_id in c.dependencies
        for c in compositions
    )


def _declares_complete(compositions: list[Composition], component_id: str) -> bool:
    for composition in compositions:
        if composition.sbom_complete:
            return True
        if composition.aggregate != AGGREGATE_COMPLETE:
            continue
        if composition.scope == SCOPE_DEPENDENCIES and component_id in composition.dependencies:
            return True
        if composition.scope == SCOPE_ASSEMBLIES and component_id in composition.assemblies:
            return True
    return False


def comp_with_dependencies(doc: Document) -> FeatureScore:
    """Dependency declarations per component.

    SPDX: share of components declaring depends-on relationships.
    CycloneDX: share of components with dependencies whose dependency list is
    also declared complete through a composition.
    """
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()

    spec = parse_spec_type(doc.spec.spec_type)
    if spec == SpecType.SPDX:
        have = count(comps, lambda c: has_outgoing_dependencies(doc, c))
        return formulae.score_comp_full(have, len(comps), "dependencies")

    if spec == SpecType.CYCLONEDX:
        with_deps = [c for c in comps if has_outgoing_dependencies(doc, c)]
        if not with_deps:
            return FeatureScore(score=0.0, desc="no components declare dependencies")
        have = count(with_deps, lambda c: _declares_complete_dependencies(doc.compositions, c.id))
        if have == len(with_deps):
            desc = "dependency completeness declared for all components"
        else:
            desc = f"dependency completeness declared for {have} {_component_word(have)}"
        return formulae.score_comp_custom(have, len(with_deps), desc)

    return formulae.score_unknown_spec()


def sbom_completeness_declared(doc: Document) -> FeatureScore:
    """Share of components covered by a 'complete' composition (CycloneDX only)."""
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()

    spec = parse_spec_type(doc.spec.spec_type)
    if spec == SpecType.SPDX:
        return FeatureScore(score=0.0, desc=formulae.non_supported_spdx_field(), ignore=True)
    if spec == SpecType.CYCLONEDX:
        have = count(comps, lambda c: _declares_complete(doc.compositions, c.id))
        return formulae.score_comp_full(have, len(comps), "declared completeness")
    return formulae.score_unknown_spec()


def sbom_primary_component(doc: Document) -> FeatureScore:
    if doc.primary_component() is None:
        return FeatureScore(score=0.0, desc="add primary component")
    return FeatureScore(score=formulae.boolean_score(True), desc="complete")


def comp_with_source_code(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    have = count(comps, lambda c: has_text(c.source_code_url))
    return formulae.score_comp_full(have, len(comps), "source URIs")


def comp_with_supplier(doc: Document) -> FeatureScore:
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()
    return formulae.score_comp_full(count(comps, has_supplier), len(comps), "suppliers")


def comp_with_purpose(doc: Document) -> FeatureScore:
    """Share of components with a primary purpose valid for the spec."""
    comps = doc.components
    if not comps:
        return formulae.score_comp_na()

    supported = supported_primary_purposes(parse_spec_type(doc.spec.spec_type))
    valid = invalid = missing = 0
    for component in comps:
        purpose = component.primary_purpose.strip().lower()
        if not purpose:
            missing += 1
        elif purpose in supported:
            valid += 1
        else:
            invalid += 1

    desc = "complete"
    if invalid:
        desc = f"correct for {invalid} {_component_word(invalid)}"
        if missing:
            desc += " (others missing)"
    elif missing:
        desc = f"add to {missing} {_component_word(missing)}"
    return formulae.score_comp_custom(valid, len(comps), desc)
