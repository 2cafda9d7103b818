"""Dependency graph reachability analysis.

Checks whether the declared depends-on relationships of a document form a
structurally complete graph rooted at the primary component. Structural
problems are reported as a scored outcome, never raised.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from .enums import GraphStatus
from .specs import FeatureScore

if TYPE_CHECKING:
    from sbomscore.document import Document, Relationship

GRAPH_DESCRIPTIONS = {
    GraphStatus.NO_PRIMARY: "Primary component is missing.",
    GraphStatus.NO_DEPENDENCIES: "Dependency information is missing.",
    GraphStatus.PRIMARY_UNDECLARED: "Primary component does not declare its dependencies.",
    GraphStatus.UNDEFINED_SOURCE: "Dependency source references undefined component.",
    GraphStatus.UNDEFINED_TARGET: "Dependency target references undefined component.",
    GraphStatus.UNREACHABLE: "Some components are not reachable from the primary component.",
    GraphStatus.COMPLETE: "Dependencies are recursively declared and structurally complete.",
}

GRAPH_SCORES = {
    GraphStatus.UNREACHABLE: 5.0,
    GraphStatus.COMPLETE: 10.0,
}


@dataclass(frozen=True)
class GraphAnalysis:
    """Outcome of :func:`analyze_dependency_graph`.

    Attributes:
        status: Classification of the graph.
        unreachable: Component ids not reachable from the primary component,
            sorted. Only filled for ``UNREACHABLE``.
    """

    status: GraphStatus
    unreachable: tuple[str, ...] = field(default_factory=tuple)

    @property
    def score(self) -> float:
        return GRAPH_SCORES.get(self.status, 0.0)

    @property
    def desc(self) -> str:
        return GRAPH_DESCRIPTIONS[self.status]

    def to_feature_score(self) -> FeatureScore:
        return FeatureScore(score=self.score, desc=self.desc, ignore=False)


def analyze_dependency_graph(
    primary_id: str | None,
    component_ids: Iterable[str],
    relationships: Iterable[Relationship],
) -> GraphAnalysis:
    """Classify the structural completeness of a dependency graph.

    Args:
        primary_id: Id of the primary component, or None when there is none.
        component_ids: Ids of every component in the document.
        relationships: Depends-on declarations, one entry per source.

    Returns:
        GraphAnalysis. Cycles are legal; each node is visited once.
    """
    if not primary_id:
        return GraphAnalysis(GraphStatus.NO_PRIMARY)

    edges = [(rel.source, target) for rel in relationships for target in rel.targets]
    if not edges:
        return GraphAnalysis(GraphStatus.NO_DEPENDENCIES)

    adjacency: dict[str, list[str]] = {}
    for source, target in edges:
        adjacency.setdefault(source, []).append(target)

    if primary_id not in adjacency:
        return GraphAnalysis(GraphStatus.PRIMARY_UNDECLARED)

    known = set(component_ids)
    known.add(primary_id)
    if any(source not in known for source, _ in edges):
        return GraphAnalysis(GraphStatus.UNDEFINED_SOURCE)
    if any(target not in known for _, target in edges):
        return GraphAnalysis(GraphStatus.UNDEFINED_TARGET)

    visited = {primary_id}
    stack = [primary_id]
    while stack:
        node = stack.pop()
        for target in adjacency.get(node, ()):
            if target not in visited:
                visited.add(target)
                stack.append(target)

    unreachable = known - visited
    if unreachable:
        return GraphAnalysis(GraphStatus.UNREACHABLE, tuple(sorted(unreachable)))
    return GraphAnalysis(GraphStatus.COMPLETE)


def analyze_document_graph(doc: Document) -> GraphAnalysis:
    primary = doc.primary_component()
    return analyze_dependency_graph(
        primary.id if primary else None,
        doc.component_ids(),
        doc.relationships,
    )
