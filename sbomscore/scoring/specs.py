"""Catalog entries binding keys to evaluator callables.

Specs are created once when a catalog is built and are never mutated
afterwards. Evaluators receive the document read-only and return a
:class:`FeatureScore`.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable

if TYPE_CHECKING:
    from sbomscore.document import Document


@dataclass(frozen=True)
class FeatureScore:
    """Output of a single evaluator call.

    Attributes:
        score: Value in ``[0, 10]``.
        desc: Short human readable explanation.
        ignore: The check does not apply to this document. Ignored scores
            are left out of weighted aggregation instead of counting as 0.
    """

    score: float
    desc: str = ""
    ignore: bool = False


Evaluator = Callable[["Document"], FeatureScore]


def _check_weight(kind: str, key: str, weight: float) -> None:
    if weight < 0:
        raise ValueError(f"{kind} {key!r} has negative weight {weight}")


@dataclass(frozen=True)
class FeatureSpec:
    """Comprehensive scoring feature with a category-local weight."""

    key: str
    name: str
    weight: float
    evaluate: Evaluator

    def __post_init__(self) -> None:
        _check_weight("feature", self.key, self.weight)


@dataclass(frozen=True)
class CategorySpec:
    """Weighted group of features.

    Attributes:
        key: Canonical category key.
        name: Display name.
        weight: Weight relative to sibling categories.
        features: Ordered feature keys.
        description: What the category measures.
        informational: Reported but excluded from the overall score.
    """

    key: str
    name: str
    weight: float
    features: tuple[str, ...] = ()
    description: str = ""
    informational: bool = False

    def __post_init__(self) -> None:
        _check_weight("category", self.key, self.weight)


@dataclass(frozen=True)
class ProfileFeatureSpec:
    """A required or optional check belonging to one compliance profile."""

    key: str
    name: str
    required: bool
    evaluate: Evaluator
    description: str = ""


@dataclass(frozen=True)
class ProfileSpec:
    """Named set of profile feature keys for one compliance standard."""

    key: str
    name: str
    description: str = ""
    features: tuple[str, ...] = field(default_factory=tuple)
