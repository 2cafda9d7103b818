"""Result dataclasses produced by the evaluators.

Result trees are created fresh for every evaluated document and handed to the
caller. They mirror the catalog specs and add the computed scores. All results
are plain data with a ``to_dict()`` for serialization.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any

from .enums import ComplianceState


@dataclass(frozen=True)
class FeatureResult:
    """Evaluated comprehensive feature.

    Attributes:
        key: Feature key.
        name: Display name.
        weight: Category-local weight of the feature.
        score: Score in ``[0, 10]``.
        desc: Evaluator description.
        ignored: Feature was not applicable and is left out of the category score.
    """

    key: str
    name: str
    weight: float
    score: float
    desc: str
    ignored: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class CategoryResult:
    """Evaluated category with its renormalized weighted score.

    Attributes:
        key: Category key.
        name: Display name.
        weight: Category weight relative to its siblings.
        score: Weighted average of the non-ignored feature scores.
        features: Feature results in catalog order.
        informational: Category is excluded from the overall score.
    """

    key: str
    name: str
    weight: float
    score: float
    features: tuple[FeatureResult, ...] = field(default_factory=tuple)
    informational: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key,
            "name": self.name,
            "weight": self.weight,
            "score": self.score,
            "informational": self.informational,
            "features": [f.to_dict() for f in self.features],
        }


@dataclass(frozen=True)
class ComprehensiveResult:
    """Outcome of comprehensive scoring for one document.

    Attributes:
        categories: Category results in the requested order.
        score: Weighted overall score, informational categories excluded.
        grade: Letter grade for ``score``.
    """

    categories: tuple[CategoryResult, ...] = field(default_factory=tuple)
    score: float = 0.0
    grade: str = "F"

    def to_dict(self) -> dict[str, Any]:
        return {
            "score": self.score,
            "grade": self.grade,
            "categories": [c.to_dict() for c in self.categories],
        }


@dataclass(frozen=True)
class ProfileFeatureResult:
    """Evaluated profile item.

    Attributes:
        key: Profile feature key.
        name: Display name.
        required: Item is mandatory for the profile.
        score: Score in ``[0, 10]``.
        passed: Pass/fail verdict for the item.
        desc: Evaluator description.
        ignored: Item was not applicable to the document.
    """

    key: str
    name: str
    required: bool
    score: float
    passed: bool
    desc: str
    ignored: bool = False

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ProfileResult:
    """Evaluated compliance profile.

    ``compliance`` is not filled in by the evaluator. Callers that need a
    single verdict derive it from the item ``required``/``passed`` flags
    according to their own policy.
    """

    key: str
    name: str
    score: float
    message: str = ""
    items: tuple[ProfileFeatureResult, ...] = field(default_factory=tuple)
    compliance: ComplianceState | None = None

    def required_items(self) -> list[ProfileFeatureResult]:
        return [item for item in self.items if item.required]

    def failed_required_items(self) -> list[ProfileFeatureResult]:
        return [item for item in self.items if item.required and not item.passed]

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {
            "key": self.key,
            "name": self.name,
            "score": self.score,
            "message": self.message,
            "items": [i.to_dict() for i in self.items],
        }
        if self.compliance is not None:
            result["compliance"] = self.compliance.value
        return result


@dataclass(frozen=True)
class SBOMMeta:
    """File-level metadata copied from the evaluated document."""

    spec: str
    spec_version: str
    file_format: str
    num_components: int
    creation_time: str
    filename: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result = asdict(self)
        return {k: v for k, v in result.items() if v is not None}


@dataclass(frozen=True)
class ScoreResult:
    """Complete evaluation of one document.

    Attributes:
        meta: Document metadata.
        comprehensive: Comprehensive scoring outcome, when it ran.
        profiles: Profile outcomes, when profiles were requested.
        score: Overall comprehensive score, when comprehensive scoring ran.
        grade: Letter grade for ``score``.
    """

    meta: SBOMMeta
    comprehensive: ComprehensiveResult | None = None
    profiles: tuple[ProfileResult, ...] | None = None
    score: float | None = None
    grade: str | None = None

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"meta": self.meta.to_dict()}
        if self.score is not None:
            result["score"] = self.score
        if self.grade is not None:
            result["grade"] = self.grade
        if self.comprehensive is not None:
            result["comprehensive"] = self.comprehensive.to_dict()
        if self.profiles is not None:
            result["profiles"] = [p.to_dict() for p in self.profiles]
        return result
