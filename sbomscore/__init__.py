"""SBOM quality scoring and compliance evaluation."""

from sbomscore.scoring.config import ScoringConfig
from sbomscore.scoring.engine import score_document
from sbomscore.scoring.registry import build_default_catalog

__all__ = ["ScoringConfig", "build_default_catalog", "score_document"]
