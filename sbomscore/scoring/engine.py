"""Scoring entry point.

:func:`score_document` builds (or takes) a catalog, applies configuration
overrides, resolves the requested categories or profiles and runs the
matching evaluator.
"""

from __future__ import annotations

import dataclasses

from sbomscore.document import Document
from sbomscore.logging import getLogger, log_debug, log_info

from . import compliance, comprehensive
from .catalog import Catalog
from .config import (
    ScoringConfig,
    apply_category_config,
    apply_profile_config,
    load_category_config,
    load_profile_config,
)
from .registry import build_default_catalog
from .results import SBOMMeta, ScoreResult
from .specs import CategorySpec

logger = getLogger(__name__)


def build_meta(doc: Document) -> SBOMMeta:
    spec_type = getattr(doc.spec.spec_type, "value", doc.spec.spec_type)
    return SBOMMeta(
        spec=str(spec_type),
        spec_version=doc.spec.version,
        file_format=doc.spec.file_format,
        num_components=len(doc.components),
        creation_time=doc.spec.creation_timestamp,
        filename=doc.filename or None,
    )


def prepare_catalog(catalog: Catalog | None, config: ScoringConfig) -> Catalog:
    """Return the catalog to score with, after applying configuration files."""
    catalog = catalog or build_default_catalog()
    if config.category_file:
        catalog = apply_category_config(catalog, load_category_config(config.category_file))
    if config.profile_file:
        catalog = apply_profile_config(catalog, load_profile_config(config.profile_file))
    return catalog


def filter_features(catalog: Catalog, categories: list[CategorySpec], features: list[str]) -> list[CategorySpec]:
    """Keep only the requested features inside each category.

    Feature names go through the alias table. Categories left without
    features are dropped and the category order is preserved. An empty
    request keeps every category unchanged.
    """
    if not features:
        return categories

    wanted = set()
    for name in features:
        key = catalog.resolve_feature_alias(name)
        if key is None:
            log_debug(logger, "[Engine] unknown feature skipped", feature=name)
            continue
        wanted.add(key)

    filtered = []
    for category in categories:
        kept = tuple(key for key in category.features if key in wanted)
        if not kept:
            log_debug(logger, "[Engine] category has no requested features, dropped", category=category.key)
            continue
        filtered.append(dataclasses.replace(category, features=kept))
    return filtered


def score_document(
    document: Document,
    catalog: Catalog | None = None,
    config: ScoringConfig | None = None,
) -> ScoreResult:
    """Score an SBOM document.

    Args:
        document: Normalized document to score. It is only read.
        catalog: Catalog to score with. Defaults to the built-in catalog.
        config: Run options. Defaults to comprehensive scoring of every
            category.

    Returns:
        ScoreResult. When profiles are requested only profile results are
        filled in, and ``score``/``grade`` stay None.

    Raises:
        ConfigError: A configuration file named in ``config`` is invalid.
    """
    config = config or ScoringConfig()
    catalog = prepare_catalog(catalog, config)
    meta = build_meta(document)

    if config.profiles:
        profiles = catalog.select_profiles(config.profiles)
        log_info(logger, "[Engine] profile evaluation selected", profiles=[p.key for p in profiles])
        results = compliance.evaluate([p.key for p in profiles], catalog, document)
        return ScoreResult(meta=meta, profiles=tuple(results))

    if config.categories:
        categories = catalog.select_categories(config.categories)
    else:
        categories = list(catalog.categories)
    categories = filter_features(catalog, categories, config.features)

    # Filtered categories carry narrowed feature lists, so they are scored
    # from a catalog holding exactly those specs.
    scoped = catalog.replace(categories=categories)
    log_info(logger, "[Engine] comprehensive evaluation selected", categories=[c.key for c in categories])
    result = comprehensive.evaluate([c.key for c in categories], scoped, document)
    return ScoreResult(meta=meta, comprehensive=result, score=result.score, grade=result.grade)
