"""Scoring configuration: run options and YAML category/profile overrides.

A category file overrides category and feature weights and restricts which
features are scored. A profile file restricts which profiles and profile
items are evaluated. Both formats share a ``metadata`` block and can be
generated from a catalog with :func:`dump_default_category_config` and
:func:`dump_default_profile_config`.
"""

from __future__ import annotations

import dataclasses
from datetime import date
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from sbomscore.logging import getLogger, log_debug, log_info, log_warning

from .catalog import Catalog, normalize_alias
from .errors import CategoryConfigError, ConfigError, ProfileConfigError
from .specs import CategorySpec, ProfileSpec

logger = getLogger(__name__)

CONFIG_VERSION = "2.0.0"
PROFILE_CONFIG_DESCRIPTION = "Configuration of Profile scoring."
CATEGORY_CONFIG_DESCRIPTION = "Configuration of SBOM scoring features, grouped by category"


class ScoringConfig(BaseModel):
    """Options for a single scoring run.

    Empty ``categories`` and ``profiles`` select comprehensive scoring over
    every category. Any requested profile switches the run to profile
    evaluation only. ``features`` narrows the selected categories to the
    named features.
    """

    model_config = ConfigDict(extra="forbid")

    categories: list[str] = Field(default_factory=list)
    features: list[str] = Field(default_factory=list)
    profiles: list[str] = Field(default_factory=list)
    category_file: str | None = None
    profile_file: str | None = None


class ConfigMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore")

    version: str = CONFIG_VERSION
    description: str = ""
    last_updated: str = ""

    @field_validator("version", "last_updated", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Any:
        # YAML decodes unquoted dates and numbers into native types
        if isinstance(v, (date, int, float)):
            return v.isoformat() if isinstance(v, date) else str(v)
        return v


class FeatureEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    key: str | None = None
    description: str = ""
    weight: float | None = None
    ignore: bool = False

    @property
    def lookup(self) -> str:
        return (self.key or self.name).strip()


class ProfileEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    key: str | None = None
    description: str = ""
    features: list[FeatureEntry] = Field(default_factory=list)

    @property
    def lookup(self) -> str:
        return (self.key or self.name).strip()


class CategoryEntry(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    key: str | None = None
    description: str = ""
    weight: float | None = None
    features: list[FeatureEntry] = Field(default_factory=list)

    @property
    def lookup(self) -> str:
        return (self.key or self.name).strip()


class ProfileConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    metadata: ConfigMetadata = Field(default_factory=ConfigMetadata)
    profiles: list[ProfileEntry] = Field(default_factory=list)


class CategoryConfig(BaseModel):
    model_config = ConfigDict(extra="ignore")

    metadata: ConfigMetadata = Field(default_factory=ConfigMetadata)
    categories: list[CategoryEntry] = Field(default_factory=list)


def _read_file(path: str, kind: str) -> str:
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        log_warning(logger, "[Config] configuration file unreadable", kind=kind, path=path)
        raise ConfigError(f"{kind}: cannot read {path}: {e}") from e


def _decode_yaml(text: str, kind: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as e:
        log_warning(logger, "[Config] configuration is not valid YAML", kind=kind)
        raise ConfigError(f"{kind}: invalid YAML: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        log_warning(logger, "[Config] configuration is not a mapping", kind=kind, found=type(data).__name__)
        raise ConfigError(f"{kind}: top-level document must be a mapping")
    return data


def validate_profile_config(config: ProfileConfig) -> None:
    """Check the shape rules of a decoded profile configuration.

    Raises:
        ProfileConfigError: On the first violated rule.
    """
    if not config.profiles:
        raise ProfileConfigError("profiles: no profiles found")

    seen_profiles: set[str] = set()
    for i, profile in enumerate(config.profiles):
        name = profile.lookup
        if not name:
            raise ProfileConfigError(f"profiles: profile at index {i} has empty name")
        if normalize_alias(name) in seen_profiles:
            raise ProfileConfigError(f"profiles: duplicate profile name {name!r}")
        seen_profiles.add(normalize_alias(name))

        if not profile.features:
            raise ProfileConfigError(f"profiles: profile {name!r} has no features")

        seen_features: set[str] = set()
        for j, feature in enumerate(profile.features):
            key = feature.lookup
            if not key:
                raise ProfileConfigError(f"profiles: profile {name!r} has empty feature.name at index {j}")
            if normalize_alias(key) in seen_features:
                raise ProfileConfigError(f"profiles: profile {name!r} has duplicate feature {key!r}")
            seen_features.add(normalize_alias(key))


def validate_category_config(config: CategoryConfig) -> None:
    """Check the shape rules of a decoded category configuration.

    Raises:
        CategoryConfigError: On the first violated rule.
    """
    if not config.categories:
        raise CategoryConfigError("categories: no categories found")

    seen_categories: set[str] = set()
    for i, category in enumerate(config.categories):
        name = category.lookup
        if not name:
            raise CategoryConfigError(f"categories: category at index {i} has empty name")
        if normalize_alias(name) in seen_categories:
            raise CategoryConfigError(f"categories: duplicate category name {name!r}")
        seen_categories.add(normalize_alias(name))

        if category.weight is not None and category.weight < 0:
            raise CategoryConfigError(f"categories: category {name!r} has negative weight {category.weight}")
        if not category.features:
            raise CategoryConfigError(f"categories: category {name!r} has no features")

        seen_features: set[str] = set()
        for j, feature in enumerate(category.features):
            key = feature.lookup
            if not key:
                raise CategoryConfigError(f"categories: category {name!r} has empty feature.name at index {j}")
            if normalize_alias(key) in seen_features:
                raise CategoryConfigError(f"categories: category {name!r} has duplicate feature {key!r}")
            if feature.weight is not None and feature.weight < 0:
                raise CategoryConfigError(
                    f"categories: category {name!r} feature {key!r} has negative weight {feature.weight}"
                )
            seen_features.add(normalize_alias(key))


def parse_profile_config(text: str) -> ProfileConfig:
    """Decode and validate profile configuration YAML.

    Raises:
        ConfigError: The text is not valid YAML or does not match the schema.
        ProfileConfigError: The decoded configuration breaks a shape rule.
    """
    data = _decode_yaml(text, "profiles")
    try:
        config = ProfileConfig.model_validate(data)
    except ValidationError as e:
        log_warning(logger, "[Config] profile configuration failed schema validation", errors=e.error_count())
        raise ConfigError(f"profiles: invalid configuration: {e}") from e
    try:
        validate_profile_config(config)
    except ProfileConfigError as e:
        log_warning(logger, "[Config] profile configuration rejected", error=str(e))
        raise
    return config


def load_profile_config(path: str) -> ProfileConfig:
    config = parse_profile_config(_read_file(path, "profiles"))
    log_info(logger, "[Config] profile configuration loaded", path=path, profiles=len(config.profiles))
    return config


def parse_category_config(text: str) -> CategoryConfig:
    """Decode and validate category configuration YAML.

    Features marked ``ignore: true`` are dropped from the returned config.

    Raises:
        ConfigError: The text is not valid YAML or does not match the schema.
        CategoryConfigError: The decoded configuration breaks a shape rule.
    """
    data = _decode_yaml(text, "categories")
    try:
        config = CategoryConfig.model_validate(data)
    except ValidationError as e:
        log_warning(logger, "[Config] category configuration failed schema validation", errors=e.error_count())
        raise ConfigError(f"categories: invalid configuration: {e}") from e
    try:
        validate_category_config(config)
    except CategoryConfigError as e:
        log_warning(logger, "[Config] category configuration rejected", error=str(e))
        raise

    for category in config.categories:
        category.features = [feature for feature in category.features if not feature.ignore]
    return config


def load_category_config(path: str) -> CategoryConfig:
    config = parse_category_config(_read_file(path, "categories"))
    log_info(logger, "[Config] category configuration loaded", path=path, categories=len(config.categories))
    return config


def apply_profile_config(catalog: Catalog, config: ProfileConfig) -> Catalog:
    """Restrict a catalog to the profiles and items named in a profile config.

    Profiles are resolved through the catalog's alias table and keep their
    built-in evaluators. Unknown profile or feature names are skipped, and so
    are items marked ``ignore``.

    Returns:
        A new Catalog; ``catalog`` is left untouched.
    """
    profiles: list[ProfileSpec] = []
    seen: set[str] = set()
    for entry in config.profiles:
        key = catalog.resolve_profile_alias(entry.lookup)
        if key is None or key in seen:
            log_debug(logger, "[Config] unknown or repeated profile skipped", profile=entry.lookup)
            continue
        seen.add(key)
        base = catalog.get_profile(key)

        feature_keys = []
        for feature in entry.features:
            if feature.ignore:
                continue
            feature_key = normalize_alias(feature.lookup)
            if catalog.get_profile_feature(key, feature_key) is None or feature_key in feature_keys:
                log_debug(logger, "[Config] unknown profile feature skipped", profile=key, feature=feature.lookup)
                continue
            feature_keys.append(feature_key)

        profiles.append(
            ProfileSpec(
                key=key,
                name=base.name,
                description=entry.description or base.description,
                features=tuple(feature_keys),
            )
        )

    log_debug(logger, "[Config] profile configuration applied", profiles=[p.key for p in profiles])
    return catalog.replace(profiles=profiles)


def apply_category_config(catalog: Catalog, config: CategoryConfig) -> Catalog:
    """Override category membership and weights from a category config.

    Weights left out of the file keep their built-in values. Categories whose
    features all fail to resolve are dropped.

    Returns:
        A new Catalog; ``catalog`` is left untouched.

    Raises:
        CategoryConfigError: A feature is listed under more than one
            category. Feature weights are shared across the catalog.
    """
    features = dict(catalog.features)
    categories: list[CategorySpec] = []
    seen: set[str] = set()
    owners: dict[str, str] = {}
    for entry in config.categories:
        key = catalog.resolve_category_alias(entry.lookup)
        if key is None or key in seen:
            log_debug(logger, "[Config] unknown or repeated category skipped", category=entry.lookup)
            continue
        seen.add(key)
        base = catalog.get_category(key)

        feature_keys: list[str] = []
        for feature in entry.features:
            feature_key = catalog.resolve_feature_alias(feature.lookup)
            if feature_key is None or feature_key in feature_keys:
                log_debug(logger, "[Config] unknown feature skipped", category=key, feature=feature.lookup)
                continue
            if feature_key in owners:
                message = f"categories: feature {feature_key!r} listed in both {owners[feature_key]!r} and {key!r}"
                log_warning(logger, "[Config] category configuration rejected", error=message)
                raise CategoryConfigError(message)
            owners[feature_key] = key
            if feature.weight is not None:
                features[feature_key] = dataclasses.replace(features[feature_key], weight=feature.weight)
            feature_keys.append(feature_key)

        if not feature_keys:
            log_debug(logger, "[Config] category has no resolvable features, dropped", category=key)
            continue

        categories.append(
            dataclasses.replace(
                base,
                weight=base.weight if entry.weight is None else entry.weight,
                description=entry.description or base.description,
                features=tuple(feature_keys),
            )
        )

    log_debug(logger, "[Config] category configuration applied", categories=[c.key for c in categories])
    return catalog.replace(categories=categories, features=features.values())


def _metadata(description: str, today: date | None) -> dict[str, str]:
    return {
        "version": CONFIG_VERSION,
        "description": description,
        "last_updated": (today or date.today()).isoformat(),
    }


def dump_default_profile_config(catalog: Catalog, today: date | None = None) -> str:
    """Render the catalog's profiles as profile configuration YAML."""
    data = {
        "metadata": _metadata(PROFILE_CONFIG_DESCRIPTION, today),
        "profiles": [
            {
                "name": profile.name,
                "key": profile.key,
                "description": profile.description,
                "features": [
                    {
                        "name": spec.name,
                        "key": spec.key,
                        "description": spec.description,
                        "required": spec.required,
                        "ignore": False,
                    }
                    for spec in (catalog.get_profile_feature(profile.key, k) for k in profile.features)
                    if spec is not None
                ],
            }
            for profile in catalog.profiles
        ],
    }
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)


def dump_default_category_config(catalog: Catalog, today: date | None = None) -> str:
    """Render the catalog's categories as category configuration YAML."""
    data = {
        "metadata": _metadata(CATEGORY_CONFIG_DESCRIPTION, today),
        "categories": [
            {
                "name": category.name,
                "key": category.key,
                "weight": category.weight,
                "description": category.description,
                "features": [
                    {
                        "name": spec.name,
                        "key": spec.key,
                        "weight": spec.weight,
                        "ignore": category.informational,
                    }
                    for spec in (catalog.get_feature(k) for k in category.features)
                    if spec is not None
                ],
            }
            for category in catalog.categories
        ],
    }
    return yaml.safe_dump(data, sort_keys=False, allow_unicode=True)
