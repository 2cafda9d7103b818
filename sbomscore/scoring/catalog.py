"""Immutable catalog of categories, features and compliance profiles.

The catalog is the single source of truth the evaluators consult: which
features belong to which category and with what weight, which checks make up
a profile, and which human-entered spellings map to canonical keys. A catalog
is built once and then only read, so one instance can be shared by any number
of concurrent evaluations.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, Mapping

from sbomscore.logging import getLogger

from .specs import CategorySpec, FeatureSpec, ProfileFeatureSpec, ProfileSpec

logger = getLogger(__name__)


def normalize_alias(value: str) -> str:
    return value.strip().lower()


@dataclass(frozen=True)
class Aliases:
    """Alias tables mapping normalized spellings to canonical keys."""

    category: Mapping[str, str] = field(default_factory=dict)
    feature: Mapping[str, str] = field(default_factory=dict)
    profile: Mapping[str, str] = field(default_factory=dict)


class Catalog:
    """Read-only registry of scoring specs.

    Args:
        categories: Category specs in report order.
        features: Comprehensive feature specs.
        profiles: Profile specs.
        profile_features: Profile feature specs per profile key.
        aliases: Alias tables. Canonical keys are always resolvable.
        default_profiles: Profile keys evaluated when none are requested.
    """

    def __init__(
        self,
        categories: Iterable[CategorySpec] = (),
        features: Iterable[FeatureSpec] = (),
        profiles: Iterable[ProfileSpec] = (),
        profile_features: Mapping[str, Iterable[ProfileFeatureSpec]] | None = None,
        aliases: Aliases | None = None,
        default_profiles: Iterable[str] = (),
    ) -> None:
        self._categories = tuple(categories)
        self._category_index = MappingProxyType({c.key: c for c in self._categories})
        self._features = MappingProxyType({f.key: f for f in features})
        self._profiles = tuple(profiles)
        self._profile_index = MappingProxyType({p.key: p for p in self._profiles})
        self._profile_features = MappingProxyType(
            {
                profile_key: MappingProxyType({spec.key: spec for spec in specs})
                for profile_key, specs in (profile_features or {}).items()
            }
        )
        self._default_profiles = tuple(default_profiles)

        aliases = aliases or Aliases()
        self._aliases = Aliases(
            category=MappingProxyType(self._with_keys(aliases.category, self._category_index)),
            feature=MappingProxyType(self._with_keys(aliases.feature, self._features)),
            profile=MappingProxyType(self._with_keys(aliases.profile, self._profile_index)),
        )

    @staticmethod
    def _with_keys(table: Mapping[str, str], index: Mapping[str, object]) -> dict[str, str]:
        merged = {normalize_alias(key): key for key in index}
        merged.update({normalize_alias(alias): key for alias, key in table.items() if key in index})
        return merged

    @property
    def categories(self) -> tuple[CategorySpec, ...]:
        return self._categories

    @property
    def features(self) -> Mapping[str, FeatureSpec]:
        return self._features

    @property
    def profiles(self) -> tuple[ProfileSpec, ...]:
        return self._profiles

    @property
    def profile_features(self) -> Mapping[str, Mapping[str, ProfileFeatureSpec]]:
        return self._profile_features

    @property
    def aliases(self) -> Aliases:
        return self._aliases

    @property
    def default_profiles(self) -> tuple[str, ...]:
        return self._default_profiles

    def has_feature(self, key: str) -> bool:
        return key in self._features

    def has_category(self, key: str) -> bool:
        return key in self._category_index

    def has_profile(self, key: str) -> bool:
        return key in self._profile_index

    def get_feature(self, key: str) -> FeatureSpec | None:
        return self._features.get(key)

    def get_category(self, key: str) -> CategorySpec | None:
        return self._category_index.get(key)

    def get_profile(self, key: str) -> ProfileSpec | None:
        return self._profile_index.get(key)

    def get_profile_feature(self, profile_key: str, feature_key: str) -> ProfileFeatureSpec | None:
        return self._profile_features.get(profile_key, {}).get(feature_key)

    def resolve_category_alias(self, value: str) -> str | None:
        """Resolve a category spelling to its canonical key.

        Lookup is case-insensitive and ignores surrounding whitespace.
        Returns None for unknown input.
        """
        return self._aliases.category.get(normalize_alias(value))

    def resolve_feature_alias(self, value: str) -> str | None:
        """Resolve a feature spelling to its canonical key, or None."""
        return self._aliases.feature.get(normalize_alias(value))

    def resolve_profile_alias(self, value: str) -> str | None:
        """Resolve a profile spelling to its canonical key, or None."""
        return self._aliases.profile.get(normalize_alias(value))

    def select_categories(self, names: Iterable[str]) -> list[CategorySpec]:
        """Resolve requested category names to specs.

        Order of the request is preserved, duplicates are dropped and unknown
        names are skipped.
        """
        return self._select(names, self.resolve_category_alias, self._category_index, "category")

    def select_profiles(self, names: Iterable[str]) -> list[ProfileSpec]:
        """Resolve requested profile names to specs, as in :meth:`select_categories`."""
        return self._select(names, self.resolve_profile_alias, self._profile_index, "profile")

    def _select(self, names, resolve, index, kind):
        selected = []
        seen: set[str] = set()
        for name in names:
            if not name or not name.strip():
                continue
            key = resolve(name)
            if key is None:
                logger.debug(f"[Catalog] Unknown {kind} {name!r}, skipping")
                continue
            if key in seen:
                logger.debug(f"[Catalog] Duplicate {kind} {name!r}, skipping")
                continue
            seen.add(key)
            selected.append(index[key])
        logger.debug(f"[Catalog] Selected {len(selected)} {kind}(s): {[spec.key for spec in selected]}")
        return selected

    def replace(
        self,
        categories: Iterable[CategorySpec] | None = None,
        features: Iterable[FeatureSpec] | None = None,
        profiles: Iterable[ProfileSpec] | None = None,
        profile_features: Mapping[str, Iterable[ProfileFeatureSpec]] | None = None,
    ) -> "Catalog":
        """Return a new catalog with some collections swapped out."""
        return Catalog(
            categories=self._categories if categories is None else categories,
            features=self._features.values() if features is None else features,
            profiles=self._profiles if profiles is None else profiles,
            profile_features=(
                {k: v.values() for k, v in self._profile_features.items()}
                if profile_features is None
                else profile_features
            ),
            aliases=self._aliases,
            default_profiles=self._default_profiles,
        )
