"""Tests for the catalog, its alias tables and the built-in registry."""

import pytest

from sbomscore.scoring.catalog import Aliases, Catalog
from sbomscore.scoring.registry import DEFAULT_PROFILES
from sbomscore.scoring.specs import CategorySpec, FeatureScore, FeatureSpec, ProfileSpec


def _constant(doc):
    return FeatureScore(score=10.0)


class TestAliasResolution:
    """Tests for alias lookups."""

    @pytest.mark.parametrize(
        "value",
        ["licensing", "LicensingAndCompliance", "licensing_and_compliance", "  Licensing  "],
    )
    def test_historical_category_spellings(self, catalog: Catalog, value: str) -> None:
        """Test that every historical spelling resolves to one category key."""
        assert catalog.resolve_category_alias(value) == "licensing_and_compliance"

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("NTIA", "ntia"),
            ("nita-minimum-elements", "ntia"),
            ("NTIA-Minimum-Elements", "ntia"),
            ("bsi", "bsi-v1.1"),
            ("BSI-V1_1", "bsi-v1.1"),
            ("bsi-v2", "bsi-v2.0"),
            ("OpenChain-Telco", "oct"),
            ("NTIA-2025", "ntia-2025"),
            ("ntia_2025", "ntia-2025"),
            ("FSCT", "fsct"),
            ("fsct-v3", "fsct"),
            ("interlynk", "interlynk"),
        ],
    )
    def test_profile_aliases(self, catalog: Catalog, value: str, expected: str) -> None:
        """Test profile alias resolution."""
        assert catalog.resolve_profile_alias(value) == expected

    def test_feature_aliases(self, catalog: Catalog) -> None:
        """Test that canonical feature keys and short names both resolve."""
        assert catalog.resolve_feature_alias("COMP_WITH_NAME") == "comp_with_name"
        assert catalog.resolve_feature_alias("purl") == "comp_with_purl"

    def test_unknown_names_are_not_guessed(self, catalog: Catalog) -> None:
        """Test that unknown input does not resolve."""
        assert catalog.resolve_category_alias("licence") is None
        assert catalog.resolve_profile_alias("ntia-2019") is None
        assert catalog.resolve_feature_alias("") is None

    def test_alias_to_missing_key_is_dropped(self) -> None:
        """Test that aliases pointing at unknown keys are not resolvable."""
        catalog = Catalog(
            categories=[CategorySpec("a", "A", 1)],
            aliases=Aliases(category={"alpha": "a", "beta": "b"}),
        )
        assert catalog.resolve_category_alias("alpha") == "a"
        assert catalog.resolve_category_alias("beta") is None


class TestSelection:
    """Tests for category and profile selection."""

    def test_select_preserves_order_and_dedupes(self, catalog: Catalog) -> None:
        """Test that selection keeps request order and drops repeats."""
        selected = catalog.select_categories(["structural", "identification", "Structural", "licensing"])
        assert [c.key for c in selected] == ["structural", "identification", "licensing_and_compliance"]

    def test_select_skips_unknown_and_blank(self, catalog: Catalog) -> None:
        """Test that unknown and blank names are skipped."""
        selected = catalog.select_profiles(["", "  ", "nope", "bsi", "bsi-v1.1"])
        assert [p.key for p in selected] == ["bsi-v1.1"]


class TestBuiltinRegistry:
    """Tests for the built-in catalog contents."""

    def test_category_order_and_weights(self, catalog: Catalog) -> None:
        """Test the built-in categories."""
        assert [(c.key, c.weight) for c in catalog.categories] == [
            ("identification", 10),
            ("provenance", 12),
            ("integrity", 15),
            ("completeness", 12),
            ("licensing_and_compliance", 15),
            ("vulnerability_and_traceability", 10),
            ("structural", 8),
            ("compinfo", 10),
        ]
        assert catalog.get_category("compinfo").informational is True

    def test_feature_weights_sum_to_one(self, catalog: Catalog) -> None:
        """Test that scored categories carry feature weights summing to 1."""
        for category in catalog.categories:
            if category.informational:
                continue
            total = sum(catalog.get_feature(key).weight for key in category.features)
            assert total == pytest.approx(1.0), category.key

    def test_every_referenced_feature_exists(self, catalog: Catalog) -> None:
        """Test that categories and profiles only reference registered specs."""
        for category in catalog.categories:
            for key in category.features:
                assert catalog.has_feature(key)
        for profile in catalog.profiles:
            for key in profile.features:
                assert catalog.get_profile_feature(profile.key, key) is not None

    def test_profiles(self, catalog: Catalog) -> None:
        """Test the built-in profiles and defaults."""
        assert [p.key for p in catalog.profiles] == [
            "interlynk",
            "ntia",
            "ntia-2025",
            "bsi-v1.1",
            "bsi-v2.0",
            "oct",
            "fsct",
        ]
        assert catalog.default_profiles == DEFAULT_PROFILES == ("interlynk", "ntia", "bsi-v1.1")
        assert catalog.get_profile("ntia").name == "NTIA Minimum Elements"

    def test_profile_features_are_scoped_per_profile(self, catalog: Catalog) -> None:
        """Test that the same feature key resolves to different specs per profile."""
        ntia = catalog.get_profile_feature("ntia", "comp_name")
        bsi = catalog.get_profile_feature("bsi-v1.1", "comp_name")
        assert ntia.description == "All components must have names"
        assert bsi.description == "All components named"

    def test_bsi_v2_extends_v1(self, catalog: Catalog) -> None:
        """Test that BSI v2.0 starts with every v1.1 item."""
        v1 = catalog.get_profile("bsi-v1.1").features
        v2 = catalog.get_profile("bsi-v2.0").features
        assert v2[: len(v1)] == v1
        assert v2[len(v1) :] == (
            "sbom_signature",
            "sbom_bomlinks",
            "sbom_vulnerabilities",
            "comp_hash_sha256",
            "comp_associated_license",
        )


class TestCatalogImmutability:
    """Tests for catalog construction and replacement."""

    def test_replace_returns_new_catalog(self, catalog: Catalog) -> None:
        """Test that replace leaves the original catalog untouched."""
        narrowed = catalog.replace(profiles=[catalog.get_profile("ntia")])
        assert [p.key for p in narrowed.profiles] == ["ntia"]
        assert len(catalog.profiles) == 7
        assert narrowed.resolve_profile_alias("nita-minimum-elements") == "ntia"
        assert narrowed.resolve_profile_alias("bsi") is None

    def test_negative_weights_are_rejected(self) -> None:
        """Test that specs refuse negative weights."""
        with pytest.raises(ValueError):
            FeatureSpec("f", "F", -0.1, _constant)
        with pytest.raises(ValueError):
            CategorySpec("c", "C", -1)

    def test_tables_are_read_only(self, catalog: Catalog) -> None:
        """Test that exposed mappings cannot be mutated."""
        with pytest.raises(TypeError):
            catalog.features["new"] = FeatureSpec("new", "New", 1.0, _constant)

    def test_empty_catalog(self) -> None:
        """Test that an empty catalog resolves nothing."""
        catalog = Catalog()
        assert catalog.get_profile("ntia") is None
        assert catalog.select_profiles(["ntia"]) == []
        assert catalog.get_profile_feature("ntia", "comp_name") is None
        assert isinstance(Catalog(profiles=[ProfileSpec("p", "P")]).get_profile("p"), ProfileSpec)
