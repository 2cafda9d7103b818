"""Tests for scoring configuration files and run options."""

import logging
import re
from datetime import date

import pytest
import yaml
from pydantic import ValidationError

from sbomscore.scoring.catalog import Catalog
from sbomscore.scoring.config import (
    CATEGORY_CONFIG_DESCRIPTION,
    CONFIG_VERSION,
    PROFILE_CONFIG_DESCRIPTION,
    ScoringConfig,
    apply_category_config,
    apply_profile_config,
    dump_default_category_config,
    dump_default_profile_config,
    load_category_config,
    load_profile_config,
    parse_category_config,
    parse_profile_config,
)
from sbomscore.scoring.errors import CategoryConfigError, ConfigError, ProfileConfigError

PROFILE_YAML = """
metadata:
  version: 2.0.0
  description: Custom profiles
  last_updated: 2025-01-02
profiles:
  - name: NTIA-minimum-elements
    description: Trimmed NTIA
    features:
      - name: comp_name
      - name: comp_version
        ignore: true
      - name: does_not_exist
  - name: unknown-profile
    features:
      - name: anything
"""

CATEGORY_YAML = """
categories:
  - name: Licensing
    weight: 40
    features:
      - name: comp_with_licenses
        weight: 0.7
      - name: comp_with_valid_licenses
      - name: sbom_data_license
        ignore: true
  - name: Structural
    features:
      - name: no_such_feature
  - name: identification
    features:
      - name: name
"""


class TestScoringConfig:
    """Tests for the run options model."""

    def test_defaults(self) -> None:
        """Test that every option is empty by default."""
        config = ScoringConfig()
        assert config.categories == [] and config.features == [] and config.profiles == []
        assert config.category_file is None
        assert config.profile_file is None

    def test_unknown_options_rejected(self) -> None:
        """Test that misspelled options fail validation."""
        with pytest.raises(ValidationError):
            ScoringConfig(profile=["ntia"])


class TestProfileConfigParsing:
    """Tests for profile configuration decoding and validation."""

    def test_parse(self) -> None:
        """Test decoding a valid profile configuration."""
        config = parse_profile_config(PROFILE_YAML)
        assert config.metadata.version == "2.0.0"
        # Unquoted YAML dates are kept as ISO strings
        assert config.metadata.last_updated == "2025-01-02"
        assert [p.lookup for p in config.profiles] == ["NTIA-minimum-elements", "unknown-profile"]
        assert config.profiles[0].features[1].ignore is True

    @pytest.mark.parametrize(
        "text,message",
        [
            ("profiles: []", "profiles: no profiles found"),
            ("metadata: {}", "profiles: no profiles found"),
            (
                "profiles:\n  - name: ''\n    features: [{name: a}]",
                "profiles: profile at index 0 has empty name",
            ),
            (
                "profiles:\n  - name: ntia\n    features: [{name: a}]\n  - name: NTIA\n    features: [{name: a}]",
                "profiles: duplicate profile name 'NTIA'",
            ),
            ("profiles:\n  - name: ntia\n    features: []", "profiles: profile 'ntia' has no features"),
            (
                "profiles:\n  - name: ntia\n    features: [{name: a}, {name: ' '}]",
                "profiles: profile 'ntia' has empty feature.name at index 1",
            ),
            (
                "profiles:\n  - name: ntia\n    features: [{name: a}, {name: a}]",
                "profiles: profile 'ntia' has duplicate feature 'a'",
            ),
        ],
    )
    def test_shape_errors(self, text: str, message: str) -> None:
        """Test each profile shape rule."""
        with pytest.raises(ProfileConfigError, match=re.escape(message)):
            parse_profile_config(text)

    def test_empty_document(self) -> None:
        """Test that an empty file has no profiles."""
        with pytest.raises(ProfileConfigError, match="no profiles found"):
            parse_profile_config("")

    def test_invalid_yaml(self) -> None:
        """Test that YAML syntax errors are reported as ConfigError."""
        with pytest.raises(ConfigError, match=re.escape("profiles: invalid YAML")):
            parse_profile_config("profiles: [unclosed")

    def test_non_mapping(self) -> None:
        """Test that the top level must be a mapping."""
        with pytest.raises(ConfigError, match="top-level document must be a mapping"):
            parse_profile_config("- ntia\n- bsi\n")

    def test_schema_error_keeps_cause(self) -> None:
        """Test that schema violations wrap the pydantic error."""
        with pytest.raises(ConfigError, match=re.escape("profiles: invalid configuration")) as excinfo:
            parse_profile_config("profiles: not-a-list")
        assert isinstance(excinfo.value.__cause__, ValidationError)
        assert not isinstance(excinfo.value, ProfileConfigError)

    def test_rejection_is_logged(self, caplog) -> None:
        """Test that shape violations are logged with structured context."""
        with caplog.at_level(logging.WARNING, logger="sbomscore.scoring.config"):
            with pytest.raises(ProfileConfigError):
                parse_profile_config("profiles: []")

        (record,) = caplog.records
        assert record.getMessage() == "[Config] profile configuration rejected error=profiles: no profiles found"
        assert record.context == {"error": "profiles: no profiles found"}


class TestCategoryConfigParsing:
    """Tests for category configuration decoding and validation."""

    def test_ignored_features_are_dropped(self) -> None:
        """Test that features marked ignore are removed after validation."""
        config = parse_category_config(CATEGORY_YAML)
        licensing = config.categories[0]
        assert [f.lookup for f in licensing.features] == ["comp_with_licenses", "comp_with_valid_licenses"]
        assert licensing.weight == 40

    @pytest.mark.parametrize(
        "text,message",
        [
            ("categories: []", "categories: no categories found"),
            (
                "categories:\n  - name: ''\n    features: [{name: a}]",
                "categories: category at index 0 has empty name",
            ),
            (
                "categories:\n  - name: Licensing\n    features: [{name: a}]\n"
                "  - name: licensing\n    features: [{name: a}]",
                "categories: duplicate category name 'licensing'",
            ),
            ("categories:\n  - name: x\n    features: []", "categories: category 'x' has no features"),
            (
                "categories:\n  - name: x\n    features: [{name: ''}]",
                "categories: category 'x' has empty feature.name at index 0",
            ),
            (
                "categories:\n  - name: x\n    features: [{name: a}, {name: A}]",
                "categories: category 'x' has duplicate feature 'A'",
            ),
            (
                "categories:\n  - name: x\n    weight: -1\n    features: [{name: a}]",
                "categories: category 'x' has negative weight -1.0",
            ),
            (
                "categories:\n  - name: x\n    features: [{name: a, weight: -0.5}]",
                "categories: category 'x' feature 'a' has negative weight -0.5",
            ),
        ],
    )
    def test_shape_errors(self, text: str, message: str) -> None:
        """Test each category shape rule."""
        with pytest.raises(CategoryConfigError, match=re.escape(message)):
            parse_category_config(text)

    def test_ignored_feature_still_counts_for_shape(self) -> None:
        """Test that a category of only ignored features passes validation."""
        config = parse_category_config("categories:\n  - name: x\n    features: [{name: a, ignore: true}]")
        assert config.categories[0].features == []


class TestApplyProfileConfig:
    """Tests for restricting a catalog with a profile configuration."""

    def test_apply(self, catalog: Catalog) -> None:
        """Test that profiles and items are filtered by the configuration."""
        narrowed = apply_profile_config(catalog, parse_profile_config(PROFILE_YAML))

        assert [p.key for p in narrowed.profiles] == ["ntia"]
        ntia = narrowed.get_profile("ntia")
        assert ntia.features == ("comp_name",)
        assert ntia.description == "Trimmed NTIA"
        assert ntia.name == "NTIA Minimum Elements"
        # Original catalog untouched
        assert len(catalog.get_profile("ntia").features) == 7

    def test_description_falls_back(self, catalog: Catalog) -> None:
        """Test that an entry without description keeps the built-in one."""
        config = parse_profile_config("profiles:\n  - name: bsi\n    features: [{name: sbom_uri}]")
        narrowed = apply_profile_config(catalog, config)
        assert narrowed.get_profile("bsi-v1.1").description == "BSI TR-03183-2 v1.1 Profile"


class TestApplyCategoryConfig:
    """Tests for overriding categories with a category configuration."""

    def test_apply(self, catalog: Catalog) -> None:
        """Test weight overrides, feature filtering and dropped categories."""
        updated = apply_category_config(catalog, parse_category_config(CATEGORY_YAML))

        assert [c.key for c in updated.categories] == ["licensing_and_compliance", "identification"]
        licensing = updated.get_category("licensing_and_compliance")
        assert licensing.weight == 40
        assert licensing.features == ("comp_with_licenses", "comp_with_valid_licenses")
        assert updated.get_feature("comp_with_licenses").weight == 0.7
        assert updated.get_feature("comp_with_valid_licenses").weight == 0.20
        assert updated.get_category("identification").features == ("comp_with_name",)
        assert updated.get_category("identification").weight == 10

        assert catalog.get_feature("comp_with_licenses").weight == 0.20
        assert len(catalog.categories) == 8

    @pytest.mark.parametrize("second", ["comp_with_name", "name", "COMP_WITH_NAME"])
    def test_feature_in_two_categories_rejected(self, catalog: Catalog, second: str) -> None:
        """Test that one feature cannot be weighted under two categories."""
        config = parse_category_config(
            "categories:\n"
            "  - name: identification\n"
            "    features: [{name: comp_with_name, weight: 0.4}]\n"
            "  - name: completeness\n"
            f"    features: [{{name: {second}, weight: 0.9}}]\n"
        )
        message = "categories: feature 'comp_with_name' listed in both 'identification' and 'completeness'"
        with pytest.raises(CategoryConfigError, match=re.escape(message)):
            apply_category_config(catalog, config)


class TestDumpDefaults:
    """Tests for generating configuration files from a catalog."""

    def test_profile_dump(self, catalog: Catalog) -> None:
        """Test the generated profile configuration."""
        data = yaml.safe_load(dump_default_profile_config(catalog, today=date(2025, 1, 2)))

        assert data["metadata"] == {
            "version": CONFIG_VERSION,
            "description": PROFILE_CONFIG_DESCRIPTION,
            "last_updated": "2025-01-02",
        }
        ntia = data["profiles"][1]
        assert ntia["key"] == "ntia"
        assert ntia["name"] == "NTIA Minimum Elements"
        assert ntia["features"][0] == {
            "name": "Automation Support",
            "key": "sbom_machine_format",
            "description": "Valid spec (SPDX/CycloneDX) and format (JSON/XML)",
            "required": True,
            "ignore": False,
        }

    def test_profile_dump_reloads(self, catalog: Catalog) -> None:
        """Test that a generated profile file reproduces the catalog."""
        config = parse_profile_config(dump_default_profile_config(catalog))
        reloaded = apply_profile_config(catalog, config)
        assert reloaded.profiles == catalog.profiles

    def test_category_dump(self, catalog: Catalog) -> None:
        """Test the generated category configuration."""
        data = yaml.safe_load(dump_default_category_config(catalog, today=date(2025, 1, 2)))

        assert data["metadata"]["description"] == CATEGORY_CONFIG_DESCRIPTION
        assert [c["key"] for c in data["categories"]][0] == "identification"
        info = data["categories"][-1]
        assert info["key"] == "compinfo"
        assert all(f["ignore"] for f in info["features"])

    def test_category_dump_reloads(self, catalog: Catalog) -> None:
        """Test that reloading the dump keeps every scored category."""
        config = parse_category_config(dump_default_category_config(catalog))
        reloaded = apply_category_config(catalog, config)
        expected = [c for c in catalog.categories if not c.informational]
        assert list(reloaded.categories) == expected


class TestLoadFromFile:
    """Tests for reading configuration files from disk."""

    def test_load_profile_file(self, tmp_path) -> None:
        """Test loading a profile file."""
        path = tmp_path / "profiles.yaml"
        path.write_text(PROFILE_YAML, encoding="utf-8")
        assert len(load_profile_config(str(path)).profiles) == 2

    def test_load_category_file(self, tmp_path) -> None:
        """Test loading a category file."""
        path = tmp_path / "categories.yaml"
        path.write_text(CATEGORY_YAML, encoding="utf-8")
        assert len(load_category_config(str(path)).categories) == 3

    def test_missing_file(self, tmp_path) -> None:
        """Test that unreadable files raise ConfigError."""
        with pytest.raises(ConfigError, match=re.escape("categories: cannot read")):
            load_category_config(str(tmp_path / "missing.yaml"))
