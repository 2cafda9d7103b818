"""Tests for comprehensive (weighted quality) scoring."""

import pytest

from sbomscore.document import Document
from sbomscore.scoring import comprehensive
from sbomscore.scoring.catalog import Catalog
from sbomscore.scoring.specs import CategorySpec, FeatureScore, FeatureSpec


def _fixed(score: float, ignore: bool = False):
    return lambda doc: FeatureScore(score=score, desc=f"fixed {score}", ignore=ignore)


@pytest.fixture
def small_catalog() -> Catalog:
    """Two categories with constant evaluators."""
    features = [
        FeatureSpec("f_high", "High", 0.5, _fixed(10.0)),
        FeatureSpec("f_low", "Low", 0.5, _fixed(4.0)),
        FeatureSpec("f_na", "Not applicable", 0.5, _fixed(0.0, ignore=True)),
        FeatureSpec("f_over", "Over", 1.0, _fixed(12.0)),
    ]
    categories = [
        CategorySpec("alpha", "Alpha", 10, ("f_high", "f_low", "f_na", "f_missing")),
        CategorySpec("beta", "Beta", 30, ("f_over",)),
        CategorySpec("info", "Info", 10, ("f_low",), informational=True),
    ]
    return Catalog(categories=categories, features=features)


class TestComprehensiveEvaluate:
    """Tests for comprehensive.evaluate."""

    def test_weighted_categories(self, small_catalog: Catalog) -> None:
        """Test category renormalization and overall weighting."""
        result = comprehensive.evaluate(["alpha", "beta", "info"], small_catalog, Document())

        alpha, beta, info = result.categories
        assert alpha.score == pytest.approx(7.0)
        assert [f.key for f in alpha.features] == ["f_high", "f_low", "f_na"]
        assert alpha.features[2].ignored is True
        assert beta.score == 10.0
        assert info.informational is True
        # (7 * 10 + 10 * 30) / 40
        assert result.score == pytest.approx(9.25)
        assert result.grade == "A"

    def test_scores_are_clamped(self, small_catalog: Catalog) -> None:
        """Test that out of range evaluator output is clamped to 10."""
        result = comprehensive.evaluate(["beta"], small_catalog, Document())
        assert result.categories[0].features[0].score == 10.0

    def test_requested_order_and_unknown_keys(self, small_catalog: Catalog) -> None:
        """Test that categories follow the requested order and unknown keys are skipped."""
        result = comprehensive.evaluate(["beta", "missing", "alpha"], small_catalog, Document())
        assert [c.key for c in result.categories] == ["beta", "alpha"]

    def test_no_categories(self, small_catalog: Catalog) -> None:
        """Test that an empty request yields an F with score 0."""
        result = comprehensive.evaluate([], small_catalog, Document())
        assert result.categories == ()
        assert result.score == 0.0
        assert result.grade == "F"


class TestBuiltinComprehensive:
    """Tests for comprehensive scoring with the built-in catalog."""

    def test_complete_document_scores_full(self, catalog: Catalog, cdx_document: Document) -> None:
        """Test that a complete CycloneDX document scores an A."""
        keys = [c.key for c in catalog.categories]
        result = comprehensive.evaluate(keys, catalog, cdx_document)

        assert result.score == pytest.approx(10.0)
        assert result.grade == "A"
        for category in result.categories:
            if category.informational:
                assert all(f.ignored for f in category.features)
                continue
            assert category.score == pytest.approx(10.0), category.key

    def test_empty_document(self, catalog: Catalog, empty_document: Document) -> None:
        """Test that component features are ignored and the rest score low."""
        keys = [c.key for c in catalog.categories]
        result = comprehensive.evaluate(keys, catalog, empty_document)

        identification = result.categories[0]
        assert identification.key == "identification"
        assert all(f.ignored for f in identification.features)
        assert identification.score == 0.0
        assert result.grade == "F"

    def test_result_serializes(self, catalog: Catalog, cdx_document: Document) -> None:
        """Test the result dictionary layout."""
        result = comprehensive.evaluate(["structural"], catalog, cdx_document).to_dict()
        assert result["grade"] == "A"
        assert result["categories"][0]["key"] == "structural"
        assert result["categories"][0]["features"][0] == {
            "key": "sbom_spec_declared",
            "name": "SBOM Spec",
            "weight": 0.30,
            "score": 10.0,
            "desc": "cyclonedx",
            "ignored": False,
        }
