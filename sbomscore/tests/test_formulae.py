"""Tests for the shared score formulae."""

import pytest

from sbomscore.scoring import formulae
from sbomscore.scoring.results import CategoryResult, FeatureResult, ProfileFeatureResult


def _feature(score: float, weight: float, ignored: bool = False) -> FeatureResult:
    return FeatureResult(key="f", name="F", weight=weight, score=score, desc="", ignored=ignored)


def _item(score: float, required: bool = True, ignored: bool = False) -> ProfileFeatureResult:
    return ProfileFeatureResult(key="i", name="I", required=required, score=score, passed=False, desc="", ignored=ignored)


class TestPerComponentScore:
    """Tests for per_component_score."""

    def test_no_components_scores_zero(self) -> None:
        """Test that an empty component set scores 0."""
        assert formulae.per_component_score(0, 0) == 0.0

    def test_proportional_score(self) -> None:
        """Test that the score is the passing share scaled to 10."""
        assert formulae.per_component_score(5, 10) == 5.0
        assert formulae.per_component_score(1, 4) == 2.5

    def test_all_components_score_full(self) -> None:
        """Test that every component passing yields 10."""
        assert formulae.per_component_score(7, 7) == 10.0

    def test_incomplete_set_never_displays_full(self) -> None:
        """Test that a near-complete set is capped below 10."""
        assert formulae.per_component_score(999, 1000) == formulae.INCOMPLETE_CAP

    def test_out_of_range_is_clamped(self) -> None:
        """Test that inconsistent counts stay inside [0, 10]."""
        assert formulae.per_component_score(3, 2) == 10.0
        assert formulae.per_component_score(-1, 2) == 0.0


class TestGrades:
    """Tests for letter grade mapping."""

    @pytest.mark.parametrize(
        "score,grade",
        [
            (10.0, "A"),
            (9.0, "A"),
            (8.99, "B"),
            (8.0, "B"),
            (7.99, "C"),
            (7.0, "C"),
            (6.0, "D"),
            (5.0, "D"),
            (4.99, "F"),
            (0.0, "F"),
        ],
    )
    def test_grade_bands(self, score: float, grade: str) -> None:
        """Test that lower band bounds are inclusive."""
        assert formulae.to_grade(score) == grade

    def test_boolean_score(self) -> None:
        """Test boolean scores map to the score extremes."""
        assert formulae.boolean_score(True) == 10.0
        assert formulae.boolean_score(False) == 0.0


class TestCategoryScore:
    """Tests for the weighted category aggregation."""

    def test_weighted_average(self) -> None:
        """Test that feature scores are averaged by weight."""
        features = [_feature(10.0, 0.5), _feature(0.0, 0.5)]
        assert formulae.compute_category_score(features) == pytest.approx(5.0)

    def test_ignored_features_are_renormalized(self) -> None:
        """Test that ignored features drop out of both numerator and weight."""
        features = [_feature(8.0, 0.4), _feature(0.0, 0.6, ignored=True)]
        assert formulae.compute_category_score(features) == pytest.approx(8.0)

    def test_zero_weight_scores_zero(self) -> None:
        """Test that a category without applicable weight scores 0."""
        assert formulae.compute_category_score([_feature(10.0, 0.5, ignored=True)]) == 0.0
        assert formulae.compute_category_score([]) == 0.0


class TestOverallScore:
    """Tests for the overall score across categories."""

    def test_informational_categories_are_excluded(self) -> None:
        """Test that informational categories do not move the overall score."""
        categories = [
            CategoryResult(key="a", name="A", weight=10, score=8.0),
            CategoryResult(key="b", name="B", weight=30, score=4.0),
            CategoryResult(key="info", name="Info", weight=10, score=0.0, informational=True),
        ]
        assert formulae.compute_overall_score(categories) == pytest.approx(5.0)

    def test_weights_are_relative(self) -> None:
        """Test the overall score as a weight-weighted mean of category scores."""
        categories = [
            CategoryResult(key="a", name="A", weight=10, score=9.0),
            CategoryResult(key="b", name="B", weight=12, score=7.0),
            CategoryResult(key="info", name="Info", weight=10, score=0.0, informational=True),
        ]
        assert formulae.compute_overall_score(categories) == pytest.approx(174 / 22)
        assert round(formulae.compute_overall_score(categories), 3) == 7.909

    def test_no_categories(self) -> None:
        """Test that no categories yield a zero score."""
        assert formulae.compute_overall_score([]) == 0.0


class TestProfileScore:
    """Tests for the profile score."""

    def test_only_required_applicable_items_count(self) -> None:
        """Test that optional and ignored items are left out of the mean."""
        items = [
            _item(10.0),
            _item(5.0),
            _item(0.0, required=False),
            _item(0.0, ignored=True),
        ]
        assert formulae.compute_profile_score(items) == pytest.approx(7.5)

    def test_no_scored_items(self) -> None:
        """Test that a profile without qualifying items scores 0."""
        assert formulae.compute_profile_score([_item(10.0, required=False)]) == 0.0


class TestScoreBuilders:
    """Tests for the FeatureScore builders and description helpers."""

    def test_comp_na_is_ignored(self) -> None:
        """Test that the no-components result is not applicable."""
        result = formulae.score_comp_na()
        assert result.ignore is True
        assert result.score == 0.0
        assert result.desc == "N/A (no components)"

    def test_comp_full_description(self) -> None:
        """Test the have/total description."""
        result = formulae.score_comp_full(3, 4, "names")
        assert result.desc == "3/4 have names"
        assert result.score == pytest.approx(7.5)

    def test_present_and_missing(self) -> None:
        """Test the presence builders."""
        assert formulae.score_present("namespace").desc == "present namespace"
        missing = formulae.score_missing("namespace")
        assert missing.desc == "missing namespace"
        assert missing.score == 0.0
        assert missing.ignore is False

    def test_unknown_spec_is_ignored(self) -> None:
        """Test that unknown specs produce a not-applicable result."""
        result = formulae.score_unknown_spec()
        assert result.ignore is True
        assert result.desc == "N/A (unknown spec)"
