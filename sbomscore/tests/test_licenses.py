"""Tests for license lookup."""

import pytest
from license_expression import ExpressionError

from sbomscore import licenses
from sbomscore.licenses import License, is_meaningful_license_text, lookup_expression, lookup_license


class TestMeaningfulText:
    """Tests for is_meaningful_license_text."""

    @pytest.mark.parametrize("value", ["", "  ", "NOASSERTION", "none", " NoAssertion "])
    def test_placeholders(self, value: str) -> None:
        """Test that empty values and placeholders carry no license."""
        assert is_meaningful_license_text(value) is False

    def test_real_value(self) -> None:
        """Test that any other value is meaningful."""
        assert is_meaningful_license_text("MIT") is True


class TestLookupLicense:
    """Tests for lookup_license."""

    def test_spdx_identifier(self) -> None:
        """Test that SPDX identifiers are recognized case-insensitively."""
        result = lookup_license("mit")
        assert result.short_id == "MIT"
        assert result.source == "spdx"
        assert result.deprecated is False
        assert result.restrictive is False

    def test_or_later_suffix(self) -> None:
        """Test that a trailing plus is stripped before lookup."""
        assert lookup_license("Apache-2.0+").source == "spdx"

    def test_copyleft_is_restrictive(self) -> None:
        """Test that copyleft licenses are flagged restrictive."""
        assert lookup_license("GPL-3.0-only").restrictive is True

    def test_no_assertion(self) -> None:
        """Test that placeholders produce a license without source."""
        result = lookup_license("NOASSERTION")
        assert result.source == ""
        assert result.short_id == "NOASSERTION"

    def test_custom_reference(self) -> None:
        """Test that unknown identifiers are custom."""
        result = lookup_license("LicenseRef-acme-eula")
        assert result.source == "custom"
        assert result.name == "LicenseRef-acme-eula"

    def test_from_id(self) -> None:
        """Test the License.from_id shortcut."""
        assert License.from_id("MIT") == lookup_license("MIT")


class TestLookupExpression:
    """Tests for lookup_expression."""

    def test_compound_expression(self) -> None:
        """Test that every license symbol of an expression is returned."""
        result = lookup_expression("MIT OR Apache-2.0")
        assert [lic.short_id for lic in result] == ["MIT", "Apache-2.0"]

    def test_exception_is_not_a_license(self) -> None:
        """Test that WITH exceptions keep only the license part."""
        result = lookup_expression("GPL-2.0-or-later WITH Classpath-exception-2.0")
        assert [lic.short_id for lic in result] == ["GPL-2.0-or-later"]

    def test_placeholder_expression(self) -> None:
        """Test that placeholder expressions yield no licenses."""
        assert lookup_expression("NOASSERTION") == []
        assert lookup_expression("") == []

    def test_unparseable_expression(self, mocker) -> None:
        """Test that parser errors turn the expression into a custom license."""
        mocker.patch.object(licenses.licensing, "parse", side_effect=ExpressionError("bad"))
        result = lookup_expression("MIT AND (")
        assert result == [License(short_id="MIT AND (", name="MIT AND (", source="custom")]
