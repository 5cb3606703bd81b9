"""
Unit tests for dimension parsing and unit conversion.
"""

import pytest

from core.formatting.utils.units import (
    Dimension,
    format_points,
    is_dimension,
    parse_dimension,
    to_points,
    to_renderer_units,
)


class TestParseDimension:

    @pytest.mark.parametrize("value,expected", [
        ("1in", Dimension(1.0, "in")),
        ("0.75in", Dimension(0.75, "in")),
        ("12pt", Dimension(12.0, "pt")),
        ("0.5em", Dimension(0.5, "em")),
        ("0", Dimension(0.0, "pt")),
    ])
    def test_valid(self, value, expected):
        assert parse_dimension(value) == expected

    @pytest.mark.parametrize("value", ["", "12", "12px", "in", "-1in", "1.in", "1 in", "abc"])
    def test_invalid(self, value):
        assert not is_dimension(value)
        with pytest.raises(ValueError):
            parse_dimension(value)

    def test_non_string_rejected(self):
        assert not is_dimension(12)
        with pytest.raises(ValueError):
            parse_dimension(12)


class TestConversion:

    def test_inches_to_points(self):
        assert to_points("1in") == 72
        assert to_points("2in") == 144

    def test_em_relative_to_base(self):
        assert to_points("0.5em") == 6.0
        assert to_points("0.5em", base_font_pt=18) == 9.0

    def test_renderer_units_truncate(self):
        assert to_renderer_units("1in") == 72
        assert to_renderer_units("0.75in") == 54
        assert to_renderer_units("6in") == 432
        assert to_renderer_units("9in") == 648
        assert to_renderer_units("0.3in") == 21  # 21.6 truncated
        assert to_renderer_units("10.9pt") == 10

    def test_format_points(self):
        assert format_points(13.5) == "13.5pt"
        assert format_points(72.0) == "72pt"
        assert format_points(0) == "0pt"
