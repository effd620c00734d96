"""Tests for planner month helpers"""

from datetime import date

import pytest

from components.core.dates import current_month, format_month_string, is_valid_month


class TestFormatMonthString:
    """Tests for display labels of months"""

    def test_formats_month_and_year(self):
        assert format_month_string("2025-11") == "November, 2025"

    def test_formats_january(self):
        assert format_month_string("2024-01") == "January, 2024"

    @pytest.mark.parametrize("raw", ["not-a-month", "2025-13", "2025-1", "", "11-2025"])
    def test_malformed_input_is_returned_unchanged(self, raw):
        assert format_month_string(raw) == raw


class TestMonthValidation:
    """Tests for YYYY-MM validation"""

    @pytest.mark.parametrize("value", ["2025-01", "2025-12", "1999-09"])
    def test_valid_months(self, value):
        assert is_valid_month(value)

    @pytest.mark.parametrize("value", ["2025-00", "2025-13", "25-11", "2025/11", "2025-11-01", "", "２０２５-11"])
    def test_invalid_months(self, value):
        assert not is_valid_month(value)

    def test_current_month_is_zero_padded(self):
        assert current_month(date(2025, 3, 14)) == "2025-03"
