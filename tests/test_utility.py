"""Tests for the calculator and date utilities."""

from datetime import datetime
from unittest.mock import patch

import pytest

from ghl_mcp.tools import utility
from ghl_mcp.tools.utility import calculate, calculate_future_datetime, safe_eval


class TestSafeEval:
    """Tests for the arithmetic evaluator."""

    @pytest.mark.parametrize("expression, expected", [
        ("2 + 3 * 4", 14),
        ("(299 * 0.8) + 50", 289.2),
        ("2 ^ 10", 1024),
        ("sqrt(144)", 12),
        ("abs(-5) + floor(2.7) + ceil(2.1)", 10),
        ("10 % 3", 1),
        ("round(pi, 2)", 3.14),
    ])
    def test_supported(self, expression, expected):
        assert safe_eval(expression) == pytest.approx(expected)

    @pytest.mark.parametrize("expression", [
        "__import__('os').system('ls')",
        "open('x')",
        "a + 1",
        "1 / 0",
        "2 ** 5000",
        "((10 ** 999) ** 999) ** 999",
        "(-8) ** 0.5",
        "[1, 2]",
        "1 +",
    ])
    def test_rejected(self, expression):
        with pytest.raises(ValueError):
            safe_eval(expression)


class TestCalculate:
    """Tests for the calculate tool."""

    def test_percent_of(self):
        result = calculate("15% of 5000")
        assert result == {"success": True, "expression": "15% of 5000", "result": 750.0, "formatted": "750.00"}

    def test_precision_and_grouping(self):
        result = calculate("1234567 / 3", precision=3)
        assert result["success"] is True
        assert result["result"] == 411522.333
        assert result["formatted"] == "411,522.333"

    def test_failure_is_reported_not_raised(self):
        result = calculate("1 / 0")
        assert result["success"] is False
        assert result["error"] == "Calculation failed"
        assert result["expression"] == "1 / 0"
        assert result["message"]

    def test_nested_powers_overflow(self):
        """Stacked exponents fail fast instead of building an enormous integer."""
        result = calculate("((10**999)**999)**999")

        assert result["success"] is False
        assert result["error"] == "Calculation failed"

    @pytest.mark.parametrize("precision", [-1, 101])
    def test_precision_out_of_range(self, precision):
        for expression in ("2 + 2", "15% of 5000"):
            result = calculate(expression, precision=precision)
            assert result == {
                "success": False,
                "error": "Calculation failed",
                "message": "precision must be between 0 and 100",
                "expression": expression,
            }


class TestCalculateFutureDatetime:
    """Tests for calculate_future_datetime."""

    def test_absolute_mode_sets_time_of_day(self):
        result = calculate_future_datetime(days=1, hours=16, minutes=30)

        target = datetime.fromtimestamp(result["timestamp"] / 1000).astimezone()
        tomorrow = (datetime.now().astimezone()).date().toordinal() + 1
        assert target.date().toordinal() == tomorrow
        assert (target.hour, target.minute, target.second) == (16, 30, 0)
        assert result["time"] == "4:30:00 PM"
        assert result["isoString"].endswith("Z")
        assert result["calculation"] == {
            "daysAdded": 1,
            "hoursSet": 16,
            "hoursAdded": None,
            "minutesSet": 30,
            "minutesAdded": None,
            "mode": "absolute",
        }

    def test_relative_mode_adds_to_now(self):
        before = datetime.now().timestamp() * 1000
        result = calculate_future_datetime(hours=2, use_absolute_time=False)
        after = datetime.now().timestamp() * 1000

        two_hours = 2 * 3600 * 1000
        assert before + two_hours - 1000 <= result["timestamp"] <= after + two_hours + 1000
        assert result["calculation"]["mode"] == "relative"
        assert result["calculation"]["hoursAdded"] == 2

    def test_reports_iana_zone(self):
        with patch.object(utility, "local_timezone_name", return_value="America/Chicago"):
            result = calculate_future_datetime(days=1)

        assert result["timezone"] == "America/Chicago"
