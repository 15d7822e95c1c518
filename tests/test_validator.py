"""Tests for subscription input validation."""

import pytest
from decimal import Decimal

from subtracker.validation import SubscriptionValidator


@pytest.fixture
def validator():
    return SubscriptionValidator()


class TestNameValidation:
    """Tests for the name rule."""

    @pytest.mark.parametrize("name", ["", "   ", "\t\n", None])
    def test_blank_names_rejected(self, validator, name):
        result = validator.validate(name, "5")
        assert result.is_valid is False
        assert result.first_error.field == "name"
        assert result.first_error.issue_type == "missing"

    def test_name_is_trimmed(self, validator):
        result = validator.validate("  Netflix  ", "5")
        assert result.is_valid is True
        assert result.parsed_name == "Netflix"


class TestCostValidation:
    """Tests for the cost rule."""

    @pytest.mark.parametrize("cost,expected", [
        ("15.99", Decimal("15.99")),
        (" 7 ", Decimal("7")),
        (15.99, Decimal("15.99")),
        (3, Decimal("3")),
        (Decimal("0.01"), Decimal("0.01")),
        ("1e2", Decimal("100")),
    ])
    def test_valid_costs_parsed(self, validator, cost, expected):
        result = validator.validate("Netflix", cost)
        assert result.is_valid is True
        assert result.parsed_cost == expected

    @pytest.mark.parametrize("cost", [0, "0", -5, "-5", "-0"])
    def test_non_positive_costs_rejected(self, validator, cost):
        result = validator.validate("Netflix", cost)
        assert result.is_valid is False
        assert result.first_error.issue_type == "not_positive"

    @pytest.mark.parametrize("cost", [
        float("nan"), float("inf"), "NaN", "Infinity", "abc", "12abc", "$5", True, [5],
    ])
    def test_non_numbers_rejected(self, validator, cost):
        result = validator.validate("Netflix", cost)
        assert result.is_valid is False
        assert result.first_error.field == "cost"
        assert result.first_error.issue_type == "not_a_number"

    @pytest.mark.parametrize("cost", ["1e1000000", "1e309", Decimal("1e400"), Decimal("-1e400")])
    def test_costs_beyond_float_range_rejected(self, validator, cost):
        result = validator.validate("Netflix", cost)
        assert result.is_valid is False
        assert result.first_error.issue_type == "not_a_number"

    def test_largest_float_cost_accepted(self, validator):
        result = validator.validate("Netflix", "1e308")
        assert result.is_valid is True
        assert result.parsed_cost == Decimal("1e308")

    @pytest.mark.parametrize("cost", [None, "", "  "])
    def test_missing_cost_rejected(self, validator, cost):
        result = validator.validate("Netflix", cost)
        assert result.is_valid is False
        assert result.first_error.issue_type == "missing"


class TestCombinedValidation:
    """Both fields are always checked."""

    def test_both_fields_reported(self, validator):
        result = validator.validate("", "-1")
        assert len(result.issues) == 2
        assert [issue.field for issue in result.issues] == ["name", "cost"]
        assert result.parsed_name is None
        assert result.parsed_cost is None

