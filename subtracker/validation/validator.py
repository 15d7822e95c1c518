"""
Subscription Input Validation

DESIGN DECISION: Raw user input is checked in one place, before anything
reaches the ledger. Only two rules exist:

- NAME: must be non-empty once surrounding whitespace is removed
- COST: must parse to a finite number strictly greater than zero,
  small enough to be represented as a float

Both fields are always checked so the user sees every problem at once.

IMPORTANT: Validation NEVER silently fixes issues.
"12abc" is not read as 12, and a negative cost is not made positive.
"""

import sys
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from subtracker.models.subscription import (
    ValidationIssue,
    ValidationResult,
)


# Largest cost that is still a finite float
MAX_COST = Decimal(sys.float_info.max)


class SubscriptionValidator:
    """
    Validates the raw (name, cost) pair of a new subscription.

    Accepts whatever the presentation layer collected: text from input
    boxes, or numbers when called programmatically.
    """

    def _parse_name(self, name: Any) -> tuple[Optional[str], list[ValidationIssue]]:
        text = "" if name is None else str(name).strip()
        if not text:
            return None, [ValidationIssue(
                field="name",
                issue_type="missing",
                message="Service name is required",
                suggested_fix="Enter the name of the service, e.g. Netflix",
            )]
        return text, []

    def _parse_cost(self, cost: Any) -> tuple[Optional[Decimal], list[ValidationIssue]]:
        """
        Convert cost input to Decimal.

        Floats go through str() so 15.99 stays 15.99 instead of picking up
        binary representation noise.
        """
        if cost is None or (isinstance(cost, str) and not cost.strip()):
            return None, [ValidationIssue(
                field="cost",
                issue_type="missing",
                message="Monthly cost is required",
                suggested_fix="Enter the monthly cost, e.g. 15.99",
            )]

        # bool is an int subclass; True is not a price
        if isinstance(cost, bool):
            value = None
        elif isinstance(cost, Decimal):
            value = cost
        elif isinstance(cost, (int, float)):
            value = Decimal(str(cost))
        elif isinstance(cost, str):
            try:
                value = Decimal(cost.strip())
            except InvalidOperation:
                value = None
        else:
            value = None

        if value is None or not value.is_finite() or abs(value) > MAX_COST:
            return None, [ValidationIssue(
                field="cost",
                issue_type="not_a_number",
                message=f"Monthly cost ({cost!r}) is not a valid number",
                suggested_fix="Use digits only, e.g. 9.99",
            )]

        if value <= 0:
            return None, [ValidationIssue(
                field="cost",
                issue_type="not_positive",
                message="Monthly cost must be greater than zero",
                suggested_fix="Enter an amount above 0",
            )]

        return value, []

    def validate(self, name: Any, cost: Any) -> ValidationResult:
        """
        Check a (name, cost) pair.

        Returns:
            ValidationResult with the parsed values and all issues found
        """
        parsed_name, name_issues = self._parse_name(name)
        parsed_cost, cost_issues = self._parse_cost(cost)
        issues = name_issues + cost_issues

        return ValidationResult(
            parsed_name=parsed_name,
            parsed_cost=parsed_cost,
            issues=issues,
        )

