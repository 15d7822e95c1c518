"""Tests for the subscription ledger."""

import itertools

import pytest
from decimal import Decimal
from uuid import uuid4

from subtracker.ledger import (
    Ledger,
    LedgerError,
    LedgerIndexError,
    LedgerValidationError,
)
from subtracker.models.subscription import LedgerTotals, ValidationErrorKind


@pytest.fixture
def ledger():
    return Ledger()


class TestAdd:
    """Tests for Ledger.add."""

    def test_add_appends_in_order(self, ledger):
        ledger.add("Netflix", 15.99)
        ledger.add("Spotify", "9.99")
        assert [entry.name for entry in ledger.entries] == ["Netflix", "Spotify"]
        assert len(ledger) == 2

    def test_add_returns_entry(self, ledger):
        entry = ledger.add("  Netflix ", "15.99")
        assert entry.name == "Netflix"
        assert entry.cost == Decimal("15.99")
        assert ledger.entries[-1] is entry

    def test_duplicate_names_allowed(self, ledger):
        ledger.add("Gym", 30)
        ledger.add("Gym", 30)
        assert len(ledger) == 2

    @pytest.mark.parametrize("name", ["", "  "])
    def test_empty_name_rejected(self, ledger, name):
        with pytest.raises(LedgerValidationError) as exc_info:
            ledger.add(name, 5)
        assert exc_info.value.kind == ValidationErrorKind.EMPTY_NAME
        assert len(ledger) == 0

    @pytest.mark.parametrize("cost", [0, -5, float("nan")])
    def test_invalid_cost_rejected(self, ledger, cost):
        with pytest.raises(LedgerValidationError) as exc_info:
            ledger.add("Netflix", cost)
        assert exc_info.value.kind == ValidationErrorKind.INVALID_COST
        assert len(ledger) == 0

    def test_empty_name_reported_before_cost(self, ledger):
        with pytest.raises(LedgerValidationError) as exc_info:
            ledger.add("", "abc")
        assert exc_info.value.kind == ValidationErrorKind.EMPTY_NAME
        assert len(exc_info.value.issues) == 2

    def test_failed_add_leaves_existing_entries(self, ledger):
        ledger.add("Netflix", 15.99)
        before = ledger.entries
        with pytest.raises(LedgerValidationError):
            ledger.add("Spotify", -1)
        assert ledger.entries == before

    def test_validation_error_is_ledger_error(self, ledger):
        with pytest.raises(LedgerError):
            ledger.add("", 1)

    def test_long_name_accepted(self, ledger):
        entry = ledger.add("N" * 600, 5)
        assert len(entry.name) == 600
        assert len(ledger) == 1

    @pytest.mark.parametrize("cost", ["1e1000000", Decimal("1e400")])
    def test_cost_beyond_float_range_rejected(self, ledger, cost):
        with pytest.raises(LedgerValidationError) as exc_info:
            ledger.add("Netflix", cost)
        assert exc_info.value.kind == ValidationErrorKind.INVALID_COST
        assert len(ledger) == 0
        assert ledger.compute_totals() == LedgerTotals()


class TestRemoveAt:
    """Tests for position-based removal."""

    def test_remove_first_shifts_rest(self, ledger):
        ledger.add("A", 10)
        b = ledger.add("B", 20)
        removed = ledger.remove_at(0)
        assert removed.name == "A"
        assert ledger.entries == (b,)
        assert ledger.compute_totals().monthly == Decimal("20")

    def test_remove_middle(self, ledger):
        a = ledger.add("A", 1)
        ledger.add("B", 2)
        c = ledger.add("C", 3)
        ledger.remove_at(1)
        assert ledger.entries == (a, c)

    def test_out_of_range_rejected(self, ledger):
        ledger.add("A", 10)
        ledger.add("B", 20)
        before = ledger.entries
        with pytest.raises(LedgerIndexError):
            ledger.remove_at(5)
        assert ledger.entries == before

    def test_negative_index_does_not_wrap(self, ledger):
        ledger.add("A", 10)
        with pytest.raises(LedgerIndexError):
            ledger.remove_at(-1)
        assert len(ledger) == 1

    @pytest.mark.parametrize("index", [0.0, "0", None, True])
    def test_non_integer_rejected(self, ledger, index):
        ledger.add("A", 10)
        with pytest.raises(LedgerIndexError):
            ledger.remove_at(index)
        assert len(ledger) == 1

    def test_remove_from_empty_ledger(self, ledger):
        with pytest.raises(LedgerIndexError):
            ledger.remove_at(0)

    def test_index_error_is_builtin_index_error(self, ledger):
        with pytest.raises(IndexError):
            ledger.remove_at(0)

    def test_expected_id_matches(self, ledger):
        a = ledger.add("A", 10)
        assert ledger.remove_at(0, expected_id=a.entry_id) == a
        assert ledger.is_empty

    def test_stale_position_rejected(self, ledger):
        """A position rendered before an earlier delete must not hit the wrong entry."""
        ledger.add("A", 10)
        b = ledger.add("B", 20)
        c = ledger.add("C", 30)
        snapshot = [(position, entry.entry_id) for position, entry in enumerate(ledger.entries)]

        ledger.remove_at(*snapshot[0])
        with pytest.raises(LedgerIndexError):
            ledger.remove_at(*snapshot[1])
        assert ledger.entries == (b, c)


class TestRemoveById:
    """Tests for identity-based removal."""

    def test_remove_by_id(self, ledger):
        a = ledger.add("A", 10)
        b = ledger.add("B", 20)
        assert ledger.remove_by_id(b.entry_id) == b
        assert ledger.entries == (a,)

    def test_unknown_id_rejected(self, ledger):
        ledger.add("A", 10)
        with pytest.raises(LedgerIndexError):
            ledger.remove_by_id(uuid4())
        assert len(ledger) == 1

    def test_index_of(self, ledger):
        ledger.add("A", 10)
        b = ledger.add("B", 20)
        assert ledger.index_of(b.entry_id) == 1


class TestReset:
    """Tests for Ledger.reset."""

    def test_reset_clears_everything(self, ledger):
        ledger.add("A", 10)
        ledger.add("B", 20)
        ledger.reset()
        assert ledger.entries == ()
        assert ledger.is_empty
        assert ledger.compute_totals() == LedgerTotals()

    def test_reset_empty_ledger(self, ledger):
        ledger.reset()
        assert len(ledger) == 0

    def test_ledger_usable_after_reset(self, ledger):
        ledger.add("A", 10)
        ledger.reset()
        ledger.add("B", 5)
        assert ledger.compute_totals().monthly == Decimal("5")


class TestComputeTotals:
    """Tests for derived totals."""

    def test_empty_ledger_totals(self, ledger):
        totals = ledger.compute_totals()
        assert totals.monthly == 0
        assert totals.annual == 0
        assert totals.five_year == 0

    def test_single_entry_totals(self, ledger):
        ledger.add("Netflix", 15.99)
        totals = ledger.compute_totals()
        assert abs(float(totals.monthly) - 15.99) < 0.005
        assert abs(float(totals.annual) - 191.88) < 0.005
        assert abs(float(totals.five_year) - 959.40) < 0.005
        assert totals.five_year == Decimal("959.40")

    def test_totals_sum_all_entries(self, ledger):
        for name, cost in [("A", "10.10"), ("B", "0.20"), ("C", 3)]:
            ledger.add(name, cost)
        totals = ledger.compute_totals()
        assert totals.monthly == Decimal("13.30")
        assert totals.annual == Decimal("159.60")
        assert totals.five_year == Decimal("798.00")

    def test_totals_independent_of_order(self):
        costs = [("A", 0.1), ("B", 0.2), ("C", 0.3), ("D", 19.99)]
        monthly_totals = set()
        for ordering in itertools.permutations(costs):
            ledger = Ledger()
            for name, cost in ordering:
                ledger.add(name, cost)
            monthly_totals.add(ledger.compute_totals().monthly)
        assert monthly_totals == {Decimal("20.59")}

    def test_totals_for_very_large_costs(self, ledger):
        ledger.add("A", "1e308")
        ledger.add("B", "1e308")
        totals = ledger.compute_totals()
        assert totals.monthly == Decimal("2e308")
        assert totals.five_year == Decimal("1.2e310")

    def test_compute_totals_is_idempotent(self, ledger):
        ledger.add("Netflix", 15.99)
        ledger.add("Spotify", 9.99)
        assert ledger.compute_totals() == ledger.compute_totals()
        assert len(ledger) == 2


class TestSnapshots:
    """The exposed entries cannot be used to bypass validation."""

    def test_entries_is_a_copy(self, ledger):
        ledger.add("A", 10)
        snapshot = ledger.entries
        ledger.add("B", 20)
        assert len(snapshot) == 1

    def test_iteration(self, ledger):
        ledger.add("A", 10)
        ledger.add("B", 20)
        assert [entry.name for entry in ledger] == ["A", "B"]
