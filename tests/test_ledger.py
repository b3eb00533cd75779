import pytest

from finstatements.ledger import Ledger
from finstatements.models import LedgerRow


def test_sums_matching_level1_rows(ledger):
    assert ledger.get_amount("current", ["inventories"]) == 140.0
    assert ledger.get_amount("previous", ["inventories"]) == 100.0


def test_matching_is_case_insensitive_substring(ledger):
    assert ledger.get_amount("current", ["INVENT"]) == 140.0
    assert ledger.get_amount("current", ["receivable"]) == 240.0


def test_any_keyword_matches(ledger):
    assert ledger.get_amount("current", ["inventories", "trade payables"]) == 20.0


def test_level2_filter(ledger):
    assert ledger.get_amount("current", ["inventories"], ["raw material"]) == 100.0
    assert ledger.get_amount("current", ["trade receivables"], ["allowances"]) == -10.0


def test_empty_level2_list_filters_nothing(ledger):
    assert ledger.get_amount("current", ["inventories"], []) == ledger.get_amount("current", ["inventories"])


@pytest.mark.parametrize("level1", [None, [], "inventories", 42])
def test_missing_or_invalid_level1_yields_zero(ledger, level1):
    assert ledger.get_amount("current", level1) == 0.0


def test_non_list_level2_is_ignored(ledger):
    assert ledger.get_amount("current", ["inventories"], "raw material") == 140.0


def test_unknown_period_yields_zero(ledger, caplog):
    assert ledger.get_amount("next_year", ["inventories"]) == 0.0
    assert "Unknown period" in caplog.text


def test_no_match_yields_zero(ledger):
    assert ledger.get_amount("current", ["goodwill"]) == 0.0


def test_empty_ledger(empty_ledger):
    assert len(empty_ledger) == 0
    assert empty_ledger.get_amount("current", ["inventories"]) == 0.0


def test_get_totals_returns_both_periods(ledger):
    totals = ledger.get_totals(["inventories"], ["finished"])
    assert totals.current == 40.0
    assert totals.previous == 20.0


def test_from_records_defaults_missing_amounts():
    ledger = Ledger.from_records([{"level1": "Cash", "level2": "Bank", "amount_current": None}])
    row = next(iter(ledger))
    assert row.amount_current == 0.0
    assert row.amount_previous == 0.0


def test_rows_with_blank_descriptions_never_match():
    ledger = Ledger([LedgerRow(level1="", level2="", amount_current=5.0)])
    assert ledger.get_amount("current", ["cash"]) == 0.0


def test_accounts_are_unique_and_sorted(ledger):
    accounts = ledger.accounts()
    assert accounts == sorted(set(accounts))
    assert "1001" in accounts
