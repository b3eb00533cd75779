from finstatements.bs import BalanceSheetTemplate
from finstatements.models import FinancialData
from finstatements.pipeline import build_financial_data
from finstatements.pnl import ProfitLossTemplate


def _find(items, key):
    for item in items:
        if item.key == key:
            return item
        found = _find(item.children or [], key)
        if found is not None:
            return found
    return None


def test_builds_every_part(ledger):
    data = build_financial_data(ledger)
    assert isinstance(data, FinancialData)
    assert [i.key for i in data.balance_sheet] == ["bs-assets", "bs-eq-liab"]
    assert data.income_statement[0].key == "is-income"
    assert data.cash_flow[-1].key == "cf-net"
    assert [n.note_number for n in data.notes] == sorted(n.note_number for n in data.notes)
    assert data.accounting_policies


def test_is_idempotent(ledger):
    assert build_financial_data(ledger) == build_financial_data(ledger)


def test_statement_lines_read_note_totals(ledger):
    data = build_financial_data(ledger)
    notes = data.notes_by_number()
    inventories = _find(data.balance_sheet, "bs-assets-c-inv")
    assert inventories.value_current == notes[8].total_current
    cash = _find(data.balance_sheet, "bs-assets-c-fin-cce")
    assert cash.value_previous == notes[11].total_previous


def test_grand_totals_sum_children(ledger):
    data = build_financial_data(ledger)
    assets = _find(data.balance_sheet, "bs-assets")
    assert assets.value_current == sum(c.value_current or 0.0 for c in assets.children)


def test_profit_formulas(ledger):
    data = build_financial_data(ledger)
    pbeit = _find(data.income_statement, "is-pbeit")
    pbt = _find(data.income_statement, "is-pbt")
    tax = _find(data.income_statement, "is-tax")
    pat = _find(data.income_statement, "is-pat")
    assert pbt.value_current == pbeit.value_current + 12166.54
    assert pat.value_current == pbt.value_current - tax.value_current
    assert _find(data.income_statement, "is-total-comprehensive").value_current is None


def test_templates_have_unique_keys():
    assert BalanceSheetTemplate().duplicate_keys() == []
    assert ProfitLossTemplate().duplicate_keys() == []


def test_template_note_references():
    refs = BalanceSheetTemplate().note_references()
    assert refs["bs-assets-c-inv"] == 8
    assert BalanceSheetTemplate().find("bs-liab-c-tax").note == 7
    assert BalanceSheetTemplate().find("nope") is None


def test_policies_are_copied_per_build(ledger):
    first = build_financial_data(ledger)
    first.accounting_policies[0].title = "changed"
    assert build_financial_data(ledger).accounting_policies[0].title == "1. General Information"
