import pytest

from finstatements.cfs import CashFlowStatementGenerator, recalculate_cash_flow_totals
from finstatements.models import HierarchicalItem


def _find(items, key):
    for item in items:
        if item.key == key:
            return item
        found = _find(item.children or [], key)
        if found is not None:
            return found
    return None


def _keys(items):
    for item in items:
        yield item.key
        yield from _keys(item.children or [])


@pytest.fixture
def cash_flow(ledger):
    return CashFlowStatementGenerator(ledger).generate()


def test_sections(cash_flow):
    assert [i.key for i in cash_flow] == ["cf-op", "cf-inv", "cf-fin", "cf-net"]


def test_keys_are_unique(cash_flow):
    keys = list(_keys(cash_flow))
    assert len(keys) == len(set(keys))


def test_profit_before_tax(ledger):
    values = CashFlowStatementGenerator(ledger).calculate()
    # income is credited, so it carries a negative balance
    assert values["pbt"].current == (-900.0 - 12.5) - (300.0 + 30.0)


def test_working_capital_movements(ledger):
    values = CashFlowStatementGenerator(ledger).calculate()
    assert values["receivables"].current == -(240.0 - 195.0)
    assert values["inventories"].current == -(140.0 - 100.0)
    assert values["payables"].current == -120.0 + 90.0
    assert values["receivables"].previous == 0.0


def test_leaf_rows_are_editable(cash_flow):
    assert _find(cash_flow, "cf-dep").is_editable
    assert not _find(cash_flow, "cf-op-adj").is_editable
    assert not _find(cash_flow, "cf-op").is_editable


def test_recalculate_after_edit(cash_flow):
    dep = _find(cash_flow, "cf-dep")
    edited_dep = dep.model_copy(update={"value_current": dep.value_current + 100.0})
    adj = _find(cash_flow, "cf-op-adj")
    edited_adj = adj.model_copy(update={
        "children": [edited_dep if c.key == "cf-dep" else c for c in adj.children],
    })
    op = cash_flow[0]
    edited_op = op.model_copy(update={
        "children": [edited_adj if c.key == "cf-op-adj" else c for c in op.children],
    })

    result = recalculate_cash_flow_totals([edited_op] + cash_flow[1:])

    new_adj = _find(result, "cf-op-adj")
    assert new_adj.value_current == pytest.approx(sum(c.value_current for c in edited_adj.children))
    pbt = _find(result, "cf-pbt").value_current
    assert _find(result, "cf-op-wc").value_current == pytest.approx(pbt + new_adj.value_current)
    wc = _find(result, "cf-wc-adj").value_current
    assert _find(result, "cf-cgo").value_current == pytest.approx(pbt + new_adj.value_current + wc)
    # input tree is not modified
    assert _find(cash_flow, "cf-dep").value_current == dep.value_current


def test_recalculate_skips_subtotal_children():
    items = [HierarchicalItem(key="p", label="P", children=[
        HierarchicalItem(key="a", label="A", value_current=5.0, is_editable=True),
        HierarchicalItem(key="s", label="S", value_current=100.0, is_subtotal=True),
    ])]
    assert recalculate_cash_flow_totals(items)[0].value_current == 5.0


def test_recalculate_keeps_editable_parent():
    items = [HierarchicalItem(key="p", label="P", value_current=7.0, is_editable=True, children=[
        HierarchicalItem(key="a", label="A", value_current=5.0),
    ])]
    assert recalculate_cash_flow_totals(items)[0].value_current == 7.0


def _net_of_sections(items):
    return sum(_find(items, key).value_current for key in ("cf-op", "cf-inv", "cf-fin"))


def test_recalculate_keeps_generated_net_change(cash_flow):
    result = recalculate_cash_flow_totals(cash_flow)
    assert _find(result, "cf-net").value_current == pytest.approx(_find(cash_flow, "cf-net").value_current)
    assert _find(result, "cf-net").value_previous == _find(cash_flow, "cf-net").value_previous


def test_recalculate_moves_net_change_with_sections(cash_flow):
    dep = _find(cash_flow, "cf-dep")
    adj = _find(cash_flow, "cf-op-adj")
    edited_adj = adj.model_copy(update={"children": [
        c.model_copy(update={"value_current": c.value_current + 100.0}) if c.key == "cf-dep" else c
        for c in adj.children
    ]})
    op = cash_flow[0]
    edited_op = op.model_copy(update={
        "children": [edited_adj if c.key == "cf-op-adj" else c for c in op.children],
    })

    result = recalculate_cash_flow_totals([edited_op] + cash_flow[1:])

    net = _find(result, "cf-net").value_current
    assert net == pytest.approx(_net_of_sections(result))
    assert net == pytest.approx(_find(cash_flow, "cf-net").value_current + 100.0)
    assert dep.value_current == _find(cash_flow, "cf-dep").value_current


def test_recalculate_leaves_net_change_without_sections():
    items = [HierarchicalItem(key="cf-net", label="Net", value_current=3.0, is_subtotal=True)]
    assert recalculate_cash_flow_totals(items)[0].value_current == 3.0
