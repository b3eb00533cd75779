import pytest

from finstatements.evaluator import StatementEvaluator
from finstatements.ledger import Ledger
from finstatements.models import FinancialNote, TemplateItem
from finstatements.notes import NoteRegistry, default_registry, find_note_item, update_note_value
from finstatements.notes.items import grand_total, line, subtotal
from finstatements.pipeline import build_financial_data
from finstatements.resolvers import ResolverRegistry, note_item


def _note(ledger=None):
    return FinancialNote(
        note_number=50,
        title="Editable",
        total_current=30.0,
        total_previous=3.0,
        content=[
            subtotal("note50-group", "Group", (20.0, 2.0), [
                line("note50-a", "A", (20.0, 2.0)),
            ]),
            line("note50-leaf", "Leaf", (10.0, 1.0)),
            grand_total("note50-total", "Total", (30.0, 3.0)),
        ],
    )


@pytest.fixture
def notes():
    return {50: _note()}


def _find(items, key):
    for item in items:
        if item.key == key:
            return item
        found = _find(item.children or [], key)
        if found is not None:
            return found
    return None


def test_edit_changes_item_and_leaves_input_untouched(notes):
    edited = update_note_value(notes, 50, "note50-leaf", "value_current", 15.0)
    assert find_note_item(edited, 50, "note50-leaf").value_current == 15.0
    assert find_note_item(notes, 50, "note50-leaf").value_current == 10.0


def test_edit_shifts_note_total_and_grand_total(notes):
    edited = update_note_value(notes, 50, "note50-leaf", "value_previous", 4.0)
    assert edited[50].total_current == 30.0
    assert edited[50].total_previous == 6.0
    assert find_note_item(edited, 50, "note50-total").value_previous == 6.0


def test_nested_edit_shifts_parents(notes):
    edited = update_note_value(notes, 50, ["note50-group", "note50-a"], "value_current", 25.0)
    assert find_note_item(edited, 50, "note50-group", "note50-a").value_current == 25.0
    assert find_note_item(edited, 50, "note50-group").value_current == 25.0
    assert edited[50].total_current == 35.0


def test_accepts_a_list_of_notes(notes):
    edited = update_note_value(list(notes.values()), 50, "note50-leaf", "value_current", 1.0)
    assert list(edited) == [50]


@pytest.mark.parametrize("note_number,path", [(51, "note50-leaf"), (50, "note50-missing")])
def test_unknown_note_or_path(notes, note_number, path):
    with pytest.raises(KeyError):
        update_note_value(notes, note_number, path, "value_current", 1.0)


@pytest.mark.parametrize("path", ["note50-group", "note50-total"])
def test_totals_are_not_editable(notes, path):
    with pytest.raises(ValueError):
        update_note_value(notes, 50, path, "value_current", 1.0)


def test_unknown_field(notes):
    with pytest.raises(ValueError):
        update_note_value(notes, 50, "note50-leaf", "label", 1.0)


def test_edit_flows_into_statement_leaf(notes, empty_ledger):
    template = [TemplateItem(key="stmt-leaf", label="From note", note=50)]
    evaluator = StatementEvaluator(empty_ledger, notes,
                                   ResolverRegistry({"stmt-leaf": note_item(50, "note50-leaf")}))
    assert evaluator.evaluate(template)[0].value_current == 10.0

    edited = update_note_value(notes, 50, "note50-leaf", "value_current", 99.0)
    evaluator = StatementEvaluator(empty_ledger, edited,
                                   ResolverRegistry({"stmt-leaf": note_item(50, "note50-leaf")}))
    assert evaluator.evaluate(template)[0].value_current == 99.0


def test_edited_eps_reaches_profit_and_loss(ledger):
    notes = default_registry().compute_all(ledger)
    edited = update_note_value(notes, 32, "note32-eps", "value_current", 123.45)

    data = build_financial_data(ledger, edited_notes=edited)
    assert _find(data.income_statement, "is-eps-value").value_current == 123.45

    untouched = build_financial_data(ledger)
    assert _find(untouched.income_statement, "is-eps-value").value_current != 123.45


def test_edited_notes_replace_custom_registry_output(notes, empty_ledger):
    registry = NoteRegistry()
    registry.register(50, _note)
    edited = update_note_value(notes, 50, "note50-leaf", "value_current", 11.0)
    data = build_financial_data(empty_ledger, registry=registry, edited_notes=edited)
    assert data.notes_by_number()[50].total_current == 31.0


@pytest.fixture
def cash_ledger():
    return Ledger.from_records([
        {"level1": "Cash and cash equivalents", "level2": "In current accounts",
         "amount_current": 100.0, "amount_previous": 90.0},
        {"level1": "Cash and cash equivalents", "level2": "Fixed deposits with maturity greater than 3 months",
         "amount_current": 40.0, "amount_previous": 30.0},
    ])


def test_unchanged_edit_leaves_statements_identical(cash_ledger):
    notes = default_registry().compute_all(cash_ledger)
    edited = update_note_value(notes, 11, ["note10-bwb-group", "note10-bwb-ca"], "value_current", 100.0)

    assert edited == notes
    assert build_financial_data(cash_ledger, edited_notes=edited) == build_financial_data(cash_ledger)


def test_unchanged_edit_of_every_leaf_keeps_note_totals(ledger):
    notes = default_registry().compute_all(ledger)

    def leaves(items, path):
        for item in items:
            if not hasattr(item, "key"):
                continue
            if item.children:
                yield from leaves(item.children, path + [item.key])
            elif not (item.is_subtotal or item.is_grand_total):
                yield path + [item.key], item.value_current

    for number, note in notes.items():
        for path, value in leaves(note.content, []):
            if value is None:
                continue
            edited = update_note_value(notes, number, path, "value_current", value)
            assert edited[number].total_current == note.total_current, (number, path)


def test_changed_edit_moves_cash_line_only(cash_ledger):
    notes = default_registry().compute_all(cash_ledger)
    edited = update_note_value(notes, 11, ["note10-bwb-group", "note10-bwb-ca"], "value_current", 110.0)

    before = build_financial_data(cash_ledger).balance_sheet
    after = build_financial_data(cash_ledger, edited_notes=edited).balance_sheet

    assert _find(before, "bs-assets-c-fin-cce").value_current == 100.0
    assert _find(after, "bs-assets-c-fin-cce").value_current == pytest.approx(110.0)
    assert _find(after, "bs-assets-c-fin-bank").value_current == _find(before, "bs-assets-c-fin-bank").value_current
    assert _find(after, "bs-assets").value_current == pytest.approx(_find(before, "bs-assets").value_current + 10.0)


def test_items_outside_total_keys_leave_note_total(cash_ledger):
    notes = default_registry().compute_all(cash_ledger)

    edited = update_note_value(notes, 11, "note10-coh", "value_current", 5.0)
    assert edited[11].total_current == notes[11].total_current

    edited = update_note_value(notes, 11, ["note10-bwb-group-other", "note10-bwb-deposit"], "value_current", 45.0)
    assert edited[11].total_current == notes[11].total_current
    assert find_note_item(edited, 11, "note10-bwb-group-other").value_current == pytest.approx(45.0)

    edited = update_note_value(notes, 5, ["note5-noncurrent", "note5-nc-emp"], "value_current", 10.0)
    assert edited[5].total_current == notes[5].total_current
    assert find_note_item(edited, 5, "note5-noncurrent").value_current == 10.0
