from finstatements.models import FinancialNote, HierarchicalItem, TableContent
from finstatements.notes import NoteRegistry, default_registry, find_nested_item, find_note_item
from finstatements.notes.income import PROVISION_MOVEMENTS, PROVISION_TOTALS
from finstatements.notes.items import grand_total, line, subtotal

DEFAULT_NOTES = [5, 6, 7, 8, 10, 11, 13, 14, 15, 16, 17, 18, 19, 32, 33]


def test_default_registry_computes_every_note(ledger):
    registry = default_registry()
    assert list(registry) == DEFAULT_NOTES
    notes = registry.compute_all(ledger)
    assert sorted(notes) == DEFAULT_NOTES
    assert all(isinstance(note, FinancialNote) for note in notes.values())
    assert all(notes[n].note_number == n for n in notes)


def test_notes_compute_on_an_empty_ledger(empty_ledger):
    assert len(default_registry().compute_all(empty_ledger)) == len(DEFAULT_NOTES)


def test_failing_provider_is_left_out(ledger, caplog):
    def broken(ledger):
        raise KeyError("missing grouping")

    registry = NoteRegistry()
    registry.register(1, broken)
    registry.register(2, lambda ledger: FinancialNote(note_number=2, title="Fine"))
    notes = registry.compute_all(ledger)
    assert list(notes) == [2]
    assert "Failed to compute note 1" in caplog.text


def test_compute_unknown_note(ledger):
    assert NoteRegistry().compute(42, ledger) is None


def test_providers_read_the_ledger(ledger):
    note = default_registry().compute(19, ledger)
    bank_interest = find_nested_item(note.content, ["note19-interest-breakup", "note19-bank"])
    # income is credited, so the note shows it positive
    assert bank_interest.value_current == 12.5
    assert bank_interest.value_previous == 7.5


def test_provision_schedule_rows(empty_ledger):
    note = default_registry().compute(33, empty_ledger)
    table = note.content[0]
    assert isinstance(table, TableContent)
    assert len(table.rows) == len(PROVISION_MOVEMENTS) + 2
    assert table.rows[0][1] == "484.96\n(547.93)"
    # zero movements print as a dash
    assert table.rows[3][1] == "-\n(1,575.47)"
    assert (note.total_current, note.total_previous) == (PROVISION_TOTALS.current, PROVISION_TOTALS.previous)


def test_item_builders():
    leaf = line("k", "Leaf", (1.0, 2.0))
    heading = line("h", "Heading")
    total = grand_total("t", "Total", (3.0, 4.0))
    group = subtotal("g", "Group", (1.0, 2.0), [leaf])
    assert (leaf.value_current, leaf.value_previous) == (1.0, 2.0)
    assert heading.value_current is None
    assert total.is_grand_total
    assert group.is_subtotal and group.children == [leaf]


def test_find_nested_item():
    content = [
        "prose",
        TableContent(headers=["a"], rows=[["1"]]),
        subtotal("outer", "Outer", (1.0, 1.0), [
            line("inner", "Inner", (1.0, 1.0), children=[line("deep", "Deep", (5.0, 6.0))]),
        ]),
    ]
    assert find_nested_item(content, ["outer"]).key == "outer"
    assert find_nested_item(content, ["outer", "inner", "deep"]).value_current == 5.0
    assert find_nested_item(content, ["inner"]) is None
    assert find_nested_item(content, ["outer", "missing"]) is None
    assert find_nested_item(content, []) is None


def test_find_note_item(ledger):
    notes = default_registry().compute_all(ledger)
    item = find_note_item(notes, 5, "note5-current", "note5-c-emp")
    assert isinstance(item, HierarchicalItem)
    assert item.value_current == 6.39
    assert find_note_item(notes, 99, "anything") is None
