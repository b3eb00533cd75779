import json

import pytest

from finstatements.adjustments import JournalEntry, apply_adjustments, load_journal_entries


def test_debit_adds_and_credit_subtracts(ledger):
    entries = [
        JournalEntry(gl_account="1001", transaction_type="Debit", amounts={"current": 10.0}),
        JournalEntry(gl_account=1002, transaction_type="Credit", amounts={"current": 5.0, "previous": 2.0}),
    ]
    adjusted = apply_adjustments(ledger, entries)
    assert adjusted.get_amount("current", ["inventories"], ["raw"]) == 110.0
    assert adjusted.get_amount("current", ["inventories"], ["finished"]) == 35.0
    assert adjusted.get_amount("previous", ["inventories"], ["finished"]) == 18.0


def test_input_ledger_is_unchanged(ledger):
    apply_adjustments(ledger, [JournalEntry(gl_account="1001", amounts={"current": 10.0})])
    assert ledger.get_amount("current", ["inventories"], ["raw"]) == 100.0


def test_unknown_account_is_skipped(ledger, caplog):
    adjusted = apply_adjustments(ledger, [JournalEntry(gl_account="9999", amounts={"current": 10.0})])
    assert adjusted.get_amount("current", ["inventories"]) == ledger.get_amount("current", ["inventories"])
    assert "9999" in caplog.text


def test_load_entries(tmp_path):
    path = tmp_path / "adjustments.json"
    path.write_text(json.dumps({"entries": [
        {"gl_account": 1001, "transaction_type": "Credit", "amounts": {"current": 1.5}},
    ]}))
    entries = load_journal_entries(path)
    assert entries[0].gl_account == "1001"
    assert entries[0].signed_amount("current") == -1.5
    assert entries[0].signed_amount("previous") == 0.0


def test_load_rejects_invalid_entries(tmp_path):
    path = tmp_path / "adjustments.json"
    path.write_text(json.dumps([{"gl_account": "1", "transaction_type": "Transfer"}]))
    with pytest.raises(ValueError):
        load_journal_entries(path)


def test_load_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_journal_entries(tmp_path / "none.json")
