import json

import pandas as pd

from finstatements.main import main


def _write_tb(path, rows):
    pd.DataFrame(rows).rename(columns={
        "level1": "Level 1 grouping",
        "level2": "Level 2 grouping",
        "amount_current": "Amount Current",
        "amount_previous": "Amount Previous",
        "gl_account": "Account Code",
    }).to_csv(path, index=False)


def test_generates_outputs(tmp_path, sample_rows):
    tb = tmp_path / "tb.csv"
    _write_tb(tb, sample_rows)
    adjustments = tmp_path / "adj.json"
    adjustments.write_text(json.dumps([{"gl_account": "1001", "amounts": {"current": 1.0}}]))
    out = tmp_path / "out"

    code = main([str(tb), "--output-dir", str(out), "--adjustments", str(adjustments), "--no-pdf", "--json"])

    assert code == 0
    assert (out / "Financial_Statements.xlsx").exists()
    assert not (out / "Financial_Statements.pdf").exists()
    payload = json.loads((out / "financial_statements.json").read_text(encoding="utf-8"))
    assert set(payload) >= {"balance_sheet", "income_statement", "cash_flow", "notes"}


def test_missing_input_returns_error(tmp_path):
    assert main([str(tmp_path / "missing.csv"), "--output-dir", str(tmp_path)]) == 1
