import pytest

from finstatements.ledger import Ledger

SAMPLE_ROWS = [
    {"level1": "Inventories", "level2": "Raw Material", "amount_current": 100.0, "amount_previous": 80.0,
     "gl_account": "1001"},
    {"level1": "Inventories", "level2": "Finished Goods", "amount_current": 40.0, "amount_previous": 20.0,
     "gl_account": "1002"},
    {"level1": "Trade receivables", "level2": "Trade Receivables", "amount_current": 250.0, "amount_previous": 200.0,
     "gl_account": "2001"},
    {"level1": "Trade receivables", "level2": "Allowances for doubtful debts", "amount_current": -10.0,
     "amount_previous": -5.0, "gl_account": "2002"},
    {"level1": "Equity", "level2": "Equity share capital", "amount_current": -850.55, "amount_previous": -850.55,
     "gl_account": "3001"},
    {"level1": "Other Income", "level2": "Interest income", "amount_current": -12.5, "amount_previous": -7.5,
     "gl_account": "4001"},
    {"level1": "Revenue", "level2": "Sale of products", "amount_current": -900.0, "amount_previous": -700.0,
     "gl_account": "4100"},
    {"level1": "Employee benefits expense", "level2": "Salaries", "amount_current": 300.0,
     "amount_previous": 250.0, "gl_account": "5001"},
    {"level1": "Depreciation expense", "level2": "Depreciation", "amount_current": 30.0, "amount_previous": 25.0,
     "gl_account": "5002"},
    {"level1": "Trade payables", "level2": "Creditors", "amount_current": -120.0, "amount_previous": -90.0,
     "gl_account": "6001"},
]


@pytest.fixture
def sample_rows():
    return [dict(row) for row in SAMPLE_ROWS]


@pytest.fixture
def ledger(sample_rows):
    return Ledger.from_records(sample_rows)


@pytest.fixture
def empty_ledger():
    return Ledger()
