import logging
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Union

import pandas as pd
from pydantic import ValidationError

from .ledger import Ledger
from .models import LedgerRow
from .settings import settings
from .utils import clean_amount, to_lakhs

logger = logging.getLogger(__name__)

# Target field -> header aliases, compared ignoring case and surrounding whitespace
COLUMN_ALIASES: Dict[str, List[str]] = {
    "gl_account": ["Account Code", "G/L Account", "G/L Acct"],
    "gl_name": ["Name", "GL Description"],
    "level1": ["Level 1 grouping", "Level 1 Desc"],
    "level2": ["Level 2 grouping", "Level 2 Desc"],
    "account_type": ["Nature", "P&L Statement Acct Type"],
    "functional_area": ["Target Grouping", "Functional Area"],
    "amount_current": ["Amount", "Amount Current", "Current Year"],
    "amount_previous": ["Amount Previous", "Previous Year", "Comparative Amount"],
}

REQUIRED_FIELDS = ["level1", "level2", "amount_current"]
AMOUNT_FIELDS = ["amount_current", "amount_previous"]
TEXT_FIELDS = ["gl_account", "gl_name", "level1", "level2", "account_type", "functional_area"]


def _normalise(header) -> str:
    return str(header).strip().lower()


def _text(value) -> str:
    if value is None or pd.isna(value):
        return ""
    # account codes read as floats by pandas
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def auto_map_columns(columns, overrides: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """
    Match file headers to ledger fields.

    Returns field -> header for every field that could be mapped. Explicit
    `overrides` (field -> header) win over alias matching.
    """
    by_name = {_normalise(c): c for c in columns}
    mapping: Dict[str, str] = {}
    for field, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            header = by_name.get(_normalise(alias))
            if header is not None:
                mapping[field] = header
                break
    for field, header in (overrides or {}).items():
        if field not in COLUMN_ALIASES:
            raise ValueError(f"Unknown ledger field '{field}' in column map")
        if header not in columns:
            raise ValueError(f"Column '{header}' mapped to '{field}' is not in the file")
        mapping[field] = header
    return mapping


def read_table(path: Union[str, Path], sheet_name: Optional[Union[str, int]] = None) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        logger.error(f"{path} not found!")
        raise FileNotFoundError(f"{path} not found!")
    suffix = path.suffix.lower()
    if suffix in (".xlsx", ".xls"):
        return pd.read_excel(path, sheet_name=sheet_name if sheet_name not in (None, "") else 0)
    if suffix == ".csv":
        return pd.read_csv(path)
    raise ValueError(f"Unsupported file type '{suffix}', expected .xlsx, .xls or .csv")


def dataframe_to_ledger(
    df: pd.DataFrame,
    column_map: Optional[Mapping[str, str]] = None,
    amount_unit: Optional[str] = None,
) -> Ledger:
    """Map, clean and validate a raw trial-balance frame into a Ledger."""
    mapping = auto_map_columns(list(df.columns), column_map)
    missing = [field for field in REQUIRED_FIELDS if field not in mapping]
    if missing:
        raise ValueError(f"Required columns not mapped: {missing}. Found columns: {list(df.columns)}")
    logger.info(f"Column mapping: {mapping}")

    unit = amount_unit or settings.amount_unit
    rows: List[LedgerRow] = []
    for idx, record in df.iterrows():
        data = {}
        for field in TEXT_FIELDS:
            header = mapping.get(field)
            data[field] = _text(record[header]) if header is not None else ""
        if not data["level1"] and not data["level2"]:
            continue
        for field in AMOUNT_FIELDS:
            header = mapping.get(field)
            amount = clean_amount(record[header]) if header is not None else 0.0
            data[field] = to_lakhs(amount) if unit == "rupees" else amount
        for field in ("gl_account", "gl_name", "account_type", "functional_area"):
            data[field] = data[field] or None
        try:
            rows.append(LedgerRow(**data))
        except ValidationError as ve:
            logger.warning(f"Skipping row {idx}: {ve}")

    logger.info(f"Loaded trial balance with {len(rows)} of {len(df)} rows.")
    return Ledger(rows)


def load_trial_balance(
    path: Union[str, Path],
    sheet_name: Optional[Union[str, int]] = None,
    column_map: Optional[Mapping[str, str]] = None,
) -> Ledger:
    """
    Load a trial-balance export (.xlsx, .xls or .csv) into a Ledger.
    Raises FileNotFoundError if the file does not exist and ValueError if it
    cannot be read or the required columns cannot be mapped.
    """
    df = read_table(path, sheet_name)
    return dataframe_to_ledger(df, column_map)
