import json
import logging
from pathlib import Path
from typing import Dict, Iterable, List, Literal, Union

from pydantic import BaseModel, Field, ValidationError, field_validator

from .ledger import PERIOD_FIELDS, Ledger

logger = logging.getLogger(__name__)


class JournalEntry(BaseModel):
    """A manual adjustment against one G/L account, per period."""
    gl_account: str
    transaction_type: Literal["Debit", "Credit"] = "Debit"
    amounts: Dict[Literal["current", "previous"], float] = Field(default_factory=dict)

    @field_validator("gl_account", mode="before")
    @classmethod
    def _account_as_text(cls, value):
        return str(value).strip()

    def signed_amount(self, period: str) -> float:
        amount = self.amounts.get(period, 0.0)
        return amount if self.transaction_type == "Debit" else -amount


def apply_adjustments(ledger: Ledger, entries: Iterable[JournalEntry]) -> Ledger:
    """
    Post journal entries onto the ledger and return the adjusted copy.

    Debits add to and credits subtract from every row carrying the entry's
    G/L account. Entries for unknown accounts are logged and skipped.
    """
    rows = list(ledger.rows)
    for entry in entries:
        matched = [i for i, row in enumerate(rows) if row.gl_account == entry.gl_account]
        if not matched:
            logger.warning(f"No ledger row for G/L account {entry.gl_account}; adjustment skipped")
            continue
        for i in matched:
            row = rows[i]
            update = {}
            for period, field in PERIOD_FIELDS.items():
                update[field] = getattr(row, field) + entry.signed_amount(period)
            rows[i] = row.model_copy(update=update)
        logger.info(f"Applied {entry.transaction_type} to {entry.gl_account} ({len(matched)} rows)")
    return Ledger(rows)


def load_journal_entries(path: Union[str, Path]) -> List[JournalEntry]:
    """
    Load journal entries from a JSON list (or an object with an "entries" list).
    Raises FileNotFoundError if the file does not exist and ValueError for an
    invalid entry.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"{path} not found!")
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    records = data.get("entries", []) if isinstance(data, dict) else data

    entries = []
    for record in records:
        try:
            entries.append(JournalEntry(**record))
        except ValidationError as ve:
            raise ValueError(f"Invalid journal entry {record}: {ve}") from ve
    logger.info(f"Loaded {len(entries)} journal entries from {path}")
    return entries
