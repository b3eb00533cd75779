import logging
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple

from .models import LedgerRow, PeriodTotals

logger = logging.getLogger(__name__)

PERIOD_FIELDS: Dict[str, str] = {
    "current": "amount_current",
    "previous": "amount_previous",
}


def _matches_any(description: str, keywords: Sequence[str]) -> bool:
    return any(str(kw).lower() in description for kw in keywords)


class Ledger:
    """
    Immutable list of mapped trial-balance rows with the keyword aggregator on top.
    """

    def __init__(self, rows: Iterable[LedgerRow] = ()):
        self.rows: Tuple[LedgerRow, ...] = tuple(rows)

    @classmethod
    def from_records(cls, records: Iterable[Dict[str, Any]]) -> "Ledger":
        """Build a ledger from plain dicts, normalising missing amounts to 0."""
        rows = []
        for record in records:
            data = dict(record)
            for field in PERIOD_FIELDS.values():
                if data.get(field) is None:
                    data[field] = 0.0
            rows.append(LedgerRow(**data))
        return cls(rows)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[LedgerRow]:
        return iter(self.rows)

    def get_amount(
        self,
        period: str,
        level1_keywords: Optional[Sequence[str]] = None,
        level2_keywords: Optional[Sequence[str]] = None,
    ) -> float:
        """
        Sum `period` amounts over rows whose level-1 description contains any of
        `level1_keywords` and, when a non-empty level-2 filter is given, whose
        level-2 description contains any of `level2_keywords`.

        Matching is a case-insensitive substring test. An empty level-2 list
        filters nothing, the same as passing None. Never raises: a missing or
        non-list level-1 filter or an unknown period yields 0.
        """
        if not isinstance(level1_keywords, (list, tuple)) or len(level1_keywords) == 0:
            return 0.0
        field = PERIOD_FIELDS.get(period)
        if field is None:
            logger.warning(f"Unknown period '{period}', expected one of {list(PERIOD_FIELDS)}")
            return 0.0
        if not isinstance(level2_keywords, (list, tuple)):
            level2_keywords = None

        total = 0.0
        for row in self.rows:
            if not _matches_any((row.level1 or "").lower(), level1_keywords):
                continue
            if level2_keywords and not _matches_any((row.level2 or "").lower(), level2_keywords):
                continue
            total += getattr(row, field) or 0.0
        return total

    def get_totals(
        self,
        level1_keywords: Optional[Sequence[str]] = None,
        level2_keywords: Optional[Sequence[str]] = None,
    ) -> PeriodTotals:
        """Both periods of `get_amount` at once."""
        return PeriodTotals(
            current=self.get_amount("current", level1_keywords, level2_keywords),
            previous=self.get_amount("previous", level1_keywords, level2_keywords),
        )

    def accounts(self) -> List[str]:
        return sorted({row.gl_account for row in self.rows if row.gl_account})
