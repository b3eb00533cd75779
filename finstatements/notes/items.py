import logging
from typing import Iterable, List, Mapping, Optional, Sequence, Union

from ..models import FinancialNote, HierarchicalItem, NoteContent, PeriodTotals

logger = logging.getLogger(__name__)

Amount = Union[PeriodTotals, Sequence[float]]


def _pair(amount: Amount) -> PeriodTotals:
    if isinstance(amount, PeriodTotals):
        return amount
    current, previous = amount
    return PeriodTotals(current=current, previous=previous)


def line(
    key: str,
    label: str,
    amount: Optional[Amount] = None,
    children: Optional[List[HierarchicalItem]] = None,
    **flags,
) -> HierarchicalItem:
    """
    Build one note row.

    `amount` is a PeriodTotals or a (current, previous) pair; leaving it out gives
    a heading row with no values. Extra keyword arguments are passed through as
    item flags (is_subtotal, is_grand_total, footer, ...).
    """
    values = {}
    if amount is not None:
        pair = _pair(amount)
        values = {"value_current": pair.current, "value_previous": pair.previous}
    return HierarchicalItem(key=key, label=label, children=children, **values, **flags)


def subtotal(key: str, label: str, amount: Amount, children: List[HierarchicalItem], **flags) -> HierarchicalItem:
    return line(key, label, amount, children=children, is_subtotal=True, **flags)


def grand_total(key: str, label: str, amount: Amount) -> HierarchicalItem:
    return line(key, label, amount, is_grand_total=True)


def find_nested_item(items: Iterable[NoteContent], path: Sequence[str]) -> Optional[HierarchicalItem]:
    """
    Follow a key path through note content.

    The first key is matched against the top-level hierarchical items, each
    following key against the children of the previous match. Prose strings
    and tables are skipped. Returns None when any key along the path is missing.
    """
    if not path:
        return None
    head, rest = path[0], path[1:]
    for item in items or []:
        if isinstance(item, HierarchicalItem) and item.key == head:
            if not rest:
                return item
            return find_nested_item(item.children or [], rest)
    return None


def find_note_item(notes: Mapping[int, FinancialNote], note_number: int, *path: str) -> Optional[HierarchicalItem]:
    note = notes.get(note_number)
    if note is None:
        return None
    return find_nested_item(note.content, path)
