import logging
from typing import Dict, Iterable, List, Literal, Mapping, Sequence, Union

from ..models import FinancialNote, HierarchicalItem, NoteContent

logger = logging.getLogger(__name__)

ValueField = Literal["value_current", "value_previous"]
VALUE_FIELDS = ("value_current", "value_previous")
TOTAL_FIELDS = {"value_current": "total_current", "value_previous": "total_previous"}


def _item_chain(content: Iterable[NoteContent], key_path: Sequence[str]) -> List[HierarchicalItem]:
    """Items along `key_path`, outermost first; empty when any key is missing."""
    chain: List[HierarchicalItem] = []
    items = list(content)
    for key in key_path:
        match = next((i for i in items if isinstance(i, HierarchicalItem) and i.key == key), None)
        if match is None:
            return []
        chain.append(match)
        items = match.children or []
    return chain


def _counts_toward_total(note: FinancialNote, top_key: str) -> bool:
    if note.total_keys is None:
        return True
    return top_key in note.total_keys


def update_note_value(
    notes: Union[Mapping[int, FinancialNote], Iterable[FinancialNote]],
    note_number: int,
    key_path: Union[str, Sequence[str]],
    field: ValueField,
    value: float,
) -> Dict[int, FinancialNote]:
    """
    Overwrite one value of one note item and return the edited notes.

    `notes` is left untouched; the result is a deep copy keyed by note number.
    `key_path` is a single key or the list of keys leading to the item.

    The change (new value minus old) is carried to every valued item above the
    edited one, and to the note total and its grand-total rows when the item
    sits under one of the note's `total_keys`. Writing back an unchanged value
    therefore leaves every figure as it was.

    Raises KeyError for an unknown note or path and ValueError for an unknown
    field or an attempt to overwrite a subtotal or grand total.
    """
    if field not in VALUE_FIELDS:
        raise ValueError(f"Unknown value field '{field}', expected one of {VALUE_FIELDS}")
    if isinstance(key_path, str):
        key_path = [key_path]
    key_path = list(key_path)

    if isinstance(notes, Mapping):
        source: List[FinancialNote] = list(notes.values())
    else:
        source = list(notes)
    edited = {note.note_number: note.model_copy(deep=True) for note in source}

    note = edited.get(note_number)
    if note is None:
        raise KeyError(f"Note {note_number} not found")
    chain = _item_chain(note.content, key_path)
    if not chain:
        raise KeyError(f"Note {note_number} has no item at {'/'.join(key_path)}")
    item = chain[-1]
    if item.is_subtotal or item.is_grand_total:
        raise ValueError(f"Item '{item.key}' in note {note_number} is a computed total and cannot be edited")

    old = getattr(item, field)
    delta = float(value) - (old or 0.0)
    logger.info(f"Note {note_number} {'/'.join(key_path)}.{field}: {old} -> {value}")
    setattr(item, field, float(value))
    if delta == 0:
        return edited

    for parent in chain[:-1]:
        if getattr(parent, field) is not None:
            setattr(parent, field, getattr(parent, field) + delta)

    if _counts_toward_total(note, key_path[0]):
        total_field = TOTAL_FIELDS[field]
        setattr(note, total_field, getattr(note, total_field) + delta)
        for row in note.content:
            if isinstance(row, HierarchicalItem) and row.is_grand_total and getattr(row, field) is not None:
                setattr(row, field, getattr(row, field) + delta)
    return edited
