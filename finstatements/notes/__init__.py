from .editor import update_note_value
from .items import find_nested_item, find_note_item
from .registry import NoteRegistry, default_registry

__all__ = [
    "NoteRegistry",
    "default_registry",
    "find_nested_item",
    "find_note_item",
    "update_note_value",
]
