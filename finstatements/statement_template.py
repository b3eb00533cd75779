import logging
from typing import Dict, Iterator, List, Optional, Set, Union

from pydantic import BaseModel

from .models import TemplateItem

logger = logging.getLogger(__name__)


class StatementHeader(BaseModel):
    title: str
    sheet_name: str
    currency_note: str = "(All amounts in ₹ lakhs, unless otherwise stated)"
    column_headers: List[str] = ["Particulars", "Note No.", "Current period", "Previous period"]


class StatementTemplate:
    """
    Structure and display header of one financial statement.

    Subclasses set `template_structure` (the line-item tree) and `header`.
    """

    template_structure: List[TemplateItem] = []
    header: StatementHeader

    def get_template_structure(self) -> List[TemplateItem]:
        """Return the complete template structure."""
        return list(self.template_structure)

    def get_header(self) -> StatementHeader:
        return self.header.model_copy()

    def iter_items(self) -> Iterator[TemplateItem]:
        """Depth-first walk over every line item, parents before children."""
        stack = list(reversed(self.template_structure))
        while stack:
            item = stack.pop()
            yield item
            if item.children:
                stack.extend(reversed(item.children))

    def find(self, key: str) -> Optional[TemplateItem]:
        for item in self.iter_items():
            if item.key == key:
                return item
        return None

    def note_references(self) -> Dict[str, Union[int, str]]:
        """Line key -> referenced note number, for every line that cites a note."""
        return {item.key: item.note for item in self.iter_items() if item.note is not None}

    def duplicate_keys(self) -> List[str]:
        seen: Set[str] = set()
        duplicates = []
        for item in self.iter_items():
            if item.key in seen:
                duplicates.append(item.key)
            seen.add(item.key)
        if duplicates:
            logger.warning(f"{type(self).__name__} has duplicate keys: {duplicates}")
        return duplicates
