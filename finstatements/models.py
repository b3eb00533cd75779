from typing import Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, Field


class PeriodTotals(BaseModel):
    """A current / previous period value pair."""
    current: float = 0.0
    previous: float = 0.0

    def __add__(self, other: "PeriodTotals") -> "PeriodTotals":
        return PeriodTotals(current=self.current + other.current, previous=self.previous + other.previous)

    def __sub__(self, other: "PeriodTotals") -> "PeriodTotals":
        return PeriodTotals(current=self.current - other.current, previous=self.previous - other.previous)

    def __neg__(self) -> "PeriodTotals":
        return PeriodTotals(current=-self.current, previous=-self.previous)

    def shift(self, current: float = 0.0, previous: float = 0.0) -> "PeriodTotals":
        """Add fixed amounts to each period."""
        return PeriodTotals(current=self.current + current, previous=self.previous + previous)

    def absolute(self) -> "PeriodTotals":
        return PeriodTotals(current=abs(self.current), previous=abs(self.previous))


class ItemValues(BaseModel):
    """Values read off a note item; a side the note leaves blank stays None."""
    current: Optional[float] = None
    previous: Optional[float] = None


class LedgerRow(BaseModel):
    """One mapped trial-balance row."""
    level1: str = ""
    level2: str = ""
    amount_current: float = 0.0
    amount_previous: float = 0.0
    gl_account: Optional[str] = None
    gl_name: Optional[str] = None
    account_type: Optional[str] = None
    functional_area: Optional[str] = None


class TableContent(BaseModel):
    type: Literal["table"] = "table"
    headers: List[str]
    rows: List[List[str]]


class TemplateItem(BaseModel):
    """
    Static description of one statement line.

    `formula` references the registered `id` of two other lines, never their keys.
    """
    key: str
    label: str
    note: Optional[Union[int, str]] = None
    is_subtotal: bool = False
    is_grand_total: bool = False
    children: Optional[List["TemplateItem"]] = None
    keywords: Optional[List[str]] = None
    formula: Optional[Tuple[str, Literal["+", "-"], str]] = None
    id: Optional[str] = None


class HierarchicalItem(TemplateItem):
    """A line item with its computed values; `None` means deliberately not computed."""
    value_current: Optional[float] = None
    value_previous: Optional[float] = None
    footer: Optional[str] = None
    is_editable: bool = False
    children: Optional[List["HierarchicalItem"]] = None


NoteContent = Union[HierarchicalItem, TableContent, str]


class FinancialNote(BaseModel):
    note_number: int
    title: str
    subtitle: Optional[str] = None
    content: List[NoteContent] = Field(default_factory=list)
    footer: Optional[str] = None
    total_current: float = 0.0
    total_previous: float = 0.0
    non_current_total: Optional[PeriodTotals] = None
    current_total: Optional[PeriodTotals] = None
    # top-level content keys whose values make up the note total; None means every non-grand-total item
    total_keys: Optional[List[str]] = None


class AccountingPolicy(BaseModel):
    title: str
    text: List[Union[str, TableContent]] = Field(default_factory=list)


class FinancialData(BaseModel):
    balance_sheet: List[HierarchicalItem] = Field(default_factory=list)
    income_statement: List[HierarchicalItem] = Field(default_factory=list)
    cash_flow: List[HierarchicalItem] = Field(default_factory=list)
    notes: List[FinancialNote] = Field(default_factory=list)
    accounting_policies: List[AccountingPolicy] = Field(default_factory=list)

    def notes_by_number(self) -> Dict[int, FinancialNote]:
        return {note.note_number: note for note in self.notes}


TemplateItem.model_rebuild()
HierarchicalItem.model_rebuild()
