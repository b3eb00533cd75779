from .adjustments import JournalEntry, apply_adjustments, load_journal_entries
from .evaluator import EvaluationContext, StatementEvaluator
from .ledger import Ledger
from .ledger_loader import load_trial_balance
from .models import FinancialData, FinancialNote, HierarchicalItem, LedgerRow, PeriodTotals, TemplateItem
from .notes import NoteRegistry, default_registry, update_note_value
from .pipeline import build_financial_data
from .resolvers import ResolverRegistry, default_statement_resolvers

__version__ = "0.1.0"

__all__ = [
    "EvaluationContext",
    "FinancialData",
    "FinancialNote",
    "HierarchicalItem",
    "JournalEntry",
    "Ledger",
    "LedgerRow",
    "NoteRegistry",
    "PeriodTotals",
    "ResolverRegistry",
    "StatementEvaluator",
    "TemplateItem",
    "apply_adjustments",
    "build_financial_data",
    "default_registry",
    "default_statement_resolvers",
    "load_journal_entries",
    "load_trial_balance",
    "update_note_value",
]
