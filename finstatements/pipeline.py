import logging
from typing import Dict, Iterable, Mapping, Optional, Union

from .bs.balance_sheet_template import BalanceSheetTemplate
from .cfs.cash_flow_generator import CashFlowStatementGenerator
from .evaluator import StatementEvaluator
from .ledger import Ledger
from .models import FinancialData, FinancialNote
from .notes.registry import NoteRegistry, default_registry
from .pnl.profit_loss_template import ProfitLossTemplate
from .policies import accounting_policies
from .resolvers import ResolverRegistry, default_statement_resolvers

logger = logging.getLogger(__name__)


def _as_note_map(notes: Union[Mapping[int, FinancialNote], Iterable[FinancialNote]]) -> Dict[int, FinancialNote]:
    if isinstance(notes, Mapping):
        return dict(notes)
    return {note.note_number: note for note in notes}


def build_financial_data(
    ledger: Ledger,
    registry: Optional[NoteRegistry] = None,
    edited_notes: Optional[Union[Mapping[int, FinancialNote], Iterable[FinancialNote]]] = None,
    resolvers: Optional[ResolverRegistry] = None,
) -> FinancialData:
    """
    Run one full evaluation pass over the ledger.

    Notes are computed first; `edited_notes` replace computed notes with the
    same number. Each statement is evaluated with its own total table, so the
    result depends only on the arguments.
    """
    registry = registry if registry is not None else default_registry()
    resolvers = resolvers if resolvers is not None else default_statement_resolvers()

    notes = registry.compute_all(ledger)
    if edited_notes:
        overrides = _as_note_map(edited_notes)
        logger.info(f"Applying edited notes: {sorted(overrides)}")
        notes.update(overrides)

    evaluator = StatementEvaluator(ledger, notes, resolvers)
    balance_sheet = evaluator.evaluate(BalanceSheetTemplate().get_template_structure())
    income_statement = evaluator.evaluate(ProfitLossTemplate().get_template_structure())
    cash_flow = CashFlowStatementGenerator(ledger).generate()

    return FinancialData(
        balance_sheet=balance_sheet,
        income_statement=income_statement,
        cash_flow=cash_flow,
        notes=sorted(notes.values(), key=lambda note: note.note_number),
        accounting_policies=accounting_policies(),
    )
