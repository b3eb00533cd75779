import logging
from typing import Callable, Dict, Iterator, Optional

from ..ledger import Ledger
from ..models import FinancialNote
from . import assets, equity_liabilities, income

logger = logging.getLogger(__name__)

NoteProvider = Callable[[Ledger], FinancialNote]


class NoteRegistry:
    """
    Note number -> provider function.

    Providers are pure functions of the ledger; `compute_all` runs each once
    per evaluation pass, in registration order.
    """

    def __init__(self):
        self._providers: Dict[int, NoteProvider] = {}

    def register(self, note_number: int, provider: NoteProvider) -> None:
        if note_number in self._providers:
            logger.debug(f"Replacing provider for note {note_number}")
        self._providers[note_number] = provider

    def get(self, note_number: int) -> Optional[NoteProvider]:
        return self._providers.get(note_number)

    def __contains__(self, note_number: int) -> bool:
        return note_number in self._providers

    def __iter__(self) -> Iterator[int]:
        return iter(self._providers)

    def __len__(self) -> int:
        return len(self._providers)

    def compute(self, note_number: int, ledger: Ledger) -> Optional[FinancialNote]:
        provider = self._providers.get(note_number)
        if provider is None:
            return None
        try:
            return provider(ledger)
        except Exception as e:
            # the note is left out of this pass
            logger.error(f"Failed to compute note {note_number}: {e}", exc_info=True)
            return None

    def compute_all(self, ledger: Ledger) -> Dict[int, FinancialNote]:
        notes: Dict[int, FinancialNote] = {}
        for note_number in self._providers:
            note = self.compute(note_number, ledger)
            if note is not None:
                notes[note_number] = note
        logger.info(f"Computed {len(notes)} of {len(self._providers)} notes")
        return notes


def default_registry() -> NoteRegistry:
    registry = NoteRegistry()
    registry.register(5, assets.loans_note)
    registry.register(6, assets.other_financial_assets_note)
    registry.register(7, assets.income_tax_note)
    registry.register(8, assets.inventories_note)
    registry.register(10, assets.other_assets_note)
    registry.register(11, assets.cash_note)
    registry.register(13, equity_liabilities.other_equity_note)
    registry.register(14, equity_liabilities.trade_payables_note)
    registry.register(15, equity_liabilities.other_financial_liabilities_note)
    registry.register(16, equity_liabilities.other_liabilities_note)
    registry.register(17, equity_liabilities.provisions_note)
    registry.register(18, income.revenue_note)
    registry.register(19, income.other_income_note)
    registry.register(32, income.earnings_per_share_note)
    registry.register(33, income.provision_details_note)
    return registry
