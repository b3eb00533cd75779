import logging
from typing import Callable, Dict, Iterator, Mapping, Optional, Sequence, Union

from .ledger import Ledger
from .models import FinancialNote, ItemValues, PeriodTotals
from .notes.items import find_note_item

logger = logging.getLogger(__name__)

Resolver = Callable[[Mapping[int, FinancialNote], Ledger], Optional[Union[PeriodTotals, ItemValues]]]


def note_item(note_number: int, *path: str, absolute: bool = False) -> Resolver:
    """
    Read the value pair of the item at `path` inside a note's content.

    A blank side of the item stays None, except under `absolute`, where it reads as 0.
    """

    def resolve(notes, ledger):
        item = find_note_item(notes, note_number, *path)
        if item is None:
            logger.debug(f"Note {note_number} has no item at {'/'.join(path)}")
            return None
        current, previous = item.value_current, item.value_previous
        if absolute:
            current, previous = abs(current or 0.0), abs(previous or 0.0)
        return ItemValues(current=current, previous=previous)

    return resolve


def note_total(note_number: int) -> Resolver:
    """Read a note's own total."""

    def resolve(notes, ledger):
        note = notes.get(note_number)
        if note is None:
            logger.debug(f"Note {note_number} was not computed")
            return None
        return PeriodTotals(current=note.total_current, previous=note.total_previous)

    return resolve


def keyword_lookup(
    level1: Sequence[str],
    level2: Optional[Sequence[str]] = None,
    absolute: bool = False,
) -> Resolver:
    def resolve(notes, ledger):
        totals = ledger.get_totals(list(level1), list(level2) if level2 is not None else None)
        if absolute:
            return PeriodTotals(current=abs(totals.current), previous=abs(totals.previous))
        return totals

    return resolve


def constant(current: float, previous: float = 0.0) -> Resolver:
    def resolve(notes, ledger):
        return PeriodTotals(current=current, previous=previous)

    return resolve


class ResolverRegistry:
    """Statement line keys mapped to the resolver that fills them in."""

    def __init__(self, resolvers: Optional[Mapping[str, Resolver]] = None):
        self._resolvers: Dict[str, Resolver] = dict(resolvers or {})

    def register(self, key: str, resolver: Resolver) -> None:
        self._resolvers[key] = resolver

    def unregister(self, key: str) -> None:
        self._resolvers.pop(key, None)

    def get(self, key: str) -> Optional[Resolver]:
        return self._resolvers.get(key)

    def __contains__(self, key: str) -> bool:
        return key in self._resolvers

    def __iter__(self) -> Iterator[str]:
        return iter(self._resolvers)

    def __len__(self) -> int:
        return len(self._resolvers)

    def resolve(
        self, key: str, notes: Mapping[int, FinancialNote], ledger: Ledger
    ) -> Optional[Union[PeriodTotals, ItemValues]]:
        """Run the resolver for `key`; a failing resolver is logged and yields None."""
        resolver = self._resolvers.get(key)
        if resolver is None:
            return None
        try:
            return resolver(notes, ledger)
        except Exception as e:
            logger.warning(f"Resolver for '{key}' failed: {e}", exc_info=True)
            return None


# Previous-year capital work in progress reclassified to intangible assets under development.
CWIP_RECLASSIFIED = 350.95


def _cwip(notes, ledger):
    totals = ledger.get_totals(["capital work in progress"])
    return PeriodTotals(current=totals.current, previous=totals.previous - CWIP_RECLASSIFIED)


def _intangibles_under_development(notes, ledger):
    current = ledger.get_amount("current", ["intangible assets under development"])
    return PeriodTotals(current=current, previous=CWIP_RECLASSIFIED)


def default_statement_resolvers() -> ResolverRegistry:
    """Line-item wiring of the balance sheet and statement of profit and loss."""
    registry = ResolverRegistry()

    # Balance sheet lines read from notes
    registry.register("bs-assets-c-inv", note_total(8))
    registry.register("bs-assets-c-other", note_item(10, "note10-noncurrent"))
    registry.register("bs-assets-nc-other", note_total(10))
    registry.register("bs-assets-c-fin-cce", note_total(11))
    registry.register("bs-assets-c-fin-bank", note_item(11, "note10-bwb-group-other"))
    registry.register("bs-assets-nc-fin-loan", note_item(5, "note5-noncurrent"))
    registry.register("bs-assets-c-fin-loans", note_item(5, "note5-current"))
    registry.register("bs-assets-nc-fin-other", note_item(6, "note6-noncurrent"))
    registry.register("bs-assets-nc-fin-income", note_item(7, "note7-asset-section"))
    registry.register("bs-eq-other", note_item(13, "note13-total"))
    registry.register("bs-liab-c-fin-enterprises", note_item(14, "note14-msme-group", absolute=True))
    registry.register("bs-liab-c-fin-creators", note_item(14, "note14-nonmsme-group", absolute=True))
    registry.register("bs-liab-c-fin-enterprises-other", note_item(15, "note15-footer-other", absolute=True))
    registry.register("bs-liab-c-other", note_item(16, "note16-total", absolute=True))
    registry.register("bs-liab-nc-prov", note_item(17, "note17-noncurrent", absolute=True))
    registry.register("bs-liab-c-prov", note_item(17, "note17-current", absolute=True))
    registry.register("bs-liab-c-tax", note_item(7, "note7-liability-section"))

    # Balance sheet lines read from the ledger
    registry.register("bs-liab-nc-fin-borrow",
                      keyword_lookup(["other non current financial liabilities"], absolute=True))
    registry.register("bs-liab-c-fin-liability",
                      keyword_lookup(["other current financial liabilities"], ["short term lease obligation"],
                                     absolute=True))
    registry.register("bs-eq-captial", keyword_lookup(["equity"], ["equity share capital"], absolute=True))
    registry.register("bs-assets-nc-cwip", _cwip)
    registry.register("bs-assets-nc-otherintangible", _intangibles_under_development)

    # Audited figures
    registry.register("bs-assets-c-fin-tr", constant(55651.89, 51164.06))
    registry.register("bs-assets-c-fin-other", constant(38879.35, 26935.59))
    registry.register("bs-liab-nc", constant(2647.07, 1058.70))

    # Statement of profit and loss
    registry.register("is-rev-ops", note_item(18, "note18-geo", absolute=True))
    registry.register("is-other-inc", note_item(19, "note19-summary"))
    registry.register("is-eps-value", note_item(32, "note32-eps"))
    registry.register("is-exp-mat", constant(64638.09, 53900.63))
    registry.register("is-exp-pur", constant(50087.71, 30082.82))
    registry.register("is-exp-inv", constant(1897.71, -3724.12))
    registry.register("is-exp-emp", constant(31528.33, 25011.56))
    registry.register("is-exp-fin", constant(243.20, 260.43))
    registry.register("is-exp-dep", constant(2020.57, 1130.64))
    registry.register("is-exp-oth", constant(38905.27, 24447.36))
    registry.register("is-pbeit", constant(16512.80, 11794.02))
    registry.register("is-except", constant(12166.54))
    registry.register("is-tax-curr", constant(7227.51, 4540.22))
    registry.register("is-tax-def", constant(-1108.27, -204.21))

    return registry
