import logging
from typing import Dict, List, Mapping, Optional, Sequence

from .ledger import Ledger
from .models import FinancialNote, HierarchicalItem, PeriodTotals, TemplateItem
from .resolvers import ResolverRegistry

logger = logging.getLogger(__name__)


class EvaluationContext:
    """
    Cross-reference total table for one evaluation pass.

    Holds the values registered under template `id`s so later `formula` rows can
    read them. Create a new context for every pass; never share one between trees.
    """

    def __init__(self):
        self.totals: Dict[str, PeriodTotals] = {}

    def register(self, item_id: str, current: Optional[float], previous: Optional[float]) -> None:
        if item_id in self.totals:
            logger.debug(f"Overwriting registered total '{item_id}'")
        self.totals[item_id] = PeriodTotals(
            current=current if current is not None else 0.0,
            previous=previous if previous is not None else 0.0,
        )

    def lookup(self, item_id: str) -> Optional[PeriodTotals]:
        return self.totals.get(item_id)

    def __contains__(self, item_id: str) -> bool:
        return item_id in self.totals


class StatementEvaluator:
    """
    Populates a statement template from the ledger and the computed notes.

    Each node resolves by the first rule that applies:
      1. a resolver registered for the node's key
      2. the node's keywords, summed through the ledger
      3. the sum of its resolved children (missing values count as 0)
      4. its formula over previously registered ids
      5. nothing, leaving both values as None (a HierarchicalItem passed in
         keeps whatever values it already carries)
    """

    def __init__(
        self,
        ledger: Ledger,
        notes: Optional[Mapping[int, FinancialNote]] = None,
        resolvers: Optional[ResolverRegistry] = None,
    ):
        self.ledger = ledger
        self.notes: Mapping[int, FinancialNote] = notes or {}
        self.resolvers = resolvers if resolvers is not None else ResolverRegistry()

    def evaluate(self, template: Sequence[TemplateItem]) -> List[HierarchicalItem]:
        """Evaluate a whole statement tree with a fresh total table."""
        context = EvaluationContext()
        return [self.process_node(node, context) for node in template]

    def process_node(self, node: TemplateItem, context: Optional[EvaluationContext] = None) -> HierarchicalItem:
        if context is None:
            context = EvaluationContext()

        children = None
        if node.children is not None:
            children = [self.process_node(child, context) for child in node.children]

        value_current, value_previous = self._resolve(node, children, context)

        if node.id:
            context.register(node.id, value_current, value_previous)

        data = node.model_dump(exclude={"children"})
        if isinstance(node, HierarchicalItem):
            data.pop("value_current", None)
            data.pop("value_previous", None)
        return HierarchicalItem(
            **data,
            value_current=value_current,
            value_previous=value_previous,
            children=children,
        )

    def _resolve(self, node, children, context):
        if node.key in self.resolvers:
            result = self.resolvers.resolve(node.key, self.notes, self.ledger)
            if result is None:
                logger.debug(f"Resolver for '{node.key}' found no value")
                return None, None
            return result.current, result.previous

        if node.keywords is not None:
            return (
                self.ledger.get_amount("current", node.keywords),
                self.ledger.get_amount("previous", node.keywords),
            )

        if children:
            return (
                sum(child.value_current or 0.0 for child in children),
                sum(child.value_previous or 0.0 for child in children),
            )

        if node.formula:
            left_id, op, right_id = node.formula
            left = context.lookup(left_id)
            right = context.lookup(right_id)
            if left is None or right is None:
                missing = [i for i, v in ((left_id, left), (right_id, right)) if v is None]
                logger.debug(f"Formula on '{node.key}' has unregistered operands {missing}")
                return None, None
            if op == "+":
                return left.current + right.current, left.previous + right.previous
            return left.current - right.current, left.previous - right.previous

        # an already-resolved item with no rule of its own keeps its values
        if isinstance(node, HierarchicalItem):
            return node.value_current, node.value_previous

        return None, None
