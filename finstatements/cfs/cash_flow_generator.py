import logging
from typing import Dict, List, Optional

from ..evaluator import EvaluationContext
from ..ledger import Ledger
from ..models import HierarchicalItem, PeriodTotals

logger = logging.getLogger(__name__)

INCOME_KEYWORDS = ["revenue", "other income"]
EXPENSE_KEYWORDS = [
    "cost of material consumed",
    "purchase of traded goods",
    "changes in inventories",
    "employee benefits expense",
    "finance cost",
    "depreciation expense",
    "other expenses",
]

NET_CHANGE_KEY = "cf-net"
SECTION_IDS = ("cfOp", "cfInv", "cfFin")


class CashFlowStatementGenerator:
    """
    Builds the indirect-method cash flow statement from ledger keyword sums.

    Working capital, investing and financing movements are derived from the
    change between the two periods, so they are only available for the
    current year; their previous-year cells are 0.
    """

    def __init__(self, ledger: Ledger):
        self.ledger = ledger

    def amount(self, period: str, *keywords: str) -> float:
        return self.ledger.get_amount(period, list(keywords))

    def movement(self, *keywords: str) -> float:
        """Current minus previous balance for the given level-1 groupings."""
        return self.amount("current", *keywords) - self.amount("previous", *keywords)

    def calculate(self) -> Dict[str, PeriodTotals]:
        """All cash flow figures, keyed by line."""
        pbt = PeriodTotals(
            current=self.amount("current", *INCOME_KEYWORDS) - self.amount("current", *EXPENSE_KEYWORDS),
            previous=self.amount("previous", *INCOME_KEYWORDS) - self.amount("previous", *EXPENSE_KEYWORDS),
        )
        dep = self.ledger.get_totals(["depreciation"])
        fin_cost = self.ledger.get_totals(["finance cost"])
        tax = self.ledger.get_totals(["tax expense"])

        # an increase in an asset consumes cash, an increase in a liability releases it
        receivables = -self.movement("trade receivables")
        inventories = -self.movement("Inventories")
        payables = self.movement("trade payables")

        op_before_wc = pbt + dep + fin_cost
        cash_from_ops = op_before_wc.shift(receivables + inventories + payables)
        net_operating = cash_from_ops - tax

        capex = -(self.movement("property, plant", "intangible") + dep.current)
        equity = self.movement("equity") - (pbt.current - tax.current)
        debt = self.movement("other non current financial liabilities")
        net_financing = equity + debt - fin_cost.current
        net_change = net_operating.current + capex + net_financing

        return {
            "pbt": pbt,
            "dep": dep,
            "fin_cost": fin_cost,
            "tax": tax,
            "op_before_wc": op_before_wc,
            "receivables": PeriodTotals(current=receivables),
            "inventories": PeriodTotals(current=inventories),
            "payables": PeriodTotals(current=payables),
            "cash_from_ops": cash_from_ops,
            "net_operating": net_operating,
            "capex": PeriodTotals(current=capex),
            "equity": PeriodTotals(current=equity),
            "debt": PeriodTotals(current=debt),
            "net_financing": PeriodTotals(current=net_financing),
            "net_change": PeriodTotals(current=net_change),
        }

    def generate(self) -> List[HierarchicalItem]:
        """Generate the complete cash flow statement tree."""
        v = self.calculate()
        logger.info(f"Cash flow net change (current): {v['net_change'].current:.2f}")

        def row(key, label, totals: Optional[PeriodTotals], children=None, **flags):
            values = {}
            if totals is not None:
                values = {"value_current": totals.current, "value_previous": totals.previous}
            if not children and not flags.get("is_subtotal"):
                flags.setdefault("is_editable", True)
            return HierarchicalItem(key=key, label=label, children=children, **values, **flags)

        return [
            # ==========================================
            # A. OPERATING ACTIVITIES
            # ==========================================
            row("cf-op", "A. Cash flow from operating activities", v["net_operating"], id="cfOp", is_subtotal=True,
                children=[
                    row("cf-pbt", "Profit before tax", v["pbt"], id="cfPbt"),
                    row("cf-op-adj", "Adjustments for:", None, id="cfAdj", children=[
                        row("cf-dep", "Depreciation and amortisation", v["dep"]),
                        row("cf-fin-cost", "Finance costs", v["fin_cost"]),
                    ]),
                    row("cf-op-wc", "Operating profit before working capital changes", v["op_before_wc"],
                        id="cfOpWc", is_subtotal=True, formula=("cfPbt", "+", "cfAdj")),
                    row("cf-wc-adj", "Changes in working capital:", None, id="cfWcAdj", children=[
                        row("cf-rec", "(Increase)/decrease in trade receivables", v["receivables"]),
                        row("cf-wc-inv", "(Increase)/decrease in inventories", v["inventories"]),
                        row("cf-pay", "Increase/(decrease) in trade payables", v["payables"]),
                    ]),
                    row("cf-cgo", "Cash generated from operations", v["cash_from_ops"], is_subtotal=True,
                        formula=("cfOpWc", "+", "cfWcAdj")),
                    row("cf-tax", "Income taxes paid", -v["tax"]),
                ]),
            # ==========================================
            # B. INVESTING ACTIVITIES
            # ==========================================
            row("cf-inv", "B. Cash flow from investing activities", v["capex"], id="cfInv", is_subtotal=True,
                children=[
                    row("cf-capex", "Purchase of property, plant and equipment", v["capex"]),
                ]),
            # ==========================================
            # C. FINANCING ACTIVITIES
            # ==========================================
            row("cf-fin", "C. Cash flow from financing activities", v["net_financing"], id="cfFin", is_subtotal=True,
                children=[
                    row("cf-equity", "Proceeds from issuance of share capital", v["equity"]),
                    row("cf-debt", "Proceeds from borrowings", v["debt"]),
                    row("cf-int", "Interest paid", -v["fin_cost"]),
                ]),
            row("cf-net", "Net increase/decrease in cash", v["net_change"], is_subtotal=True),
        ]


def recalculate_cash_flow_totals(items: List[HierarchicalItem]) -> List[HierarchicalItem]:
    """
    Re-derive totals after cash flow rows have been edited by hand.

    A parent row becomes the sum of its children, leaving out child rows that
    are themselves subtotals, unless the parent is flagged `is_editable`.
    Formula rows are recomputed when both operands are registered. The net
    change row is then reset to the sum of sections A, B and C for the
    current year. Its previous-year cell is kept, since investing and
    financing movements have no previous-year figures.
    Returns new items; the input is not modified.
    """
    context = EvaluationContext()

    def process(node: HierarchicalItem) -> HierarchicalItem:
        value_current = node.value_current or 0.0
        value_previous = node.value_previous or 0.0
        children = [process(child) for child in node.children] if node.children is not None else None

        if children and not node.is_editable:
            summed = [child for child in children if not child.is_subtotal]
            value_current = sum(child.value_current or 0.0 for child in summed)
            value_previous = sum(child.value_previous or 0.0 for child in summed)

        if node.formula:
            left_id, op, right_id = node.formula
            left, right = context.lookup(left_id), context.lookup(right_id)
            if left is not None and right is not None:
                result = left + right if op == "+" else left - right
                value_current, value_previous = result.current, result.previous

        if node.id:
            context.register(node.id, value_current, value_previous)

        return node.model_copy(update={
            "children": children,
            "value_current": value_current,
            "value_previous": value_previous,
        })

    processed = [process(item) for item in items]

    sections = [context.lookup(section_id) for section_id in SECTION_IDS]
    if any(section is None for section in sections):
        logger.debug("Cash flow sections missing, net change left as entered")
        return processed
    net_current = sum(section.current for section in sections)
    return [
        item.model_copy(update={"value_current": net_current}) if item.key == NET_CHANGE_KEY else item
        for item in processed
    ]
