from .cash_flow_generator import CashFlowStatementGenerator, recalculate_cash_flow_totals

__all__ = ["CashFlowStatementGenerator", "recalculate_cash_flow_totals"]
