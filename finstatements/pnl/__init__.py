from .profit_loss_template import INCOME_STATEMENT_STRUCTURE, ProfitLossTemplate

__all__ = ["INCOME_STATEMENT_STRUCTURE", "ProfitLossTemplate"]
