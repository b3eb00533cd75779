from .balance_sheet_template import BALANCE_SHEET_STRUCTURE, BalanceSheetTemplate

__all__ = ["BALANCE_SHEET_STRUCTURE", "BalanceSheetTemplate"]
