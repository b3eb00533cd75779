import logging
from typing import List

from ..models import TemplateItem
from ..statement_template import StatementHeader, StatementTemplate

logger = logging.getLogger(__name__)

T = TemplateItem

# Complete Balance Sheet structure (Schedule III, Ind AS)
BALANCE_SHEET_STRUCTURE: List[TemplateItem] = [
    T(key="bs-assets", label="ASSETS", is_grand_total=True, children=[
        T(key="bs-assets-nc", label="Non-current assets", is_subtotal=True, children=[
            T(key="bs-assets-nc-ppe", label="Property, plant and equipment", note=3,
              keywords=["property, plant and equipment"]),
            T(key="bs-assets-nc-rou", label="Right of use asset", note=4, keywords=["right of use assets"]),
            T(key="bs-assets-nc-cwip", label="Capital work-in-progress", keywords=["capital work in progress"]),
            T(key="bs-assets-nc-intangible", label="Other Intangible assets", note=4,
              keywords=["intangible assets"]),
            T(key="bs-assets-nc-otherintangible", label="Intangible assets under development",
              keywords=["intangible assets under development"]),
            T(key="bs-assets-nc-fin", label="Financial Assets", is_subtotal=True, children=[
                T(key="bs-assets-nc-fin-loan", label="Loans", note=5),
                T(key="bs-assets-nc-fin-other", label="Other financial assets", note=6),
            ]),
            T(key="bs-assets-nc-dta", label="Deferred tax assets (net)", note=24,
              keywords=["deferred tax assets (net)"]),
            T(key="bs-assets-nc-fin-income", label="Income Tax asset(net)", note=7),
            T(key="bs-assets-nc-other", label="Other non-current assets", note=10),
        ]),
        T(key="bs-assets-c", label="Current assets", is_subtotal=True, children=[
            T(key="bs-assets-c-inv", label="Inventories", note=8),
            T(key="bs-assets-c-fin", label="Financial Assets", is_subtotal=True, children=[
                T(key="bs-assets-c-fin-tr", label="Trade receivables", note=9, keywords=["Trade receivables"]),
                T(key="bs-assets-c-fin-cce", label="Cash and cash equivalents", note=11),
                T(key="bs-assets-c-fin-bank", label="Bank balances other than above", note=11),
                T(key="bs-assets-c-fin-loans", label="Loans", note=5),
                T(key="bs-assets-c-fin-other", label="Other financial assets", note=6),
            ]),
            T(key="bs-assets-c-other", label="Other current assets", note=10),
        ]),
    ]),
    # children always win over the formula; it only documents the identity
    T(key="bs-eq-liab", label="EQUITY AND LIABILITIES", is_grand_total=True, formula=("eq", "+", "liab-nc"),
      children=[
          T(key="bs-eq", label="Equity", is_subtotal=True, children=[
              T(key="bs-eq-captial", label="Equity share capital", note=12, keywords=["equity"]),
              T(key="bs-eq-other", label="Other equity", note=13),
          ]),
          T(key="bs-liab-nc", label="Non-current liabilities", is_subtotal=True, children=[
              T(key="bs-liab-nc-fin", label="Financial Liabilities", is_subtotal=True, children=[
                  T(key="bs-liab-nc-fin-borrow", label="Lease Liabilities", note=25,
                    keywords=["other non current financial liabilities"]),
              ]),
              T(key="bs-liab-nc-prov", label="Provisions", note=17),
          ]),
          T(key="bs-liab-c", label="Current liabilities", is_subtotal=True, children=[
              T(key="bs-liab-c-fin", label="Financial Liabilities", is_subtotal=True, children=[
                  T(key="bs-liab-c-fin-liability", label="Lease Liabilities", note=29,
                    keywords=["other current financial liabilities"]),
                  T(key="bs-liab-c-fin-tp", label="Trade payables", is_subtotal=True, children=[
                      T(key="bs-liab-c-fin-enterprises",
                        label="Total outstanding dues of micro enterprises and small enterprises", note=14),
                      T(key="bs-liab-c-fin-creators",
                        label="Total outstanding dues of creditors other than micro enterprises and small "
                              "enterprises", note=14),
                      T(key="bs-liab-c-fin-enterprises-other", label="Other Financial liabilities", note=15),
                  ]),
              ]),
              T(key="bs-liab-c-other", label="Other current liabilities", note=16),
              T(key="bs-liab-c-prov", label="Provisions", note=17),
              T(key="bs-liab-c-tax", label="Income tax liabilities (net)", note=7),
          ]),
      ]),
]


class BalanceSheetTemplate(StatementTemplate):
    """
    Provides the structure and display header for the Balance Sheet.
    """

    template_structure = BALANCE_SHEET_STRUCTURE
    header = StatementHeader(
        title="Balance Sheet as at 31 March 2024",
        sheet_name="Balance Sheet",
        column_headers=["Particulars", "Note No.", "As at 31 March 2024", "As at 31 March 2023"],
    )
