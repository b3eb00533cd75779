import logging
from typing import List

from ..models import TemplateItem
from ..statement_template import StatementHeader, StatementTemplate

logger = logging.getLogger(__name__)

T = TemplateItem

# Formula rows read ids registered by rows above them, so order matters here.
INCOME_STATEMENT_STRUCTURE: List[TemplateItem] = [
    T(key="is-income", label="INCOME", id="totalIncome", is_subtotal=True, children=[
        T(key="is-rev-ops", label="Revenue from operations", note=18),
        T(key="is-other-inc", label="Other income", note=19),
    ]),
    T(key="is-expenses", label="EXPENSES", id="totalExpenses", is_subtotal=True, children=[
        T(key="is-exp-mat", label="Cost of materials consumed", keywords=["cost of material consumed"], note="20a"),
        T(key="is-exp-pur", label="Purchase of traded goods", keywords=["purchase of traded goods"], note="20a"),
        T(key="is-exp-inv", label="Changes in inventories", keywords=["changes in inventories"], note="20a"),
        T(key="is-exp-emp", label="Employee benefits expense", keywords=["employee benefits expense"], note=21),
        T(key="is-exp-fin", label="Finance cost", keywords=["finance cost"], note=22),
        T(key="is-exp-dep", label="Depreciation and amortisation", keywords=["depreciation expense"], note=23),
        T(key="is-exp-oth", label="Other expenses", keywords=["other expenses"], note=24),
    ]),
    T(key="is-pbeit", label="PROFIT BEFORE EXCEPTIONAL ITEM & TAXES", id="pbeit", is_subtotal=True,
      formula=("totalIncome", "-", "totalExpenses")),
    T(key="is-except", label="Exceptional Income", id="exceptional", keywords=["exceptional items"], note=44),
    T(key="is-pbt", label="PROFIT BEFORE TAX", id="pbt", is_subtotal=True, formula=("pbeit", "+", "exceptional")),
    T(key="is-tax", label="TAX EXPENSE:", id="totalTax", is_subtotal=True, children=[
        T(key="is-tax-curr", label="Current tax", keywords=["tax expense"], note=34),
        T(key="is-tax-def", label="Deferred tax", keywords=["deferred tax"], note=34),
    ]),
    T(key="is-pat", label="PROFIT FOR THE YEAR", id="pat", is_grand_total=True, formula=("pbt", "-", "totalTax")),
    T(key="is-oci", label="Other comprehensive income", is_subtotal=True, children=[
        T(key="is-oci-remesure", label="i) Remeasurement on the defined benefit liabilities", note=28),
        T(key="is-oci-tax", label="ii) Income tax relating to items not to be reclassified to profit or loss",
          note=34),
        T(key="is-oci-total", label="Other comprehensive income for the year", is_subtotal=True),
    ]),
    # 'is-oci-total' is a key, not a registered id, so this row stays blank
    T(key="is-total-comprehensive", label="Total comprehensive income for the year", id="totalComprehensive",
      is_grand_total=True, formula=("pat", "+", "is-oci-total")),
    T(key="is-eps", label="Earnings per equity share", is_subtotal=True, children=[
        T(key="is-eps-value", label="- Basic and diluted (in Rs.)", note=32),
    ]),
]


class ProfitLossTemplate(StatementTemplate):
    """
    Provides the structure and display header for the Statement of Profit and Loss.
    """

    template_structure = INCOME_STATEMENT_STRUCTURE
    header = StatementHeader(
        title="Statement of Profit and Loss for the year ended 31 March 2024",
        sheet_name="Profit & Loss",
        column_headers=["Particulars", "Note No.", "Year ended 31 March 2024", "Year ended 31 March 2023"],
    )
