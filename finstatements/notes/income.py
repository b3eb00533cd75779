"""
Income statement disclosures: revenue, other income, earnings per share and the
provision movement schedule.
"""
import logging
from typing import Dict, List, Tuple

from ..ledger import Ledger
from ..models import FinancialNote, PeriodTotals, TableContent
from ..utils import format_currency
from .items import line, subtotal

logger = logging.getLogger(__name__)


def revenue_note(ledger: Ledger) -> FinancialNote:
    """
    Note 18: revenue from operations, disaggregated by type of goods or
    services, timing of recognition and geography, with contract balances and
    remaining performance obligations.
    """
    instrumentation = PeriodTotals(current=118472.29, previous=67930.95)
    spares = PeriodTotals(current=10855.38, previous=7644.11)
    construction = instrumentation + spares
    traded_goods = PeriodTotals(current=58074.91, previous=35641.39)
    products = traded_goods + construction

    amc_training = PeriodTotals(current=6870.43, previous=25309.68)
    it_support = PeriodTotals(current=10064.12, previous=5466.94)
    services = amc_training + it_support

    scrap = ledger.get_totals(["other operating revenue "], ["sale of scrap"]).absolute()
    total = products + services + scrap

    point_in_time = PeriodTotals(current=round(scrap.current + 92351.5, 2), previous=63719.72)
    over_time = PeriodTotals(current=111985.2, previous=78289.43)

    outside_india = PeriodTotals(current=42873.18, previous=32508.85)
    india = PeriodTotals(current=round(total.current - outside_india.current, 2), previous=109500.29)

    trade_receivables = ledger.get_totals(
        ["trade receivables"], ["trade receivables", "allowances for doubtful debts"]).absolute()
    contract_assets = ledger.get_totals(["other current financial assets"], ["unbilled receivable"]).absolute()
    contract_liabilities = (
        ledger.get_totals(["other current liabilities"], ["income received in advance (unearned revenue)"])
        + ledger.get_totals(["other current liabilities"], ["advances from customers"])
        + ledger.get_totals(["provisions- current"], ["provision for product support  (warranty)"])
    ).absolute()

    within_one_year = PeriodTotals(current=97323.14, previous=82011.28)
    beyond_one_year = PeriodTotals(current=51225.86, previous=37225.11)

    return FinancialNote(
        note_number=18,
        total_keys=["note18-disaggregate"],
        title="Revenue from Operations",
        subtitle="Disaggregated revenue information",
        total_current=total.current,
        total_previous=total.previous,
        footer=("The Company presented disaggregated revenue based on the type of goods or services provided to "
                "customers, the geographical region, and the timing of transfer of goods and services. The Company "
                "presented a reconciliation of the disaggregated revenue with the revenue information disclosed for "
                "each reportable segment. Refer note 30 for the detailed information."),
        content=[
            subtotal("note18-disaggregate", "Type of goods or services", total, [
                line("note18-sale-prod", "(a) Sale of Products (Refer Note (i) below)", products),
                line("note18-sale-serv", "(b) Sale of Services (Refer Note (ii) below)", services),
                line("note18-other-prod-serv", "", products + services),
                line("note18-other-rev", "(c) Other operating revenues (Refer Note (iii) below)", scrap),
            ]),
            subtotal("note18-sale-products-group", "Note (i) Sale of products comprises:", products, [
                subtotal("note18-construction", "Revenue from construction contracts", construction, [
                    line("note18-process", "Process control instrumentation systems", instrumentation),
                    line("note18-spares", "Spares and others", spares),
                ]),
                subtotal("note18-traded-goods", "Sale of traded goods", traded_goods, [
                    line("note18-products", "Products and Accessories", traded_goods),
                ]),
            ]),
            subtotal("note18-sale-services", "Note (ii) Sale of services comprises:", services, [
                line("note18-amc", "AMC, Training, etc.", amc_training),
                line("note18-it", "IT support services", it_support),
            ]),
            subtotal("note18-other-op", "Note (iii) Other operating revenue comprises:", scrap, [
                line("note18-scrap", "Sale of scrap", scrap),
            ]),
            subtotal("note18-timing", "Timing of revenue recognition", point_in_time + over_time, [
                line("note18-time-point", "Goods transferred at a point in time", point_in_time),
                line("note18-time-over", "Services transferred over time", over_time),
            ]),
            subtotal("note18-geo", "", india + outside_india, [
                line("note18-india", "India", india),
                line("note18-out-india", "Outside India", outside_india),
            ]),
            subtotal("note18-contract-balances", "18.1 Contract balances",
                     trade_receivables + contract_assets + contract_liabilities, [
                         line("contract-trade-receivables", "Trade receivables", trade_receivables),
                         line("contract-assets", "Contract assets", contract_assets),
                         line("contract-liabilities", "Contract liabilities", contract_liabilities),
                     ]),
            subtotal("note18-performance-obligation", "18.2 Performance obligation",
                     within_one_year + beyond_one_year, [
                         line("performance-within-1y", "Within one year", within_one_year),
                         line("performance-more-1y", "More than one year", beyond_one_year),
                     ]),
        ],
    )


def other_income_note(ledger: Ledger) -> FinancialNote:
    """Note 19: other income. Income is credited in the ledger, so ledger sums are negated."""
    group = ["other income"]
    interest_bank = -ledger.get_totals(group, ["interest income"])
    interest_other = -ledger.get_totals(group, ["interest from financial assets at amortised cost"])
    interest = interest_bank + interest_other

    reimbursements = PeriodTotals(current=8346.09, previous=87.71)
    bond_recoveries = PeriodTotals(current=0.0, previous=4.46)
    insurance_refund = PeriodTotals(current=0.0, previous=2.21)
    others = PeriodTotals(
        current=-ledger.get_amount("current", group, ["other non-operating income "]) - reimbursements.current,
        previous=33.08,
    )
    misc = reimbursements + bond_recoveries + insurance_refund + others
    total = interest + misc

    return FinancialNote(
        note_number=19,
        total_keys=["note19-summary"],
        title="Other income",
        total_current=total.current,
        total_previous=total.previous,
        content=[
            subtotal("note19-summary", "Note 19 Other income", total, [
                line("note19-interest", "(a) Interest income (Refer Note (i) below)", interest),
                line("note19-other", "(b) Other non-operating income: Miscellaneous Income (Refer Note (ii) below)",
                     misc),
            ]),
            subtotal("note19-interest-breakup",
                     "Note (i) Interest income on financial assets at amortised cost comprises:", interest, [
                         line("note19-bank", "-Interest income from bank on deposits", interest_bank),
                         line("note19-other-interest", "Interest income on other financial assets", interest_other),
                     ]),
            subtotal("note19-misc-breakup", "Note (ii) Other non-operating income comprises:", misc, [
                line("note19-reimb", "Reimbursements from YHQ", reimbursements),
                line("note19-bond", "Bond Recoveries", bond_recoveries),
                line("note19-insurance", "Insurance Refund", insurance_refund),
                line("note19-others", "Others", others),
            ]),
        ],
    )


def earnings_per_share_note(ledger: Ledger) -> FinancialNote:
    """Note 32: basic and diluted EPS. Profit is in lakhs, EPS in rupees."""
    net_profit = PeriodTotals(current=22560.10, previous=7458.01)
    weighted_shares = 8505469
    face_value = 10.0
    eps = PeriodTotals(
        current=round(net_profit.current * 1e5 / weighted_shares, 2),
        previous=round(net_profit.previous * 1e5 / weighted_shares, 2),
    )

    return FinancialNote(
        note_number=32,
        total_keys=["note32-eps"],
        title="Earnings per share",
        subtitle="Basic and Diluted",
        total_current=eps.current,
        total_previous=eps.previous,
        content=[
            line("note32-netprofit", "Net profit for the year", net_profit),
            line("note32-shares", "Weighted average number of equity shares", (weighted_shares, weighted_shares)),
            line("note32-face", "Par value per share (in Rs.)", (face_value, face_value)),
            line("note32-eps", "Earnings per share - basic and diluted (in Rs.)", eps),
        ],
    )


MOVEMENT_COLUMNS = ("opening", "additions", "utilisation", "closing")

# (label, current-year movement, previous-year movement)
PROVISION_MOVEMENTS: List[Tuple[str, Dict[str, float], Dict[str, float]]] = [
    ("Provision for product support (Warranty)",
     {"opening": 484.96, "additions": 60.17, "utilisation": 30.60, "closing": 514.53},
     {"opening": 547.93, "additions": 48.73, "utilisation": 111.70, "closing": 484.96}),
    ("Provision for estimated losses on onerous contracts",
     {"opening": 1787.08, "additions": 2738.95, "utilisation": 1059.91, "closing": 3466.12},
     {"opening": 1390.82, "additions": 931.55, "utilisation": 535.30, "closing": 1787.08}),
    ("Provision for estimated losses on construction contracts",
     {"opening": 10294.67, "additions": 7538.28, "utilisation": 6272.86, "closing": 11560.09},
     {"opening": 11599.89, "additions": 5741.18, "utilisation": 7046.40, "closing": 10294.67}),
    ("Provision for service tax",
     {"opening": 0.0, "additions": 1575.47, "utilisation": 0.0, "closing": 1575.47},
     {"opening": 1575.47, "additions": 0.0, "utilisation": 0.0, "closing": 1575.47}),
]

# Audited totals of the schedule
PROVISION_TOTALS = PeriodTotals(current=17116.20, previous=14142.18)


def _movement_cell(current: float, previous: float) -> str:
    def fmt(value):
        return format_currency(value) if value else "-"
    return f"{fmt(current)}\n({fmt(previous)})"


def provision_details_note(ledger: Ledger) -> FinancialNote:
    """Note 33: movement in contractual provisions, previous year in brackets."""
    rows = [
        [label] + [_movement_cell(current[col], previous[col]) for col in MOVEMENT_COLUMNS]
        for label, current, previous in PROVISION_MOVEMENTS
    ]
    rows.append(["Total as on 31 March 2024", "14,142.18", "10,337.40", "7,363.37", "17,116.20"])
    rows.append(["Total as on 31 March 2023", "(15,114.12)", "(6,721.46)", "(7,693.40)", "(14,142.18)"])

    table = TableContent(
        headers=["", "As at 1 April 2023", "Additions", "Utilisation", "As at 31 March 2024"],
        rows=rows,
    )
    return FinancialNote(
        note_number=33,
        total_keys=[],
        title="Details of provisions",
        content=[table],
        footer=("The Company has made provision for various contractual obligations based on its assessment of the "
                "amount it estimates to incur to meet such obligations, details of which are given below:"),
        total_current=PROVISION_TOTALS.current,
        total_previous=PROVISION_TOTALS.previous,
    )
