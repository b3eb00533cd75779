"""
Equity and liability disclosures: other equity, trade payables, other financial
liabilities, other liabilities and provisions.
"""
import logging

from ..ledger import Ledger
from ..models import FinancialNote, PeriodTotals
from .items import grand_total, line, subtotal

logger = logging.getLogger(__name__)


def other_equity_note(ledger: Ledger) -> FinancialNote:
    """Note 13: other equity, from the audited reserve movements."""
    opening = PeriodTotals(current=31939.72, previous=24481.71)
    transferred = PeriodTotals(current=22560.10, previous=7458.01)
    dividends = PeriodTotals(current=3729.65, previous=0.0)
    closing = opening + transferred - dividends
    closing = PeriodTotals(current=round(closing.current, 2), previous=round(closing.previous, 2))
    oci = PeriodTotals(current=479.79, previous=577.54)
    general_reserve = PeriodTotals(current=11911.35, previous=11911.35)
    # rounding difference against the audited balance
    total = (closing + oci + general_reserve).shift(-0.01, -0.01)

    return FinancialNote(
        note_number=13,
        title="Other Equity",
        total_current=total.current,
        total_previous=total.previous,
        content=[
            subtotal("note13-retained", "a) Retained Earnings*", closing, [
                line("note13-opening", "Balance at the beginning of the year", opening),
                line("note13-profit", "Add: Transferred from surplus in statement of profit and loss", transferred),
                line("note13-dividends", "Less: Dividends Paid", (-dividends.current, 0.0)),
                line("note13-closing", "Balance at the end of year", closing),
            ]),
            line("note13-oci", "b) Other Comprehensive Income#", oci),
            line("note13-reserve", "c) General reserve ^", general_reserve),
            grand_total("note13-total", "Total", total),
        ],
        footer=("* Retained earning comprises of the amounts that can be distributed as dividends to its equity "
                "shareholders.\n"
                "# Actuarial gain or losses on gratuity are recognised in other comprehensive income.\n"
                "^ This represents appropriation of profit by the company."),
    )


def trade_payables_note(ledger: Ledger) -> FinancialNote:
    """Note 14: trade payables split between MSME and other creditors."""
    group = ["trade payables"]
    msme = ledger.get_totals(group, ["total outstanding dues of micro enterprises and small enterprises"])
    non_msme = ledger.get_totals(group, [
        "dues to related parties",
        "total outstanding dues of creditors other than micro enterprises and small enterprises",
        "creditors other than micro",
    ])
    total = msme + non_msme

    return FinancialNote(
        note_number=14,
        title="Trade payables",
        total_current=total.current,
        total_previous=total.previous,
        footer=("a) Dues to related parties (Refer note 31b) in trade payable [other than MSME] Rs. 26,398.24 Lakhs "
                "[31 March 2023: 35,845.48 Lakhs].\n"
                "b) Trade payables include foreign currency payables amounting to Rs. 2,307.03 lakhs which are "
                "outstanding for a period greater than 6 months. The Company has informed about their status to the "
                "authorised dealer. The Company will obtain and ensure the requisite approvals wherever required "
                "before settling the overdue balances payable."),
        content=[
            subtotal("note14-msme-group",
                     "(i) Total outstanding dues of micro enterprises and small enterprises (MSME)", msme, [
                         line("note14-msme", "MSME dues", msme),
                     ]),
            subtotal("note14-nonmsme-group",
                     "(ii) Total outstanding dues of creditors other than micro enterprises and small enterprises",
                     non_msme, [
                         line("note14-nonmsme", "Non-MSME creditors", non_msme),
                     ]),
            grand_total("note14-total", "Total", total),
        ],
    )


def other_financial_liabilities_note(ledger: Ledger) -> FinancialNote:
    """Note 15."""
    nc_group = ["other non current financial liabilities"]
    c_group = ["other current financial liabilities"]

    lease_nc = ledger.get_totals(nc_group, ["long term  lease obligation"])
    unpaid_dividends = ledger.get_totals(c_group, ["unpaid dividends"])
    capital_reduction = ledger.get_totals(c_group, ["amount payable on capital reduction"])
    # the ledger labels the current-year rows in the plural
    lease_c = PeriodTotals(
        current=ledger.get_amount("current", c_group, ["short term lease obligations"]),
        previous=ledger.get_amount("previous", c_group, ["short term lease obligation"]),
    )
    payable_to_employees = ledger.get_totals(c_group, ["payable to employees"])

    current = unpaid_dividends + capital_reduction + payable_to_employees + lease_c
    other_current = current - lease_c
    total = lease_c + current

    return FinancialNote(
        note_number=15,
        total_keys=["note15-current"],
        title="Other financial liabilities",
        total_current=total.current,
        total_previous=total.previous,
        non_current_total=lease_nc,
        current_total=total,
        content=[
            subtotal("note15-noncurrent", "Non-current", lease_nc, [
                line("note15-nc-lease", "(a) Lease liabilities", lease_nc),
            ]),
            subtotal("note15-current", "Current", current, [
                line("note15-c-unpaid", "(a) Unpaid dividends", unpaid_dividends),
                line("note15-c-capred", "(b) Amount payable on capital reduction (Refer note 12 (f))",
                     capital_reduction),
                line("note15-c-lease", "(c) Lease liabilities", lease_c),
                line("note15-c-emp", "(d) Payable to employees", payable_to_employees),
            ]),
            line("note15-footer-lease", "Current portion of lease liabilities", lease_c, is_subtotal=True),
            line("note15-footer-other", "Other current financial liabilities", other_current, is_subtotal=True),
            grand_total("note15-total", "Total", current),
        ],
    )


def other_liabilities_note(ledger: Ledger) -> FinancialNote:
    """Note 16."""
    group = ["other current liabilities"]
    unearned = ledger.get_totals(group, ["income received in advance (unearned revenue)"])
    statutory = ledger.get_totals(group, ["statutory dues ( including pf, esi, gst (net),withholding taxes, etc.)"])
    advances = ledger.get_totals(group, ["advances from customers"])
    other_payables = statutory + advances
    total = unearned + other_payables

    return FinancialNote(
        note_number=16,
        title="Other liabilities",
        total_current=total.current,
        total_previous=total.previous,
        content=[
            subtotal("note16-current", "Current", total, [
                line("note16-unearned", "(a) Unearned revenue", unearned),
                subtotal("note16-other-payables", "(b) Other payables", other_payables, [
                    line("note16-statutory",
                         "(i) Statutory dues (Including PF, ESI, GST (Net), withholding taxes, etc.)", statutory),
                    line("note16-adv-cust", "(ii) Advances from customers", advances),
                ]),
            ]),
            grand_total("note16-total", "Total", total),
        ],
    )


def provisions_note(ledger: Ledger) -> FinancialNote:
    """Note 17: gratuity (non-current) and contractual provisions (current)."""
    gratuity = ledger.get_totals(["provisions- non current"], ["provision for gratuity"])

    group = ["provisions- current"]
    construction = ledger.get_totals(group, ["provision for construction contracts"])
    warranty = ledger.get_totals(group, ["provision for product support  (warranty)"])
    onerous = ledger.get_totals(group, ["provision for estimated losses on onerous contracts"])
    service_tax = ledger.get_totals(group, ["provision for service tax"])
    current = construction + warranty + onerous + service_tax

    return FinancialNote(
        note_number=17,
        total_keys=["note17-current"],
        title="Provisions",
        total_current=current.current,
        total_previous=current.previous,
        non_current_total=gratuity,
        current_total=current,
        content=[
            subtotal("note17-noncurrent", "Non-current", gratuity, [
                subtotal("note17-gratuity", "(a) Provision for employee benefits:", gratuity, [
                    line("note17-gratuity-net", "(i) Provision for gratuity (net) (Refer Note No. 28)", gratuity),
                ]),
            ]),
            subtotal("note17-current", "Current", current, [
                subtotal("note17-provisions-others", "(b) Provision - others: (Refer Note No. 33)", current, [
                    line("note17-const", "(i) Provision for construction contracts", construction),
                    line("note17-warranty", "(ii) Provision for product support (Warranty)", warranty),
                    line("note17-onerous", "(iii) Provision for estimated losses on onerous contracts", onerous),
                    line("note17-service-tax", "(iv) Provision for Service Tax", service_tax),
                ]),
            ]),
            grand_total("note17-total", "Total", current),
        ],
    )
