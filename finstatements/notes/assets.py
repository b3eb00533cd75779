"""
Asset-side disclosures: loans, other financial assets, income tax, inventories,
other assets and cash.
"""
import logging

from ..ledger import Ledger
from ..models import FinancialNote, PeriodTotals
from .items import grand_total, line, subtotal

logger = logging.getLogger(__name__)


def loans_note(ledger: Ledger) -> FinancialNote:
    """Note 5: loans to employees, split non-current / current."""
    non_current = PeriodTotals(current=3.79, previous=6.36)
    current = PeriodTotals(current=6.39, previous=2.73)

    return FinancialNote(
        note_number=5,
        total_keys=["note5-current"],
        title="Financial assets - Loans",
        total_current=current.current,
        total_previous=current.previous,
        non_current_total=non_current,
        current_total=current,
        content=[
            subtotal("note5-noncurrent", "Non-current", non_current, [
                line("note5-nc-emp", "Loans to employees", non_current),
            ]),
            subtotal("note5-current", "Current", current, [
                line("note5-c-emp", "Loans to employees", current),
            ]),
        ],
    )


def other_financial_assets_note(ledger: Ledger) -> FinancialNote:
    """Note 6."""
    # level-1 grouping of the non-current rows carries a trailing space in the source ledger
    nc_group = ["other non current financial assets "]
    c_group = ["other current financial assets"]

    leases_nc = ledger.get_totals(nc_group, ["net investment in lease- non current"])
    security_deposits = ledger.get_totals(nc_group, ["security deposits"])
    earnest_nc = ledger.get_totals(nc_group, ["earnest money deposits with customers"])
    other_receivable = ledger.get_totals(c_group, ["other recoverable from customers"])

    leases_c = ledger.get_totals(c_group, ["net investment in lease- current"])
    earnest_c = ledger.get_totals(c_group, ["earnest money deposits with customers"])
    unbilled = ledger.get_totals(c_group, ["unbilled receivable"])
    interest = ledger.get_totals(c_group, ["interest accrued but not due"])
    employee_benefit = ledger.get_totals(c_group, ["others : provision for compensated absences"])

    non_current = leases_nc + security_deposits + earnest_nc + other_receivable
    current = leases_c + earnest_c + unbilled + interest + employee_benefit

    return FinancialNote(
        note_number=6,
        total_keys=["note6-current"],
        title="Other financial assets",
        total_current=current.current,
        total_previous=current.previous,
        non_current_total=non_current,
        current_total=current,
        content=[
            subtotal("note6-noncurrent", "Non-current", non_current, [
                line("note6-nc-lease", "(a) Net investment in leases", leases_nc),
                line("note6-nc-sec", "(b) Security deposits", security_deposits),
                line("note6-nc-earnest", "(c) Earnest money deposits", earnest_nc),
                line("note6-nc-other", "(d) Other receivable", other_receivable),
            ]),
            subtotal("note6-current", "Current", current, [
                line("note6-c-lease", "(a) Net investment in leases", leases_c),
                line("note6-c-earnest", "(b) Earnest money deposits", earnest_c),
                line("note6-c-unbilled", "(c) Unbilled receivables", unbilled),
                line("note6-c-interest", "(d) Interest accrued", interest),
                line("note6-c-benefit", "(e) Employee compensated absences", employee_benefit),
            ]),
        ],
    )


def income_tax_note(ledger: Ledger) -> FinancialNote:
    """Note 7: income tax asset (net) and 7a income tax liabilities (net)."""
    paid_under_protest = PeriodTotals(current=837.77, previous=837.77)
    advance_tax_liab = PeriodTotals(current=7174.68, previous=7174.68)
    provision_liab = PeriodTotals(current=9868.96, previous=9868.96)
    advance_tax = PeriodTotals(current=46724.73, previous=38257.70)
    provision_asset = PeriodTotals(current=38604.49, previous=31376.99)

    net_asset = advance_tax - provision_asset
    net_liability = provision_liab - advance_tax_liab

    return FinancialNote(
        note_number=7,
        total_keys=["note7-asset-section"],
        title="Income Tax",
        total_current=net_asset.current,
        total_previous=net_asset.previous,
        content=[
            subtotal("note7-asset-section", "7. Income Tax Asset (Net)", net_asset, [
                line("note7-main", "Advance income tax (net of provisions) (refer Note (i) below)",
                     net_asset - paid_under_protest, children=[
                         line("note7-under-protest", "Income tax paid under protest", paid_under_protest),
                     ]),
                subtotal("note7-breakup", "Note (i)", net_asset, [
                    line("note7-adv-tax", "Advance tax and TDS", advance_tax),
                    line("note7-provision", "Less: Provision for tax", provision_asset),
                ]),
            ]),
            subtotal("note7-liability-section", "7a. Income Tax Liabilities (Net)", net_liability, [
                line("note7a-main", "Income tax provision (net of advance tax) (refer Note (ii) below)", net_liability),
                subtotal("note7a-breakup", "Note (ii)", net_liability, [
                    line("note7a-provision", "Provision for tax", provision_liab),
                    line("note7a-adv-tds", "Less: Advance tax and TDS", advance_tax_liab),
                ]),
            ]),
        ],
    )


def inventories_note(ledger: Ledger) -> FinancialNote:
    """
    Note 8: inventories at the lower of cost and net realisable value.

    Goods in transit are carved out of the raw material and stock-in-trade
    groupings and shown separately. The grand total adds the stock-in-trade
    goods in transit a second time, matching the published figure.
    """
    inventories = ["inventories"]
    git_raw = ledger.get_totals(inventories, ["goods-in-transit- raw materials"])
    git_stock = ledger.get_totals(inventories, ["goods-in-transit- (acquired for trading)"])
    raw_materials = ledger.get_totals(inventories, ["raw material"]) - git_raw
    stock_in_trade = ledger.get_totals(inventories, ["stock-in-trade"]) - git_stock
    work_in_progress = ledger.get_totals(inventories, ["work-in-progress"])

    raw_group = raw_materials + git_raw
    stock_group = stock_in_trade + git_stock
    total = raw_group + work_in_progress + stock_group + git_stock

    return FinancialNote(
        note_number=8,
        title="Inventories",
        subtitle="(At lower of cost and net realisable value)",
        total_current=total.current,
        total_previous=total.previous,
        footer=("As at March 31, 2024 ₹ 389.16 lakhs (as at March 31, 2023: ₹ 379.17 lakhs) was charged "
                "to statement of profit and loss for slow moving and obsolete inventories."),
        content=[
            subtotal("note8-raw-mat-group", "(a) Raw materials", raw_group, [
                line("note8-raw-mat", "Raw materials", raw_materials),
                line("note8-git-raw", "Goods-in-transit", git_raw),
            ]),
            line("note8-wip", "(b) Work-in-progress", work_in_progress),
            subtotal("note8-stock-group", "(c) Stock-in-trade (acquired for trading)", stock_group, [
                line("note8-git-stock", "Goods-in-transit", git_stock),
            ]),
            grand_total("note8-total", "Total", total),
        ],
    )


def other_assets_note(ledger: Ledger) -> FinancialNote:
    """Note 10."""
    nc_group = ["other non current assets"]
    c_group = ["other current assets"]

    nc_govt = ledger.get_totals(nc_group, ["balances with government authorities"])
    nc_prepaid = ledger.get_totals(nc_group, ["prepaid expenses"])

    govt = ledger.get_totals(c_group, ["balances with government authorities"])
    prepaid = ledger.get_totals(c_group, ["prepaid expenses"])
    # employee loans are reported under note 5
    employees = ledger.get_totals(c_group, ["advances to employees"]).shift(-6.39 - 3.79, -6.36 - 2.73)
    related = ledger.get_totals(c_group, ["advance to creditors-rp"])
    creditors = ledger.get_totals(c_group, ["advance to creditors"])

    current = govt + prepaid + employees + creditors + related
    total = current.shift(23.03 + 0.07, 151.42)

    return FinancialNote(
        note_number=10,
        total_keys=["note10-current"],
        title="Other assets",
        total_current=total.current,
        total_previous=total.previous,
        content=[
            subtotal("note10-noncurrent", "Non-current", nc_govt + nc_prepaid, [
                line("note10-nc-govt", "(a) Balances with government authorities", nc_govt),
                line("note10-nc-prepaid", "(b) Prepaid expenses", nc_prepaid),
            ]),
            subtotal("note10-current", "Current", current, [
                line("note10-c-govt", "(a) Balances with Government authorities", govt),
                line("note10-c-prepaid", "(b) Prepaid expenses", prepaid.shift(0.07)),
                line("note10-c-emp", "(c) Advances to employees", employees),
                subtotal("note10-c-cred", "(d) Advance to creditors", creditors + related, [
                    line("note10-c-cred-unrel", "(i) Advances paid to other parties", creditors.shift(23.03, 151.42)),
                    line("note10-c-cred-rel", "(ii) Advances paid to related parties (Refer note 31)", related),
                ]),
            ]),
            grand_total("note10-total", "Total", total),
        ],
    )


def cash_note(ledger: Ledger) -> FinancialNote:
    """
    Note 11: cash and cash equivalents.

    The note total covers bank balances only; other bank balances are carried
    to their own balance sheet line.
    """
    group = ["cash and cash equivalents"]
    cash_on_hand = ledger.get_totals(group, ["cash on hand"])
    current_accounts = ledger.get_totals(group, ["in current accounts"])
    eefc_accounts = ledger.get_totals(group, ["in eefc accounts"])
    short_deposits = ledger.get_totals(group, ["fixed deposits with maturity less than 3 months"])
    unpaid = ledger.get_totals(group, ["unpaid dividend account"])
    capital = ledger.get_totals(group, ["capital reduction "])
    long_deposits = ledger.get_totals(group, ["fixed deposits with maturity greater than 3 months"])

    earmarked = unpaid + capital
    other = earmarked + long_deposits
    bank = current_accounts + eefc_accounts + short_deposits

    return FinancialNote(
        note_number=11,
        total_keys=["note10-bwb-group"],
        title="Cash and cash equivalents",
        total_current=bank.current,
        total_previous=bank.previous,
        content=[
            line("note10-coh", "(a) Cash on hand", cash_on_hand),
            subtotal("note10-bwb-group", "(b) Balances with banks", bank, [
                line("note10-bwb-ca", "(i) In current accounts", current_accounts),
                line("note10-bwb-eefc", "(ii) In EEFC accounts", eefc_accounts),
                line("note10-bwb-dep", "(iii) In deposit accounts (original maturity of 3 months or less)",
                     short_deposits),
            ]),
            subtotal("note10-bwb-group-other", "(c) Other Bank Balances", other, [
                subtotal("note10-bwb", "(i) In earmarked Accounts", earmarked, [
                    line("note10-bwb-unpaid", "- Unpaid dividend account (Refer note 12 (f))", unpaid),
                    line("note10-bwb-capital", "- Capital Reduction", capital),
                ]),
                line("note10-bwb-deposit",
                     "(ii) In deposit accounts (original maturity of more than 3 months but less than 12 months)",
                     long_deposits),
            ]),
        ],
    )
