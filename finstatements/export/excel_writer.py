import logging
import os
from pathlib import Path
from typing import List, Optional, Sequence, Union

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..bs.balance_sheet_template import BalanceSheetTemplate
from ..models import AccountingPolicy, FinancialData, FinancialNote, HierarchicalItem, TableContent
from ..pnl.profit_loss_template import ProfitLossTemplate
from ..settings import settings
from ..statement_template import StatementHeader

logger = logging.getLogger(__name__)

NUMBER_FORMAT = "#,##0.00;(#,##0.00)"
INDENT = "    "

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="366092", end_color="366092", fill_type="solid")
TOTAL_FILL = PatternFill(start_color="E0E0E0", end_color="E0E0E0", fill_type="solid")
LINK_COLOR = "0000FF"
THIN_BORDER = Border(left=Side(style="thin"), right=Side(style="thin"), top=Side(style="thin"),
                     bottom=Side(style="thin"))
RIGHT = Alignment(horizontal="right", vertical="center")
WRAP = Alignment(wrap_text=True, vertical="top")

CASH_FLOW_HEADER = StatementHeader(
    title="Statement of Cash Flows for the year ended 31 March 2024",
    sheet_name="Cash Flow",
    column_headers=["Particulars", "Note No.", "Year ended 31 March 2024", "Year ended 31 March 2023"],
)


def note_sheet_name(note: Union[int, str]) -> str:
    return f"Note {note}"


def create_output_folder(folder_path: Union[str, Path]) -> None:
    """Create output folder if it doesn't exist."""
    if not os.path.exists(folder_path):
        os.makedirs(folder_path)
        logger.info(f"Created folder: {folder_path}")


def _write_header_row(ws: Worksheet, row: int, headers: Sequence[str]) -> None:
    for col, text in enumerate(headers, 1):
        cell = ws.cell(row=row, column=col, value=text)
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = Alignment(horizontal="center", vertical="center", wrap_text=True)
        cell.border = THIN_BORDER


def add_statement_rows(workbook: Workbook, ws: Worksheet, items: List[HierarchicalItem], row: int,
                       depth: int = 0) -> int:
    """
    Write statement rows depth-first and return the next free row.

    Amounts of rows citing a note with its own sheet link to that sheet.
    """
    for item in items:
        is_total = item.is_subtotal or item.is_grand_total
        bold = is_total or depth == 0
        ws.cell(row=row, column=1, value=f"{INDENT * depth}{item.label}")
        ws.cell(row=row, column=2, value=str(item.note) if item.note is not None else "")

        target = note_sheet_name(item.note) if item.note is not None else None
        linked = target is not None and target in workbook.sheetnames
        for col, value in ((3, item.value_current), (4, item.value_previous)):
            cell = ws.cell(row=row, column=col, value=value)
            cell.number_format = NUMBER_FORMAT
            cell.alignment = RIGHT
            if linked:
                cell.hyperlink = f"#'{target}'!A1"
                cell.font = Font(color=LINK_COLOR, underline="single", bold=bold)
            else:
                cell.font = Font(bold=bold)
        ws.cell(row=row, column=1).font = Font(bold=bold)
        ws.cell(row=row, column=2).font = Font(bold=bold)

        if depth == 0 or item.is_grand_total:
            side = Side(style="medium" if item.is_grand_total else "thin")
            for col in range(1, 5):
                cell = ws.cell(row=row, column=col)
                cell.fill = TOTAL_FILL
                cell.border = Border(top=side, bottom=side)
        row += 1
        if item.children:
            row = add_statement_rows(workbook, ws, item.children, row, depth + 1)
    return row


def create_statement_sheet(workbook: Workbook, header: StatementHeader, items: List[HierarchicalItem],
                           company_name: str = "") -> Worksheet:
    ws = workbook.create_sheet(title=header.sheet_name)
    row = 1
    if company_name:
        ws.cell(row=row, column=1, value=company_name).font = Font(bold=True, size=14)
        row += 1
    ws.cell(row=row, column=1, value=header.title).font = Font(bold=True, size=12)
    ws.cell(row=row + 1, column=1, value=header.currency_note).font = Font(italic=True)
    row += 3
    _write_header_row(ws, row, header.column_headers)
    add_statement_rows(workbook, ws, items, row + 1)

    ws.column_dimensions["A"].width = 70
    ws.column_dimensions["B"].width = 10
    ws.column_dimensions["C"].width = 22
    ws.column_dimensions["D"].width = 22
    return ws


def _add_note_items(ws: Worksheet, items: List[HierarchicalItem], row: int, depth: int = 0) -> int:
    for item in items:
        is_total = item.is_subtotal or item.is_grand_total
        ws.cell(row=row, column=1, value=f"{INDENT * depth}{item.label}").font = Font(bold=is_total)
        if is_total or not item.children:
            for col, value in ((2, item.value_current), (3, item.value_previous)):
                cell = ws.cell(row=row, column=col, value=value)
                cell.number_format = NUMBER_FORMAT
                cell.alignment = RIGHT
                cell.font = Font(bold=is_total)
                if is_total:
                    cell.border = Border(top=Side(style="thin"),
                                         bottom=Side(style="double" if item.is_grand_total else None))
        row += 1
        if item.children:
            row = _add_note_items(ws, item.children, row, depth + 1)
    return row


def _add_table(ws: Worksheet, table: TableContent, row: int) -> int:
    _write_header_row(ws, row, table.headers)
    row += 1
    for values in table.rows:
        for col, value in enumerate(values, 1):
            cell = ws.cell(row=row, column=col, value=value)
            cell.border = THIN_BORDER
            cell.alignment = WRAP if col == 1 else Alignment(horizontal="right", vertical="top", wrap_text=True)
        row += 1
    return row + 1


def create_note_sheet(workbook: Workbook, note: FinancialNote, column_headers: Sequence[str]) -> Worksheet:
    """Create a properly formatted sheet for one note."""
    ws = workbook.create_sheet(title=note_sheet_name(note.note_number))
    ws.cell(row=1, column=1, value=f"{note.note_number}. {note.title}").font = Font(bold=True, size=14)
    row = 2
    if note.subtitle:
        ws.cell(row=row, column=1, value=note.subtitle).font = Font(italic=True)
        row += 1
    row += 1

    if any(isinstance(c, HierarchicalItem) for c in note.content):
        _write_header_row(ws, row, ["Particulars"] + list(column_headers[-2:]))
        row += 1
    for content in note.content:
        if isinstance(content, HierarchicalItem):
            row = _add_note_items(ws, [content], row)
        elif isinstance(content, TableContent):
            row = _add_table(ws, content, row + 1)
        else:
            ws.cell(row=row, column=1, value=content).alignment = WRAP
            row += 1

    if note.footer:
        row += 1
        cell = ws.cell(row=row, column=1, value=note.footer)
        cell.alignment = WRAP
        cell.font = Font(italic=True, size=9)

    ws.column_dimensions["A"].width = 70
    for col in range(2, 6):
        ws.column_dimensions[get_column_letter(col)].width = 22
    return ws


def create_policies_sheet(workbook: Workbook, policies: List[AccountingPolicy]) -> Worksheet:
    ws = workbook.create_sheet(title="Accounting Policies")
    row = 1
    for policy in policies:
        ws.cell(row=row, column=1, value=policy.title).font = Font(bold=True, size=12)
        row += 1
        for block in policy.text:
            if isinstance(block, TableContent):
                row = _add_table(ws, block, row)
            else:
                ws.cell(row=row, column=1, value=block).alignment = WRAP
                row += 1
        row += 1
    ws.column_dimensions["A"].width = 100
    ws.column_dimensions["B"].width = 25
    return ws


def write_financial_statements_excel(data: FinancialData, output_path: Union[str, Path],
                                     company_name: Optional[str] = None) -> Path:
    """
    Write notes, statements and policies to one workbook.

    Note sheets are created first so statement rows can link to them.
    """
    output_path = Path(output_path)
    create_output_folder(output_path.parent)

    workbook = Workbook()
    workbook.remove(workbook.active)

    bs_header = BalanceSheetTemplate().get_header()
    pnl_header = ProfitLossTemplate().get_header()
    note_columns = [settings.current_period_label, settings.previous_period_label]
    for note in sorted(data.notes, key=lambda n: n.note_number):
        create_note_sheet(workbook, note, note_columns)
    create_statement_sheet(workbook, bs_header, data.balance_sheet, company_name or "")
    create_statement_sheet(workbook, pnl_header, data.income_statement, company_name or "")
    create_statement_sheet(workbook, CASH_FLOW_HEADER, data.cash_flow, company_name or "")
    create_policies_sheet(workbook, data.accounting_policies)

    workbook.save(output_path)
    logger.info(f"Excel file saved: {output_path} ({len(workbook.sheetnames)} sheets)")
    return output_path
