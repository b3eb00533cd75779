import logging
from pathlib import Path
from typing import List, Optional, Sequence, Set, Union
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.platypus import PageBreak, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from ..bs.balance_sheet_template import BalanceSheetTemplate
from ..models import AccountingPolicy, FinancialData, FinancialNote, HierarchicalItem, TableContent
from ..pnl.profit_loss_template import ProfitLossTemplate
from ..settings import settings
from ..statement_template import StatementHeader
from ..utils import format_currency
from .excel_writer import CASH_FLOW_HEADER, create_output_folder

logger = logging.getLogger(__name__)

GRID_COLOR = colors.HexColor("#cccccc")
TOTAL_BACKGROUND = colors.HexColor("#f0f0f0")


def note_anchor(note: Union[int, str]) -> str:
    return f"note-{note}"


class PdfStyles:
    def __init__(self):
        styles = getSampleStyleSheet()
        self.title = ParagraphStyle("fs-title", parent=styles["Title"], alignment=1, fontSize=16)
        self.heading = ParagraphStyle("fs-heading", parent=styles["Heading2"], fontSize=12)
        self.subtitle = ParagraphStyle("fs-subtitle", parent=styles["Italic"], fontSize=9, spaceAfter=6)
        self.normal = ParagraphStyle("fs-normal", parent=styles["Normal"], fontSize=8, leading=10)
        self.bold = ParagraphStyle("fs-bold", parent=self.normal, fontName="Helvetica-Bold")
        self.amount = ParagraphStyle("fs-amount", parent=self.normal, alignment=TA_RIGHT)
        self.amount_bold = ParagraphStyle("fs-amount-bold", parent=self.amount, fontName="Helvetica-Bold")
        self.footer = ParagraphStyle("fs-footer", parent=self.normal, fontSize=8, spaceBefore=10)


def _amount_cell(value: Optional[float], style: ParagraphStyle, link: Optional[str] = None) -> Paragraph:
    text = format_currency(value)
    if link and text:
        text = f'<link href="#{link}" color="blue">{text}</link>'
    return Paragraph(text, style)


def statement_table(header: StatementHeader, items: List[HierarchicalItem], styles: PdfStyles,
                    note_numbers: Set[str]) -> Table:
    """Particulars / Note / current / previous, with amounts linked to their note."""
    data = [[Paragraph(escape(h), styles.bold) for h in header.column_headers]]
    commands = [
        ("GRID", (0, 0), (-1, 0), 0.35, GRID_COLOR),
        ("BACKGROUND", (0, 0), (-1, 0), TOTAL_BACKGROUND),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
    ]

    def walk(nodes: List[HierarchicalItem], depth: int):
        for item in nodes:
            bold = item.is_subtotal or item.is_grand_total or depth == 0
            text_style = styles.bold if bold else styles.normal
            amount_style = styles.amount_bold if bold else styles.amount
            note = str(item.note) if item.note is not None else ""
            link = note_anchor(note) if note in note_numbers else None
            label = "&nbsp;" * (depth * 4) + escape(item.label)
            data.append([
                Paragraph(label, text_style),
                Paragraph(escape(note), text_style),
                _amount_cell(item.value_current, amount_style, link),
                _amount_cell(item.value_previous, amount_style, link),
            ])
            row = len(data) - 1
            if item.is_grand_total:
                commands.append(("LINEABOVE", (0, row), (-1, row), 1, colors.black))
                commands.append(("LINEBELOW", (0, row), (-1, row), 1.5, colors.black))
                commands.append(("BACKGROUND", (0, row), (-1, row), TOTAL_BACKGROUND))
            elif item.is_subtotal:
                commands.append(("LINEABOVE", (2, row), (-1, row), 0.5, colors.grey))
            if item.children:
                walk(item.children, depth + 1)

    walk(items, 0)
    table = Table(data, colWidths=[270, 45, 100, 100], repeatRows=1)
    table.setStyle(TableStyle(commands))
    return table


def _note_items_table(items: List[HierarchicalItem], styles: PdfStyles, column_headers: Sequence[str]) -> Table:
    data = [[Paragraph("Particulars", styles.bold)] + [Paragraph(escape(h), styles.bold) for h in column_headers]]
    commands = [("BACKGROUND", (0, 0), (-1, 0), TOTAL_BACKGROUND)]

    def walk(nodes: List[HierarchicalItem], depth: int):
        for item in nodes:
            is_total = item.is_subtotal or item.is_grand_total
            show_values = is_total or not item.children
            amount_style = styles.amount_bold if is_total else styles.amount
            data.append([
                Paragraph("&nbsp;" * (depth * 4) + escape(item.label), styles.bold if is_total else styles.normal),
                _amount_cell(item.value_current if show_values else None, amount_style),
                _amount_cell(item.value_previous if show_values else None, amount_style),
            ])
            row = len(data) - 1
            if item.is_grand_total:
                commands.append(("LINEABOVE", (1, row), (-1, row), 1, colors.black))
                commands.append(("LINEBELOW", (1, row), (-1, row), 1.5, colors.black))
            elif item.is_subtotal:
                commands.append(("LINEABOVE", (1, row), (-1, row), 0.5, colors.grey))
            if item.children:
                walk(item.children, depth + 1)

    walk(items, 0)
    table = Table(data, colWidths=[315, 100, 100])
    table.setStyle(TableStyle(commands))
    return table


def content_table(content: TableContent, styles: PdfStyles) -> Table:
    def cell(text: str, style: ParagraphStyle) -> Paragraph:
        return Paragraph(escape(text).replace("\n", "<br/>"), style)

    data = [[cell(h, styles.bold) for h in content.headers]]
    data += [[cell(v, styles.normal if i == 0 else styles.amount) for i, v in enumerate(row)] for row in content.rows]
    table = Table(data, repeatRows=1)
    table.setStyle(TableStyle([
        ("GRID", (0, 0), (-1, -1), 0.35, colors.grey),
        ("BACKGROUND", (0, 0), (-1, 0), TOTAL_BACKGROUND),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))
    return table


def note_story(note: FinancialNote, styles: PdfStyles, column_headers: Sequence[str]) -> list:
    story = [Paragraph(f'<a name="{note_anchor(note.note_number)}"/>Note {note.note_number}: {escape(note.title)}',
                       styles.heading)]
    if note.subtitle:
        story.append(Paragraph(escape(note.subtitle), styles.subtitle))

    pending: List[HierarchicalItem] = []
    for content in note.content:
        if isinstance(content, HierarchicalItem):
            pending.append(content)
            continue
        if pending:
            story.append(_note_items_table(pending, styles, column_headers))
            pending = []
        if isinstance(content, TableContent):
            story.append(content_table(content, styles))
        else:
            story.append(Paragraph(escape(content), styles.normal))
        story.append(Spacer(1, 6))
    if pending:
        story.append(_note_items_table(pending, styles, column_headers))

    if note.footer:
        story.append(Paragraph(escape(note.footer).replace("\n", "<br/>"), styles.footer))
    return story


def policies_story(policies: List[AccountingPolicy], styles: PdfStyles) -> list:
    story = [Paragraph("Material accounting policies", styles.title)]
    for policy in policies:
        story.append(Paragraph(escape(policy.title), styles.heading))
        for block in policy.text:
            if isinstance(block, TableContent):
                story.append(content_table(block, styles))
            else:
                story.append(Paragraph(escape(block), styles.normal))
            story.append(Spacer(1, 4))
    return story


def write_financial_statements_pdf(data: FinancialData, output_path: Union[str, Path],
                                   company_name: Optional[str] = None) -> Path:
    """Render statements, notes and policies to a paginated A4 PDF with internal note links."""
    output_path = Path(output_path)
    create_output_folder(output_path.parent)
    styles = PdfStyles()
    doc = SimpleDocTemplate(str(output_path), pagesize=A4, rightMargin=26, leftMargin=26, topMargin=26,
                            bottomMargin=26, title=company_name or "Financial Statements")

    bs_header = BalanceSheetTemplate().get_header()
    pnl_header = ProfitLossTemplate().get_header()
    note_numbers = {str(note.note_number) for note in data.notes}
    note_columns = [settings.current_period_label, settings.previous_period_label]

    story = []
    if company_name:
        story.append(Paragraph(escape(company_name), styles.title))
    for header, items in ((bs_header, data.balance_sheet), (pnl_header, data.income_statement),
                          (CASH_FLOW_HEADER, data.cash_flow)):
        story.append(Paragraph(escape(header.title), styles.heading))
        story.append(Paragraph(escape(header.currency_note), styles.subtitle))
        story.append(statement_table(header, items, styles, note_numbers))
        story.append(PageBreak())

    for note in sorted(data.notes, key=lambda n: n.note_number):
        story.extend(note_story(note, styles, note_columns))
        story.append(PageBreak())

    story.extend(policies_story(data.accounting_policies, styles))
    doc.build(story)
    logger.info(f"PDF file saved: {output_path}")
    return output_path
