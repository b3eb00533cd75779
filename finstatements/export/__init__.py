from .excel_writer import write_financial_statements_excel
from .pdf_writer import write_financial_statements_pdf

__all__ = ["write_financial_statements_excel", "write_financial_statements_pdf"]
