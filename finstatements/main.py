import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from dotenv import load_dotenv

from .adjustments import apply_adjustments, load_journal_entries
from .export.excel_writer import write_financial_statements_excel
from .export.pdf_writer import write_financial_statements_pdf
from .ledger_loader import load_trial_balance
from .pipeline import build_financial_data
from .settings import Settings

logger = logging.getLogger("finstatements")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="finstatements",
        description="Generate balance sheet, profit and loss, cash flow and notes from a trial balance export.",
    )
    parser.add_argument("trial_balance", nargs="?", help="Trial balance file (.xlsx, .xls or .csv)")
    parser.add_argument("--sheet", help="Worksheet name for Excel input")
    parser.add_argument("--adjustments", help="JSON file of journal adjustments to post before evaluation")
    parser.add_argument("--output-dir", help="Directory for generated files")
    parser.add_argument("--no-pdf", action="store_true", help="Skip the PDF output")
    parser.add_argument("--no-excel", action="store_true", help="Skip the Excel output")
    parser.add_argument("--json", action="store_true", help="Also write the evaluated statements as JSON")
    return parser.parse_args(argv)


def _find(items, key):
    for item in items:
        if item.key == key:
            return item
        found = _find(item.children or [], key)
        if found is not None:
            return found
    return None


def log_summary(data) -> None:
    def fmt(value):
        return "n/a" if value is None else f"₹{value:,.2f} Lakhs"

    assets = _find(data.balance_sheet, "bs-assets")
    eq_liab = _find(data.balance_sheet, "bs-eq-liab")
    profit = _find(data.income_statement, "is-pat")
    logger.info("=" * 60)
    logger.info("FINANCIAL STATEMENTS SUMMARY")
    logger.info("=" * 60)
    if assets is not None and eq_liab is not None:
        logger.info(f"Total assets:                 {fmt(assets.value_current)}")
        logger.info(f"Total equity and liabilities: {fmt(eq_liab.value_current)}")
        if assets.value_current is not None and eq_liab.value_current is not None:
            difference = assets.value_current - eq_liab.value_current
            if abs(difference) < 1:
                logger.info("Balance sheet balances")
            else:
                logger.warning(f"Balance sheet difference: {fmt(difference)}")
    if profit is not None:
        logger.info(f"Profit for the year:          {fmt(profit.value_current)}")
    logger.info(f"Notes generated:              {len(data.notes)}")


def main(argv: Optional[List[str]] = None) -> int:
    load_dotenv()
    config = Settings()
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    args = parse_args(argv)

    input_file = args.trial_balance or config.input_file
    output_dir = Path(args.output_dir or config.output_dir)

    try:
        ledger = load_trial_balance(input_file, sheet_name=args.sheet or config.sheet_name or None)
        if args.adjustments:
            ledger = apply_adjustments(ledger, load_journal_entries(args.adjustments))

        data = build_financial_data(ledger)

        if not args.no_excel:
            write_financial_statements_excel(data, output_dir / config.excel_file_name, config.company_name)
        if not args.no_pdf:
            write_financial_statements_pdf(data, output_dir / config.pdf_file_name, config.company_name)
        if args.json:
            output_dir.mkdir(parents=True, exist_ok=True)
            json_path = output_dir / "financial_statements.json"
            with open(json_path, "w", encoding="utf-8") as f:
                json.dump(data.model_dump(), f, indent=2, ensure_ascii=False)
            logger.info(f"JSON saved: {json_path}")
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Error: {e}")
        return 1

    log_summary(data)
    return 0


if __name__ == "__main__":
    sys.exit(main())
