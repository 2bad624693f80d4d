"""
Revolut Flexible Cash Funds tax converter.

Converts a Revolut consolidated statement (CSV or Excel) into the eDavki
Doh-KDVP and Doh-Obr XML documents plus a text report.

Main entry point for the application.
"""

import argparse
import sys
from datetime import date
from pathlib import Path

from .constants import (
    DEFAULT_FILE_ENCODING,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_RATES_PATH,
    REPORT_FILE_NAME,
)
from .conversion_rates import ConversionRateTable, load_conversion_rates
from .exceptions import InvalidTaxNumberError, StatementReadError
from .models import TaxYearFilterResult
from .report import generate_report, render_summary_table
from .revolut_parser import parse_transactions
from .statement_loader import load_statement_rows
from .tax_year import filter_by_tax_year
from .tax_xml import generate_all_tax_xmls, validate_tax_number, xml_file_name

EXIT_OK = 0
EXIT_READ_ERROR = 1
EXIT_INVALID_TAX_NUMBER = 2


def process_rows(rows, rates: ConversionRateTable, year: int) -> TaxYearFilterResult:
    """Parse statement rows and keep only the given tax year."""
    funds = parse_transactions(rows, rates)
    return filter_by_tax_year(funds, year)


def print_filter_disclosure(result: TaxYearFilterResult) -> None:
    """Tell the user what was left out because it belongs to another year."""
    if result.removed_orders or result.removed_interest_payments:
        print(
            f"Note: {result.removed_orders} orders and {result.removed_interest_payments} "
            f"interest payments from other years were left out of the {result.year} report."
        )


def write_report(result: TaxYearFilterResult, out_dir: Path) -> Path:
    """Write the text report and return its path."""
    out_dir.mkdir(parents=True, exist_ok=True)
    report_path = out_dir / REPORT_FILE_NAME.format(year=result.year)
    report_path.write_text(generate_report(result.funds), encoding=DEFAULT_FILE_ENCODING)
    return report_path


def write_tax_xmls(result: TaxYearFilterResult, tax_number: str, out_dir: Path) -> list[Path]:
    """
    Write the XML documents and return their paths.

    Raises:
        InvalidTaxNumberError: If the tax number is not exactly 8 digits
    """
    validate_tax_number(tax_number)

    out_dir.mkdir(parents=True, exist_ok=True)
    written = []
    for key, xml_content in generate_all_tax_xmls(result.funds, result.year, tax_number).items():
        xml_path = out_dir / xml_file_name(key, result.year)
        xml_path.write_text(xml_content, encoding=DEFAULT_FILE_ENCODING)
        written.append(xml_path)
    return written


def run(
    statement_path: Path,
    year: int,
    tax_number: str | None = None,
    rates_path: Path = DEFAULT_RATES_PATH,
    out_dir: Path = DEFAULT_OUTPUT_DIR,
) -> int:
    """Run the whole conversion and return a process exit code."""
    try:
        rows = load_statement_rows(statement_path)
    except StatementReadError as e:
        print(f"Error: {e}")
        print("Please check that the file is the Revolut statement exported as CSV or Excel.")
        return EXIT_READ_ERROR

    rates = load_conversion_rates(rates_path)
    result = process_rows(rows, rates, year)

    if not result.funds:
        print(f"No Flexible Cash Funds transactions found for {year} in {statement_path}.")
        return EXIT_OK

    print_filter_disclosure(result)
    print(render_summary_table(result.funds))

    report_path = write_report(result, out_dir)
    print(f"Report written to: {report_path}")

    if not tax_number:
        print("No tax number given (--tax-number). Skipping XML generation.")
        return EXIT_OK

    try:
        xml_paths = write_tax_xmls(result, tax_number, out_dir)
    except InvalidTaxNumberError as e:
        print(f"Error: {e}")
        return EXIT_INVALID_TAX_NUMBER

    for xml_path in xml_paths:
        print(f"XML written to: {xml_path}")
    return EXIT_OK


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="revolut-tax",
        description="Convert a Revolut Flexible Cash Funds statement into eDavki Doh-KDVP and Doh-Obr XML files.",
    )
    parser.add_argument("statement", type=Path, help="Revolut consolidated statement (CSV or XLSX)")
    parser.add_argument(
        "--year",
        type=int,
        default=date.today().year - 1,
        help="Tax year to report (default: last year)",
    )
    parser.add_argument("--tax-number", help="Slovenian tax number (8 digits), required for XML output")
    parser.add_argument(
        "--rates",
        type=Path,
        default=DEFAULT_RATES_PATH,
        help=f"Conversion rates JSON (default: {DEFAULT_RATES_PATH})",
    )
    parser.add_argument(
        "--out-dir",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Directory for generated files (default: {DEFAULT_OUTPUT_DIR})",
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Command line entry point."""
    args = build_parser().parse_args(argv)

    print("Revolut Flexible Cash Funds -> eDavki (Doh-KDVP, Doh-Obr)")
    print(f"Tax year: {args.year}")
    print()

    sys.exit(run(args.statement, args.year, args.tax_number, args.rates, args.out_dir))


if __name__ == "__main__":
    main()
