"""
Revolut Flexible Cash Funds to eDavki converter

Turns a Revolut Flexible Cash Funds statement into the Slovenian Doh-KDVP
(capital gains) and Doh-Obr (foreign interest income) XML documents, with
every amount converted to EUR at the ECB reference rate of its day.
"""

from .models import (
    OrderType,
    Order,
    InterestPayment,
    FundTransactions,
    ConversionRateRow,
    FundSummary,
    TaxYearFilterResult,
)
from .conversion_rates import ConversionRateTable, get_conversion_rate, load_conversion_rates
from .statement_loader import load_statement_rows
from .revolut_parser import parse_transactions
from .tax_year import filter_by_tax_year
from .report import calculate_fund_summary, format_number, generate_report, render_summary_table
from .tax_xml import (
    generate_all_tax_xmls,
    generate_full_doh_kdvp_xml,
    generate_tax_office_xml,
    is_valid_tax_number,
)
from .sample_data import (
    create_sample_conversion_rates,
    create_sample_statement_rows,
)

__version__ = "0.1.0"

__all__ = [
    "OrderType",
    "Order",
    "InterestPayment",
    "FundTransactions",
    "ConversionRateRow",
    "FundSummary",
    "TaxYearFilterResult",
    "ConversionRateTable",
    "get_conversion_rate",
    "load_conversion_rates",
    "load_statement_rows",
    "parse_transactions",
    "filter_by_tax_year",
    "calculate_fund_summary",
    "format_number",
    "generate_report",
    "render_summary_table",
    "generate_all_tax_xmls",
    "generate_full_doh_kdvp_xml",
    "generate_tax_office_xml",
    "is_valid_tax_number",
    "create_sample_conversion_rates",
    "create_sample_statement_rows",
]
