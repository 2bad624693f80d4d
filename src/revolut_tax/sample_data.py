"""
Sample data for the demo and the tests.

A small Flexible Cash Funds statement with a EUR and a USD fund, and the
conversion rates it needs. The USD interest on Saturday 2024-03-09 has no
rate of its own and falls back to Friday's.
"""

from .conversion_rates import ConversionRateTable
from .models import ConversionRateRow


def create_sample_statement_rows() -> list[list[str]]:
    """Rows as they appear in a Revolut consolidated statement CSV export."""
    return [
        ["Summary for Flexible Cash Funds - EUR"],
        ["Description", "Amount"],
        ["Opening balance", "€0.00"],
        ["Closing balance", "€503.58"],

        ["Transactions for Flexible Cash Funds - EUR"],
        ["Date", "Description", "Value, EUR"],
        ["Dec 29, 2023", "Interest PAID EUR Class R IE000AZVL3K0", "€1.02"],
        ["Jan 15, 2024", "BUY IE000AZVL3K0", "-€1,000.00"],
        ["Feb 1, 2024", "Interest PAID EUR Class R IE000AZVL3K0", "€2.31"],
        ["Feb 1, 2024", "Service Fee Charged EUR Class R IE000AZVL3K0", "-€0.44"],
        ["Mar 1, 2024", "Interest PAID EUR Class R IE000AZVL3K0", "€2.15"],
        ["Jun 3, 2024", "SELL IE000AZVL3K0", "€500.00"],

        ["Transactions for Flexible Cash Funds - USD"],
        ["Date", "Description", "Value, USD"],
        ["Mar 4, 2024", "BUY IE00BDCSS001", "-$2,000.00"],
        ["Mar 9, 2024", "Interest PAID USD Class R IE00BDCSS001", "$3.40"],
        ["Apr 2, 2024", "Interest PAID USD Class R IE00BDCSS001", "$7.92"],
    ]


def create_sample_conversion_rates() -> ConversionRateTable:
    """ECB-style rates (USD per 1 EUR) for the sample statement dates."""
    return ConversionRateTable(
        [
            ConversionRateRow.from_dict({"date": "2024-04-02", "rates": {"USD": 1.0741}}),
            ConversionRateRow.from_dict({"date": "2024-03-08", "rates": {"USD": 1.0932}}),
            ConversionRateRow.from_dict({"date": "2024-03-04", "rates": {"USD": 1.0861}}),
        ]
    )
