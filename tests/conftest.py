"""
Shared pytest fixtures for the converter tests.

Provides reusable statement rows, conversion rate tables and fund
builders so tests never need real statements or network access.
"""

import io
import zipfile
from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from revolut_tax.conversion_rates import ConversionRateTable
from revolut_tax.models import (
    ConversionRateRow,
    FundTransactions,
    InterestPayment,
    Order,
    OrderType,
)

# =============================================================================
# Statement rows
# =============================================================================


@pytest.fixture
def eur_round_trip_rows():
    """The smallest useful statement: one EUR transactions section."""
    return [
        ["Transactions for Flexible Cash Funds - EUR"],
        ["Date", "Description", "Amount"],
        ["2024-03-01", "BUY something", -100],
        ["2024-03-02", "Interest PAID", 1.5],
    ]


@pytest.fixture
def multi_section_rows():
    """
    A statement with summary and transaction sections for two currencies.

    USD appears first (summary), EUR transactions come next and the USD
    transactions section comes last, so USD must still be the first fund.
    """
    return [
        ["Summary for Flexible Cash Funds - USD"],
        ["Description", "Amount"],
        ["Opening balance", "$0.00"],
        ["Transactions for Flexible Cash Funds - EUR"],
        ["Date", "Description", "Value, EUR"],
        ["2024-03-01", "BUY IE000AZVL3K0", "-€1,000.00"],
        ["2024-03-02", "Interest PAID EUR Class R", "€0.12"],
        ["2024-03-02", "Service Fee Charged EUR Class R", "-€0.03"],
        ["Transactions for Flexible Cash Funds - USD"],
        ["Date", "Description", "Value, USD"],
        ["2024-03-04", "BUY IE00BDCSS001", "-$540.00"],
        ["2024-03-05", "Interest PAID USD Class R", "$1.08"],
        ["2024-03-06", "SELL IE00BDCSS001", "$100.00"],
    ]


# =============================================================================
# Conversion rates
# =============================================================================


@pytest.fixture
def usd_rates():
    """
    Rate table with gaps, deliberately not sorted.

    2024-03-02 and 2024-03-03 (weekend) have no row; 2024-03-05 has a row
    without USD; GBP is only known on 2024-02-28.
    """
    return ConversionRateTable(
        [
            ConversionRateRow(date="2024-03-04", rates={"USD": Decimal("1.10")}),
            ConversionRateRow(date="2024-02-28", rates={"USD": Decimal("1.05"), "GBP": Decimal("0.85")}),
            ConversionRateRow(date="2024-03-05", rates={"JPY": Decimal("162.50")}),
            ConversionRateRow(date="2024-03-01", rates={"USD": Decimal("1.08")}),
            ConversionRateRow(date="2024-03-06", rates={"USD": Decimal("1.09")}),
        ]
    )


@pytest.fixture
def empty_rates():
    return ConversionRateTable()


# =============================================================================
# Fund builders
# =============================================================================


@pytest.fixture
def make_order():
    """
    Factory for orders.

    Usage:
        order = make_order(OrderType.BUY, date(2024, 3, 1), "100", rate="1.08")
    """

    def _factory(order_type, order_date, quantity, currency="EUR", rate="1"):
        return Order(
            type=order_type,
            date=order_date,
            quantity=Decimal(quantity),
            price_per_unit=Decimal("1"),
            currency=currency,
            price_per_unit_in_eur=Decimal("1") / Decimal(rate),
        )

    return _factory


@pytest.fixture
def make_interest():
    """Factory for interest payments; rate=None leaves the EUR amount unset."""

    def _factory(payment_date, amount, currency="EUR", rate="1"):
        amount = Decimal(amount)
        return InterestPayment(
            date=payment_date,
            amount=amount,
            currency=currency,
            quantity_in_eur=None if rate is None else amount / Decimal(rate),
        )

    return _factory


@pytest.fixture
def mixed_year_funds(make_order, make_interest):
    """A EUR fund with activity in 2023 and 2024 and a USD fund only active in 2023."""
    return [
        FundTransactions(
            currency="EUR",
            isin="IE000AZVL3K0",
            orders=[
                make_order(OrderType.BUY, date(2023, 12, 20), "500"),
                make_order(OrderType.BUY, date(2024, 1, 15), "1000"),
                make_order(OrderType.SELL, date(2024, 6, 3), "250"),
            ],
            interest_payments=[
                make_interest(date(2023, 12, 31), "0.50"),
                make_interest(date(2024, 2, 1), "2.31"),
            ],
        ),
        FundTransactions(
            currency="USD",
            orders=[make_order(OrderType.BUY, date(2023, 5, 2), "300", "USD", "1.10")],
            interest_payments=[make_interest(date(2023, 6, 1), "1.10", "USD", "1.10")],
        ),
    ]


# =============================================================================
# ECB archive
# =============================================================================

ECB_HISTORY_CSV = (
    "Date,USD,JPY,GBP,\n"
    "2024-03-04,1.0861,162.55,0.85605,\n"
    "2024-03-01,1.0834,162.30,N/A,\n"
    "2023-12-29,1.1050,156.33,0.86905,\n"
)


@pytest.fixture
def ecb_archive_bytes():
    """A zip archive shaped like eurofxref-hist.zip."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("eurofxref-hist.csv", ECB_HISTORY_CSV)
    return buffer.getvalue()


@pytest.fixture
def mock_urlopen_response():
    """
    Factory for a context-manager response returned by urllib.request.urlopen.

    Usage:
        with patch("urllib.request.urlopen", return_value=mock_urlopen_response(data)):
            ...
    """

    def _factory(data: bytes):
        mock_response = MagicMock()
        mock_response.read.return_value = data
        mock_response.__enter__ = MagicMock(return_value=mock_response)
        mock_response.__exit__ = MagicMock(return_value=False)
        return mock_response

    return _factory
