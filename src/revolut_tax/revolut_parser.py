"""
Parser for Revolut Flexible Cash Funds statements.

The export is a concatenation of sections, each introduced by a single-cell
marker row such as ``Summary for Flexible Cash Funds - EUR`` or
``Transactions for Flexible Cash Funds - USD``. Only transaction sections
are read; summary sections just select the fund.
"""

import re
import warnings
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum

import pandas as pd

from .constants import (
    INTEREST_MARKER,
    PLACEHOLDER_PRICE_PER_UNIT,
    SUMMARY_SECTION_PREFIX,
    TRANSACTIONS_SECTION_PREFIX,
)
from .conversion_rates import ConversionRateTable
from .models import FundTransactions, InterestPayment, Order, OrderType
from .statement_loader import normalize_row

CURRENCY_PATTERN = re.compile(r"- ([A-Z]{3})")
ISIN_PATTERN = re.compile(r"\b[A-Z]{2}[0-9A-Z]{9}[0-9]\b")
ORDER_PATTERN = re.compile(r"^(BUY|SELL)")
AMOUNT_JUNK_PATTERN = re.compile(r"[^0-9.\-]+")


class SectionKind(Enum):
    """Where in the statement the scan currently is."""

    IDLE = "idle"
    SUMMARY = "summary"
    TRANSACTIONS = "transactions"


@dataclass(frozen=True)
class SectionState:
    """Current section and the fund it belongs to (None only while IDLE)."""

    kind: SectionKind
    fund: FundTransactions | None = None


IDLE = SectionState(SectionKind.IDLE)


def parse_currency_from_header(header: str) -> str | None:
    """Extract the 3-letter currency code from a section header."""
    match = CURRENCY_PATTERN.search(header)
    return match.group(1) if match else None


def clean_amount(value: str) -> Decimal:
    """
    Parse an amount, ignoring currency symbols and thousands separators.

    Raises:
        InvalidOperation: If nothing numeric is left after cleaning
    """
    return Decimal(AMOUNT_JUNK_PATTERN.sub("", value))


def parse_date(value: str) -> date:
    """
    Parse a statement date in any format pandas understands.

    Raises:
        ValueError: If the value is not a date
    """
    # Date formats differ between statement exports
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        parsed = pd.to_datetime(value.strip(), format="mixed")
    if pd.isna(parsed):
        raise ValueError(f"Not a date: {value!r}")
    return parsed.date()


def _get_or_create_fund(funds: dict[str, FundTransactions], currency: str) -> FundTransactions:
    fund = funds.get(currency)
    if fund is None:
        fund = FundTransactions(currency=currency)
        funds[currency] = fund
    return fund


def _parse_transaction_row(row: list[str], fund: FundTransactions, rates: ConversionRateTable) -> None:
    """Append the order or interest payment described by a row, if any."""
    date_str, description, value = row[:3]
    if not date_str or not description or not value:
        return

    isin_match = ISIN_PATTERN.search(description)
    if isin_match and fund.isin is None:
        fund.isin = isin_match.group(0)

    try:
        tx_date = parse_date(date_str)
        amount = clean_amount(value)
    except (ValueError, InvalidOperation):
        return

    rate = rates.get_rate(tx_date, fund.currency)

    order_match = ORDER_PATTERN.match(description)
    if order_match:
        fund.orders.append(
            Order(
                type=OrderType(order_match.group(1)),
                date=tx_date,
                quantity=abs(amount),
                price_per_unit=PLACEHOLDER_PRICE_PER_UNIT,
                currency=fund.currency,
                price_per_unit_in_eur=Decimal("1") / rate,
            )
        )
    elif INTEREST_MARKER in description:
        fund.interest_payments.append(
            InterestPayment(
                date=tx_date,
                amount=amount,
                currency=fund.currency,
                quantity_in_eur=amount / rate,
            )
        )
    # Fees, reinvestments and other narrative rows are ignored


def parse_transactions(rows, rates: ConversionRateTable) -> list[FundTransactions]:
    """
    Parse statement rows into one FundTransactions per currency.

    Funds are returned in the order their currency first appears. Rows that
    cannot be parsed are skipped; a file without any recognised section
    yields an empty list.
    """
    funds: dict[str, FundTransactions] = {}
    state = IDLE

    row_iter = iter(rows)
    for raw_row in row_iter:
        row = normalize_row(raw_row)

        if len(row) == 1:
            text = row[0]

            if text.startswith(SUMMARY_SECTION_PREFIX):
                currency = parse_currency_from_header(text)
                if currency:
                    state = SectionState(SectionKind.SUMMARY, _get_or_create_fund(funds, currency))
                else:
                    state = IDLE
                continue

            if text.startswith(TRANSACTIONS_SECTION_PREFIX):
                currency = parse_currency_from_header(text)
                if currency:
                    state = SectionState(SectionKind.TRANSACTIONS, _get_or_create_fund(funds, currency))
                    # Column names row
                    next(row_iter, None)
                continue

        if state.kind is SectionKind.TRANSACTIONS and len(row) >= 3:
            _parse_transaction_row(row, state.fund, rates)

    return list(funds.values())
