"""
Data models for the Revolut Flexible Cash Funds tax converter.

Contains all dataclasses and enums used throughout the application.
"""

import math
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum

from .constants import BASE_CURRENCY, INTEREST_TAX_RATE


class OrderType(Enum):
    """Types of fund orders."""

    BUY = "BUY"
    SELL = "SELL"


@dataclass(frozen=True)
class Order:
    """
    A single buy or sell execution of fund units.

    Attributes:
        type: BUY or SELL
        date: Execution date
        quantity: Absolute number of units traded (never negative)
        price_per_unit: Placeholder unit price shown in the report; the
            statement does not carry a real one
        currency: Currency of the owning fund
        price_per_unit_in_eur: EUR value of one unit (1 / FX rate)
    """

    type: OrderType
    date: date
    quantity: Decimal
    price_per_unit: Decimal
    currency: str
    price_per_unit_in_eur: Decimal

    @property
    def value_in_eur(self) -> Decimal:
        """EUR value of the whole line."""
        return self.quantity * self.price_per_unit_in_eur


@dataclass(frozen=True)
class InterestPayment:
    """A single interest credit on a fund balance."""

    date: date
    amount: Decimal
    currency: str
    quantity_in_eur: Decimal | None = None

    @property
    def amount_in_eur(self) -> Decimal | None:
        """
        EUR amount used for tax reporting.

        Falls back to the raw amount only when the payment is already in EUR.
        """
        if self.quantity_in_eur is not None:
            return self.quantity_in_eur
        if self.currency == BASE_CURRENCY:
            return self.amount
        return None


@dataclass
class FundTransactions:
    """All activity of one currency-denominated Flexible Cash Funds sub-account."""

    currency: str
    isin: str | None = None
    orders: list[Order] = field(default_factory=list)
    interest_payments: list[InterestPayment] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.orders and not self.interest_payments


def _to_rate(value) -> Decimal | None:
    """Coerce a JSON rate value to Decimal, or None if it is not a usable number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, float):
        if not math.isfinite(value):
            return None
        value = str(value)
    if isinstance(value, (int, str)):
        try:
            value = Decimal(value)
        except InvalidOperation:
            return None
    if not isinstance(value, Decimal):
        return None
    if not value.is_finite() or value <= 0:
        return None
    return value


@dataclass(frozen=True)
class ConversionRateRow:
    """
    One calendar day's ECB reference rates.

    Rates are quoted as units of currency per 1 EUR (the ECB convention),
    so converting an amount to EUR means dividing by the rate.
    """

    date: str
    rates: Mapping[str, Decimal] = field(default_factory=dict)

    def rate_for(self, currency: str) -> Decimal | None:
        """Return the rate for a currency if it is a finite positive number."""
        return _to_rate(self.rates.get(currency))

    @classmethod
    def from_dict(cls, data: dict) -> "ConversionRateRow":
        """
        Build a row from the JSON shape ``{"date": ..., "rates": {...}}``.

        Raises:
            ValueError: If the entry has no date string or no rates mapping
        """
        row_date = data.get("date")
        rates = data.get("rates")
        if not isinstance(row_date, str) or not isinstance(rates, dict):
            raise ValueError(f"Invalid conversion rate entry: {data!r}")

        usable = {}
        for currency, value in rates.items():
            rate = _to_rate(value)
            if rate is not None and currency != BASE_CURRENCY:
                usable[currency] = rate
        return cls(date=row_date, rates=usable)


@dataclass
class FundSummary:
    """Totals for a single fund, as shown in the report and the on-screen summary."""

    buy_transactions: list[Order]
    sell_transactions: list[Order]
    total_buy_amount: Decimal = Decimal("0")
    total_sell_amount: Decimal = Decimal("0")
    total_interest_amount: Decimal = Decimal("0")
    total_buy_amount_eur: Decimal = Decimal("0")
    total_sell_amount_eur: Decimal = Decimal("0")
    total_interest_amount_eur: Decimal = Decimal("0")

    @property
    def tax_obligation(self) -> Decimal:
        """Tax on interest (25%) in the fund's own currency."""
        return self.total_interest_amount * INTEREST_TAX_RATE

    @property
    def tax_obligation_eur(self) -> Decimal:
        """Tax on interest (25%) in EUR."""
        return self.total_interest_amount_eur * INTEREST_TAX_RATE


@dataclass
class TaxYearFilterResult:
    """Transactions restricted to one tax year, with counts of what was left out."""

    year: int
    funds: list[FundTransactions]
    removed_orders: int = 0
    removed_interest_payments: int = 0
