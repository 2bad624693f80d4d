"""
Restricts parsed transactions to a single tax year.
"""

from .models import FundTransactions, TaxYearFilterResult


def filter_by_tax_year(funds: list[FundTransactions], year: int) -> TaxYearFilterResult:
    """
    Keep only orders and interest payments dated in the given year.

    Funds left without any activity are dropped. The input is not modified;
    the result also reports how many orders and interest payments were
    removed so the user can be told about them.
    """
    filtered = []
    removed_orders = 0
    removed_interest = 0

    for fund in funds:
        orders = [o for o in fund.orders if o.date.year == year]
        interest_payments = [p for p in fund.interest_payments if p.date.year == year]

        removed_orders += len(fund.orders) - len(orders)
        removed_interest += len(fund.interest_payments) - len(interest_payments)

        kept = FundTransactions(
            currency=fund.currency,
            isin=fund.isin,
            orders=orders,
            interest_payments=interest_payments,
        )
        if not kept.is_empty:
            filtered.append(kept)

    return TaxYearFilterResult(
        year=year,
        funds=filtered,
        removed_orders=removed_orders,
        removed_interest_payments=removed_interest,
    )
