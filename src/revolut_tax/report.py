"""
Human-readable transaction report.

Renders parsed Flexible Cash Funds transactions as a Slovenian text report
(numbers with comma as the decimal separator) and computes the per-fund
totals shown on screen.
"""

from decimal import ROUND_HALF_UP, Decimal

from .constants import BASE_CURRENCY, DATE_FORMAT_REPORT, TERMINAL_TABLE_WIDTH
from .models import FundSummary, FundTransactions, OrderType


def format_number(value) -> str:
    """
    Format a number the Slovenian way: 2 decimals, ',' as decimal
    separator and '.' between thousands (1.234,56).
    """
    if not isinstance(value, Decimal):
        value = Decimal(str(value))
    rounded = value.quantize(Decimal("0.01"), ROUND_HALF_UP)
    return f"{rounded:,.2f}".translate(str.maketrans({",": ".", ".": ","}))


def calculate_fund_summary(fund: FundTransactions) -> FundSummary:
    """
    Calculate buy, sell and interest totals for a fund.

    All totals sum absolute values; direction is carried only by the order type.
    """
    buy_transactions = [o for o in fund.orders if o.type == OrderType.BUY]
    sell_transactions = [o for o in fund.orders if o.type == OrderType.SELL]

    return FundSummary(
        buy_transactions=buy_transactions,
        sell_transactions=sell_transactions,
        total_buy_amount=sum((abs(o.quantity) for o in buy_transactions), Decimal("0")),
        total_sell_amount=sum((abs(o.quantity) for o in sell_transactions), Decimal("0")),
        total_interest_amount=sum((abs(p.amount) for p in fund.interest_payments), Decimal("0")),
        total_buy_amount_eur=sum((abs(o.value_in_eur) for o in buy_transactions), Decimal("0")),
        total_sell_amount_eur=sum((abs(o.value_in_eur) for o in sell_transactions), Decimal("0")),
        total_interest_amount_eur=sum(
            (abs(p.quantity_in_eur) for p in fund.interest_payments if p.quantity_in_eur is not None),
            Decimal("0"),
        ),
    )


def generate_report(funds: list[FundTransactions]) -> str:
    """Generate the text report for a list of funds."""
    lines = ["# Poročilo o transakcijah Revolut Flexible Accounts", ""]

    for fund in funds:
        heading = f"## Valuta: {fund.currency}"
        if fund.isin:
            heading += f" (ISIN: {fund.isin})"
        lines += [heading, ""]

        if fund.orders:
            lines += [
                "### Nakupi in prodaje",
                "",
                "Datum | Tip | Količina | Cena na enoto | Znesek (EUR)",
                "------|-----|----------|---------------|------------",
            ]
            for order in fund.orders:
                lines.append(
                    f"{order.date.strftime(DATE_FORMAT_REPORT)} | {order.type.value} | "
                    f"{format_number(order.quantity)} {fund.currency} | {order.price_per_unit} | "
                    f"{format_number(order.value_in_eur)} {BASE_CURRENCY}"
                )
            lines.append("")

        if fund.interest_payments:
            lines += [
                "### Izplačila obresti",
                "",
                "Datum | Znesek | Znesek (EUR)",
                "------|--------|------------",
            ]
            for payment in fund.interest_payments:
                eur_amount = (
                    format_number(payment.quantity_in_eur) if payment.quantity_in_eur is not None else "N/A"
                )
                lines.append(
                    f"{payment.date.strftime(DATE_FORMAT_REPORT)} | "
                    f"{format_number(payment.amount)} {fund.currency} | {eur_amount} {BASE_CURRENCY}"
                )
            lines.append("")

            summary = calculate_fund_summary(fund)
            lines += [
                "### Davčna obveznost",
                "",
                f"Skupni znesek obresti: **{format_number(summary.total_interest_amount)} {fund.currency}** "
                f"({format_number(summary.total_interest_amount_eur)} {BASE_CURRENCY})",
                f"Davčna obveznost (25%): **{format_number(summary.tax_obligation)} {fund.currency}** "
                f"({format_number(summary.tax_obligation_eur)} {BASE_CURRENCY})",
                "",
            ]

        lines.append("")

    return "\n".join(lines)


def render_summary_table(funds: list[FundTransactions]) -> str:
    """Render per-fund totals as a fixed-width table for the terminal."""
    lines = [
        "=" * TERMINAL_TABLE_WIDTH,
        "POVZETEK",
        "=" * TERMINAL_TABLE_WIDTH,
        f"{'Valuta':<8} {'ISIN':<14} {'Nakupi (EUR)':>15} {'Prodaje (EUR)':>15} "
        f"{'Obresti (EUR)':>15} {'Davek 25% (EUR)':>16}",
        "-" * TERMINAL_TABLE_WIDTH,
    ]

    for fund in funds:
        summary = calculate_fund_summary(fund)
        lines.append(
            f"{fund.currency:<8} {fund.isin or '-':<14} "
            f"{format_number(summary.total_buy_amount_eur):>15} "
            f"{format_number(summary.total_sell_amount_eur):>15} "
            f"{format_number(summary.total_interest_amount_eur):>15} "
            f"{format_number(summary.tax_obligation_eur):>16}"
        )

    lines.append("=" * TERMINAL_TABLE_WIDTH)
    return "\n".join(lines)
