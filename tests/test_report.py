"""
Tests for the text report and the per-fund totals.
"""

from datetime import date
from decimal import Decimal

import pytest

from revolut_tax.models import FundTransactions, OrderType
from revolut_tax.report import (
    calculate_fund_summary,
    format_number,
    generate_report,
    render_summary_table,
)


class TestFormatNumber:
    """Tests for Slovenian number formatting."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (Decimal("0"), "0,00"),
            (Decimal("2.31"), "2,31"),
            (Decimal("1000"), "1.000,00"),
            (Decimal("1234567.891"), "1.234.567,89"),
            (Decimal("0.005"), "0,01"),
            (Decimal("0.7025"), "0,70"),
            (Decimal("-1234.5"), "-1.234,50"),
            (3.4, "3,40"),
            (7, "7,00"),
        ],
    )
    def test_format_number(self, value, expected):
        assert format_number(value) == expected


class TestCalculateFundSummary:
    """Tests for the per-fund totals."""

    def test_totals(self, make_order, make_interest):
        fund = FundTransactions(
            currency="USD",
            orders=[
                make_order(OrderType.BUY, date(2024, 3, 4), "110", "USD", "1.10"),
                make_order(OrderType.BUY, date(2024, 3, 5), "220", "USD", "1.10"),
                make_order(OrderType.SELL, date(2024, 3, 6), "55", "USD", "1.10"),
            ],
            interest_payments=[
                make_interest(date(2024, 3, 7), "1.10", "USD", "1.10"),
                make_interest(date(2024, 3, 8), "2.20", "USD", "1.10"),
            ],
        )

        summary = calculate_fund_summary(fund)

        assert len(summary.buy_transactions) == 2
        assert len(summary.sell_transactions) == 1
        assert summary.total_buy_amount == Decimal("330")
        assert summary.total_sell_amount == Decimal("55")
        assert summary.total_interest_amount == Decimal("3.30")
        assert format_number(summary.total_buy_amount_eur) == "300,00"
        assert format_number(summary.total_sell_amount_eur) == "50,00"
        assert format_number(summary.total_interest_amount_eur) == "3,00"
        assert format_number(summary.tax_obligation_eur) == "0,75"

    def test_sums_absolute_values(self, make_interest):
        fund = FundTransactions(
            currency="EUR",
            interest_payments=[
                make_interest(date(2024, 3, 7), "-1.00"),
                make_interest(date(2024, 3, 8), "2.00"),
            ],
        )

        summary = calculate_fund_summary(fund)

        assert summary.total_interest_amount == Decimal("3.00")
        assert summary.total_interest_amount_eur == Decimal("3.00")

    def test_unknown_eur_amounts_are_skipped(self, make_interest):
        fund = FundTransactions(
            currency="USD",
            interest_payments=[
                make_interest(date(2024, 3, 7), "1.00", "USD", rate=None),
                make_interest(date(2024, 3, 8), "2.00", "USD", rate="2"),
            ],
        )

        summary = calculate_fund_summary(fund)

        assert summary.total_interest_amount == Decimal("3.00")
        assert summary.total_interest_amount_eur == Decimal("1.00")

    def test_empty_fund(self):
        summary = calculate_fund_summary(FundTransactions(currency="EUR"))

        assert summary.buy_transactions == []
        assert summary.total_buy_amount == 0
        assert summary.tax_obligation == 0


class TestGenerateReport:
    """Tests for the text report."""

    def test_report_content(self, mixed_year_funds):
        report = generate_report(mixed_year_funds[:1])
        lines = report.split("\n")

        assert lines[0] == "# Poročilo o transakcijah Revolut Flexible Accounts"
        assert "## Valuta: EUR (ISIN: IE000AZVL3K0)" in lines
        assert "### Nakupi in prodaje" in lines
        assert "15.01.2024 | BUY | 1.000,00 EUR | 1 | 1.000,00 EUR" in lines
        assert "03.06.2024 | SELL | 250,00 EUR | 1 | 250,00 EUR" in lines
        assert "### Izplačila obresti" in lines
        assert "01.02.2024 | 2,31 EUR | 2,31 EUR" in lines

    def test_tax_obligation_lines(self, mixed_year_funds):
        report = generate_report(mixed_year_funds[:1])

        assert "Skupni znesek obresti: **2,81 EUR** (2,81 EUR)" in report
        assert "Davčna obveznost (25%): **0,70 EUR** (0,70 EUR)" in report

    def test_foreign_currency_amounts(self, mixed_year_funds):
        report = generate_report(mixed_year_funds[1:])

        assert "## Valuta: USD" in report
        assert "ISIN" not in report
        assert "02.05.2023 | BUY | 300,00 USD | 1 | 272,73 EUR" in report
        assert "01.06.2023 | 1,10 USD | 1,00 EUR" in report

    def test_missing_eur_amount_is_marked(self, make_interest):
        fund = FundTransactions(
            currency="USD",
            interest_payments=[make_interest(date(2024, 3, 7), "1.00", "USD", rate=None)],
        )

        report = generate_report([fund])

        assert "07.03.2024 | 1,00 USD | N/A EUR" in report

    def test_sections_only_for_present_data(self, make_interest):
        fund = FundTransactions(
            currency="EUR",
            interest_payments=[make_interest(date(2024, 3, 7), "1.00")],
        )

        report = generate_report([fund])

        assert "### Nakupi in prodaje" not in report
        assert "### Izplačila obresti" in report

    def test_funds_follow_input_order(self, mixed_year_funds):
        report = generate_report(list(reversed(mixed_year_funds)))

        assert report.index("## Valuta: USD") < report.index("## Valuta: EUR")

    def test_empty(self):
        assert generate_report([]).startswith("# Poročilo o transakcijah")


class TestRenderSummaryTable:
    """Tests for the on-screen summary table."""

    def test_one_line_per_fund(self, mixed_year_funds):
        table = render_summary_table(mixed_year_funds)
        lines = table.split("\n")

        assert "POVZETEK" in lines
        eur_line = next(line for line in lines if line.startswith("EUR"))
        usd_line = next(line for line in lines if line.startswith("USD"))
        assert "IE000AZVL3K0" in eur_line
        assert "1.500,00" in eur_line
        assert "250,00" in eur_line
        assert "2,81" in eur_line
        assert "0,70" in eur_line
        assert usd_line.split()[1] == "-"
        assert "272,73" in usd_line
