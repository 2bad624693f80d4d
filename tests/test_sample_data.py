"""
Run the whole pipeline on the bundled sample statement.

The sample covers both funds, a row from the previous year, a fee row and
a weekend interest payment that needs the rate fallback, so this doubles
as an end-to-end check of the demo.
"""

import xml.etree.ElementTree as ET
from datetime import date
from decimal import Decimal

import pytest

from revolut_tax import (
    create_sample_conversion_rates,
    create_sample_statement_rows,
    filter_by_tax_year,
    generate_all_tax_xmls,
    generate_report,
    parse_transactions,
)
from revolut_tax.constants import NS_KDVP, NS_OBR
from revolut_tax.models import OrderType

NS = {"k": NS_KDVP, "o": NS_OBR}


@pytest.fixture
def sample_funds():
    return parse_transactions(create_sample_statement_rows(), create_sample_conversion_rates())


@pytest.fixture
def sample_2024(sample_funds):
    return filter_by_tax_year(sample_funds, 2024)


def test_sample_statement_parses_both_funds(sample_funds):
    eur, usd = sample_funds

    assert (eur.currency, eur.isin) == ("EUR", "IE000AZVL3K0")
    assert (usd.currency, usd.isin) == ("USD", "IE00BDCSS001")
    assert [o.type for o in eur.orders] == [OrderType.BUY, OrderType.SELL]
    assert len(eur.interest_payments) == 3
    assert [o.quantity for o in usd.orders] == [Decimal("2000.00")]
    assert len(usd.interest_payments) == 2


def test_weekend_interest_uses_friday_rate(sample_funds):
    _, usd = sample_funds
    saturday = usd.interest_payments[0]

    assert saturday.date == date(2024, 3, 9)
    assert saturday.quantity_in_eur == Decimal("3.40") / Decimal("1.0932")


def test_previous_year_interest_is_left_out(sample_2024):
    assert sample_2024.removed_orders == 0
    assert sample_2024.removed_interest_payments == 1
    assert [p.date for p in sample_2024.funds[0].interest_payments] == [date(2024, 2, 1), date(2024, 3, 1)]


def test_sample_report(sample_2024):
    report = generate_report(sample_2024.funds)

    assert "## Valuta: EUR (ISIN: IE000AZVL3K0)" in report
    assert "15.01.2024 | BUY | 1.000,00 EUR | 1 | 1.000,00 EUR" in report
    assert "Skupni znesek obresti: **4,46 EUR** (4,46 EUR)" in report
    assert "## Valuta: USD (ISIN: IE00BDCSS001)" in report
    assert "04.03.2024 | BUY | 2.000,00 USD | 1 | 1.841,45 EUR" in report


def test_sample_xml_documents(sample_2024):
    xml_files = generate_all_tax_xmls(sample_2024.funds, 2024, "12345678")

    kdvp = ET.fromstring(xml_files["kdvp"].encode("utf-8"))
    assert kdvp.find("k:body/k:Doh_KDVP/k:KDVP/k:SecurityCount", NS).text == "2"
    usd_purchase = kdvp.findall("k:body/k:Doh_KDVP/k:KDVPItem", NS)[1].find("k:Securities/k:Row/k:Purchase", NS)
    assert [e.text for e in usd_purchase] == ["2024-03-04", "B", "2000.00", "0.92"]

    obr = ET.fromstring(xml_files["interest"].encode("utf-8"))
    # 2.31 + 2.15 + 3.40 / 1.0932 + 7.92 / 1.0741
    assert obr.find("o:body/o:Doh_Obr/o:Interest/o:Value", NS).text == "14.94"
