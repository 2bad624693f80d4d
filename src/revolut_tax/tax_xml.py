"""
eDavki XML generation.

Builds the Doh-KDVP (capital gains) and Doh-Obr (foreign interest income)
documents for the Slovenian tax authority. Element names, nesting and
order are fixed by the eDavki schemas; only the per-fund and per-order
blocks repeat, in input order.
"""

import re
import xml.etree.ElementTree as ET
from decimal import ROUND_HALF_UP, Decimal

from .constants import (
    DATE_FORMAT_ISO,
    DOCUMENT_WORKFLOW_ORIGINAL,
    INTEREST_TYPE_CODE,
    KDVP_ACQUISITION_CODE,
    KDVP_INVENTORY_LIST_TYPE,
    NS_EDP,
    NS_KDVP,
    NS_OBR,
    PAYER_ADDRESS,
    PAYER_COUNTRY,
    PAYER_IDENTIFICATION_NUMBER,
    PAYER_NAME,
    REDUCTION_COUNTRY_SLOTS,
    RESIDENCE_COUNTRY,
    TAXPAYER_TYPE_NATURAL_PERSON,
    XML_DECLARATION,
    XML_FILE_NAMES,
    XML_KEY_INTEREST,
    XML_KEY_KDVP,
)
from .exceptions import InvalidTaxNumberError
from .models import FundTransactions, Order, OrderType

ET.register_namespace("edp", NS_EDP)

TAX_NUMBER_PATTERN = re.compile(r"[0-9]{8}")


def is_valid_tax_number(tax_number: str) -> bool:
    """Slovenian tax numbers are exactly 8 digits."""
    return bool(TAX_NUMBER_PATTERN.fullmatch(tax_number or ""))


def validate_tax_number(tax_number: str) -> str:
    """
    Return the tax number if it is valid.

    Raises:
        InvalidTaxNumberError: If it is not exactly 8 digits
    """
    if not is_valid_tax_number(tax_number):
        raise InvalidTaxNumberError(f"Tax number must contain exactly 8 digits, got {tax_number!r}")
    return tax_number


def format_number_for_xml(value: Decimal) -> str:
    """Format with 2 decimals and '.' as the decimal separator."""
    return str(Decimal(value).quantize(Decimal("0.01"), ROUND_HALF_UP))


def xml_file_name(key: str, year: int) -> str:
    """File name offered for a generated document ("kdvp" or "interest")."""
    return XML_FILE_NAMES[key].format(year=year)


def _edp(tag: str) -> str:
    return f"{{{NS_EDP}}}{tag}"


def _sub(parent: ET.Element, tag: str, text=None) -> ET.Element:
    element = ET.SubElement(parent, tag)
    if text is not None:
        element.text = str(text)
    return element


def _create_envelope(namespace: str, tax_number: str) -> tuple[ET.Element, ET.Element]:
    """Create the common Envelope/Header skeleton and return (envelope, body)."""
    envelope = ET.Element(f"{{{namespace}}}Envelope")

    header = _sub(envelope, _edp("Header"))
    taxpayer = _sub(header, _edp("taxpayer"))
    _sub(taxpayer, _edp("taxNumber"), tax_number)
    _sub(taxpayer, _edp("taxpayerType"), TAXPAYER_TYPE_NATURAL_PERSON)

    _sub(envelope, _edp("AttachmentList"))
    _sub(envelope, _edp("Signatures"))

    body = _sub(envelope, f"{{{namespace}}}body")
    _sub(body, _edp("bodyContent"))
    return envelope, body


def _serialize(envelope: ET.Element, namespace: str) -> str:
    ET.indent(envelope, space="  ")
    return XML_DECLARATION + "\n" + ET.tostring(envelope, encoding="unicode", default_namespace=namespace)


# --- 1. CAPITAL GAINS (KDVP) ---


def _append_order_row(securities: ET.Element, row_id: int, order: Order) -> None:
    k = f"{{{NS_KDVP}}}"
    date_str = order.date.strftime(DATE_FORMAT_ISO)
    quantity = format_number_for_xml(abs(order.quantity))
    unit_price = format_number_for_xml(abs(order.price_per_unit_in_eur))

    row = _sub(securities, k + "Row")
    _sub(row, k + "ID", row_id)
    if order.type == OrderType.BUY:
        purchase = _sub(row, k + "Purchase")
        _sub(purchase, k + "F1", date_str)
        _sub(purchase, k + "F2", KDVP_ACQUISITION_CODE)
        _sub(purchase, k + "F3", quantity)
        _sub(purchase, k + "F4", unit_price)
    else:
        sale = _sub(row, k + "Sale")
        _sub(sale, k + "F6", date_str)
        _sub(sale, k + "F7", quantity)
        _sub(sale, k + "F9", unit_price)
        _sub(sale, k + "F10", "false")


def _append_kdvp_item(doh_kdvp: ET.Element, fund: FundTransactions) -> None:
    k = f"{{{NS_KDVP}}}"
    item = _sub(doh_kdvp, k + "KDVPItem")
    _sub(item, k + "InventoryListType", KDVP_INVENTORY_LIST_TYPE)

    securities = _sub(item, k + "Securities")
    if fund.isin:
        _sub(securities, k + "ISIN", fund.isin)
    _sub(securities, k + "IsFond", "false")

    for row_id, order in enumerate(fund.orders, start=1):
        _append_order_row(securities, row_id, order)


def generate_full_doh_kdvp_xml(funds: list[FundTransactions], year: int, tax_number: str) -> str:
    """
    Generate the Doh-KDVP document reporting every order of every fund.

    Funds without orders are left out. Each order becomes one Row; the unit
    price is the EUR value of one unit so quantity x price gives the EUR
    value of the order.
    """
    k = f"{{{NS_KDVP}}}"
    funds_with_orders = [fund for fund in funds if fund.orders]

    envelope, body = _create_envelope(NS_KDVP, tax_number)
    doh_kdvp = _sub(body, k + "Doh_KDVP")

    kdvp = _sub(doh_kdvp, k + "KDVP")
    _sub(kdvp, k + "DocumentWorkflowID", DOCUMENT_WORKFLOW_ORIGINAL)
    _sub(kdvp, k + "Year", year)
    _sub(kdvp, k + "PeriodStart", f"{year}-01-01")
    _sub(kdvp, k + "PeriodEnd", f"{year}-12-31")
    _sub(kdvp, k + "IsResident", "true")
    _sub(kdvp, k + "SecurityCount", len(funds_with_orders))
    _sub(kdvp, k + "SecurityShortCount", 0)
    _sub(kdvp, k + "SecurityWithContractCount", 0)
    _sub(kdvp, k + "SecurityWithContractShortCount", 0)
    _sub(kdvp, k + "ShareCount", 0)

    for fund in funds_with_orders:
        _append_kdvp_item(doh_kdvp, fund)

    return _serialize(envelope, NS_KDVP)


# --- 2. INTEREST (Obr) ---


def total_interest_in_eur(funds: list[FundTransactions]) -> Decimal:
    """Sum of all interest payments in EUR; payments without a EUR amount are skipped."""
    total = Decimal("0")
    for fund in funds:
        for payment in fund.interest_payments:
            amount = payment.amount_in_eur
            if amount is not None:
                total += amount
    return total


def generate_tax_office_xml(funds: list[FundTransactions], year: int, tax_number: str) -> str:
    """Generate the Doh-Obr document with all interest aggregated into one record."""
    o = f"{{{NS_OBR}}}"

    envelope, body = _create_envelope(NS_OBR, tax_number)
    doh_obr = _sub(body, o + "Doh_Obr")
    _sub(doh_obr, o + "Period", year)
    _sub(doh_obr, o + "DocumentWorkflowID", DOCUMENT_WORKFLOW_ORIGINAL)
    _sub(doh_obr, o + "ResidentOfRepublicOfSlovenia", "true")
    _sub(doh_obr, o + "Country", RESIDENCE_COUNTRY)

    interest = _sub(doh_obr, o + "Interest")
    _sub(interest, o + "Date", f"{year}-12-31")
    _sub(interest, o + "IdentificationNumber", PAYER_IDENTIFICATION_NUMBER)
    _sub(interest, o + "Name", PAYER_NAME)
    _sub(interest, o + "Address", PAYER_ADDRESS)
    _sub(interest, o + "Country", PAYER_COUNTRY)
    _sub(interest, o + "Type", INTEREST_TYPE_CODE)
    _sub(interest, o + "Value", format_number_for_xml(total_interest_in_eur(funds)))
    _sub(interest, o + "Country2", PAYER_COUNTRY)

    reduction = _sub(doh_obr, o + "Reduction")
    for slot in range(1, REDUCTION_COUNTRY_SLOTS + 1):
        _sub(reduction, o + f"Country{slot}", RESIDENCE_COUNTRY)

    return _serialize(envelope, NS_OBR)


def generate_all_tax_xmls(funds: list[FundTransactions], year: int, tax_number: str) -> dict[str, str]:
    """
    Generate every document the funds call for.

    Returns a dict with "kdvp" when any fund has orders and "interest" when
    any fund has interest payments.
    """
    xml_files = {}

    funds_with_orders = [fund for fund in funds if fund.orders]
    funds_with_interest = [fund for fund in funds if fund.interest_payments]

    if funds_with_orders:
        xml_files[XML_KEY_KDVP] = generate_full_doh_kdvp_xml(funds_with_orders, year, tax_number)

    if funds_with_interest:
        xml_files[XML_KEY_INTEREST] = generate_tax_office_xml(funds_with_interest, year, tax_number)

    return xml_files
