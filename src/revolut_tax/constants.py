"""
Constants used throughout the Revolut tax converter.

Schema namespaces, the fixed payer identity reported in Doh-Obr,
file names and default paths live here.
"""

from decimal import Decimal
from pathlib import Path

BASE_CURRENCY = "EUR"

# Slovenian tax on interest income
INTEREST_TAX_RATE = Decimal("0.25")

# File encoding (utf-8-sig also strips the BOM Excel writes into CSV exports)
DEFAULT_FILE_ENCODING = "utf-8"
STATEMENT_FILE_ENCODING = "utf-8-sig"

# Statement section markers
SUMMARY_SECTION_PREFIX = "Summary for Flexible Cash Funds"
TRANSACTIONS_SECTION_PREFIX = "Transactions for Flexible Cash Funds"
INTEREST_MARKER = "Interest PAID"

# Revolut does not export a per-unit price for fund units
PLACEHOLDER_PRICE_PER_UNIT = Decimal("1")

# Date formats
DATE_FORMAT_ISO = "%Y-%m-%d"
DATE_FORMAT_REPORT = "%d.%m.%Y"

# eDavki schemas
NS_EDP = "http://edavki.durs.si/Documents/Schemas/EDP-Common-1.xsd"
NS_KDVP = "http://edavki.durs.si/Documents/Schemas/Doh_KDVP_9.xsd"
NS_OBR = "http://edavki.durs.si/Documents/Schemas/Doh_Obr_2.xsd"
XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>'

TAXPAYER_TYPE_NATURAL_PERSON = "FO"
DOCUMENT_WORKFLOW_ORIGINAL = "O"
KDVP_INVENTORY_LIST_TYPE = "PLVP"
KDVP_ACQUISITION_CODE = "B"
RESIDENCE_COUNTRY = "SI"

# Payer reported in Doh-Obr (the EU entity holding Flexible Cash Funds)
PAYER_IDENTIFICATION_NUMBER = "305799582"
PAYER_NAME = "Revolut Securities Europe UAB"
PAYER_ADDRESS = "Konstitucijos ave. 21B, Vilnius, Lithuania, LT-08130"
PAYER_COUNTRY = "LT"
INTEREST_TYPE_CODE = "7"
REDUCTION_COUNTRY_SLOTS = 5

# Output artifacts
XML_KEY_KDVP = "kdvp"
XML_KEY_INTEREST = "interest"
XML_FILE_NAMES = {
    XML_KEY_KDVP: "Doh_KDVP_Revolut_{year}.xml",
    XML_KEY_INTEREST: "Doh_Obr_Revolut_{year}.xml",
}
REPORT_FILE_NAME = "davcni_obrazci_revolut_{year}.txt"

# Default locations
DEFAULT_RATES_PATH = Path("conversion-rates.json")
DEFAULT_OUTPUT_DIR = Path("output")

# ECB historical reference rates archive
ECB_ARCHIVE_URL = "https://www.ecb.europa.eu/stats/eurofxref/eurofxref-hist.zip"
ECB_ARCHIVE_ENTRY = "eurofxref-hist.csv"

# Terminal display
TERMINAL_TABLE_WIDTH = 100
