"""
EUR conversion rate table.

Looks up historical ECB reference rates from a static JSON table
(``[{"date": "YYYY-MM-DD", "rates": {"USD": 1.08, ...}}, ...]``) and
builds that table offline from the ECB historical archive.
"""

import io
import json
import urllib.request
import zipfile
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from pathlib import Path

import pandas as pd

from .constants import (
    BASE_CURRENCY,
    DATE_FORMAT_ISO,
    DEFAULT_FILE_ENCODING,
    ECB_ARCHIVE_ENTRY,
    ECB_ARCHIVE_URL,
)
from .models import ConversionRateRow


class ConversionRateTable:
    """
    Read-only, date-indexed table of EUR conversion rates.

    Rows are kept in the order given; lookups never assume the table is sorted.
    If a date appears more than once, the first row for it wins.
    """

    def __init__(self, rows: Iterable[ConversionRateRow] = ()):
        self._rows = tuple(rows)
        self._by_date: dict[str, ConversionRateRow] = {}
        for row in self._rows:
            self._by_date.setdefault(row.date, row)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "ConversionRateTable":
        """Build a table from JSON-shaped dicts, skipping malformed entries."""
        rows = []
        for record in records:
            if not isinstance(record, dict):
                continue
            try:
                rows.append(ConversionRateRow.from_dict(record))
            except ValueError:
                continue
        return cls(rows)

    @property
    def rows(self) -> tuple[ConversionRateRow, ...]:
        return self._rows

    def __len__(self) -> int:
        return len(self._rows)

    def get_rate(self, on: date | str, currency: str) -> Decimal:
        """
        Get the rate (units of currency per 1 EUR) for a currency on a date.

        Uses the row for that exact date if it has a usable rate. Otherwise
        returns the rate from the most recent earlier date that has one, or
        failing that the latest date that has one. If the table has no usable
        rate for the currency at all, returns 1, i.e. the amount is treated as
        if it were already in EUR.
        """
        if currency == BASE_CURRENCY:
            return Decimal("1")

        key = on if isinstance(on, str) else on.strftime(DATE_FORMAT_ISO)

        row = self._by_date.get(key)
        if row is not None:
            rate = row.rate_for(currency)
            if rate is not None:
                return rate

        # Most recent earlier date with a rate for this currency,
        # else the latest date with one (e.g. 1 January in a yearly table)
        earlier_date = earlier_rate = None
        latest_date = latest_rate = None
        for candidate in self._rows:
            rate = candidate.rate_for(currency)
            if rate is None:
                continue
            if latest_date is None or candidate.date > latest_date:
                latest_date, latest_rate = candidate.date, rate
            if candidate.date < key and (earlier_date is None or candidate.date > earlier_date):
                earlier_date, earlier_rate = candidate.date, rate

        if earlier_rate is not None:
            return earlier_rate
        if latest_rate is not None:
            return latest_rate

        return Decimal("1")


def get_conversion_rate(on: date | str, currency: str, table: ConversionRateTable) -> Decimal:
    """Get the EUR conversion rate for a currency on a date from the given table."""
    return table.get_rate(on, currency)


def load_conversion_rates(path: Path) -> ConversionRateTable:
    """
    Load the conversion rate table from a JSON file.

    A missing or malformed file is not fatal: a warning is printed and an
    empty table is returned, so every non-EUR conversion falls back to 1.
    """
    path = Path(path)
    try:
        with open(path, encoding=DEFAULT_FILE_ENCODING) as f:
            payload = json.load(f, parse_float=Decimal)
    except FileNotFoundError:
        print(f"Warning: conversion rates file {path} not found. Non-EUR amounts will not be converted.")
        return ConversionRateTable()
    except (OSError, ValueError) as e:
        print(f"Warning: could not load conversion rates from {path}: {e}")
        return ConversionRateTable()

    if not isinstance(payload, list):
        print(f"Warning: conversion rates file {path} does not contain a list of daily rates.")
        return ConversionRateTable()

    return ConversionRateTable.from_records(payload)


# =============================================================================
# Offline table builder (ECB historical archive)
# =============================================================================


def fetch_ecb_history(url: str = ECB_ARCHIVE_URL) -> pd.DataFrame:
    """
    Download the ECB historical reference rates archive and read its CSV.

    Raises:
        RuntimeError: If the archive cannot be downloaded or does not
            contain the expected CSV file
    """
    try:
        with urllib.request.urlopen(url, timeout=60) as response:
            archive_data = response.read()
    except Exception as e:
        raise RuntimeError(f"Failed to fetch ECB rates: {e}")

    try:
        with zipfile.ZipFile(io.BytesIO(archive_data)) as archive:
            if ECB_ARCHIVE_ENTRY not in archive.namelist():
                raise RuntimeError(f"Could not find {ECB_ARCHIVE_ENTRY} in downloaded archive.")
            with archive.open(ECB_ARCHIVE_ENTRY) as f:
                return pd.read_csv(f)
    except zipfile.BadZipFile as e:
        raise RuntimeError(f"Failed to fetch ECB rates: {e}")


def build_yearly_rates(frame: pd.DataFrame, year: int) -> list[ConversionRateRow]:
    """
    Turn the ECB history (one row per day, one column per currency) into
    conversion rate rows for a single year, newest date first.

    Raises:
        ValueError: If the history has no rows for the year
    """
    frame = frame.rename(columns=lambda c: str(c).strip())
    frame = frame.loc[:, [c for c in frame.columns if c and not c.startswith("Unnamed")]]

    rows = []
    for record in frame.to_dict(orient="records"):
        row_date = str(record.pop("Date", "")).strip()
        if row_date[:4] != str(year):
            continue
        rows.append(ConversionRateRow.from_dict({"date": row_date, "rates": record}))

    if not rows:
        raise ValueError(f"No conversion rates found for year {year}.")

    rows.sort(key=lambda r: r.date, reverse=True)
    return rows


def write_conversion_rates(rows: list[ConversionRateRow], path: Path, force: bool = False) -> None:
    """
    Write conversion rate rows as the JSON table read by load_conversion_rates.

    Raises:
        FileExistsError: If the file exists and force is not set
    """
    path = Path(path)
    if path.exists() and not force:
        raise FileExistsError(f"Refusing to overwrite existing file at {path}. Use --force to override.")

    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [
        {"date": row.date, "rates": {currency: float(rate) for currency, rate in row.rates.items()}}
        for row in rows
    ]
    with open(path, "w", encoding=DEFAULT_FILE_ENCODING) as f:
        f.write(json.dumps(payload, indent=2) + "\n")
