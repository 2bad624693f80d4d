"""
Reads a Revolut consolidated statement into rows of string cells.

Accepts the CSV export (any column count per row) or the Excel
statement it is derived from.
"""

import csv
from pathlib import Path

import pandas as pd

from .constants import STATEMENT_FILE_ENCODING
from .exceptions import StatementReadError

EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}


def normalize_row(row) -> list[str]:
    """
    Convert cells to stripped strings and drop trailing empty cells.

    Spreadsheet exports pad short rows with empty cells; without trimming
    a section marker like ``Summary for ...,,`` would not be a single-cell row.
    """
    cells = ["" if cell is None else str(cell).strip() for cell in row]
    while cells and not cells[-1]:
        cells.pop()
    return cells


def _read_csv_rows(path: Path) -> list[list[str]]:
    try:
        with open(path, newline="", encoding=STATEMENT_FILE_ENCODING) as f:
            return [normalize_row(row) for row in csv.reader(f)]
    except (OSError, UnicodeDecodeError, csv.Error) as e:
        raise StatementReadError(f"Could not read CSV statement {path.name}: {e}") from e


def _read_excel_rows(path: Path) -> list[list[str]]:
    try:
        df = pd.read_excel(path, sheet_name=0, header=None, dtype=str)
    except Exception as e:
        raise StatementReadError(f"Could not read Excel statement {path.name}: {e}") from e

    df = df.fillna("")
    return [normalize_row(row) for row in df.itertuples(index=False, name=None)]


def load_statement_rows(path: Path) -> list[list[str]]:
    """
    Load a statement file as a list of rows.

    Raises:
        StatementReadError: If the file does not exist or cannot be decoded
    """
    path = Path(path)
    if not path.exists():
        raise StatementReadError(f"Statement file {path} does not exist.")

    if path.suffix.lower() in EXCEL_SUFFIXES:
        return _read_excel_rows(path)
    return _read_csv_rows(path)
