"""
Exceptions raised at the I/O boundary of the converter.

Data-quality problems inside a statement never raise; these cover
unreadable input files and the tax number check that gates XML output.
"""


class RevolutTaxError(Exception):
    """Base exception for all converter errors."""


class StatementReadError(RevolutTaxError):
    """Raised when a statement file cannot be read or decoded."""


class InvalidTaxNumberError(RevolutTaxError, ValueError):
    """Raised when a Slovenian tax number is not exactly 8 digits."""
