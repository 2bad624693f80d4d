"""
Builds the conversion rates JSON table for one year from the ECB
historical reference rates archive.

Run this once per tax year; the converter itself never goes online.
"""

import argparse
import sys
from pathlib import Path

from .conversion_rates import build_yearly_rates, fetch_ecb_history, write_conversion_rates


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="revolut-tax-rates",
        description="Download ECB reference rates and save one year as conversion-rates JSON.",
    )
    parser.add_argument("-y", "--year", type=int, required=True, help="Year to extract, e.g. 2024")
    parser.add_argument(
        "-o",
        "--out",
        type=Path,
        help="Output file (default: conversion-rates-<year>.json)",
    )
    parser.add_argument("-f", "--force", action="store_true", help="Overwrite an existing file")
    return parser


def main(argv: list[str] | None = None) -> None:
    args = build_parser().parse_args(argv)
    out_path = args.out or Path(f"conversion-rates-{args.year}.json")

    print("Downloading official exchange rates from ECB...")
    try:
        history = fetch_ecb_history()
        rows = build_yearly_rates(history, args.year)
        write_conversion_rates(rows, out_path, force=args.force)
    except (RuntimeError, ValueError, FileExistsError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    print(f"Saved {len(rows)} daily rate entries for {args.year} to {out_path}")


if __name__ == "__main__":
    main()
