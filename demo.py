#!/usr/bin/env python3
"""
Demo script to run the converter with sample data.

Prints the report and both eDavki documents for the bundled sample statement.
"""
import sys
from pathlib import Path

# Ensure src is in path if running directly
src_path = Path(__file__).parent / "src"
if str(src_path) not in sys.path:
    sys.path.append(str(src_path))

from revolut_tax.cli_demo import main

if __name__ == "__main__":
    main()
