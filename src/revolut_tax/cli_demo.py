"""
Demo script to run the converter with sample data.

Parses the bundled sample statement, prints the report and the two XML
documents without touching any files.
"""

from revolut_tax import (
    create_sample_conversion_rates,
    create_sample_statement_rows,
    filter_by_tax_year,
    generate_all_tax_xmls,
    generate_report,
    parse_transactions,
    render_summary_table,
)

DEMO_YEAR = 2024
DEMO_TAX_NUMBER = "12345678"


def main():
    """Run the converter with the sample statement."""
    print("Revolut Flexible Cash Funds -> eDavki (Doh-KDVP, Doh-Obr)")
    print("\n** DEMO MODE: Using sample data **\n")

    funds = parse_transactions(create_sample_statement_rows(), create_sample_conversion_rates())
    result = filter_by_tax_year(funds, DEMO_YEAR)

    print(
        f"Left out {result.removed_orders} orders and "
        f"{result.removed_interest_payments} interest payments outside {DEMO_YEAR}.\n"
    )
    print(render_summary_table(result.funds))
    print()
    print(generate_report(result.funds))

    for key, xml_content in generate_all_tax_xmls(result.funds, DEMO_YEAR, DEMO_TAX_NUMBER).items():
        print(f"--- {key} ---")
        print(xml_content)
        print()


if __name__ == "__main__":
    main()
