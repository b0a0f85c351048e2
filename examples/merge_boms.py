#!/usr/bin/env python3
"""Example: Merge several board BOMs into one procurement sheet.

Each input is read, its header row located and normalized, rows are grouped
by category and parts sharing the same comment, footprint and description
collapse into one line with summed quantity.
"""

from mergebom import BomParser, MergeConfig
from mergebom.errors import LoaderError
from mergebom.writer import export_table


def merge_boms(input_files, output_file: str):
    """Merge BOM files into a single styled spreadsheet.

    Args:
        input_files: Paths to the BOM files, in priority order
        output_file: Path of the merged output (.xlsx, .csv or .json)
    """
    config = MergeConfig(
        merge_fields=("comment", "footprint", "description"),
        normalize_values=True,     # "100n" and "0.1uF" count as the same part
        extended_rewrites=True,    # collapse tactile switches and relays too
    )
    parser = BomParser(config)

    for input_file in input_files:
        try:
            report = parser.get_mapping_report(input_file)
        except LoaderError as e:
            print(f"{input_file}: {e.reason}")
            continue
        print(f"{input_file}: header on row {report['header_row']}")
        if report['unmapped']:
            print(f"  Ignored columns: {', '.join(report['unmapped'])}")

    result = parser.merge_files(input_files)
    output = export_table(result.table, output_file)

    print(f"✓ Merged into {len(result.table)} rows")
    print(f"✓ Output saved to: {output}")
    if result.skipped_files:
        print(f"⚠️  Skipped: {', '.join(result.skipped_files)}")

    return result.table


if __name__ == "__main__":
    import sys

    if len(sys.argv) < 3:
        print("Usage: python merge_boms.py <input_file>... <output_file>")
        print("\nExample:")
        print("  python merge_boms.py mainboard.csv display.xlsx merged.xlsx")
        sys.exit(1)

    merge_boms(sys.argv[1:-1], sys.argv[-1])
