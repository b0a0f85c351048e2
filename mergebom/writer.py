"""Export of merged tables to xlsx, csv and json."""

import csv
import json
import logging
from pathlib import Path
from typing import Optional

import openpyxl
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from .models import Category, ItemsTable

logger = logging.getLogger(__name__)

HEADER_FILL = PatternFill(start_color="FF00FFFF", end_color="FF00FFFF", fill_type="solid")
QUANTITY_FILL = PatternFill(start_color="FF00FF00", end_color="FF00FF00", fill_type="solid")
CATEGORY_FILL = PatternFill(start_color="FFFFFF00", end_color="FFFFFF00", fill_type="solid")
THIN_BORDER = Border(
    left=Side(style="thin"),
    right=Side(style="thin"),
    top=Side(style="thin"),
    bottom=Side(style="thin"),
)


class XlsxWriter:
    """Writes an ItemsTable as a procurement sheet.

    Rows are grouped under a yellow banner per category; the quantity column
    is highlighted and not-populated rows are greyed out.
    """

    sheet_title = "BOM"

    def write(self, table: ItemsTable, output_path) -> Path:
        output_path = Path(output_path)
        wb = openpyxl.Workbook()
        ws = wb.active
        ws.title = self.sheet_title

        last_column = len(table.headers)

        # Write headers
        for col_idx, header in enumerate(table.headers, start=1):
            cell = ws.cell(row=1, column=col_idx, value=header)
            cell.font = Font(bold=True, size=12)
            cell.fill = QUANTITY_FILL if col_idx == 1 else HEADER_FILL

        row_idx = 2
        current_category = None
        for view in table.rows:
            if view.category != current_category:
                banner = Category(view.category).banner
                ws.merge_cells(start_row=row_idx, start_column=1, end_row=row_idx, end_column=last_column)
                cell = ws.cell(row=row_idx, column=1, value=banner)
                cell.font = Font(bold=True)
                cell.fill = CATEGORY_FILL
                cell.border = THIN_BORDER
                cell.alignment = Alignment(horizontal="center")
                current_category = view.category
                row_idx += 1

            for col_idx, value in enumerate(view.fields, start=1):
                cell = ws.cell(row=row_idx, column=col_idx, value=value)
                if col_idx == 1:
                    cell.value = view.quantity
                    cell.font = Font(bold=True, size=12)
                    cell.fill = QUANTITY_FILL
                else:
                    cell.font = Font(size=10, italic=view.is_not_populated,
                                     color="FF808080" if view.is_not_populated else None)
                    cell.alignment = Alignment(wrap_text=True, vertical="top")
            row_idx += 1

        wb.save(output_path)
        logger.info("Wrote %d rows to %s", len(table.rows), output_path)
        return output_path


def _export_csv(table: ItemsTable, output_path: Path, delimiter: str = ",") -> None:
    """Export table to CSV file."""
    with open(output_path, 'w', newline='', encoding='utf-8') as f:
        writer = csv.writer(f, delimiter=delimiter)
        writer.writerow(table.headers)
        for row in table.rows:
            writer.writerow(row.fields)


def _export_json(table: ItemsTable, output_path: Path) -> None:
    """Export table to JSON file."""
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(table.to_dict(), f, indent=2, ensure_ascii=False)


def export_table(table: ItemsTable, output_path, format: Optional[str] = None) -> str:
    """Export a merged table to a file.

    Args:
        table: The projected table
        output_path: Path where the file should be saved
        format: 'xlsx', 'csv', 'json', or None to detect from the extension

    Returns:
        Path to the exported file

    Raises:
        ValueError: If format is not supported
    """
    output_path = Path(output_path)

    # Auto-detect format from extension if not provided
    if format is None:
        suffix = output_path.suffix.lower()
        if suffix in ['.csv', '.tsv']:
            format = 'csv'
        elif suffix in ['.xlsx', '.xlsm']:
            format = 'xlsx'
        elif suffix == '.json':
            format = 'json'
        else:
            # Default to CSV if extension is not recognized
            format = 'csv'
            output_path = output_path.with_suffix('.csv')

    format = format.lower()
    if format in ('xlsx', 'excel'):
        XlsxWriter().write(table, output_path)
    elif format == 'csv':
        delimiter = '\t' if output_path.suffix.lower() == '.tsv' else ','
        _export_csv(table, output_path, delimiter)
    elif format == 'json':
        _export_json(table, output_path)
    else:
        raise ValueError(f"Unsupported export format: {format}. Supported formats: xlsx, csv, json")

    return str(output_path)
