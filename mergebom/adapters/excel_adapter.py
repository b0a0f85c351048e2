import openpyxl
from pathlib import Path

from ..errors import LoaderError


def _cell_text(value):
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


class ExcelAdapter:
    def can_handle(self, file_path):
        return Path(file_path).suffix.lower() in [".xlsx", ".xlsm"]

    def read(self, file_path):
        """Read the first worksheet as rows of cell strings."""
        try:
            wb = openpyxl.load_workbook(file_path, read_only=True, data_only=True)
        except Exception as e:
            raise LoaderError(str(file_path), f"cannot open workbook: {e}")

        try:
            if not wb.worksheets:
                raise LoaderError(str(file_path), "no sheet found in file")
            ws = wb.worksheets[0]
            rows = []
            for row in ws.iter_rows(values_only=True):
                rows.append([_cell_text(value) for value in row])
        finally:
            wb.close()

        return rows
