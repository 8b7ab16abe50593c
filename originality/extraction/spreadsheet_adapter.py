import io
from collections.abc import Iterable

import openpyxl
import xlrd

from originality.extraction.base import BaseTextExtractor
from originality.extraction.exceptions import CorruptDocumentError
from originality.extraction.normalize import normalize_text


def _cell_text(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _rows_to_text(rows: Iterable[Iterable[object]]) -> str:
    lines: list[str] = []
    for row in rows:
        cells = [_cell_text(value) for value in row]
        while cells and not cells[-1]:
            cells.pop()
        if cells:
            lines.append("\t".join(cells))
    return "\n".join(lines)


class XlsxAdapter(BaseTextExtractor):
    """Serializes every worksheet of an OOXML workbook row by row."""

    format_name = "xlsx"

    def extract(self, data: bytes) -> str:
        try:
            workbook = openpyxl.load_workbook(
                io.BytesIO(data), read_only=True, data_only=True
            )
            try:
                sheets = [
                    _rows_to_text(sheet.iter_rows(values_only=True))
                    for sheet in workbook.worksheets
                ]
            finally:
                workbook.close()
        except Exception as exc:
            raise CorruptDocumentError(self.format_name, str(exc)) from exc
        return normalize_text("\n".join(sheets))


class XlsAdapter(BaseTextExtractor):
    """Serializes every sheet of a legacy BIFF workbook row by row."""

    format_name = "xls"

    def extract(self, data: bytes) -> str:
        try:
            book = xlrd.open_workbook(file_contents=data, on_demand=True)
            try:
                sheets = []
                for index in range(book.nsheets):
                    sheet = book.sheet_by_index(index)
                    rows = (sheet.row_values(r) for r in range(sheet.nrows))
                    sheets.append(_rows_to_text(rows))
            finally:
                book.release_resources()
        except Exception as exc:
            raise CorruptDocumentError(self.format_name, str(exc)) from exc
        return normalize_text("\n".join(sheets))
