from unittest.mock import MagicMock, patch

import pytest

from originality.extraction.docx_adapter import DocxAdapter
from originality.extraction.exceptions import CorruptDocumentError
from originality.extraction.pptx_adapter import PptxAdapter
from originality.extraction.spreadsheet_adapter import XlsAdapter, XlsxAdapter
from originality.extraction.text_adapter import PlainTextAdapter


class TestPlainTextAdapter:
    def test_decodes_utf8_unchanged(self) -> None:
        text = "Čačak, naïve café\n  indented line\r\n"
        assert PlainTextAdapter().extract(text.encode("utf-8")) == text

    def test_strips_nul_bytes(self) -> None:
        assert PlainTextAdapter().extract(b"a\x00b") == "ab"

    def test_invalid_utf8_is_replaced(self) -> None:
        result = PlainTextAdapter().extract(b"ok \xff\xfe end")
        assert result.startswith("ok ")
        assert result.endswith(" end")
        result.encode("utf-8")


class TestDocxAdapter:
    def test_paragraphs_and_tables_in_order(self, sample_docx_bytes: bytes) -> None:
        result = DocxAdapter().extract(sample_docx_bytes)
        assert result.splitlines() == [
            "First paragraph of the essay.",
            "Name\tValue",
            "Alpha\t42",
            "Closing paragraph.",
        ]

    def test_truncated_archive_raises_corrupt(self, sample_docx_bytes: bytes) -> None:
        with pytest.raises(CorruptDocumentError) as exc_info:
            DocxAdapter().extract(sample_docx_bytes[: len(sample_docx_bytes) // 2])
        assert exc_info.value.format_name == "docx"


class TestXlsxAdapter:
    def test_sheets_serialized_row_major(self, sample_xlsx_bytes: bytes) -> None:
        result = XlsxAdapter().extract(sample_xlsx_bytes)
        assert result.splitlines() == ["Student\tScore", "Ana\t91", "Late submission"]

    def test_garbage_raises_corrupt(self) -> None:
        with pytest.raises(CorruptDocumentError, match="xlsx"):
            XlsxAdapter().extract(b"PK\x03\x04 broken")


class TestXlsAdapter:
    def test_sheets_serialized_row_major(self, sample_xls_bytes: bytes) -> None:
        result = XlsAdapter().extract(sample_xls_bytes)
        assert result.splitlines() == ["Student\tScore", "Ana\t91", "Late submission"]

    def test_garbage_raises_corrupt(self) -> None:
        with pytest.raises(CorruptDocumentError, match="xls"):
            XlsAdapter().extract(b"definitely not biff")

    def test_serializes_every_sheet(self) -> None:
        first = MagicMock(nrows=2)
        first.row_values.side_effect = [["Student", "Score"], ["Ana", 91.0]]
        second = MagicMock(nrows=1)
        second.row_values.side_effect = [["Late", ""]]
        book = MagicMock(nsheets=2)
        book.sheet_by_index.side_effect = [first, second]

        with patch(
            "originality.extraction.spreadsheet_adapter.xlrd.open_workbook",
            return_value=book,
        ) as open_workbook:
            result = XlsAdapter().extract(b"\xd0\xcf\x11\xe0")

        open_workbook.assert_called_once_with(file_contents=b"\xd0\xcf\x11\xe0", on_demand=True)
        assert result.splitlines() == ["Student\tScore", "Ana\t91", "Late"]
        book.release_resources.assert_called_once()


class TestPptxAdapter:
    def test_slides_in_order(self, sample_pptx_bytes: bytes) -> None:
        result = PptxAdapter().extract(sample_pptx_bytes)
        assert result.index("Slide one title") < result.index("Slide two body")

    def test_garbage_raises_corrupt(self) -> None:
        with pytest.raises(CorruptDocumentError, match="pptx"):
            PptxAdapter().extract(b"nope")
