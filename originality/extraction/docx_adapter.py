import io
from collections.abc import Iterator

from docx import Document as load_docx
from docx.document import Document as DocxDocument
from docx.oxml.ns import qn
from docx.table import Table
from docx.text.paragraph import Paragraph

from originality.extraction.base import BaseTextExtractor
from originality.extraction.exceptions import CorruptDocumentError
from originality.extraction.normalize import normalize_text


def _iter_blocks(document: DocxDocument) -> Iterator[Paragraph | Table]:
    """Yield body paragraphs and tables in document order."""
    body = document.element.body
    for child in body.iterchildren():
        if child.tag == qn("w:p"):
            yield Paragraph(child, document)
        elif child.tag == qn("w:tbl"):
            yield Table(child, document)


def _table_lines(table: Table) -> list[str]:
    lines: list[str] = []
    for row in table.rows:
        cells = [cell.text.strip() for cell in row.cells]
        if any(cells):
            lines.append("\t".join(cells))
    return lines


class DocxAdapter(BaseTextExtractor):
    """Extracts paragraph and table text from OOXML word documents."""

    format_name = "docx"

    def extract(self, data: bytes) -> str:
        try:
            document = load_docx(io.BytesIO(data))
            lines: list[str] = []
            for block in _iter_blocks(document):
                if isinstance(block, Paragraph):
                    lines.append(block.text)
                else:
                    lines.extend(_table_lines(block))
        except Exception as exc:
            raise CorruptDocumentError(self.format_name, str(exc)) from exc
        return normalize_text("\n".join(lines))
