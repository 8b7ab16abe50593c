import io

from pptx import Presentation
from pptx.shapes.base import BaseShape
from pptx.shapes.group import GroupShape

from originality.extraction.base import BaseTextExtractor
from originality.extraction.exceptions import CorruptDocumentError
from originality.extraction.normalize import normalize_text


def _shape_lines(shape: BaseShape) -> list[str]:
    lines: list[str] = []
    if isinstance(shape, GroupShape):
        for child in shape.shapes:
            lines.extend(_shape_lines(child))
        return lines
    if shape.has_text_frame:
        lines.extend(p.text for p in shape.text_frame.paragraphs)  # type: ignore[attr-defined]
    if shape.has_table:
        for row in shape.table.rows:  # type: ignore[attr-defined]
            cells = [cell.text.strip() for cell in row.cells]
            if any(cells):
                lines.append("\t".join(cells))
    return lines


class PptxAdapter(BaseTextExtractor):
    """Extracts slide text from OOXML presentations in slide order."""

    format_name = "pptx"

    def extract(self, data: bytes) -> str:
        try:
            presentation = Presentation(io.BytesIO(data))
            slides: list[str] = []
            for slide in presentation.slides:
                lines: list[str] = []
                for shape in slide.shapes:
                    lines.extend(_shape_lines(shape))
                slides.append("\n".join(line for line in lines if line.strip()))
        except Exception as exc:
            raise CorruptDocumentError(self.format_name, str(exc)) from exc
        return normalize_text("\n\n".join(slide for slide in slides if slide))
