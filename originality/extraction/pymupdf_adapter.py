import pymupdf

from originality.extraction.base import BaseTextExtractor
from originality.extraction.exceptions import CorruptDocumentError
from originality.extraction.normalize import normalize_text


class PyMuPdfAdapter(BaseTextExtractor):
    """Extracts PDF text page by page using PyMuPDF, sorted into reading order."""

    format_name = "pdf"

    def extract(self, data: bytes) -> str:
        try:
            with pymupdf.open(stream=data, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [page.get_text(sort=True) for page in doc]
        except Exception as exc:
            raise CorruptDocumentError(self.format_name, f"pymupdf: {exc}") from exc
        return normalize_text("\n".join(pages))
