import io

import pdfplumber

from originality.extraction.base import BaseTextExtractor
from originality.extraction.exceptions import CorruptDocumentError
from originality.extraction.normalize import normalize_text


class PdfPlumberAdapter(BaseTextExtractor):
    """Extracts PDF text page by page using pdfplumber."""

    format_name = "pdf"

    def extract(self, data: bytes) -> str:
        try:
            with pdfplumber.open(io.BytesIO(data)) as pdf:
                pages = [page.extract_text() or "" for page in pdf.pages]
        except Exception as exc:
            raise CorruptDocumentError(self.format_name, f"pdfplumber: {exc}") from exc
        return normalize_text("\n".join(pages))
