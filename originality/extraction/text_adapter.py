from originality.extraction.base import BaseTextExtractor
from originality.extraction.normalize import to_valid_text


class PlainTextAdapter(BaseTextExtractor):
    """Decodes .txt uploads as UTF-8, otherwise leaving the text untouched."""

    format_name = "txt"

    def extract(self, data: bytes) -> str:
        return to_valid_text(data.decode("utf-8", errors="replace"))
