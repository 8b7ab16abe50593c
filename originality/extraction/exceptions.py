class ExtractionError(Exception):
    """Base exception for text extraction errors."""


class CorruptDocumentError(ExtractionError):
    """Raised when a document cannot be parsed by its format adapter."""

    def __init__(self, format_name: str, detail: str) -> None:
        self.format_name = format_name
        self.detail = detail
        super().__init__(f"{format_name} extraction failed: {detail}")
