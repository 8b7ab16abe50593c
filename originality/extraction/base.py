from abc import ABC, abstractmethod


class BaseTextExtractor(ABC):
    """Contract for all format-specific text extraction adapters."""

    format_name: str = ""

    @abstractmethod
    def extract(self, data: bytes) -> str:
        """Extract plain text from raw file bytes.

        Args:
            data: Raw file content.

        Returns:
            Extracted text; an empty string when the document holds no text.

        Raises:
            CorruptDocumentError: if the bytes cannot be parsed as this format.
        """
