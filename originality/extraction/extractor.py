from collections.abc import Mapping

from originality.extraction.base import BaseTextExtractor
from originality.formats import UnsupportedFormatError, extension_of


class FormatExtractor:
    """Maps a filename's extension to the adapter that extracts its text.

    Detection is by extension only. The mapping is the single place where
    the format of an upload is decided.
    """

    def __init__(self, adapters: Mapping[str, BaseTextExtractor]) -> None:
        self._adapters = dict(adapters)

    @property
    def extensions(self) -> tuple[str, ...]:
        return tuple(self._adapters)

    def adapter_for(self, filename: str) -> BaseTextExtractor:
        """Raises UnsupportedFormatError if no adapter handles the extension."""
        adapter = self._adapters.get(extension_of(filename))
        if adapter is None:
            raise UnsupportedFormatError(filename)
        return adapter

    def extract(self, filename: str, data: bytes) -> str:
        """Extract plain text from an upload.

        Raises:
            UnsupportedFormatError: if the extension is not supported.
            CorruptDocumentError: if the adapter cannot parse the bytes.
        """
        return self.adapter_for(filename).extract(data)
