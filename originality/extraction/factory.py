from typing import ClassVar

from originality.config.settings import Settings
from originality.extraction.base import BaseTextExtractor
from originality.extraction.docx_adapter import DocxAdapter
from originality.extraction.extractor import FormatExtractor
from originality.extraction.legacy_office_adapter import LegacyOfficeAdapter
from originality.extraction.pdfplumber_adapter import PdfPlumberAdapter
from originality.extraction.pptx_adapter import PptxAdapter
from originality.extraction.pymupdf_adapter import PyMuPdfAdapter
from originality.extraction.spreadsheet_adapter import XlsAdapter, XlsxAdapter
from originality.extraction.text_adapter import PlainTextAdapter


class ExtractorFactory:
    """Creates the FormatExtractor with the configured PDF engine."""

    PDF_ENGINES: ClassVar[dict[str, type[BaseTextExtractor]]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> FormatExtractor:
        return FormatExtractor(
            {
                ".txt": PlainTextAdapter(),
                ".docx": DocxAdapter(),
                ".pdf": cls.create_pdf_adapter(settings),
                ".xlsx": XlsxAdapter(),
                ".xls": XlsAdapter(),
                ".pptx": PptxAdapter(),
                ".ppt": LegacyOfficeAdapter("ppt"),
                ".doc": LegacyOfficeAdapter("doc"),
            }
        )

    @classmethod
    def create_pdf_adapter(cls, settings: Settings) -> BaseTextExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.PDF_ENGINES.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.PDF_ENGINES)}"
            )
        return adapter_cls()
