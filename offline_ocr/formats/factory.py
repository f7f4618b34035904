from offline_ocr.config.settings import Settings
from offline_ocr.formats.base import BaseDocumentDecoder
from offline_ocr.formats.pdfplumber_adapter import PdfPlumberAdapter
from offline_ocr.formats.pymupdf_adapter import PyMuPdfAdapter


class PdfRendererFactory:
    """Creates the correct PDF rasterizer based on settings."""

    ADAPTERS: dict[str, type[PdfPlumberAdapter] | type[PyMuPdfAdapter]] = {
        "pdfplumber": PdfPlumberAdapter,
        "pymupdf": PyMuPdfAdapter,
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseDocumentDecoder:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(dpi=settings.render_dpi)
