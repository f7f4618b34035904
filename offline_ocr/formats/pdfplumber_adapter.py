import io

import pdfplumber

from offline_ocr.formats.base import BaseDocumentDecoder
from offline_ocr.formats.exceptions import UnsupportedFormatError
from offline_ocr.formats.models import RenderedPage, ResolvedDocument


class PdfPlumberAdapter(BaseDocumentDecoder):
    """Rasterizes PDF pages using pdfplumber."""

    def __init__(self, dpi: int = 200) -> None:
        self._dpi = dpi

    def decode(self, raw_bytes: bytes) -> ResolvedDocument:
        try:
            with pdfplumber.open(io.BytesIO(raw_bytes)) as pdf:
                pages = [
                    RenderedPage(
                        index=i,
                        image=page.to_image(resolution=self._dpi).original.convert("RGB"),
                    )
                    for i, page in enumerate(pdf.pages)
                ]
            return ResolvedDocument(pages=pages)
        except UnsupportedFormatError:
            raise
        except Exception as exc:
            raise UnsupportedFormatError(f"pdfplumber rendering failed: {exc}") from exc
