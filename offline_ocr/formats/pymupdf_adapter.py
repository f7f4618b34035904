import pymupdf
from PIL import Image

from offline_ocr.formats.base import BaseDocumentDecoder
from offline_ocr.formats.exceptions import UnsupportedFormatError
from offline_ocr.formats.models import RenderedPage, ResolvedDocument


class PyMuPdfAdapter(BaseDocumentDecoder):
    """Rasterizes PDF pages using PyMuPDF."""

    def __init__(self, dpi: int = 200) -> None:
        self._dpi = dpi

    def decode(self, raw_bytes: bytes) -> ResolvedDocument:
        try:
            with pymupdf.open(stream=raw_bytes, filetype="pdf") as doc:  # type: ignore[no-untyped-call]
                pages = [
                    RenderedPage(index=i, image=self._render(page))
                    for i, page in enumerate(doc)
                ]
            return ResolvedDocument(pages=pages)
        except UnsupportedFormatError:
            raise
        except Exception as exc:
            raise UnsupportedFormatError(f"pymupdf rendering failed: {exc}") from exc

    def _render(self, page: pymupdf.Page) -> Image.Image:
        pixmap = page.get_pixmap(dpi=self._dpi, alpha=False)
        return Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)
