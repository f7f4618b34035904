from offline_ocr.config.settings import Settings
from offline_ocr.formats.base import BaseDocumentDecoder
from offline_ocr.formats.content_class import ContentClass
from offline_ocr.formats.docx_decoder import DocxDecoder
from offline_ocr.formats.exceptions import UnsupportedFormatError
from offline_ocr.formats.factory import PdfRendererFactory
from offline_ocr.formats.image_decoder import ImageDecoder
from offline_ocr.formats.models import ResolvedDocument
from offline_ocr.logging.logger import Log


class FormatResolver:
    """Routes a document to the decoder registered for its content class."""

    def __init__(self, decoders: dict[ContentClass, BaseDocumentDecoder]) -> None:
        self._decoders = dict(decoders)

    def resolve(self, raw_bytes: bytes, content_class: ContentClass | str) -> ResolvedDocument:
        """Decode a document into ordered pages and/or extracted text.

        Raises:
            UnsupportedFormatError: for unknown classes or undecodable bytes.
        """
        try:
            content_class = ContentClass(content_class)
        except ValueError as exc:
            raise UnsupportedFormatError(f"Unsupported content class '{content_class}'") from exc
        decoder = self._decoders.get(content_class)
        if decoder is None:
            raise UnsupportedFormatError(f"No decoder registered for {content_class.label}")

        resolved = decoder.decode(raw_bytes)
        # Decoders may number pages independently; the job relies on 0..n-1.
        for index, page in enumerate(resolved.pages):
            page.index = index
        Log.debug(
            f"Resolved {content_class.label}: {len(resolved.pages)} pages, "
            f"{len(resolved.extracted_text)} chars of text"
        )
        return resolved


def build_format_resolver(settings: Settings) -> FormatResolver:
    return FormatResolver(
        {
            ContentClass.IMAGE: ImageDecoder(),
            ContentClass.PDF: PdfRendererFactory.create(settings),
            ContentClass.DOCX: DocxDecoder(),
        }
    )
