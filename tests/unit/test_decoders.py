from collections.abc import Callable

import pytest
from PIL import Image

from offline_ocr.formats.content_class import DOCX_MIME_TYPE, ContentClass
from offline_ocr.formats.docx_decoder import NO_EMBEDDED_IMAGES_WARNING, DocxDecoder
from offline_ocr.formats.exceptions import UnsupportedFormatError
from offline_ocr.formats.image_decoder import ImageDecoder
from offline_ocr.formats.models import RenderedPage, ResolvedDocument
from offline_ocr.formats.pdfplumber_adapter import PdfPlumberAdapter
from offline_ocr.formats.pymupdf_adapter import PyMuPdfAdapter
from offline_ocr.formats.resolver import FormatResolver
from offline_ocr.jobs.exceptions import InvalidInputError


class TestContentClassSniff:
    @pytest.mark.parametrize(
        ("mime_type", "filename", "expected"),
        [
            ("image/png", "scan.png", ContentClass.IMAGE),
            ("application/pdf", "report", ContentClass.PDF),
            (None, "Report.PDF", ContentClass.PDF),
            (DOCX_MIME_TYPE, "letter", ContentClass.DOCX),
            (None, "letter.docx", ContentClass.DOCX),
            (None, "photo.tiff", ContentClass.IMAGE),
            ("text/plain", "notes.txt", None),
        ],
    )
    def test_sniff(
        self, mime_type: str | None, filename: str, expected: ContentClass | None
    ) -> None:
        assert ContentClass.sniff(mime_type, filename) == expected

    def test_labels(self) -> None:
        assert ContentClass.DOCX.label == "Word Document"


class TestImageDecoder:
    def test_single_image_yields_one_page(self, png_bytes: bytes) -> None:
        resolved = ImageDecoder().decode(png_bytes)

        assert len(resolved.pages) == 1
        assert resolved.pages[0].size == (120, 60)
        assert resolved.pages[0].image.mode == "RGB"
        assert resolved.extracted_text == ""

    def test_animated_image_yields_page_per_frame(self, animated_gif_bytes: bytes) -> None:
        resolved = ImageDecoder().decode(animated_gif_bytes)

        assert [page.index for page in resolved.pages] == [0, 1, 2]

    def test_garbage_raises(self) -> None:
        with pytest.raises(UnsupportedFormatError, match="Image could not be decoded"):
            ImageDecoder().decode(b"not an image")


class TestPdfRenderers:
    @pytest.mark.parametrize("adapter_cls", [PyMuPdfAdapter, PdfPlumberAdapter])
    def test_renders_every_page(
        self, adapter_cls: type, make_pdf: Callable[[int], bytes]
    ) -> None:
        resolved = adapter_cls(dpi=36).decode(make_pdf(3))

        assert [page.index for page in resolved.pages] == [0, 1, 2]
        assert all(page.image.mode == "RGB" for page in resolved.pages)

    @pytest.mark.parametrize("adapter_cls", [PyMuPdfAdapter, PdfPlumberAdapter])
    def test_corrupt_pdf_raises(self, adapter_cls: type) -> None:
        with pytest.raises(UnsupportedFormatError):
            adapter_cls(dpi=36).decode(b"%PDF-1.4 broken")


class TestDocxDecoder:
    def test_text_only_document(self, docx_text_only_bytes: bytes) -> None:
        resolved = DocxDecoder().decode(docx_text_only_bytes)

        assert resolved.pages == []
        assert resolved.extracted_text == "Quarterly report\nRevenue grew."
        assert resolved.warnings == [NO_EMBEDDED_IMAGES_WARNING]

    def test_embedded_images_become_pages(self, docx_with_images_bytes: bytes) -> None:
        resolved = DocxDecoder().decode(docx_with_images_bytes)

        assert [page.size for page in resolved.pages] == [(80, 40), (60, 30)]
        assert resolved.extracted_text == "Scanned attachments follow."
        assert resolved.warnings == []

    def test_empty_document_is_empty(self, empty_docx_bytes: bytes) -> None:
        resolved = DocxDecoder().decode(empty_docx_bytes)

        assert resolved.is_empty

    def test_garbage_raises(self) -> None:
        with pytest.raises(UnsupportedFormatError, match="Word document could not be opened"):
            DocxDecoder().decode(b"PK not a zip")


class _FixedDecoder(ImageDecoder):
    def decode(self, raw_bytes: bytes) -> ResolvedDocument:
        image = Image.new("RGB", (10, 10))
        return ResolvedDocument(
            pages=[RenderedPage(index=7, image=image), RenderedPage(index=3, image=image)]
        )


class TestFormatResolver:
    def test_pages_are_reindexed(self) -> None:
        resolver = FormatResolver({ContentClass.IMAGE: _FixedDecoder()})

        resolved = resolver.resolve(b"", "image")

        assert [page.index for page in resolved.pages] == [0, 1]

    def test_unknown_class_raises(self) -> None:
        resolver = FormatResolver({ContentClass.IMAGE: ImageDecoder()})

        with pytest.raises(UnsupportedFormatError, match="Unsupported content class"):
            resolver.resolve(b"", "audio")

    def test_unregistered_class_raises(self) -> None:
        resolver = FormatResolver({ContentClass.IMAGE: ImageDecoder()})

        with pytest.raises(UnsupportedFormatError, match="No decoder registered"):
            resolver.resolve(b"", ContentClass.PDF)


class TestContentClassParse:
    def test_accepts_tag(self) -> None:
        assert ContentClass.parse("pdf") == ContentClass.PDF

    def test_unknown_tag_is_invalid_input(self) -> None:
        with pytest.raises(InvalidInputError, match="Unsupported content class"):
            ContentClass.parse("audio")
