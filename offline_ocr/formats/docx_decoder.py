import io

from docx import Document
from docx.oxml.ns import qn
from PIL import Image

from offline_ocr.formats.base import BaseDocumentDecoder
from offline_ocr.formats.exceptions import UnsupportedFormatError
from offline_ocr.formats.image_decoder import open_rgb_frames
from offline_ocr.formats.models import RenderedPage, ResolvedDocument
from offline_ocr.logging.logger import Log

NO_EMBEDDED_IMAGES_WARNING = (
    "No embedded images found in the document; OCR is limited to textual extraction."
)


class DocxDecoder(BaseDocumentDecoder):
    """Extracts body text and embedded images from a Word document."""

    def decode(self, raw_bytes: bytes) -> ResolvedDocument:
        try:
            document = Document(io.BytesIO(raw_bytes))
        except Exception as exc:
            raise UnsupportedFormatError(f"Word document could not be opened: {exc}") from exc

        text = self._extract_text(document)
        images = self._extract_images(document)
        warnings = [] if images else [NO_EMBEDDED_IMAGES_WARNING]
        return ResolvedDocument(
            pages=[RenderedPage(index=i, image=img) for i, img in enumerate(images)],
            extracted_text=text,
            warnings=warnings,
        )

    @staticmethod
    def _extract_text(document) -> str:  # type: ignore[no-untyped-def]
        lines = [paragraph.text for paragraph in document.paragraphs]
        for table in document.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                if any(cells):
                    lines.append("\t".join(cells))
        return "\n".join(line for line in lines if line.strip()).strip()

    @staticmethod
    def _extract_images(document) -> list[Image.Image]:  # type: ignore[no-untyped-def]
        """Embedded images in body order, each image part once."""
        images: list[Image.Image] = []
        seen: set[str] = set()
        related = document.part.related_parts
        for blip in document.element.body.iter(qn("a:blip")):
            rel_id = blip.get(qn("r:embed"))
            part = related.get(rel_id) if rel_id else None
            if part is None or str(part.partname) in seen:
                continue
            seen.add(str(part.partname))
            try:
                images.extend(open_rgb_frames(part.blob))
            except Exception as exc:
                # Vector formats (EMF/WMF) cannot be rasterized here.
                Log.debug(f"Skipping embedded image {part.partname}: {exc}")
        return images
