from enum import Enum

from offline_ocr.jobs.exceptions import InvalidInputError

DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF_MIME_TYPE = "application/pdf"


class ContentClass(str, Enum):
    """Declared content class of an intake document."""

    IMAGE = "image"
    PDF = "pdf"
    DOCX = "docx"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @classmethod
    def parse(cls, value: "ContentClass | str") -> "ContentClass":
        """Return the content class for a tag.

        Raises:
            InvalidInputError: for an unknown tag.
        """
        try:
            return cls(value)
        except ValueError:
            raise InvalidInputError(f"Unsupported content class '{value}'") from None

    @classmethod
    def sniff(cls, mime_type: str | None, filename: str = "") -> "ContentClass | None":
        """Classify by MIME type first, then by file extension."""
        mime = (mime_type or "").lower()
        name = filename.lower()
        if mime.startswith("image/"):
            return cls.IMAGE
        if mime == PDF_MIME_TYPE or name.endswith(".pdf"):
            return cls.PDF
        if mime == DOCX_MIME_TYPE or name.endswith(".docx"):
            return cls.DOCX
        if name.endswith((".png", ".jpg", ".jpeg", ".webp", ".gif", ".bmp", ".tif", ".tiff")):
            return cls.IMAGE
        return None


_LABELS = {
    ContentClass.IMAGE: "Image",
    ContentClass.PDF: "PDF",
    ContentClass.DOCX: "Word Document",
}
