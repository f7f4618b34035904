import io

from docx import Document

from offline_ocr.export.base import BaseExporter
from offline_ocr.export.models import ExportedFile
from offline_ocr.export.text import export_filename
from offline_ocr.formats.content_class import DOCX_MIME_TYPE


class DocxExporter(BaseExporter):
    """Writes one paragraph per line using python-docx."""

    def export(self, content: str, name: str) -> ExportedFile:
        document = Document()
        for line in content.splitlines():
            document.add_paragraph(line)
        buf = io.BytesIO()
        document.save(buf)
        return ExportedFile(
            filename=export_filename(name, "docx"),
            media_type=DOCX_MIME_TYPE,
            data=buf.getvalue(),
        )
