from pathlib import Path

from offline_ocr.export.base import BaseExporter
from offline_ocr.export.docx_exporter import DocxExporter
from offline_ocr.export.image_exporter import ImageExporter
from offline_ocr.export.models import ExportFormat
from offline_ocr.export.pdf_exporter import PdfExporter
from offline_ocr.export.text_exporter import TextExporter


class ExporterFactory:
    """Creates the exporter for a target format."""

    ADAPTERS: dict[ExportFormat, type[BaseExporter]] = {
        ExportFormat.TXT: TextExporter,
        ExportFormat.PDF: PdfExporter,
        ExportFormat.DOCX: DocxExporter,
        ExportFormat.PNG: ImageExporter,
    }

    @classmethod
    def create(cls, fmt: ExportFormat | str, pdf_font_path: Path | None = None) -> BaseExporter:
        try:
            export_format = fmt if isinstance(fmt, ExportFormat) else ExportFormat(fmt.lower())
        except ValueError:
            raise ValueError(
                f"Unknown export format '{fmt}'. Choose from: {[f.value for f in ExportFormat]}"
            ) from None
        if export_format == ExportFormat.PDF:
            return PdfExporter(font_path=pdf_font_path)
        return cls.ADAPTERS[export_format]()
