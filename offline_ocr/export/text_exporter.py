from offline_ocr.export.base import BaseExporter
from offline_ocr.export.models import ExportedFile
from offline_ocr.export.text import export_filename


class TextExporter(BaseExporter):
    def export(self, content: str, name: str) -> ExportedFile:
        return ExportedFile(
            filename=export_filename(name, "txt"),
            media_type="text/plain; charset=utf-8",
            data=content.encode("utf-8"),
        )
