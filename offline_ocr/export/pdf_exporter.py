import io
import textwrap
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from offline_ocr.export.base import BaseExporter
from offline_ocr.export.models import ExportedFile
from offline_ocr.export.text import export_filename
from offline_ocr.formats.content_class import PDF_MIME_TYPE
from offline_ocr.logging.logger import Log


class PdfExporter(BaseExporter):
    """Writes text as wrapped lines on A4 pages using reportlab.

    The built-in Helvetica only covers the Windows-1252 character set. Pass a
    TrueType font (e.g. DejaVuSans.ttf) to render Cyrillic, Greek or other
    scripts; CJK and right-to-left text need a font that covers them and are
    drawn without shaping.
    """

    MARGIN = 50
    FONT = "Helvetica"
    FONT_ENCODING = "cp1252"
    FONT_SIZE = 11
    LEADING = 14
    WRAP_WIDTH = 90

    def __init__(self, font_path: Path | None = None) -> None:
        self._font = self.FONT
        if font_path is not None:
            self._font = self._register_font(Path(font_path))

    @property
    def font(self) -> str:
        return self._font

    def export(self, content: str, name: str) -> ExportedFile:
        if self._font == self.FONT and not self._is_encodable(content):
            Log.warning(
                "PDF export text has characters the built-in font cannot render; "
                "set PDF_EXPORT_FONT_PATH to a TrueType font covering them",
                name=name,
            )
        buf = io.BytesIO()
        pdf = canvas.Canvas(buf, pagesize=A4)
        _width, height = A4
        y = height - self.MARGIN
        pdf.setFont(self._font, self.FONT_SIZE)
        for line in self._wrap(content):
            if y < self.MARGIN:
                pdf.showPage()
                pdf.setFont(self._font, self.FONT_SIZE)
                y = height - self.MARGIN
            pdf.drawString(self.MARGIN, y, line)
            y -= self.LEADING
        pdf.save()
        return ExportedFile(
            filename=export_filename(name, "pdf"),
            media_type=PDF_MIME_TYPE,
            data=buf.getvalue(),
        )

    def _register_font(self, font_path: Path) -> str:
        font_name = f"Export-{font_path.stem}"
        if font_name in pdfmetrics.getRegisteredFontNames():
            return font_name
        try:
            pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
        except (TTFError, OSError) as exc:
            Log.warning(f"Could not load PDF font '{font_path}', using {self.FONT}: {exc}")
            return self.FONT
        Log.debug(f"Registered PDF font '{font_name}' from {font_path}")
        return font_name

    def _is_encodable(self, content: str) -> bool:
        try:
            content.encode(self.FONT_ENCODING)
        except UnicodeEncodeError:
            return False
        return True

    def _wrap(self, content: str) -> list[str]:
        lines: list[str] = []
        for raw_line in content.splitlines() or [""]:
            lines.extend(textwrap.wrap(raw_line, self.WRAP_WIDTH) or [""])
        return lines
