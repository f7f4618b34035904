import io

from PIL import Image, ImageDraw, ImageFont

from offline_ocr.export.base import BaseExporter
from offline_ocr.export.models import ExportedFile
from offline_ocr.export.text import export_filename


class ImageExporter(BaseExporter):
    """Draws text onto a white PNG canvas sized to the content."""

    PADDING = 24
    LINE_HEIGHT = 16
    MIN_WIDTH = 400

    def export(self, content: str, name: str) -> ExportedFile:
        font = ImageFont.load_default()
        lines = content.splitlines() or [""]
        measure = ImageDraw.Draw(Image.new("RGB", (1, 1)))
        text_width = max(int(measure.textlength(line, font=font)) for line in lines)
        width = max(self.MIN_WIDTH, text_width + 2 * self.PADDING)
        height = len(lines) * self.LINE_HEIGHT + 2 * self.PADDING

        image = Image.new("RGB", (width, height), "white")
        draw = ImageDraw.Draw(image)
        for i, line in enumerate(lines):
            draw.text((self.PADDING, self.PADDING + i * self.LINE_HEIGHT), line, fill="black", font=font)

        buf = io.BytesIO()
        image.save(buf, format="PNG")
        return ExportedFile(
            filename=export_filename(name, "png"),
            media_type="image/png",
            data=buf.getvalue(),
        )
