import gzip
import io
from collections.abc import Callable

import pytest
from docx import Document
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas


def _png_bytes(size: tuple[int, int] = (120, 60), color: str = "white") -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color).save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def make_pdf() -> Callable[[int], bytes]:
    """Build a PDF with the given number of pages, each with known text."""

    def _make(pages: int) -> bytes:
        buf = io.BytesIO()
        c = canvas.Canvas(buf, pagesize=letter)
        for number in range(1, pages + 1):
            c.drawString(72, 720, f"Page {number} content")
            c.showPage()
        c.save()
        return buf.getvalue()

    return _make


@pytest.fixture()
def sample_pdf_bytes(make_pdf: Callable[[int], bytes]) -> bytes:
    return make_pdf(1)


@pytest.fixture()
def png_bytes() -> bytes:
    return _png_bytes()


@pytest.fixture()
def animated_gif_bytes() -> bytes:
    """A GIF with three frames of different colors."""
    frames = [Image.new("RGB", (40, 40), color) for color in ("red", "green", "blue")]
    buf = io.BytesIO()
    frames[0].save(buf, format="GIF", save_all=True, append_images=frames[1:])
    return buf.getvalue()


@pytest.fixture()
def docx_text_only_bytes() -> bytes:
    document = Document()
    document.add_paragraph("Quarterly report")
    document.add_paragraph("Revenue grew.")
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def docx_with_images_bytes() -> bytes:
    document = Document()
    document.add_paragraph("Scanned attachments follow.")
    document.add_picture(io.BytesIO(_png_bytes((80, 40), "white")))
    document.add_picture(io.BytesIO(_png_bytes((60, 30), "gray")))
    buf = io.BytesIO()
    document.save(buf)
    return buf.getvalue()


@pytest.fixture()
def empty_docx_bytes() -> bytes:
    buf = io.BytesIO()
    Document().save(buf)
    return buf.getvalue()


@pytest.fixture()
def traineddata_bytes() -> bytes:
    return b"fake-traineddata-model" * 8


@pytest.fixture()
def traineddata_gz_bytes(traineddata_bytes: bytes) -> bytes:
    return gzip.compress(traineddata_bytes)
