import io

from PIL import Image, ImageSequence

from offline_ocr.formats.base import BaseDocumentDecoder
from offline_ocr.formats.exceptions import UnsupportedFormatError
from offline_ocr.formats.models import RenderedPage, ResolvedDocument


def open_rgb_frames(raw_bytes: bytes) -> list[Image.Image]:
    """Decode every frame of a raster image into standalone RGB images."""
    with Image.open(io.BytesIO(raw_bytes)) as img:
        return [frame.convert("RGB") for frame in ImageSequence.Iterator(img)]


class ImageDecoder(BaseDocumentDecoder):
    """Decodes raster images with Pillow; multi-frame images yield one page per frame."""

    def decode(self, raw_bytes: bytes) -> ResolvedDocument:
        try:
            frames = open_rgb_frames(raw_bytes)
        except Exception as exc:
            raise UnsupportedFormatError(f"Image could not be decoded: {exc}") from exc
        return ResolvedDocument(
            pages=[RenderedPage(index=i, image=frame) for i, frame in enumerate(frames)]
        )
