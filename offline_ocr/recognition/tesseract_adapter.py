from pathlib import Path

import pytesseract
from PIL import Image

from offline_ocr.recognition.base import BaseRecognitionEngine, ProgressSink
from offline_ocr.recognition.exceptions import PageRecognitionError
from offline_ocr.recognition.models import RecognitionResult


class TesseractAdapter(BaseRecognitionEngine):
    """Recognizes text with Tesseract, reading models from the local artifact cache."""

    def __init__(self, *, tessdata_dir: Path, oem: int = 1, psm: int = 3) -> None:
        self._tessdata_dir = tessdata_dir
        self._oem = oem
        self._psm = psm

    def recognize(
        self,
        image: Image.Image,
        languages: list[str],
        progress: ProgressSink,
    ) -> RecognitionResult:
        progress.report(0.0)
        try:
            data = pytesseract.image_to_data(
                image,
                lang="+".join(languages),
                config=self._config(),
                output_type=pytesseract.Output.DICT,
            )
        except pytesseract.TesseractNotFoundError as exc:
            raise PageRecognitionError("tesseract binary not found on PATH") from exc
        except Exception as exc:
            raise PageRecognitionError(f"tesseract failed: {exc}") from exc
        progress.report(0.9)
        return RecognitionResult(
            text=assemble_text(data),
            confidence=mean_confidence(data),
        )

    def _config(self) -> str:
        return (
            f'--tessdata-dir "{self._tessdata_dir.resolve()}" '
            f"--oem {self._oem} --psm {self._psm}"
        )


def assemble_text(data: dict[str, list]) -> str:  # type: ignore[type-arg]
    """Join words into lines, lines into blocks and blocks into paragraphs."""
    blocks: dict[int, dict[tuple[int, int], list[str]]] = {}
    for i, raw in enumerate(data["text"]):
        word = str(raw).strip()
        if not word:
            continue
        block = blocks.setdefault(int(data["block_num"][i]), {})
        block.setdefault((int(data["par_num"][i]), int(data["line_num"][i])), []).append(word)

    paragraphs = []
    for block_num in sorted(blocks):
        lines = blocks[block_num]
        paragraphs.append("\n".join(" ".join(lines[key]) for key in sorted(lines)))
    return "\n\n".join(paragraphs)


def mean_confidence(data: dict[str, list]) -> float:  # type: ignore[type-arg]
    """Average word confidence, ignoring Tesseract's -1 for non-word rows."""
    confidences = []
    for conf in data["conf"]:
        try:
            value = float(conf)
        except (TypeError, ValueError):
            continue
        if value >= 0:
            confidences.append(value)
    if not confidences:
        return 0.0
    return max(0.0, min(100.0, sum(confidences) / len(confidences)))
