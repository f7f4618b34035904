from dataclasses import dataclass

from offline_ocr.recognition.exceptions import PageRecognitionError


@dataclass(frozen=True)
class RecognitionResult:
    """Text recognized on one page with its mean confidence (0-100)."""

    text: str
    confidence: float


@dataclass(frozen=True)
class PageOutcome:
    """Result of one gateway call: either a result or a page-level error."""

    page_index: int
    duration_seconds: float
    result: RecognitionResult | None = None
    error: PageRecognitionError | None = None

    @property
    def ok(self) -> bool:
        return self.result is not None
