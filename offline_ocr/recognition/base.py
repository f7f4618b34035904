from abc import ABC, abstractmethod

from PIL import Image

from offline_ocr.recognition.models import RecognitionResult


class ProgressSink(ABC):
    """Receives intra-page progress as a fraction in [0, 1]."""

    @abstractmethod
    def report(self, fraction: float) -> None: ...


class NullProgressSink(ProgressSink):
    def report(self, fraction: float) -> None:
        _ = fraction


class BaseRecognitionEngine(ABC):
    """Contract for all visual-to-text recognition adapters."""

    @abstractmethod
    def recognize(
        self,
        image: Image.Image,
        languages: list[str],
        progress: ProgressSink,
    ) -> RecognitionResult:
        """Recognize text on one page.

        Args:
            image: Rendered page.
            languages: Ordered, non-empty language codes.
            progress: Sink for intra-page progress reports.

        Returns:
            RecognitionResult with text and confidence in [0, 100].

        Raises:
            PageRecognitionError: on any engine failure.
        """
