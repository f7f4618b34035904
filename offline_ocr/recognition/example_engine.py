"""Example recognition engine.

Use this module as a reference when implementing new engine adapters.
Implement BaseRecognitionEngine and register the engine in RecognitionEngineFactory.
"""

from PIL import Image

from offline_ocr.recognition.base import BaseRecognitionEngine, ProgressSink
from offline_ocr.recognition.models import RecognitionResult


class ExampleRecognitionEngine(BaseRecognitionEngine):
    """Example engine that returns a fixed description of the page.

    No OCR binary required. Useful for local development, tests, and as a
    template for real engine adapters.
    """

    DEFAULT_CONFIDENCE = 100.0

    def recognize(
        self,
        image: Image.Image,
        languages: list[str],
        progress: ProgressSink,
    ) -> RecognitionResult:
        progress.report(0.5)
        width, height = image.size
        return RecognitionResult(
            text=f"[{'+'.join(languages)}] page {width}x{height}",
            confidence=self.DEFAULT_CONFIDENCE,
        )
