import time

from offline_ocr.formats.models import RenderedPage
from offline_ocr.logging.logger import Log
from offline_ocr.recognition.base import BaseRecognitionEngine, NullProgressSink, ProgressSink
from offline_ocr.recognition.exceptions import PageRecognitionError
from offline_ocr.recognition.models import PageOutcome, RecognitionResult


class RecognitionGateway:
    """Calls the recognition engine for one page and times the call.

    Failures never propagate: they come back as a PageOutcome carrying
    a PageRecognitionError.
    """

    def __init__(self, engine: BaseRecognitionEngine) -> None:
        self._engine = engine

    def recognize(
        self,
        page: RenderedPage,
        languages: list[str],
        progress: ProgressSink | None = None,
    ) -> PageOutcome:
        sink = progress or NullProgressSink()
        start = time.perf_counter()
        try:
            if not languages:
                raise PageRecognitionError("No languages given for recognition")
            result = self._engine.recognize(page.image, list(languages), sink)
            result = RecognitionResult(
                text=result.text,
                confidence=max(0.0, min(100.0, float(result.confidence))),
            )
        except PageRecognitionError as exc:
            return self._failed(page, start, exc)
        except Exception as exc:
            return self._failed(page, start, PageRecognitionError(str(exc) or type(exc).__name__))

        duration = time.perf_counter() - start
        Log.debug(
            f"Page {page.index + 1} recognized in {duration:.2f}s "
            f"(confidence {result.confidence:.1f})"
        )
        return PageOutcome(page_index=page.index, duration_seconds=duration, result=result)

    @staticmethod
    def _failed(page: RenderedPage, start: float, error: PageRecognitionError) -> PageOutcome:
        duration = time.perf_counter() - start
        Log.warning(f"Page {page.index + 1} recognition failed: {error}")
        return PageOutcome(page_index=page.index, duration_seconds=duration, error=error)
