from offline_ocr.config.settings import Settings
from offline_ocr.recognition.base import BaseRecognitionEngine
from offline_ocr.recognition.example_engine import ExampleRecognitionEngine
from offline_ocr.recognition.tesseract_adapter import TesseractAdapter


class RecognitionEngineFactory:
    """Creates the configured recognition engine."""

    ENGINES = ("tesseract", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseRecognitionEngine:
        engine = settings.recognition_engine.lower()
        if engine == "tesseract":
            return TesseractAdapter(
                tessdata_dir=settings.cache_dir,
                oem=settings.tesseract_oem,
                psm=settings.tesseract_psm,
            )
        if engine == "example":
            return ExampleRecognitionEngine()
        raise ValueError(
            f"Unknown recognition engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
