import io
from pathlib import Path

import pytest
from PIL import Image, ImageDraw, ImageFont

from offline_ocr.artifacts.fetcher import BaseArtifactFetcher
from offline_ocr.artifacts.models import LanguageArtifact
from offline_ocr.config.settings import Settings
from offline_ocr.formats.content_class import ContentClass
from offline_ocr.jobs.models import JobStatus
from offline_ocr.main import build_orchestrator


class _OfflineFetcher(BaseArtifactFetcher):
    def fetch(self, artifact: LanguageArtifact) -> bytes:
        raise AssertionError(f"unexpected fetch of {artifact.code}")


def _text_image(text: str) -> bytes:
    image = Image.new("RGB", (900, 200), "white")
    draw = ImageDraw.Draw(image)
    draw.text((40, 60), text, fill="black", font=ImageFont.load_default(size=64))
    buf = io.BytesIO()
    image.save(buf, format="PNG")
    return buf.getvalue()


@pytest.mark.integration
class TestTesseractIntegration:
    def test_recognizes_rendered_text(
        self, tmp_path: Path, system_eng_traineddata: Path
    ) -> None:
        settings = Settings(
            cache_dir=tmp_path,
            prefetch_builtin_languages=False,
            recognition_engine="tesseract",
        )
        orchestrator = build_orchestrator(settings, fetcher=_OfflineFetcher())
        orchestrator.import_language("eng", system_eng_traineddata.read_bytes(), label="English")

        job_id = orchestrator.submit(_text_image("HELLO WORLD"), ContentClass.IMAGE, ["eng"])
        orchestrator.run(job_id)

        job = orchestrator.get_snapshot(job_id)
        assert job.status == JobStatus.COMPLETED
        segment = job.ordered_segments()[0]
        assert "HELLO" in segment.text.upper()
        assert 0.0 <= segment.confidence <= 100.0
