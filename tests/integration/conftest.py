import os
import shutil
from pathlib import Path

import pytest

_TESSDATA_CANDIDATES = (
    "/usr/share/tesseract-ocr/5/tessdata",
    "/usr/share/tesseract-ocr/4.00/tessdata",
    "/usr/share/tessdata",
    "/usr/local/share/tessdata",
    "/opt/homebrew/share/tessdata",
)


@pytest.fixture(scope="session")
def system_eng_traineddata() -> Path:
    """Path of an installed eng.traineddata; skips when Tesseract is unavailable."""
    if shutil.which("tesseract") is None:
        pytest.skip("tesseract binary not installed")
    candidates = [os.environ.get("TESSDATA_PREFIX", ""), *_TESSDATA_CANDIDATES]
    for directory in candidates:
        if not directory:
            continue
        path = Path(directory) / "eng.traineddata"
        if path.is_file():
            return path
    pytest.skip("eng.traineddata not found; set TESSDATA_PREFIX")
