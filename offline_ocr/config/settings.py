from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    cache_dir: Path = Path(".ocr-cache")
    artifact_base_url: str = "http://localhost:3000"
    artifact_path_prefix: str = "/tesseract/"
    artifact_fetch_timeout_seconds: int = 60
    prefetch_builtin_languages: bool = True

    recognition_engine: str = "tesseract"
    tesseract_oem: int = 1
    tesseract_psm: int = 3

    pdf_engine: str = "pymupdf"
    render_dpi: int = 200

    pdf_export_font_path: Path | None = None

    slow_page_threshold_seconds: float = 15.0
    max_concurrent_jobs: int = 4
    job_poll_interval_seconds: float = 0.5
