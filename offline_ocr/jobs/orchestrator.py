"""Job orchestrator: intake, execution and read access for OCR jobs."""

import uuid
from collections.abc import Iterable
from typing import BinaryIO

from offline_ocr.artifacts.cache import ArtifactCache
from offline_ocr.artifacts.models import LanguageArtifact
from offline_ocr.config.settings import Settings
from offline_ocr.export.factory import ExporterFactory
from offline_ocr.export.models import ExportedFile, ExportFormat
from offline_ocr.export.text import aggregate_text
from offline_ocr.formats.content_class import ContentClass
from offline_ocr.jobs.exceptions import InvalidInputError, JobCancelledError
from offline_ocr.jobs.models import Job, JobError, JobStatus
from offline_ocr.jobs.repository import JobRepository
from offline_ocr.logging.logger import Log
from offline_ocr.worker.job_runner import JobRunner
from offline_ocr.worker.worker import Worker


class JobOrchestrator:
    """Owns the job table and drives each job through its pipeline.

    submit() only records a pending job; the admission loop (see start())
    dispatches it to the bounded worker pool. run() executes one job in the
    calling thread and is a no-op for jobs that are not pending. Callers
    only ever receive snapshots of jobs.
    """

    def __init__(
        self,
        *,
        job_repo: JobRepository,
        cache: ArtifactCache,
        job_runner: JobRunner,
        settings: Settings,
    ) -> None:
        self._job_repo = job_repo
        self._cache = cache
        self._job_runner = job_runner
        self._worker = Worker(job_repo, job_runner, settings)
        self._pdf_font_path = settings.pdf_export_font_path

    def submit(
        self,
        document: bytes | BinaryIO,
        content_class: ContentClass | str,
        languages: Iterable[str],
        name: str = "document",
    ) -> str:
        """Admit a document as a pending job and return its id.

        Raises:
            InvalidInputError: for an unknown content class, an empty language
                set or an unregistered language. No job is created.
        """
        content_class = ContentClass.parse(content_class)
        codes = self._normalize_languages(languages)

        raw_bytes = document if isinstance(document, bytes) else document.read()
        job = Job(
            id=uuid.uuid4().hex,
            name=name,
            content_class=content_class,
            size=len(raw_bytes),
            languages=tuple(codes),
        )
        self._job_repo.add(job, raw_bytes)
        Log.info(
            "Job admitted",
            job_id=job.id,
            document=name,
            content=content_class.value,
            size=job.size,
            langs="+".join(codes),
        )
        return job.id

    def run(self, job_id: str) -> None:
        """Execute a pending job to a terminal state in the calling thread."""
        self._job_runner.run(job_id)

    def get_snapshot(self, job_id: str) -> Job:
        return self._job_repo.get(job_id)

    def list_snapshots(self) -> list[Job]:
        return self._job_repo.snapshots()

    def cancel(self, job_id: str) -> None:
        """Cancel a job in any state; terminal jobs are left as they are."""
        error = JobError.from_exception(JobCancelledError(f"Job {job_id} was cancelled"))
        previous = self._job_repo.cancel(job_id, error)
        if previous == JobStatus.PENDING:
            Log.info(f"Job {job_id} cancelled before start")
        elif previous == JobStatus.PROCESSING:
            Log.info(f"Cancellation requested for job {job_id}")

    def discard(self, job_id: str) -> None:
        """Forget a terminal job."""
        job = self._job_repo.get(job_id)
        if not job.is_terminal:
            raise InvalidInputError(f"Job {job_id} is still {job.status.value}")
        self._job_repo.remove(job_id)
        Log.debug(f"Job {job_id} discarded")

    def import_language(
        self,
        code: str,
        raw_bytes: bytes,
        label: str | None = None,
    ) -> LanguageArtifact:
        return self._cache.import_from_bytes(code, raw_bytes, label=label)

    def export(self, job_id: str, fmt: ExportFormat | str) -> ExportedFile:
        """Serialize a completed job's aggregated text.

        Raises:
            InvalidInputError: if the job has not completed.
        """
        job = self._job_repo.get(job_id)
        if job.status != JobStatus.COMPLETED:
            raise InvalidInputError(f"Job {job_id} is {job.status.value}, not completed")
        exporter = ExporterFactory.create(fmt, pdf_font_path=self._pdf_font_path)
        return exporter.export(aggregate_text(job), job.name)

    def start(self) -> None:
        """Start dispatching pending jobs in the background."""
        self._worker.start()

    def shutdown(self, timeout: float | None = None) -> None:
        self._worker.stop(timeout)

    def run_until_idle(self) -> None:
        """Dispatch jobs in the calling thread until none is pending or running."""
        self._worker.run(stop_when_idle=True)

    def _normalize_languages(self, languages: Iterable[str]) -> list[str]:
        if isinstance(languages, str):
            languages = [languages]
        codes: list[str] = []
        for raw in languages:
            code = raw.strip().lower()
            if code and code not in codes:
                codes.append(code)
        if not codes:
            raise InvalidInputError("At least one language is required")
        unknown = [code for code in codes if code not in self._cache.registry]
        if unknown:
            raise InvalidInputError(f"Unknown language(s): {', '.join(unknown)}")
        return codes
