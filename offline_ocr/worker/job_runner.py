from offline_ocr.jobs.models import JobError
from offline_ocr.jobs.progress import ProgressAggregator
from offline_ocr.jobs.repository import JobRepository
from offline_ocr.logging.logger import Log
from offline_ocr.processor.pipeline import PipelineContext
from offline_ocr.processor.processor import Processor


class JobRunner:
    """Run one job once and catch every exception at the job boundary."""

    def __init__(self, processor: Processor, job_repo: JobRepository) -> None:
        self._processor = processor
        self._job_repo = job_repo

    def run(self, job_id: str) -> None:
        """Execute a pending job. A job that is not pending is left untouched."""
        if not self._job_repo.claim(job_id):
            Log.debug(f"Job {job_id} is not pending, skipping")
            return

        try:
            self._processor.process(self._build_context(job_id))
            Log.info(f"Job {job_id} completed successfully")
        except Exception as exc:
            self._handle_failure(job_id, exc)

    def _build_context(self, job_id: str) -> PipelineContext:
        job = self._job_repo.get(job_id)
        Log.info(
            "Running job", job_id=job_id, document=job.name, content=job.content_class.value
        )
        return PipelineContext(
            job_id=job_id,
            languages=list(job.languages),
            content_class=job.content_class,
            raw_bytes=self._job_repo.take_document(job_id),
            aggregator=ProgressAggregator(self._job_repo, job_id),
            is_cancelled=lambda: self._job_repo.is_cancel_requested(job_id),
        )

    def _handle_failure(self, job_id: str, exc: Exception) -> None:
        """Record the failure unless the pipeline already moved the job to error."""
        Log.error(f"Job {job_id} failed: {exc}")
        if self._job_repo.mark_failed(job_id, JobError.from_exception(exc)):
            Log.warning(f"Job {job_id} failed outside the pipeline")
