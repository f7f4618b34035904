import copy
import threading

from offline_ocr.jobs.exceptions import JobNotFoundError
from offline_ocr.jobs.models import Job, JobError, JobStatus, Segment, utcnow
from offline_ocr.logging.logger import Log


class JobRepository:
    """In-memory job table.

    All mutations happen under one lock and every read returns a deep copy
    taken under that lock, so observers never see a torn job. Status only
    moves forward, and terminal jobs are never mutated again.
    """

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._jobs: dict[str, Job] = {}
        self._documents: dict[str, bytes] = {}
        self._cancel_requested: set[str] = set()

    def add(self, job: Job, document: bytes) -> None:
        with self._lock:
            self._jobs[job.id] = job
            self._documents[job.id] = document

    def get(self, job_id: str) -> Job:
        """Return a snapshot of one job."""
        with self._lock:
            return copy.deepcopy(self._require(job_id))

    def snapshots(self) -> list[Job]:
        """Snapshots of all jobs, newest first."""
        with self._lock:
            jobs = [copy.deepcopy(job) for job in self._jobs.values()]
        return sorted(jobs, key=lambda job: job.created_at, reverse=True)

    def pending_ids(self) -> list[str]:
        """Ids of pending jobs in admission order."""
        with self._lock:
            return [job.id for job in self._jobs.values() if job.status == JobStatus.PENDING]

    def claim(self, job_id: str) -> bool:
        """Move a pending job to processing. Returns False if it was not pending."""
        with self._lock:
            job = self._jobs.get(job_id)
            if job is None or job.status != JobStatus.PENDING:
                return False
            job.status = JobStatus.PROCESSING
            return True

    def take_document(self, job_id: str) -> bytes:
        """Hand over the raw document of a job; the table keeps no copy."""
        with self._lock:
            self._require(job_id)
            return self._documents.pop(job_id, b"")

    def set_page_count(self, job_id: str, page_count: int) -> None:
        with self._lock:
            job = self._active(job_id)
            if job is not None:
                job.page_count = page_count

    def set_extracted_text(self, job_id: str, text: str) -> None:
        with self._lock:
            job = self._active(job_id)
            if job is not None:
                job.extracted_text = text

    def update_progress(self, job_id: str, progress: float) -> float:
        """Raise progress to the given value; never lowers it. Returns the stored value."""
        with self._lock:
            job = self._active(job_id)
            if job is None:
                return self._require(job_id).progress
            job.progress = max(job.progress, max(0.0, min(1.0, progress)))
            return job.progress

    def add_warning(self, job_id: str, message: str) -> None:
        with self._lock:
            job = self._active(job_id)
            if job is not None:
                job.warnings.append(message)

    def put_segment(self, job_id: str, segment: Segment) -> None:
        with self._lock:
            job = self._active(job_id)
            if job is not None:
                job.segments[segment.page_index] = segment

    def mark_completed(self, job_id: str) -> bool:
        with self._lock:
            job = self._active(job_id)
            if job is None or job.status != JobStatus.PROCESSING:
                return False
            job.status = JobStatus.COMPLETED
            job.completed_at = utcnow()
            self._cancel_requested.discard(job_id)
            return True

    def mark_failed(self, job_id: str, error: JobError) -> bool:
        with self._lock:
            job = self._active(job_id)
            if job is None:
                return False
            job.status = JobStatus.ERROR
            job.error = error
            job.completed_at = utcnow()
            self._documents.pop(job_id, None)
            self._cancel_requested.discard(job_id)
            return True

    def cancel(self, job_id: str, error: JobError) -> JobStatus:
        """Cancel a job atomically. Returns its status before the call.

        Pending jobs fail at once; processing jobs are flagged and stop at
        their next cancellation check; terminal jobs are left unchanged.
        """
        with self._lock:
            job = self._require(job_id)
            previous = job.status
            if previous == JobStatus.PENDING:
                self.mark_failed(job_id, error)
            elif previous == JobStatus.PROCESSING:
                self._cancel_requested.add(job_id)
            return previous

    def is_cancel_requested(self, job_id: str) -> bool:
        with self._lock:
            return job_id in self._cancel_requested

    def remove(self, job_id: str) -> Job:
        with self._lock:
            job = self._require(job_id)
            del self._jobs[job_id]
            self._documents.pop(job_id, None)
            self._cancel_requested.discard(job_id)
            return job

    def __len__(self) -> int:
        with self._lock:
            return len(self._jobs)

    def _require(self, job_id: str) -> Job:
        job = self._jobs.get(job_id)
        if job is None:
            raise JobNotFoundError(f"Job {job_id} not found")
        return job

    def _active(self, job_id: str) -> Job | None:
        job = self._require(job_id)
        if job.is_terminal:
            Log.debug(f"Ignoring update to terminal job {job_id}")
            return None
        return job
