import pytest

from offline_ocr.errors import ErrorKind
from offline_ocr.formats.content_class import ContentClass
from offline_ocr.jobs.exceptions import JobNotFoundError
from offline_ocr.jobs.models import Job, JobError, JobStatus, Segment
from offline_ocr.jobs.repository import JobRepository


def _make_job(job_id: str = "job-1") -> Job:
    return Job(
        id=job_id,
        name="scan.png",
        content_class=ContentClass.IMAGE,
        size=3,
        languages=("eng",),
    )


def _make_repo(job_id: str = "job-1") -> JobRepository:
    repo = JobRepository()
    repo.add(_make_job(job_id), b"abc")
    return repo


_CANCELLED = JobError(kind=ErrorKind.CANCELLED, message="cancelled")


class TestSnapshots:
    def test_get_returns_independent_copy(self) -> None:
        repo = _make_repo()

        snapshot = repo.get("job-1")
        snapshot.warnings.append("mutated")
        snapshot.status = JobStatus.COMPLETED

        fresh = repo.get("job-1")
        assert fresh.warnings == []
        assert fresh.status == JobStatus.PENDING

    def test_get_unknown_raises(self) -> None:
        repo = JobRepository()

        with pytest.raises(JobNotFoundError) as exc_info:
            repo.get("missing")

        assert exc_info.value.kind == ErrorKind.INVALID_INPUT

    def test_pending_ids_in_admission_order(self) -> None:
        repo = JobRepository()
        for job_id in ("a", "b", "c"):
            repo.add(_make_job(job_id), b"")
        repo.claim("b")

        assert repo.pending_ids() == ["a", "c"]


class TestLifecycle:
    def test_claim_only_from_pending(self) -> None:
        repo = _make_repo()

        assert repo.claim("job-1") is True
        assert repo.claim("job-1") is False
        assert repo.get("job-1").status == JobStatus.PROCESSING

    def test_take_document_hands_over_bytes_once(self) -> None:
        repo = _make_repo()

        assert repo.take_document("job-1") == b"abc"
        assert repo.take_document("job-1") == b""

    def test_mark_completed_requires_processing(self) -> None:
        repo = _make_repo()

        assert repo.mark_completed("job-1") is False
        repo.claim("job-1")
        assert repo.mark_completed("job-1") is True

        job = repo.get("job-1")
        assert job.status == JobStatus.COMPLETED
        assert job.completed_at is not None

    def test_terminal_job_ignores_further_updates(self) -> None:
        repo = _make_repo()
        repo.claim("job-1")
        repo.mark_failed("job-1", _CANCELLED)

        repo.add_warning("job-1", "late")
        repo.put_segment("job-1", Segment(page_index=0, text="late", confidence=50.0))
        repo.update_progress("job-1", 0.9)

        job = repo.get("job-1")
        assert job.status == JobStatus.ERROR
        assert job.warnings == []
        assert job.segments == {}
        assert job.progress == 0.0
        assert repo.mark_completed("job-1") is False

    def test_progress_never_decreases(self) -> None:
        repo = _make_repo()
        repo.claim("job-1")

        repo.update_progress("job-1", 0.6)
        stored = repo.update_progress("job-1", 0.3)

        assert stored == 0.6
        assert repo.update_progress("job-1", 4.0) == 1.0


class TestCancel:
    def test_pending_job_fails_immediately(self) -> None:
        repo = _make_repo()

        previous = repo.cancel("job-1", _CANCELLED)

        assert previous == JobStatus.PENDING
        job = repo.get("job-1")
        assert job.status == JobStatus.ERROR
        assert job.error == _CANCELLED
        assert repo.claim("job-1") is False

    def test_processing_job_is_flagged(self) -> None:
        repo = _make_repo()
        repo.claim("job-1")

        previous = repo.cancel("job-1", _CANCELLED)

        assert previous == JobStatus.PROCESSING
        assert repo.is_cancel_requested("job-1")
        assert repo.get("job-1").status == JobStatus.PROCESSING

    def test_terminal_job_is_unchanged(self) -> None:
        repo = _make_repo()
        repo.claim("job-1")
        repo.mark_completed("job-1")

        previous = repo.cancel("job-1", _CANCELLED)

        assert previous == JobStatus.COMPLETED
        assert repo.get("job-1").status == JobStatus.COMPLETED
        assert not repo.is_cancel_requested("job-1")


class TestRemove:
    def test_remove_forgets_job(self) -> None:
        repo = _make_repo()

        repo.remove("job-1")

        assert len(repo) == 0
        with pytest.raises(JobNotFoundError):
            repo.get("job-1")
