from offline_ocr.formats.content_class import ContentClass
from offline_ocr.jobs.models import Job, Segment
from offline_ocr.jobs.progress import ProgressAggregator
from offline_ocr.jobs.repository import JobRepository


def _make_aggregator(total_pages: int) -> tuple[ProgressAggregator, JobRepository]:
    repo = JobRepository()
    repo.add(
        Job(id="job-1", name="doc.pdf", content_class=ContentClass.PDF, size=1, languages=("eng",)),
        b"x",
    )
    repo.claim("job-1")
    aggregator = ProgressAggregator(repo, "job-1")
    aggregator.start(total_pages)
    return aggregator, repo


def _segment(index: int) -> Segment:
    return Segment(page_index=index, text=f"page {index}", confidence=90.0)


class TestProgressAggregator:
    def test_start_records_page_count(self) -> None:
        _aggregator, repo = _make_aggregator(4)

        assert repo.get("job-1").page_count == 4

    def test_intra_page_progress_is_weighted(self) -> None:
        aggregator, repo = _make_aggregator(2)

        aggregator.report(0, 0.5)
        assert repo.get("job-1").progress == 0.25

        aggregator.page_succeeded(_segment(0))
        aggregator.report(1, 0.5)
        assert repo.get("job-1").progress == 0.75

    def test_reports_for_finished_page_are_ignored(self) -> None:
        aggregator, repo = _make_aggregator(2)
        aggregator.page_succeeded(_segment(0))

        aggregator.report(0, 0.1)

        assert repo.get("job-1").progress == 0.5

    def test_progress_is_monotonic_under_out_of_order_reports(self) -> None:
        aggregator, repo = _make_aggregator(3)
        observed: list[float] = []

        for page, fraction in [(0, 0.9), (0, 0.2), (1, 0.0), (0, 1.0)]:
            aggregator.report(page, fraction)
            observed.append(repo.get("job-1").progress)

        assert observed == sorted(observed)

    def test_failed_page_counts_as_finished(self) -> None:
        aggregator, repo = _make_aggregator(2)

        aggregator.page_failed(0, "Page 1 could not be recognized: boom")
        aggregator.page_succeeded(_segment(1))

        job = repo.get("job-1")
        assert job.progress == 1.0
        assert list(job.segments) == [1]
        assert job.warnings == ["Page 1 could not be recognized: boom"]

        aggregator.report(0, 0.5)
        assert repo.get("job-1").progress == 1.0

    def test_sink_reports_for_its_page(self) -> None:
        aggregator, repo = _make_aggregator(4)

        aggregator.sink(0).report(1.0)

        assert repo.get("job-1").progress == 0.25

    def test_finish_sets_full_progress(self) -> None:
        aggregator, repo = _make_aggregator(0)

        aggregator.finish()

        assert repo.get("job-1").progress == 1.0
