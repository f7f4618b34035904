import threading

from offline_ocr.jobs.models import Segment
from offline_ocr.jobs.repository import JobRepository
from offline_ocr.recognition.base import ProgressSink


class ProgressAggregator:
    """Sole writer of one job's progress; also records its warnings.

    Progress is (finished pages + fraction of the current page) / total pages.
    Finished pages are tracked by index, so late or out-of-order reports can
    never move progress backwards.
    """

    def __init__(self, job_repo: JobRepository, job_id: str) -> None:
        self._job_repo = job_repo
        self._job_id = job_id
        self._lock = threading.Lock()
        self._total_pages = 0
        self._finished: set[int] = set()
        self._progress = 0.0

    def start(self, total_pages: int) -> None:
        with self._lock:
            self._total_pages = total_pages
        self._job_repo.set_page_count(self._job_id, total_pages)

    def report(self, page_index: int, fraction: float) -> None:
        """Record intra-page progress for a page that has not finished yet."""
        with self._lock:
            if page_index in self._finished or self._total_pages == 0:
                return
            fraction = max(0.0, min(1.0, fraction))
            self._publish((len(self._finished) + fraction) / self._total_pages)

    def page_succeeded(self, segment: Segment) -> None:
        self._job_repo.put_segment(self._job_id, segment)
        self._finish_page(segment.page_index)

    def page_failed(self, page_index: int, warning: str) -> None:
        self.warn(warning)
        self._finish_page(page_index)

    def warn(self, message: str) -> None:
        self._job_repo.add_warning(self._job_id, message)

    def finish(self) -> None:
        with self._lock:
            self._publish(1.0)

    def sink(self, page_index: int) -> "PageProgressSink":
        return PageProgressSink(self, page_index)

    def _finish_page(self, page_index: int) -> None:
        with self._lock:
            self._finished.add(page_index)
            if self._total_pages:
                self._publish(len(self._finished) / self._total_pages)

    def _publish(self, value: float) -> None:
        value = max(0.0, min(1.0, value))
        if value <= self._progress:
            return
        self._progress = self._job_repo.update_progress(self._job_id, value)


class PageProgressSink(ProgressSink):
    """Progress sink scoped to one page of one job."""

    def __init__(self, aggregator: ProgressAggregator, page_index: int) -> None:
        self._aggregator = aggregator
        self._page_index = page_index

    def report(self, fraction: float) -> None:
        self._aggregator.report(self._page_index, fraction)
