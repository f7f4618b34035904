from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from offline_ocr.formats.content_class import ContentClass
from offline_ocr.formats.models import ResolvedDocument
from offline_ocr.jobs.exceptions import JobCancelledError
from offline_ocr.jobs.models import JobError
from offline_ocr.jobs.progress import ProgressAggregator


def _never_cancelled() -> bool:
    return False


@dataclass(slots=True)
class PipelineContext:
    job_id: str
    languages: list[str]
    content_class: ContentClass
    raw_bytes: bytes
    aggregator: ProgressAggregator
    is_cancelled: Callable[[], bool] = _never_cancelled
    resolved: ResolvedDocument | None = None
    recognized_pages: int = 0
    failed_pages: int = 0
    error: JobError | None = None

    def check_cancelled(self) -> None:
        if self.is_cancelled():
            raise JobCancelledError(f"Job {self.job_id} was cancelled")


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
