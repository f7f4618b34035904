from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum

from offline_ocr.errors import ErrorKind, OcrError
from offline_ocr.formats.content_class import ContentClass


class JobStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"

    @property
    def is_terminal(self) -> bool:
        return self in (JobStatus.COMPLETED, JobStatus.ERROR)


@dataclass(frozen=True)
class Segment:
    """Recognition result for one page of a job."""

    page_index: int
    text: str
    confidence: float


@dataclass(frozen=True)
class JobError:
    """Why a job ended in error."""

    kind: ErrorKind
    message: str

    @classmethod
    def from_exception(cls, exc: BaseException) -> "JobError":
        if isinstance(exc, OcrError):
            return cls(kind=exc.kind, message=str(exc))
        return cls(kind=ErrorKind.INTERNAL, message=str(exc) or type(exc).__name__)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class Job:
    """Unit of work for one submitted document."""

    id: str
    name: str
    content_class: ContentClass
    size: int
    languages: tuple[str, ...]
    status: JobStatus = JobStatus.PENDING
    progress: float = 0.0
    created_at: datetime = field(default_factory=utcnow)
    completed_at: datetime | None = None
    warnings: list[str] = field(default_factory=list)
    error: JobError | None = None
    segments: dict[int, Segment] = field(default_factory=dict)
    page_count: int = 0
    extracted_text: str = ""

    @property
    def is_terminal(self) -> bool:
        return self.status.is_terminal

    def ordered_segments(self) -> list[Segment]:
        return [self.segments[index] for index in sorted(self.segments)]

    def duration_seconds(self) -> float | None:
        if self.completed_at is None:
            return None
        return (self.completed_at - self.created_at).total_seconds()
