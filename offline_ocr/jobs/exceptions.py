from offline_ocr.errors import ErrorKind, OcrError


class InvalidInputError(OcrError):
    """Raised at intake for a malformed submission; no job is created."""

    kind = ErrorKind.INVALID_INPUT


class JobCancelledError(OcrError):
    """Raised inside a running job once cancellation was requested."""

    kind = ErrorKind.CANCELLED


class JobNotFoundError(OcrError):
    """Raised when a job id is not in the job table."""

    kind = ErrorKind.INVALID_INPUT
