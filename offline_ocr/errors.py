from enum import Enum
from typing import ClassVar


class ErrorKind(str, Enum):
    """Category of a failure, stored on a job that ends in error."""

    INVALID_INPUT = "invalid_input"
    INVALID_ARTIFACT = "invalid_artifact"
    ARTIFACT_FETCH_FAILED = "artifact_fetch_failed"
    UNSUPPORTED_FORMAT = "unsupported_format"
    PAGE_RECOGNITION_FAILED = "page_recognition_failed"
    CANCELLED = "cancelled"
    INTERNAL = "internal"


class OcrError(Exception):
    """Base exception for all offline OCR errors."""

    kind: ClassVar[ErrorKind] = ErrorKind.INTERNAL
