from offline_ocr.errors import ErrorKind, OcrError


class PageRecognitionError(OcrError):
    """Raised when recognizing a single page fails."""

    kind = ErrorKind.PAGE_RECOGNITION_FAILED
