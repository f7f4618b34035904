from offline_ocr.errors import ErrorKind, OcrError


class UnsupportedFormatError(OcrError):
    """Raised when a document cannot be interpreted for its content class."""

    kind = ErrorKind.UNSUPPORTED_FORMAT
