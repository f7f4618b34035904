from offline_ocr.errors import ErrorKind, OcrError


class InvalidArtifactError(OcrError):
    """Raised when an imported artifact is empty, unnamed or corrupt."""

    kind = ErrorKind.INVALID_ARTIFACT


class ArtifactFetchError(OcrError):
    """Raised when an artifact is not cached and fetching it failed."""

    kind = ErrorKind.ARTIFACT_FETCH_FAILED
