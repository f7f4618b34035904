from abc import ABC, abstractmethod

from offline_ocr.formats.models import ResolvedDocument


class BaseDocumentDecoder(ABC):
    """Contract for all format-specific decoders."""

    @abstractmethod
    def decode(self, raw_bytes: bytes) -> ResolvedDocument:
        """Turn raw document bytes into pages and/or extracted text.

        Args:
            raw_bytes: Raw file content.

        Returns:
            ResolvedDocument with pages in document order.

        Raises:
            UnsupportedFormatError: if the bytes cannot be decoded.
        """
