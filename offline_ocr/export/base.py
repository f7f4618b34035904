from abc import ABC, abstractmethod

from offline_ocr.export.models import ExportedFile


class BaseExporter(ABC):
    """Contract for all export adapters."""

    @abstractmethod
    def export(self, content: str, name: str) -> ExportedFile:
        """Serialize aggregated text into a downloadable file.

        Args:
            content: Aggregated job text.
            name: Original document name, used to derive the file name.
        """
