from dataclasses import dataclass
from enum import Enum


class ExportFormat(str, Enum):
    TXT = "txt"
    PDF = "pdf"
    DOCX = "docx"
    PNG = "png"


@dataclass(frozen=True)
class ExportedFile:
    filename: str
    media_type: str
    data: bytes
