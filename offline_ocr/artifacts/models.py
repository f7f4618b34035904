from dataclasses import dataclass
from enum import Enum

ARTIFACT_SUFFIX = ".traineddata"


class ArtifactOrigin(str, Enum):
    BUILTIN = "builtin"
    IMPORTED = "imported"


def artifact_key(code: str) -> str:
    """Storage key for a language code: {code}.traineddata"""
    return f"{code}{ARTIFACT_SUFFIX}"


@dataclass
class LanguageArtifact:
    """A recognition-model resource for one language."""

    code: str
    label: str
    origin: ArtifactOrigin
    key: str
    cached: bool = False
