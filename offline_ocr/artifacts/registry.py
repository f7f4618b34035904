import threading

from offline_ocr.artifacts.languages import BUILTIN_LANGUAGES
from offline_ocr.artifacts.models import ArtifactOrigin, LanguageArtifact, artifact_key


class LanguageRegistry:
    """Maps language codes to their artifacts. One artifact per code."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._artifacts: dict[str, LanguageArtifact] = {}

    @classmethod
    def with_builtins(
        cls,
        languages: tuple[tuple[str, str], ...] = BUILTIN_LANGUAGES,
    ) -> "LanguageRegistry":
        registry = cls()
        for code, label in languages:
            registry.register(
                LanguageArtifact(
                    code=code,
                    label=label,
                    origin=ArtifactOrigin.BUILTIN,
                    key=artifact_key(code),
                )
            )
        return registry

    def register(self, artifact: LanguageArtifact) -> None:
        """Add an artifact, replacing any existing mapping for the same code."""
        with self._lock:
            self._artifacts[artifact.code] = artifact

    def get(self, code: str) -> LanguageArtifact | None:
        with self._lock:
            return self._artifacts.get(code)

    def mark_cached(self, code: str) -> None:
        with self._lock:
            artifact = self._artifacts.get(code)
            if artifact is not None:
                artifact.cached = True

    def codes(self, origin: ArtifactOrigin | None = None) -> list[str]:
        """Registered codes in registration order, optionally filtered by origin."""
        with self._lock:
            return [
                code
                for code, artifact in self._artifacts.items()
                if origin is None or artifact.origin == origin
            ]

    def __contains__(self, code: object) -> bool:
        with self._lock:
            return code in self._artifacts

    def __len__(self) -> int:
        with self._lock:
            return len(self._artifacts)
