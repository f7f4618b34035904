"""Artifact cache with fetch-on-miss and single-flight de-duplication."""

import threading
from concurrent.futures import Future, wait

from offline_ocr.artifacts.codec import decode_artifact_bytes
from offline_ocr.artifacts.exceptions import ArtifactFetchError, InvalidArtifactError
from offline_ocr.artifacts.fetcher import BaseArtifactFetcher
from offline_ocr.artifacts.models import ArtifactOrigin, LanguageArtifact, artifact_key
from offline_ocr.artifacts.registry import LanguageRegistry
from offline_ocr.artifacts.store import BaseBlobStore
from offline_ocr.logging.logger import Log


class ArtifactCache:
    """Keeps recognition-model artifacts resident in a local blob store.

    At most one write per artifact key is outstanding at any time, whether it
    comes from a fetch or an import. Concurrent callers for the same key wait
    on the shared in-flight future and observe the same outcome. A failed
    fetch leaves the artifact uncached and clears the in-flight entry so a
    later call fetches again.
    """

    def __init__(
        self,
        registry: LanguageRegistry,
        store: BaseBlobStore,
        fetcher: BaseArtifactFetcher,
    ) -> None:
        self._registry = registry
        self._store = store
        self._fetcher = fetcher
        self._lock = threading.Lock()
        self._in_flight: dict[str, Future[None]] = {}

    @property
    def registry(self) -> LanguageRegistry:
        return self._registry

    def ensure_cached(self, artifact: LanguageArtifact) -> None:
        """Return once the artifact's bytes are stored locally.

        Raises:
            ArtifactFetchError: if the artifact is missing and the fetch failed.
        """
        if artifact.cached:
            return

        with self._lock:
            if artifact.cached:
                return
            future = self._in_flight.get(artifact.key)
            owner = future is None
            if future is None:
                future = Future()
                self._in_flight[artifact.key] = future

        if not owner:
            Log.debug(f"Waiting for in-flight fetch of '{artifact.code}'")
            future.result()
            return

        try:
            self._load(artifact)
        except ArtifactFetchError as exc:
            self._release(artifact, future, exc)
            raise
        except Exception as exc:
            error = ArtifactFetchError(f"Caching language '{artifact.code}' failed: {exc}")
            self._release(artifact, future, error)
            raise error from exc
        except BaseException as exc:
            self._release(
                artifact,
                future,
                ArtifactFetchError(f"Caching language '{artifact.code}' was interrupted: {exc!r}"),
            )
            raise
        self._release(artifact, future, None)

    def import_from_bytes(
        self,
        code: str,
        raw_bytes: bytes,
        label: str | None = None,
    ) -> LanguageArtifact:
        """Register (or replace) a language and store its bytes as already cached.

        Waits for any fetch of the same key that is still running, so the
        imported bytes are always the last ones written.

        Raises:
            InvalidArtifactError: if the code is empty or the bytes are unreadable.
        """
        code = code.strip().lower()
        if not code:
            raise InvalidArtifactError("Language code must not be empty")
        try:
            data = decode_artifact_bytes(raw_bytes)
        except ValueError as exc:
            raise InvalidArtifactError(f"Invalid language data for '{code}': {exc}") from exc

        artifact = LanguageArtifact(
            code=code,
            label=label or code.upper(),
            origin=ArtifactOrigin.IMPORTED,
            key=artifact_key(code),
            cached=True,
        )
        future = self._claim(artifact.key)
        try:
            self._store.write(artifact.key, data)
        except (OSError, ValueError) as exc:
            self._abandon(artifact.key, future, exc)
            raise InvalidArtifactError(f"Could not store language '{code}': {exc}") from exc
        except BaseException as exc:
            self._abandon(artifact.key, future, exc)
            raise
        with self._lock:
            self._registry.register(artifact)
            self._in_flight.pop(artifact.key, None)
        future.set_result(None)
        Log.info("Imported language", lang=code, size=len(data))
        return artifact

    def warm(self, codes: list[str]) -> list[str]:
        """Ensure each known code is cached, logging failures instead of raising.

        Returns:
            Codes that could not be cached.
        """
        failed: list[str] = []
        for code in codes:
            artifact = self._registry.get(code)
            if artifact is None:
                continue
            try:
                self.ensure_cached(artifact)
            except ArtifactFetchError as exc:
                Log.warning(f"Could not pre-cache language '{code}': {exc}")
                failed.append(code)
        return failed

    def _claim(self, key: str) -> Future[None]:
        """Publish an in-flight entry for key once no other write holds it."""
        while True:
            with self._lock:
                pending = self._in_flight.get(key)
                if pending is None:
                    future: Future[None] = Future()
                    self._in_flight[key] = future
                    return future
            Log.debug(f"Import of '{key}' waiting for in-flight fetch")
            wait([pending])

    def _abandon(self, key: str, future: Future[None], exc: BaseException) -> None:
        with self._lock:
            self._in_flight.pop(key, None)
        future.set_exception(ArtifactFetchError(f"Write of '{key}' failed: {exc!r}"))

    def _load(self, artifact: LanguageArtifact) -> None:
        if self._store.exists(artifact.key):
            Log.debug(f"Language '{artifact.code}' found in local store")
            return
        Log.info(f"Fetching language '{artifact.code}'")
        raw_bytes = self._fetcher.fetch(artifact)
        try:
            data = decode_artifact_bytes(raw_bytes)
        except ValueError as exc:
            raise ArtifactFetchError(
                f"Fetched language data for '{artifact.code}' is unreadable: {exc}"
            ) from exc
        self._store.write(artifact.key, data)
        Log.info("Cached language", lang=artifact.code, size=len(data))

    def _release(
        self,
        artifact: LanguageArtifact,
        future: Future[None],
        error: ArtifactFetchError | None,
    ) -> None:
        with self._lock:
            if error is None:
                artifact.cached = True
                self._registry.mark_cached(artifact.code)
            self._in_flight.pop(artifact.key, None)
        if error is None:
            future.set_result(None)
        else:
            Log.warning(f"Fetch of language '{artifact.code}' failed: {error}")
            future.set_exception(error)
