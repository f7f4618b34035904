from abc import ABC, abstractmethod

import httpx

from offline_ocr.artifacts.exceptions import ArtifactFetchError
from offline_ocr.artifacts.models import LanguageArtifact


class BaseArtifactFetcher(ABC):
    """Contract for retrieving artifact bytes from their origin."""

    @abstractmethod
    def fetch(self, artifact: LanguageArtifact) -> bytes:
        """Download the raw (possibly compressed) bytes of an artifact.

        Raises:
            ArtifactFetchError: on any network or origin failure.
        """


class HttpArtifactFetcher(BaseArtifactFetcher):
    """Fetches {base_url}{path_prefix}{key}.gz over HTTP."""

    def __init__(
        self,
        *,
        base_url: str,
        path_prefix: str,
        timeout_seconds: int,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._path_prefix = "/" + path_prefix.strip("/") + "/"
        self._client = httpx.Client(timeout=timeout_seconds, transport=transport)

    def url_for(self, artifact: LanguageArtifact) -> str:
        return f"{self._base_url}{self._path_prefix}{artifact.key}.gz"

    def fetch(self, artifact: LanguageArtifact) -> bytes:
        url = self.url_for(artifact)
        try:
            response = self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise ArtifactFetchError(
                f"Language data for '{artifact.code}' unavailable: "
                f"HTTP {exc.response.status_code} from {url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise ArtifactFetchError(
                f"Language data for '{artifact.code}' unavailable offline: {exc}"
            ) from exc
        return response.content
