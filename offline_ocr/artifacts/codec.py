import gzip
import zlib

_GZIP_MAGIC = b"\x1f\x8b"


def decode_artifact_bytes(raw_bytes: bytes) -> bytes:
    """Return the plain model bytes, decompressing gzip payloads.

    Raises:
        ValueError: if the payload is empty or the gzip stream is corrupt.
    """
    if not raw_bytes:
        raise ValueError("artifact payload is empty")
    if not raw_bytes.startswith(_GZIP_MAGIC):
        return raw_bytes
    try:
        data = gzip.decompress(raw_bytes)
    except (OSError, EOFError, zlib.error) as exc:
        raise ValueError(f"corrupt gzip artifact: {exc}") from exc
    if not data:
        raise ValueError("artifact payload is empty after decompression")
    return data
