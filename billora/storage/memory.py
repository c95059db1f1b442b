import logging

from billora.storage.base import StorageBackend

logger = logging.getLogger(__name__)


class MemoryStorage(StorageBackend):
    """Process-local storage. Nothing survives a restart."""

    def __init__(self) -> None:
        self._blobs: dict[str, bytes] = {}

    def save(self, key: str, data: bytes, content_type: str = "application/json") -> str:
        self._blobs[key] = bytes(data)
        logger.debug("Saved %s (%d bytes) in memory", key, len(data))
        return self.get_url(key)

    def get(self, key: str) -> bytes:
        try:
            return self._blobs[key]
        except KeyError:
            raise FileNotFoundError(key) from None

    def exists(self, key: str) -> bool:
        return key in self._blobs

    def get_url(self, key: str) -> str:
        return f"memory://{key}"
