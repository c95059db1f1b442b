import logging

from billora.settings import settings
from billora.storage.base import StorageBackend

logger = logging.getLogger(__name__)


def get_storage() -> StorageBackend:
    backend = settings.storage_backend

    if backend == "local":
        from billora.storage.local import LocalStorage

        logger.info("Using storage backend: local path=%s", settings.storage_local_path)
        return LocalStorage(settings.storage_local_path)

    if backend == "memory":
        from billora.storage.memory import MemoryStorage

        logger.info("Using storage backend: memory")
        return MemoryStorage()

    raise ValueError(f"Unsupported storage backend: {backend}")
