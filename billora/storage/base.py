from abc import ABC, abstractmethod


class StorageBackend(ABC):
    @abstractmethod
    def save(self, key: str, data: bytes, content_type: str = "application/json") -> str:
        """Save data and return the storage path/URL."""
        ...

    @abstractmethod
    def get(self, key: str) -> bytes:
        """Retrieve data by key. Raises FileNotFoundError if the key is missing."""
        ...

    @abstractmethod
    def exists(self, key: str) -> bool:
        """Return whether anything is stored under key."""
        ...

    @abstractmethod
    def get_url(self, key: str) -> str:
        """Return an absolute file path (local) or a pseudo URL (memory)."""
        ...
