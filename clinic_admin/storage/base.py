from abc import ABC, abstractmethod
from typing import List


class ObjectStoreError(Exception):
    pass


class ObjectStoreBase(ABC):
    """Key-addressed blob storage scoped to a single bucket."""

    def __init__(self, bucket: str):
        self.bucket = bucket

    @abstractmethod
    def upload(self, path: str, data: bytes, content_type: str, upsert: bool = False) -> None:
        pass

    @abstractmethod
    def create_signed_url(self, path: str, expires_in: int) -> str:
        pass

    @abstractmethod
    def remove(self, paths: List[str]) -> None:
        """Delete the given keys. Keys that do not exist are ignored."""
        pass
