import logging
from collections import deque
from typing import Deque, Dict, List, Tuple

from .base import ObjectStoreBase, ObjectStoreError

logger = logging.getLogger(__name__)


class InMemoryObjectStore(ObjectStoreBase):
    """Dict-backed store for tests and local demos.

    Only the most recent ``HISTORY_LIMIT`` signing requests and removals
    are recorded.

    The ``fail_*`` switches make the matching operation raise
    ``ObjectStoreError`` so callers' failure paths can be exercised.
    """

    HISTORY_LIMIT = 1000

    def __init__(
        self,
        bucket: str = "clinic-documents",
        fail_uploads: bool = False,
        fail_removes: bool = False,
        fail_signing: bool = False,
    ):
        super().__init__(bucket)
        self.fail_uploads = fail_uploads
        self.fail_removes = fail_removes
        self.fail_signing = fail_signing
        self.objects: Dict[str, Tuple[bytes, str]] = {}
        self.signed_url_requests: Deque[Tuple[str, int]] = deque(maxlen=self.HISTORY_LIMIT)
        self.removed_paths: Deque[str] = deque(maxlen=self.HISTORY_LIMIT)

    def upload(self, path: str, data: bytes, content_type: str, upsert: bool = False) -> None:
        if self.fail_uploads:
            raise ObjectStoreError("Simulated storage outage")
        if path in self.objects and not upsert:
            raise ObjectStoreError(f"The resource already exists: {path}")
        self.objects[path] = (data, content_type)
        logger.debug(f"Stored {len(data)} bytes at {self.bucket}/{path}")

    def create_signed_url(self, path: str, expires_in: int) -> str:
        self.signed_url_requests.append((path, expires_in))
        if self.fail_signing:
            raise ObjectStoreError("Simulated signing failure")
        if path not in self.objects:
            raise ObjectStoreError(f"Object not found: {path}")
        return f"memory://{self.bucket}/{path}?expires_in={expires_in}"

    def remove(self, paths: List[str]) -> None:
        if self.fail_removes:
            raise ObjectStoreError("Simulated storage outage")
        for path in paths:
            if self.objects.pop(path, None) is not None:
                self.removed_paths.append(path)

    def reset(self) -> None:
        self.objects.clear()
        self.signed_url_requests.clear()
        self.removed_paths.clear()
        logger.info("In-memory object store state reset")
