import hashlib
import hmac
import logging
import os
import time
from typing import List, Optional
from urllib.parse import quote, urlencode

from .base import ObjectStoreBase, ObjectStoreError

logger = logging.getLogger(__name__)


class LocalObjectStore(ObjectStoreBase):
    """Filesystem store under ``root_dir/<bucket>``.

    Signed URLs point at the ``/storage`` route and carry an expiry
    timestamp plus an HMAC-SHA256 signature over bucket, key and expiry.
    """

    def __init__(self, root_dir: str, bucket: str, signing_secret: str, base_url: str):
        super().__init__(bucket)
        self.root_dir = os.path.abspath(os.path.join(root_dir, bucket))
        self.signing_secret = signing_secret
        self.base_url = base_url.rstrip("/")

    def _resolve(self, path: str) -> str:
        full_path = os.path.abspath(os.path.join(self.root_dir, path))
        if os.path.commonpath([self.root_dir, full_path]) != self.root_dir or full_path == self.root_dir:
            raise ObjectStoreError(f"Invalid object key: {path}")
        return full_path

    def _signature(self, path: str, expires: int) -> str:
        message = f"{self.bucket}/{path}:{expires}".encode("utf-8")
        return hmac.new(self.signing_secret.encode("utf-8"), message, hashlib.sha256).hexdigest()

    def upload(self, path: str, data: bytes, content_type: str, upsert: bool = False) -> None:
        full_path = self._resolve(path)
        try:
            os.makedirs(os.path.dirname(full_path), exist_ok=True)
            with open(full_path, "wb" if upsert else "xb") as f:
                f.write(data)
        except FileExistsError as e:
            raise ObjectStoreError(f"The resource already exists: {path}") from e
        except OSError as e:
            raise ObjectStoreError(str(e)) from e
        logger.debug(f"Wrote {len(data)} bytes to {full_path}")

    def create_signed_url(self, path: str, expires_in: int) -> str:
        full_path = self._resolve(path)
        if not os.path.exists(full_path):
            raise ObjectStoreError(f"Object not found: {path}")
        expires = int(time.time()) + expires_in
        query = urlencode({"expires": expires, "signature": self._signature(path, expires)})
        return f"{self.base_url}/storage/{quote(self.bucket)}/{quote(path)}?{query}"

    def verify_signature(self, path: str, expires: int, signature: str, now: Optional[float] = None) -> bool:
        now = time.time() if now is None else now
        if expires < now:
            return False
        return hmac.compare_digest(self._signature(path, expires), signature)

    def open_path(self, path: str) -> str:
        """Return the filesystem path for a key, or raise if it does not exist."""
        full_path = self._resolve(path)
        if not os.path.isfile(full_path):
            raise ObjectStoreError(f"Object not found: {path}")
        return full_path

    def remove(self, paths: List[str]) -> None:
        for path in paths:
            full_path = self._resolve(path)
            try:
                os.remove(full_path)
            except FileNotFoundError:
                continue
            except OSError as e:
                raise ObjectStoreError(str(e)) from e
