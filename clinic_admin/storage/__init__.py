from functools import lru_cache

from ..config import get_settings
from .base import ObjectStoreBase, ObjectStoreError
from .local import LocalObjectStore
from .memory import InMemoryObjectStore


@lru_cache()
def get_object_store() -> ObjectStoreBase:
    settings = get_settings()
    backend = settings.storage_backend.lower()

    if backend == "local":
        return LocalObjectStore(
            root_dir=settings.local_storage_dir,
            bucket=settings.storage_bucket,
            signing_secret=settings.storage_signing_secret,
            base_url=settings.public_base_url,
        )
    if backend == "s3":
        from .s3 import S3ObjectStore

        return S3ObjectStore(
            bucket=settings.storage_bucket,
            region=settings.s3_region,
            endpoint_url=settings.s3_endpoint_url,
            access_key_id=settings.s3_access_key_id,
            secret_access_key=settings.s3_secret_access_key,
        )
    if backend == "memory":
        return InMemoryObjectStore(bucket=settings.storage_bucket)

    raise ValueError(f"Unknown STORAGE_BACKEND: {settings.storage_backend}")


__all__ = [
    "ObjectStoreBase",
    "ObjectStoreError",
    "LocalObjectStore",
    "InMemoryObjectStore",
    "get_object_store",
]
