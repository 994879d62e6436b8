import logging
from typing import List, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from .base import ObjectStoreBase, ObjectStoreError

logger = logging.getLogger(__name__)


class S3ObjectStore(ObjectStoreBase):
    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: Optional[str] = None,
        access_key_id: Optional[str] = None,
        secret_access_key: Optional[str] = None,
        client=None,
    ):
        super().__init__(bucket)
        self.client = client or boto3.client(
            "s3",
            region_name=region,
            endpoint_url=endpoint_url or None,
            aws_access_key_id=access_key_id or None,
            aws_secret_access_key=secret_access_key or None,
        )

    def upload(self, path: str, data: bytes, content_type: str, upsert: bool = False) -> None:
        extra = {} if upsert else {"IfNoneMatch": "*"}
        try:
            self.client.put_object(Bucket=self.bucket, Key=path, Body=data, ContentType=content_type, **extra)
        except (BotoCoreError, ClientError) as e:
            raise ObjectStoreError(str(e)) from e

    def create_signed_url(self, path: str, expires_in: int) -> str:
        try:
            return self.client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": path},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            raise ObjectStoreError(str(e)) from e

    def remove(self, paths: List[str]) -> None:
        if not paths:
            return
        try:
            response = self.client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": p} for p in paths], "Quiet": True},
            )
        except (BotoCoreError, ClientError) as e:
            raise ObjectStoreError(str(e)) from e

        errors = response.get("Errors", [])
        if errors:
            first = errors[0]
            raise ObjectStoreError(f"Failed to delete {first.get('Key')}: {first.get('Message')}")
