"""Content store adapter for S3-compatible object storage."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import boto3
from boto3.exceptions import S3UploadFailedError
from botocore.config import Config
from botocore.exceptions import BotoCoreError, ClientError

from appimport.domain.errors import TransportError
from appimport.domain.ports import ContentStore

if TYPE_CHECKING:
    from typing import BinaryIO

    from appimport.config.object_store import S3Config

log = getLogger(__name__)

BUNDLE_CONTENT_TYPE = "application/gzip"


def object_key(key_prefix: str, key: str) -> str:
    prefix = key_prefix.strip("/")
    return f"{prefix}/{key}" if prefix else key


def _build_client(config: S3Config) -> Any:
    return boto3.client(
        "s3",
        endpoint_url=config.endpoint,
        region_name=config.region,
        aws_access_key_id=config.access_key_id,
        aws_secret_access_key=config.secret_access_key,
        verify=config.verify,
        # most self-hosted endpoints (MinIO, Ceph) only serve path-style URLs
        config=Config(s3={"addressing_style": "path"}),
    )


class S3ContentStore(ContentStore):
    def __init__(self, config: S3Config, *, client: Any | None = None) -> None:
        self.bucket = config.bucket
        self.client = client if client is not None else _build_client(config)

    def upload(self, key_prefix: str, key: str, body: BinaryIO) -> None:
        target = object_key(key_prefix, key)
        log.debug("Uploading %s to bucket %s", target, self.bucket)
        try:
            self.client.upload_fileobj(
                body,
                self.bucket,
                target,
                ExtraArgs={
                    "ContentType": BUNDLE_CONTENT_TYPE,
                    "ContentDisposition": f'attachment; filename="{key}"',
                },
            )
        except (BotoCoreError, ClientError, S3UploadFailedError) as exc:
            message = f"Upload of {target} to bucket {self.bucket} failed: {exc}"
            raise TransportError(message) from exc
