from __future__ import annotations

import io
from typing import Any, BinaryIO

import pytest
from botocore.exceptions import ClientError

from appimport.adapters.s3 import S3ContentStore, object_key
from appimport.config import S3Config
from appimport.domain.errors import TransportError

_CONFIG = S3Config(
    endpoint="http://minio:9000",
    bucket="app-store",
    access_key_id="access",
    secret_access_key="secret",
)


class FakeS3Client:
    def __init__(self, error: Exception | None = None) -> None:
        self.error = error
        self.uploads: list[tuple[bytes, str, str, dict[str, Any]]] = []

    def upload_fileobj(
        self, body: BinaryIO, bucket: str, key: str, ExtraArgs: dict[str, Any]  # noqa: N803
    ) -> None:
        if self.error is not None:
            raise self.error
        self.uploads.append((body.read(), bucket, key, ExtraArgs))


def test_object_key_joins_prefix() -> None:
    assert object_key("system-workspace", "appv-1") == "system-workspace/appv-1"
    assert object_key("/ws/", "appv-1") == "ws/appv-1"
    assert object_key("", "appv-1") == "appv-1"


def test_upload_stores_payload_under_prefixed_key() -> None:
    client = FakeS3Client()
    store = S3ContentStore(_CONFIG, client=client)

    store.upload("system-workspace", "appv-1", io.BytesIO(b"chart"))

    body, bucket, key, extra = client.uploads[0]
    assert (body, bucket, key) == (b"chart", "app-store", "system-workspace/appv-1")
    assert extra["ContentType"] == "application/gzip"
    assert extra["ContentDisposition"] == 'attachment; filename="appv-1"'


def test_upload_failure_raises_transport_error() -> None:
    error = ClientError({"Error": {"Code": "AccessDenied", "Message": "denied"}}, "PutObject")
    store = S3ContentStore(_CONFIG, client=FakeS3Client(error))

    with pytest.raises(TransportError, match="system-workspace/appv-1"):
        store.upload("system-workspace", "appv-1", io.BytesIO(b"chart"))
