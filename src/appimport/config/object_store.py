"""S3-compatible object store settings for bundle payloads."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, optional_env_var, require_env_vars

DEFAULT_REGION = "us-east-1"


@dataclass(frozen=True, slots=True)
class S3Config:
    endpoint: str
    bucket: str
    access_key_id: str
    secret_access_key: str
    region: str = DEFAULT_REGION
    verify: bool = True


def get_s3_config() -> S3Config:
    values = require_env_vars(
        (
            "S3_ENDPOINT",
            "S3_BUCKET",
            "S3_ACCESS_KEY_ID",
            "S3_SECRET_ACCESS_KEY",
        )
    )
    return S3Config(
        endpoint=values["S3_ENDPOINT"],
        bucket=values["S3_BUCKET"],
        access_key_id=values["S3_ACCESS_KEY_ID"],
        secret_access_key=values["S3_SECRET_ACCESS_KEY"],
        region=optional_env_var("S3_REGION", DEFAULT_REGION) or DEFAULT_REGION,
        verify=not env_flag("S3_INSECURE_SKIP_VERIFY"),
    )
