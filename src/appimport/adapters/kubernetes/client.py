"""Resource store adapter backed by the Kubernetes API server."""

from __future__ import annotations

import asyncio
import builtins
import json
from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from appimport.adapters.http_resilience import (
    RateLimit,
    ResilienceConfig,
    ResilientClient,
    build_limiter,
)
from appimport.domain.errors import ConflictError, NotFoundError, TransportError
from appimport.domain.ports import RecordStore, ResourceStore

from .patch import MERGE_PATCH_CONTENT_TYPE, create_merge_patch, lock_to_revision
from .schema import ListPayload, StatusPayload
from .translator import APPLICATION_KIND, CATEGORY_KIND, VERSION_KIND, ResourceKind

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

    from aiolimiter import AsyncLimiter

    from appimport.config.kubernetes import KubernetesConfig

log = getLogger(__name__)

_DEFAULT_TIMEOUT_SECONDS = 30.0

type ClientFactory = Callable[[ResilienceConfig, AsyncLimiter | None], ResilientClient]


def _default_client_factory(
    config: ResilienceConfig, limiter: AsyncLimiter | None
) -> ResilientClient:
    return ResilientClient(config, limiter=limiter)


def kubernetes_resilience_config(config: KubernetesConfig) -> ResilienceConfig:
    return ResilienceConfig(
        name="kubernetes",
        base_url=config.api_server,
        timeout_seconds=_DEFAULT_TIMEOUT_SECONDS,
        ratelimit=RateLimit(max_calls=max(1, int(config.qps)), per_seconds=1.0),
        default_headers={"Accept": "application/json", **config.auth_headers()},
        verify=config.verify,
    )


def format_label_selector(selector: Mapping[str, str]) -> str:
    return ",".join(f"{key}={value}" for key, value in sorted(selector.items()))


def _error_message(response: httpx.Response) -> str:
    try:
        return StatusPayload.model_validate(response.json()).message or response.text
    except (json.JSONDecodeError, ValidationError):
        return response.text


class KubernetesRecordStore[TRecord](RecordStore[TRecord]):
    """Blocking store verbs for one cluster-scoped custom resource kind.

    Every verb runs on a fresh client, so the rate limit lives in ``limiter``,
    which outlives the clients and may be shared between stores.
    """

    def __init__(
        self,
        *,
        kind: ResourceKind[TRecord],
        resilience: ResilienceConfig,
        client_factory: ClientFactory | None = None,
        limiter: AsyncLimiter | None = None,
    ) -> None:
        self._kind = kind
        self._resilience = resilience
        self._client_factory = client_factory or _default_client_factory
        self._limiter = limiter if limiter is not None else build_limiter(resilience.ratelimit)

    def list(self, selector: Mapping[str, str] | None = None) -> builtins.list[TRecord]:
        params = {"labelSelector": format_label_selector(selector)} if selector else None
        payload = asyncio.run(
            self._request_async("GET", self._kind.collection_path, name="*", params=params)
        )
        try:
            items = ListPayload.model_validate(payload).items
        except ValidationError as exc:
            raise TransportError(f"Unexpected {self._kind.kind} list payload: {exc}") from exc
        return [self._decode(item) for item in items]

    def get(self, name: str) -> TRecord:
        payload = asyncio.run(self._request_async("GET", self._kind.item_path(name), name=name))
        return self._decode(payload)

    def create(self, record: TRecord) -> TRecord:
        body = self._encode(record)
        name = body["metadata"]["name"]
        payload = asyncio.run(
            self._request_async("POST", self._kind.collection_path, name=name, body=body)
        )
        return self._decode(payload)

    def patch(self, original: TRecord, modified: TRecord) -> TRecord:
        before = self._encode(original)
        after = self._encode(modified)
        name = before["metadata"]["name"]
        # status belongs to its own subresource and is ignored on the main resource
        before.pop("status", None)
        after.pop("status", None)
        patch = lock_to_revision(
            create_merge_patch(before, after),
            before["metadata"].get("resourceVersion"),
        )
        log.debug("Patching %s %s: %s", self._kind.kind, name, patch)
        payload = asyncio.run(
            self._request_async(
                "PATCH",
                self._kind.item_path(name),
                name=name,
                content=json.dumps(patch).encode("utf-8"),
                headers={"Content-Type": MERGE_PATCH_CONTENT_TYPE},
            )
        )
        return self._decode(payload)

    def update_status(self, record: TRecord) -> TRecord:
        body = self._encode(record)
        name = body["metadata"]["name"]
        payload = asyncio.run(
            self._request_async(
                "PUT", f"{self._kind.item_path(name)}/status", name=name, body=body
            )
        )
        return self._decode(payload)

    def _encode(self, record: TRecord) -> dict[str, Any]:
        try:
            return self._kind.encode(record)
        except ValidationError as exc:
            raise TransportError(f"Cannot encode {self._kind.kind} record: {exc}") from exc

    def _decode(self, payload: Mapping[str, Any]) -> TRecord:
        try:
            return self._kind.decode(payload)
        except ValidationError as exc:
            raise TransportError(f"Unexpected {self._kind.kind} payload: {exc}") from exc

    async def _request_async(
        self,
        method: str,
        path: str,
        *,
        name: str,
        params: dict[str, str] | None = None,
        body: object = None,
        content: bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> dict[str, Any]:
        async with self._client_factory(self._resilience, self._limiter) as client:
            try:
                response = await client.request(
                    method,
                    path,
                    params=params,
                    json=body,
                    content=content,
                    headers=headers,
                )
            except (httpx.HTTPError, httpx.InvalidURL) as exc:
                raise TransportError(f"{method} {path} failed: {exc}") from exc

        if response.status_code == httpx.codes.NOT_FOUND:
            raise NotFoundError(self._kind.kind, name)
        if response.status_code == httpx.codes.CONFLICT:
            raise ConflictError(self._kind.kind, name, _error_message(response))
        if response.is_error:
            raise TransportError(
                f"{method} {path} returned {response.status_code}: {_error_message(response)}"
            )

        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            raise TransportError(f"Invalid JSON from {method} {path}") from exc
        if not isinstance(payload, dict):
            raise TransportError(f"Unexpected response payload for {method} {path}")
        return payload


def build_kubernetes_resource_store(
    config: KubernetesConfig,
    *,
    client_factory: ClientFactory | None = None,
) -> ResourceStore:
    resilience = kubernetes_resilience_config(config)
    # one API server, one request budget across all three kinds
    limiter = build_limiter(resilience.ratelimit)
    return ResourceStore(
        categories=KubernetesRecordStore(
            kind=CATEGORY_KIND,
            resilience=resilience,
            client_factory=client_factory,
            limiter=limiter,
        ),
        applications=KubernetesRecordStore(
            kind=APPLICATION_KIND,
            resilience=resilience,
            client_factory=client_factory,
            limiter=limiter,
        ),
        versions=KubernetesRecordStore(
            kind=VERSION_KIND,
            resilience=resilience,
            client_factory=client_factory,
            limiter=limiter,
        ),
    )
