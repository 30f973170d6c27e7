"""Translate between store payloads and domain records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from appimport.domain.model import (
    ApplicationRecord,
    AuditEntry,
    CategoryRecord,
    Maintainer,
    ObjectMeta,
    OwnerReference,
    RecordKind,
    VersionMetadata,
    VersionRecord,
    VersionState,
    VersionStatus,
)
from appimport.domain.model.constants import API_GROUP, API_VERSION

from .schema import (
    AuditPayload,
    HelmApplicationPayload,
    HelmApplicationSpec,
    HelmApplicationVersionPayload,
    HelmApplicationVersionSpec,
    HelmApplicationVersionStatus,
    HelmCategoryPayload,
    HelmCategorySpec,
    KubeModel,
    MaintainerPayload,
    ObjectMetaPayload,
    OwnerReferencePayload,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Mapping

type Payload = dict[str, Any]

GROUP_VERSION = f"{API_GROUP}/{API_VERSION}"


def _dump(model: KubeModel) -> Payload:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def _meta_from_payload(payload: ObjectMetaPayload) -> ObjectMeta:
    return ObjectMeta(
        name=payload.name,
        labels=dict(payload.labels),
        annotations=dict(payload.annotations),
        resource_version=payload.resource_version,
        uid=payload.uid,
        owner_references=[
            OwnerReference(
                api_version=ref.api_version,
                kind=ref.kind,
                name=ref.name,
                uid=ref.uid,
            )
            for ref in payload.owner_references
        ],
        creation_timestamp=payload.creation_timestamp,
    )


def _meta_to_payload(meta: ObjectMeta) -> ObjectMetaPayload:
    return ObjectMetaPayload(
        name=meta.name,
        uid=meta.uid,
        resource_version=meta.resource_version,
        labels=dict(meta.labels),
        annotations=dict(meta.annotations),
        owner_references=[
            OwnerReferencePayload(
                api_version=ref.api_version,
                kind=ref.kind,
                name=ref.name,
                uid=ref.uid,
            )
            for ref in meta.owner_references
        ],
        creation_timestamp=meta.creation_timestamp,
    )


def category_from_payload(raw: Mapping[str, object]) -> CategoryRecord:
    payload = HelmCategoryPayload.model_validate(raw)
    return CategoryRecord(
        meta=_meta_from_payload(payload.metadata),
        display_name=payload.spec.name,
        description=payload.spec.description,
    )


def category_to_payload(record: CategoryRecord) -> Payload:
    payload = HelmCategoryPayload(
        api_version=GROUP_VERSION,
        kind=RecordKind.CATEGORY.value,
        metadata=_meta_to_payload(record.meta),
        spec=HelmCategorySpec(name=record.display_name, description=record.description),
    )
    return _dump(payload)


def application_from_payload(raw: Mapping[str, object]) -> ApplicationRecord:
    payload = HelmApplicationPayload.model_validate(raw)
    return ApplicationRecord(
        meta=_meta_from_payload(payload.metadata),
        display_name=payload.spec.name,
        description=payload.spec.description,
        icon=payload.spec.icon,
    )


def application_to_payload(record: ApplicationRecord) -> Payload:
    payload = HelmApplicationPayload(
        api_version=GROUP_VERSION,
        kind=RecordKind.APPLICATION.value,
        metadata=_meta_to_payload(record.meta),
        spec=HelmApplicationSpec(
            name=record.display_name,
            description=record.description,
            icon=record.icon,
        ),
    )
    return _dump(payload)


def _state_from_payload(value: str) -> VersionState:
    # anything short of active (empty, draft, submitted, ...) still needs activation
    return VersionState.ACTIVE if value == VersionState.ACTIVE else VersionState.PENDING


def version_from_payload(raw: Mapping[str, object]) -> VersionRecord:
    payload = HelmApplicationVersionPayload.model_validate(raw)
    spec = payload.spec
    return VersionRecord(
        meta=_meta_from_payload(payload.metadata),
        metadata=VersionMetadata(
            name=spec.name,
            version=spec.version,
            app_version=spec.app_version,
            description=spec.description,
            icon=spec.icon,
            home=spec.home,
            sources=list(spec.sources),
            maintainers=[
                Maintainer(name=item.name, email=item.email, url=item.url)
                for item in spec.maintainers
            ],
            keywords=list(spec.keywords),
        ),
        payload_key=spec.data_key,
        status=VersionStatus(
            state=_state_from_payload(payload.status.state),
            audit=[
                AuditEntry(
                    state=entry.state,
                    time=entry.time,
                    operator=entry.operator,
                    message=entry.message,
                    operator_type=entry.operator_type,
                )
                for entry in payload.status.audit
            ],
        ),
    )


def version_to_payload(record: VersionRecord) -> Payload:
    metadata = record.metadata
    payload = HelmApplicationVersionPayload(
        api_version=GROUP_VERSION,
        kind=RecordKind.VERSION.value,
        metadata=_meta_to_payload(record.meta),
        spec=HelmApplicationVersionSpec(
            name=metadata.name,
            version=metadata.version,
            app_version=metadata.app_version,
            description=metadata.description,
            icon=metadata.icon,
            home=metadata.home,
            sources=list(metadata.sources),
            maintainers=[
                MaintainerPayload(name=item.name, email=item.email, url=item.url)
                for item in metadata.maintainers
            ],
            keywords=list(metadata.keywords),
            data_key=record.payload_key,
        ),
        status=HelmApplicationVersionStatus(
            state=record.status.state.value,
            audit=[
                AuditPayload(
                    state=str(entry.state),
                    time=entry.time.replace(microsecond=0),
                    operator=entry.operator,
                    message=entry.message,
                    operator_type=entry.operator_type,
                )
                for entry in record.status.audit
            ],
        ),
    )
    return _dump(payload)


@dataclass(slots=True, frozen=True)
class ResourceKind[TRecord]:
    """REST mapping and codec for one cluster-scoped custom resource."""

    kind: RecordKind
    plural: str
    decode: Callable[[Mapping[str, object]], TRecord]
    encode: Callable[[TRecord], Payload]

    @property
    def collection_path(self) -> str:
        return f"/apis/{GROUP_VERSION}/{self.plural}"

    def item_path(self, name: str) -> str:
        return f"{self.collection_path}/{name}"


CATEGORY_KIND = ResourceKind[CategoryRecord](
    kind=RecordKind.CATEGORY,
    plural="helmcategories",
    decode=category_from_payload,
    encode=category_to_payload,
)
APPLICATION_KIND = ResourceKind[ApplicationRecord](
    kind=RecordKind.APPLICATION,
    plural="helmapplications",
    decode=application_from_payload,
    encode=application_to_payload,
)
VERSION_KIND = ResourceKind[VersionRecord](
    kind=RecordKind.VERSION,
    plural="helmapplicationversions",
    decode=version_from_payload,
    encode=version_to_payload,
)
