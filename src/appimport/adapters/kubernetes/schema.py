"""Wire schemas for the application store's custom resources."""

from __future__ import annotations

from datetime import datetime  # noqa: TC003

from pydantic import BaseModel, ConfigDict, Field


class KubeModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class OwnerReferencePayload(KubeModel):
    api_version: str = Field(alias="apiVersion")
    kind: str
    name: str
    uid: str | None = None


class ObjectMetaPayload(KubeModel):
    name: str
    uid: str | None = None
    resource_version: str | None = Field(default=None, alias="resourceVersion")
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)
    owner_references: list[OwnerReferencePayload] = Field(
        default_factory=list, alias="ownerReferences"
    )
    creation_timestamp: datetime | None = Field(default=None, alias="creationTimestamp")


class HelmCategorySpec(KubeModel):
    name: str
    description: str = ""
    locale: str | None = None


class HelmCategoryPayload(KubeModel):
    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: ObjectMetaPayload
    spec: HelmCategorySpec


class HelmApplicationSpec(KubeModel):
    name: str
    description: str = ""
    icon: str = ""
    abstraction: str | None = None
    app_home: str | None = Field(default=None, alias="appHome")
    attachments: list[str] | None = None


class HelmApplicationPayload(KubeModel):
    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: ObjectMetaPayload
    spec: HelmApplicationSpec


class MaintainerPayload(KubeModel):
    name: str
    email: str = ""
    url: str = ""


class HelmApplicationVersionSpec(KubeModel):
    """Version spec; the chart metadata snapshot is inlined next to ``dataKey``."""

    name: str
    version: str
    app_version: str = Field(default="", alias="appVersion")
    description: str = ""
    icon: str = ""
    home: str = ""
    sources: list[str] = Field(default_factory=list)
    maintainers: list[MaintainerPayload] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    data_key: str = Field(default="", alias="dataKey")


class AuditPayload(KubeModel):
    state: str
    time: datetime
    operator: str = ""
    message: str | None = None
    operator_type: str | None = Field(default=None, alias="operatorType")


class HelmApplicationVersionStatus(KubeModel):
    state: str = ""
    audit: list[AuditPayload] = Field(default_factory=list)


class HelmApplicationVersionPayload(KubeModel):
    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: ObjectMetaPayload
    spec: HelmApplicationVersionSpec
    status: HelmApplicationVersionStatus = Field(default_factory=HelmApplicationVersionStatus)


class ListPayload(KubeModel):
    items: list[dict[str, object]] = Field(default_factory=list)


class StatusPayload(KubeModel):
    """Error body returned by the API server."""

    message: str = ""
    reason: str = ""
    code: int | None = None
