"""Records kept in the declarative resource store."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .constants import (
    BUILTIN_LABEL,
    CATEGORY_ID_LABEL,
    STORE_APPLICATION_SUFFIX,
    WORKSPACE_LABEL,
)
from .enums import VersionState

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(slots=True, frozen=True)
class OwnerReference:
    api_version: str
    kind: str
    name: str
    uid: str | None = None


@dataclass(slots=True)
class ObjectMeta:
    """Identity and bookkeeping shared by every stored record.

    ``name`` is the generated record id. ``resource_version`` is the opaque revision
    the store bumps on each write; writes based on an older revision are rejected.
    """

    name: str
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    resource_version: str | None = None
    uid: str | None = None
    owner_references: list[OwnerReference] = field(default_factory=list)
    creation_timestamp: datetime | None = None


@dataclass(slots=True, kw_only=True)
class CategoryRecord:
    meta: ObjectMeta
    display_name: str
    # the store keeps the category icon in the description field
    description: str = ""

    @property
    def id(self) -> str:
        return self.meta.name


@dataclass(slots=True, kw_only=True)
class ApplicationRecord:
    meta: ObjectMeta
    display_name: str
    description: str = ""
    icon: str = ""

    @property
    def id(self) -> str:
        return self.meta.name

    @property
    def application_id(self) -> str:
        """Id of the logical application, shared by the primary and its store mirror."""

        return self.meta.name.removesuffix(STORE_APPLICATION_SUFFIX)

    @property
    def store_id(self) -> str:
        return f"{self.application_id}{STORE_APPLICATION_SUFFIX}"

    @property
    def workspace(self) -> str:
        return self.meta.labels.get(WORKSPACE_LABEL, "")

    @property
    def category_id(self) -> str | None:
        return self.meta.labels.get(CATEGORY_ID_LABEL)

    @property
    def is_builtin(self) -> bool:
        return self.meta.labels.get(BUILTIN_LABEL) == "true"


@dataclass(slots=True, frozen=True)
class Maintainer:
    name: str
    email: str = ""
    url: str = ""


@dataclass(slots=True)
class VersionMetadata:
    """Snapshot of the bundle metadata taken when the version record is created."""

    name: str
    version: str
    app_version: str = ""
    description: str = ""
    icon: str = ""
    home: str = ""
    sources: list[str] = field(default_factory=list)
    maintainers: list[Maintainer] = field(default_factory=list)
    keywords: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class AuditEntry:
    """One line of the append-only audit log.

    Entries written by other actors keep their state verbatim (``submitted``,
    ``rejected``, ...), so ``state`` is a plain string rather than a ``VersionState``.
    """

    state: str
    time: datetime
    operator: str
    message: str | None = None
    operator_type: str | None = None


@dataclass(slots=True)
class VersionStatus:
    state: VersionState = VersionState.PENDING
    audit: list[AuditEntry] = field(default_factory=list)


@dataclass(slots=True, kw_only=True)
class VersionRecord:
    meta: ObjectMeta
    metadata: VersionMetadata
    # set once the payload is uploaded, never changed afterwards
    payload_key: str = ""
    status: VersionStatus = field(default_factory=VersionStatus)

    @property
    def id(self) -> str:
        return self.meta.name

    @property
    def version(self) -> str:
        return self.metadata.version

    @property
    def is_active(self) -> bool:
        return self.status.state is VersionState.ACTIVE

    @property
    def is_complete(self) -> bool:
        return bool(self.payload_key) and self.is_active
