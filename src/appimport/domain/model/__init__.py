"""Domain model for imported applications."""

from __future__ import annotations

from .bundle import BundleDescriptor
from .enums import RecordKind, VersionState
from .records import (
    ApplicationRecord,
    AuditEntry,
    CategoryRecord,
    Maintainer,
    ObjectMeta,
    OwnerReference,
    VersionMetadata,
    VersionRecord,
    VersionStatus,
)

__all__ = [
    "ApplicationRecord",
    "AuditEntry",
    "BundleDescriptor",
    "CategoryRecord",
    "Maintainer",
    "ObjectMeta",
    "OwnerReference",
    "RecordKind",
    "VersionMetadata",
    "VersionRecord",
    "VersionState",
    "VersionStatus",
]
