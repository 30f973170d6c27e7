"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class VersionState(StrEnum):
    PENDING = "draft"
    ACTIVE = "active"


class RecordKind(StrEnum):
    CATEGORY = "HelmCategory"
    APPLICATION = "HelmApplication"
    VERSION = "HelmApplicationVersion"
