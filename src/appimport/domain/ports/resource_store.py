"""Ports for the declarative resource store."""

from __future__ import annotations

import builtins
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Mapping

    from appimport.domain.model import ApplicationRecord, CategoryRecord, VersionRecord


@runtime_checkable
class RecordStore[TRecord](Protocol):
    """Store verbs for one record kind.

    ``patch`` and ``update_status`` are compare-and-swap writes: the store rejects them
    with ``ConflictError`` when the submitted ``resource_version`` is stale.
    """

    def list(self, selector: Mapping[str, str] | None = None) -> builtins.list[TRecord]: ...

    def get(self, name: str) -> TRecord: ...

    def create(self, record: TRecord) -> TRecord: ...

    def patch(self, original: TRecord, modified: TRecord) -> TRecord: ...

    def update_status(self, record: TRecord) -> TRecord: ...


@dataclass(slots=True)
class ResourceStore:
    """Record stores required by the import workflow."""

    categories: RecordStore[CategoryRecord]
    applications: RecordStore[ApplicationRecord]
    versions: RecordStore[VersionRecord]
