"""Domain port definitions for adapters."""

from __future__ import annotations

from .bundles import BundleDecoder, IdGenerator
from .content_store import ContentStore
from .resource_store import RecordStore, ResourceStore

__all__ = [
    "BundleDecoder",
    "ContentStore",
    "IdGenerator",
    "RecordStore",
    "ResourceStore",
]
