"""JSON merge patches (RFC 7386) with an optimistic lock on ``resourceVersion``."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Final

MERGE_PATCH_CONTENT_TYPE: Final[str] = "application/merge-patch+json"

_MISSING: Final = object()


def create_merge_patch(original: Mapping[str, Any], modified: Mapping[str, Any]) -> dict[str, Any]:
    """Return the merge patch that turns ``original`` into ``modified``.

    Removed keys become ``null``; nested objects are diffed recursively; lists are
    replaced as a whole.
    """

    patch: dict[str, Any] = {key: None for key in original if key not in modified}
    for key, value in modified.items():
        previous = original.get(key, _MISSING)
        if previous == value:
            continue
        if isinstance(previous, Mapping) and isinstance(value, Mapping):
            nested = create_merge_patch(previous, value)
            if nested:
                patch[key] = nested
        else:
            patch[key] = value
    return patch


def lock_to_revision(patch: dict[str, Any], resource_version: str | None) -> dict[str, Any]:
    """Pin ``patch`` to ``resource_version`` so the server rejects it if the record moved on."""

    if resource_version is None:
        return patch
    metadata = dict(patch.get("metadata") or {})
    metadata["resourceVersion"] = resource_version
    return {**patch, "metadata": metadata}
