"""Error taxonomy shared by the import workflow and its adapters."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class AppImportError(RuntimeError):
    """Base class for failures that abort a single bundle import."""


class TransportError(AppImportError):
    """Raised when a store cannot be reached or rejects a request outright."""


class NotFoundError(AppImportError):
    """Raised when a record does not exist in the resource store."""

    def __init__(self, kind: str, name: str) -> None:
        super().__init__(f"{kind} {name!r} not found")
        self.kind = kind
        self.name = name


class ConflictError(AppImportError):
    """Raised when a write is rejected because its base revision is stale."""

    def __init__(self, kind: str, name: str, message: str | None = None) -> None:
        super().__init__(message or f"conflicting write to {kind} {name!r}")
        self.kind = kind
        self.name = name


class ExhaustedRetriesError(AppImportError):
    """Raised once a retry-on-conflict loop has spent its attempt budget."""

    def __init__(self, operation: str, target: str, attempts: int) -> None:
        super().__init__(f"{operation} failed for {target!r} after {attempts} attempts")
        self.operation = operation
        self.target = target
        self.attempts = attempts


class DecodeError(AppImportError):
    """Raised when a bundle archive cannot be read or its metadata is malformed."""

    def __init__(self, path: Path | str, reason: str) -> None:
        super().__init__(f"cannot decode bundle {path}: {reason}")
        self.path = path
        self.reason = reason
