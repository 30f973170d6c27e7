"""Import workflow: resolve, create, rename and activate records for bundles."""

from __future__ import annotations

from .retry import retry_on_conflict
from .runner import BundleOutcome, ImportReport, import_bundle, import_bundles
from .workflow import ACTIVATE_ATTEMPTS, RENAME_ATTEMPTS, ImportWorkflow

__all__ = [
    "ACTIVATE_ATTEMPTS",
    "RENAME_ATTEMPTS",
    "BundleOutcome",
    "ImportReport",
    "ImportWorkflow",
    "import_bundle",
    "import_bundles",
    "retry_on_conflict",
]
