"""Sequential import of a batch of bundle files with per-bundle failure isolation."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from appimport.domain.errors import AppImportError

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import Path

    from appimport.domain.model import ApplicationRecord, VersionRecord

    from .workflow import ImportWorkflow

log = getLogger(__name__)


@dataclass(slots=True)
class BundleOutcome:
    """Result of importing one bundle file."""

    path: Path
    application: ApplicationRecord | None = None
    version: VersionRecord | None = None
    error: Exception | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None and self.version is not None


@dataclass(slots=True)
class ImportReport:
    outcomes: list[BundleOutcome] = field(default_factory=list)

    @property
    def imported(self) -> list[BundleOutcome]:
        return [outcome for outcome in self.outcomes if outcome.succeeded]

    @property
    def failed(self) -> list[BundleOutcome]:
        return [outcome for outcome in self.outcomes if not outcome.succeeded]


def import_bundle(workflow: ImportWorkflow, path: Path) -> BundleOutcome:
    """Import a single bundle, capturing rather than raising its failure.

    The application step's writes stay in place when the version step fails; the next
    run picks up from there. Adapters report every store, transport and decode failure
    as ``AppImportError`` (or ``OSError`` for local files); anything else is a bug and
    propagates.
    """

    outcome = BundleOutcome(path=path)
    try:
        bundle = workflow.decoder.decode(path)
        outcome.application = workflow.create_app(bundle)
    except (AppImportError, OSError) as exc:
        log.exception("Create application for %s failed", path.name)
        outcome.error = exc
        return outcome

    try:
        outcome.version = workflow.create_app_version(outcome.application, path)
    except (AppImportError, OSError) as exc:
        log.exception("Create application version for %s failed", path.name)
        outcome.error = exc
    return outcome


def import_bundles(workflow: ImportWorkflow, paths: Iterable[Path]) -> ImportReport:
    """Import ``paths`` one at a time, in the order given."""

    report = ImportReport()
    for path in paths:
        report.outcomes.append(import_bundle(workflow, path))

    log.info(
        "Import finished: imported=%d, failed=%d",
        len(report.imported),
        len(report.failed),
    )
    return report
