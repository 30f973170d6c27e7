"""Application orchestration entry points."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from appimport.adapters.helm import HelmChartDecoder
from appimport.adapters.kubernetes import build_kubernetes_resource_store
from appimport.adapters.s3 import S3ContentStore
from appimport.config import (
    DEFAULT_IMPORT_CONFIG_PATH,
    ConfigurationError,
    ImportConfig,
    get_kubernetes_config,
    get_s3_config,
    load_import_config,
)
from appimport.domain.import_workflow import ImportReport, ImportWorkflow, import_bundles

if TYPE_CHECKING:
    from pathlib import Path

BUNDLE_SUFFIX = ".tgz"

log = getLogger(__name__)


def list_bundle_files(chart_dir: Path) -> list[Path]:
    """Return the bundle archives directly inside ``chart_dir``, sorted by name."""

    try:
        entries = sorted(chart_dir.iterdir())
    except OSError as exc:
        raise ConfigurationError(f"Cannot read chart directory {chart_dir}: {exc}") from exc

    bundles: list[Path] = []
    for entry in entries:
        if entry.is_dir():
            continue
        if not entry.name.endswith(BUNDLE_SUFFIX):
            log.info("Skip file %s", entry.name)
            continue
        bundles.append(entry)
    return bundles


def build_import_workflow(import_config: ImportConfig) -> ImportWorkflow:
    """Construct the workflow against the configured API server and object store."""

    return ImportWorkflow(
        store=build_kubernetes_resource_store(get_kubernetes_config()),
        content_store=S3ContentStore(get_s3_config()),
        decoder=HelmChartDecoder(),
        config=import_config,
    )


def import_charts(
    chart_dir: Path,
    *,
    import_config_path: Path = DEFAULT_IMPORT_CONFIG_PATH,
    workflow: ImportWorkflow | None = None,
) -> ImportReport:
    """Import every chart archive in ``chart_dir``.

    Setup problems (configuration, clients, unreadable directory) raise; failures of
    individual charts are logged and reported without stopping the run.
    """

    effective_workflow = workflow or build_import_workflow(load_import_config(import_config_path))
    bundles = list_bundle_files(chart_dir)
    log.info("Starting import: chart_dir=%s, bundles=%d", chart_dir, len(bundles))
    return import_bundles(effective_workflow, bundles)


def dump_import_config(import_config_path: Path = DEFAULT_IMPORT_CONFIG_PATH) -> str:
    config = load_import_config(import_config_path)
    return config.to_yaml()
