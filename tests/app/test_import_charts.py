from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from appimport.app import dump_import_config, import_charts, list_bundle_files
from appimport.config import ConfigurationError
from tests.helpers.bundles import make_bundle, write_bundle_file

if TYPE_CHECKING:
    from collections.abc import Callable
    from pathlib import Path

    from appimport.domain.import_workflow import ImportWorkflow
    from tests.helpers.stores import FakeBundleDecoder, FakeResourceStore


def test_list_bundle_files_skips_directories_and_other_files(
    tmp_path: Path, caplog: pytest.LogCaptureFixture
) -> None:
    (tmp_path / "nested.tgz").mkdir()
    write_bundle_file(tmp_path, "README.md")
    second = write_bundle_file(tmp_path, "redis-1.0.1.tgz")
    first = write_bundle_file(tmp_path, "redis-1.0.0.tgz")

    with caplog.at_level("INFO", logger="appimport.app"):
        bundles = list_bundle_files(tmp_path)

    assert bundles == [first, second]
    assert "Skip file README.md" in caplog.text


def test_list_bundle_files_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Cannot read chart directory"):
        list_bundle_files(tmp_path / "absent")


def test_import_charts_runs_injected_workflow(
    make_workflow: Callable[..., ImportWorkflow],
    resource_store: FakeResourceStore,
    decoder: FakeBundleDecoder,
    tmp_path: Path,
) -> None:
    decoder.bundles["redis-1.0.0.tgz"] = make_bundle()
    write_bundle_file(tmp_path, "redis-1.0.0.tgz")
    write_bundle_file(tmp_path, "notes.txt")

    report = import_charts(tmp_path, workflow=make_workflow())

    assert [outcome.path.name for outcome in report.imported] == ["redis-1.0.0.tgz"]
    assert len(resource_store.versions.items) == 1


def test_import_charts_reports_missing_import_config(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError, match="Cannot read import config"):
        import_charts(tmp_path, import_config_path=tmp_path / "absent.yaml")


def test_dump_import_config(tmp_path: Path) -> None:
    path = tmp_path / "import-config.yaml"
    path.write_text("appNameReplace:\n  redis: Redis\n")

    dumped = dump_import_config(path)

    assert "appNameReplace:\n  redis: Redis\n" in dumped
