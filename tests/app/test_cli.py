from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from appimport.config import ConfigurationError
from appimport.domain.errors import DecodeError
from appimport.domain.import_workflow import BundleOutcome, ImportReport
from appimport.ui import cli as cli_module

if TYPE_CHECKING:
    from collections.abc import Callable


def _fake_import(
    report: ImportReport, captured: dict[str, object]
) -> Callable[..., ImportReport]:
    def fake_import_charts(chart_dir: Path, *, import_config_path: Path) -> ImportReport:
        captured["chart_dir"] = chart_dir
        captured["import_config_path"] = import_config_path
        return report

    return fake_import_charts


def test_cli_import_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "import_charts", _fake_import(ImportReport(), captured))

    cli_module.main(["import"])

    assert captured["chart_dir"] == Path("/root/package")
    assert captured["import_config_path"] == Path("import-config.yaml")


def test_cli_import_with_flags(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, object] = {}
    monkeypatch.setattr(cli_module, "import_charts", _fake_import(ImportReport(), captured))

    cli_module.main(
        ["--verbose", "import", "--chart-dir", "/charts", "--import-config", "/etc/cfg.yaml"]
    )

    assert captured["chart_dir"] == Path("/charts")
    assert captured["import_config_path"] == Path("/etc/cfg.yaml")


def test_cli_exits_nonzero_when_a_bundle_fails(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    path = Path("/charts/broken.tgz")
    report = ImportReport(
        outcomes=[BundleOutcome(path=path, error=DecodeError(path, "not a gzip file"))]
    )
    monkeypatch.setattr(cli_module, "import_charts", _fake_import(report, {}))

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["import"])

    assert excinfo.value.code == 1
    assert "Failed to import broken.tgz" in caplog.text


def test_cli_exits_nonzero_on_setup_failure(monkeypatch: pytest.MonkeyPatch) -> None:
    def failing_import(chart_dir: Path, *, import_config_path: Path) -> ImportReport:
        raise ConfigurationError("Missing configuration for: S3_BUCKET")

    monkeypatch.setattr(cli_module, "import_charts", failing_import)

    with pytest.raises(SystemExit) as excinfo:
        cli_module.main(["import"])

    assert excinfo.value.code == 1


def test_cli_dump_config(
    monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture
) -> None:
    monkeypatch.setattr(cli_module, "dump_import_config", lambda path: f"dumped {path}\n")

    with caplog.at_level("INFO", logger="appimport.ui.cli"):
        cli_module.main(["dump-config", "--import-config", "custom.yaml"])

    assert "dumped custom.yaml" in caplog.text


def test_cli_requires_a_command() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.main([])

    assert excinfo.value.code == 2


def test_sigint_handler_exits_with_interrupt_code() -> None:
    with pytest.raises(SystemExit) as excinfo:
        cli_module.sigint_handler(2, None)

    assert excinfo.value.code == 130
