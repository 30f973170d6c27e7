"""Read chart metadata out of ``.tgz`` chart archives."""

from __future__ import annotations

import tarfile
from logging import getLogger
from pathlib import PurePosixPath
from typing import TYPE_CHECKING

import yaml
from pydantic import ValidationError

from appimport.domain.errors import DecodeError
from appimport.domain.model import BundleDescriptor, Maintainer
from appimport.domain.ports import BundleDecoder

from .schema import ChartMetadata

if TYPE_CHECKING:
    from pathlib import Path

log = getLogger(__name__)

CHART_FILE = "Chart.yaml"
# Chart.yaml is tiny; anything larger is not a chart
MAX_CHART_FILE_BYTES = 1024 * 1024


def _find_chart_file(archive: tarfile.TarFile) -> tarfile.TarInfo | None:
    for member in archive.getmembers():
        if not member.isfile():
            continue
        parts = PurePosixPath(member.name.removeprefix("./")).parts
        if len(parts) == 2 and parts[1] == CHART_FILE:
            return member
    return None


def read_chart_metadata(path: Path) -> ChartMetadata:
    try:
        with tarfile.open(path, mode="r:gz") as archive:
            member = _find_chart_file(archive)
            if member is None:
                raise DecodeError(path, f"no top-level {CHART_FILE} in archive")
            if member.size > MAX_CHART_FILE_BYTES:
                raise DecodeError(path, f"{CHART_FILE} is too large ({member.size} bytes)")
            handle = archive.extractfile(member)
            if handle is None:
                raise DecodeError(path, f"cannot read {member.name}")
            with handle:
                raw = handle.read()
    except (OSError, tarfile.TarError) as exc:
        raise DecodeError(path, str(exc)) from exc

    try:
        payload = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise DecodeError(path, f"invalid {CHART_FILE}: {exc}") from exc
    if not isinstance(payload, dict):
        raise DecodeError(path, f"{CHART_FILE} is not a mapping")

    try:
        return ChartMetadata.model_validate(payload)
    except ValidationError as exc:
        raise DecodeError(path, f"invalid {CHART_FILE}: {exc}") from exc


def to_descriptor(metadata: ChartMetadata) -> BundleDescriptor:
    return BundleDescriptor(
        name=metadata.name,
        version=metadata.version,
        app_version=metadata.app_version or "",
        description=metadata.description or "",
        icon=metadata.icon or "",
        home=metadata.home or "",
        sources=tuple(metadata.sources),
        maintainers=tuple(
            Maintainer(name=item.name, email=item.email or "", url=item.url or "")
            for item in metadata.maintainers
        ),
        keywords=tuple(metadata.keywords),
        annotations=dict(metadata.annotations),
    )


class HelmChartDecoder(BundleDecoder):
    """Decode Helm chart archives (``<chart>/Chart.yaml`` inside a gzipped tar)."""

    def decode(self, path: Path) -> BundleDescriptor:
        metadata = read_chart_metadata(path)
        if metadata.deprecated:
            log.warning("Chart %s %s is marked deprecated", metadata.name, metadata.version)
        return to_descriptor(metadata)
