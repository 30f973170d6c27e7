"""Builders for bundle descriptors and bundle files."""

from __future__ import annotations

from typing import TYPE_CHECKING

from appimport.domain.model import BundleDescriptor, Maintainer
from appimport.domain.model.constants import (
    CHART_CATEGORY_ANNOTATION,
    CHART_DISPLAY_NAME_ANNOTATION,
)

if TYPE_CHECKING:
    from pathlib import Path


def make_bundle(
    name: str = "redis",
    version: str = "1.0.0",
    *,
    category: str | None = None,
    display_name: str | None = None,
) -> BundleDescriptor:
    annotations: dict[str, str] = {}
    if category is not None:
        annotations[CHART_CATEGORY_ANNOTATION] = category
    if display_name is not None:
        annotations[CHART_DISPLAY_NAME_ANNOTATION] = display_name
    return BundleDescriptor(
        name=name,
        version=version,
        app_version=f"{version}-app",
        description=f"{name} chart",
        icon=f"https://charts.example.com/{name}.png",
        home=f"https://{name}.example.com",
        sources=(f"https://github.com/example/{name}",),
        maintainers=(Maintainer(name="ops", email="ops@example.com"),),
        keywords=(name, "database"),
        annotations=annotations,
    )


def write_bundle_file(directory: Path, filename: str) -> Path:
    path = directory / filename
    path.write_bytes(f"archive bytes of {filename}".encode())
    return path
