"""Decoded bundle metadata."""

from __future__ import annotations

from dataclasses import dataclass, field

from .constants import CHART_CATEGORY_ANNOTATION, CHART_DISPLAY_NAME_ANNOTATION
from .records import Maintainer


@dataclass(slots=True, frozen=True)
class BundleDescriptor:
    """Read-only view of a bundle's embedded metadata."""

    name: str
    version: str
    app_version: str = ""
    description: str = ""
    icon: str = ""
    home: str = ""
    sources: tuple[str, ...] = ()
    maintainers: tuple[Maintainer, ...] = ()
    keywords: tuple[str, ...] = ()
    annotations: dict[str, str] = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        return self.annotations.get(CHART_DISPLAY_NAME_ANNOTATION, "").strip()

    @property
    def category(self) -> str:
        return self.annotations.get(CHART_CATEGORY_ANNOTATION, "").strip()
