"""Import configuration: display-name overrides, category icons and extra annotations."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Final

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from appimport.domain.model.constants import DEFAULT_CATEGORY_ICON

from .errors import ConfigurationError

if TYPE_CHECKING:
    from appimport.domain.model import BundleDescriptor

DEFAULT_IMPORT_CONFIG_PATH: Final[Path] = Path("import-config.yaml")


class ImportConfig(BaseModel):
    """Read-only overlay applied to every bundle of an import run.

    The YAML file uses the keys ``categoryIcon``, ``appNameReplace`` and
    ``extraAnnotations``; all three are optional.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    category_icon: dict[str, str] = Field(default_factory=dict, alias="categoryIcon")
    app_name_replace: dict[str, str] = Field(default_factory=dict, alias="appNameReplace")
    extra_annotations: dict[str, dict[str, str]] = Field(
        default_factory=dict, alias="extraAnnotations"
    )

    @field_validator("category_icon", mode="after")
    @classmethod
    def _lowercase_categories(cls, value: dict[str, str]) -> dict[str, str]:
        return {name.lower(): icon for name, icon in value.items()}

    def replace_app_name(self, bundle: BundleDescriptor) -> str:
        """Resolve the display name: configured override, chart display name, bundle name."""

        if bundle.name in self.app_name_replace:
            return self.app_name_replace[bundle.name]
        if bundle.display_name:
            return bundle.display_name
        return bundle.name

    def icon_for(self, category: str) -> str:
        return self.category_icon.get(category.lower()) or DEFAULT_CATEGORY_ICON

    def annotations_for(self, bundle: BundleDescriptor) -> dict[str, str]:
        # callers add their own keys, never hand out the stored mapping
        return dict(self.extra_annotations.get(bundle.name, {}))

    def to_yaml(self) -> str:
        return yaml.safe_dump(self.model_dump(by_alias=True), sort_keys=True)


def load_import_config(path: Path = DEFAULT_IMPORT_CONFIG_PATH) -> ImportConfig:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read import config {path}: {exc}") from exc

    try:
        payload = yaml.safe_load(raw) or {}
    except yaml.YAMLError as exc:
        raise ConfigurationError(f"Invalid YAML in import config {path}: {exc}") from exc

    if not isinstance(payload, dict):
        raise ConfigurationError(f"Import config {path} must be a mapping")

    try:
        return ImportConfig.model_validate(payload)
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid import config {path}: {exc}") from exc
