"""Schema for the ``Chart.yaml`` metadata file inside a chart archive."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChartModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ChartMaintainer(ChartModel):
    name: str
    email: str | None = None
    url: str | None = None


class ChartMetadata(ChartModel):
    name: str = Field(min_length=1)
    version: str = Field(min_length=1)
    api_version: str | None = Field(default=None, alias="apiVersion")
    app_version: str | None = Field(default=None, alias="appVersion")
    description: str | None = None
    icon: str | None = None
    home: str | None = None
    sources: list[str] = Field(default_factory=list)
    maintainers: list[ChartMaintainer] = Field(default_factory=list)
    keywords: list[str] = Field(default_factory=list)
    annotations: dict[str, str] = Field(default_factory=dict)
    deprecated: bool = False

    @field_validator("version", "app_version", mode="before")
    @classmethod
    def _stringify_numbers(cls, value: object) -> object:
        # YAML reads unquoted versions such as ``1.0`` as floats
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("sources", "keywords", "maintainers", mode="before")
    @classmethod
    def _null_as_empty_list(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("annotations", mode="before")
    @classmethod
    def _stringify_annotations(cls, value: object) -> object:
        if value is None:
            return {}
        if isinstance(value, dict):
            return {str(key): "" if item is None else str(item) for key, item in value.items()}
        return value
