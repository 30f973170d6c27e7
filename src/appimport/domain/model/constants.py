"""Label, annotation and identifier conventions of the application store."""

from __future__ import annotations

from typing import Final

API_GROUP: Final[str] = "application.kubesphere.io"
API_VERSION: Final[str] = "v1alpha1"

BUILTIN_LABEL: Final[str] = "application.kubesphere.io/builtin-app"
WORKSPACE_LABEL: Final[str] = "kubesphere.io/workspace"
CATEGORY_ID_LABEL: Final[str] = "application.kubesphere.io/app-category-id"
APPLICATION_ID_LABEL: Final[str] = "application.kubesphere.io/app-id"
CREATOR_ANNOTATION: Final[str] = "kubesphere.io/creator"

# Annotations read from the chart's own metadata
CHART_DISPLAY_NAME_ANNOTATION: Final[str] = "app.kubesphere.io/display-name"
CHART_CATEGORY_ANNOTATION: Final[str] = "app.kubesphere.io/category"

SYSTEM_WORKSPACE: Final[str] = "system-workspace"
SYSTEM_OPERATOR: Final[str] = "admin"
DEFAULT_CATEGORY_ICON: Final[str] = "documentation"

CATEGORY_ID_PREFIX: Final[str] = "ctg-"
APPLICATION_ID_PREFIX: Final[str] = "app-"
VERSION_ID_PREFIX: Final[str] = "appv-"

STORE_APPLICATION_SUFFIX: Final[str] = "-store"
