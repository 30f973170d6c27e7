"""Helm chart bundle decoder."""

from __future__ import annotations

from .decoder import HelmChartDecoder, read_chart_metadata
from .schema import ChartMetadata

__all__ = ["ChartMetadata", "HelmChartDecoder", "read_chart_metadata"]
