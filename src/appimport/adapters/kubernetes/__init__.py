"""Kubernetes resource store adapter."""

from __future__ import annotations

from .client import KubernetesRecordStore, build_kubernetes_resource_store
from .patch import create_merge_patch, lock_to_revision

__all__ = [
    "KubernetesRecordStore",
    "build_kubernetes_resource_store",
    "create_merge_patch",
    "lock_to_revision",
]
