"""Connection settings for the Kubernetes API server hosting the application store."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .env import env_flag, optional_env_var
from .errors import ConfigurationError, MissingConfigurationError

SERVICE_ACCOUNT_DIR: Final[Path] = Path("/var/run/secrets/kubernetes.io/serviceaccount")


@dataclass(frozen=True, slots=True)
class KubernetesConfig:
    api_server: str
    token: str | None = None
    ca_cert_path: str | None = None
    insecure_skip_verify: bool = False
    qps: float = 5.0

    @property
    def verify(self) -> str | bool:
        if self.insecure_skip_verify:
            return False
        return self.ca_cert_path or True

    def auth_headers(self) -> dict[str, str]:
        if not self.token:
            return {}
        return {"Authorization": f"Bearer {self.token}"}


def _read_token(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8").strip()
    except OSError as exc:
        raise ConfigurationError(f"Cannot read service account token {path}: {exc}") from exc


def _parse_qps(value: str | None) -> float:
    if value is None:
        return 5.0
    try:
        qps = float(value)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid APPIMPORT_API_QPS: {value!r}") from exc
    if qps <= 0:
        raise ConfigurationError("APPIMPORT_API_QPS must be positive")
    return qps


def _in_cluster_config(service_account_dir: Path) -> KubernetesConfig | None:
    host = os.getenv("KUBERNETES_SERVICE_HOST")
    port = os.getenv("KUBERNETES_SERVICE_PORT")
    if not host or not port:
        return None
    if ":" in host:
        host = f"[{host}]"
    ca_path = service_account_dir / "ca.crt"
    return KubernetesConfig(
        api_server=f"https://{host}:{port}",
        token=_read_token(service_account_dir / "token"),
        ca_cert_path=str(ca_path) if ca_path.exists() else None,
    )


def get_kubernetes_config(
    *, service_account_dir: Path = SERVICE_ACCOUNT_DIR
) -> KubernetesConfig:
    """Build API server settings from ``APPIMPORT_*`` variables, else the in-cluster account."""

    api_server = optional_env_var("APPIMPORT_API_SERVER")
    qps = _parse_qps(optional_env_var("APPIMPORT_API_QPS"))
    if api_server:
        return KubernetesConfig(
            api_server=api_server.rstrip("/"),
            token=optional_env_var("APPIMPORT_API_TOKEN"),
            ca_cert_path=optional_env_var("APPIMPORT_CA_CERT"),
            insecure_skip_verify=env_flag("APPIMPORT_INSECURE_SKIP_VERIFY"),
            qps=qps,
        )

    in_cluster = _in_cluster_config(service_account_dir)
    if in_cluster is None:
        raise MissingConfigurationError(
            "Missing configuration for: APPIMPORT_API_SERVER (not running in a cluster)"
        )
    return in_cluster
