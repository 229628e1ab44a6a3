"""
Kubernetes client utilities for the Kube operator.

This module connects resolved connection profiles to the official kubernetes
client.

Key functionality:
- Picking exactly one credential resolution strategy at startup
- Converting a ClientConfig into a kubernetes.client.Configuration
- Building a configured kubernetes.client.ApiClient
"""

import atexit
import base64
import hashlib
import logging
import os
import shutil
import tempfile
from typing import assert_never

from kubernetes import client

from kube_operator.constants import (
    IMPERSONATE_GROUP_HEADER,
    IMPERSONATE_USER_HEADER,
    IN_CLUSTER_ENV_VAR,
)
from kube_operator.errors import ConfigurationError
from kube_operator.models.client import (
    CAContents,
    CAFile,
    ClientConfig,
    HeaderCredentials,
    PemCredentials,
)
from kube_operator.settings import Settings
from kube_operator.settings import settings as default_settings
from kube_operator.utils.kubeconfig import KubeConfigFileLoader

logger = logging.getLogger(__name__)

# Private directory holding key material written for the kubernetes client
_temp_dir: str | None = None


def resolve_client_config(settings: Settings | None = None) -> ClientConfig:
    """
    Resolve the API server connection profile for this process.

    The strategy is chosen once from settings.connection_mode. A failure of
    the chosen strategy is raised; the other strategy is never tried.

    Args:
        settings: Operator settings, defaults to the process-wide settings

    Returns:
        Resolved ClientConfig

    Raises:
        OSError: In-cluster mode and the service account token is unreadable
        KubeConfigError: Kubeconfig mode and the kubeconfig cannot be resolved
    """
    if settings is None:
        settings = default_settings

    mode = settings.connection_mode
    if mode == "auto":
        mode = "in-cluster" if os.environ.get(IN_CLUSTER_ENV_VAR) else "kubeconfig"
        logger.debug(f"Connection mode auto-detected as {mode}")

    if mode == "in-cluster":
        return ClientConfig.from_service_account(settings.user_agent)

    loader = KubeConfigFileLoader(
        path=settings.kubeconfig_path or None,
        context=settings.kube_context or None,
    )
    return ClientConfig.from_kubeconfig(settings.user_agent, loader)


def _write_temp_file(contents: bytes, suffix: str) -> str:
    """
    Write material the client only accepts as a path; return the path.

    Files are named by content hash inside one private directory, so repeated
    calls reuse the same file. The directory is removed at interpreter exit.
    """
    global _temp_dir
    if _temp_dir is None:
        _temp_dir = tempfile.mkdtemp(prefix="kube-operator-")
        atexit.register(cleanup_temp_files)

    path = os.path.join(_temp_dir, hashlib.sha256(contents).hexdigest() + suffix)
    if not os.path.exists(path):
        fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
        with os.fdopen(fd, "wb") as f:
            f.write(contents)
    return path


def cleanup_temp_files() -> None:
    """Remove certificate and key files written by build_kubernetes_configuration."""
    global _temp_dir
    if _temp_dir is not None:
        shutil.rmtree(_temp_dir, ignore_errors=True)
        logger.debug(f"Removed temporary credential directory {_temp_dir}")
        _temp_dir = None


def build_kubernetes_configuration(client_config: ClientConfig) -> client.Configuration:
    """
    Convert a ClientConfig into a kubernetes client Configuration.

    PEM credentials and inline CA data are written to temporary files, since
    the kubernetes client only accepts file paths for them. The files live
    until cleanup_temp_files() runs, at the latest at interpreter exit.

    Args:
        client_config: Resolved connection profile

    Returns:
        Configuration ready to pass to client.ApiClient
    """
    configuration = client.Configuration()
    configuration.host = client_config.api_server_endpoint
    configuration.verify_ssl = client_config.verify_ssl_certs

    credentials = client_config.credentials
    match credentials:
        case HeaderCredentials(value=value):
            configuration.api_key["authorization"] = value
        case PemCredentials(
            certificate_base64=certificate_base64,
            private_key_base64=private_key_base64,
        ):
            configuration.cert_file = _write_temp_file(
                base64.b64decode(certificate_base64), ".crt"
            )
            configuration.key_file = _write_temp_file(
                base64.b64decode(private_key_base64), ".key"
            )
        case _:
            assert_never(credentials)

    ca_data = client_config.ca_data
    match ca_data:
        case None:
            pass
        case CAFile(path=path):
            configuration.ssl_ca_cert = path
        case CAContents(contents=contents):
            configuration.ssl_ca_cert = _write_temp_file(contents.encode(), ".crt")
        case _:
            assert_never(ca_data)

    return configuration


def get_kubernetes_client(client_config: ClientConfig) -> client.ApiClient:
    """
    Get configured Kubernetes API client.

    Args:
        client_config: Resolved connection profile

    Returns:
        Configured Kubernetes API client with user agent and impersonation
        headers applied

    Raises:
        ConfigurationError: If more than one impersonation group is set; the
            kubernetes client sends each default header at most once
    """
    if len(client_config.impersonate_groups) > 1:
        raise ConfigurationError(
            "The kubernetes client supports at most one impersonation group",
            user_action="Use a client that sends repeated Impersonate-Group headers",
        )

    api_client = client.ApiClient(build_kubernetes_configuration(client_config))
    api_client.user_agent = client_config.user_agent
    if client_config.impersonate:
        api_client.set_default_header(
            IMPERSONATE_USER_HEADER, client_config.impersonate
        )
    for group in client_config.impersonate_groups:
        api_client.set_default_header(IMPERSONATE_GROUP_HEADER, group)

    logger.debug(
        f"Created Kubernetes API client for {client_config.api_server_endpoint}",
        extra={"api_server": client_config.api_server_endpoint},
    )
    return api_client
