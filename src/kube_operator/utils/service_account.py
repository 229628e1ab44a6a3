"""
In-cluster service account credential resolution.

Pods get a service account token and the cluster CA mounted by the kubelet.
This module turns that volume into a ClientConfig for the API server at its
well-known in-cluster DNS name.
"""

import logging
from pathlib import Path

from kube_operator.constants import (
    API_SERVER_HOSTNAME,
    SERVICE_ACCOUNT_CA_PATH,
    SERVICE_ACCOUNT_TOKEN_PATH,
)
from kube_operator.models.client import CAFile, ClientConfig, HeaderCredentials

logger = logging.getLogger(__name__)


def load_service_account_config(
    user_agent: str,
    token_path: str = SERVICE_ACCOUNT_TOKEN_PATH,
    ca_path: str = SERVICE_ACCOUNT_CA_PATH,
) -> ClientConfig:
    """
    Build a ClientConfig from the mounted service account.

    The token is read verbatim. The CA file is only checked for existence and
    referenced by path; its contents are read at connection time.

    Args:
        user_agent: User-Agent for the resulting profile
        token_path: Service account token file
        ca_path: Cluster CA bundle file

    Returns:
        ClientConfig with bearer credentials and verification enabled

    Raises:
        OSError: If the token file is missing or unreadable, meaning the
            process is not running in a pod with a mounted service account
    """
    token = Path(token_path).read_text(encoding="utf-8")

    ca_data = CAFile(path=ca_path) if Path(ca_path).exists() else None
    if ca_data is None:
        logger.debug(f"No service account CA at {ca_path}, using system trust store")

    api_server_endpoint = f"https://{API_SERVER_HOSTNAME}"
    logger.debug(
        f"Loaded in-cluster service account configuration for {api_server_endpoint}",
        extra={"api_server": api_server_endpoint, "auth_method": "service_account"},
    )
    return ClientConfig(
        api_server_endpoint=api_server_endpoint,
        credentials=HeaderCredentials.bearer(token),
        ca_data=ca_data,
        user_agent=user_agent,
        verify_ssl_certs=True,
        impersonate=None,
        impersonate_groups=(),
    )
