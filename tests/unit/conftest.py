"""Shared pytest fixtures for unit tests."""

from pathlib import Path

import pytest
import yaml

from kube_operator.models.client import ClientConfig, HeaderCredentials


@pytest.fixture
def write_kubeconfig(tmp_path: Path):
    """Write a kubeconfig document to a temporary file and return its path."""

    def _write(document, name: str = "config") -> Path:
        path = tmp_path / name
        if isinstance(document, str):
            path.write_text(document, encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(document), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def token_client_config() -> ClientConfig:
    """A minimal bearer token ClientConfig."""
    return ClientConfig(
        api_server_endpoint="https://api.example.com",
        credentials=HeaderCredentials.bearer("abc123"),
        user_agent="test-agent",
        verify_ssl_certs=True,
    )
