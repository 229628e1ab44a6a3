"""
Pydantic models for resolved API server connection profiles.

This module defines the credential and CA sum types and the ClientConfig that
an HTTP/watch client consumes. Sum types are discriminated unions keyed on a
``type`` literal; consumers branch on them with ``match`` and
``typing.assert_never`` so a new variant surfaces at every consumption site.
"""

import logging
from typing import TYPE_CHECKING, Annotated, Literal, assert_never

from pydantic import BaseModel, Field

from kube_operator.constants import (
    AUTHORIZATION_HEADER,
    IMPERSONATE_GROUP_HEADER,
    IMPERSONATE_USER_HEADER,
)

if TYPE_CHECKING:
    from kube_operator.utils.kubeconfig import KubeConfigResolver

logger = logging.getLogger(__name__)


class HeaderCredentials(BaseModel):
    """Authorization header value, sent as-is (e.g. 'Bearer <token>')."""

    model_config = {"frozen": True}

    type: Literal["header"] = "header"
    value: str = Field(..., repr=False, description="Authorization header value")

    @classmethod
    def bearer(cls, token: str) -> "HeaderCredentials":
        return cls(value=f"Bearer {token}")


class PemCredentials(BaseModel):
    """Client certificate authentication material, base64-encoded PEM."""

    model_config = {"frozen": True}

    type: Literal["pem"] = "pem"
    certificate_base64: str = Field(..., description="Base64 client certificate")
    private_key_base64: str = Field(..., repr=False, description="Base64 private key")


Credentials = Annotated[
    HeaderCredentials | PemCredentials, Field(discriminator="type")
]


class CAFile(BaseModel):
    """CA bundle read from a filesystem path at connection time."""

    model_config = {"frozen": True}

    type: Literal["file"] = "file"
    path: str = Field(..., description="Path to a PEM CA bundle")


class CAContents(BaseModel):
    """Inline PEM-encoded CA bundle."""

    model_config = {"frozen": True}

    type: Literal["contents"] = "contents"
    contents: str = Field(..., description="PEM CA bundle")


CAData = Annotated[CAFile | CAContents, Field(discriminator="type")]


class ClientConfig(BaseModel):
    """
    Resolved, ready-to-use connection profile for the Kubernetes API server.

    ``verify_ssl_certs`` has no default: disabling verification must always be
    an explicit choice by whoever builds the profile.
    """

    model_config = {"frozen": True}

    api_server_endpoint: str = Field(..., description="API server URL")
    credentials: Credentials = Field(..., description="How requests authenticate")
    ca_data: CAData | None = Field(
        None, description="CA bundle, None for the system trust store"
    )
    user_agent: str = Field(..., description="User-Agent sent with each request")
    verify_ssl_certs: bool = Field(..., description="Verify the server certificate")
    impersonate: str | None = Field(None, description="User to impersonate")
    impersonate_groups: tuple[str, ...] = Field(
        (), description="Groups to impersonate, in order"
    )

    @classmethod
    def from_service_account(cls, user_agent: str) -> "ClientConfig":
        """
        Resolve a profile from the in-cluster service account.

        Raises:
            OSError: If the service account token cannot be read
        """
        from kube_operator.utils.service_account import load_service_account_config

        return load_service_account_config(user_agent)

    @classmethod
    def from_kubeconfig(
        cls, user_agent: str, resolver: "KubeConfigResolver | None" = None
    ) -> "ClientConfig":
        """
        Resolve a profile from a kubeconfig file.

        Args:
            user_agent: User-Agent for the resulting profile
            resolver: Kubeconfig collaborator, defaults to the file loader

        Raises:
            KubeConfigError: If the kubeconfig cannot be resolved
        """
        from kube_operator.utils.kubeconfig import load_kubeconfig_config

        return load_kubeconfig_config(user_agent, resolver)

    def auth_headers(self) -> list[tuple[str, str]]:
        """
        HTTP headers a client must send with every request.

        Returns:
            Ordered (name, value) pairs; Impersonate-Group repeats per group
        """
        headers: list[tuple[str, str]] = []
        match self.credentials:
            case HeaderCredentials(value=value):
                headers.append((AUTHORIZATION_HEADER, value))
            case PemCredentials():
                pass  # presented during the TLS handshake
            case _:
                assert_never(self.credentials)

        if self.impersonate:
            headers.append((IMPERSONATE_USER_HEADER, self.impersonate))
        for group in self.impersonate_groups:
            headers.append((IMPERSONATE_GROUP_HEADER, group))
        return headers

    def with_impersonation(
        self, user: str, groups: tuple[str, ...] | list[str] = ()
    ) -> "ClientConfig":
        return self.model_copy(
            update={"impersonate": user, "impersonate_groups": tuple(groups)}
        )

    def without_ssl_verification(self) -> "ClientConfig":
        """Copy of this profile that skips server certificate verification."""
        logger.warning(
            f"TLS certificate verification disabled for {self.api_server_endpoint}",
            extra={"api_server": self.api_server_endpoint},
        )
        return self.model_copy(update={"verify_ssl_certs": False})
