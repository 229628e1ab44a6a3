"""
Kubeconfig credential resolution.

This module provides the boundary between the operator core and kubeconfig
parsing, plus the default file-based implementation.

Key functionality:
- KubeConfigResolver protocol, so parsing can be swapped or stubbed in tests
- Kubeconfig discovery (explicit path, KUBECONFIG, ~/.kube/config)
- Context, cluster and user selection
- Credential resolution: tokens, client certificates, basic auth, and
  exec/auth-provider plugins via the official kubernetes client
- Impersonation settings ("as", "as-groups")
"""

import base64
import binascii
import logging
import os
from pathlib import Path
from typing import Any, Protocol

import yaml
from kubernetes import client
from kubernetes.config.config_exception import ConfigException
from kubernetes.config.kube_config import KubeConfigLoader
from pydantic import ValidationError

from kube_operator.constants import (
    DEFAULT_KUBECONFIG_PATH,
    ERROR_CLUSTER_NOT_FOUND,
    ERROR_CONTEXT_NOT_FOUND,
    ERROR_KUBECONFIG_NOT_FOUND,
    ERROR_USER_NOT_FOUND,
    KUBECONFIG_ENV_VAR,
)
from kube_operator.errors import KubeConfigError
from kube_operator.models.client import (
    CAContents,
    CAData,
    CAFile,
    ClientConfig,
    Credentials,
    HeaderCredentials,
    PemCredentials,
)

logger = logging.getLogger(__name__)


class KubeConfigResolver(Protocol):
    """Resolves a kubeconfig into a ClientConfig or raises KubeConfigError."""

    def resolve(self, user_agent: str) -> ClientConfig: ...


def load_kubeconfig_config(
    user_agent: str, resolver: KubeConfigResolver | None = None
) -> ClientConfig:
    """
    Resolve a ClientConfig through a kubeconfig collaborator.

    Args:
        user_agent: User-Agent for the resulting profile
        resolver: Collaborator to use, defaults to KubeConfigFileLoader()

    Returns:
        Fully populated ClientConfig

    Raises:
        KubeConfigError: If the collaborator cannot resolve the kubeconfig
    """
    if resolver is None:
        resolver = KubeConfigFileLoader()
    return resolver.resolve(user_agent)


def _find_named(
    raw: dict[str, Any], section: str, item_key: str, name: str
) -> dict[str, Any] | None:
    """
    Find entry ``name`` in a kubeconfig list section (clusters, users, ...).

    Raises:
        KubeConfigError: If the section or the named entry is not a mapping
    """
    entries = raw.get(section) or []
    if not isinstance(entries, list):
        raise KubeConfigError(f"'{section}' must be a list")
    for entry in entries:
        if isinstance(entry, dict) and entry.get("name") == name:
            item = entry.get(item_key) or {}
            if not isinstance(item, dict):
                raise KubeConfigError(f"{item_key} '{name}' must be a mapping")
            return item
    return None


class KubeConfigFileLoader:
    """
    Default kubeconfig collaborator reading a kubeconfig file from disk.

    Relative file references inside the kubeconfig (certificate-authority,
    client-certificate, client-key, tokenFile) are resolved against the
    directory containing the kubeconfig.
    """

    def __init__(
        self, path: str | os.PathLike | None = None, context: str | None = None
    ):
        """
        Initialize kubeconfig loader.

        Args:
            path: Explicit kubeconfig path, otherwise discovered
            context: Context to use, otherwise current-context
        """
        self.path = path
        self.context = context

    def locate(self) -> Path:
        """
        Find the kubeconfig file to load.

        Returns:
            Path of the first existing candidate

        Raises:
            KubeConfigError: If no candidate file exists
        """
        if self.path:
            candidate = Path(self.path).expanduser()
            if not candidate.is_file():
                raise KubeConfigError(
                    ERROR_KUBECONFIG_NOT_FOUND.format(candidate), path=str(candidate)
                )
            return candidate

        env_value = os.environ.get(KUBECONFIG_ENV_VAR, "")
        entries = [entry for entry in env_value.split(os.pathsep) if entry]
        for entry in entries:
            candidate = Path(entry).expanduser()
            if candidate.is_file():
                return candidate
        if entries:
            raise KubeConfigError(
                f"None of the files listed in {KUBECONFIG_ENV_VAR} exist",
                path=env_value,
            )

        candidate = Path(DEFAULT_KUBECONFIG_PATH).expanduser()
        if not candidate.is_file():
            raise KubeConfigError(
                ERROR_KUBECONFIG_NOT_FOUND.format(candidate), path=str(candidate)
            )
        return candidate

    def load(self) -> tuple[Path, dict[str, Any]]:
        """Locate and parse the kubeconfig document."""
        path = self.locate()
        try:
            with path.open(encoding="utf-8") as f:
                raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise KubeConfigError(
                f"Malformed kubeconfig: {e}", path=str(path), cause=e
            ) from e
        except OSError as e:
            raise KubeConfigError(
                f"Cannot read kubeconfig: {e}", path=str(path), cause=e
            ) from e

        if not isinstance(raw, dict):
            raise KubeConfigError("Kubeconfig must be a mapping", path=str(path))
        return path, raw

    def resolve(self, user_agent: str) -> ClientConfig:
        path, raw = self.load()

        context_name = self.context or raw.get("current-context")
        if not context_name:
            raise KubeConfigError(
                "No context selected and current-context is not set", path=str(path)
            )

        try:
            context = _find_named(raw, "contexts", "context", context_name)
        except KubeConfigError as e:
            raise KubeConfigError(str(e.args[0]), path=str(path)) from e
        if context is None:
            raise KubeConfigError(
                ERROR_CONTEXT_NOT_FOUND.format(context_name), path=str(path)
            )

        try:
            client_config, auth_method = self._resolve_context(
                raw, context, context_name, path.parent, user_agent
            )
        except KubeConfigError as e:
            raise KubeConfigError(
                str(e.args[0]),
                path=str(path),
                context=context_name,
                user_action=e.user_action,
                cause=e.cause,
            ) from e

        logger.debug(
            f"Loaded kubeconfig context {context_name} for "
            f"{client_config.api_server_endpoint}",
            extra={
                "kubeconfig_path": str(path),
                "context": context_name,
                "api_server": client_config.api_server_endpoint,
                "auth_method": auth_method,
            },
        )
        return client_config

    def _resolve_context(
        self,
        raw: dict[str, Any],
        context: dict[str, Any],
        context_name: str,
        base_dir: Path,
        user_agent: str,
    ) -> tuple[ClientConfig, str]:
        """
        Build a ClientConfig from the selected context's cluster and user.

        Raises:
            KubeConfigError: Without path or context; resolve() attaches both
        """
        cluster_name = context.get("cluster", "")
        cluster = _find_named(raw, "clusters", "cluster", cluster_name)
        if cluster is None:
            raise KubeConfigError(ERROR_CLUSTER_NOT_FOUND.format(cluster_name))

        user_name = context.get("user", "")
        user = _find_named(raw, "users", "user", user_name)
        if user is None:
            raise KubeConfigError(ERROR_USER_NOT_FOUND.format(user_name))

        server = cluster.get("server")
        if not server:
            raise KubeConfigError(f"Cluster '{cluster_name}' has no server")

        groups = user.get("as-groups") or []
        if not isinstance(groups, list):
            raise KubeConfigError(f"as-groups of user '{user_name}' must be a list")

        try:
            ca_data = self._resolve_ca_data(cluster, base_dir)
            credentials, auth_method = self._resolve_credentials(
                user, raw, context_name, base_dir
            )
            client_config = ClientConfig(
                api_server_endpoint=server,
                credentials=credentials,
                ca_data=ca_data,
                user_agent=user_agent,
                verify_ssl_certs=True,
                impersonate=user.get("as"),
                impersonate_groups=tuple(groups),
            )
        except ValidationError as e:
            raise KubeConfigError(
                f"Invalid kubeconfig values: {e}", cause=e
            ) from e

        if cluster.get("insecure-skip-tls-verify") is True:
            client_config = client_config.without_ssl_verification()
        return client_config, auth_method

    def _resolve_ca_data(
        self, cluster: dict[str, Any], base_dir: Path
    ) -> CAData | None:
        """Inline CA data wins over a CA file reference."""
        ca_base64 = cluster.get("certificate-authority-data")
        if ca_base64:
            if not isinstance(ca_base64, str):
                raise KubeConfigError("certificate-authority-data must be a string")
            # Line-wrapped data is accepted, as kubectl does
            unwrapped = "".join(ca_base64.split())
            try:
                contents = base64.b64decode(unwrapped, validate=True).decode("utf-8")
            except (binascii.Error, UnicodeDecodeError) as e:
                raise KubeConfigError(
                    "certificate-authority-data is not valid base64 PEM", cause=e
                ) from e
            return CAContents(contents=contents)

        ca_path = cluster.get("certificate-authority")
        if ca_path:
            return CAFile(path=str(base_dir / Path(ca_path).expanduser()))
        return None

    def _resolve_credentials(
        self,
        user: dict[str, Any],
        raw: dict[str, Any],
        context_name: str,
        base_dir: Path,
    ) -> tuple[Credentials, str]:
        """
        Resolve user credentials, first match wins.

        Returns:
            The credentials and a short auth method name for logging
        """
        if user.get("token"):
            return HeaderCredentials.bearer(user["token"]), "token"

        if user.get("tokenFile"):
            token_path = base_dir / Path(user["tokenFile"]).expanduser()
            try:
                token = self._read_file(token_path).decode("utf-8").strip()
            except UnicodeDecodeError as e:
                raise KubeConfigError(
                    f"tokenFile {token_path} is not valid UTF-8", cause=e
                ) from e
            return HeaderCredentials.bearer(token), "token_file"

        certificate = self._pem_base64(user, "client-certificate", base_dir)
        private_key = self._pem_base64(user, "client-key", base_dir)
        if certificate and private_key:
            return (
                PemCredentials(
                    certificate_base64=certificate, private_key_base64=private_key
                ),
                "client_certificate",
            )
        if certificate or private_key:
            raise KubeConfigError(
                "client-certificate and client-key must be configured together"
            )

        if user.get("username") and user.get("password"):
            pair = f"{user['username']}:{user['password']}".encode()
            encoded = base64.b64encode(pair).decode("ascii")
            return HeaderCredentials(value=f"Basic {encoded}"), "basic"

        if "exec" in user or "auth-provider" in user:
            credentials = self._resolve_plugin_credentials(raw, context_name, base_dir)
            return credentials, "plugin"

        raise KubeConfigError("User has no supported credentials")

    def _pem_base64(
        self, user: dict[str, Any], field: str, base_dir: Path
    ) -> str | None:
        """Base64 PEM from ``<field>-data`` or from the ``<field>`` file path."""
        data = user.get(f"{field}-data")
        if data:
            return data
        file_path = user.get(field)
        if file_path:
            contents = self._read_file(base_dir / Path(file_path).expanduser())
            return base64.b64encode(contents).decode("ascii")
        return None

    def _read_file(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise KubeConfigError(f"Cannot read {path}: {e}", cause=e) from e

    def _resolve_plugin_credentials(
        self, raw: dict[str, Any], context_name: str, base_dir: Path
    ) -> HeaderCredentials:
        """
        Run exec/auth-provider plugins through the kubernetes client loader.

        Returns:
            Bearer header credentials produced by the plugin
        """
        configuration = client.Configuration()
        try:
            loader = KubeConfigLoader(
                config_dict=raw,
                active_context=context_name,
                config_base_path=str(base_dir),
            )
            loader.load_and_set(configuration)
        except ConfigException as e:
            raise KubeConfigError(
                f"Authentication plugin failed: {e}", cause=e
            ) from e

        header = configuration.api_key.get("authorization")
        if not header:
            raise KubeConfigError("Authentication plugin produced no bearer token")
        return HeaderCredentials(value=header)
