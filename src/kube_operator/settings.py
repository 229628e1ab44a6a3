"""Centralized operator settings using pydantic-settings.

This module provides process-level configuration loaded from environment
variables. The configuration core itself defines no environment contract;
these settings feed it at startup.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kube_operator.constants import DEFAULT_SERVER_PORT, DEFAULT_USER_AGENT
from kube_operator.models.operator import OperatorConfig
from kube_operator.models.resource import K8sType


class Settings(BaseSettings):
    """Operator configuration loaded from environment variables.

    All settings have sensible defaults. Override via environment variables as
    documented per field.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Operator identification
    operator_name: str = Field(
        default="kube-operator",
        description="Name of the operator",
        validation_alias="OPERATOR_NAME",
    )
    watch_namespace: str = Field(
        default="",
        description="Namespace to watch (empty = all namespaces)",
        validation_alias="WATCH_NAMESPACE",
    )

    # Auxiliary HTTP server
    server_port: int = Field(
        default=DEFAULT_SERVER_PORT,
        description="Port for the health and metrics endpoints",
        validation_alias="SERVER_PORT",
    )
    expose_metrics: bool = Field(
        default=True,
        description="Serve the metrics endpoint",
        validation_alias="EXPOSE_METRICS",
    )
    expose_health: bool = Field(
        default=True,
        description="Serve the health endpoint",
        validation_alias="EXPOSE_HEALTH",
    )

    # Logging configuration
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        validation_alias="JSON_LOGS",
        description="Enable JSON formatted logging for structured log aggregation",
    )

    # API server connection
    user_agent: str = Field(
        default=DEFAULT_USER_AGENT,
        validation_alias="USER_AGENT",
        description="User-Agent sent to the API server",
    )
    connection_mode: Literal["auto", "in-cluster", "kubeconfig"] = Field(
        default="auto",
        validation_alias="CONNECTION_MODE",
        description=(
            "How to authenticate: in-cluster service account, kubeconfig, or "
            "auto (in-cluster when KUBERNETES_SERVICE_HOST is set)"
        ),
    )
    kubeconfig_path: str = Field(
        default="",
        validation_alias="KUBECONFIG_PATH",
        description="Explicit kubeconfig file (empty = KUBECONFIG or ~/.kube/config)",
    )
    kube_context: str = Field(
        default="",
        validation_alias="KUBE_CONTEXT",
        description="Kubeconfig context to use (empty = current-context)",
    )

    @property
    def namespace(self) -> str | None:
        """Watched namespace, or None to watch all namespaces."""
        return self.watch_namespace.strip() or None

    def operator_config(self, parent: K8sType) -> OperatorConfig:
        """
        Build an OperatorConfig for a parent type from these settings.

        Args:
            parent: Custom resource type the operator watches

        Returns:
            OperatorConfig without child types; add them with with_child()
        """
        config = (
            OperatorConfig.new(self.operator_name, parent)
            .with_server_port(self.server_port)
            .with_expose_metrics(self.expose_metrics)
            .with_expose_health(self.expose_health)
        )
        if self.namespace:
            config = config.within_namespace(self.namespace)
        return config


# Global settings instance - initialized once at module import
settings = Settings()
