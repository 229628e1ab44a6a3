"""
Pydantic models for the operator's declared intent.

This module defines the parent/child type configuration a reconciliation
engine consumes. OperatorConfig is immutable: every fluent setter returns a
new instance and the child type map is read-only, so a finished configuration
can be shared freely.
"""

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType

from pydantic import BaseModel, Field, field_serializer, field_validator

from kube_operator.constants import (
    DEFAULT_OWNERSHIP_LABEL_NAME,
    DEFAULT_SERVER_PORT,
    DEFAULT_TRACKING_LABEL_NAME,
)

from .resource import K8sType


class UpdateStrategy(Enum):
    """How a drifted child resource is brought back to its desired state."""

    RECREATE = "Recreate"  # Delete, then create
    REPLACE = "Replace"  # In-place full replace (PUT)
    ON_DELETE = "OnDelete"  # Only recreate once the child is gone


class ChildConfig(BaseModel):
    """Reconciliation policy for one child resource type."""

    model_config = {"frozen": True}

    update_strategy: UpdateStrategy = Field(
        ..., description="Strategy used when the child differs from desired state"
    )

    @classmethod
    def new(cls, update_strategy: UpdateStrategy) -> "ChildConfig":
        return cls(update_strategy=update_strategy)

    @classmethod
    def recreate(cls) -> "ChildConfig":
        return cls.new(UpdateStrategy.RECREATE)

    @classmethod
    def replace(cls) -> "ChildConfig":
        return cls.new(UpdateStrategy.REPLACE)

    @classmethod
    def on_delete(cls) -> "ChildConfig":
        return cls.new(UpdateStrategy.ON_DELETE)


class OperatorConfig(BaseModel):
    """
    Configuration of an operator: the parent type it watches and the child
    types it manages.

    Build with OperatorConfig.new() and the fluent setters:

    Example:
        >>> config = (
        ...     OperatorConfig.new("my-operator", parent)
        ...     .within_namespace("default")
        ...     .with_child(K8sType.pod(), ChildConfig.recreate())
        ...     .with_server_port(9090)
        ... )
    """

    model_config = {"frozen": True}

    parent: K8sType = Field(..., description="Custom resource type being watched")
    child_types: Mapping[K8sType, ChildConfig] = Field(
        default_factory=lambda: MappingProxyType({}),
        description="Managed child types and their policy (read-only)",
    )
    namespace: str | None = Field(
        None, description="Namespace to watch, None for cluster-wide"
    )
    operator_name: str = Field(..., description="Name of the operator")
    tracking_label_name: str = Field(
        DEFAULT_TRACKING_LABEL_NAME,
        description="Label linking a child resource to its parent instance",
    )
    ownership_label_name: str = Field(
        DEFAULT_OWNERSHIP_LABEL_NAME,
        description="Label marking a resource as managed by this operator",
    )
    server_port: int = Field(DEFAULT_SERVER_PORT, description="Auxiliary HTTP port")
    expose_metrics: bool = Field(True, description="Serve the metrics endpoint")
    expose_health: bool = Field(True, description="Serve the health endpoint")

    @field_validator("child_types")
    @classmethod
    def freeze_child_types(
        cls, v: Mapping[K8sType, ChildConfig]
    ) -> Mapping[K8sType, ChildConfig]:
        """Store child types as a read-only view over a private copy."""
        return MappingProxyType(dict(v))

    @field_serializer("child_types")
    def serialize_child_types(
        self, child_types: Mapping[K8sType, ChildConfig]
    ) -> dict[K8sType, ChildConfig]:
        return dict(child_types)

    @classmethod
    def new(cls, operator_name: str, parent: K8sType) -> "OperatorConfig":
        return cls(operator_name=operator_name, parent=parent)

    def within_namespace(self, namespace: str) -> "OperatorConfig":
        return self.model_copy(update={"namespace": namespace})

    def with_child(
        self, child_type: K8sType, child_config: ChildConfig
    ) -> "OperatorConfig":
        """
        Add or overwrite the policy for a child type.

        Args:
            child_type: Child resource kind
            child_config: Reconciliation policy for that kind

        Returns:
            New OperatorConfig; an existing entry for child_type is replaced
        """
        child_types = MappingProxyType({**self.child_types, child_type: child_config})
        return self.model_copy(update={"child_types": child_types})

    def with_tracking_label_name(self, label_name: str) -> "OperatorConfig":
        return self.model_copy(update={"tracking_label_name": label_name})

    def with_ownership_label_name(self, label_name: str) -> "OperatorConfig":
        return self.model_copy(update={"ownership_label_name": label_name})

    def with_expose_health(self, expose_health: bool) -> "OperatorConfig":
        return self.model_copy(update={"expose_health": expose_health})

    def with_expose_metrics(self, expose_metrics: bool) -> "OperatorConfig":
        return self.model_copy(update={"expose_metrics": expose_metrics})

    def with_server_port(self, port: int) -> "OperatorConfig":
        return self.model_copy(update={"server_port": port})
