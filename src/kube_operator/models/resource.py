"""
Pydantic models for Kubernetes resource kind identity.

A K8sType names a resource kind by group, version, kind and plural. It is the
key every other part of the operator uses to refer to parent and child types,
so equality and hashing are structural over all four fields.
"""

from typing import Any

from pydantic import BaseModel, Field


class K8sTypeRef(BaseModel):
    """Lightweight reference to a resource kind (apiVersion + kind)."""

    model_config = {"frozen": True}

    api_version: str = Field(..., description="API version, e.g. 'apps/v1' or 'v1'")
    kind: str = Field(..., description="PascalCase singular kind, e.g. 'Deployment'")

    def matches(self, obj: dict[str, Any]) -> bool:
        """Check whether a raw Kubernetes object is of this kind."""
        return (
            obj.get("apiVersion") == self.api_version and obj.get("kind") == self.kind
        )

    def __str__(self) -> str:
        return f"{self.api_version}/{self.kind}"


class K8sType(BaseModel):
    """
    Identity of a Kubernetes resource kind.

    An empty group denotes the legacy "core" API group (pods, services, ...).
    Values are stored verbatim; no validation is performed on field contents.
    """

    model_config = {"frozen": True}

    group: str = Field("", description="API group, empty for the core group")
    version: str = Field(..., description="API version within the group")
    kind: str = Field(..., description="PascalCase singular kind")
    plural_kind: str = Field(..., description="Lowercase plural used in REST paths")

    @classmethod
    def new(cls, group: str, version: str, kind: str, plural_kind: str) -> "K8sType":
        return cls(group=group, version=version, kind=kind, plural_kind=plural_kind)

    def format_api_version(self) -> str:
        """
        Format the apiVersion string for this kind.

        Returns:
            "version" for the core group, "group/version" otherwise
        """
        if not self.group:
            return self.version
        return f"{self.group}/{self.version}"

    def api_path(self) -> str:
        """REST path fragment for this kind, e.g. 'apps/v1/deployments'."""
        return f"{self.format_api_version()}/{self.plural_kind}"

    def to_type_ref(self) -> K8sTypeRef:
        return K8sTypeRef(api_version=self.format_api_version(), kind=self.kind)

    def __str__(self) -> str:
        return self.api_path()

    # Well-known built-in kinds

    @classmethod
    def pod(cls) -> "K8sType":
        return cls.new("", "v1", "Pod", "pods")

    @classmethod
    def service(cls) -> "K8sType":
        return cls.new("", "v1", "Service", "services")

    @classmethod
    def config_map(cls) -> "K8sType":
        return cls.new("", "v1", "ConfigMap", "configmaps")

    @classmethod
    def secret(cls) -> "K8sType":
        return cls.new("", "v1", "Secret", "secrets")

    @classmethod
    def service_account(cls) -> "K8sType":
        return cls.new("", "v1", "ServiceAccount", "serviceaccounts")

    @classmethod
    def persistent_volume_claim(cls) -> "K8sType":
        return cls.new("", "v1", "PersistentVolumeClaim", "persistentvolumeclaims")

    @classmethod
    def deployment(cls) -> "K8sType":
        return cls.new("apps", "v1", "Deployment", "deployments")

    @classmethod
    def stateful_set(cls) -> "K8sType":
        return cls.new("apps", "v1", "StatefulSet", "statefulsets")

    @classmethod
    def daemon_set(cls) -> "K8sType":
        return cls.new("apps", "v1", "DaemonSet", "daemonsets")

    @classmethod
    def job(cls) -> "K8sType":
        return cls.new("batch", "v1", "Job", "jobs")

    @classmethod
    def ingress(cls) -> "K8sType":
        return cls.new("networking.k8s.io", "v1", "Ingress", "ingresses")

    @classmethod
    def role(cls) -> "K8sType":
        return cls.new("rbac.authorization.k8s.io", "v1", "Role", "roles")

    @classmethod
    def role_binding(cls) -> "K8sType":
        return cls.new("rbac.authorization.k8s.io", "v1", "RoleBinding", "rolebindings")
