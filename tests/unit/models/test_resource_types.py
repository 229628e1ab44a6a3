"""
Unit tests for resource kind identity models.

These tests verify API version formatting, display form, REST paths and the
structural equality K8sType relies on as a mapping key.
"""

import pytest
from pydantic import ValidationError

from kube_operator.models.resource import K8sType, K8sTypeRef


class TestK8sTypeFormatting:
    """Test cases for apiVersion and display formatting."""

    @pytest.mark.parametrize(
        ("k8s_type", "expected"),
        [
            (K8sType.new("", "v1", "Pod", "pods"), "v1"),
            (K8sType.new("apps", "v1", "Deployment", "deployments"), "apps/v1"),
            (K8sType.new("example.com", "v1alpha1", "Widget", "widgets"), "example.com/v1alpha1"),
        ],
    )
    def test_format_api_version(self, k8s_type, expected):
        """Core group omits the group, named groups use group/version."""
        assert k8s_type.format_api_version() == expected

    def test_display_core_group(self):
        """Core group types render as version/plural."""
        assert str(K8sType.pod()) == "v1/pods"

    def test_display_named_group(self):
        """Named group types render as group/version/plural."""
        widget = K8sType.new("example.com", "v1", "Widget", "widgets")
        assert str(widget) == "example.com/v1/widgets"

    @pytest.mark.parametrize(
        "k8s_type",
        [K8sType.pod(), K8sType.deployment(), K8sType.ingress(), K8sType.role_binding()],
    )
    def test_display_is_api_version_plus_plural(self, k8s_type):
        """Display form equals the apiVersion with the plural appended."""
        assert str(k8s_type) == f"{k8s_type.format_api_version()}/{k8s_type.plural_kind}"
        assert k8s_type.api_path() == str(k8s_type)


class TestK8sTypeIdentity:
    """Test cases for construction and structural equality."""

    def test_pod_fields(self):
        """pod() carries the literal built-in values."""
        pod = K8sType.pod()
        assert (pod.group, pod.version, pod.kind, pod.plural_kind) == (
            "",
            "v1",
            "Pod",
            "pods",
        )

    def test_service_fields(self):
        """service() carries the literal built-in values."""
        service = K8sType.service()
        assert service == K8sType.new("", "v1", "Service", "services")

    def test_new_stores_fields_verbatim(self):
        """No normalization happens on construction."""
        odd = K8sType.new("Example.COM", "V1", "widget", "Widgets")
        assert odd.group == "Example.COM"
        assert odd.version == "V1"
        assert odd.kind == "widget"
        assert odd.plural_kind == "Widgets"

    def test_empty_version_is_not_rejected(self):
        """Field contents are not validated at construction."""
        assert K8sType.new("", "", "Pod", "pods").format_api_version() == ""

    def test_structural_equality_and_hash(self):
        """Equal fields mean equal values and equal hashes."""
        first = K8sType.new("apps", "v1", "Deployment", "deployments")
        second = K8sType.deployment()
        assert first == second
        assert hash(first) == hash(second)
        assert {first: "a"}[second] == "a"

    def test_differs_by_any_field(self):
        """Changing any single field breaks equality."""
        base = K8sType.deployment()
        assert base != K8sType.new("apps", "v1beta1", "Deployment", "deployments")
        assert base != K8sType.new("extensions", "v1", "Deployment", "deployments")
        assert base != K8sType.new("apps", "v1", "Deploy", "deployments")
        assert base != K8sType.new("apps", "v1", "Deployment", "deploys")

    def test_immutable(self):
        """K8sType values cannot be modified after construction."""
        pod = K8sType.pod()
        with pytest.raises(ValidationError):
            pod.version = "v2"


class TestK8sTypeRef:
    """Test cases for the lightweight type reference."""

    def test_to_type_ref(self):
        """Type ref carries apiVersion and kind only."""
        ref = K8sType.deployment().to_type_ref()
        assert ref == K8sTypeRef(api_version="apps/v1", kind="Deployment")
        assert str(ref) == "apps/v1/Deployment"

    def test_core_type_ref(self):
        """Core group refs use the bare version."""
        assert K8sType.config_map().to_type_ref().api_version == "v1"

    def test_matches_object(self):
        """matches() compares apiVersion and kind of a raw object."""
        ref = K8sType.pod().to_type_ref()
        assert ref.matches({"apiVersion": "v1", "kind": "Pod", "metadata": {}})
        assert not ref.matches({"apiVersion": "v1", "kind": "Service"})
        assert not ref.matches({"apiVersion": "apps/v1", "kind": "Pod"})
        assert not ref.matches({})
