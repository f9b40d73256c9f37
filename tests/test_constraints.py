"""Unit tests for constraint kinds and their lookup tables."""

from authn_restrictions.constraints import (
    AZURE_CONSTRAINTS,
    K8S_CONSTRAINTS,
    K8S_PERMITTED_ANNOTATIONS,
    AzureConstraint,
    K8sConstraint,
    azure_constraint_names,
    exclusive_groups,
    k8s_constraint_from_host_id,
    k8s_constraint_names,
)


class TestK8sConstraints:
    """Tests for Kubernetes constraint kinds."""

    def test_names_in_resolution_order(self) -> None:
        """Kinds are listed namespace first, then controllers."""
        assert k8s_constraint_names() == [
            "namespace",
            "service-account",
            "pod",
            "deployment",
            "deployment-config",
            "stateful-set",
        ]

    def test_only_namespace_required(self) -> None:
        """Namespace is the only required kind."""
        required = [kind for kind, info in K8S_CONSTRAINTS.items() if info.required]
        assert required == [K8sConstraint.NAMESPACE]

    def test_controllers(self) -> None:
        """Every kind except namespace is a controller."""
        controllers = {kind for kind, info in K8S_CONSTRAINTS.items() if info.controller}
        assert controllers == set(K8sConstraint) - {K8sConstraint.NAMESPACE}

    def test_exclusive_group(self) -> None:
        """Deployment, deployment-config and stateful-set are mutually exclusive."""
        assert exclusive_groups(K8S_CONSTRAINTS) == {
            "controller": ["deployment", "deployment-config", "stateful-set"]
        }

    def test_host_id_accepts_both_spellings(self) -> None:
        """Host-id segments resolve in dash and underscore form."""
        assert k8s_constraint_from_host_id("stateful-set") is K8sConstraint.STATEFUL_SET
        assert k8s_constraint_from_host_id("stateful_set") is K8sConstraint.STATEFUL_SET
        assert k8s_constraint_from_host_id("service_account") is K8sConstraint.SERVICE_ACCOUNT
        assert k8s_constraint_from_host_id("replica-set") is None

    def test_permitted_annotations_include_container_name(self) -> None:
        """The container name annotation is permitted alongside the kinds."""
        assert "authentication-container-name" in K8S_PERMITTED_ANNOTATIONS
        assert set(k8s_constraint_names()) <= set(K8S_PERMITTED_ANNOTATIONS)


class TestAzureConstraints:
    """Tests for Azure constraint kinds."""

    def test_names(self) -> None:
        assert azure_constraint_names() == [
            "subscription-id",
            "resource-group",
            "user-assigned-identity",
            "system-assigned-identity",
        ]

    def test_required(self) -> None:
        """subscription-id and resource-group are required, in that order."""
        required = [kind for kind, info in AZURE_CONSTRAINTS.items() if info.required]
        assert required == [AzureConstraint.SUBSCRIPTION_ID, AzureConstraint.RESOURCE_GROUP]

    def test_identity_group(self) -> None:
        """The two identity kinds are mutually exclusive."""
        assert exclusive_groups(AZURE_CONSTRAINTS) == {
            "identity": ["user-assigned-identity", "system-assigned-identity"]
        }
