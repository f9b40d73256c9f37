"""Unit tests for Azure restriction configuration validation."""

from authn_restrictions.azure.spec_builder import build_azure_spec
from authn_restrictions.azure.validator import validate_azure_configuration
from authn_restrictions.exceptions import (
    ConstraintNotSupported,
    IllegalConstraintCombinations,
    RoleMissingConstraint,
)


def annotations(service_id: str | None = None, **values: str) -> list[dict[str, str]]:
    """authn-azure annotations from keyword arguments (underscores become dashes)."""
    prefix = f"authn-azure/{service_id}" if service_id else "authn-azure"
    return [{"name": f"{prefix}/{k.replace('_', '-')}", "value": v} for k, v in values.items()]


class TestBuildAzureSpec:
    """Tests for build_azure_spec()."""

    def test_service_specific_overrides(self) -> None:
        spec = build_azure_spec(
            annotations(subscription_id="generic") + annotations("prod", subscription_id="sub-1"),
            "prod",
        )
        assert spec.value_of("subscription-id") == "sub-1"

    def test_fixed_order(self) -> None:
        spec = build_azure_spec(annotations(resource_group="rg-1", subscription_id="sub-1"), None)
        assert spec.types == ("subscription-id", "resource-group")


class TestValidateAzureConfiguration:
    """Tests for validate_azure_configuration()."""

    def test_valid(self) -> None:
        result = validate_azure_configuration(
            annotations(subscription_id="sub-1", resource_group="rg-1", user_assigned_identity="my-id"), None
        )
        assert result.unwrap().as_dict() == {
            "subscription-id": "sub-1",
            "resource-group": "rg-1",
            "user-assigned-identity": "my-id",
        }

    def test_missing_resource_group(self) -> None:
        result = validate_azure_configuration(annotations(subscription_id="sub-1"), None)

        assert isinstance(result.error, RoleMissingConstraint)
        assert result.error.constraint == "resource-group"

    def test_missing_subscription_reported_first(self) -> None:
        result = validate_azure_configuration([], None)

        assert isinstance(result.error, RoleMissingConstraint)
        assert result.error.constraint == "subscription-id"

    def test_unsupported_constraint(self) -> None:
        result = validate_azure_configuration(
            annotations("prod", subscription_id="sub-1", resource_group="rg-1", tenant_id="t"), "prod"
        )

        assert isinstance(result.error, ConstraintNotSupported)
        assert result.error.constraint == "tenant-id"

    def test_identity_combination(self) -> None:
        result = validate_azure_configuration(
            annotations(
                subscription_id="sub-1",
                resource_group="rg-1",
                user_assigned_identity="my-id",
                system_assigned_identity="oid-1",
            ),
            None,
        )

        assert isinstance(result.error, IllegalConstraintCombinations)
        assert result.error.constraints == ["user-assigned-identity", "system-assigned-identity"]
