"""Unit tests for the Azure authorization pipeline."""

import json
import logging
from pathlib import Path

import pytest

from authn_restrictions.azure import authorize_azure, authorize_azure_payload
from authn_restrictions.exceptions import (
    InvalidResourceRestrictions,
    RoleMissingConstraint,
    TokenClaimNotFoundOrEmpty,
    XmsMiridParseError,
)
from authn_restrictions.result import Decision, Stage
from authn_restrictions.telemetry.audit.decision_logger import DecisionEventLogger, create_decision_logger

USER_ASSIGNED = (
    "/subscriptions/sub-1/resourcegroups/rg-1/providers/"
    "Microsoft.ManagedIdentity/userAssignedIdentities/my-id"
)
SYSTEM_ASSIGNED = "/subscriptions/sub-1/resourcegroups/rg-1/providers/Microsoft.Compute/virtualMachines/vm-1"


# ============================================================================
# Fixtures
# ============================================================================


@pytest.fixture
def annotations() -> list[dict[str, str]]:
    return [
        {"name": "authn-azure/subscription-id", "value": "sub-1"},
        {"name": "authn-azure/resource-group", "value": "rg-1"},
        {"name": "authn-azure/prod/user-assigned-identity", "value": "my-id"},
    ]


# ============================================================================
# Tests
# ============================================================================


class TestAuthorizeAzure:
    """Tests for authorize_azure()."""

    def test_accept_user_assigned(self, annotations: list[dict[str, str]]) -> None:
        result = authorize_azure(annotations, "prod", USER_ASSIGNED, "oid-1")
        assert result.decision is Decision.ACCEPT

    def test_accept_system_assigned(self) -> None:
        annotations = [
            {"name": "authn-azure/subscription-id", "value": "sub-1"},
            {"name": "authn-azure/resource-group", "value": "rg-1"},
            {"name": "authn-azure/system-assigned-identity", "value": "oid-1"},
        ]
        assert authorize_azure(annotations, None, SYSTEM_ASSIGNED, "oid-1").accepted

    def test_resource_group_only(self) -> None:
        """Without an identity constraint, any identity in the group is accepted."""
        annotations = [
            {"name": "authn-azure/subscription-id", "value": "sub-1"},
            {"name": "authn-azure/resource-group", "value": "rg-1"},
        ]
        assert authorize_azure(annotations, None, SYSTEM_ASSIGNED, "oid-9").accepted

    def test_identity_mismatch(self, annotations: list[dict[str, str]]) -> None:
        """A system-assigned token does not satisfy a user-assigned restriction."""
        # Act
        result = authorize_azure(annotations, "prod", SYSTEM_ASSIGNED, "oid-1")

        # Assert
        assert result.stage is Stage.MATCH
        assert isinstance(result.error, InvalidResourceRestrictions)
        assert result.error.resource_type == "user-assigned-identity"

    def test_service_specific_not_applied_to_other_service(self, annotations: list[dict[str, str]]) -> None:
        """The prod-only identity restriction does not bind another service."""
        assert authorize_azure(annotations, "dev", SYSTEM_ASSIGNED, "oid-1").accepted

    def test_invalid_configuration(self) -> None:
        annotations = [{"name": "authn-azure/subscription-id", "value": "sub-1"}]

        result = authorize_azure(annotations, None, USER_ASSIGNED, None)

        assert result.stage is Stage.VALIDATE_CONFIG
        assert isinstance(result.error, RoleMissingConstraint)

    def test_bad_xms_mirid(self, annotations: list[dict[str, str]]) -> None:
        result = authorize_azure(annotations, "prod", "/nonsense", "oid-1")

        assert result.stage is Stage.EXTRACT_CLAIMS
        assert isinstance(result.error, XmsMiridParseError)


class TestAuthorizeAzurePayload:
    """Tests for authorize_azure_payload()."""

    def test_accept(self, annotations: list[dict[str, str]]) -> None:
        result = authorize_azure_payload(annotations, "prod", {"xms_mirid": USER_ASSIGNED, "oid": "oid-1"})
        assert result.accepted

    def test_missing_claim(self, annotations: list[dict[str, str]]) -> None:
        result = authorize_azure_payload(annotations, "prod", {"xms_mirid": USER_ASSIGNED})

        assert result.stage is Stage.EXTRACT_CLAIMS
        assert isinstance(result.error, TokenClaimNotFoundOrEmpty)

    def test_configuration_checked_before_claims(self) -> None:
        """A bad role configuration is reported even when claims are missing."""
        result = authorize_azure_payload([], None, {})

        assert result.stage is Stage.VALIDATE_CONFIG
        assert isinstance(result.error, RoleMissingConstraint)


class TestAuditTrail:
    """Tests for decision audit logging from the pipeline."""

    def test_decision_logged(self, tmp_path: Path, annotations: list[dict[str, str]]) -> None:
        log_path = tmp_path / "decisions.jsonl"
        audit = DecisionEventLogger(
            logger=create_decision_logger(log_path),
            system_logger=logging.getLogger("test.azure.system"),
        )

        authorize_azure(annotations, "prod", SYSTEM_ASSIGNED, "oid-1", role_id="acct:host:vm", audit=audit)

        [entry] = [json.loads(line) for line in log_path.read_text().splitlines()]
        assert entry["provider"] == "azure"
        assert entry["decision"] == "reject"
        assert entry["stage"] == "match"
        assert entry["role_id"] == "acct:host:vm"
        assert entry["declared_types"] == ["subscription-id", "resource-group", "user-assigned-identity"]
