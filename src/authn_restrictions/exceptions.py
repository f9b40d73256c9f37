"""Custom exceptions for authn-restrictions.

This module contains every typed error the engine produces. Errors are
organized into categories that mirror the authorization pipeline:

Configuration Errors (role policy is malformed):
    - ScopeNotSupported / ConstraintNotSupported
    - MissingNamespaceConstraint / RoleMissingConstraint
    - IllegalConstraintCombinations
    - InvalidHostId

Claim Errors (runtime identity cannot be derived):
    - XmsMiridParseError / MissingProviderFieldsInXmsMirid
    - TokenClaimNotFoundOrEmpty / TokenDecodeError

Match Errors (runtime identity differs from policy):
    - InvalidResourceRestrictions

Lookup Errors (raised at the role-storage seam):
    - RoleNotFound

Pipeline stages return these inside a Result rather than raising them;
see result.py. Callers that prefer exceptions use Result.unwrap().

Usage:
    from authn_restrictions.exceptions import ScopeNotSupported
"""

from __future__ import annotations

__all__ = [
    "ClaimError",
    "ConfigurationError",
    "ConfigurationFileError",
    "ConstraintNotSupported",
    "IllegalConstraintCombinations",
    "InvalidHostId",
    "InvalidResourceRestrictions",
    "MatchError",
    "MissingNamespaceConstraint",
    "MissingProviderFieldsInXmsMirid",
    "RestrictionError",
    "RoleMissingConstraint",
    "RoleNotFound",
    "ScopeNotSupported",
    "TokenClaimNotFoundOrEmpty",
    "TokenDecodeError",
    "XmsMiridParseError",
]

from collections.abc import Iterable
from typing import Any


class RestrictionError(Exception):
    """Base exception for every policy or claim failure.

    Attributes:
        failure_type: Stable snake_case category for logs and CLI output.
        message: Human-readable, actionable description.
        details: Structured context (constraint name, permitted set, ...).
    """

    failure_type: str = "restriction_error"

    def __init__(self, message: str, **details: Any) -> None:
        super().__init__(message)
        self.message = message
        self.details: dict[str, Any] = details

    def to_dict(self) -> dict[str, Any]:
        """Structured form for JSONL logging."""
        return {
            "failure_type": self.failure_type,
            "error_type": type(self).__name__,
            "message": self.message,
            **self.details,
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r})"

    def __str__(self) -> str:
        return self.message


# =============================================================================
# Configuration Errors (role policy is malformed)
# =============================================================================


class ConfigurationError(RestrictionError):
    """The declared restrictions on a role are not well-formed."""

    failure_type = "configuration_error"


class ScopeNotSupported(ConfigurationError):
    """A Kubernetes annotation or host id names an unknown constraint."""

    failure_type = "scope_not_supported"

    def __init__(self, scope: str, permitted: Iterable[str]) -> None:
        permitted_list = list(permitted)
        super().__init__(
            f"Resource type '{scope}' identity scope is not supported in this version "
            f"of authn-k8s. Supported resource types are: {permitted_list}",
            scope=scope,
            permitted=permitted_list,
        )
        self.scope = scope
        self.permitted = permitted_list


class ConstraintNotSupported(ConfigurationError):
    """An Azure annotation names an unknown constraint."""

    failure_type = "constraint_not_supported"

    def __init__(self, constraint: str, permitted: Iterable[str]) -> None:
        permitted_list = list(permitted)
        super().__init__(
            f"Constraint type '{constraint}' is not supported. "
            f"Supported constraint types are: {permitted_list}",
            constraint=constraint,
            permitted=permitted_list,
        )
        self.constraint = constraint
        self.permitted = permitted_list


class MissingNamespaceConstraint(ConfigurationError):
    """A Kubernetes role declares no namespace."""

    failure_type = "missing_namespace_constraint"

    def __init__(self) -> None:
        super().__init__("Role must have a namespace constraint")


class RoleMissingConstraint(ConfigurationError):
    """An Azure role lacks a required constraint."""

    failure_type = "role_missing_constraint"

    def __init__(self, constraint: str) -> None:
        super().__init__(
            f"Role does not have the required constraint: '{constraint}'",
            constraint=constraint,
        )
        self.constraint = constraint


class IllegalConstraintCombinations(ConfigurationError):
    """Two or more mutually exclusive constraints are declared together."""

    failure_type = "illegal_constraint_combinations"

    def __init__(self, constraints: Iterable[str]) -> None:
        offending = list(constraints)
        super().__init__(
            f"Role has an illegal constraint combination: {offending}",
            constraints=offending,
        )
        self.constraints = offending


class InvalidHostId(ConfigurationError):
    """A Kubernetes host identifier does not decompose as expected."""

    failure_type = "invalid_host_id"

    def __init__(self, host_id: str, reason: str | None = None) -> None:
        message = f"Invalid host id '{host_id}'"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, host_id=host_id)
        self.host_id = host_id


# =============================================================================
# Claim Errors (runtime identity cannot be derived)
# =============================================================================


class ClaimError(RestrictionError):
    """The runtime claims presented by the caller are unusable."""

    failure_type = "claim_error"


class XmsMiridParseError(ClaimError):
    """The xms_mirid claim is missing one of its required sections."""

    failure_type = "xms_mirid_parse_error"

    def __init__(self, xms_mirid: str, reason: str) -> None:
        super().__init__(
            f"Failed to parse xms_mirid '{xms_mirid}': {reason}",
            xms_mirid=xms_mirid,
        )
        self.xms_mirid = xms_mirid


class MissingProviderFieldsInXmsMirid(ClaimError):
    """The xms_mirid provider section is present but incomplete."""

    failure_type = "missing_provider_fields_in_xms_mirid"

    def __init__(self, xms_mirid: str) -> None:
        super().__init__(
            "Failed to parse xms_mirid: the provider section must contain exactly a "
            f"namespace, a type and a name. xms_mirid: '{xms_mirid}'",
            xms_mirid=xms_mirid,
        )
        self.xms_mirid = xms_mirid


class TokenClaimNotFoundOrEmpty(ClaimError):
    """A required token claim is absent or blank."""

    failure_type = "token_claim_not_found_or_empty"

    def __init__(self, claim: str) -> None:
        super().__init__(f"Claim '{claim}' not found or empty in token", claim=claim)
        self.claim = claim


class TokenDecodeError(ClaimError):
    """An already-verified token could not be decoded into a payload."""

    failure_type = "token_decode_error"


# =============================================================================
# Match Errors (runtime identity differs from policy)
# =============================================================================


class MatchError(RestrictionError):
    """The runtime identity does not satisfy the declared restrictions."""

    failure_type = "match_error"


class InvalidResourceRestrictions(MatchError):
    """A declared constraint has no equal runtime-observed value."""

    failure_type = "invalid_resource_restrictions"

    def __init__(self, resource_type: str) -> None:
        super().__init__(
            f"Resource restriction '{resource_type}' does not match the resource in the request",
            resource_type=resource_type,
        )
        self.resource_type = resource_type


# =============================================================================
# Lookup Errors
# =============================================================================


class RoleNotFound(RestrictionError):
    """The role-storage collaborator has no record for the role id.

    Kept distinct from MatchError so callers can tell a missing role from a
    restriction mismatch.
    """

    failure_type = "role_not_found"

    def __init__(self, role_id: str) -> None:
        super().__init__(f"'{role_id}' wasn't found", role_id=role_id)
        self.role_id = role_id


class ConfigurationFileError(Exception):
    """Engine configuration file is missing or invalid."""
