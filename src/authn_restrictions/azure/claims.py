"""Azure runtime claims.

Derives the observed Azure identity of a caller from its (already verified)
Azure AD token:

- subscription-id and resource-group always come from xms_mirid
- user-assigned-identity is the identity name when xms_mirid points at a
  Microsoft.ManagedIdentity resource
- system-assigned-identity is the token's object id (oid) otherwise
"""

from __future__ import annotations

__all__ = [
    "AzureTokenClaims",
    "decode_token_payload",
    "extract_azure_claims",
    "token_claims_from_payload",
]

from collections.abc import Mapping
from typing import Any

import jwt
from pydantic import BaseModel, ConfigDict

from authn_restrictions.azure.xms_mirid import parse_xms_mirid
from authn_restrictions.constants import OID_CLAIM, XMS_MIRID_CLAIM
from authn_restrictions.constraints import AzureConstraint
from authn_restrictions.exceptions import TokenClaimNotFoundOrEmpty, TokenDecodeError
from authn_restrictions.resources import ResourceSpec, RuntimeClaims
from authn_restrictions.result import Result
from authn_restrictions.telemetry.system.system_logger import get_system_logger


class AzureTokenClaims(BaseModel):
    """The token claims restriction matching needs.

    Attributes:
        xms_mirid: Resource id of the identity the token was issued to.
        oid: Object id of that identity.
    """

    xms_mirid: str
    oid: str | None = None

    model_config = ConfigDict(frozen=True)


def decode_token_payload(token: str) -> Result[dict[str, Any]]:
    """Decode the payload of a token whose signature was verified upstream.

    Signature checks are skipped; this only reads claims.
    """
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
    except jwt.DecodeError as e:
        return Result.failure(TokenDecodeError(f"Failed to decode Azure AD token: {e}"))
    return Result.success(payload)


def _claim(payload: Mapping[str, Any], name: str) -> str | None:
    value = payload.get(name)
    if not isinstance(value, str) or not value.strip():
        return None
    return value


def token_claims_from_payload(payload: Mapping[str, Any]) -> Result[AzureTokenClaims]:
    """Read xms_mirid and oid from a token payload.

    Returns:
        The claims, or TokenClaimNotFoundOrEmpty for the first missing one.
    """
    for name in (XMS_MIRID_CLAIM, OID_CLAIM):
        if _claim(payload, name) is None:
            return Result.failure(TokenClaimNotFoundOrEmpty(name))
    return Result.success(AzureTokenClaims(xms_mirid=payload[XMS_MIRID_CLAIM], oid=payload[OID_CLAIM]))


def extract_azure_claims(xms_mirid: str, oid: str | None) -> Result[RuntimeClaims]:
    """Derive the caller's observed Azure identity.

    Args:
        xms_mirid: Raw xms_mirid claim.
        oid: Raw oid claim; required only for system-assigned identities.

    Returns:
        RuntimeClaims in AzureConstraint order, or the claim parsing error.
    """
    parsed = parse_xms_mirid(xms_mirid)
    if not parsed.ok:
        return Result.failure(parsed.error)  # type: ignore[arg-type]
    mirid = parsed.unwrap()

    resources = [
        ResourceSpec(type=AzureConstraint.SUBSCRIPTION_ID.value, value=mirid.subscription_id),
        ResourceSpec(type=AzureConstraint.RESOURCE_GROUP.value, value=mirid.resource_group),
    ]

    if mirid.is_user_assigned_identity:
        resources.append(ResourceSpec(type=AzureConstraint.USER_ASSIGNED_IDENTITY.value, value=mirid.resource_name))
    elif oid is None or not oid.strip():
        return Result.failure(TokenClaimNotFoundOrEmpty(OID_CLAIM))
    else:
        resources.append(ResourceSpec(type=AzureConstraint.SYSTEM_ASSIGNED_IDENTITY.value, value=oid))

    get_system_logger().debug(
        {
            "event": "extracted_resource_restrictions_from_token",
            "resource_types": [r.type for r in resources],
        }
    )
    return Result.success(RuntimeClaims(resources=tuple(resources)))
