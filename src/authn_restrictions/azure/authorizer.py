"""Azure authorization pipeline.

Composes the stages for one authentication attempt:

    BUILD_SPEC / VALIDATE_CONFIG  declared restrictions from annotations
    EXTRACT_CLAIMS                observed identity from xms_mirid and oid
    MATCH                         every declared constraint equals the observed one

The first failing stage ends the attempt with REJECT.
"""

from __future__ import annotations

__all__ = [
    "authorize_azure",
    "authorize_azure_payload",
]

import time
from collections.abc import Iterable, Mapping
from typing import Any

from authn_restrictions.annotations import AnnotationIndex
from authn_restrictions.azure.claims import extract_azure_claims, token_claims_from_payload
from authn_restrictions.azure.validator import validate_azure_configuration_from_index
from authn_restrictions.matcher import match
from authn_restrictions.resources import AnnotationInput, IdentitySpec
from authn_restrictions.result import AuthorizationResult, Stage
from authn_restrictions.telemetry.audit.decision_logger import DecisionEventLogger
from authn_restrictions.telemetry.system.system_logger import get_system_logger


def _run(
    index: AnnotationIndex,
    service_id: str | None,
    xms_mirid: str,
    oid: str | None,
) -> tuple[AuthorizationResult, IdentitySpec | None]:
    validated = validate_azure_configuration_from_index(index, service_id)
    if not validated.ok:
        return AuthorizationResult.reject(Stage.VALIDATE_CONFIG, validated.error), None  # type: ignore[arg-type]
    declared = validated.unwrap()

    extracted = extract_azure_claims(xms_mirid, oid)
    if not extracted.ok:
        return AuthorizationResult.reject(Stage.EXTRACT_CLAIMS, extracted.error), declared  # type: ignore[arg-type]

    matched = match(declared, extracted.unwrap())
    if not matched.ok:
        return AuthorizationResult.reject(Stage.MATCH, matched.error), declared  # type: ignore[arg-type]

    return AuthorizationResult.accept(), declared


def _finish(
    result: AuthorizationResult,
    declared: IdentitySpec | None,
    service_id: str | None,
    role_id: str | None,
    audit: DecisionEventLogger | None,
    start: float,
) -> AuthorizationResult:
    eval_ms = (time.perf_counter() - start) * 1000
    get_system_logger().info(
        {
            "event": "azure_authorization_decision",
            "decision": result.decision.value,
            "stage": result.stage.value,
            "service_id": service_id,
        }
    )
    if audit is not None:
        audit.log(
            "azure",
            result,
            service_id=service_id,
            role_id=role_id,
            declared=declared,
            eval_ms=eval_ms,
        )
    return result


def authorize_azure(
    annotations: Iterable[AnnotationInput],
    service_id: str | None,
    xms_mirid: str,
    oid: str | None,
    *,
    role_id: str | None = None,
    audit: DecisionEventLogger | None = None,
) -> AuthorizationResult:
    """Authorize an Azure authentication attempt.

    Args:
        annotations: The role's annotations, as returned by the role store.
        service_id: Authenticator service id.
        xms_mirid: The token's xms_mirid claim.
        oid: The token's oid claim.
        role_id: Role being authenticated, for the audit trail only.
        audit: Decision audit logger; decisions are not audited when None.

    Returns:
        ACCEPT, or REJECT with the failing stage and its typed error.
    """
    start = time.perf_counter()
    result, declared = _run(AnnotationIndex.build(annotations), service_id, xms_mirid, oid)
    return _finish(result, declared, service_id, role_id, audit, start)


def authorize_azure_payload(
    annotations: Iterable[AnnotationInput],
    service_id: str | None,
    payload: Mapping[str, Any],
    *,
    role_id: str | None = None,
    audit: DecisionEventLogger | None = None,
) -> AuthorizationResult:
    """Authorize using a verified token payload instead of individual claims.

    A payload without xms_mirid or oid is rejected at EXTRACT_CLAIMS, after
    the role's configuration has been validated.
    """
    start = time.perf_counter()
    index = AnnotationIndex.build(annotations)

    claims = token_claims_from_payload(payload)
    if claims.ok:
        token_claims = claims.unwrap()
        result, declared = _run(index, service_id, token_claims.xms_mirid, token_claims.oid)
    else:
        validated = validate_azure_configuration_from_index(index, service_id)
        if validated.ok:
            result = AuthorizationResult.reject(Stage.EXTRACT_CLAIMS, claims.error)  # type: ignore[arg-type]
            declared = validated.unwrap()
        else:
            result = AuthorizationResult.reject(Stage.VALIDATE_CONFIG, validated.error)  # type: ignore[arg-type]
            declared = None

    return _finish(result, declared, service_id, role_id, audit, start)
