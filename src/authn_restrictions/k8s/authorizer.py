"""Kubernetes authorization pipeline.

Composes the stages for one authentication attempt:

    BUILD_SPEC / VALIDATE_CONFIG  declared identity, checked as validate_k8s_configuration does
    EXTRACT_CLAIMS                observed identity from the live pod binding
    MATCH                         every declared constraint equals the observed one

Host-id errors are configuration errors and reject at VALIDATE_CONFIG.

The first failing stage ends the attempt with REJECT.
"""

from __future__ import annotations

__all__ = ["authorize_k8s"]

import time
from collections.abc import Iterable

from authn_restrictions.annotations import AnnotationIndex
from authn_restrictions.config import EngineConfig
from authn_restrictions.k8s.claims import PodBinding
from authn_restrictions.k8s.validator import validate_k8s_configuration_from_index
from authn_restrictions.matcher import match
from authn_restrictions.resources import AnnotationInput, IdentitySpec, RuntimeClaims
from authn_restrictions.result import AuthorizationResult, Stage
from authn_restrictions.telemetry.audit.decision_logger import DecisionEventLogger
from authn_restrictions.telemetry.system.system_logger import get_system_logger


def _run(
    index: AnnotationIndex,
    service_id: str | None,
    observed: RuntimeClaims | PodBinding,
    host_id: str | None,
    config: EngineConfig | None,
) -> tuple[AuthorizationResult, IdentitySpec | None]:
    validated = validate_k8s_configuration_from_index(index, service_id, host_id, config)
    if not validated.ok:
        return AuthorizationResult.reject(Stage.VALIDATE_CONFIG, validated.error), None  # type: ignore[arg-type]
    identity = validated.unwrap()

    claims = observed.to_runtime_claims() if isinstance(observed, PodBinding) else observed

    matched = match(identity.spec, claims)
    if not matched.ok:
        return AuthorizationResult.reject(Stage.MATCH, matched.error), identity.spec  # type: ignore[arg-type]

    return AuthorizationResult.accept(), identity.spec


def authorize_k8s(
    annotations: Iterable[AnnotationInput],
    service_id: str | None,
    observed: RuntimeClaims | PodBinding,
    *,
    host_id: str | None = None,
    config: EngineConfig | None = None,
    role_id: str | None = None,
    audit: DecisionEventLogger | None = None,
) -> AuthorizationResult:
    """Authorize a Kubernetes authentication attempt.

    Args:
        annotations: The host's annotations, as returned by the role store.
        service_id: Authenticator service id.
        observed: The pod's observed identity, from the Kubernetes API collaborator.
        host_id: Host identifier, used when the host has no authn-k8s annotations.
        config: Engine configuration.
        role_id: Role being authenticated, for the audit trail; defaults to host_id.
        audit: Decision audit logger; decisions are not audited when None.

    Returns:
        ACCEPT, or REJECT with the failing stage and its typed error.
    """
    start = time.perf_counter()
    result, declared = _run(AnnotationIndex.build(annotations), service_id, observed, host_id, config)
    eval_ms = (time.perf_counter() - start) * 1000

    get_system_logger().info(
        {
            "event": "k8s_authorization_decision",
            "decision": result.decision.value,
            "stage": result.stage.value,
            "service_id": service_id,
        }
    )
    if audit is not None:
        audit.log(
            "k8s",
            result,
            service_id=service_id,
            role_id=role_id or host_id,
            declared=declared,
            eval_ms=eval_ms,
        )
    return result
