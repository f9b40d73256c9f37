"""Kubernetes restriction configuration validation.

Checks run fail-fast, in this order:
1. Permitted scope: annotations under "authn-k8s/" and
   "authn-k8s/<service-id>/" name known constraints
2. Identity build: host-id errors surface here in host-id mode
3. Required constraint: namespace is declared
4. Combinations: at most one of deployment, deployment-config, stateful-set
"""

from __future__ import annotations

__all__ = [
    "validate_k8s_configuration",
    "validate_k8s_configuration_from_index",
    "validate_k8s_identity",
]

from collections.abc import Iterable

from authn_restrictions.annotations import AnnotationIndex
from authn_restrictions.config import EngineConfig
from authn_restrictions.constants import K8S_ANNOTATION_PREFIX
from authn_restrictions.constraints import K8S_CONSTRAINTS, K8S_PERMITTED_ANNOTATIONS
from authn_restrictions.exceptions import MissingNamespaceConstraint, ScopeNotSupported
from authn_restrictions.k8s.spec_builder import K8sApplicationIdentity, build_k8s_identity_from_index
from authn_restrictions.resources import AnnotationInput
from authn_restrictions.result import Result
from authn_restrictions.telemetry.system.system_logger import get_system_logger
from authn_restrictions.validation import check_combinations, check_permitted_scope, check_required


def validate_k8s_identity(identity: K8sApplicationIdentity) -> Result[K8sApplicationIdentity]:
    """Run the required-constraint and combination checks on a built identity."""
    required = check_required(identity.spec, K8S_CONSTRAINTS, lambda _kind: MissingNamespaceConstraint())
    if not required.ok:
        return Result.failure(required.error)  # type: ignore[arg-type]

    combinations = check_combinations(identity.spec, K8S_CONSTRAINTS)
    if not combinations.ok:
        return Result.failure(combinations.error)  # type: ignore[arg-type]

    return Result.success(identity)


def validate_k8s_configuration_from_index(
    index: AnnotationIndex,
    service_id: str | None,
    host_id: str | None = None,
    config: EngineConfig | None = None,
) -> Result[K8sApplicationIdentity]:
    """Validate a host's Kubernetes restrictions from indexed annotations."""
    scope = check_permitted_scope(
        index,
        K8S_ANNOTATION_PREFIX,
        service_id,
        K8S_PERMITTED_ANNOTATIONS,
        ScopeNotSupported,
    )
    if not scope.ok:
        return Result.failure(scope.error)  # type: ignore[arg-type]

    built = build_k8s_identity_from_index(index, service_id, host_id, config)
    if not built.ok:
        return built

    validated = validate_k8s_identity(built.unwrap())
    if validated.ok:
        get_system_logger().debug({"event": "k8s_configuration_validated", "service_id": service_id})
    return validated


def validate_k8s_configuration(
    annotations: Iterable[AnnotationInput],
    service_id: str | None,
    host_id: str | None = None,
    config: EngineConfig | None = None,
) -> Result[K8sApplicationIdentity]:
    """Validate the Kubernetes restrictions declared for a host.

    Args:
        annotations: The host's annotations, as returned by the role store.
        service_id: Authenticator service id.
        host_id: Host identifier, consulted when no authn-k8s annotations exist.
        config: Engine configuration.

    Returns:
        The validated identity, or the first ConfigurationError found.
    """
    return validate_k8s_configuration_from_index(AnnotationIndex.build(annotations), service_id, host_id, config)
