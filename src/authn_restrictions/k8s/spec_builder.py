"""Kubernetes application identity builder.

Builds the declared restrictions of a host from one of two sources:

- Annotation mode: selected when any annotation lives under "authn-k8s/".
  Each constraint kind resolves from "authn-k8s/[<service-id>/]<kind>".
- Host-id mode: otherwise. Constraints come from the last three segments of
  the host identifier (see host_id.py).

The authenticator container name resolves independently of the mode:
    authn-k8s/<service-id>/authentication-container-name
    -> authn-k8s/authentication-container-name
    -> kubernetes/authentication-container-name
    -> "authenticator"
"""

from __future__ import annotations

__all__ = [
    "K8sApplicationIdentity",
    "build_k8s_identity",
    "build_k8s_identity_from_index",
]

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from authn_restrictions.annotations import AnnotationIndex, resolve
from authn_restrictions.config import EngineConfig
from authn_restrictions.constants import CONTAINER_NAME_ANNOTATION, K8S_ANNOTATION_PREFIX
from authn_restrictions.constraints import K8S_CONSTRAINTS, K8sConstraint
from authn_restrictions.k8s.host_id import constraints_from_host_id
from authn_restrictions.resources import AnnotationInput, IdentitySpec, ResourceSpec
from authn_restrictions.result import Result
from authn_restrictions.telemetry.system.system_logger import get_system_logger


class K8sApplicationIdentity(BaseModel):
    """Declared Kubernetes identity of a host.

    Attributes:
        spec: Declared constraints, in K8sConstraint order.
        container_name: Container the authenticator client runs in.
        from_annotations: True if built in annotation mode.
    """

    spec: IdentitySpec
    container_name: str
    from_annotations: bool

    model_config = ConfigDict(frozen=True)

    @property
    def namespace(self) -> str | None:
        return self.spec.value_of(K8sConstraint.NAMESPACE.value)

    @property
    def controller(self) -> ResourceSpec | None:
        """The first declared controller constraint, if any."""
        for resource in self.spec:
            if K8S_CONSTRAINTS[K8sConstraint(resource.type)].controller:
                return resource
        return None

    @property
    def namespace_scoped(self) -> bool:
        """True iff no controller constraint is declared."""
        return self.controller is None


def _spec_from(values: dict[K8sConstraint, str]) -> IdentitySpec:
    # Fixed K8sConstraint order regardless of how values were collected
    return IdentitySpec(
        resources=tuple(
            ResourceSpec(type=kind.value, value=values[kind]) for kind in K8sConstraint if kind in values
        )
    )


def _container_name(index: AnnotationIndex, service_id: str | None, config: EngineConfig) -> str:
    value = resolve(index, K8S_ANNOTATION_PREFIX, service_id, CONTAINER_NAME_ANNOTATION)
    if value is None:
        value = index.get(config.legacy_container_annotation)
    return value if value is not None else config.default_container_name


def build_k8s_identity_from_index(
    index: AnnotationIndex,
    service_id: str | None,
    host_id: str | None = None,
    config: EngineConfig | None = None,
) -> Result[K8sApplicationIdentity]:
    """Build the declared identity from an already indexed annotation list.

    Args:
        index: Role annotations, indexed once per request.
        service_id: Authenticator service id.
        host_id: Host identifier; used only when no authn-k8s annotations exist.
        config: Engine configuration (container name defaults).

    Returns:
        The identity, or the host-id error (InvalidHostId, ScopeNotSupported).
    """
    config = config or EngineConfig()
    from_annotations = index.has_prefix(K8S_ANNOTATION_PREFIX)

    if from_annotations:
        values: dict[K8sConstraint, str] = {}
        for kind in K8sConstraint:
            value = resolve(index, K8S_ANNOTATION_PREFIX, service_id, kind.value)
            if value is not None:
                values[kind] = value
    elif host_id is not None:
        parsed = constraints_from_host_id(host_id)
        if not parsed.ok:
            return Result.failure(parsed.error)  # type: ignore[arg-type]
        values = parsed.unwrap()
    else:
        values = {}

    identity = K8sApplicationIdentity(
        spec=_spec_from(values),
        container_name=_container_name(index, service_id, config),
        from_annotations=from_annotations,
    )
    get_system_logger().debug(
        {
            "event": "k8s_identity_built",
            "source": "annotations" if from_annotations else "host_id",
            "resource_types": list(identity.spec.types),
            "namespace_scoped": identity.namespace_scoped,
        }
    )
    return Result.success(identity)


def build_k8s_identity(
    annotations: Iterable[AnnotationInput],
    service_id: str | None,
    host_id: str | None = None,
    config: EngineConfig | None = None,
) -> Result[K8sApplicationIdentity]:
    """Build the declared Kubernetes identity of a host.

    See build_k8s_identity_from_index().
    """
    return build_k8s_identity_from_index(AnnotationIndex.build(annotations), service_id, host_id, config)
