"""Kubernetes runtime claims.

The live pod's namespace, service account and owning controller are looked
up by an external Kubernetes API collaborator. PodBinding is the shape that
collaborator hands back; this module only turns it into RuntimeClaims.
"""

from __future__ import annotations

__all__ = ["PodBinding"]

from pydantic import BaseModel, ConfigDict

from authn_restrictions.constraints import K8sConstraint
from authn_restrictions.resources import ResourceSpec, RuntimeClaims


class PodBinding(BaseModel):
    """The observed Kubernetes identity of an authenticating pod.

    Attributes:
        namespace: Namespace the pod runs in.
        service_account: Service account the pod runs as.
        pod: Pod name.
        deployment: Owning Deployment, if any.
        deployment_config: Owning OpenShift DeploymentConfig, if any.
        stateful_set: Owning StatefulSet, if any.
    """

    namespace: str
    service_account: str | None = None
    pod: str | None = None
    deployment: str | None = None
    deployment_config: str | None = None
    stateful_set: str | None = None

    model_config = ConfigDict(frozen=True, extra="forbid")

    def to_runtime_claims(self) -> RuntimeClaims:
        """Observed constraints in K8sConstraint order; unset fields are omitted."""
        resources = []
        for kind in K8sConstraint:
            value = getattr(self, kind.underscored)
            if value is not None:
                resources.append(ResourceSpec(type=kind.value, value=value))
        return RuntimeClaims(resources=tuple(resources))
