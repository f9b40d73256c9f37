"""Constraint kinds per provider.

Each provider has a closed set of constraint kinds. The lookup tables below
carry everything the builders and validators need about a kind, so no
caller converts between dash and underscore spellings by hand:

- annotation spelling (dash form, the enum value)
- host-id spellings (Kubernetes only; dash and underscore forms)
- whether the kind is required
- the mutually exclusive group it belongs to, if any
"""

from __future__ import annotations

__all__ = [
    "AzureConstraint",
    "ConstraintInfo",
    "K8sConstraint",
    "AZURE_CONSTRAINTS",
    "K8S_CONSTRAINTS",
    "K8S_PERMITTED_ANNOTATIONS",
    "azure_constraint_names",
    "exclusive_groups",
    "k8s_constraint_from_host_id",
    "k8s_constraint_names",
]

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from authn_restrictions.constants import CONTAINER_NAME_ANNOTATION


class K8sConstraint(str, Enum):
    """Kubernetes resource constraint kinds, in resolution order.

    NAMESPACE is always required; the other five are controller constraints.
    """

    NAMESPACE = "namespace"
    SERVICE_ACCOUNT = "service-account"
    POD = "pod"
    DEPLOYMENT = "deployment"
    DEPLOYMENT_CONFIG = "deployment-config"
    STATEFUL_SET = "stateful-set"

    @property
    def underscored(self) -> str:
        return self.value.replace("-", "_")


class AzureConstraint(str, Enum):
    """Azure resource constraint kinds, in resolution order."""

    SUBSCRIPTION_ID = "subscription-id"
    RESOURCE_GROUP = "resource-group"
    USER_ASSIGNED_IDENTITY = "user-assigned-identity"
    SYSTEM_ASSIGNED_IDENTITY = "system-assigned-identity"


@dataclass(frozen=True, slots=True)
class ConstraintInfo:
    """Static facts about one constraint kind.

    Attributes:
        required: Role configuration is invalid without this kind.
        controller: Kubernetes only; a non-namespace workload constraint.
        exclusive_group: Kinds sharing a group may not be declared together.
    """

    required: bool = False
    controller: bool = False
    exclusive_group: str | None = None


K8S_CONSTRAINTS: Mapping[K8sConstraint, ConstraintInfo] = {
    K8sConstraint.NAMESPACE: ConstraintInfo(required=True),
    K8sConstraint.SERVICE_ACCOUNT: ConstraintInfo(controller=True),
    K8sConstraint.POD: ConstraintInfo(controller=True),
    K8sConstraint.DEPLOYMENT: ConstraintInfo(controller=True, exclusive_group="controller"),
    K8sConstraint.DEPLOYMENT_CONFIG: ConstraintInfo(controller=True, exclusive_group="controller"),
    K8sConstraint.STATEFUL_SET: ConstraintInfo(controller=True, exclusive_group="controller"),
}

AZURE_CONSTRAINTS: Mapping[AzureConstraint, ConstraintInfo] = {
    AzureConstraint.SUBSCRIPTION_ID: ConstraintInfo(required=True),
    AzureConstraint.RESOURCE_GROUP: ConstraintInfo(required=True),
    AzureConstraint.USER_ASSIGNED_IDENTITY: ConstraintInfo(exclusive_group="identity"),
    AzureConstraint.SYSTEM_ASSIGNED_IDENTITY: ConstraintInfo(exclusive_group="identity"),
}

# Host ids historically used underscores; annotations always use dashes
_K8S_HOST_ID_SPELLINGS: dict[str, K8sConstraint] = {
    spelling: kind for kind in K8sConstraint for spelling in (kind.value, kind.underscored)
}


def k8s_constraint_names() -> list[str]:
    """Annotation spellings of every Kubernetes constraint, in order."""
    return [kind.value for kind in K8sConstraint]


def azure_constraint_names() -> list[str]:
    """Annotation spellings of every Azure constraint, in order."""
    return [kind.value for kind in AzureConstraint]


# Base names allowed one level below "authn-k8s/" and "authn-k8s/<service-id>/"
K8S_PERMITTED_ANNOTATIONS: tuple[str, ...] = (*k8s_constraint_names(), CONTAINER_NAME_ANNOTATION)


def k8s_constraint_from_host_id(segment: str) -> K8sConstraint | None:
    """Map a host-id constraint segment (either spelling) to its kind."""
    return _K8S_HOST_ID_SPELLINGS.get(segment)


def exclusive_groups(table: Mapping[Enum, ConstraintInfo]) -> dict[str, list[str]]:
    """Group kind names by exclusive group, preserving table order."""
    groups: dict[str, list[str]] = {}
    for kind, info in table.items():
        if info.exclusive_group is not None:
            groups.setdefault(info.exclusive_group, []).append(kind.value)
    return groups
