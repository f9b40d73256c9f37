"""Kubernetes host identifier parsing.

A host identifier has the form "<account>:<kind>:<hostname>". The hostname is
slash-delimited and only its last three segments carry meaning:

    <namespace>/<constraint-type>/<constraint-value>

Examples:
    "acct:host:apps/ns1/*/*"                  -> namespace ns1, no controller
    "acct:host:ns1/service-account/sa1"       -> namespace ns1, service account sa1
    "acct:host:ns1/stateful_set/db"           -> underscore spelling is accepted too

Segments are read positionally; there is no grammar beyond the separators.
"""

from __future__ import annotations

__all__ = [
    "HostIdentifier",
    "constraints_from_host_id",
]

from dataclasses import dataclass

from authn_restrictions.constants import (
    ANNOTATION_SEPARATOR,
    HOST_ID_MEANINGFUL_SEGMENTS,
    HOST_ID_SEPARATOR,
    HOST_ID_WILDCARD,
)
from authn_restrictions.constraints import (
    K8sConstraint,
    k8s_constraint_from_host_id,
    k8s_constraint_names,
)
from authn_restrictions.exceptions import InvalidHostId, ScopeNotSupported
from authn_restrictions.result import Result


@dataclass(frozen=True, slots=True)
class HostIdentifier:
    """A host identifier split into its parts.

    Attributes:
        raw: The identifier as given.
        account: Account part, None when the identifier has no ":" prefix.
        kind: Role kind part (usually "host"), None likewise.
        segments: Hostname split on "/".
    """

    raw: str
    account: str | None
    kind: str | None
    segments: tuple[str, ...]

    @classmethod
    def parse(cls, host_id: str) -> "HostIdentifier":
        parts = host_id.split(HOST_ID_SEPARATOR, 2)
        if len(parts) == 3:
            account, kind, hostname = parts
        else:
            account, kind, hostname = None, None, host_id
        return cls(
            raw=host_id,
            account=account,
            kind=kind,
            segments=tuple(hostname.split(ANNOTATION_SEPARATOR)),
        )

    @property
    def hostname(self) -> str:
        return ANNOTATION_SEPARATOR.join(self.segments)

    @property
    def meaningful_segments(self) -> tuple[str, ...]:
        return self.segments[-HOST_ID_MEANINGFUL_SEGMENTS:]


def constraints_from_host_id(host_id: str) -> Result[dict[K8sConstraint, str]]:
    """Derive Kubernetes constraints from a host identifier.

    Returns:
        Mapping of constraint kind to value (namespace always present), or:
        - InvalidHostId when fewer than 3 segments exist, a segment is
          empty, or only one of constraint-type/constraint-value is "*"
        - ScopeNotSupported when constraint-type names no known kind
    """
    identifier = HostIdentifier.parse(host_id)

    if len(identifier.segments) < HOST_ID_MEANINGFUL_SEGMENTS:
        return Result.failure(
            InvalidHostId(
                host_id,
                "expected '<namespace>/<constraint-type>/<constraint-value>' at the end of the host name",
            )
        )

    namespace, constraint_type, constraint_value = identifier.meaningful_segments

    if not namespace:
        return Result.failure(InvalidHostId(host_id, "namespace segment is empty"))

    wildcards = (constraint_type == HOST_ID_WILDCARD, constraint_value == HOST_ID_WILDCARD)
    if all(wildcards):
        return Result.success({K8sConstraint.NAMESPACE: namespace})
    if any(wildcards):
        return Result.failure(
            InvalidHostId(host_id, "constraint type and value must both be '*' or both be literal")
        )

    if not constraint_type or not constraint_value:
        return Result.failure(InvalidHostId(host_id, "constraint segment is empty"))

    kind = k8s_constraint_from_host_id(constraint_type)
    if kind is None:
        return Result.failure(ScopeNotSupported(constraint_type, k8s_constraint_names()))

    if kind is K8sConstraint.NAMESPACE:
        return Result.success({K8sConstraint.NAMESPACE: namespace})

    return Result.success({K8sConstraint.NAMESPACE: namespace, kind: constraint_value})
