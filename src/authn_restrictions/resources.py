"""Resource models - the typed constraints a workload must satisfy.

Structure:
- Annotation: one (name, value) pair from the role-storage collaborator
- ResourceSpec: one resolved (type, value) constraint
- IdentitySpec: a role's declared constraints, at most one per type
- RuntimeClaims: the constraints actually presented by the caller

All models are frozen; nothing here is mutated after construction.
"""

from __future__ import annotations

__all__ = [
    "Annotation",
    "AnnotationInput",
    "IdentitySpec",
    "ResourceSpec",
    "RuntimeClaims",
    "coerce_annotations",
]

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, model_validator


class Annotation(BaseModel):
    """A role annotation (read-only input).

    Attributes:
        name: Slash-delimited hierarchical name, e.g. "authn-k8s/namespace".
        value: Annotation value; an empty string is still a value.
    """

    name: str
    value: str

    model_config = ConfigDict(frozen=True)


# Role stores hand back either models or plain {"name": ..., "value": ...} rows
AnnotationInput = Annotation | Mapping[str, Any]


def coerce_annotations(annotations: Iterable[AnnotationInput]) -> tuple[Annotation, ...]:
    """Normalize role-store records into Annotation models, keeping order."""
    return tuple(a if isinstance(a, Annotation) else Annotation.model_validate(a) for a in annotations)


class ResourceSpec(BaseModel):
    """A typed constraint, either declared (policy) or observed (runtime).

    Equality and hashing are by (type, value).
    """

    type: str
    value: str

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return f"{self.type}={self.value}"


class IdentitySpec(BaseModel):
    """An ordered set of ResourceSpec keyed by type.

    Order is the provider's fixed resource-type order and decides which
    mismatch the matcher reports first. Equality ignores order.

    An empty spec is falsy like any empty container; callers that mean
    "no spec" test for None.
    """

    resources: tuple[ResourceSpec, ...] = ()

    model_config = ConfigDict(frozen=True)

    @model_validator(mode="after")
    def unique_types(self) -> Self:
        """Reject two constraints of the same type."""
        seen: set[str] = set()
        for resource in self.resources:
            if resource.type in seen:
                raise ValueError(f"Duplicate resource type '{resource.type}'")
            seen.add(resource.type)
        return self

    @classmethod
    def of(cls, pairs: Mapping[str, str] | Sequence[tuple[str, str]]) -> Self:
        """Build from {type: value} or [(type, value), ...] in the given order."""
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        return cls(resources=tuple(ResourceSpec(type=t, value=v) for t, v in items))

    def get(self, resource_type: str) -> ResourceSpec | None:
        for resource in self.resources:
            if resource.type == resource_type:
                return resource
        return None

    def value_of(self, resource_type: str) -> str | None:
        resource = self.get(resource_type)
        return resource.value if resource else None

    @property
    def types(self) -> tuple[str, ...]:
        return tuple(r.type for r in self.resources)

    def as_dict(self) -> dict[str, str]:
        return {r.type: r.value for r in self.resources}

    def __iter__(self) -> Iterator[ResourceSpec]:  # type: ignore[override]
        return iter(self.resources)

    def __len__(self) -> int:
        return len(self.resources)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return self.get(item) is not None
        return item in self.resources

    def __eq__(self, other: object) -> bool:
        if isinstance(other, IdentitySpec):
            return frozenset(self.resources) == frozenset(other.resources)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self.resources))


class RuntimeClaims(IdentitySpec):
    """Constraints observed for the current request; never persisted."""
