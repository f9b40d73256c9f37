"""Annotation resolution with service-specific overrides.

A constraint may be declared generically ("authn-k8s/namespace") or for one
authenticator service ("authn-k8s/<service-id>/namespace"). The
service-specific annotation always wins.

The role's annotation list is indexed once per request; every lookup after
that is a dict access.
"""

from __future__ import annotations

__all__ = [
    "AnnotationIndex",
    "annotation_name",
    "resolve",
]

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from types import MappingProxyType

from authn_restrictions.constants import ANNOTATION_SEPARATOR
from authn_restrictions.resources import AnnotationInput, coerce_annotations
from authn_restrictions.telemetry.system.system_logger import get_system_logger


def annotation_name(*parts: str) -> str:
    """Join name parts with the annotation separator."""
    return ANNOTATION_SEPARATOR.join(parts)


def _depth(name: str) -> int:
    return len([part for part in name.split(ANNOTATION_SEPARATOR) if part])


@dataclass(frozen=True, slots=True)
class AnnotationIndex:
    """Read-only name -> value index over a role's annotations.

    Attributes:
        names: Annotation names in their original order (duplicates dropped).
        values: Mapping from name to value; the first occurrence wins.
    """

    names: tuple[str, ...]
    values: Mapping[str, str]

    @classmethod
    def build(cls, annotations: Iterable[AnnotationInput]) -> "AnnotationIndex":
        values: dict[str, str] = {}
        for annotation in coerce_annotations(annotations):
            values.setdefault(annotation.name, annotation.value)
        return cls(names=tuple(values), values=MappingProxyType(values))

    def get(self, name: str) -> str | None:
        value = self.values.get(name)
        if value is not None:
            get_system_logger().debug({"event": "annotation_resolved", "name": name})
        return value

    def has_prefix(self, prefix: str) -> bool:
        """True if any annotation lives under "<prefix>/"."""
        prefix = prefix.rstrip(ANNOTATION_SEPARATOR) + ANNOTATION_SEPARATOR
        return any(name.startswith(prefix) for name in self.names)

    def names_one_level_below(self, prefix: str) -> list[str]:
        """Names directly under "<prefix>/", excluding deeper ones.

        "authn-k8s/namespace" is one level below "authn-k8s" while
        "authn-k8s/my-service/namespace" is not.
        """
        prefix = prefix.rstrip(ANNOTATION_SEPARATOR) + ANNOTATION_SEPARATOR
        expected_depth = _depth(prefix) + 1
        return [name for name in self.names if name.startswith(prefix) and _depth(name) == expected_depth]


def resolve(index: AnnotationIndex, prefix: str, service_id: str | None, base_name: str) -> str | None:
    """Resolve a constraint value, preferring the service-specific annotation.

    Args:
        index: Annotation index for the role.
        prefix: Provider prefix, e.g. "authn-k8s".
        service_id: Authenticator service id; None skips the specific lookup.
        base_name: Constraint name in dash form, e.g. "service-account".

    Returns:
        Value of "<prefix>/<service_id>/<base_name>" if present, else of
        "<prefix>/<base_name>", else None.
    """
    if service_id:
        value = index.get(annotation_name(prefix, service_id, base_name))
        if value is not None:
            return value
    return index.get(annotation_name(prefix, base_name))
