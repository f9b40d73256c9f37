"""Azure declared identity builder.

Azure restrictions come only from annotations; there is no host-id form.
Each kind resolves from "authn-azure/[<service-id>/]<kind>".
"""

from __future__ import annotations

__all__ = [
    "build_azure_spec",
    "build_azure_spec_from_index",
]

from collections.abc import Iterable

from authn_restrictions.annotations import AnnotationIndex, resolve
from authn_restrictions.constants import AZURE_ANNOTATION_PREFIX
from authn_restrictions.constraints import AzureConstraint
from authn_restrictions.resources import AnnotationInput, IdentitySpec, ResourceSpec


def build_azure_spec_from_index(index: AnnotationIndex, service_id: str | None) -> IdentitySpec:
    resources = []
    for kind in AzureConstraint:
        value = resolve(index, AZURE_ANNOTATION_PREFIX, service_id, kind.value)
        if value is not None:
            resources.append(ResourceSpec(type=kind.value, value=value))
    return IdentitySpec(resources=tuple(resources))


def build_azure_spec(annotations: Iterable[AnnotationInput], service_id: str | None) -> IdentitySpec:
    """Declared Azure restrictions of a role, in AzureConstraint order."""
    return build_azure_spec_from_index(AnnotationIndex.build(annotations), service_id)
