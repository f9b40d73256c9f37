"""Shared configuration checks used by both providers.

Each check inspects one aspect of a role's declared restrictions and
returns an empty Result or the first violation it finds:

- check_permitted_scope: annotations name only known constraints
- check_required: every required constraint kind is declared
- check_combinations: at most one kind per exclusive group is declared
"""

from __future__ import annotations

__all__ = [
    "check_combinations",
    "check_permitted_scope",
    "check_required",
]

from collections.abc import Callable, Mapping, Sequence
from enum import Enum

from authn_restrictions.annotations import AnnotationIndex, annotation_name
from authn_restrictions.constants import ANNOTATION_SEPARATOR
from authn_restrictions.constraints import ConstraintInfo, exclusive_groups
from authn_restrictions.exceptions import (
    ConfigurationError,
    IllegalConstraintCombinations,
)
from authn_restrictions.resources import IdentitySpec
from authn_restrictions.result import Result
from authn_restrictions.telemetry.system.system_logger import get_system_logger


def check_permitted_scope(
    index: AnnotationIndex,
    provider_prefix: str,
    service_id: str | None,
    permitted: Sequence[str],
    error: Callable[[str, Sequence[str]], ConfigurationError],
) -> Result[None]:
    """Validate annotations directly under the generic and service prefixes.

    Only names exactly one level below "<prefix>/" or "<prefix>/<service-id>/"
    are checked; annotations for other services are left alone.

    Args:
        index: Role annotations.
        provider_prefix: "authn-k8s" or "authn-azure".
        service_id: Authenticator service id.
        permitted: Allowed base names.
        error: Factory for the provider's not-supported error.
    """
    prefixes = [provider_prefix]
    if service_id:
        prefixes.append(annotation_name(provider_prefix, service_id))

    logger = get_system_logger()
    for prefix in prefixes:
        logger.debug({"event": "validating_annotations_with_prefix", "prefix": prefix})
        for name in index.names_one_level_below(prefix):
            base_name = name[len(prefix) :].lstrip(ANNOTATION_SEPARATOR)
            if base_name not in permitted:
                return Result.failure(error(base_name, permitted))
    return Result.success()


def check_required(
    spec: IdentitySpec,
    table: Mapping[Enum, ConstraintInfo],
    error: Callable[[str], ConfigurationError],
) -> Result[None]:
    """Validate that every required kind in the table is declared, in table order."""
    for kind, info in table.items():
        if info.required and kind.value not in spec:
            return Result.failure(error(kind.value))
    return Result.success()


def check_combinations(spec: IdentitySpec, table: Mapping[Enum, ConstraintInfo]) -> Result[None]:
    """Validate that no exclusive group has more than one declared kind."""
    for members in exclusive_groups(table).values():
        declared = [name for name in members if name in spec]
        if len(declared) > 1:
            return Result.failure(IllegalConstraintCombinations(declared))
    return Result.success()
