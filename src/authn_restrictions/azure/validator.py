"""Azure restriction configuration validation.

Checks run fail-fast, in this order:
1. Permitted scope: annotations under "authn-azure/" and
   "authn-azure/<service-id>/" name known constraints
2. Required constraints: subscription-id, then resource-group
3. Combinations: not both user-assigned-identity and system-assigned-identity
"""

from __future__ import annotations

__all__ = [
    "validate_azure_configuration",
    "validate_azure_configuration_from_index",
]

from collections.abc import Iterable

from authn_restrictions.annotations import AnnotationIndex
from authn_restrictions.azure.spec_builder import build_azure_spec_from_index
from authn_restrictions.constants import AZURE_ANNOTATION_PREFIX
from authn_restrictions.constraints import AZURE_CONSTRAINTS, azure_constraint_names
from authn_restrictions.exceptions import ConstraintNotSupported, RoleMissingConstraint
from authn_restrictions.resources import AnnotationInput, IdentitySpec
from authn_restrictions.result import Result
from authn_restrictions.telemetry.system.system_logger import get_system_logger
from authn_restrictions.validation import check_combinations, check_permitted_scope, check_required


def validate_azure_configuration_from_index(index: AnnotationIndex, service_id: str | None) -> Result[IdentitySpec]:
    scope = check_permitted_scope(
        index,
        AZURE_ANNOTATION_PREFIX,
        service_id,
        azure_constraint_names(),
        ConstraintNotSupported,
    )
    if not scope.ok:
        return Result.failure(scope.error)  # type: ignore[arg-type]

    spec = build_azure_spec_from_index(index, service_id)

    for check in (
        check_required(spec, AZURE_CONSTRAINTS, RoleMissingConstraint),
        check_combinations(spec, AZURE_CONSTRAINTS),
    ):
        if not check.ok:
            return Result.failure(check.error)  # type: ignore[arg-type]

    get_system_logger().debug({"event": "azure_configuration_validated", "service_id": service_id})
    return Result.success(spec)


def validate_azure_configuration(
    annotations: Iterable[AnnotationInput],
    service_id: str | None,
) -> Result[IdentitySpec]:
    """Validate the Azure restrictions declared for a role.

    Returns:
        The declared IdentitySpec, or the first ConfigurationError found.
    """
    return validate_azure_configuration_from_index(AnnotationIndex.build(annotations), service_id)
