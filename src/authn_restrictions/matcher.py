"""Matching of declared restrictions against runtime claims.

Every declared constraint must be satisfied by an observed constraint of the
same type with an equal value. Matching is exact and case-sensitive. The
first mismatch, in declared order, is reported; later mismatches are not
collected.
"""

from __future__ import annotations

__all__ = ["match"]

from authn_restrictions.exceptions import InvalidResourceRestrictions
from authn_restrictions.resources import IdentitySpec, RuntimeClaims
from authn_restrictions.result import Result
from authn_restrictions.telemetry.system.system_logger import get_system_logger


def match(declared: IdentitySpec, observed: RuntimeClaims | IdentitySpec) -> Result[None]:
    """Compare declared restrictions with the caller's runtime claims.

    Args:
        declared: Constraints the role requires.
        observed: Constraints the caller presented.

    Returns:
        Empty success, or InvalidResourceRestrictions naming the first
        declared type whose observed value is absent or different.
    """
    logger = get_system_logger()

    for resource in declared:
        observed_value = observed.value_of(resource.type)
        if observed_value is None or observed_value != resource.value:
            logger.debug(
                {
                    "event": "resource_restriction_mismatch",
                    "resource_type": resource.type,
                    "observed": observed_value is not None,
                }
            )
            return Result.failure(InvalidResourceRestrictions(resource.type))

    logger.debug({"event": "resource_restrictions_validated", "count": len(declared)})
    return Result.success()
