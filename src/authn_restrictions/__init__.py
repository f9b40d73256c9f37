"""authn-restrictions: resource restriction engine for workload authenticators.

Validates the Kubernetes and Azure resource restrictions declared on a role
and matches them against the identity presented in an authentication
attempt.

Structure:
    resources.py      - ResourceSpec, IdentitySpec, RuntimeClaims, Annotation
    constraints.py    - Constraint kinds per provider
    annotations.py    - Service-specific annotation resolution
    validation.py     - Shared configuration checks
    matcher.py        - Declared vs observed matching
    result.py         - Result values and authorization outcome
    k8s/              - Kubernetes builder, validator, claims, pipeline
    azure/            - Azure builder, validator, claims, pipeline
    roles.py          - Role store interface
"""

__version__ = "0.1.0"

from authn_restrictions.azure import authorize_azure, authorize_azure_payload, validate_azure_configuration
from authn_restrictions.exceptions import RestrictionError
from authn_restrictions.k8s import PodBinding, authorize_k8s, validate_k8s_configuration
from authn_restrictions.resources import Annotation, IdentitySpec, ResourceSpec, RuntimeClaims
from authn_restrictions.result import AuthorizationResult, Decision, Result, Stage

__all__ = [
    "__version__",
    # Models
    "Annotation",
    "IdentitySpec",
    "PodBinding",
    "ResourceSpec",
    "RuntimeClaims",
    # Results
    "AuthorizationResult",
    "Decision",
    "RestrictionError",
    "Result",
    "Stage",
    # Entry points
    "authorize_azure",
    "authorize_azure_payload",
    "authorize_k8s",
    "validate_azure_configuration",
    "validate_k8s_configuration",
]
