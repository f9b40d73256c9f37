"""Kubernetes resource restrictions.

Structure:
    host_id.py        - Host identifier parsing
    spec_builder.py   - Declared identity from annotations or host id
    validator.py      - Configuration checks
    claims.py         - Observed identity from the live pod binding
    authorizer.py     - Full pipeline for one authentication attempt
"""

from authn_restrictions.k8s.authorizer import authorize_k8s
from authn_restrictions.k8s.claims import PodBinding
from authn_restrictions.k8s.host_id import HostIdentifier, constraints_from_host_id
from authn_restrictions.k8s.spec_builder import K8sApplicationIdentity, build_k8s_identity
from authn_restrictions.k8s.validator import validate_k8s_configuration

__all__ = [
    "HostIdentifier",
    "K8sApplicationIdentity",
    "PodBinding",
    "authorize_k8s",
    "build_k8s_identity",
    "constraints_from_host_id",
    "validate_k8s_configuration",
]
