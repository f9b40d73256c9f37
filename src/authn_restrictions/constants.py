"""Application-wide constants for authn-restrictions.

Constants that define the annotation grammar and engine defaults.
For user-configurable settings per deployment, see config.py.
"""

__all__ = [
    # Application identity
    "APP_NAME",
    # Annotation grammar
    "ANNOTATION_SEPARATOR",
    "K8S_ANNOTATION_PREFIX",
    "AZURE_ANNOTATION_PREFIX",
    "CONTAINER_NAME_ANNOTATION",
    "LEGACY_CONTAINER_NAME_ANNOTATION",
    "DEFAULT_CONTAINER_NAME",
    # Host identifiers
    "HOST_ID_SEPARATOR",
    "HOST_ID_WILDCARD",
    "HOST_ID_MEANINGFUL_SEGMENTS",
    # Azure token claims
    "XMS_MIRID_CLAIM",
    "OID_CLAIM",
    "MANAGED_IDENTITY_PROVIDER",
    "XMS_MIRID_PROVIDER_FIELDS",
    # Log file names
    "SYSTEM_LOG_FILENAME",
    "DECISIONS_LOG_FILENAME",
]

APP_NAME = "authn-restrictions"

# =============================================================================
# Annotation grammar: "<prefix>/[<service-id>/]<constraint-name>"
# =============================================================================

ANNOTATION_SEPARATOR = "/"

K8S_ANNOTATION_PREFIX = "authn-k8s"
AZURE_ANNOTATION_PREFIX = "authn-azure"

# Not a resource constraint, but allowed alongside them under authn-k8s/
CONTAINER_NAME_ANNOTATION = "authentication-container-name"

# Pre-authn-k8s spelling, still honoured as a fallback
LEGACY_CONTAINER_NAME_ANNOTATION = "kubernetes/authentication-container-name"

DEFAULT_CONTAINER_NAME = "authenticator"

# =============================================================================
# Host identifiers: "<account>:<kind>:<ns>/<constraint-type>/<constraint-value>"
# =============================================================================

HOST_ID_SEPARATOR = ":"
HOST_ID_WILDCARD = "*"

# Only the trailing [namespace, constraint-type, constraint-value] matter
HOST_ID_MEANINGFUL_SEGMENTS = 3

# =============================================================================
# Azure AD token claims
# =============================================================================

XMS_MIRID_CLAIM = "xms_mirid"
OID_CLAIM = "oid"

MANAGED_IDENTITY_PROVIDER = "Microsoft.ManagedIdentity"

# Provider section is "<namespace>/<type>/<name>"
XMS_MIRID_PROVIDER_FIELDS = 3

# =============================================================================
# Logging
# =============================================================================

SYSTEM_LOG_FILENAME = "system.jsonl"
DECISIONS_LOG_FILENAME = "decisions.jsonl"
