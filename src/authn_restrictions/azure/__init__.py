"""Azure resource restrictions.

Structure:
    xms_mirid.py      - Parsing of the xms_mirid token claim
    spec_builder.py   - Declared restrictions from annotations
    validator.py      - Configuration checks
    claims.py         - Observed identity from token claims
    authorizer.py     - Full pipeline for one authentication attempt
"""

from authn_restrictions.azure.authorizer import authorize_azure, authorize_azure_payload
from authn_restrictions.azure.claims import (
    AzureTokenClaims,
    decode_token_payload,
    extract_azure_claims,
    token_claims_from_payload,
)
from authn_restrictions.azure.spec_builder import build_azure_spec
from authn_restrictions.azure.validator import validate_azure_configuration
from authn_restrictions.azure.xms_mirid import XmsMirid, parse_xms_mirid

__all__ = [
    "AzureTokenClaims",
    "XmsMirid",
    "authorize_azure",
    "authorize_azure_payload",
    "build_azure_spec",
    "decode_token_payload",
    "extract_azure_claims",
    "parse_xms_mirid",
    "token_claims_from_payload",
    "validate_azure_configuration",
]
