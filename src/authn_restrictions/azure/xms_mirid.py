"""Parsing of the Azure AD "xms_mirid" token claim.

xms_mirid is the Azure resource id of the identity a token was issued to:

    /subscriptions/<id>/resourcegroups/<group>/providers/<namespace>/<type>/<name>

For a user-assigned managed identity the provider section is
"Microsoft.ManagedIdentity/userAssignedIdentities/<identity-name>"; for a
system-assigned identity it is the hosting resource, e.g.
"Microsoft.Compute/virtualMachines/<vm-name>".

Section keys are matched case-insensitively since Azure is inconsistent
about "resourcegroups" vs "resourceGroups".
"""

from __future__ import annotations

__all__ = [
    "XmsMirid",
    "parse_xms_mirid",
]

from pydantic import BaseModel, ConfigDict

from authn_restrictions.constants import (
    ANNOTATION_SEPARATOR,
    MANAGED_IDENTITY_PROVIDER,
    XMS_MIRID_PROVIDER_FIELDS,
)
from authn_restrictions.exceptions import MissingProviderFieldsInXmsMirid, XmsMiridParseError
from authn_restrictions.result import Result

_SUBSCRIPTIONS = "subscriptions"
_RESOURCE_GROUPS = "resourcegroups"
_PROVIDERS = "providers"


class XmsMirid(BaseModel):
    """A parsed xms_mirid claim.

    Attributes:
        subscription_id: Subscription the identity belongs to.
        resource_group: Resource group the identity belongs to.
        providers: Provider path segments, namespace first, name last.
    """

    subscription_id: str
    resource_group: str
    providers: tuple[str, ...]

    model_config = ConfigDict(frozen=True)

    @property
    def provider_namespace(self) -> str:
        return self.providers[0]

    @property
    def resource_name(self) -> str:
        return self.providers[-1]

    @property
    def is_user_assigned_identity(self) -> bool:
        """True if any provider segment is the managed identity namespace."""
        marker = MANAGED_IDENTITY_PROVIDER.casefold()
        return any(segment.casefold() == marker for segment in self.providers)


def parse_xms_mirid(raw: str) -> Result[XmsMirid]:
    """Parse an xms_mirid claim.

    Returns:
        The parsed claim, or:
        - XmsMiridParseError if the subscriptions or resourcegroups section
          is missing or has no value, or there is no providers section
        - MissingProviderFieldsInXmsMirid if the providers section is not
          exactly namespace/type/name (an empty section included)
    """
    segments = [s for s in raw.strip().split(ANNOTATION_SEPARATOR) if s]

    sections: dict[str, str] = {}
    providers: list[str] | None = None
    i = 0
    while i < len(segments):
        key = segments[i].casefold()
        if key == _PROVIDERS:
            providers = segments[i + 1 :]
            break
        if i + 1 < len(segments):
            sections.setdefault(key, segments[i + 1])
        i += 2

    for required in (_SUBSCRIPTIONS, _RESOURCE_GROUPS):
        if required not in sections:
            return Result.failure(XmsMiridParseError(raw, f"missing '{required}' section"))
    if providers is None:
        return Result.failure(XmsMiridParseError(raw, f"missing '{_PROVIDERS}' section"))

    if len(providers) != XMS_MIRID_PROVIDER_FIELDS:
        return Result.failure(MissingProviderFieldsInXmsMirid(raw))

    return Result.success(
        XmsMirid(
            subscription_id=sections[_SUBSCRIPTIONS],
            resource_group=sections[_RESOURCE_GROUPS],
            providers=tuple(providers),
        )
    )
