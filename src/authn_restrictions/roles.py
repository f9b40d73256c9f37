"""Role lookup seam.

The role store (host records and their annotations) is an external
collaborator. This module defines the interface the engine expects from it
and the role id convention used to query it.

Implementations satisfy RoleStore structurally, without inheriting from it:

    class DictRoleStore:
        def __init__(self, roles):
            self._roles = roles

        def annotations_for(self, role_id):
            return self._roles.get(role_id)
"""

from __future__ import annotations

__all__ = [
    "RoleStore",
    "fetch_role_annotations",
    "role_id_from_username",
]

from collections.abc import Sequence
from typing import Protocol, runtime_checkable

from authn_restrictions.exceptions import RoleNotFound
from authn_restrictions.resources import Annotation, AnnotationInput, coerce_annotations

_HOST_LOGIN_PREFIX = "host/"


@runtime_checkable
class RoleStore(Protocol):
    """Read-only access to role annotations."""

    def annotations_for(self, role_id: str) -> Sequence[AnnotationInput] | None:
        """Return the role's annotations in stored order, or None if the role does not exist."""
        ...


def role_id_from_username(account: str, username: str) -> str:
    """Build a fully qualified role id from a login name.

    "host/<id>" logins map to "<account>:host:<id>"; any other login maps to
    "<account>:user:<username>".
    """
    if username.startswith(_HOST_LOGIN_PREFIX):
        return f"{account}:host:{username[len(_HOST_LOGIN_PREFIX):]}"
    return f"{account}:user:{username}"


def fetch_role_annotations(store: RoleStore, account: str, username: str) -> tuple[Annotation, ...]:
    """Fetch a role's annotations.

    Raises:
        RoleNotFound: If the store has no record for the derived role id.
    """
    role_id = role_id_from_username(account, username)
    annotations = store.annotations_for(role_id)
    if annotations is None:
        raise RoleNotFound(role_id)
    return coerce_annotations(annotations)
