"""Azure command group for authn-restrictions CLI.

Provides validate and authorize subcommands for authn-azure restrictions.
"""

from __future__ import annotations

__all__ = ["azure"]

from pathlib import Path

import click

from authn_restrictions.azure.authorizer import authorize_azure, authorize_azure_payload
from authn_restrictions.azure.validator import validate_azure_configuration

from ..helpers import CliState, echo_failure, load_annotations, load_json_file
from ..styling import style_dim, style_label, style_success

_annotations_option = click.option(
    "--annotations",
    "-a",
    "annotations_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Role annotations (JSON)",
)
_service_id_option = click.option("--service-id", "-s", help="Authenticator service id")


@click.group()
def azure() -> None:
    """Azure resource restrictions."""
    pass


@azure.command("validate")
@_annotations_option
@_service_id_option
def azure_validate(annotations_path: Path, service_id: str | None) -> None:
    """Validate a role's Azure restrictions.

    Checks that annotations name supported constraints, subscription-id and
    resource-group are declared, and at most one identity kind is set.

    Exit codes:
        0: Restrictions are valid
        1: Restrictions are invalid
    """
    result = validate_azure_configuration(load_annotations(annotations_path), service_id)
    if not result.ok:
        echo_failure(result.error)  # type: ignore[arg-type]

    click.echo(style_success("Azure restrictions valid"))
    for resource in result.unwrap():
        click.echo(f"  {style_label(resource.type)} {resource.value}")


@azure.command("authorize")
@_annotations_option
@_service_id_option
@click.option("--xms-mirid", help="Token xms_mirid claim")
@click.option("--oid", help="Token oid claim")
@click.option(
    "--token-payload",
    "payload_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Verified token payload (JSON); replaces --xms-mirid/--oid",
)
@click.option("--role-id", help="Role being authenticated, for the audit log")
@click.pass_obj
def azure_authorize(
    state: CliState,
    annotations_path: Path,
    service_id: str | None,
    xms_mirid: str | None,
    oid: str | None,
    payload_path: Path | None,
    role_id: str | None,
) -> None:
    """Authorize an Azure token's claims against a role's restrictions.

    Exit codes:
        0: Accepted
        1: Rejected
    """
    if payload_path is not None and (xms_mirid or oid):
        raise click.UsageError("--token-payload cannot be combined with --xms-mirid or --oid")
    if payload_path is None and not xms_mirid:
        raise click.UsageError("Either --xms-mirid or --token-payload is required")

    annotations = load_annotations(annotations_path)
    if payload_path is not None:
        payload = load_json_file(payload_path, "token payload")
        if not isinstance(payload, dict):
            raise click.BadParameter(f"Token payload file {payload_path} must contain an object")
        result = authorize_azure_payload(annotations, service_id, payload, role_id=role_id, audit=state.audit)
    else:
        result = authorize_azure(annotations, service_id, xms_mirid, oid, role_id=role_id, audit=state.audit)  # type: ignore[arg-type]

    if not result.accepted:
        click.echo(style_dim(f"Rejected at {result.stage.value}"), err=True)
        echo_failure(result.error)  # type: ignore[arg-type]

    click.echo(style_success("Accepted"))
