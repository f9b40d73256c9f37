"""Kubernetes command group for authn-restrictions CLI.

Provides validate and authorize subcommands for authn-k8s restrictions.
"""

from __future__ import annotations

__all__ = ["k8s"]

from pathlib import Path

import click
from pydantic import ValidationError

from authn_restrictions.k8s.authorizer import authorize_k8s
from authn_restrictions.k8s.claims import PodBinding
from authn_restrictions.k8s.validator import validate_k8s_configuration

from ..helpers import CliState, echo_failure, load_annotations, load_json_file
from ..styling import style_dim, style_label, style_success

_annotations_option = click.option(
    "--annotations",
    "-a",
    "annotations_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Host annotations (JSON)",
)
_service_id_option = click.option("--service-id", "-s", help="Authenticator service id")
_host_id_option = click.option(
    "--host-id",
    help="Host id (account:kind:namespace/type/value), used when no authn-k8s annotations exist",
)


@click.group()
def k8s() -> None:
    """Kubernetes resource restrictions."""
    pass


@k8s.command("validate")
@_annotations_option
@_service_id_option
@_host_id_option
@click.pass_obj
def k8s_validate(state: CliState, annotations_path: Path, service_id: str | None, host_id: str | None) -> None:
    """Validate a host's Kubernetes restrictions.

    Checks that annotations name supported resource types, a namespace is
    declared, and at most one of deployment, deployment-config and
    stateful-set is set.

    Exit codes:
        0: Restrictions are valid
        1: Restrictions are invalid
    """
    annotations = load_annotations(annotations_path)
    result = validate_k8s_configuration(annotations, service_id, host_id, state.config)
    if not result.ok:
        echo_failure(result.error)  # type: ignore[arg-type]

    identity = result.unwrap()
    click.echo(style_success("Kubernetes restrictions valid"))
    click.echo(f"  {style_label('Source')} {'annotations' if identity.from_annotations else 'host id'}")
    for resource in identity.spec:
        click.echo(f"  {style_label(resource.type)} {resource.value}")
    click.echo(f"  {style_label('Container')} {identity.container_name}")
    if identity.namespace_scoped:
        click.echo(style_dim("  (namespace scoped)"))


@k8s.command("authorize")
@_annotations_option
@_service_id_option
@_host_id_option
@click.option(
    "--pod",
    "-p",
    "pod_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Observed pod binding (JSON)",
)
@click.option("--role-id", help="Role being authenticated, for the audit log")
@click.pass_obj
def k8s_authorize(
    state: CliState,
    annotations_path: Path,
    service_id: str | None,
    host_id: str | None,
    pod_path: Path,
    role_id: str | None,
) -> None:
    """Authorize an observed pod against a host's restrictions.

    Exit codes:
        0: Accepted
        1: Rejected
    """
    annotations = load_annotations(annotations_path)
    try:
        pod = PodBinding.model_validate(load_json_file(pod_path, "pod"))
    except ValidationError as e:
        raise click.BadParameter(f"Invalid pod binding in {pod_path}: {e}") from e

    result = authorize_k8s(
        annotations,
        service_id,
        pod,
        host_id=host_id,
        config=state.config,
        role_id=role_id,
        audit=state.audit,
    )
    if not result.accepted:
        click.echo(style_dim(f"Rejected at {result.stage.value}"), err=True)
        echo_failure(result.error)  # type: ignore[arg-type]

    click.echo(style_success("Accepted"))
