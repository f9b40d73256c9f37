"""Main CLI entry point for authn-restrictions.

Defines the CLI group and registers all subcommands.

Commands:
    k8s     - Kubernetes restrictions (validate, authorize)
    azure   - Azure restrictions (validate, authorize)

Subcommand help:
    authn-restrictions COMMAND -h         Show help for a specific command
"""

from __future__ import annotations

__all__ = ["cli", "main"]

import sys
from pathlib import Path

import click

from authn_restrictions import __version__
from authn_restrictions.config import EngineConfig
from authn_restrictions.exceptions import ConfigurationFileError
from authn_restrictions.telemetry.audit.decision_logger import DecisionEventLogger, create_decision_logger
from authn_restrictions.telemetry.system.system_logger import (
    configure_system_logger_file,
    get_system_logger,
    set_system_log_level,
)

from .commands.azure import azure
from .commands.k8s import k8s
from .helpers import CliState
from .styling import style_error


def _build_state(config: EngineConfig, log_level: str | None) -> CliState:
    set_system_log_level(log_level or config.logging.log_level)

    audit: DecisionEventLogger | None = None
    if config.logging.file_logging:
        configure_system_logger_file(config.logging.system_log_path)
        audit = DecisionEventLogger(
            logger=create_decision_logger(config.logging.decisions_log_path),
            system_logger=get_system_logger(),
        )
    return CliState(config=config, audit=audit)


@click.group(
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)
@click.option("--version", "-v", is_flag=True, help="Show version")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Engine configuration file (JSON)",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    help="Override the configured console log level",
)
@click.pass_context
def cli(ctx: click.Context, version: bool, config_path: Path | None, log_level: str | None) -> None:
    """authn-restrictions: Kubernetes and Azure resource restriction checks."""
    if version:
        click.echo(f"authn-restrictions {__version__}")
        sys.exit(0)

    try:
        config = EngineConfig.load_from_file(config_path) if config_path else EngineConfig()
    except ConfigurationFileError as e:
        click.echo(style_error(str(e)), err=True)
        sys.exit(1)

    ctx.obj = _build_state(config, log_level)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(k8s)
cli.add_command(azure)


def main() -> None:
    """CLI entry point."""
    cli()
