"""Shared helpers for CLI commands.

Input files are JSON:
- annotations: a list of {"name": ..., "value": ...} objects, or a single
  {name: value} object
- pod binding: {"namespace": ..., "service_account": ..., ...}
- token payload: the decoded claims object of a verified token
"""

from __future__ import annotations

__all__ = [
    "CliState",
    "echo_failure",
    "load_annotations",
    "load_json_file",
]

import json
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, NoReturn

import click
from pydantic import ValidationError

from authn_restrictions.config import EngineConfig
from authn_restrictions.exceptions import RestrictionError
from authn_restrictions.resources import Annotation
from authn_restrictions.telemetry.audit.decision_logger import DecisionEventLogger

from .styling import style_dim, style_error


@dataclass
class CliState:
    """Objects shared by all commands via click's context."""

    config: EngineConfig
    audit: DecisionEventLogger | None = None


def load_json_file(path: Path, file_type: str) -> Any:
    """Read a JSON file, turning read and parse errors into click errors."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise click.BadParameter(f"Invalid JSON in {file_type} file {path}: {e}") from e
    except OSError as e:
        raise click.BadParameter(f"Could not read {file_type} file {path}: {e}") from e


def load_annotations(path: Path) -> list[Annotation]:
    """Load role annotations from a JSON file, keeping their order."""
    data = load_json_file(path, "annotations")
    if isinstance(data, dict):
        data = [{"name": name, "value": value} for name, value in data.items()]
    if not isinstance(data, list):
        raise click.BadParameter(f"Annotations file {path} must contain a list or an object")
    try:
        return [Annotation.model_validate(item) for item in data]
    except ValidationError as e:
        raise click.BadParameter(f"Invalid annotation in {path}: {e}") from e


def echo_failure(error: RestrictionError) -> NoReturn:
    """Print a policy error and exit with status 1."""
    click.echo(style_error(error.message), err=True)
    click.echo(style_dim(f"  ({error.failure_type})"), err=True)
    sys.exit(1)
