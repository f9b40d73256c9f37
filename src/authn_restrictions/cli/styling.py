"""Consistent CLI output styling.

- Cyan bold for labels
- Green for success messages (with checkmark)
- Red for error messages (with cross)
- Dim for secondary details
"""

from __future__ import annotations

__all__ = [
    "style_dim",
    "style_error",
    "style_label",
    "style_success",
]

import click


def style_label(label: str) -> str:
    """Style a label with cyan bold and a colon suffix.

    Example:
        >>> click.echo(style_label("Namespace") + " apps")
        Namespace: apps
    """
    return click.style(f"{label}:", fg="cyan", bold=True)


def style_success(message: str) -> str:
    """Style a success message with checkmark.

    Example:
        >>> click.echo(style_success("Configuration valid"))
        ✓ Configuration valid
    """
    return click.style(f"✓ {message}", fg="green")


def style_error(message: str) -> str:
    """Style an error message with cross mark.

    Example:
        >>> click.echo(style_error("File not found"), err=True)
        ✗ File not found
    """
    return click.style(f"✗ {message}", fg="red")


def style_dim(message: str) -> str:
    return click.style(message, dim=True)
