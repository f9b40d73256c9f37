"""Command-line interface for authn-restrictions.

Provides commands for validating role restrictions and dry-running
authorization decisions from JSON inputs.
"""

from .main import cli, main

__all__ = ["cli", "main"]
