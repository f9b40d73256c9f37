"""Shared utilities for authn-restrictions."""
