"""Pydantic event models for JSONL logs."""

from authn_restrictions.telemetry.models.decision import DecisionEvent

__all__ = ["DecisionEvent"]
