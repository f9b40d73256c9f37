"""Telemetry for authn-restrictions.

Structure:
    system/   - Operational logger (stderr + optional system.jsonl)
    audit/    - Authorization decision audit trail (decisions.jsonl)
    models/   - Pydantic event models for JSONL logs
"""
