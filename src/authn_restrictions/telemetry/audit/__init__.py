"""Authorization decision audit logging."""

from authn_restrictions.telemetry.audit.decision_logger import (
    DecisionEventLogger,
    create_decision_logger,
)

__all__ = [
    "DecisionEventLogger",
    "create_decision_logger",
]
