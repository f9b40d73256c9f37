"""Decision logging for resource restriction checks.

This module logs every authorization decision (accept or reject) made by
the Kubernetes and Azure authorizers. Logs are written to
<log_dir>/decisions.jsonl when file logging is enabled.
"""

from __future__ import annotations

__all__ = [
    "DecisionEventLogger",
    "create_decision_logger",
]

import logging
from pathlib import Path
from typing import Literal

from authn_restrictions.constants import APP_NAME
from authn_restrictions.resources import IdentitySpec
from authn_restrictions.result import AuthorizationResult
from authn_restrictions.telemetry.models.decision import DecisionEvent
from authn_restrictions.utils.logging.logger_setup import setup_jsonl_logger


def create_decision_logger(log_path: Path) -> logging.Logger:
    """Create logger for decision events.

    Args:
        log_path: Path to decisions.jsonl file.

    Returns:
        Configured logger instance.
    """
    return setup_jsonl_logger(f"{APP_NAME}.audit.decisions", log_path, log_level=logging.INFO)


class DecisionEventLogger:
    """Logs authorization decisions as DecisionEvent records.

    Rejections are also reported to the system logger at WARNING so an
    operator sees them without reading the audit file.
    """

    def __init__(
        self,
        *,
        logger: logging.Logger,
        system_logger: logging.Logger,
    ) -> None:
        self._logger = logger
        self._system_logger = system_logger

    def log(
        self,
        provider: Literal["k8s", "azure"],
        result: AuthorizationResult,
        *,
        service_id: str | None = None,
        role_id: str | None = None,
        declared: IdentitySpec | None = None,
        eval_ms: float | None = None,
    ) -> DecisionEvent:
        """Log one decision.

        Args:
            provider: "k8s" or "azure".
            result: Pipeline outcome.
            service_id: Authenticator service id.
            role_id: Role being authenticated, when known.
            declared: Declared restrictions, if the pipeline got that far.
            eval_ms: Pipeline evaluation time in milliseconds.

        Returns:
            The logged event.
        """
        error = result.error
        event = DecisionEvent(
            provider=provider,
            decision=result.decision.value,
            stage=result.stage.value,
            service_id=service_id,
            role_id=role_id,
            declared_types=list(declared.types) if declared is not None else [],
            failure_type=error.failure_type if error else None,
            error_type=type(error).__name__ if error else None,
            error_message=error.message if error else None,
            error_details=dict(error.details) if error and error.details else None,
            eval_ms=round(eval_ms, 3) if eval_ms is not None else None,
        )

        self._logger.info(event.model_dump(exclude={"time"}, exclude_none=True))

        if error is not None:
            self._system_logger.warning(
                {
                    "event": "authorization_rejected",
                    "provider": provider,
                    "stage": result.stage.value,
                    "failure_type": error.failure_type,
                    "message": error.message,
                }
            )
        return event
