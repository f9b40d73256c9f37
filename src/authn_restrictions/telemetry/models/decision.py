"""Pydantic model for authorization decision logs (decisions.jsonl).

IMPORTANT: The 'time' field is Optional[str] = None because:
- Model instances are created WITHOUT timestamps (time=None)
- ISO8601Formatter adds the timestamp during log serialization
"""

from __future__ import annotations

__all__ = ["DecisionEvent"]

from typing import Any, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


class DecisionEvent(BaseModel):
    """One authorization decision.

    Only the declared restriction types are logged, never their values.
    """

    time: Optional[str] = Field(
        None,
        description="ISO 8601 timestamp, added by formatter during serialization",
    )
    event: Literal["authorization_decision"] = "authorization_decision"
    provider: Literal["k8s", "azure"]
    decision: Literal["accept", "reject"]
    stage: str
    service_id: Optional[str] = None
    role_id: Optional[str] = None
    declared_types: list[str] = Field(default_factory=list)

    # --- rejection details ---
    failure_type: Optional[str] = None
    error_type: Optional[str] = None
    error_message: Optional[str] = None
    error_details: Optional[dict[str, Any]] = None

    eval_ms: Optional[float] = None

    model_config = ConfigDict(extra="forbid")
