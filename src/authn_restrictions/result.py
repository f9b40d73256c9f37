"""Result values passed between authorization pipeline stages.

Every stage returns a Result instead of raising, so the authorizers can
compose stages and stop at the first error while still handing the caller
a typed error value.

Pipeline (per request, both providers):
    BUILD_SPEC -> VALIDATE_CONFIG -> EXTRACT_CLAIMS -> MATCH -> ACCEPT | REJECT
"""

from __future__ import annotations

__all__ = [
    "AuthorizationResult",
    "Decision",
    "Result",
    "Stage",
]

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

from authn_restrictions.exceptions import RestrictionError

T = TypeVar("T")


class Decision(str, Enum):
    """Terminal outcome of an authorization attempt.

    Inherits from str for easy serialization and comparison.
    """

    ACCEPT = "accept"
    REJECT = "reject"


class Stage(str, Enum):
    """Pipeline stage, in execution order."""

    BUILD_SPEC = "build_spec"
    VALIDATE_CONFIG = "validate_config"
    EXTRACT_CLAIMS = "extract_claims"
    MATCH = "match"


@dataclass(frozen=True, slots=True)
class Result(Generic[T]):
    """Either a value or the error that prevented producing it.

    Attributes:
        value: Stage output; None when the stage failed.
        error: Typed error; None when the stage succeeded.
    """

    value: T | None = None
    error: RestrictionError | None = None

    @classmethod
    def success(cls, value: T | None = None) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: RestrictionError) -> "Result[T]":
        return cls(error=error)

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the carried error if the stage failed.

        Raises:
            RestrictionError: The error this result carries.
        """
        if self.error is not None:
            raise self.error
        return self.value  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class AuthorizationResult:
    """Outcome of a full authorization pipeline run.

    Attributes:
        decision: ACCEPT or REJECT.
        stage: Last stage reached (the failing one on REJECT).
        error: Reason for rejection; None on ACCEPT.
    """

    decision: Decision
    stage: Stage
    error: RestrictionError | None = None

    @classmethod
    def accept(cls) -> "AuthorizationResult":
        return cls(decision=Decision.ACCEPT, stage=Stage.MATCH)

    @classmethod
    def reject(cls, stage: Stage, error: RestrictionError) -> "AuthorizationResult":
        return cls(decision=Decision.REJECT, stage=stage, error=error)

    @property
    def accepted(self) -> bool:
        return self.decision is Decision.ACCEPT

    def raise_for_decision(self) -> None:
        """Raise the rejection reason, if any."""
        if self.error is not None:
            raise self.error

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"decision": self.decision.value, "stage": self.stage.value}
        if self.error is not None:
            data["error"] = self.error.to_dict()
        return data
