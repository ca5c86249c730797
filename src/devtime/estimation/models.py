"""Estimation data models and the success/failure result type."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from devtime.config.schema import DEFAULT_MODEL, OPENROUTER_BASE_URL

COMPLEXITY_LEVELS = ("Low", "Medium", "High")


class FailureKind(str, Enum):
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    NETWORK_ERROR = "network_error"
    EMPTY_RESPONSE = "empty_response"
    MALFORMED_RESPONSE = "malformed_response"
    MISSING_FIELD = "missing_field"
    REQUEST_REJECTED = "request_rejected"


def failure_message(kind: FailureKind, model: str) -> str:
    """Fixed user-facing text for each failure kind."""
    return {
        FailureKind.UNAUTHORIZED: "Invalid API key. Please check your OpenRouter API key.",
        FailureKind.FORBIDDEN: "Access forbidden. Please verify your OpenRouter API key permissions.",
        FailureKind.NOT_FOUND: f"Model '{model}' not found. Please check the model name.",
        FailureKind.RATE_LIMITED: "Rate limit exceeded. Please try again later.",
        FailureKind.SERVER_ERROR: "OpenRouter service unavailable. Please try again later.",
        FailureKind.NETWORK_ERROR: (
            "Network error: Unable to connect to OpenRouter API. "
            "Please check your internet connection."
        ),
        FailureKind.EMPTY_RESPONSE: "No response content from OpenRouter.",
        FailureKind.MALFORMED_RESPONSE: "Failed to parse OpenRouter response: invalid JSON.",
        FailureKind.MISSING_FIELD: "Failed to parse OpenRouter response: missing estimation fields.",
        FailureKind.REQUEST_REJECTED: "OpenRouter rejected the request. Please check the model and parameters.",
    }[kind]


class EstimationError(Exception):
    """Raised by ``EstimationResult.unwrap`` when the estimate failed."""

    def __init__(self, failure: "EstimationFailure") -> None:
        super().__init__(failure.message)
        self.failure = failure


@dataclass(frozen=True)
class EstimatorSettings:
    """Explicit client configuration; built once and passed to the client."""

    api_key: str
    model: str = DEFAULT_MODEL
    base_url: str = OPENROUTER_BASE_URL
    temperature: float = 0.1
    max_tokens: int = 2000

    def __repr__(self) -> str:
        return f"EstimatorSettings(model={self.model!r}, base_url={self.base_url!r})"


@dataclass(frozen=True)
class Estimate:
    time_estimate: str
    reasoning: str
    complexity: str = "Medium"

    def to_dict(self) -> Dict[str, str]:
        return {
            "timeEstimate": self.time_estimate,
            "reasoning": self.reasoning,
            "complexity": self.complexity,
        }


@dataclass
class EstimationRequest:
    pr_changes: str
    skill_levels: List[str]
    prompt: Optional[str] = None  # prebuilt prompt; built from pr_changes when None


@dataclass
class EstimationResponse:
    estimations: Dict[str, Estimate] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {level: est.to_dict() for level, est in self.estimations.items()}


@dataclass(frozen=True)
class EstimationFailure:
    kind: FailureKind
    message: str  # scrubbed, safe to show the user
    detail: str = ""  # upstream diagnostics, for logs only


@dataclass(frozen=True)
class EstimationResult:
    """Either a response or a failure, never both."""

    response: Optional[EstimationResponse] = None
    failure: Optional[EstimationFailure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, response: EstimationResponse) -> "EstimationResult":
        return cls(response=response)

    @classmethod
    def fail(cls, kind: FailureKind, model: str, detail: str = "") -> "EstimationResult":
        return cls(failure=EstimationFailure(kind, failure_message(kind, model), detail))

    def unwrap(self) -> EstimationResponse:
        if self.failure is not None:
            raise EstimationError(self.failure)
        assert self.response is not None
        return self.response
