"""Estimation adapter — prompt, OpenRouter client, response parsing."""

from devtime.estimation.client import OpenRouterClient
from devtime.estimation.models import (
    Estimate,
    EstimationError,
    EstimationFailure,
    EstimationRequest,
    EstimationResponse,
    EstimationResult,
    EstimatorSettings,
    FailureKind,
)
from devtime.estimation.parser import parse_response
from devtime.estimation.prompt import build_prompt

__all__ = [
    "Estimate",
    "EstimationError",
    "EstimationFailure",
    "EstimationRequest",
    "EstimationResponse",
    "EstimationResult",
    "EstimatorSettings",
    "FailureKind",
    "OpenRouterClient",
    "build_prompt",
    "parse_response",
]
