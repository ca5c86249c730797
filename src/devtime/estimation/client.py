"""OpenRouter estimation client (OpenAI-compatible chat completions)."""

from __future__ import annotations

import logging
from typing import Any, Optional

import openai
from openai import OpenAI

from devtime.estimation.models import (
    EstimationRequest,
    EstimationResult,
    EstimatorSettings,
    FailureKind,
)
from devtime.estimation.parser import parse_response
from devtime.estimation.prompt import SYSTEM_PROMPT, build_prompt

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "HTTP-Referer": "https://github.com",
    "X-Title": "PR Dev Time Estimator",
}


def failure_kind_for_status(status: int) -> Optional[FailureKind]:
    """Map an upstream HTTP status to a FailureKind (None if unmapped)."""
    if status == 401:
        return FailureKind.UNAUTHORIZED
    if status == 403:
        return FailureKind.FORBIDDEN
    if status == 404:
        return FailureKind.NOT_FOUND
    if status == 429:
        return FailureKind.RATE_LIMITED
    if status >= 500:
        return FailureKind.SERVER_ERROR
    return None


class OpenRouterClient:
    """Ask a chat model for per-skill-level time estimates.

    Upstream errors never escape ``estimate``; they come back as an
    ``EstimationResult`` carrying a ``FailureKind`` and a scrubbed message.
    """

    def __init__(self, settings: EstimatorSettings, *, client: Any = None) -> None:
        self.settings = settings
        self.client = client or OpenAI(
            api_key=settings.api_key,
            base_url=settings.base_url,
            default_headers=_DEFAULT_HEADERS,
        )
        logger.debug("Initialized OpenRouterClient with %r", settings)

    @property
    def model(self) -> str:
        return self.settings.model

    def estimate(self, request: EstimationRequest) -> EstimationResult:
        """Request an estimate for *request*. Never raises for upstream failures."""
        prompt = request.prompt or build_prompt(request.pr_changes, request.skill_levels)

        try:
            completion = self.client.chat.completions.create(
                model=self.model,
                messages=[
                    {"role": "system", "content": SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=self.settings.temperature,
                max_tokens=self.settings.max_tokens,
            )
        except openai.APIStatusError as exc:
            kind = failure_kind_for_status(exc.status_code)
            logger.debug("OpenRouter returned %s: %s", exc.status_code, exc)
            if kind is None:
                kind = FailureKind.REQUEST_REJECTED
            return EstimationResult.fail(kind, self.model, detail=str(exc))
        except openai.APIConnectionError as exc:
            logger.debug("OpenRouter connection failed: %s", exc)
            return EstimationResult.fail(FailureKind.NETWORK_ERROR, self.model, detail=str(exc))

        content = None
        if completion.choices:
            content = completion.choices[0].message.content
        if not content:
            return EstimationResult.fail(FailureKind.EMPTY_RESPONSE, self.model)

        logger.debug("Received %d characters from OpenRouter", len(content))
        result = parse_response(content, request.skill_levels, self.model)
        if not result.ok:
            assert result.failure is not None
            logger.debug("Unparseable response (%s): %s", result.failure.detail, content)
        return result
