"""Parse the model's JSON answer into an EstimationResponse."""

from __future__ import annotations

import json
import re
from typing import Any, Dict, Sequence

from devtime.estimation.models import (
    COMPLEXITY_LEVELS,
    Estimate,
    EstimationResponse,
    EstimationResult,
    FailureKind,
)

_JSON_FENCE_RE = re.compile(r"```json\s*([\s\S]*?)\s*```")


def extract_json(content: str) -> str:
    """Return the body of the first ```json fence, or *content* unchanged."""
    m = _JSON_FENCE_RE.search(content)
    return m.group(1) if m else content


def normalise_complexity(value: Any) -> str:
    """Map free-form complexity text onto Low / Medium / High."""
    text = str(value or "").strip().lower()
    for level in COMPLEXITY_LEVELS:
        if text.startswith(level.lower()):
            return level
    return "Medium"


def _to_estimate(raw: Dict[str, Any]) -> Estimate:
    return Estimate(
        time_estimate=str(raw.get("timeEstimate", "")).strip() or "Unknown",
        reasoning=str(raw.get("reasoning", "")).strip(),
        complexity=normalise_complexity(raw.get("complexity")),
    )


def parse_response(content: str, skill_levels: Sequence[str], model: str) -> EstimationResult:
    """Parse *content*; every level in *skill_levels* must be present."""
    try:
        parsed = json.loads(extract_json(content))
    except ValueError as exc:
        return EstimationResult.fail(FailureKind.MALFORMED_RESPONSE, model, detail=str(exc))

    if not isinstance(parsed, dict) or not isinstance(parsed.get("estimations"), dict):
        return EstimationResult.fail(
            FailureKind.MISSING_FIELD, model, detail="Invalid response format: missing estimations"
        )

    estimations: Dict[str, Estimate] = {}
    for level in skill_levels:
        raw = parsed["estimations"].get(level)
        if not isinstance(raw, dict):
            return EstimationResult.fail(
                FailureKind.MISSING_FIELD, model, detail=f"Missing estimation for {level} level"
            )
        estimations[level] = _to_estimate(raw)

    return EstimationResult.success(EstimationResponse(estimations=estimations))
