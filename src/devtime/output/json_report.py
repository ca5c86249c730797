"""JSON reporter for CI pipelines and scripting."""

from __future__ import annotations

import json
from typing import Any, Dict, Optional, Sequence

from devtime.diff.models import FilterResult
from devtime.estimation.models import EstimationResult


def filter_to_dict(result: FilterResult, *, include_diff: bool = True) -> Dict[str, Any]:
    data = result.to_dict()
    if not include_diff:
        data.pop("filteredDiff")
    return data


def to_dict(
    filter_result: FilterResult,
    estimation: Optional[EstimationResult] = None,
    skill_levels: Sequence[str] = (),
) -> Dict[str, Any]:
    """Convert a run to a JSON-serialisable dict (the diff itself is omitted)."""
    data: Dict[str, Any] = {
        "version": "1.0",
        "skillLevels": list(skill_levels),
        **filter_to_dict(filter_result, include_diff=False),
    }
    if estimation is not None:
        if estimation.ok:
            assert estimation.response is not None
            data["estimations"] = estimation.response.to_dict()
        else:
            assert estimation.failure is not None
            data["error"] = {
                "kind": estimation.failure.kind.value,
                "message": estimation.failure.message,
            }
    return data


def render(
    filter_result: FilterResult,
    estimation: Optional[EstimationResult] = None,
    skill_levels: Sequence[str] = (),
) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(filter_result, estimation, skill_levels), indent=2)


def render_filter(result: FilterResult) -> str:
    return json.dumps(filter_to_dict(result), indent=2)
