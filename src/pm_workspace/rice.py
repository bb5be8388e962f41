from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Union

from .models import DemandPriority, RiceParamsEntity
from .results import RiceValidationError
from .schemas import RiceParams
from .utils import round_half_up

HIGH_THRESHOLD = 7
MEDIUM_THRESHOLD = 3

RiceInput = Union[RiceParams, RiceParamsEntity, Mapping[str, float]]


@dataclass(frozen=True)
class RiceResult:
    score: float
    priority: DemandPriority


def _as_mapping(params: RiceInput) -> Mapping[str, float]:
    if isinstance(params, RiceParams):
        return params.model_dump()
    return params


# PUBLIC_INTERFACE
def priority_for(score: float) -> DemandPriority:
    """Map a RICE score to a priority bucket; both thresholds are inclusive."""
    if score >= HIGH_THRESHOLD:
        return DemandPriority.HIGH
    if score >= MEDIUM_THRESHOLD:
        return DemandPriority.MEDIUM
    return DemandPriority.LOW


# PUBLIC_INTERFACE
def calculate_rice(params: RiceInput) -> RiceResult:
    """
    Compute (reach * impact * confidence%) / effort rounded to one decimal,
    and the priority derived from the rounded score.

    Non-positive effort is scored as effort 1 instead of being rejected.
    """
    p = _as_mapping(params)
    effort = p["effort"]
    safe_effort = 1 if effort <= 0 else effort
    raw = (p["reach"] * p["impact"] * (p["confidence"] / 100)) / safe_effort
    score = round_half_up(raw, 1)
    return RiceResult(score=score, priority=priority_for(score))


# PUBLIC_INTERFACE
def validate_rice_params(params: RiceInput) -> None:
    """
    Range checks applied only when strict validation is enabled:
    reach > 0, 1 <= impact <= 5, 0 <= confidence <= 100, effort > 0.
    """
    p = _as_mapping(params)
    problems = []
    if not p["reach"] > 0:
        problems.append("reach must be positive")
    if not 1 <= p["impact"] <= 5 or p["impact"] != int(p["impact"]):
        problems.append("impact must be an integer between 1 and 5")
    if not 0 <= p["confidence"] <= 100:
        problems.append("confidence must be between 0 and 100")
    if not p["effort"] > 0:
        problems.append("effort must be positive")
    if problems:
        raise RiceValidationError("; ".join(problems))
