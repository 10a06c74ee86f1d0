from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

from src.tracking.object_ranker import ObjectRanker


class BrakeState(str, Enum):
    NORMAL = "NORMAL"
    PRECHARGE = "PRECHARGE"  # close object, pre-charge brakes
    EMERGENCY_BRAKE = "EMERGENCY_BRAKE"  # collision imminent


@dataclass
class AEBDecision:
    state: BrakeState
    message: str
    critical_count: int = 0
    warning_count: int = 0
    details: Dict[str, Any] = field(default_factory=dict)


def evaluate(ranker: ObjectRanker, critical_s: float, warning_s: float) -> AEBDecision:
    """Map the tracked objects to a braking decision using two TTC thresholds."""
    critical = ranker.get_objects_within_time_threshold(critical_s)
    warning = ranker.get_objects_within_time_threshold(warning_s)

    if critical:
        state = BrakeState.EMERGENCY_BRAKE
        message = "CRITICAL: Collision imminent! Applying emergency braking"
    elif warning:
        state = BrakeState.PRECHARGE
        message = "WARNING: Close object detected. Pre-charging brakes"
    else:
        state = BrakeState.NORMAL
        message = "All clear. Normal driving conditions"

    details = {
        "critical_s": critical_s,
        "warning_s": warning_s,
        "critical_ids": [obj.id for obj in critical],
        "warning_ids": [obj.id for obj in warning],
    }
    return AEBDecision(
        state=state,
        message=message,
        critical_count=len(critical),
        warning_count=len(warning),
        details=details,
    )
