from __future__ import annotations

import math
from dataclasses import dataclass, field

# Below this closing speed (m/s) an object is treated as stationary.
MIN_APPROACH_SPEED_MPS = 0.1
THREAT_HORIZON_S = 10.0
IMMINENT_TTC_S = 1.0
THREAT_RANGE_M = 100.0


def compute_collision_time(distance: float, relative_velocity: float) -> float:
    """
    TTC = distance / -relative_velocity
    relative_velocity must be < -0.1 m/s (approaching), otherwise +inf.
    """
    if relative_velocity < -MIN_APPROACH_SPEED_MPS:
        return distance / -relative_velocity
    return math.inf


def compute_threat_level(distance: float, collision_time: float) -> float:
    if collision_time > THREAT_HORIZON_S:
        return 0.0
    if collision_time < IMMINENT_TTC_S:
        return 1.0

    distance_factor = max(0.0, 1.0 - distance / THREAT_RANGE_M)
    time_factor = max(0.0, 1.0 - collision_time / THREAT_HORIZON_S)
    return (distance_factor + time_factor) / 2.0


@dataclass(frozen=True, eq=False)
class DetectedObject:
    """
    Object reported by the AEB perception front-end.

    collision_time and threat_level are derived once at construction.
    Equality is by id only; ordering (<) is by collision time.
    """

    id: int = 0
    distance: float = 0.0  # meters
    relative_velocity: float = 0.0  # m/s, negative = approaching

    collision_time: float = field(init=False)
    threat_level: float = field(init=False)

    def __post_init__(self) -> None:
        ttc = compute_collision_time(self.distance, self.relative_velocity)
        object.__setattr__(self, "collision_time", ttc)
        object.__setattr__(self, "threat_level", compute_threat_level(self.distance, ttc))

    @property
    def is_approaching(self) -> bool:
        return not math.isinf(self.collision_time)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DetectedObject):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    def __lt__(self, other: DetectedObject) -> bool:
        if not isinstance(other, DetectedObject):
            return NotImplemented
        return self.collision_time < other.collision_time

    def as_dict(self) -> dict:
        return {
            "id": self.id,
            "distance_m": self.distance,
            "relative_velocity_mps": self.relative_velocity,
            "ttc_s": None if math.isinf(self.collision_time) else round(self.collision_time, 3),
            "threat_level": round(self.threat_level, 3),
        }
