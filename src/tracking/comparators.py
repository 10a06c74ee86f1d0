"""
Ordering policies for DetectedObject.

Each comparator is a "less" predicate: it returns True when the first
object is more critical than the second. They are meant to be used as
strict weak orderings through ``as_sort_key``.
"""
from __future__ import annotations

import math
from functools import cmp_to_key
from typing import Any, Callable

from src.tracking.detected_object import DetectedObject

LessFn = Callable[[DetectedObject, DetectedObject], bool]

THREAT_TIE_EPSILON = 0.001
MULTI_THREAT_EPSILON = 0.01
MULTI_TIME_EPSILON_S = 0.1


def by_collision_time(first: DetectedObject, second: DetectedObject) -> bool:
    first_inf = math.isinf(first.collision_time)
    second_inf = math.isinf(second.collision_time)

    # Neither will collide: the closer one is more relevant.
    if first_inf and second_inf:
        return first.distance < second.distance
    if first_inf:
        return False
    if second_inf:
        return True
    if first.collision_time == second.collision_time:
        return first.distance < second.distance
    return first.collision_time < second.collision_time


def by_threat_level(first: DetectedObject, second: DetectedObject) -> bool:
    if abs(first.threat_level - second.threat_level) < THREAT_TIE_EPSILON:
        return first.distance < second.distance
    return first.threat_level > second.threat_level


def multi_criteria(first: DetectedObject, second: DetectedObject) -> bool:
    """Threat level (higher first), then TTC (lower first), then distance (closer first)."""
    if abs(first.threat_level - second.threat_level) > MULTI_THREAT_EPSILON:
        return first.threat_level > second.threat_level

    first_ttc = first.collision_time
    second_ttc = second.collision_time
    if not math.isinf(first_ttc) and not math.isinf(second_ttc):
        if abs(first_ttc - second_ttc) > MULTI_TIME_EPSILON_S:
            return first_ttc < second_ttc

    return first.distance < second.distance


def as_sort_key(less: LessFn) -> Callable[[DetectedObject], Any]:
    """Turn a less predicate into a key usable by sorted/list.sort/heapq."""

    def _cmp(first: DetectedObject, second: DetectedObject) -> int:
        if less(first, second):
            return -1
        if less(second, first):
            return 1
        return 0

    return cmp_to_key(_cmp)
