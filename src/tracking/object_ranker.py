from __future__ import annotations

import heapq
import logging
import math
from typing import Iterable, List, Optional, Tuple

from src.tracking.comparators import (
    as_sort_key,
    by_collision_time,
    by_threat_level,
    multi_criteria,
)
from src.tracking.detected_object import DetectedObject

logger = logging.getLogger(f"aeb.{__name__}")

_COLLISION_TIME_KEY = as_sort_key(by_collision_time)
_THREAT_LEVEL_KEY = as_sort_key(by_threat_level)
_MULTI_CRITERIA_KEY = as_sort_key(multi_criteria)


def _within(obj: DetectedObject, threshold_s: float) -> bool:
    return not math.isinf(obj.collision_time) and obj.collision_time <= threshold_s


class ObjectRanker:
    """
    Holds detected objects and ranks them by collision urgency.

    Sort operations reorder the stored sequence in place. Query helpers
    never sort on the caller's behalf.
    """

    def __init__(self, objects: Optional[Iterable[DetectedObject]] = None):
        self._objects: List[DetectedObject] = list(objects) if objects is not None else []

    # ---- container ----
    def add(self, obj: DetectedObject) -> None:
        self._objects.append(obj)

    def reserve(self, capacity: int) -> None:
        # No-op: Python lists grow on demand.
        logger.debug("reserve(%d) requested with %d objects stored", capacity, len(self._objects))

    def clear(self) -> None:
        self._objects.clear()

    def size(self) -> int:
        return len(self._objects)

    def is_empty(self) -> bool:
        return not self._objects

    def __len__(self) -> int:
        return len(self._objects)

    @property
    def objects(self) -> Tuple[DetectedObject, ...]:
        return tuple(self._objects)

    # ---- ranking ----
    def sort_by_collision_time(self) -> None:
        self._objects.sort(key=_COLLISION_TIME_KEY)

    def sort_by_threat_level(self) -> None:
        self._objects.sort(key=_THREAT_LEVEL_KEY)

    def sort_multi_criteria(self) -> None:
        self._objects.sort(key=_MULTI_CRITERIA_KEY)

    def partial_sort_critical_objects(self, max_objects: int) -> None:
        """
        Move the min(max_objects, size) most critical objects (by collision
        time) to the front, sorted. The remainder keeps no particular order.
        """
        if not self._objects:
            return
        count = max(0, min(max_objects, len(self._objects)))
        if count == len(self._objects):
            self.sort_by_collision_time()
            return

        indexed = list(enumerate(self._objects))
        head = heapq.nsmallest(count, indexed, key=lambda pair: _COLLISION_TIME_KEY(pair[1]))
        taken = {idx for idx, _ in head}
        tail = [obj for idx, obj in indexed if idx not in taken]
        self._objects = [obj for _, obj in head] + tail

    # ---- queries ----
    def get_critical_objects(self, max_objects: int) -> List[DetectedObject]:
        """Snapshot of the already-ranked prefix; call a sort first."""
        count = max(0, min(max_objects, len(self._objects)))
        return self._objects[:count]

    def get_objects_within_time_threshold(self, threshold_seconds: float) -> List[DetectedObject]:
        return [obj for obj in self._objects if _within(obj, threshold_seconds)]

    def find_by_id(self, object_id: int) -> Optional[DetectedObject]:
        return next((obj for obj in self._objects if obj.id == object_id), None)

    def has_critical_objects(self, threshold_seconds: float) -> bool:
        return any(_within(obj, threshold_seconds) for obj in self._objects)
