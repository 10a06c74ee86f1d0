from __future__ import annotations

import time
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Dict, Iterator


@dataclass
class StageTimer:
    """Wall-clock timing per named stage, in milliseconds."""

    stages_ms: Dict[str, float] = field(default_factory=dict)

    def mark(self, stage_name: str, stage_start_ts: float) -> float:
        elapsed = (time.perf_counter() - stage_start_ts) * 1000.0
        self.stages_ms[stage_name] = elapsed
        return elapsed

    @contextmanager
    def stage(self, stage_name: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            self.mark(stage_name, start)

    def speedup(self, baseline: str, candidate: str) -> float | None:
        base = self.stages_ms.get(baseline)
        cand = self.stages_ms.get(candidate)
        if base is None or not cand:
            return None
        return base / cand
