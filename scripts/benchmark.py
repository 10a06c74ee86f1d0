#!/usr/bin/env python3
"""Compare full sort vs partial sort on a large random object set."""
import argparse

import numpy as np
from tqdm import tqdm

from src.tracking.detected_object import DetectedObject
from src.tracking.object_ranker import ObjectRanker
from src.utils.config import get, load_config
from src.utils.timing import StageTimer


def random_objects(n, distance_range, velocity_range, seed=None):
    rng = np.random.default_rng(seed)
    distances = rng.uniform(*distance_range, size=n)
    velocities = rng.uniform(*velocity_range, size=n)
    return [
        DetectedObject(i, float(d), float(v))
        for i, (d, v) in enumerate(tqdm(zip(distances, velocities), total=n, desc="Generating"))
    ]


def main():
    parser = argparse.ArgumentParser(description="Full vs partial sort benchmark")
    parser.add_argument("--config", default="configs/system.yaml", help="Path to YAML config")
    parser.add_argument("--num-objects", type=int, default=None)
    args = parser.parse_args()

    cfg = load_config(args.config)
    n = args.num_objects or int(get(cfg, "benchmark.num_objects", 10000))
    top_k = int(get(cfg, "benchmark.top_k", 5))
    objects = random_objects(
        n,
        tuple(get(cfg, "benchmark.distance_range_m", [5.0, 200.0])),
        tuple(get(cfg, "benchmark.velocity_range_mps", [-25.0, 10.0])),
        seed=get(cfg, "benchmark.seed"),
    )

    timer = StageTimer()
    full = ObjectRanker(objects)
    with timer.stage("full_sort"):
        full.sort_by_collision_time()

    partial = ObjectRanker(objects)
    with timer.stage("partial_sort"):
        partial.partial_sort_critical_objects(top_k)

    same = [o.id for o in full.get_critical_objects(top_k)] == [o.id for o in partial.get_critical_objects(top_k)]
    speedup = timer.speedup("full_sort", "partial_sort")

    print(f"\nPerformance results for {n} objects (top {top_k}):")
    print(f"  full sort:    {timer.stages_ms['full_sort']:.2f} ms")
    print(f"  partial sort: {timer.stages_ms['partial_sort']:.2f} ms")
    print(f"  speedup:      {speedup:.2f}x" if speedup else "  speedup:      (n/a)")
    print(f"  same top-{top_k}: {same}")


if __name__ == "__main__":
    main()
