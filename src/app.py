from __future__ import annotations

import argparse
import json
import math
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List

from rich.console import Console
from rich.table import Table

from src.navigation.instructions import Instruction, InstructionParseError, parse_instructions
from src.navigation.robot import Direction, Position, Robot
from src.safety.aeb import BrakeState, evaluate
from src.tracking.detected_object import DetectedObject
from src.tracking.object_ranker import ObjectRanker
from src.utils.config import get, load_config
from src.utils.logger import setup_logger
from src.utils.timing import StageTimer

STATE_STYLES = {
    BrakeState.NORMAL: "bold green",
    BrakeState.PRECHARGE: "bold yellow",
    BrakeState.EMERGENCY_BRAKE: "bold red",
}


def make_run_dir(base_dir: str | Path) -> Path:
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    run_dir = Path(base_dir) / f"run_{ts}"
    run_dir.mkdir(parents=True, exist_ok=True)
    return run_dir


def objects_table(objects: Iterable[DetectedObject], title: str = "") -> Table:
    table = Table(title=title or None)
    table.add_column("ID", justify="right")
    table.add_column("Dist (m)", justify="right")
    table.add_column("RelVel (m/s)", justify="right")
    table.add_column("TTC (s)", justify="right")
    table.add_column("Threat", justify="right")
    for obj in objects:
        ttc = "INF" if math.isinf(obj.collision_time) else f"{obj.collision_time:.2f}"
        table.add_row(
            str(obj.id),
            f"{obj.distance:.2f}",
            f"{obj.relative_velocity:.2f}",
            ttc,
            f"{obj.threat_level:.2f}",
        )
    return table


def build_ranker(rows: List[List[float]]) -> ObjectRanker:
    ranker = ObjectRanker()
    ranker.reserve(len(rows))
    for obj_id, distance, velocity in rows:
        ranker.add(DetectedObject(int(obj_id), float(distance), float(velocity)))
    return ranker


def run_aeb(cfg: Dict[str, Any], console: Console, logger) -> Dict[str, Any]:
    rows = get(cfg, "scenario.objects", []) or []
    max_objects = int(get(cfg, "tracking.max_critical_objects"))
    critical_s = float(get(cfg, "tracking.critical_time_s"))
    warning_s = float(get(cfg, "tracking.warning_time_s"))

    ranker = build_ranker(rows)
    logger.info("Tracking %d objects", ranker.size())
    console.print(objects_table(ranker.objects, "All Detected Objects"))

    timer = StageTimer()
    with timer.stage("partial_sort"):
        ranker.partial_sort_critical_objects(max_objects)
    critical = ranker.get_critical_objects(max_objects)
    console.print(objects_table(critical, f"Top {len(critical)} Critical Objects (partial sort)"))

    with timer.stage("multi_criteria_sort"):
        ranker.sort_multi_criteria()
    console.print(objects_table(ranker.objects, "Multi-criteria ranking"))

    decision = evaluate(ranker, critical_s=critical_s, warning_s=warning_s)
    console.print(f"[{STATE_STYLES[decision.state]}]{decision.message}[/]")
    console.print(f"Objects within {critical_s:g}s collision threshold: {decision.critical_count}")
    logger.info("AEB decision: %s (critical=%d warning=%d)", decision.state.value, decision.critical_count, decision.warning_count)
    for stage, ms in timer.stages_ms.items():
        logger.info("%s took %.3f ms", stage, ms)

    return {
        "objects": [obj.as_dict() for obj in ranker.objects],
        "critical_ids": [obj.id for obj in critical],
        "decision": {"state": decision.state.value, "message": decision.message, "details": decision.details},
        "stages_ms": timer.stages_ms,
    }


def analysis_table(robot: Robot, instructions: List[Instruction]) -> Table:
    start = robot.start_position
    end = robot.position
    dx = abs(end.x - start.x)
    dy = abs(end.y - start.y)

    table = Table(title="Robot Navigation Analysis", show_header=False)
    table.add_column("Metric")
    table.add_column("Value")
    table.add_row("Instructions", ", ".join(str(i) for i in instructions) or "(none)")
    table.add_row("Start Position", str(start))
    table.add_row("Final Position", str(end))
    table.add_row("Final Direction", robot.direction_name)
    table.add_row("Actual Steps", str(robot.actual_steps))
    table.add_row(
        "Manhattan Distance",
        f"|{end.x}-{start.x}| + |{end.y}-{start.y}| = {dx} + {dy} = {robot.manhattan_distance}",
    )
    table.add_row("Efficiency", f"{robot.efficiency_percent:.1f}%")
    table.add_row("Path", " -> ".join(str(p) for p in robot.path_history))
    return table


def run_robot(cfg: Dict[str, Any], text: str, console: Console, logger) -> Dict[str, Any]:
    instructions = parse_instructions(text)
    start = Position(int(get(cfg, "navigation.start.x")), int(get(cfg, "navigation.start.y")))
    direction = Direction[str(get(cfg, "navigation.direction")).upper()]
    robot = Robot(start=start, direction=direction, grid_size=int(get(cfg, "navigation.grid_size")))
    robot.execute_all(instructions)
    logger.info("Robot executed %d instructions, final position %s", len(instructions), robot.position)
    console.print(analysis_table(robot, instructions))
    return {
        "instructions": [str(i) for i in instructions],
        "final_position": [robot.position.x, robot.position.y],
        "final_direction": robot.direction.name,
        "actual_steps": robot.actual_steps,
        "manhattan_distance": robot.manhattan_distance,
        "efficiency_percent": robot.efficiency_percent,
    }


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="AEB object ranking and grid navigator demo")
    parser.add_argument("--config", default="configs/system.yaml", help="Path to YAML config")
    parser.add_argument("--mode", choices=["aeb", "robot", "all"], default="all")
    parser.add_argument("--instructions", default=None, help='Robot instructions, e.g. "R2,L3,L1"')
    args = parser.parse_args(argv)

    cfg = load_config(args.config)
    save_metrics = bool(get(cfg, "runtime.save_metrics", True))
    run_dir = make_run_dir(get(cfg, "runtime.output_dir", "results")) if save_metrics else None
    logger = setup_logger(log_dir=run_dir, level=get(cfg, "runtime.log_level", "INFO"))

    console = Console()
    console.print("[bold]AEB Object Ranking[/bold]" + (f" run dir: {run_dir}" if run_dir else ""))

    metrics: Dict[str, Any] = {"project": cfg.get("project", {})}
    if args.mode in ("aeb", "all"):
        metrics["aeb"] = run_aeb(cfg, console, logger)
    if args.mode in ("robot", "all"):
        text = args.instructions if args.instructions is not None else str(get(cfg, "navigation.instructions", ""))
        try:
            metrics["robot"] = run_robot(cfg, text, console, logger)
        except InstructionParseError as exc:
            logger.error("Bad instructions: %s", exc)
            return 2

    if run_dir is not None:
        metrics_path = run_dir / "metrics.json"
        metrics_path.write_text(json.dumps(metrics, indent=2), encoding="utf-8")
        logger.info("Saved metrics: %s", metrics_path)

    logger.info("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
