from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterable, List, Tuple

from src.navigation.instructions import Instruction, Turn

GRID_SIZE = 10
START_X = 5
START_Y = 5


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def turned(self, turn: Turn) -> "Direction":
        offset = 1 if turn is Turn.RIGHT else 3
        return Direction((self.value + offset) % 4)


DIRECTION_NAMES = {
    Direction.NORTH: "North ↑",
    Direction.EAST: "East →",
    Direction.SOUTH: "South ↓",
    Direction.WEST: "West ←",
}

# (dx, dy) per heading; y grows southwards.
_DELTAS = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}


@dataclass(frozen=True)
class Position:
    x: int = START_X
    y: int = START_Y

    def __str__(self) -> str:
        return f"({self.x},{self.y})"

    @staticmethod
    def manhattan(start: Position, end: Position) -> int:
        return abs(end.x - start.x) + abs(end.y - start.y)


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


class Robot:
    """Walks a square grid one cell at a time, clamping at the edges."""

    def __init__(
        self,
        start: Position | None = None,
        direction: Direction = Direction.NORTH,
        grid_size: int = GRID_SIZE,
    ):
        if grid_size < 1:
            raise ValueError(f"grid_size must be >= 1, got {grid_size}")
        self.grid_size = grid_size
        self.position = start if start is not None else Position()
        self.direction = direction
        self._path: List[Position] = [self.position]

    def _next_position(self) -> Position:
        dx, dy = _DELTAS[self.direction]
        limit = self.grid_size - 1
        return Position(
            _clamp(self.position.x + dx, 0, limit),
            _clamp(self.position.y + dy, 0, limit),
        )

    def execute(self, instruction: Instruction) -> None:
        self.direction = self.direction.turned(instruction.turn)
        for _ in range(instruction.steps):
            # Clamped steps still count as steps taken.
            self.position = self._next_position()
            self._path.append(self.position)

    def execute_all(self, instructions: Iterable[Instruction]) -> None:
        for instruction in instructions:
            self.execute(instruction)

    @property
    def path_history(self) -> Tuple[Position, ...]:
        return tuple(self._path)

    @property
    def start_position(self) -> Position:
        return self._path[0]

    @property
    def actual_steps(self) -> int:
        return len(self._path) - 1

    @property
    def manhattan_distance(self) -> int:
        return Position.manhattan(self.start_position, self.position)

    @property
    def efficiency_percent(self) -> float:
        actual = self.actual_steps
        manhattan = self.manhattan_distance
        if actual == 0:
            return 100.0 if manhattan == 0 else 0.0
        return manhattan / actual * 100.0

    @property
    def direction_name(self) -> str:
        return DIRECTION_NAMES[self.direction]
