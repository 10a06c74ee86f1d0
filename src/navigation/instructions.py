from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import List

MAX_STEPS = 10_000


class Turn(str, Enum):
    LEFT = "L"
    RIGHT = "R"


class InstructionParseError(ValueError):
    """Raised for a malformed instruction token; keeps the offending token."""

    def __init__(self, token: str, index: int, reason: str):
        self.token = token
        self.index = index
        self.reason = reason
        super().__init__(f"Invalid instruction #{index} {token!r}: {reason}")


@dataclass(frozen=True)
class Instruction:
    turn: Turn
    steps: int

    def __str__(self) -> str:
        return f"{self.turn.value}{self.steps}"


def parse_token(token: str, index: int = 0) -> Instruction:
    if not token:
        raise InstructionParseError(token, index, "empty token")
    try:
        turn = Turn(token[0])
    except ValueError:
        raise InstructionParseError(token, index, f"unknown turn {token[0]!r}, expected L or R") from None

    digits = token[1:]
    if not (digits.isascii() and digits.isdigit()):
        raise InstructionParseError(token, index, "step count must be a non-negative integer")
    steps = int(digits)
    if steps > MAX_STEPS:
        raise InstructionParseError(token, index, f"step count exceeds {MAX_STEPS}")
    return Instruction(turn=turn, steps=steps)


def parse_instructions(text: str) -> List[Instruction]:
    """
    Parse "R2,L3,L1" into instructions.
    Spaces are ignored anywhere; blank input gives an empty list.
    """
    compact = "".join(text.split())
    if not compact:
        return []
    return [parse_token(token, idx) for idx, token in enumerate(compact.split(","))]
