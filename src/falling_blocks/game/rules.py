from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


@dataclass
class ScoringRules:
    base_points: int = 10

    def score_for_lines(self, lines: int) -> int:
        # Quadratic: 1 -> 10, 2 -> 40, 3 -> 90, 4 -> 160
        if lines <= 0:
            return 0
        return (lines * self.base_points) * lines


class Difficulty(Enum):
    """Fall interval per difficulty, in milliseconds."""

    EASY = 1000
    HARD = 550
    GOD_TIER = 300

    @property
    def fall_ms(self) -> int:
        return self.value

    @property
    def interval(self) -> float:
        return self.value / 1000.0

    @classmethod
    def parse(cls, name: str) -> "Difficulty":
        key = name.strip().upper().replace("-", "_").replace(" ", "_")
        try:
            return cls[key]
        except KeyError:
            choices = ", ".join(d.name.lower() for d in cls)
            raise ValueError(f"unknown difficulty {name!r} (choose from {choices})") from None
