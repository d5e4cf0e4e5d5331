from __future__ import annotations

from pathlib import Path
from typing import Union


class HighScoreStore:
    """Persists a single integer high score in a text file."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = Path(path)

    def load_high_score(self) -> int:
        try:
            return max(0, int(self.path.read_text(encoding="utf-8").strip()))
        except (OSError, ValueError):
            return 0

    def save_high_score(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # Swap in a fully written file.
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(f"{int(score)}\n", encoding="utf-8")
        tmp.replace(self.path)


class MemoryHighScoreStore:
    """In-process store for tests and headless sessions."""

    def __init__(self, score: int = 0) -> None:
        self.score = score

    def load_high_score(self) -> int:
        return self.score

    def save_high_score(self, score: int) -> None:
        self.score = int(score)
