from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Dict, Optional

import pygame

from falling_blocks.game import Command, Difficulty, GameConfig, GameEngine, GameSession, HighScoreStore
from .renderer import Renderer


KEY_TO_COMMAND: Dict[int, Command] = {
    pygame.K_LEFT: Command.MOVE_LEFT,
    pygame.K_RIGHT: Command.MOVE_RIGHT,
    pygame.K_UP: Command.ROTATE_CW,
    pygame.K_DOWN: Command.SOFT_DROP,
    pygame.K_p: Command.TOGGLE_PAUSE,
    pygame.K_r: Command.RESET,
}

DEFAULT_HIGHSCORE_PATH = Path.home() / ".falling_blocks" / "highscore.txt"


async def play(difficulty: Difficulty, highscore_path: Path, seed: Optional[int] = None, fps: int = 60) -> None:
    pygame.init()
    try:
        session = GameSession(
            GameEngine(GameConfig(random_seed=seed)),
            difficulty=difficulty,
            high_scores=HighScoreStore(highscore_path),
        )
        renderer = Renderer(cell_size=30)
        board = session.state.board
        screen = pygame.display.set_mode(renderer.window_size(board.width, board.height))
        pygame.display.set_caption("Falling Blocks")
        label = f"Difficulty: {difficulty.name.replace('_', ' ').title()}"

        session.start()
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key == pygame.K_ESCAPE:
                        running = False
                    else:
                        command = KEY_TO_COMMAND.get(event.key)
                        if command is not None:
                            session.dispatch(command)

            renderer.draw(screen, session.state, session.high_score, label)
            # Yield to the fall loop between frames.
            await asyncio.sleep(1.0 / fps)
        await session.stop()
    finally:
        pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks")
    p.add_argument("--difficulty", type=Difficulty.parse, default=Difficulty.EASY,
                   help="easy (1000 ms), hard (550 ms) or god_tier (300 ms)")
    p.add_argument("--highscore", type=Path, default=DEFAULT_HIGHSCORE_PATH)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--fps", type=int, default=60)
    return p


def main() -> None:
    args = build_parser().parse_args()
    asyncio.run(play(args.difficulty, args.highscore, args.seed, args.fps))


if __name__ == "__main__":  # pragma: no cover
    main()
