from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Protocol, Union

from .commands import Command, DispatchResult, parse_command
from .core import GameEngine, GameState
from .rules import Difficulty


Listener = Callable[[GameState], None]


class HighScores(Protocol):
    def load_high_score(self) -> int: ...

    def save_high_score(self, score: int) -> None: ...


class GameSession:
    """Single owner of a running game.

    Ticks from the fall loop and user commands are both applied on the event
    loop thread, and each replaces `state` in one assignment. Pausing,
    resetting or changing difficulty wakes the loop so the pending wait starts
    over with the new settings.
    """

    def __init__(
        self,
        engine: Optional[GameEngine] = None,
        difficulty: Difficulty = Difficulty.EASY,
        high_scores: Optional[HighScores] = None,
        state: Optional[GameState] = None,
    ) -> None:
        self.engine = engine or GameEngine()
        self.difficulty = difficulty
        self.high_scores = high_scores
        self.high_score = high_scores.load_high_score() if high_scores is not None else 0
        self._state = state if state is not None else self.engine.reset()
        self._listeners: List[Listener] = []
        self._wake = asyncio.Event()
        self._task: Optional[asyncio.Task] = None

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def fall_interval(self) -> float:
        return self.difficulty.interval

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def _commit(self, new_state: GameState) -> bool:
        if new_state is self._state:
            return False
        was_over = self._state.is_game_over
        self._state = new_state
        if new_state.is_game_over and not was_over:
            self._record_high_score(new_state.score)
        for listener in list(self._listeners):
            listener(new_state)
        return True

    def _record_high_score(self, score: int) -> None:
        if self.high_scores is None:
            self.high_score = max(self.high_score, score)
            return
        previous = self.high_scores.load_high_score()
        if score > previous:
            self.high_scores.save_high_score(score)
        self.high_score = max(previous, score)

    def tick(self) -> bool:
        return self._commit(self.engine.tick(self._state))

    def dispatch(self, command: Union[str, Command]) -> DispatchResult:
        try:
            cmd = parse_command(command)
        except ValueError:
            return DispatchResult.INVALID_COMMAND
        if cmd == Command.TOGGLE_PAUSE:
            changed = self.toggle_pause()
        else:
            changed = self._commit(self.engine.apply(self._state, cmd))
            if cmd == Command.RESET:
                self._wake.set()
        return DispatchResult.APPLIED if changed else DispatchResult.IGNORED

    def set_paused(self, paused: bool) -> None:
        self._commit(self.engine.set_paused(self._state, paused))
        self._wake.set()

    def toggle_pause(self) -> bool:
        changed = self._commit(self.engine.toggle_pause(self._state))
        self._wake.set()
        return changed

    def set_difficulty(self, difficulty: Difficulty) -> None:
        self.difficulty = difficulty
        self._wake.set()

    async def run(self) -> None:
        while True:
            self._wake.clear()
            if not self._state.is_running:
                # Paused or over: nothing falls until something wakes us.
                await self._wake.wait()
                continue
            try:
                await asyncio.wait_for(self._wake.wait(), timeout=self.fall_interval)
            except asyncio.TimeoutError:
                if self._state.is_running:
                    self.tick()

    def start(self) -> asyncio.Task:
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self.run())
        return self._task

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None
