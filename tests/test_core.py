from __future__ import annotations

import numpy as np
import pytest

from falling_blocks.game import (
    Board,
    Command,
    GameConfig,
    GameEngine,
    GameState,
    Piece,
    ScoringRules,
    TetrominoType,
)

RED = (255, 0, 0)


def vertical_i(x: int, y: int) -> Piece:
    return Piece(x=x, y=y, shape_index=TetrominoType.I, color_index=0, rotation=1)


def make_state(current: Piece, cells=(), next_piece: Piece | None = None, **kwargs) -> GameState:
    board = Board(10, 20, {pos: RED for pos in cells})
    if next_piece is None:
        next_piece = Piece.spawn(TetrominoType.O, 10)
    return GameState(board=board, current_piece=current, next_piece=next_piece, **kwargs)


@pytest.fixture
def engine() -> GameEngine:
    return GameEngine(GameConfig(random_seed=1234))


def test_reset_creates_fresh_game(engine):
    state = engine.reset()
    assert len(state.board) == 0
    assert state.score == 0
    assert not state.is_paused
    assert not state.is_game_over
    assert state.current_piece.y == -1
    assert state.next_piece.rotation == 0


def test_same_seed_same_pieces():
    a = GameEngine(GameConfig(random_seed=5)).reset()
    b = GameEngine(GameConfig(random_seed=5)).reset()
    assert a == b


def test_tick_soft_falls_one_row(engine):
    state = make_state(Piece.spawn(TetrominoType.T, 10))
    after = engine.tick(state)
    assert after.current_piece == state.current_piece.translate(0, 1)
    assert after.board == state.board
    assert after.score == 0


@pytest.mark.parametrize("flags", [{"is_paused": True}, {"is_game_over": True}])
def test_tick_is_noop_when_suspended(engine, flags):
    state = make_state(Piece.spawn(TetrominoType.T, 10), **flags)
    assert engine.tick(state) is state


def test_tick_locks_piece_and_promotes_next(engine):
    nxt = Piece.spawn(TetrominoType.S, 10)
    state = make_state(Piece(x=0, y=18, shape_index=TetrominoType.O, color_index=3), next_piece=nxt)
    after = engine.tick(state)

    assert len(after.board) == 4
    assert after.current_piece == nxt
    assert after.score == 0
    assert not after.is_game_over


def test_single_line_scores_ten(engine):
    state = make_state(vertical_i(9, 16), cells=[(x, 19) for x in range(9)] + [(0, 18)])
    after = engine.tick(state)

    assert after.score == 10
    assert after.lines_cleared == 1
    assert sorted(after.board) == sorted([(0, 19), (9, 17), (9, 18), (9, 19)])
    assert not after.is_game_over


def test_four_lines_score_one_sixty(engine):
    cells = [(x, y) for y in range(16, 20) for x in range(9)]
    after = engine.tick(make_state(vertical_i(9, 16), cells=cells, score=5))
    assert after.score == 5 + 160
    assert len(after.board) == 0


@pytest.mark.parametrize("lines,points", [(0, 0), (1, 10), (2, 40), (3, 90), (4, 160)])
def test_score_for_lines(lines, points):
    assert ScoringRules().score_for_lines(lines) == points


def test_blocked_spawn_ends_game(engine):
    blocked = Piece.spawn(TetrominoType.O, 10)
    state = make_state(
        Piece(x=0, y=18, shape_index=TetrominoType.O, color_index=3),
        cells=[(x, 0) for x in range(3, 7)],
        next_piece=blocked,
    )
    over = engine.tick(state)

    assert over.is_game_over
    assert over.current_piece == blocked
    assert engine.tick(over) is over
    assert engine.move(over, 1) is over
    assert engine.rotate(over) is over


def test_move_against_wall_is_rejected(engine):
    state = make_state(vertical_i(0, 5))
    assert engine.move(state, -1) is state
    assert engine.move(state, 1).current_piece.x == 1


def test_move_into_locked_cell_is_rejected(engine):
    state = make_state(vertical_i(4, 5), cells=[(5, 8)])
    assert engine.move(state, 1) is state


def test_rotate_without_wall_kick(engine):
    state = make_state(vertical_i(9, 5))
    assert engine.rotate(state) is state

    free = make_state(Piece(x=4, y=5, shape_index=TetrominoType.T, color_index=5))
    assert engine.rotate(free).current_piece.rotation == 1


def test_soft_drop_never_locks(engine):
    resting = make_state(Piece(x=0, y=18, shape_index=TetrominoType.O, color_index=3))
    assert engine.soft_drop(resting) is resting

    falling = make_state(Piece.spawn(TetrominoType.T, 10))
    assert engine.soft_drop(falling).current_piece.y == 0


def test_pause_blocks_commands(engine):
    state = engine.set_paused(make_state(Piece.spawn(TetrominoType.T, 10)), True)
    assert state.is_paused
    assert engine.move(state, 1) is state
    assert engine.soft_drop(state) is state
    assert engine.set_paused(state, True) is state
    assert not engine.toggle_pause(state).is_paused


def test_apply_dispatches_commands(engine):
    state = make_state(Piece(x=4, y=5, shape_index=TetrominoType.T, color_index=5))
    assert engine.apply(state, Command.MOVE_LEFT).current_piece.x == 3
    assert engine.apply(state, Command.MOVE_RIGHT).current_piece.x == 5
    assert engine.apply(state, Command.SOFT_DROP).current_piece.y == 6
    assert engine.apply(state, Command.ROTATE_CW).current_piece.rotation == 1
    assert engine.apply(state, Command.TOGGLE_PAUSE).is_paused
    assert len(engine.apply(state, Command.RESET).board) == 0


def test_state_array_overlays_active_piece(engine):
    state = make_state(Piece(x=0, y=0, shape_index=TetrominoType.O, color_index=3), cells=[(9, 19)])
    grid = state.to_array()
    assert grid[0, 0] == -4
    assert grid[19, 9] > 0
    assert int(np.count_nonzero(grid < 0)) == 4
