"""
Tests for the renderer-facing tile list
"""
import sys
import os
import random

# Add src directory to path so we can import our modules
sys.path.append(os.path.join(os.path.dirname(__file__), 'src'))

from board_engine import Session, board_from_values, move, reset
from tile_view import board_to_tiles, tiles_after_reset, tiles_for


EMPTY_ROW = [0, 0, 0, 0]


def test_board_to_tiles_is_row_major():
    board = board_from_values([[0, 2, 0, 0], [4, 0, 0, 8], EMPTY_ROW, [0, 0, 16, 0]])

    tiles = board_to_tiles(board)

    assert [(t.row, t.col, t.value) for t in tiles] == [(0, 1, 2), (1, 0, 4), (1, 3, 8), (3, 2, 16)]
    assert not any(t.is_new for t in tiles)
    assert all(t.previous_position is None for t in tiles)


def test_tiles_for_move_carry_slide_and_spawn_hints():
    session = Session(board=board_from_values([[0, 0, 2, 2], EMPTY_ROW, EMPTY_ROW, EMPTY_ROW]))
    leading_id = session.board[0][2].id

    result = move(session, 'left', random.Random(3))
    tiles = tiles_for(result)

    by_id = {t.id: t for t in tiles}
    assert len(tiles) == 2
    merged = by_id[leading_id]
    assert (merged.row, merged.col, merged.value) == (0, 0, 4)
    assert merged.previous_position == (0, 2)
    assert not merged.is_new

    spawned = by_id[result.spawned_id]
    assert spawned.is_new
    assert spawned.previous_position is None


def test_tiles_for_move_from_right_edge():
    session = Session(board=board_from_values([[2, 2, 0, 0], EMPTY_ROW, EMPTY_ROW, EMPTY_ROW]))
    leading_id = session.board[0][1].id

    result = move(session, 'right', random.Random(4))
    merged = next(t for t in tiles_for(result) if t.id == leading_id)

    assert (merged.row, merged.col, merged.value) == (0, 3, 4)
    assert merged.previous_position == (0, 1)


def test_tiles_after_reset_are_all_new():
    tiles = tiles_after_reset(reset(random.Random(5)))

    assert len(tiles) == 2
    assert all(t.is_new for t in tiles)
