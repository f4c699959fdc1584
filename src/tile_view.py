"""
flat tile list for the renderer

turns a board plus the per-move hints from the engine into drawable tiles,
so the GUI never has to re-derive any game logic
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class TileView:
    id: str
    value: int
    row: int
    col: int
    is_new: bool = False
    previous_position: tuple = None


def board_to_tiles(board, spawned_id=None, previous_positions=None):
    """convert board to a row-major list of visible tiles"""
    previous_positions = previous_positions or {}
    tiles = []
    for row, cells in enumerate(board):
        for col, tile in enumerate(cells):
            if tile is None:
                continue
            tiles.append(TileView(
                id=tile.id,
                value=tile.value,
                row=row,
                col=col,
                is_new=tile.id == spawned_id,
                previous_position=previous_positions.get(tile.id),
            ))
    return tiles


def tiles_for(result):
    """tiles after a move, carrying its spawn and slide hints"""
    return board_to_tiles(result.session.board, result.spawned_id, result.previous_positions)


def tiles_after_reset(session):
    """tiles of a fresh game, both starting tiles flagged as new"""
    return [
        TileView(tile.id, tile.value, tile.row, tile.col, is_new=True)
        for tile in board_to_tiles(session.board)
    ]
