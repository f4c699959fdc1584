"""
core game logic and mechanics

the engine is a set of pure functions over immutable snapshots:
move() and reset() never touch the caller's session, they hand back a new one.
"""
import random
import uuid
from dataclasses import dataclass, field


GRID_SIZE = 4
WIN_VALUE = 2048
SPAWN_FOUR_PROBABILITY = 0.1
DIRECTIONS = ('up', 'down', 'left', 'right')


@dataclass(frozen=True)
class Tile:
    id: str
    value: int


@dataclass(frozen=True)
class Session:
    board: tuple
    score: int = 0
    is_game_over: bool = False
    is_won: bool = False


@dataclass(frozen=True)
class MoveResult:
    """
    outcome of a single move

    merges holds (kept_id, consumed_id, value) per merge, previous_positions
    maps every pre-move tile id to its (row, col) for the animation layer.
    both are empty when the move was rejected.
    """
    session: Session
    moved: bool
    points: int = 0
    merges: tuple = ()
    spawned_id: str = None
    previous_positions: dict = field(default_factory=dict)


def new_tile_id():
    """fresh unique tile identity"""
    return uuid.uuid4().hex


def empty_board():
    """4x4 board with no tiles"""
    return tuple((None,) * GRID_SIZE for _ in range(GRID_SIZE))


def empty_cells(board):
    """(row, col) of every empty cell, row-major"""
    return [(row, col)
            for row in range(GRID_SIZE)
            for col in range(GRID_SIZE)
            if board[row][col] is None]


def count_tiles(board):
    return sum(1 for row in board for tile in row if tile is not None)


def board_values(board):
    """plain value grid, 0 for empty cells"""
    return [[tile.value if tile is not None else 0 for tile in row] for row in board]


def board_from_values(values):
    """
    build a board from a grid of values (0 = empty), giving every tile a fresh id

    raises ValueError if the grid is not 4x4 or holds a value that is not a
    power of two >= 2
    """
    if len(values) != GRID_SIZE or any(len(row) != GRID_SIZE for row in values):
        raise ValueError(f"board must be {GRID_SIZE}x{GRID_SIZE}")

    rows = []
    for row in values:
        cells = []
        for value in row:
            if value == 0:
                cells.append(None)
                continue
            if value < 2 or value & (value - 1):
                raise ValueError(f"invalid tile value: {value}")
            cells.append(Tile(new_tile_id(), value))
        rows.append(tuple(cells))
    return tuple(rows)


def spawn_random_tile(board, rng=random):
    """
    add a random tile (2 or 4) to an empty space

    returns the new board and the spawned tile's id. a full board is
    returned as-is with None for the id.
    """
    empty = empty_cells(board)
    if not empty:
        return board, None

    row, col = rng.choice(empty)
    # 90% chance for 2 and 10% chance for 4
    value = 2 if rng.random() >= SPAWN_FOUR_PROBABILITY else 4
    tile = Tile(new_tile_id(), value)

    grid = [list(cells) for cells in board]
    grid[row][col] = tile
    return _freeze(grid), tile.id


def merge_line(line):
    """
    slide and merge one line toward its leading edge (index 0)

    single pass: a merged tile never merges again in the same move, and the
    pair nearest the leading edge merges first. the merged tile keeps the
    identity of the leading tile.

    returns (new_line, points, merges)
    """
    tiles = [tile for tile in line if tile is not None]

    merged_line = []
    merges = []
    points = 0
    i = 0
    while i < len(tiles):
        if i + 1 < len(tiles) and tiles[i].value == tiles[i + 1].value:
            merged_value = tiles[i].value * 2
            merged_line.append(Tile(tiles[i].id, merged_value))
            merges.append((tiles[i].id, tiles[i + 1].id, merged_value))
            points += merged_value
            i += 2  # skip the consumed tile
        else:
            merged_line.append(tiles[i])
            i += 1

    merged_line += [None] * (len(line) - len(merged_line))
    return merged_line, points, merges


def line_coordinates(direction, index):
    """
    cells of line `index` ordered from the leading edge for `direction`

    left/right walk a row, up/down walk a column
    """
    cells = range(GRID_SIZE)
    if direction in ('right', 'down'):
        cells = reversed(cells)
    if direction in ('left', 'right'):
        return [(index, col) for col in cells]
    return [(row, index) for row in cells]


def _line_values(line):
    return [tile.value if tile is not None else None for tile in line]


def _freeze(grid):
    return tuple(tuple(row) for row in grid)


def tile_positions(board):
    """id -> (row, col) for every tile on the board"""
    return {tile.id: (row, col)
            for row, cells in enumerate(board)
            for col, tile in enumerate(cells)
            if tile is not None}


def slide_board(board, direction):
    """
    slide and merge every line of the board, without spawning

    returns (new_board, moved, points, merges)
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"invalid direction: {direction!r}, expected one of {DIRECTIONS}")

    grid = [list(row) for row in board]
    moved = False
    points = 0
    merges = []

    for index in range(GRID_SIZE):
        coords = line_coordinates(direction, index)
        line = [board[row][col] for row, col in coords]

        new_line, line_points, line_merges = merge_line(line)

        # check if this line changed
        if _line_values(new_line) != _line_values(line):
            moved = True
        points += line_points
        merges.extend(line_merges)

        for (row, col), tile in zip(coords, new_line):
            grid[row][col] = tile

    return _freeze(grid), moved, points, merges


def move(session, direction, rng=random):
    """
    make a move in the specified direction

    a move that changes no line (or any move on a finished game) is
    rejected: the same session comes back with moved=False.
    """
    if direction not in DIRECTIONS:
        raise ValueError(f"invalid direction: {direction!r}, expected one of {DIRECTIONS}")

    if session.is_game_over:
        return MoveResult(session, False)

    board, moved, points, merges = slide_board(session.board, direction)
    if not moved:
        return MoveResult(session, False)

    board, spawned_id = spawn_random_tile(board, rng)
    won = session.is_won or any(value == WIN_VALUE for _, _, value in merges)

    new_session = Session(
        board=board,
        score=session.score + points,
        is_game_over=not has_moves_left(board),
        is_won=won,
    )
    return MoveResult(
        session=new_session,
        moved=True,
        points=points,
        merges=tuple(merges),
        spawned_id=spawned_id,
        previous_positions=tile_positions(session.board),
    )


def has_moves_left(board):
    """check if any move is still possible (empty cell or equal neighbours)"""
    if empty_cells(board):
        return True

    # adjacency is symmetric, so right and down neighbours cover every pair
    for row in range(GRID_SIZE):
        for col in range(GRID_SIZE):
            value = board[row][col].value
            if col + 1 < GRID_SIZE and board[row][col + 1].value == value:
                return True
            if row + 1 < GRID_SIZE and board[row + 1][col].value == value:
                return True

    return False


def reset(rng=random):
    """start a new game: empty board plus two random tiles"""
    board = empty_board()
    board, _ = spawn_random_tile(board, rng)
    board, _ = spawn_random_tile(board, rng)
    return Session(board=board)


def format_board(session):
    """console rendering of a session (for testing and headless play)"""
    lines = [f"Score: {session.score}", "-" * 21]
    for row in board_values(session.board):
        cells = "".join("    |" if value == 0 else f"{value:4}|" for value in row)
        lines.append("|" + cells)
    lines.append("-" * 21)
    if session.is_game_over:
        lines.append("GAME OVER!")
    elif session.is_won:
        lines.append("YOU WON!")
    return "\n".join(lines)
