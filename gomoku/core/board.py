from typing import List, Tuple, Iterator
import numpy as np
from dataclasses import dataclass
from enum import Enum

MIN_BOARD_SIZE = 5
WIN_LENGTH = 5


class Player(Enum):
    """Stone colors. BLACK always moves first."""
    EMPTY = 0
    BLACK = 1
    WHITE = 2

    def symbol(self) -> str:
        return {0: ".", 1: "O", 2: "X"}[self.value]

    def opponent(self) -> "Player":
        if self == Player.BLACK:
            return Player.WHITE
        if self == Player.WHITE:
            return Player.BLACK
        return Player.EMPTY

    def __str__(self) -> str:
        return self.name.lower()


@dataclass(frozen=True)
class Position:
    """
    Immutable cell coordinate.
    Coordinates are 0-based: (row, col) with row 0 at the top.
    """
    row: int
    col: int

    def __post_init__(self):
        if not isinstance(self.row, int) or not isinstance(self.col, int):
            raise TypeError("Position coordinates must be integers")

    def __str__(self) -> str:
        """Return human-readable form like H8 (column letter, 1-based row)."""
        return f"{chr(ord('A') + self.col)}{self.row + 1}"


class Board:
    """
    Represents the game board state.

    - (row, col) coordinates are 0-based.
    - Internally stores a size x size int8 grid of Player values.
    - Confirmed moves go through place_stone() and are kept in a history
      so they can be undone; place()/unplace() are the raw mutations the
      search brackets around each recursive call.
    """

    def __init__(self, size: int = 15) -> None:
        if not isinstance(size, int) or size < MIN_BOARD_SIZE:
            raise ValueError(f"size must be an integer >= {MIN_BOARD_SIZE}")
        self._size: int = size
        self._grid: np.ndarray = np.zeros((size, size), dtype=np.int8)
        self._moves: int = 0  # number of placed stones (non-empty)
        self._history: List[Tuple[int, int]] = []

    @property
    def size(self) -> int:
        return self._size

    @property
    def stone_count(self) -> int:
        return self._moves

    @property
    def empty_count(self) -> int:
        return self._size * self._size - self._moves

    @property
    def grid(self) -> np.ndarray:
        """Raw grid of Player values. Read-only by convention; mutate through place/unplace."""
        return self._grid

    @property
    def history(self) -> List[Position]:
        return [Position(r, c) for r, c in self._history]

    def copy(self) -> "Board":
        """Create a deep copy of the board (history included)."""
        new_board = Board(self._size)
        new_board._grid = np.copy(self._grid)
        new_board._moves = self._moves
        new_board._history = list(self._history)
        return new_board

    def snapshot(self) -> np.ndarray:
        """Copy of the raw grid, for before/after comparisons."""
        return np.copy(self._grid)

    @classmethod
    def from_rows(cls, rows: List[str]) -> "Board":
        """
        Build a board from text rows: 'O' / 'B' black, 'X' / 'W' white,
        anything else empty. No history is recorded.
        """
        board = cls(len(rows))
        for r, line in enumerate(rows):
            if len(line) != board.size:
                raise ValueError(f"row {r} has length {len(line)}, expected {board.size}")
            for c, ch in enumerate(line.upper()):
                if ch in ("O", "B"):
                    board.place(r, c, Player.BLACK)
                elif ch in ("X", "W"):
                    board.place(r, c, Player.WHITE)
        return board

    # ---------- Bounds / cell access ----------

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self._size and 0 <= col < self._size

    def get(self, row: int, col: int) -> Player:
        if not self.in_bounds(row, col):
            raise ValueError(f"Out of bounds: ({row}, {col}) for size={self._size}")
        return Player(int(self._grid[row, col]))

    def is_empty(self, row: int, col: int) -> bool:
        return self._grid[row, col] == 0

    def is_valid_move(self, row: int, col: int) -> bool:
        """In bounds and unoccupied."""
        return self.in_bounds(row, col) and self._grid[row, col] == 0

    # ---------- Mutation ----------

    def place(self, row: int, col: int, player: Player) -> None:
        """
        Place a stone without recording history.

        Raises:
            ValueError if out of bounds, occupied, or player is EMPTY.
        """
        if player == Player.EMPTY:
            raise ValueError("Cannot place EMPTY")
        if not self.in_bounds(row, col):
            raise ValueError(f"Out of bounds: ({row}, {col})")
        if self._grid[row, col] != 0:
            raise ValueError(f"Cell occupied at {Position(row, col)}")
        self._grid[row, col] = player.value
        self._moves += 1

    def unplace(self, row: int, col: int) -> None:
        """
        Remove a stone at (row, col).

        Raises:
            ValueError if out of bounds or the cell is already empty.
        """
        if not self.in_bounds(row, col):
            raise ValueError(f"Out of bounds: ({row}, {col})")
        if self._grid[row, col] == 0:
            raise ValueError(f"Cell already empty at {Position(row, col)}")
        self._grid[row, col] = 0
        self._moves -= 1

    def place_stone(self, row: int, col: int, player: Player) -> bool:
        """Confirmed placement. Returns False (no mutation) if the move is invalid."""
        if player == Player.EMPTY or not self.is_valid_move(row, col):
            return False
        self.place(row, col, player)
        self._history.append((row, col))
        return True

    def undo(self, plies: int = 1) -> int:
        """Remove up to `plies` confirmed stones, newest first. Returns how many were removed."""
        undone = 0
        while undone < plies and self._history:
            row, col = self._history.pop()
            self.unplace(row, col)
            undone += 1
        return undone

    def clear(self) -> None:
        """Reset board to empty."""
        self._grid.fill(0)
        self._moves = 0
        self._history.clear()

    # ---------- Iteration / helpers ----------

    def iter_stones(self) -> Iterator[Tuple[int, int, Player]]:
        """Yield all stones as (row, col, Player), row-major."""
        for r, c in zip(*np.nonzero(self._grid)):
            yield int(r), int(c), Player(int(self._grid[r, c]))

    def is_empty_board(self) -> bool:
        return self._moves == 0

    def is_full(self) -> bool:
        return self._moves == self._size * self._size

    def center(self) -> Position:
        return Position(self._size // 2, self._size // 2)

    # ---------- Directional scan (win checks) ----------

    @staticmethod
    def directions() -> Tuple[Tuple[int, int], ...]:
        """4 unique axes as (d_row, d_col): horizontal, vertical, diagonal, anti-diagonal."""
        return ((0, 1), (1, 0), (1, 1), (1, -1))

    def count_in_direction(self, row: int, col: int, player: Player, dr: int, dc: int) -> int:
        """
        Count consecutive stones of `player` from (row, col) outward in direction (dr, dc),
        excluding the start cell itself.
        """
        count = 0
        value = player.value
        r, c = row + dr, col + dc
        while 0 <= r < self._size and 0 <= c < self._size and self._grid[r, c] == value:
            count += 1
            r += dr
            c += dc
        return count

    def line_length_through(self, row: int, col: int, player: Player, dr: int, dc: int) -> int:
        """
        Total consecutive length of `player` stones passing through (row, col)
        along (dr, dc), counting the origin cell as one.
        """
        return (
            1
            + self.count_in_direction(row, col, player, dr, dc)
            + self.count_in_direction(row, col, player, -dr, -dc)
        )

    def check_win(self, row: int, col: int, player: Player) -> bool:
        """True if the stone just placed at (row, col) completes five or more in a row."""
        for dr, dc in self.directions():
            if self.line_length_through(row, col, player, dr, dc) >= WIN_LENGTH:
                return True
        return False

    # ---------- Rendering ----------

    def to_cli(self) -> str:
        """Render board as text. Columns are letters, rows are 1-based numbers."""
        letters = [chr(ord("A") + i) for i in range(self._size)]
        lines = ["     " + " ".join(letters)]
        for r in range(self._size):
            row = [Player(int(v)).symbol() for v in self._grid[r]]
            lines.append(f"{str(r + 1).rjust(3)}  " + " ".join(row))
        return "\n".join(lines)


def has_five_in_row(board: Board, row: int, col: int, player: Player) -> bool:
    """Win detector: the stone of `player` at (row, col) lies on a line of five or more."""
    return board.check_win(row, col, player)
