from __future__ import annotations

import time
from typing import Callable, List, Optional

from gomoku.core.board import Board, Player, Position
from gomoku.core.move import Move, MoveResult


class Game:
    """
    Turn resolution around a Board.

    Owns:
      - Board
      - Current state fields (current_player, winner, history, last_move)

    Note:
      - Freestyle rules: five or more in a row wins for either color.
      - The engine never calls into Game; it is handed a Board and returns a
        Position that the controller applies through make_move().
    """

    def __init__(
        self,
        board_size: int = 15,
        starting_player: Player = Player.BLACK,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.board = Board(board_size)

        self.starting_player: Player = starting_player
        self.current_player: Player = starting_player
        self.winner: Optional[Player] = None

        self.move_history: List[Move] = []
        self.last_move: Optional[Position] = None

        # Game clock: runs until the game ends, restarts on reset()
        self._clock = clock
        self._started_at = clock()
        self._stopped_at: Optional[float] = None

    # -------------------------
    # State helpers
    # -------------------------

    def elapsed_seconds(self) -> int:
        """Whole seconds since the game started, frozen once it is over."""
        end = self._stopped_at if self._stopped_at is not None else self._clock()
        return int(end - self._started_at)

    def is_draw(self) -> bool:
        """Board full and nobody won."""
        return self.winner is None and self.board.is_full()

    def is_game_over(self) -> bool:
        return self.winner is not None or self.board.is_full()

    # -------------------------
    # Move / validation
    # -------------------------

    def validate(self, position: Position) -> MoveResult:
        """Check a move for the current player without applying it."""
        if self.is_game_over():
            return MoveResult.fail("Game is already over.")
        if not self.board.in_bounds(position.row, position.col):
            return MoveResult.fail("Move is out of bounds.")
        if not self.board.is_empty(position.row, position.col):
            return MoveResult.fail("Cell is already occupied.")
        return MoveResult.ok()

    def make_move(self, position: Position) -> MoveResult:
        """
        Execute a move for the current player.

        Returns:
            MoveResult (success, error_message, is_winning_move)
        """
        result = self.validate(position)
        if not result.success:
            return result

        player = self.current_player
        self.board.place_stone(position.row, position.col, player)
        self.move_history.append(Move(position=position, player=player))
        self.last_move = position

        if self.board.check_win(position.row, position.col, player):
            self.winner = player
            self._stopped_at = self._clock()
            return MoveResult.ok(is_winning_move=True)

        if self.board.is_full():
            self._stopped_at = self._clock()
        self.switch_player()
        return result

    def switch_player(self) -> None:
        self.current_player = self.current_player.opponent()

    # -------------------------
    # Undo
    # -------------------------

    def undo_last_move(self) -> bool:
        """
        Undo the last move.

        Returns:
            True if undone, False if no move to undo.
        """
        if not self.move_history:
            return False

        last = self.move_history.pop()
        self.board.undo(1)

        # restore turn to the player who made the undone move
        self.current_player = last.player
        # undo may invalidate a previous win; the clock resumes without the pause
        self.winner = None
        if self._stopped_at is not None:
            self._started_at += self._clock() - self._stopped_at
            self._stopped_at = None
        self.last_move = self.move_history[-1].position if self.move_history else None
        return True

    def undo(self, plies: int = 1) -> int:
        """Undo up to `plies` moves. Returns how many were undone."""
        undone = 0
        while undone < plies and self.undo_last_move():
            undone += 1
        return undone

    # -------------------------
    # Reset
    # -------------------------

    def reset(self) -> None:
        """Reset game to initial state."""
        self.board.clear()
        self.current_player = self.starting_player
        self.winner = None
        self.move_history.clear()
        self.last_move = None
        self._started_at = self._clock()
        self._stopped_at = None
