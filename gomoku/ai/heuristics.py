"""Pattern-based heuristic evaluation for board states."""

from typing import Optional

from gomoku.core.board import Board, Player
from gomoku.ai.config import EngineConfig, position_weights
from gomoku.ai.patterns import count_patterns


class Heuristic:
    """
    Evaluates board state from the engine color's perspective.

    Positive scores favor config.color, negative scores favor its opponent.
    """

    def __init__(self, board: Board, config: Optional[EngineConfig] = None) -> None:
        self.board = board
        self.config = config or EngineConfig()
        self._positions = position_weights(board.size)

    def positional_bonus(self, row: int, col: int) -> float:
        return float(self._positions[row, col]) * self.config.position_scale

    def pattern_score(self, row: int, col: int, player: Player) -> float:
        """Weighted shape counts over the four axes through (row, col)."""
        return float(count_patterns(self.board, row, col, player).score(self.config.weights))

    def score_position(self, row: int, col: int, player: Player) -> float:
        """Contribution of the `player` stone at (row, col): shapes plus center bonus."""
        return self.pattern_score(row, col, player) + self.positional_bonus(row, col)

    def score_move(self, row: int, col: int, player: Player) -> float:
        """
        What-if score of a `player` stone on the empty cell (row, col).

        The stone is placed, scored and removed again; the board is unchanged
        on return, including when scoring raises.
        """
        self.board.place(row, col, player)
        try:
            return self.score_position(row, col, player)
        finally:
            self.board.unplace(row, col)

    def ordering_score(self, row: int, col: int, player: Player) -> float:
        """
        Desirability of an empty cell for the side to move: center bonus, the
        mover's own shape gain, and part of what the opponent would gain there.
        """
        own = self._pattern_gain(row, col, player)
        block = self._pattern_gain(row, col, player.opponent())
        return self.positional_bonus(row, col) + own + block * self.config.ordering_defense_ratio

    def _pattern_gain(self, row: int, col: int, player: Player) -> float:
        self.board.place(row, col, player)
        try:
            return self.pattern_score(row, col, player)
        finally:
            self.board.unplace(row, col)

    def score_board(self) -> float:
        """
        Sum of the engine's stone scores minus defense_ratio times the
        opponent's stone scores.
        """
        engine = self.config.color
        own = 0.0
        opp = 0.0
        for row, col, player in self.board.iter_stones():
            score = self.score_position(row, col, player)
            if player == engine:
                own += score
            else:
                opp += score
        return own - self.config.defense_ratio * opp
