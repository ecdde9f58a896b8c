from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from gomoku.core.board import Board, Player, Position
from gomoku.ai.config import EngineConfig
from gomoku.ai.heuristics import Heuristic


@dataclass(frozen=True)
class PrioritizedMove:
    """Move with priority score (higher = better)."""
    position: Position
    priority: float


class MoveGenerator:
    """
    Generates and orders candidate moves for the search.

    Only empty cells within `search_distance` (Chebyshev) of an existing stone
    are proposed, each once. An empty board yields the center cell alone.
    """

    def __init__(
        self,
        board: Board,
        config: Optional[EngineConfig] = None,
        heuristic: Optional[Heuristic] = None,
    ) -> None:
        self.board = board
        self.config = config or EngineConfig()
        self.heuristic = heuristic or Heuristic(board, self.config)

    def adjacent_positions(self, distance: Optional[int] = None) -> List[Position]:
        """
        Empty cells near stones, in discovery order (stones row-major, then
        offsets row-major).

        Args:
            distance: Neighborhood radius; 1 gives the 8 immediate neighbors.
                      Defaults to config.search_distance.
        """
        if distance is None:
            distance = self.config.search_distance
        if distance < 1:
            raise ValueError("distance must be >= 1")

        board = self.board
        if board.is_empty_board():
            return [board.center()]

        seen: Set[Tuple[int, int]] = set()
        result: List[Position] = []
        for row, col, _ in board.iter_stones():
            for dr in range(-distance, distance + 1):
                for dc in range(-distance, distance + 1):
                    r, c = row + dr, col + dc
                    if (r, c) in seen or not board.is_valid_move(r, c):
                        continue
                    seen.add((r, c))
                    result.append(Position(r, c))
        return result

    def candidate_moves(
        self,
        player: Player,
        distance: Optional[int] = None,
        max_moves: Optional[int] = None,
    ) -> List[Position]:
        """
        Return candidate moves for `player`, best first.

        Args:
            player: Side to move; ordering favors its attacks and blocks.
            distance: Neighborhood radius (default config.search_distance).
            max_moves: Keep only the first max_moves (None = keep all).

        Returns:
            Positions sorted by descending priority. Equal priorities keep
            discovery order.
        """
        positions = self.adjacent_positions(distance)
        if self.board.is_empty_board():
            return positions

        prioritized = [
            PrioritizedMove(pos, self.heuristic.ordering_score(pos.row, pos.col, player))
            for pos in positions
        ]
        prioritized.sort(key=lambda m: m.priority, reverse=True)
        if max_moves is not None:
            prioritized = prioritized[:max_moves]
        return [m.position for m in prioritized]
