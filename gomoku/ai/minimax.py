"""Minimax with Alpha-Beta pruning, adaptive depth and an optional deadline."""

import logging
import math
import time
from dataclasses import dataclass
from typing import Optional, Tuple

from gomoku.core.board import Board, Player, Position
from gomoku.ai.config import EngineConfig
from gomoku.ai.heuristics import Heuristic
from gomoku.ai.movegen import MoveGenerator

logger = logging.getLogger(__name__)

INF = math.inf


class SearchTimeout(Exception):
    """Deadline passed in the middle of a search iteration."""


@dataclass(frozen=True)
class SearchResult:
    """
    Outcome of one search.

    score is relative to the engine color (+inf: forced win found, -inf:
    forced loss). move is None when there was nothing to search.
    """
    score: float
    move: Optional[Position]
    depth: int = 0
    nodes: int = 0
    timed_out: bool = False


class MinimaxAI:
    """
    Depth-limited minimax with alpha-beta pruning for config.color.

    The board passed in is mutated during the search and restored before
    every return; callers see it exactly as it was.
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()
        self.color: Player = self.config.color
        self.nodes_explored = 0
        self._deadline: Optional[float] = None

    def select_depth(self, board: Board) -> int:
        """Shallow search while many cells are empty, deeper near the end."""
        if board.empty_count > self.config.adaptive_depth_threshold:
            return self.config.shallow_depth
        return self.config.deep_depth

    def compute_best_move(self, board: Board, max_depth: Optional[int] = None) -> SearchResult:
        """
        Pick the engine's move. Nothing is placed on the board.

        Args:
            board: Position to search; restored before returning.
            max_depth: Plies to search, None for the adaptive choice.

        Returns:
            SearchResult; check result.move for None before applying it.
        """
        depth = self.select_depth(board) if max_depth is None else max_depth
        heuristic = Heuristic(board, self.config)
        self.nodes_explored = 0

        if depth <= 0:
            return SearchResult(heuristic.score_board(), None)
        if board.is_empty_board():
            return SearchResult(heuristic.score_board(), board.center())

        if self.config.time_limit is None:
            score, move = self._alpha_beta(board, heuristic, depth, -INF, INF, True, None)
            result = SearchResult(score, move, depth, self.nodes_explored)
        else:
            result = self._search_iterative(board, heuristic, depth)

        logger.info(
            "%s engine: move=%s score=%s depth=%d/%d nodes=%d%s",
            self.color, result.move, result.score, result.depth, depth,
            result.nodes, " (timed out)" if result.timed_out else "",
        )
        return result

    def _search_iterative(self, board: Board, heuristic: Heuristic, max_depth: int) -> SearchResult:
        """Deepen 1..max_depth until the deadline; keep the last completed iteration."""
        self._deadline = time.monotonic() + self.config.time_limit
        best: Optional[SearchResult] = None
        timed_out = False
        total_nodes = 0
        try:
            for depth in range(1, max_depth + 1):
                self.nodes_explored = 0
                try:
                    score, move = self._alpha_beta(board, heuristic, depth, -INF, INF, True, None)
                except SearchTimeout:
                    total_nodes += self.nodes_explored
                    timed_out = True
                    logger.warning(
                        "search deadline (%.2fs) hit at depth %d; keeping depth %d",
                        self.config.time_limit, depth, depth - 1,
                    )
                    break
                total_nodes += self.nodes_explored
                best = SearchResult(score, move, depth, total_nodes)
                logger.debug("depth %d done: move=%s score=%s nodes=%d", depth, move, score, total_nodes)
                if math.isinf(score):
                    break
        finally:
            self._deadline = None

        self.nodes_explored = total_nodes
        if best is None:
            moves = MoveGenerator(board, self.config, heuristic).candidate_moves(self.color, max_moves=1)
            return SearchResult(
                heuristic.score_board(), moves[0] if moves else None,
                depth=0, nodes=total_nodes, timed_out=True,
            )
        return SearchResult(best.score, best.move, best.depth, total_nodes, timed_out)

    def _check_deadline(self) -> None:
        if self._deadline is not None and time.monotonic() > self._deadline:
            raise SearchTimeout()

    def _alpha_beta(
        self,
        board: Board,
        heuristic: Heuristic,
        depth: int,
        alpha: float,
        beta: float,
        is_maximizing: bool,
        last: Optional[Tuple[int, int, Player]],
    ) -> Tuple[float, Optional[Position]]:
        """Alpha-beta recursion. Returns (score, best_move)."""
        self.nodes_explored += 1

        if last is not None:
            row, col, mover = last
            if board.check_win(row, col, mover):
                return (INF if mover == self.color else -INF), None

        if depth == 0:
            return heuristic.score_board(), None

        player = self.color if is_maximizing else self.color.opponent()
        move_gen = MoveGenerator(board, self.config, heuristic)
        possible_moves = move_gen.candidate_moves(player, max_moves=self.config.max_candidates)

        if not possible_moves:
            return heuristic.score_board(), None

        best_move = possible_moves[0]
        best_score = -INF if is_maximizing else INF

        for move in possible_moves:
            self._check_deadline()
            board.place(move.row, move.col, player)
            try:
                eval_score, _ = self._alpha_beta(
                    board, heuristic, depth - 1, alpha, beta,
                    not is_maximizing, (move.row, move.col, player),
                )
            finally:
                board.unplace(move.row, move.col)

            if is_maximizing:
                if eval_score > best_score:
                    best_score = eval_score
                    best_move = move
                alpha = max(alpha, eval_score)
            else:
                if eval_score < best_score:
                    best_score = eval_score
                    best_move = move
                beta = min(beta, eval_score)
            if beta <= alpha:
                break

        return best_score, best_move
