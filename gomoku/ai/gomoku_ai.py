from typing import Optional
from gomoku.core.board import Board, Player, Position
from gomoku.ai.minimax import MinimaxAI, SearchResult
from gomoku.ai.config import AI_LEVELS, DEFAULT_LEVEL, EngineConfig

class GomokuAI:
    def __init__(self, player: Player, lvl: int = DEFAULT_LEVEL) -> None:
        if lvl not in AI_LEVELS:
            raise ValueError(f"lvl must be one of {sorted(AI_LEVELS)}")
        self.player = player
        self.opponent = player.opponent()
        self.level = AI_LEVELS[lvl]
        cfg = EngineConfig(
            color=player,
            time_limit=self.level.time_limit,
            max_candidates=self.level.max_candidates,
        )
        self.ai = MinimaxAI(config=cfg)
        self.last_result: Optional[SearchResult] = None

    def get_move(self, board: Board) -> Optional[Position]:
        """
        Best move for self.player on `board` (0-based Position), or None.
        The board is left as it was.
        """
        self.last_result = self.ai.compute_best_move(board, self.level.max_depth)
        return self.last_result.move
