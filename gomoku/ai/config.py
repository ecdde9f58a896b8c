from dataclasses import dataclass, field
from functools import lru_cache
from typing import Optional

import numpy as np

from gomoku.core.board import Player


@dataclass(frozen=True)
class ShapeWeights:
    """Heuristic weight per recognized shape, strictly descending by severity."""
    five: int = 1_000_000
    open_four: int = 100_000
    double_four: int = 50_000
    blocked_four: int = 10_000
    double_three: int = 8_000
    open_three: int = 5_000
    blocked_three: int = 1_000
    open_two: int = 200
    blocked_two: int = 50


# Positional bonus multiplier applied to the center-peaked weight table
POSITION_SCALE = 10
# Opponent scores are scaled by this in the board evaluation (> 1 favors blocking)
DEFENSE_RATIO = 1.1
# Share of the opponent's pattern gain counted when ordering candidate moves
ORDERING_DEFENSE_RATIO = 0.9
# Adjacent search distance for move generation
SEARCH_DISTANCE = 2
# Adaptive depth: more than this many empty cells -> shallow search
ADAPTIVE_DEPTH_THRESHOLD = 10
SHALLOW_DEPTH = 4
DEEP_DEPTH = 6


@lru_cache(maxsize=None)
def position_weights(size: int) -> np.ndarray:
    """
    Pyramidal N x N table: distance to the nearest edge, so 0 on the rim and
    size // 2 at the center (7 on a 15x15 board).
    """
    idx = np.arange(size)
    edge = np.minimum(idx, size - 1 - idx)
    table = np.minimum.outer(edge, edge)
    table.setflags(write=False)
    return table


@dataclass(frozen=True)
class EngineConfig:
    """All tunables of the evaluator and search, built once and shared."""
    color: Player = Player.WHITE
    weights: ShapeWeights = field(default_factory=ShapeWeights)
    position_scale: float = POSITION_SCALE
    defense_ratio: float = DEFENSE_RATIO
    ordering_defense_ratio: float = ORDERING_DEFENSE_RATIO
    search_distance: int = SEARCH_DISTANCE
    adaptive_depth_threshold: int = ADAPTIVE_DEPTH_THRESHOLD
    shallow_depth: int = SHALLOW_DEPTH
    deep_depth: int = DEEP_DEPTH
    max_candidates: Optional[int] = None  # None = keep every candidate
    time_limit: Optional[float] = None    # seconds; None = depth is the only bound

    def __post_init__(self):
        if self.color == Player.EMPTY:
            raise ValueError("engine color must be BLACK or WHITE")
        if self.search_distance < 1:
            raise ValueError("search_distance must be >= 1")
        if self.max_candidates is not None and self.max_candidates < 1:
            raise ValueError("max_candidates must be >= 1")


@dataclass(frozen=True)
class AILevelConfig:
    max_depth: Optional[int]              # None = adaptive (shallow/deep by empty cells)
    time_limit: Optional[float] = None
    max_candidates: Optional[int] = None

AI_LEVELS = {
    1: AILevelConfig(max_depth=1, max_candidates=8),
    2: AILevelConfig(max_depth=2, max_candidates=10),
    3: AILevelConfig(max_depth=None, time_limit=3.0, max_candidates=12),
    4: AILevelConfig(max_depth=None, time_limit=8.0, max_candidates=16),
    5: AILevelConfig(max_depth=None),
}

# Full-strength search: radius-2 candidates, adaptive 4/6 plies, no deadline
DEFAULT_LEVEL = 5
