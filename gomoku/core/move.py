from __future__ import annotations

from dataclasses import dataclass

from gomoku.core.board import Player, Position


@dataclass(frozen=True)
class Move:
    """A confirmed stone in the game record."""
    position: Position
    player: Player

    def __str__(self) -> str:
        return f"{self.player} {self.position}"


@dataclass(frozen=True)
class MoveResult:
    """Outcome of Game.make_move; error_message is empty on success."""
    success: bool
    is_winning_move: bool = False
    error_message: str = ""

    @classmethod
    def ok(cls, *, is_winning_move: bool = False) -> MoveResult:
        return cls(True, is_winning_move)

    @classmethod
    def fail(cls, msg: str) -> MoveResult:
        return cls(False, error_message=msg)
