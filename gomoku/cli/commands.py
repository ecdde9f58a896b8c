from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gomoku.core.board import Position


class CommandType(Enum):
    QUIT = "quit"
    SWAP = "swap"
    RESTART = "restart"
    UNDO = "undo"
    HELP = "help"


@dataclass(frozen=True)
class Command:
    type: CommandType
    raw: str


@dataclass(frozen=True)
class ParseResult:
    """
    One parsed input line: a command, a board position, or an error.
    A blank line has none of the three.
    """
    command: Optional[Command] = None
    position: Optional[Position] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error and (self.command is not None or self.position is not None)


class CommandProcessor:
    """
    Turns terminal input into a Command or a 0-based Position.

    Accepted moves are 1-based and column first: "8 8" (x y) or "H8"
    (column letter, row number). Executing them is the controller's job.
    """

    def __init__(self, board_size: int = 15) -> None:
        if board_size <= 0:
            raise ValueError("board_size must be positive")
        self.board_size = board_size

    @property
    def help_cmds(self) -> str:
        return ", ".join(f"/{t.value}" for t in CommandType)

    def help_text(self) -> str:
        last_col = chr(ord("A") + self.board_size - 1)
        return (
            f"Moves: 'x y' like 8 8, or 'H8' (A-{last_col}, 1-{self.board_size}). "
            f"Commands: {self.help_cmds}"
        )

    def parse(self, text: str) -> ParseResult:
        line = (text or "").strip()
        if not line:
            return ParseResult()
        if line.startswith("/"):
            return self._parse_command(line)

        xy = self._split_pair(line) or self._split_letter(line)
        if xy is None:
            return ParseResult(error="Invalid input. Use 'x y' or 'H8' or /help")
        x, y = xy
        if not (1 <= x <= self.board_size and 1 <= y <= self.board_size):
            return ParseResult(error=f"Out of bounds: {x}, {y} (must be 1..{self.board_size})")
        return ParseResult(position=Position(y - 1, x - 1))

    def _parse_command(self, line: str) -> ParseResult:
        name = line[1:].strip().lower()
        try:
            return ParseResult(command=Command(CommandType(name), line))
        except ValueError:
            return ParseResult(error=f"Unknown command: {line}")

    @staticmethod
    def _split_pair(line: str) -> Optional[tuple]:
        parts = line.split()
        if len(parts) == 2 and all(p.isdigit() for p in parts):
            return int(parts[0]), int(parts[1])
        return None

    @staticmethod
    def _split_letter(line: str) -> Optional[tuple]:
        letter, digits = line[0], line[1:].strip()
        if letter.isalpha() and letter.isascii() and digits.isdigit():
            return ord(letter.upper()) - ord("A") + 1, int(digits)
        return None
