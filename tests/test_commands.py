"""Tests for input parsing."""

import pytest

from gomoku.cli.commands import CommandProcessor, CommandType
from gomoku.core.board import Position


class TestParse:
    """Tests for CommandProcessor.parse."""

    @pytest.mark.parametrize("text", ["8 8", "H8", "h8", "  H 8  "])
    def test_center_forms(self, text: str) -> None:
        """Column/row pairs and letter-number both map to (row, col)."""
        result = CommandProcessor().parse(text)
        assert result.ok
        assert result.position == Position(7, 7)

    def test_x_is_column(self) -> None:
        """'x y' is column first."""
        assert CommandProcessor().parse("3 10").position == Position(9, 2)
        assert CommandProcessor().parse("C10").position == Position(9, 2)

    @pytest.mark.parametrize("text,expected", [
        ("/undo", CommandType.UNDO),
        ("/RESTART", CommandType.RESTART),
        ("/swap", CommandType.SWAP),
        ("/help", CommandType.HELP),
        ("/quit", CommandType.QUIT),
    ])
    def test_commands(self, text: str, expected: CommandType) -> None:
        """Slash commands are case-insensitive."""
        result = CommandProcessor().parse(text)
        assert result.ok
        assert result.command.type == expected

    @pytest.mark.parametrize("text", ["16 1", "0 5", "P1", "A16"])
    def test_out_of_bounds(self, text: str) -> None:
        """Coordinates outside the board are errors."""
        result = CommandProcessor().parse(text)
        assert not result.ok
        assert "Out of bounds" in result.error

    def test_small_board_bounds(self) -> None:
        """Bounds follow the board size."""
        assert not CommandProcessor(board_size=9).parse("10 1").ok
        assert CommandProcessor(board_size=9).parse("I9").position == Position(8, 8)

    @pytest.mark.parametrize("text", ["hello", "1 2 3", "/nope"])
    def test_garbage(self, text: str) -> None:
        """Unparseable input reports an error."""
        result = CommandProcessor().parse(text)
        assert not result.ok
        assert result.error

    def test_empty_line_is_noop(self) -> None:
        """Blank input is not ok but carries no error."""
        result = CommandProcessor().parse("   ")
        assert not result.ok
        assert result.error == ""

    def test_help_text_lists_commands(self) -> None:
        """Help mentions every command and the column range."""
        text = CommandProcessor().help_text()
        assert "/undo" in text and "/swap" in text
        assert "A-O" in text
