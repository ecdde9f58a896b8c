"""Tests for board state and win detection."""

import numpy as np
import pytest

from gomoku.core.board import Board, Player, Position, has_five_in_row


def longest_run_through(board: Board, row: int, col: int, player: Player, dr: int, dc: int) -> int:
    """Independent reference: walk the whole line and measure the run containing (row, col)."""
    # back up to the start of the line
    r, c = row, col
    while board.in_bounds(r - dr, c - dc):
        r, c = r - dr, c - dc
    run = 0
    hit = False
    while board.in_bounds(r, c):
        if board.get(r, c) == player:
            run += 1
            if (r, c) == (row, col):
                hit = True
        else:
            if hit:
                return run
            run = 0
        r, c = r + dr, c + dc
    return run


class TestPlacement:
    """Tests for validated and raw placement."""

    def test_place_stone_valid(self) -> None:
        """Valid placement mutates the grid and records history."""
        board = Board()
        assert board.place_stone(7, 7, Player.BLACK)
        assert board.get(7, 7) == Player.BLACK
        assert board.stone_count == 1
        assert board.history == [Position(7, 7)]

    def test_place_stone_occupied(self) -> None:
        """Occupied cell is rejected without mutation."""
        board = Board()
        board.place_stone(7, 7, Player.BLACK)
        before = board.snapshot()
        assert not board.place_stone(7, 7, Player.WHITE)
        assert np.array_equal(board.snapshot(), before)
        assert board.stone_count == 1

    @pytest.mark.parametrize("row,col", [(-1, 0), (0, -1), (15, 3), (3, 15)])
    def test_place_stone_out_of_bounds(self, row: int, col: int) -> None:
        """Out-of-bounds placement returns False."""
        board = Board()
        assert not board.is_valid_move(row, col)
        assert not board.place_stone(row, col, Player.BLACK)
        assert board.is_empty_board()

    def test_place_empty_player_rejected(self) -> None:
        """EMPTY is not a stone."""
        board = Board()
        assert not board.place_stone(0, 0, Player.EMPTY)
        with pytest.raises(ValueError):
            board.place(0, 0, Player.EMPTY)

    def test_raw_place_unplace(self) -> None:
        """place/unplace round trip and misuse errors."""
        board = Board()
        board.place(3, 4, Player.WHITE)
        with pytest.raises(ValueError):
            board.place(3, 4, Player.BLACK)
        board.unplace(3, 4)
        assert board.is_empty_board()
        with pytest.raises(ValueError):
            board.unplace(3, 4)

    def test_undo(self) -> None:
        """undo removes newest stones first and reports the count."""
        board = Board()
        board.place_stone(7, 7, Player.BLACK)
        board.place_stone(7, 8, Player.WHITE)
        board.place_stone(8, 8, Player.BLACK)
        assert board.undo(2) == 2
        assert board.history == [Position(7, 7)]
        assert board.is_empty(8, 8) and board.is_empty(7, 8)
        assert board.undo(5) == 1
        assert board.undo() == 0

    def test_invalid_size(self) -> None:
        """Boards smaller than five are refused."""
        with pytest.raises(ValueError):
            Board(4)

    def test_copy_is_independent(self) -> None:
        """Mutating a copy leaves the original alone."""
        board = Board()
        board.place_stone(1, 1, Player.BLACK)
        clone = board.copy()
        clone.place_stone(2, 2, Player.WHITE)
        assert board.is_empty(2, 2)
        assert board.stone_count == 1
        assert clone.history == [Position(1, 1), Position(2, 2)]

    def test_from_rows(self) -> None:
        """Text rows map O to black and X to white."""
        board = Board.from_rows([
            "O....",
            ".X...",
            ".....",
            ".....",
            "....O",
        ])
        assert board.size == 5
        assert board.get(0, 0) == Player.BLACK
        assert board.get(1, 1) == Player.WHITE
        assert board.stone_count == 3
        assert board.history == []


class TestWinDetection:
    """Tests for check_win."""

    @pytest.mark.parametrize("dr,dc", [(0, 1), (1, 0), (1, 1), (1, -1)])
    def test_five_on_each_axis(self, dr: int, dc: int) -> None:
        """Five in a row wins on all four axes, from any of the five stones."""
        board = Board()
        cells = [(5 + k * dr, 7 + k * dc) for k in range(5)]
        for r, c in cells:
            board.place(r, c, Player.WHITE)
        for r, c in cells:
            assert board.check_win(r, c, Player.WHITE)
            assert not board.check_win(r, c, Player.BLACK)

    def test_four_is_not_a_win(self) -> None:
        """Four in a row does not win."""
        board = Board()
        for c in range(4):
            board.place(0, c, Player.BLACK)
        assert not board.check_win(0, 3, Player.BLACK)

    def test_gap_breaks_the_line(self) -> None:
        """11011 is not five."""
        board = Board()
        for c in (0, 1, 3, 4):
            board.place(0, c, Player.BLACK)
        assert not board.check_win(0, 4, Player.BLACK)

    def test_overline_wins(self) -> None:
        """Six or more still counts."""
        board = Board()
        for c in range(6):
            board.place(2, c, Player.BLACK)
        assert board.check_win(2, 5, Player.BLACK)
        assert has_five_in_row(board, 2, 0, Player.BLACK)

    def test_matches_reference_scan_on_random_boards(self) -> None:
        """check_win agrees with a full-line scan on random positions."""
        rng = np.random.default_rng(7)
        for _ in range(30):
            board = Board(9)
            for r in range(9):
                for c in range(9):
                    v = rng.choice(3, p=[0.3, 0.35, 0.35])
                    if v:
                        board.place(r, c, Player(int(v)))
            for r, c, player in board.iter_stones():
                expected = any(
                    longest_run_through(board, r, c, player, dr, dc) >= 5
                    for dr, dc in board.directions()
                )
                assert board.check_win(r, c, player) == expected
