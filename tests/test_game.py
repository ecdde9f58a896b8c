"""Tests for turn resolution and undo."""

from gomoku.core.board import Player, Position
from gomoku.core.game import Game

# 5x5 full board with no five anywhere (13 black, 12 white)
DRAW_ROWS = [
    "OOXXO",
    "XXOOX",
    "OOXXO",
    "XXOOX",
    "OOXXO",
]


def play(game: Game, cells) -> None:
    for r, c in cells:
        assert game.make_move(Position(r, c)).success


class TestMakeMove:
    """Tests for Game.make_move."""

    def test_black_moves_first_and_turns_alternate(self) -> None:
        """Black starts; each success switches the side to move."""
        game = Game()
        assert game.current_player == Player.BLACK
        game.make_move(Position(7, 7))
        assert game.current_player == Player.WHITE
        assert game.board.get(7, 7) == Player.BLACK
        assert game.last_move == Position(7, 7)

    def test_occupied_cell(self) -> None:
        """Occupied cells fail with a message and keep the turn."""
        game = Game()
        game.make_move(Position(7, 7))
        result = game.make_move(Position(7, 7))
        assert not result.success
        assert "occupied" in result.error_message
        assert game.current_player == Player.WHITE

    def test_out_of_bounds(self) -> None:
        """Out-of-bounds positions fail."""
        game = Game(board_size=9)
        assert not game.make_move(Position(9, 0)).success

    def test_win_ends_game(self) -> None:
        """Completing five sets the winner and blocks further moves."""
        game = Game()
        play(game, [(7, 0), (8, 0), (7, 1), (8, 1), (7, 2), (8, 2), (7, 3), (8, 3)])
        result = game.make_move(Position(7, 4))
        assert result.success and result.is_winning_move
        assert game.winner == Player.BLACK
        assert game.is_game_over()
        assert not game.make_move(Position(0, 0)).success

    def test_draw_on_full_board(self) -> None:
        """A full board without five is a draw."""
        blacks = [(r, c) for r, row in enumerate(DRAW_ROWS) for c, ch in enumerate(row) if ch == "O"]
        whites = [(r, c) for r, row in enumerate(DRAW_ROWS) for c, ch in enumerate(row) if ch == "X"]
        order = []
        for i, cell in enumerate(blacks):
            order.append(cell)
            if i < len(whites):
                order.append(whites[i])
        game = Game(board_size=5)
        play(game, order)
        assert game.winner is None
        assert game.is_draw()
        assert game.is_game_over()


class TestUndo:
    """Tests for undo and reset."""

    def test_undo_restores_turn(self) -> None:
        """Undo gives the turn back to whoever made the undone move."""
        game = Game()
        play(game, [(7, 7), (7, 8)])
        assert game.undo_last_move()
        assert game.current_player == Player.WHITE
        assert game.board.is_empty(7, 8)
        assert game.last_move == Position(7, 7)

    def test_undo_two_plies(self) -> None:
        """undo(2) removes a human move and the reply."""
        game = Game()
        play(game, [(7, 7), (7, 8), (8, 8)])
        assert game.undo(2) == 2
        assert game.board.stone_count == 1
        assert game.current_player == Player.WHITE

    def test_undo_clears_winner(self) -> None:
        """Undoing the winning move reopens the game."""
        game = Game()
        play(game, [(7, 0), (8, 0), (7, 1), (8, 1), (7, 2), (8, 2), (7, 3), (8, 3), (7, 4)])
        assert game.winner == Player.BLACK
        game.undo_last_move()
        assert game.winner is None
        assert game.current_player == Player.BLACK

    def test_undo_empty(self) -> None:
        """Nothing to undo on a fresh game."""
        game = Game()
        assert not game.undo_last_move()
        assert game.undo(2) == 0

    def test_reset(self) -> None:
        """reset empties the board and history."""
        game = Game()
        play(game, [(7, 7), (7, 8)])
        game.reset()
        assert game.board.is_empty_board()
        assert game.move_history == []
        assert game.current_player == Player.BLACK


class FakeClock:
    def __init__(self) -> None:
        self.now = 100.0

    def __call__(self) -> float:
        return self.now


class TestClock:
    """Tests for the elapsed game time."""

    def test_runs_while_playing(self) -> None:
        """Elapsed time counts whole seconds from the start."""
        clock = FakeClock()
        game = Game(clock=clock)
        assert game.elapsed_seconds() == 0
        clock.now += 75.9
        assert game.elapsed_seconds() == 75

    def test_stops_on_win_and_resumes_on_undo(self) -> None:
        """A finished game freezes the clock; undo resumes it without the pause."""
        clock = FakeClock()
        game = Game(clock=clock)
        play(game, [(7, 0), (8, 0), (7, 1), (8, 1), (7, 2), (8, 2), (7, 3), (8, 3)])
        clock.now += 30
        game.make_move(Position(7, 4))
        clock.now += 500
        assert game.elapsed_seconds() == 30
        game.undo_last_move()
        clock.now += 5
        assert game.elapsed_seconds() == 35

    def test_stops_on_draw(self) -> None:
        """Filling the board stops the clock."""
        clock = FakeClock()
        game = Game(board_size=5, clock=clock)
        blacks = [(r, c) for r, row in enumerate(DRAW_ROWS) for c, ch in enumerate(row) if ch == "O"]
        whites = [(r, c) for r, row in enumerate(DRAW_ROWS) for c, ch in enumerate(row) if ch == "X"]
        order = [cell for pair in zip(blacks, whites) for cell in pair] + blacks[len(whites):]
        play(game, order[:-1])
        clock.now += 10
        play(game, order[-1:])
        assert game.is_draw()
        clock.now += 60
        assert game.elapsed_seconds() == 10

    def test_reset_restarts(self) -> None:
        """reset() starts a fresh clock."""
        clock = FakeClock()
        game = Game(clock=clock)
        clock.now += 42
        game.reset()
        assert game.elapsed_seconds() == 0
