from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Optional

from gomoku.app.controller_base import BaseController, ControllerEvent, EventType
from gomoku.core.board import Board, Player, Position
from gomoku.cli.commands import Command, CommandProcessor, CommandType
from gomoku.cli.view import CliView, Message, MessageType
from gomoku.core.game import Game
from gomoku.ai.config import DEFAULT_LEVEL
from gomoku.ai.gomoku_ai import GomokuAI

logger = logging.getLogger(__name__)


@dataclass
class PvCConfig:
    lvl: int = DEFAULT_LEVEL
    board_size: int = 15
    tick_sec: float = 0.2
    human_color: Player = Player.BLACK
    clear_screen: bool = True


@dataclass(frozen=True)
class AIMove:
    """Engine answer tagged with the game generation it was computed for."""
    position: Optional[Position]
    generation: int


class PvCController(BaseController):
    """
    Player vs Computer controller.

    Key rules:
      - The engine searches on a worker thread against a copy of the board;
        its answer comes back as an AI event and is applied via Game.make_move.
      - /undo removes plies back to (and including) the last human move,
        so normally TWO plies (engine + human).
      - /restart needs no consent.
      - /swap only BEFORE the game starts: swaps your color with the engine's.
        Black always moves first.
    """

    def __init__(self, *, config: PvCConfig) -> None:
        self.cfg = config

        self._you_color: Player = config.human_color
        self._ai_color: Player = config.human_color.opponent()
        self.you_name: str = "You"
        self.ai_name: str = f"CPU(lvl{self.cfg.lvl})"

        game = Game(board_size=self.cfg.board_size, starting_player=Player.BLACK)
        cmd = CommandProcessor(board_size=self.cfg.board_size)
        super().__init__(game=game, view=self._new_view(), command_processor=cmd, tick_sec=self.cfg.tick_sec)

        self.ai = self._new_ai()

        # Avoid starting more than one search per turn
        self._ai_thinking: bool = False
        # Bumped on undo/restart/swap so stale answers are dropped
        self._generation: int = 0
        self._worker: Optional[threading.Thread] = None

    @property
    def you_color(self) -> Player:
        return self._you_color

    @property
    def ai_color(self) -> Player:
        return self._ai_color

    def on_start(self) -> None:
        self.view.set_message(Message(MessageType.RESTART, "PVC START"))
        self._dirty = True

    def on_stop(self) -> None:
        if self._worker is not None:
            self._worker.join(timeout=0.1)

    def poll_external_events(self) -> None:
        """Start a search when it's the engine's turn and none is running."""
        if self.game.is_game_over() or self.game.current_player != self._ai_color:
            return
        if self._ai_thinking:
            return

        self._ai_thinking = True
        self.view.thinking = True
        self._dirty = True
        board = self.game.board.copy()
        generation = self._generation
        self._worker = threading.Thread(
            target=self._search_worker, args=(self.ai, board, generation), daemon=True,
        )
        self._worker.start()

    def _search_worker(self, ai: GomokuAI, board: Board, generation: int) -> None:
        try:
            pos = ai.get_move(board)
        except Exception:
            logger.exception("engine search failed")
            pos = None
        self.push_event(ControllerEvent(EventType.AI, AIMove(pos, generation)))

    def handle_event(self, event: ControllerEvent) -> None:
        if event.type != EventType.AI:
            return

        answer: AIMove = event.payload  # type: ignore[assignment]
        if answer.generation != self._generation:
            logger.debug("dropping stale engine answer %s", answer.position)
            return

        self._ai_thinking = False
        self.view.thinking = False

        if self.game.is_game_over() or self.game.current_player != self._ai_color:
            return

        if answer.position is None:
            self.view.set_error("AI has no valid moves.")
            return

        result = self.game.make_move(answer.position)
        if not result.success:
            self.view.set_error(f"AI invalid: {result.error_message}")
            return

        pos = answer.position
        self.view.set_move(f"{pos.col + 1}, {pos.row + 1} ({pos})", is_you=False)

    def handle_command(self, command: Command) -> None:
        if command.type == CommandType.UNDO:
            self._undo_to_last_human()
        elif command.type == CommandType.RESTART:
            self._restart()
        elif command.type == CommandType.SWAP:
            self._swap_colors_before_start()
        else:
            self.view.set_error("Unknown/unsupported command. Use /help")
        self._dirty = True

    def handle_move(self, pos: Position) -> None:
        self._dirty = True
        if self.game.is_game_over():
            self.view.set_error("Game is over.")
            return

        if self.game.current_player != self._you_color:
            self.view.set_error("Not your turn.")
            return

        result = self.game.make_move(pos)
        if not result.success:
            self.view.set_error(result.error_message)
            return

        self.view.set_move(f"{pos.col + 1}, {pos.row + 1} ({pos})", is_you=True)

    def _new_ai(self) -> GomokuAI:
        return GomokuAI(player=self._ai_color, lvl=self.cfg.lvl)

    def _new_view(self) -> CliView:
        return CliView(
            you_name=self.you_name,
            you_color=self._you_color,
            opp_name=self.ai_name,
            opp_color=self._ai_color,
            clear=self.cfg.clear_screen,
        )

    def _invalidate_search(self) -> None:
        # a running worker keeps the old engine instance to itself
        self.ai = self._new_ai()
        self._generation += 1
        self._ai_thinking = False
        self.view.thinking = False

    def _restart(self) -> None:
        self.game.reset()
        self._invalidate_search()
        self.view.set_restart("Game restarted.")

    def _swap_colors_before_start(self) -> None:
        """Swap your color with the engine's (only before the first move)."""
        if not self.game.board.is_empty_board() or self.game.move_history:
            self.view.set_error("Swap is only allowed before the game starts.")
            return

        self._you_color, self._ai_color = self._ai_color, self._you_color
        self.game.reset()
        self.view = self._new_view()
        self._invalidate_search()
        self.view.set_swap("Swapped colors. Black moves first.")

    def _undo_to_last_human(self) -> None:
        """
        Roll back through the last human move: two plies after an engine
        reply, one while the engine is still thinking.
        """
        plies = next(
            (n for n, move in enumerate(reversed(self.game.move_history), 1)
             if move.player == self._you_color),
            None,
        )
        if plies is None:
            self.view.set_error("No moves to undo.")
            return

        undone = self.game.undo(plies)
        self._invalidate_search()
        self.view.set_undo(f"Undid {undone} move(s).")
