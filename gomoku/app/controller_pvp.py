from __future__ import annotations

from dataclasses import dataclass

from gomoku.app.controller_base import BaseController, ControllerEvent
from gomoku.core.board import Player, Position
from gomoku.cli.commands import Command, CommandProcessor, CommandType
from gomoku.cli.view import CliView, Message, MessageType
from gomoku.core.game import Game


@dataclass
class PvPConfig:
    board_size: int = 15
    tick_sec: float = 1.0
    clear_screen: bool = True


class PvPController(BaseController):
    """
    Two players sharing one terminal.

      - Moves alternate, Black first.
      - /undo takes back one ply.
      - /swap is meaningless here (both colors are local).
    """

    def __init__(self, *, config: PvPConfig) -> None:
        self.cfg = config
        game = Game(board_size=config.board_size, starting_player=Player.BLACK)
        view = CliView(
            you_name="Black",
            you_color=Player.BLACK,
            opp_name="White",
            opp_color=Player.WHITE,
            clear=config.clear_screen,
        )
        cmd = CommandProcessor(board_size=config.board_size)
        super().__init__(game=game, view=view, command_processor=cmd, tick_sec=config.tick_sec)

    def on_start(self) -> None:
        self.view.set_message(Message(MessageType.RESTART, "PVP START"))
        self._dirty = True

    def poll_external_events(self) -> None:
        return None

    def handle_event(self, event: ControllerEvent) -> None:
        return None

    def handle_command(self, command: Command) -> None:
        self._dirty = True
        if command.type == CommandType.UNDO:
            if self.game.undo_last_move():
                self.view.set_undo("Undid 1 move(s).")
            else:
                self.view.set_error("No moves to undo.")
        elif command.type == CommandType.RESTART:
            self.game.reset()
            self.view.set_restart("Game restarted.")
        else:
            self.view.set_error("Unknown/unsupported command. Use /help")

    def handle_move(self, pos: Position) -> None:
        self._dirty = True
        player = self.game.current_player
        result = self.game.make_move(pos)
        if not result.success:
            self.view.set_error(result.error_message)
            return
        self.view.set_move(f"{player}: {pos.col + 1}, {pos.row + 1} ({pos})", is_you=player == Player.BLACK)
