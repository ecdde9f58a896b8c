from __future__ import annotations

import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from gomoku.core.board import Player
from gomoku.core.game import Game


class MessageType(Enum):
    ERR = "ERR"
    INFO = "INFO"
    YOU_MOVE = "YOU MOVE"
    OPP_MOVE = "OPP MOVE"
    SWAP = "SWAP"
    UNDO = "UNDO"
    RESTART = "RESTART"
    QUIT = "QUIT"


@dataclass(frozen=True)
class Message:
    """Status line under the board, e.g. "[UNDO] Undid 2 move(s)."."""
    type: MessageType
    text: str = ""

    def render(self) -> str:
        tag = f"[{self.type.value}]"
        return f"{tag} {self.text}" if self.text else tag


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


def format_clock(seconds: int) -> str:
    """mm:ss, minutes keep growing past 99."""
    minutes, secs = divmod(max(0, seconds), 60)
    return f"{minutes:02d}:{secs:02d}"


class CliView:
    """
    Draws one frame: board, message line, state line, prompt.
    Holds no game logic; the controller decides what the message says.
    """

    def __init__(
        self,
        *,
        you_name: str,
        you_color: Player,
        opp_name: str,
        opp_color: Player,
        prompt: str = "> ",
        clear: bool = True,
    ) -> None:
        self.you_name = you_name
        self.you_color = you_color
        self.opp_name = opp_name
        self.opp_color = opp_color
        self.prompt = prompt
        self.clear = clear
        # engine search in progress
        self.thinking = False

        self._message: Optional[Message] = None

    @property
    def message(self) -> Optional[Message]:
        return self._message

    def set_message(self, msg: Optional[Message]) -> None:
        self._message = msg

    def _show(self, kind: MessageType, text: str) -> None:
        self._message = Message(kind, text)

    def set_error(self, text: str) -> None:
        self._show(MessageType.ERR, text)

    def set_info(self, text: str = "") -> None:
        self._message = Message(MessageType.INFO, text) if text else None

    def set_move(self, text: str, is_you: bool = False) -> None:
        self._show(MessageType.YOU_MOVE if is_you else MessageType.OPP_MOVE, text)

    def set_swap(self, text: str = "") -> None:
        self._show(MessageType.SWAP, text)

    def set_undo(self, text: str = "") -> None:
        self._show(MessageType.UNDO, text)

    def set_restart(self, text: str = "") -> None:
        self._show(MessageType.RESTART, text)

    # ---------- Render ----------

    def frame(self, game: Game) -> str:
        message = self._message.render() if self._message else ""
        return "\n".join([game.board.to_cli(), "", message, self.build_state_line(game)])

    def render(self, game: Game) -> None:
        if self.clear:
            clear_screen()
        print(self.frame(game))
        print(self.prompt, end="", flush=True)

    def build_state_line(self, game: Game) -> str:
        return (
            f"{self._turn_indicator(game)}   "
            f"{format_clock(game.elapsed_seconds())}   "
            f"{self.you_name}: {self.you_color.symbol()}   "
            f"{self.opp_name}: {self.opp_color.symbol()}"
        )

    def _turn_indicator(self, game: Game) -> str:
        if game.winner is not None:
            name = self.you_name if game.winner == self.you_color else self.opp_name
            return f"*** {name.upper()} WON ***"
        if game.is_draw():
            return "DRAW"
        if game.current_player == self.you_color:
            return f">>> {self.you_name.upper()} TURN <<<"
        if self.thinking:
            return f">>> {self.opp_name.upper()} THINKING... <<<"
        return f">>> {self.opp_name.upper()} TURN <<<"
