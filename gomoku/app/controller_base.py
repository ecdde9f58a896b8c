from __future__ import annotations

import logging
import os
import queue
import sys
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from gomoku.cli.commands import Command, CommandProcessor, CommandType
from gomoku.cli.view import CliView, Message, MessageType
from gomoku.core.board import Position
from gomoku.core.game import Game

logger = logging.getLogger(__name__)


# =========================
# Stdin polling
# =========================

class LinePoller(ABC):
    """Reads one line from the terminal, giving up after a timeout."""

    @abstractmethod
    def poll_line(self, timeout_sec: float) -> Optional[str]:
        """A stripped line, "/quit" once stdin is closed, or None on timeout."""
        raise NotImplementedError


class SelectPoller(LinePoller):
    """POSIX terminals: wait on stdin with select()."""

    def __init__(self) -> None:
        import select
        self._select = select.select

    def poll_line(self, timeout_sec: float) -> Optional[str]:
        ready, _, _ = self._select([sys.stdin], [], [], timeout_sec)
        if not ready:
            return None
        line = sys.stdin.readline()
        # EOF
        if line == "":
            return "/quit"
        return line.strip()


class ConsolePoller(LinePoller):
    """Windows consoles: msvcrt has no line mode, so echo keys into a buffer."""

    def __init__(self) -> None:
        import msvcrt  # type: ignore
        self._msvcrt = msvcrt
        self._pending: List[str] = []

    def _echo(self, text: str) -> None:
        sys.stdout.write(text)
        sys.stdout.flush()

    def poll_line(self, timeout_sec: float) -> Optional[str]:
        deadline = time.monotonic() + timeout_sec
        while time.monotonic() < deadline:
            if not self._msvcrt.kbhit():
                time.sleep(0.02)
                continue
            key = self._msvcrt.getwch()
            if key in ("\r", "\n"):
                self._echo("\n")
                line, self._pending = "".join(self._pending), []
                return line.strip()
            if key == "\b":
                if self._pending:
                    self._pending.pop()
                    self._echo("\b \b")
                continue
            self._pending.append(key)
            self._echo(key)
        return None


def make_line_poller() -> LinePoller:
    return ConsolePoller() if os.name == "nt" else SelectPoller()


# =========================
# Controller events
# =========================

class EventType(Enum):
    AI = "ai"              # engine finished a search


@dataclass(frozen=True)
class ControllerEvent:
    type: EventType
    payload: object


# =========================
# Base Controller
# =========================

class BaseController(ABC):
    """
    One game session driven from the terminal.

    Each tick:
      1. start or collect background work (poll_external_events)
      2. apply queued events (pump_events)
      3. redraw if anything changed
      4. wait up to tick_sec for a line and dispatch it (handle_line)

    Subclasses supply poll_external_events, handle_event, handle_command and
    handle_move. /help and /quit never reach handle_command.
    """

    def __init__(
        self,
        *,
        game: Game,
        view: CliView,
        command_processor: CommandProcessor,
        tick_sec: float = 1.0,
    ) -> None:
        self.game = game
        self.view = view
        self.cmd = command_processor
        self.tick_sec = tick_sec

        self._poller: Optional[LinePoller] = None
        self._running = True
        # Written by worker threads, drained on the loop thread only
        self._events: "queue.Queue[ControllerEvent]" = queue.Queue()
        self._dirty = True

    @property
    def running(self) -> bool:
        return self._running

    def stop(self) -> None:
        self._running = False

    def push_event(self, event: ControllerEvent) -> None:
        """Thread-safe; the event is handled on the next tick."""
        self._events.put(event)

    # ---------- Loop ----------

    def run(self) -> None:
        self._poller = make_line_poller()
        self.on_start()
        self._dirty = True
        self._redraw()
        while self._running:
            self.tick()
        self.on_stop()

    def tick(self) -> None:
        self.poll_external_events()
        self.pump_events()
        self._redraw()
        if self._poller is None:
            return
        line = self._poller.poll_line(self.tick_sec)
        if line is not None:
            self.handle_line(line)

    def pump_events(self) -> None:
        while True:
            try:
                event = self._events.get_nowait()
            except queue.Empty:
                return
            self.handle_event(event)
            self._dirty = True

    def _redraw(self) -> None:
        if self._dirty:
            self.view.render(self.game)
            self._dirty = False

    # ---------- Input ----------

    def handle_line(self, line: str) -> None:
        """Parse one input line and dispatch it; blank lines are ignored."""
        parsed = self.cmd.parse(line)
        if parsed.command is not None:
            self._dispatch_command(parsed.command)
        elif parsed.position is not None:
            self.handle_move(parsed.position)
        elif parsed.error:
            self.view.set_error(parsed.error)
            self._dirty = True

    def _dispatch_command(self, command: Command) -> None:
        logger.debug("command %s", command.type.value)
        if command.type == CommandType.HELP:
            self.view.set_info(self.cmd.help_text())
            self._dirty = True
        elif command.type == CommandType.QUIT:
            self.view.set_message(Message(MessageType.QUIT, "Exiting..."))
            self._dirty = True
            self.stop()
        else:
            self.handle_command(command)

    # ---------- Hooks ----------

    def on_start(self) -> None:
        pass

    def on_stop(self) -> None:
        pass

    @abstractmethod
    def poll_external_events(self) -> None:
        """Start background work and/or push its results via push_event()."""
        raise NotImplementedError

    @abstractmethod
    def handle_event(self, event: ControllerEvent) -> None:
        raise NotImplementedError

    @abstractmethod
    def handle_command(self, command: Command) -> None:
        """/swap, /restart and /undo."""
        raise NotImplementedError

    @abstractmethod
    def handle_move(self, pos: Position) -> None:
        raise NotImplementedError
